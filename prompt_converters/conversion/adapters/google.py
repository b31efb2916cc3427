"""Google Gemini (AI Studio / Vertex) prompt converter."""

import copy
import logging
from typing import Any

from prompt_converters.conversion.content_codec import content_to_text, split_data_url
from prompt_converters.conversion.json_utils import try_parse
from prompt_converters.conversion.names import PromptNames, has_speaker_prefix
from prompt_converters.core.constants import Constants

logger = logging.getLogger(__name__)

DEFAULT_VIDEO_MIME_TYPE = "video/mp4"

ROLE_MAP = {
    Constants.ROLE_SYSTEM: Constants.ROLE_USER,
    Constants.ROLE_TOOL: Constants.ROLE_USER,
    Constants.ROLE_ASSISTANT: Constants.ROLE_MODEL,
}


def _label_text(text: str, name: str | None, names: PromptNames) -> str:
    if not name:
        return text
    if name in (Constants.NAME_EXAMPLE_USER, Constants.NAME_EXAMPLE_ASSISTANT):
        return names.label_example(name, text)
    if not has_speaker_prefix(text, name):
        return f"{name}: {text}"
    return text


def _media_part(part: dict[str, Any]) -> dict[str, Any] | None:
    part_type = part.get("type")
    if part_type == Constants.CONTENT_IMAGE_URL:
        url = (part.get("image_url") or {}).get("url") or ""
        mime_type, data = split_data_url(url)
        return {"inlineData": {"mimeType": mime_type, "data": data}}

    if part_type == Constants.CONTENT_VIDEO_URL:
        url = (part.get("video_url") or {}).get("url") or ""
        if not url.startswith("data:"):
            logger.debug("Skipping video part without an inline data URL")
            return None
        mime_type, data = split_data_url(url)
        return {"inlineData": {"mimeType": mime_type or DEFAULT_VIDEO_MIME_TYPE, "data": data}}

    return None


def _message_parts(
    message: dict[str, Any], names: PromptNames, tool_names: dict[str, str]
) -> list[dict[str, Any]]:
    name = message.get("name")
    content = message.get("content")
    tool_call_id = message.get("tool_call_id")
    tool_calls = message.get("tool_calls")

    if isinstance(tool_call_id, str) and tool_call_id:
        function_name = tool_names.get(tool_call_id, "unknown")
        return [
            {
                "functionResponse": {
                    "name": function_name,
                    "response": {"name": function_name, "content": content_to_text(content)},
                }
            }
        ]

    parts: list[dict[str, Any]] = []
    if isinstance(content, list):
        for part in content:
            if not isinstance(part, dict):
                continue
            if part.get("type") == Constants.CONTENT_TEXT:
                parts.append({"text": _label_text(str(part.get("text", "")), name, names)})
                continue
            media = _media_part(part)
            if media is not None:
                parts.append(media)
    else:
        text = "" if content is None else str(content)
        # Tool call turns only carry text when the model actually said something
        if text or not tool_calls:
            parts.append({"text": _label_text(text, name, names)})

    if isinstance(tool_calls, list):
        for tool_call in tool_calls:
            function = tool_call.get("function") or {}
            arguments = function.get("arguments")
            parts.append(
                {
                    "functionCall": {
                        "name": function.get("name"),
                        "args": try_parse(arguments),
                    }
                }
            )
            tool_names[tool_call.get("id")] = function.get("name")

    return parts


def _merge_parts(target: list[dict[str, Any]], parts: list[dict[str, Any]]) -> None:
    for part in parts:
        if "text" in part:
            if not part["text"]:
                continue
            if target and isinstance(target[-1].get("text"), str):
                target[-1]["text"] += f"\n\n{part['text']}"
            else:
                target.append(part)
        else:
            target.append(part)


def convert_google_prompt(
    messages: list[dict[str, Any]],
    model: str,
    use_sys_prompt: bool,
    names: PromptNames,
) -> dict[str, Any]:
    """Convert generic messages to Gemini ``contents`` and ``system_instruction``.

    Args:
        messages: Generic chat messages.
        model: Target model name; not used by the conversion.
        use_sys_prompt: Move leading system messages (all but a last lone
            one) into ``system_instruction``.
        names: Speaker names for the conversation.

    Returns:
        ``{"contents": [...], "system_instruction": {"parts": [...]}}``
    """
    messages = copy.deepcopy(messages)
    system_texts: list[str] = []

    if use_sys_prompt:
        while len(messages) > 1 and messages[0].get("role") == Constants.ROLE_SYSTEM:
            message = messages.pop(0)
            system_texts.append(
                names.label_example(message.get("name"), content_to_text(message.get("content")))
            )

    tool_names: dict[str, str] = {}
    contents: list[dict[str, Any]] = []
    for message in messages:
        role = message.get("role")
        role = ROLE_MAP.get(role, role)
        parts = _message_parts(message, names, tool_names)

        if contents and contents[-1]["role"] == role:
            _merge_parts(contents[-1]["parts"], parts)
        else:
            contents.append({"role": role, "parts": parts})

    return {
        "contents": contents,
        "system_instruction": {"parts": [{"text": text} for text in system_texts]},
    }
