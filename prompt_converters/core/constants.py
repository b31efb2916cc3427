class Constants:
    ROLE_SYSTEM = "system"
    ROLE_USER = "user"
    ROLE_ASSISTANT = "assistant"
    ROLE_TOOL = "tool"
    # Google calls the assistant "model"
    ROLE_MODEL = "model"

    # Speaker labels for one-shot example turns carried on system messages
    NAME_EXAMPLE_USER = "example_user"
    NAME_EXAMPLE_ASSISTANT = "example_assistant"

    CONTENT_TEXT = "text"
    CONTENT_IMAGE = "image"
    CONTENT_IMAGE_URL = "image_url"
    CONTENT_VIDEO_URL = "video_url"
    CONTENT_TOOL_USE = "tool_use"
    CONTENT_TOOL_RESULT = "tool_result"

    TOOL_FUNCTION = "function"

    CACHE_EPHEMERAL = "ephemeral"
    CACHE_TTL_DEFAULT = "5m"
    CACHE_TTL_EXTENDED = "1h"

    DEFAULT_PROMPT_PLACEHOLDER = "Let's get started."
    # Claude rejects empty text blocks
    ZERO_WIDTH_SPACE = "\u200b"
