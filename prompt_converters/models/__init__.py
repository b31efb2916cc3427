"""Request models."""

from prompt_converters.models.prompt_request import PromptRequest, TargetProvider

__all__ = ["PromptRequest", "TargetProvider"]
