"""Prompt Converters

Normalizes provider-agnostic chat prompts and adapts them to the message
shapes of third-party completion APIs.
"""

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

from importlib.metadata import PackageNotFoundError, version  # noqa: E402

try:
    __version__ = version("prompt-converters")
except PackageNotFoundError:
    # Fallback for source checkouts
    __version__ = "0.1.0"

from prompt_converters.conversion.request_converter import convert_prompt  # noqa: E402
from prompt_converters.models.prompt_request import PromptRequest, TargetProvider  # noqa: E402

__all__ = ["PromptRequest", "TargetProvider", "convert_prompt", "__version__"]
