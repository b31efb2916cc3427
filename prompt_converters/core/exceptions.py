"""
Exception hierarchy for the prompt converters.

Conversions are total over their data: malformed messages are normalized,
never rejected. Exceptions are reserved for callers that break an explicit
precondition, such as handing Claude-native caching a message whose content
was never converted to content blocks.

All exceptions inherit from PromptConverterError, allowing callers to
catch all library-specific errors with a single except clause.
"""

from __future__ import annotations


class PromptConverterError(Exception):
    """Base exception for all prompt converter errors."""

    pass


class PromptContractError(PromptConverterError, TypeError):
    """Raised when a caller passes data that violates a converter's precondition.

    Attributes:
        operation: Name of the operation whose contract was violated
        message: Human-readable explanation of the violation

    Example:
        >>> caching_at_depth_for_claude([{"role": "user", "content": "hi"}], 0, "5m")
        PromptContractError: caching_at_depth_for_claude: message 0 content must be a
        list of content blocks (got str)
    """

    def __init__(self, operation: str, message: str) -> None:
        self.operation = operation
        self.message = message
        super().__init__(f"{operation}: {message}")

    def __repr__(self) -> str:
        return f"PromptContractError(operation={self.operation!r}, message={self.message!r})"
