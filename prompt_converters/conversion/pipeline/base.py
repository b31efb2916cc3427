"""Base infrastructure for the prompt conversion pipeline.

This module defines the core components of the pipeline:
- ConversionContext: Immutable context passed through transformers
- PromptTransformer: Abstract base for all transformation steps
- PromptPipeline: Orchestrator that executes transformers in sequence
"""

import dataclasses
import logging
from abc import ABC, abstractmethod
from typing import Any

from prompt_converters.conversion.names import PromptNames
from prompt_converters.models.prompt_request import PromptRequest


@dataclasses.dataclass(frozen=True)
class ConversionContext:
    """Immutable context passed through the conversion pipeline.

    Transformers must return new instances via ``dataclasses.replace()``
    rather than mutating the context.

    Attributes:
        request: The original conversion request.
        names: Speaker names resolved from the request.
        messages: Working copy of the generic messages (post-processed by
            the first transformer).
        payload: The provider payload being built.
        metadata: Optional metadata for debugging and metrics.
    """

    request: PromptRequest
    names: PromptNames
    messages: list[dict[str, Any]]
    payload: dict[str, Any] = dataclasses.field(default_factory=dict)
    metadata: dict[str, Any] = dataclasses.field(default_factory=dict)


class PromptTransformer(ABC):
    """Base class for all prompt transformation steps."""

    @abstractmethod
    def transform(self, context: ConversionContext) -> ConversionContext:
        """Transform the context and return a new instance.

        Args:
            context: The input context. Must not be mutated.

        Returns:
            A new ConversionContext with the transformation applied.
        """

    @property
    def name(self) -> str:
        """Human-readable name for logging. Defaults to the class name."""
        return self.__class__.__name__


class PromptPipeline:
    """Runs transformers in order, each receiving the previous one's output."""

    def __init__(self, transformers: list[PromptTransformer]) -> None:
        self.transformers = transformers
        self.logger = logging.getLogger(f"{__name__}.PromptPipeline")

    def run(self, initial_context: ConversionContext) -> ConversionContext:
        """Execute all transformers and return the final context.

        Raises:
            Exception: Whatever the failing transformer raised, after it is
                logged with the transformer's name.
        """
        context = initial_context

        for i, transformer in enumerate(self.transformers):
            self.logger.debug(
                f"Running transformer [{i + 1}/{len(self.transformers)}]: {transformer.name}"
            )
            try:
                context = transformer.transform(context)
            except Exception as e:
                self.logger.error(
                    f"Transformer {transformer.name} failed: {e}",
                    exc_info=True,
                )
                raise

        self.logger.debug(f"Pipeline completed: {len(self.transformers)} transformers executed")
        return context

    def execute(self, initial_context: ConversionContext) -> dict[str, Any]:
        """Execute all transformers and return the final provider payload."""
        return self.run(initial_context).payload
