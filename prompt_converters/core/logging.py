import logging
from collections.abc import Generator
from contextlib import contextmanager
from typing import Any

VALID_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def resolve_log_level(raw_level: str | None) -> str:
    """Parse a log level string, falling back to INFO when invalid.

    Only the first word is considered, so values such as ``"DEBUG  # verbose"``
    coming from a .env file are accepted.
    """
    if not raw_level or not raw_level.split():
        return "INFO"
    level = raw_level.split()[0].upper()
    if level not in VALID_LEVELS:
        return "INFO"
    return level


class ConversationLogger:
    """Logger with correlation ID support"""

    @staticmethod
    def get_logger() -> logging.Logger:
        """Get logger with correlation ID support"""
        return logging.getLogger("conversation")

    @staticmethod
    @contextmanager
    def correlation_context(request_id: str) -> Generator[None, None, None]:
        """Context manager for correlation ID"""
        old_factory = logging.getLogRecordFactory()

        def record_factory(*args: Any, **kwargs: Any) -> logging.LogRecord:
            record = old_factory(*args, **kwargs)
            record.correlation_id = request_id
            return record

        logging.setLogRecordFactory(record_factory)
        try:
            yield
        finally:
            logging.setLogRecordFactory(old_factory)


# Custom formatter with correlation ID
class CorrelationFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        if hasattr(record, "correlation_id"):
            record.msg = f"[{record.correlation_id[:8]}] {record.msg}"
        return super().format(record)


def configure_root_logging(log_level: str | None = None) -> str:
    """Install the correlation-aware stream handler on the root logger.

    Library modules never call this; it is meant for entry points such as the
    CLI. When ``log_level`` is omitted the configured LOG_LEVEL is used.

    Returns:
        The effective log level name.
    """
    if log_level is None:
        from prompt_converters.core.config.accessors import log_level as configured_level

        log_level = configured_level()
    level_name = resolve_log_level(log_level)

    handler = logging.StreamHandler()
    handler.setFormatter(
        CorrelationFormatter("%(asctime)s - %(levelname)s - %(message)s", datefmt="%H:%M:%S")
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, level_name))

    logging.getLogger(__name__).debug(f"Root logging configured at {level_name}")
    return level_name
