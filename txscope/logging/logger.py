import sys
from pathlib import Path
from contextvars import ContextVar, Token
from typing import Optional
from loguru import logger
from txscope.config import Settings, settings as default_settings

# Correlation id for the current call stack (thread or asyncio task)
_current_trace_id: ContextVar[Optional[str]] = ContextVar("current_trace_id", default=None)


# Records bound through get_logger carry extra[name]; configure() supplies it for the rest
LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {extra[name]} | trace={extra[trace_id]} | {message}"


class LogConfig:
    """Loguru sinks: stdout always, plus daily and error files when LOG_TO_FILE is set."""

    @classmethod
    def setup_logging(cls, settings: Optional[Settings] = None):
        settings = settings or default_settings
        logger.remove()
        logger.configure(extra={"name": settings.APP_NAME, "trace_id": "system"})
        logger.add(sys.stdout, level=settings.LOG_LEVEL, format=f"<level>{LOG_FORMAT}</level>")

        if settings.LOG_TO_FILE:
            log_dir = Path(settings.LOG_DIR)
            log_dir.mkdir(parents=True, exist_ok=True)
            cls._add_file_sink(log_dir / f"{settings.APP_NAME}_{{time:YYYY-MM-DD}}.log", "DEBUG")
            cls._add_file_sink(log_dir / f"{settings.APP_NAME}_error.log", "ERROR")

    @staticmethod
    def _add_file_sink(path: Path, level: str):
        logger.add(
            path,
            level=level,
            format=LOG_FORMAT,
            rotation="00:00",
            retention="30 days",
            compression="zip",
            enqueue=True,
        )


def bind_trace_id(trace_id: str) -> Token:
    """Set the trace id reported by loggers obtained afterwards in this context."""
    return _current_trace_id.set(trace_id)


def reset_trace_id(token: Token) -> None:
    _current_trace_id.reset(token)


def _patch_trace_id(record) -> None:
    record["extra"]["trace_id"] = _current_trace_id.get() or "unknown"


def get_logger(name: str = None):
    """Get logger instance; trace_id is resolved from context when a record is emitted."""
    if name:
        return logger.bind(name=name).patch(_patch_trace_id)
    else:
        return logger.patch(_patch_trace_id)
