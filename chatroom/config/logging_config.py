import logging
from logging.handlers import RotatingFileHandler
import sys
from pathlib import Path
from contextvars import ContextVar
from chatroom.config.settings import Config

NO_CORRELATION_ID = "NO Correlation ID"

# Context variable to store correlation ID across async/thread boundaries
correlation_id_var: ContextVar[str] = ContextVar(
    "correlation_id", default=NO_CORRELATION_ID
)


class CorrelationIdFilter(logging.Filter):
    """Logging filter to add correlation ID to log records."""

    def filter(self, record):
        record.correlation_id = correlation_id_var.get()
        return True


class SafeFormatter(logging.Formatter):
    """Formatter that ensures correlation_id always exists."""

    def format(self, record):
        if not hasattr(record, "correlation_id"):
            record.correlation_id = NO_CORRELATION_ID
        return super().format(record)


_configured = False


def setup_logging(level: str = "INFO", log_file: str | None = None):
    global _configured
    root = logging.getLogger()
    # App factory may run several times (tests); attach handlers once
    if _configured:
        logging.getLogger("chatroom").setLevel(
            getattr(logging, level.upper(), logging.INFO)
        )
        return root

    root.setLevel(logging.WARNING)  # Set root to WARNING to avoid too much noise
    formatter = SafeFormatter(Config.LOG_FORMAT)
    logger_handler = logging.StreamHandler(sys.stdout)
    logger_handler.setFormatter(formatter)
    logger_handler.addFilter(CorrelationIdFilter())
    root.addHandler(logger_handler)

    # Set up file logging if log_file provided with rotation
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_file, maxBytes=10 * 1024 * 1024, backupCount=5, encoding="utf-8"
        )
        file_handler.setFormatter(formatter)
        file_handler.addFilter(CorrelationIdFilter())
        root.addHandler(file_handler)

    # Only our own package logs below WARNING
    logging.getLogger("chatroom").setLevel(getattr(logging, level.upper(), logging.INFO))
    _configured = True
    logging.getLogger("chatroom").info("Logging is set up.")

    return root
