import logging
import json
from datetime import datetime
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

LOGGER_NAME = "GalleryToolLogger"


class JSONFormatter(logging.Formatter):
    """Custom JSON formatter for structured logging."""

    def __init__(self, tool_name: str = "gallery_tool"):
        super().__init__()
        self.tool_name = tool_name

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON with structured fields.

        Args:
            record: The log record to format

        Returns:
            JSON-formatted log entry as string
        """
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "tool": self.tool_name,
            "session_id": getattr(record, "session_id", None),
            "page_number": getattr(record, "page_number", None),
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        # Add exception info if present
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, ensure_ascii=False, default=str)


def setup_logging(
    log_dir: Optional[str] = None,
    session_id: Optional[str] = None,
    level: int = logging.INFO,
) -> logging.Logger:
    """Configures and initializes centralized logging for the application.

    This function sets up the 'GalleryToolLogger' logger with two handlers:
    1.  **RotatingFileHandler**: Writes log messages to a date-named file in
        JSON format. The file is rotated at 5MB and up to 10 backups are kept.
    2.  **StreamHandler**: Writes human-readable messages to stderr for
        headless runs and debugging.

    Handlers are not duplicated if the function is called multiple times. The
    GUI adds its own QtLogHandler separately.

    Args:
        log_dir: Directory for log files. If None, uses a local "logs" directory.
        session_id: Browsing session ID for structured logging (optional)
        level: Minimum level for both handlers

    Returns:
        logging.Logger: The configured logger instance for the application.
    """
    log_path = Path(log_dir) if log_dir else Path("logs")
    log_path.mkdir(parents=True, exist_ok=True)

    log_file = log_path / f"{datetime.now().strftime('%Y-%m-%d')}.log"

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    # Prevent adding handlers multiple times
    if logger.hasHandlers():
        logger.handlers.clear()

    file_handler = RotatingFileHandler(
        log_file, maxBytes=5 * 1024 * 1024, backupCount=10, encoding="utf-8"
    )
    file_handler.setLevel(level)
    file_handler.setFormatter(JSONFormatter(tool_name="gallery_tool"))
    logger.addHandler(file_handler)

    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(level)
    stream_handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    logger.addHandler(stream_handler)

    if session_id:
        logger.session_id = session_id

    return logger


def log_with_context(
    logger: logging.Logger,
    level: int,
    message: str,
    session_id: Optional[str] = None,
    **kwargs,
) -> None:
    """Log a message with structured context fields.

    Args:
        logger: The logger instance to use
        level: Log level (logging.INFO, logging.WARNING, etc.)
        message: The log message
        session_id: Session ID for this log entry
        **kwargs: Additional context to include in the log (e.g. page_number)
    """
    extra = {}
    if session_id or hasattr(logger, "session_id"):
        extra["session_id"] = session_id or getattr(logger, "session_id", None)

    extra.update(kwargs)

    logger.log(level, message, extra=extra)
