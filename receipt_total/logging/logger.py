import logging
import sys


class _RequestIdFilter(logging.Filter):
    """Guarantees every record carries a request_id attribute."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not getattr(record, "request_id", None):
            record.request_id = "-"
        return True


class Log:
    """Centralized logging with request correlation ids."""

    _logger: logging.Logger = logging.getLogger("receipt_total")

    @classmethod
    def configure(cls, log_level: str) -> None:
        """Configure the logger with the specified level and stdout handler."""
        cls._logger.setLevel(log_level.upper())
        if not cls._logger.handlers:
            handler = logging.StreamHandler(sys.stdout)
            handler.setFormatter(
                logging.Formatter(
                    "%(asctime)s [%(levelname)s] [%(request_id)s] %(message)s"
                )
            )
            handler.addFilter(_RequestIdFilter())
            cls._logger.addHandler(handler)

    @classmethod
    def info(cls, message: str, request_id: str | None = None, **kwargs: object) -> None:
        """Log an info message."""
        cls._logger.info(message, extra={"request_id": request_id, **kwargs})

    @classmethod
    def error(cls, message: str, request_id: str | None = None, **kwargs: object) -> None:
        """Log an error message."""
        cls._logger.error(message, extra={"request_id": request_id, **kwargs})

    @classmethod
    def warning(cls, message: str, request_id: str | None = None, **kwargs: object) -> None:
        """Log a warning message."""
        cls._logger.warning(message, extra={"request_id": request_id, **kwargs})

    @classmethod
    def debug(cls, message: str, request_id: str | None = None, **kwargs: object) -> None:
        """Log a debug message."""
        cls._logger.debug(message, extra={"request_id": request_id, **kwargs})
