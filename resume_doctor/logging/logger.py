import logging
import sys
from typing import TextIO


class Log:
    """Process-wide logger for resume_doctor.

    Records go to stderr by default so command output on stdout stays
    clean while an analysis is streamed.
    """

    _logger: logging.Logger = logging.getLogger("resume_doctor")

    @classmethod
    def configure(cls, log_level: str, stream: TextIO | None = None) -> None:
        cls._logger.setLevel(log_level.upper())
        if not cls._logger.handlers:
            handler = logging.StreamHandler(stream or sys.stderr)
            handler.setFormatter(
                logging.Formatter("%(asctime)s [%(levelname)s] %(message)s")
            )
            cls._logger.addHandler(handler)

    @staticmethod
    def mask(secret: str, visible: int = 4) -> str:
        """Hide all but the last *visible* characters of a credential."""
        if not secret:
            return "<empty>"
        if len(secret) <= visible:
            return "*" * len(secret)
        return "*" * (len(secret) - visible) + secret[-visible:]

    @classmethod
    def info(cls, message: str, **kwargs: object) -> None:
        cls._logger.info(message, extra=kwargs)

    @classmethod
    def error(cls, message: str, **kwargs: object) -> None:
        cls._logger.error(message, extra=kwargs)

    @classmethod
    def exception(cls, message: str, **kwargs: object) -> None:
        """Log an error together with the active traceback."""
        cls._logger.exception(message, extra=kwargs)

    @classmethod
    def warning(cls, message: str, **kwargs: object) -> None:
        cls._logger.warning(message, extra=kwargs)

    @classmethod
    def debug(cls, message: str, **kwargs: object) -> None:
        cls._logger.debug(message, extra=kwargs)
