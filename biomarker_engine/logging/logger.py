import logging
import sys
from typing import TextIO


class Log:
    """Centralized logging for the interpretation engine.

    Keyword context is appended to the message as ``key=value`` pairs.
    """

    _logger: logging.Logger = logging.getLogger("biomarker_engine")

    @classmethod
    def configure(cls, log_level: str, stream: TextIO | None = None) -> None:
        """Set the level and attach a single handler (stdout by default).

        Reconfiguring replaces the previous handler without flushing it, since
        its stream may already be closed.
        """
        cls._logger.setLevel(log_level.upper())
        for existing in list(cls._logger.handlers):
            cls._logger.removeHandler(existing)
        handler = logging.StreamHandler(stream or sys.stdout)
        handler.setFormatter(
            logging.Formatter("%(asctime)s [%(levelname)s] %(message)s")
        )
        cls._logger.addHandler(handler)

    @classmethod
    def info(cls, message: str, **context: object) -> None:
        cls._logger.info(cls._render(message, context))

    @classmethod
    def error(cls, message: str, **context: object) -> None:
        cls._logger.error(cls._render(message, context))

    @classmethod
    def warning(cls, message: str, **context: object) -> None:
        cls._logger.warning(cls._render(message, context))

    @classmethod
    def debug(cls, message: str, **context: object) -> None:
        if cls._logger.isEnabledFor(logging.DEBUG):
            cls._logger.debug(cls._render(message, context))

    @staticmethod
    def _render(message: str, context: dict[str, object]) -> str:
        if not context:
            return message
        pairs = " ".join(f"{key}={value}" for key, value in context.items())
        return f"{message} {pairs}"
