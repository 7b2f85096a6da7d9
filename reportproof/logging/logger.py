import logging
import sys

_RULE = "-" * 40


class Log:
    """Centralized logging for the writer, verifier and their collaborators."""

    _logger: logging.Logger = logging.getLogger("reportproof")

    @classmethod
    def configure(cls, log_level: str) -> None:
        """Attach a single stdout handler and set the level from settings."""
        cls._logger.setLevel(log_level.upper())
        if not cls._logger.handlers:
            handler = logging.StreamHandler(sys.stdout)
            handler.setFormatter(
                logging.Formatter("%(asctime)s [%(levelname)s] %(message)s")
            )
            cls._logger.addHandler(handler)

    @classmethod
    def info(cls, message: str, **kwargs: object) -> None:
        cls._logger.info(message, extra=kwargs)

    @classmethod
    def error(cls, message: str, **kwargs: object) -> None:
        cls._logger.error(message, extra=kwargs)

    @classmethod
    def warning(cls, message: str, **kwargs: object) -> None:
        cls._logger.warning(message, extra=kwargs)

    @classmethod
    def debug(cls, message: str, **kwargs: object) -> None:
        cls._logger.debug(message, extra=kwargs)

    @classmethod
    def block(cls, title: str, lines: list[str], level: int = logging.INFO) -> None:
        """Log a titled, ruled summary block as one record.

        Used for the transaction summary, the stored on-chain record and the
        verification outcome, which operators read as a unit.
        """
        body = "\n".join([_RULE, title, _RULE, *lines, _RULE])
        cls._logger.log(level, "\n" + body)
