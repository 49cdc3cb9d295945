from datetime import timedelta
import logging
from pathlib import Path
import sys

from loguru import logger
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Process-level settings read from ``GENREPASS_*`` environment variables."""

    log_level: str = "INFO"
    log_file_path: Path | None = None
    # Thread count for parallel generation, None lets the executor decide
    max_workers: int | None = None

    model_config = SettingsConfigDict(env_prefix="GENREPASS_")


class InterceptHandler(logging.Handler):
    def emit(self, record):
        # Get corresponding Loguru level
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Find caller to get correct stack depth
        frame, depth = logging.currentframe(), 2
        while frame.f_back and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def configure_logging(settings: Settings, level: str | None = None) -> None:
    """Send genrepass and stdlib logging through loguru sinks.

    The library stays silent until this is called, only the CLI does so.
    """
    log_level = (level or settings.log_level).upper()

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)

    logger.remove()
    logger.add(
        sys.stderr,
        level=log_level,
        backtrace=True,
        diagnose=False,
    )

    if settings.log_file_path is not None:
        settings.log_file_path.parent.mkdir(exist_ok=True, parents=True)
        logger.add(
            settings.log_file_path.resolve(),
            rotation="10 MB",
            retention=timedelta(days=7),
            backtrace=True,
            diagnose=False,
            level=log_level,
        )

    logger.enable("genrepass")
