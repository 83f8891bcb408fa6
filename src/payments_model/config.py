"""Runtime settings for the payment model, read from environment variables.

PAYMENTS_MODEL_LOG_LEVEL      Level for the ``payments_model`` logger (default WARNING)
PAYMENTS_MODEL_LOG_REJECTIONS Log rejected payloads at WARNING (default true)
"""

import logging
import os
from functools import lru_cache

from pydantic import BaseModel, ConfigDict, Field

from .utils.logging import StructuredFormatter

LOGGER_NAME = "payments_model"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_TRUE_VALUES = {"1", "true", "yes", "on"}
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
DEFAULT_LOG_LEVEL = "WARNING"


class ModelSettings(BaseModel):
    """Settings that affect logging only; validation rules are not configurable."""

    model_config = ConfigDict(strict=True, frozen=True)

    log_level: str = Field(default=DEFAULT_LOG_LEVEL, pattern=rf"^({'|'.join(LOG_LEVELS)})$")
    log_rejections: bool = True

    @classmethod
    def from_env(cls) -> "ModelSettings":
        """Build settings from the current environment.

        An unrecognised log level is reported once and replaced by WARNING.
        """
        log_level = os.environ.get("PAYMENTS_MODEL_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
        if log_level not in LOG_LEVELS:
            logging.getLogger(LOGGER_NAME).warning(
                "Ignoring invalid PAYMENTS_MODEL_LOG_LEVEL=%r, using %s",
                log_level,
                DEFAULT_LOG_LEVEL,
            )
            log_level = DEFAULT_LOG_LEVEL
        return cls(
            log_level=log_level,
            log_rejections=os.environ.get("PAYMENTS_MODEL_LOG_REJECTIONS", "true").lower()
            in _TRUE_VALUES,
        )


@lru_cache(maxsize=1)
def get_settings() -> ModelSettings:
    """Get cached settings. Call ``get_settings.cache_clear()`` after changing the env."""
    return ModelSettings.from_env()


def configure_logging(settings: ModelSettings | None = None) -> logging.Logger:
    """Attach a structured stream handler to the package logger.

    Safe to call repeatedly; the handler is only added once.

    Args:
        settings: Settings to apply (defaults to ``get_settings()``)

    Returns:
        The package logger.
    """
    settings = settings or get_settings()
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(settings.log_level)

    if not any(getattr(h, "_payments_model", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(StructuredFormatter(LOG_FORMAT))
        handler._payments_model = True  # type: ignore[attr-defined]
        logger.addHandler(handler)

    return logger
