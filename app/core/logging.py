import logging
import logging.config

from app.core.config import settings


def configure_logging(level: str | None = None) -> None:
    """Install a single console handler on the root logger."""
    logging.config.dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "verbose": {
                "format": "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "verbose",
            },
        },
        "root": {
            "handlers": ["console"],
            "level": (level or settings.LOG_LEVEL).upper(),
        },
        "loggers": {
            # httpx logs every request line at INFO
            "httpx": {"level": "WARNING"},
        },
    })


def warn_missing_credentials() -> None:
    logger = logging.getLogger("app.core.config")
    if not settings.OPENAI_API_KEY:
        logger.warning("OPENAI_API_KEY not set. Chat calls will fail.")
    if not settings.ELEVENLABS_API_KEY and not settings.ELEVENLABS2_API_KEY:
        logger.warning("ELEVENLABS_API_KEY / ELEVENLABS2_API_KEY not set. Direct TTS calls will fail.")
    if not settings.HUME_API_KEY:
        logger.warning("HUME_API_KEY not set. Voice-cloning TTS will fall back to ElevenLabs.")
