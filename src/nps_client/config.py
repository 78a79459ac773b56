"""Configuration and logging setup for the NPS API client."""

import logging
import os
import pathlib

import pydantic
import structlog

from . import api
from .nps import NPSClient

CONFIG_ENV_VAR = "NPS_CLIENT_CONFIG_PATH"
API_KEY_ENV_VAR = "NPS_API_KEY"
logger = structlog.get_logger(__name__)


class ClientConfig(pydantic.BaseModel):
    """Configuration for the NPS API client."""

    api_key: str = pydantic.Field(description="NPS API key", min_length=1)
    base_url: str = pydantic.Field(
        api.DEFAULT_BASE_URL,
        description="Base URL for the NPS REST API",
    )
    timeout: float = pydantic.Field(
        api.DEFAULT_TIMEOUT,
        description="Request timeout in seconds",
        gt=0,
    )
    log_level: str = pydantic.Field("INFO", description="Logging level")


def configure_logging(log_level_name: str) -> None:
    """Configure structlog for logfmt output."""
    log_level = getattr(logging, log_level_name.upper(), logging.INFO)
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.EventRenamer("msg"),
            structlog.processors.format_exc_info,
            structlog.processors.LogfmtRenderer(
                key_order=("timestamp", "level", "msg"),
            ),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def load_config(config_path: str | pathlib.Path) -> ClientConfig:
    """Load and validate a JSON config file.

    Raises:
        FileNotFoundError: If the file does not exist.
        pydantic.ValidationError: If the file is not JSON or the values are invalid.
    """
    path = pathlib.Path(config_path)
    if not path.is_file():
        msg = f"Configuration file not found: {config_path}"
        raise FileNotFoundError(msg)

    return ClientConfig.model_validate_json(path.read_text(encoding="utf-8"))


def config_from_env() -> ClientConfig:
    """Build configuration from the ``NPS_API_KEY`` environment variable."""
    return ClientConfig(api_key=os.environ.get(API_KEY_ENV_VAR, ""))


def create_client(config_path: str | None = None) -> NPSClient:
    """Create a configured client from a config file or the environment.

    The config file is taken from ``config_path`` or the
    ``NPS_CLIENT_CONFIG_PATH`` environment variable. Without either, the
    API key is read from ``NPS_API_KEY``.

    Raises:
        FileNotFoundError: If the config file does not exist.
        pydantic.ValidationError: If the configuration is invalid.
    """
    resolved_path = config_path or os.environ.get(CONFIG_ENV_VAR)
    config = load_config(resolved_path) if resolved_path else config_from_env()
    configure_logging(config.log_level)

    client = NPSClient(
        config.api_key,
        base_url=config.base_url,
        timeout=config.timeout,
    )
    logger.info("Created NPS client", base_url=config.base_url)
    return client
