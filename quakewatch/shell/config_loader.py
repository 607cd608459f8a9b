"""Configuration Loader - Imperative Shell.

This module handles loading configuration from YAML files and
environment variables. All I/O is contained here.

The Config model is defined in quakewatch/core/config.py.
"""

import logging
import os
from pathlib import Path
from typing import Any

import yaml

from quakewatch.core.config import Config


logger = logging.getLogger(__name__)


def _resolve_value(value: Any) -> Any:
    """Resolve a value that may be an environment variable placeholder.

    "${VAR}" is replaced by the value of VAR. Unset variables leave the
    placeholder in place so validation can report it.

    Args:
        value: Value to resolve

    Returns:
        Resolved value
    """
    if not isinstance(value, str):
        return value

    if value.startswith("${") and value.endswith("}"):
        var_name = value[2:-1]
        env_value = os.environ.get(var_name)
        if env_value:
            return env_value
        logger.warning("Environment variable %s not set", var_name)

    return value


def _parse_origins(value: Any) -> list[str]:
    """Parse CORS origins from a list or a comma-separated string."""
    if isinstance(value, str):
        return [o.strip() for o in value.split(",") if o.strip()]
    return [str(_resolve_value(o)) for o in value]


def load_config_from_dict(data: dict[str, Any]) -> Config:
    """Load configuration from a dictionary.

    This is a pure-ish function (only env var expansion has side effects).

    Args:
        data: Configuration dictionary

    Returns:
        Parsed Config object
    """
    defaults = Config()
    source = data.get("source", {})
    cache = data.get("cache", {})
    server = data.get("server", {})

    cors_origins = defaults.cors_origins
    if "cors_origins" in server:
        cors_origins = _parse_origins(_resolve_value(server["cors_origins"]))

    return Config(
        source_url=_resolve_value(source.get("url", defaults.source_url)),
        cache_ttl_seconds=int(cache.get("ttl_seconds", defaults.cache_ttl_seconds)),
        fetch_timeout_seconds=int(source.get("timeout_seconds", defaults.fetch_timeout_seconds)),
        user_agent=_resolve_value(source.get("user_agent", defaults.user_agent)),
        row_selector=source.get("row_selector", defaults.row_selector),
        source_timezone=source.get("timezone", defaults.source_timezone),
        cors_origins=cors_origins,
        host=server.get("host", defaults.host),
        port=int(_resolve_value(server.get("port", defaults.port))),
    )


def load_config(config_path: str | Path | None = None) -> Config:
    """Load configuration from a YAML file.

    This method performs file I/O.

    Args:
        config_path: Path to YAML config file.
                    If None, uses CONFIG_PATH env var or default.

    Returns:
        Parsed Config object

    Raises:
        yaml.YAMLError: If config file is invalid YAML
    """
    if config_path is None:
        config_path = os.environ.get("CONFIG_PATH", "config/config.yaml")

    path = Path(config_path)

    logger.info("Loading configuration from %s", path)

    if not path.exists():
        logger.warning("Config file not found: %s, using defaults", path)
        return Config()

    with open(path, "r") as f:
        data = yaml.safe_load(f)

    if data is None:
        logger.warning("Config file is empty, using defaults")
        return Config()

    config = load_config_from_dict(data)

    logger.info(
        "Loaded config: source=%s, ttl=%ds, timeout=%ds",
        config.source_url,
        config.cache_ttl_seconds,
        config.fetch_timeout_seconds,
    )

    return config


def load_config_from_env() -> Config:
    """Load configuration from environment variables.

    Useful for container deployments without a YAML file.

    Environment variables:
        SOURCE_URL: Earthquake information page URL
        CACHE_TTL_SECONDS: Cache time-to-live
        FETCH_TIMEOUT_SECONDS: Source request timeout
        USER_AGENT: User-Agent header sent to the source
        SOURCE_TIMEZONE: IANA timezone of the source's local times
        CORS_ORIGINS: Comma-separated allowed origins
        HOST: Interface to bind
        PORT: Port to listen on

    Returns:
        Config object from environment
    """
    defaults = Config()

    cors_origins = defaults.cors_origins
    if os.environ.get("CORS_ORIGINS"):
        cors_origins = _parse_origins(os.environ["CORS_ORIGINS"])

    return Config(
        source_url=os.environ.get("SOURCE_URL", defaults.source_url),
        cache_ttl_seconds=int(os.environ.get("CACHE_TTL_SECONDS", defaults.cache_ttl_seconds)),
        fetch_timeout_seconds=int(
            os.environ.get("FETCH_TIMEOUT_SECONDS", defaults.fetch_timeout_seconds)
        ),
        user_agent=os.environ.get("USER_AGENT", defaults.user_agent),
        source_timezone=os.environ.get("SOURCE_TIMEZONE", defaults.source_timezone),
        cors_origins=cors_origins,
        host=os.environ.get("HOST", defaults.host),
        port=int(os.environ.get("PORT", defaults.port)),
    )
