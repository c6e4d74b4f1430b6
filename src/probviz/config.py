"""Server configuration loaded from YAML files and the environment."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "PROBVIZ_CONFIG"
DEFAULT_PORT = 5000


class ConfigError(ValueError):
    """Raised when a configuration source holds invalid values."""


@dataclass(frozen=True, slots=True)
class ServerConfig:
    """Settings used to bootstrap the HTTP server."""

    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT
    log_level: str = "info"
    cors_origins: tuple[str, ...] = ("*",)


def _parse_port(value: Any) -> int:
    try:
        port = int(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid port {value!r}; expected an integer.") from exc
    if not 0 < port < 65536:
        raise ConfigError(f"Port {port} is outside the range 1-65535.")
    return port


def _apply_mapping(config: ServerConfig, data: Mapping[str, Any]) -> ServerConfig:
    updates: dict[str, Any] = {}
    if "host" in data:
        updates["host"] = str(data["host"])
    if "port" in data:
        updates["port"] = _parse_port(data["port"])
    if "log_level" in data:
        updates["log_level"] = str(data["log_level"]).lower()
    if "cors_origins" in data:
        origins = data["cors_origins"]
        if isinstance(origins, str):
            origins = [origins]
        updates["cors_origins"] = tuple(str(origin) for origin in origins)
    return replace(config, **updates)


def load_yaml_config(path: str | os.PathLike[str], config: ServerConfig | None = None) -> ServerConfig:
    """Overlay the ``server`` section of a YAML file onto ``config``."""
    config = config or ServerConfig()
    path = Path(path)
    if not path.exists():
        logger.debug("Skipping server config %s (file not found)", path)
        return config
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse server config {path}: {exc}") from exc
    if not isinstance(data, Mapping):
        raise ConfigError(f"Server config {path} must contain a mapping.")
    section = data.get("server", {}) or {}
    if not isinstance(section, Mapping):
        raise ConfigError(f"The 'server' section of {path} must be a mapping.")
    logger.debug("Applying server config from %s", path)
    return _apply_mapping(config, section)


def load_config(
    path: str | os.PathLike[str] | None = None,
    env: Mapping[str, str] | None = None,
) -> ServerConfig:
    """Resolve server settings: defaults, then YAML, then environment overrides.

    ``PORT`` keeps the conventional platform variable name; ``PROBVIZ_HOST``
    and ``PROBVIZ_LOG_LEVEL`` override the remaining fields.
    """
    env = os.environ if env is None else env
    config = ServerConfig()
    source = path if path is not None else env.get(CONFIG_ENV_VAR)
    if source:
        config = load_yaml_config(source, config)

    overrides: dict[str, Any] = {}
    if env.get("PORT"):
        overrides["port"] = env["PORT"]
    if env.get("PROBVIZ_HOST"):
        overrides["host"] = env["PROBVIZ_HOST"]
    if env.get("PROBVIZ_LOG_LEVEL"):
        overrides["log_level"] = env["PROBVIZ_LOG_LEVEL"]
    if overrides:
        logger.debug("Applying environment overrides: %s", ", ".join(sorted(overrides)))
        config = _apply_mapping(config, overrides)
    return config


__all__ = [
    "CONFIG_ENV_VAR",
    "DEFAULT_PORT",
    "ConfigError",
    "ServerConfig",
    "load_config",
    "load_yaml_config",
]
