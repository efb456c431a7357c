"""Agent and service configuration.

Values are resolved in this order: explicit (command line) value, process
environment, dotenv file, built-in default.
"""

from __future__ import annotations

import ipaddress
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Mapping, Optional

from dotenv import dotenv_values

from .exceptions import ConfigError

logger = logging.getLogger("hostman.config")

__all__ = ["AgentConfig", "ServerConfig", "load_environment"]

DEFAULT_SERVER = "http://localhost:15332"
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 15332
DEFAULT_DB = "/tmp/hostman.db"


def load_environment(env_file: Optional[Path] = None) -> Dict[str, str]:
    """Merge *env_file* (if it exists) under the process environment."""
    values: Dict[str, str] = {}
    if env_file is not None and Path(env_file).is_file():
        logger.debug(f"Loading configuration from {env_file}")
        values.update({k: v for k, v in dotenv_values(env_file).items() if v is not None})
    values.update(os.environ)
    return values


def _pick(explicit, env: Mapping[str, str], key: str, default):
    if explicit is not None:
        return explicit
    return env.get(key, default)


@dataclass
class AgentConfig:
    server: str = DEFAULT_SERVER
    timeout: Optional[float] = None
    network: Optional[str] = None

    @classmethod
    def resolve(
        cls,
        env: Mapping[str, str],
        server: Optional[str] = None,
        timeout: Optional[float] = None,
        network: Optional[str] = None,
    ) -> "AgentConfig":
        raw_timeout = _pick(timeout, env, "HOSTMAN_TIMEOUT", None)
        if raw_timeout in (None, ""):
            timeout_value = None
        else:
            try:
                timeout_value = float(raw_timeout)
            except (TypeError, ValueError) as e:
                raise ConfigError(f"Invalid timeout: {raw_timeout!r}") from e
            if timeout_value <= 0:
                raise ConfigError(f"Timeout must be positive, got {timeout_value}")

        network_value = _pick(network, env, "HOSTMAN_NETWORK", None) or None
        if network_value is not None:
            try:
                ipaddress.IPv4Network(network_value, strict=False)
            except ValueError as e:
                raise ConfigError(f"Invalid network: {network_value!r}") from e

        server_value = _pick(server, env, "HOSTMAN_SERVER", DEFAULT_SERVER)
        if not server_value.startswith(("http://", "https://")):
            raise ConfigError(f"Server URL must start with http:// or https://: {server_value!r}")

        return cls(server=server_value, timeout=timeout_value, network=network_value)


@dataclass
class ServerConfig:
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    location: str = DEFAULT_DB

    @classmethod
    def resolve(
        cls,
        env: Mapping[str, str],
        host: Optional[str] = None,
        port: Optional[int] = None,
        location: Optional[str] = None,
    ) -> "ServerConfig":
        raw_port = _pick(port, env, "HOSTMAN_PORT", DEFAULT_PORT)
        try:
            port_value = int(raw_port)
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid port: {raw_port!r}") from e
        if not 1 <= port_value <= 65535:
            raise ConfigError("Port must be within 1-65535")

        return cls(
            host=_pick(host, env, "HOSTMAN_HOST", DEFAULT_HOST),
            port=port_value,
            location=_pick(location, env, "HOSTMAN_DB", DEFAULT_DB),
        )
