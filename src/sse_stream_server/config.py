#!/usr/bin/env python3
# src/sse_stream_server/config.py
"""
Server configuration.

Values come from the environment (``PORT``, ``AUTH_TOKEN``,
``AUTH_TOKEN_FILE``, ``LOG_LEVEL``, ``EVENT_INTERVAL``) and may be
overridden from the command line.
"""

import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from .constants import (
    DEFAULT_EVENT_INTERVAL,
    DEFAULT_HOST,
    DEFAULT_KEEPALIVE_TIMEOUT,
    DEFAULT_LOG_LEVEL,
    DEFAULT_PORT,
    ENV_AUTH_TOKEN,
    ENV_AUTH_TOKEN_FILE,
    ENV_EVENT_INTERVAL,
    ENV_LOG_LEVEL,
    ENV_PORT,
    LOG_LEVELS,
)
from .errors import ConfigurationError

logger = logging.getLogger(__name__)


def load_auth_token(environ: Mapping[str, str] | None = None) -> str | None:
    """Resolve the shared-secret token.

    A readable ``AUTH_TOKEN_FILE`` wins over ``AUTH_TOKEN``. Surrounding
    whitespace is stripped; an empty result means no authentication.
    """
    env = os.environ if environ is None else environ

    token_file = env.get(ENV_AUTH_TOKEN_FILE)
    if token_file:
        try:
            token = Path(token_file).read_text().strip()
            return token or None
        except OSError as e:
            logger.warning(f"Could not read {ENV_AUTH_TOKEN_FILE}={token_file}: {e}; falling back to {ENV_AUTH_TOKEN}")

    token = env.get(ENV_AUTH_TOKEN, "").strip()
    return token or None


def _parse_port(value: str) -> int:
    try:
        port = int(value)
    except ValueError:
        raise ConfigurationError(f"{ENV_PORT} must be an integer, got {value!r}", key=ENV_PORT) from None
    if not 0 <= port <= 65535:
        raise ConfigurationError(f"{ENV_PORT} out of range: {port}", key=ENV_PORT)
    return port


def _parse_interval(value: str) -> float:
    try:
        interval = float(value)
    except ValueError:
        raise ConfigurationError(
            f"{ENV_EVENT_INTERVAL} must be a number, got {value!r}", key=ENV_EVENT_INTERVAL
        ) from None
    if interval < 0:
        raise ConfigurationError(f"{ENV_EVENT_INTERVAL} must be non-negative, got {interval}", key=ENV_EVENT_INTERVAL)
    return interval


def _parse_log_level(value: str) -> str:
    level = value.lower()
    if level not in LOG_LEVELS:
        raise ConfigurationError(f"{ENV_LOG_LEVEL} must be one of {', '.join(LOG_LEVELS)}", key=ENV_LOG_LEVEL)
    return level


class ServerConfig:
    """Server configuration."""

    def __init__(
        self,
        host: str = DEFAULT_HOST,
        port: int = DEFAULT_PORT,
        auth_token: str | None = None,
        event_interval: float = DEFAULT_EVENT_INTERVAL,
        log_level: str = DEFAULT_LOG_LEVEL,
        access_log: bool = False,
        keepalive_timeout: int = DEFAULT_KEEPALIVE_TIMEOUT,
        debug: bool = False,
    ):
        if event_interval < 0:
            raise ConfigurationError(f"event_interval must be non-negative, got {event_interval}")

        self.host = host
        self.port = port
        self.auth_token = auth_token or None
        self.event_interval = event_interval
        self.log_level = _parse_log_level(log_level)
        # uvicorn's own access log; the application logs requests itself
        self.access_log = access_log
        self.keepalive_timeout = keepalive_timeout
        self.debug = debug

    @classmethod
    def from_environment(cls, environ: Mapping[str, str] | None = None, **overrides: Any) -> "ServerConfig":
        """Build a config from environment variables; ``overrides`` that are not None win."""
        env = os.environ if environ is None else environ

        values: dict[str, Any] = {"auth_token": load_auth_token(env)}
        if env.get(ENV_PORT):
            values["port"] = _parse_port(env[ENV_PORT])
        if env.get(ENV_EVENT_INTERVAL):
            values["event_interval"] = _parse_interval(env[ENV_EVENT_INTERVAL])
        if env.get(ENV_LOG_LEVEL):
            values["log_level"] = _parse_log_level(env[ENV_LOG_LEVEL])

        values.update({key: value for key, value in overrides.items() if value is not None})
        return cls(**values)

    @property
    def auth_enabled(self) -> bool:
        return self.auth_token is not None

    def get_uvicorn_config(self) -> dict[str, Any]:
        """Get uvicorn configuration dictionary"""
        return {
            "host": self.host,
            "port": self.port,
            "log_level": "debug" if self.debug else self.log_level,
            "access_log": self.access_log,
            "timeout_keep_alive": self.keepalive_timeout,
        }

    def __repr__(self) -> str:
        return (
            f"ServerConfig(host={self.host!r}, port={self.port}, auth_enabled={self.auth_enabled}, "
            f"event_interval={self.event_interval}, log_level={self.log_level!r})"
        )
