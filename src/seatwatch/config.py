"""Configuration loading for the SeatWatch proxy and dashboard."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

DEFAULT_REDMINE_URL = "https://vps2.is.kit.ac.jp/redmine"
DEFAULT_TRACKER_ID = 5  # 課題
DEFAULT_PENDING_STATUS_ID = 4  # 審査待ち
DEFAULT_APPROVED_STATUS_ID = 3  # 審査通過
DEFAULT_PORT = 3000
DEFAULT_POLL_INTERVAL = 10.0

API_KEY_PLACEHOLDER = "YOUR_API_KEY_HERE"

# Environment variable -> settings key
ENV_OVERRIDES = {
    "REDMINE_URL": "redmine_url",
    "REDMINE_API_KEY": "api_key",
    "TRACKER_ID": "tracker_id",
    "STATUS_ID": "pending_status_id",
    "APPROVED_STATUS_ID": "approved_status_id",
    "PORT": "port",
    "POLL_INTERVAL": "poll_interval",
}


class ConfigError(Exception):
    """Raised when configuration is invalid or missing."""


def _positive_int(data: Mapping[str, Any], key: str, default: int) -> int:
    raw = data.get(key, default)
    try:
        value = int(raw)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid {key}: {raw!r}") from e
    if value <= 0:
        raise ConfigError(f"Invalid {key}: {raw!r} (must be positive)")
    return value


@dataclass(frozen=True)
class Settings:
    """Validated settings shared by the proxy and the dashboard client."""

    api_key: str
    redmine_url: str = DEFAULT_REDMINE_URL
    tracker_id: int = DEFAULT_TRACKER_ID
    pending_status_id: int = DEFAULT_PENDING_STATUS_ID
    approved_status_id: int = DEFAULT_APPROVED_STATUS_ID
    port: int = DEFAULT_PORT
    poll_interval: float = DEFAULT_POLL_INTERVAL
    timeout: float | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Settings:
        """Create settings from a mapping of raw values.

        Args:
            data: Raw configuration values (strings from the environment are accepted).

        Returns:
            Validated settings.

        Raises:
            ConfigError: If a value is missing or invalid.
        """
        api_key = str(data.get("api_key") or "").strip()
        if not api_key or api_key == API_KEY_PLACEHOLDER:
            raise ConfigError("REDMINE_API_KEY is not configured")

        redmine_url = str(data.get("redmine_url") or DEFAULT_REDMINE_URL).rstrip("/")
        if not redmine_url.startswith(("http://", "https://")):
            raise ConfigError(f"Invalid redmine_url: {redmine_url!r}")

        port = _positive_int(data, "port", DEFAULT_PORT)
        if port > 65535:
            raise ConfigError(f"Invalid port: {port}")

        try:
            poll_interval = float(data.get("poll_interval", DEFAULT_POLL_INTERVAL))
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid poll_interval: {data.get('poll_interval')!r}") from e
        if poll_interval <= 0:
            raise ConfigError(f"Invalid poll_interval: {poll_interval}")

        timeout = data.get("timeout")
        if timeout is not None:
            try:
                timeout = float(timeout)
            except (TypeError, ValueError) as e:
                raise ConfigError(f"Invalid timeout: {timeout!r}") from e

        return cls(
            api_key=api_key,
            redmine_url=redmine_url,
            tracker_id=_positive_int(data, "tracker_id", DEFAULT_TRACKER_ID),
            pending_status_id=_positive_int(data, "pending_status_id", DEFAULT_PENDING_STATUS_ID),
            approved_status_id=_positive_int(
                data, "approved_status_id", DEFAULT_APPROVED_STATUS_ID
            ),
            port=port,
            poll_interval=poll_interval,
            timeout=timeout,
        )


def load_settings(
    config_path: Path | str | None = None,
    environ: Mapping[str, str] | None = None,
) -> Settings:
    """Load settings from an optional YAML file, then environment overrides.

    Args:
        config_path: Path to a YAML mapping of settings keys. Optional.
        environ: Environment to read overrides from. Defaults to os.environ.

    Returns:
        Validated settings.

    Raises:
        ConfigError: If the file is unreadable or any value is invalid.
    """
    data: dict[str, Any] = {}

    if config_path is not None:
        config_path = Path(config_path)
        if not config_path.exists():
            raise ConfigError(f"Configuration file not found: {config_path}")
        try:
            with open(config_path, encoding="utf-8") as f:
                loaded = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e

        if loaded is not None and not isinstance(loaded, dict):
            raise ConfigError(f"Configuration must be a YAML mapping, got {type(loaded).__name__}")
        data.update(loaded or {})

    if environ is None:
        environ = os.environ
    for env_name, key in ENV_OVERRIDES.items():
        value = environ.get(env_name)
        if value:
            data[key] = value

    return Settings.from_dict(data)
