from __future__ import annotations

from dataclasses import dataclass
import os
from typing import Any

import yaml

from .auth import Credentials
from .errors import ConfigurationError


DEFAULT_SERVER = "https://ntfy.sh"
DEFAULT_USER_AGENT = "ntfy-client/0.1"


@dataclass
class ClientSettings:
    server_url: str = DEFAULT_SERVER
    user_agent: str = DEFAULT_USER_AGENT
    request_timeout_seconds: float = 15
    publish_timeout_seconds: float = 5 * 60
    # The server sends a keepalive every 45s by default, so a read must outlast that.
    subscribe_timeout_seconds: float = 77
    poll_timeout_seconds: float = 15
    credentials: Credentials | None = None


def _expand_env(value: Any) -> Any:
    if isinstance(value, str):
        return os.path.expandvars(value)
    if isinstance(value, list):
        return [_expand_env(item) for item in value]
    if isinstance(value, dict):
        return {key: _expand_env(val) for key, val in value.items()}
    return value


def _require_dict(value: Any, name: str) -> dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigurationError(f"{name} must be a mapping")
    return value


def _positive_number(raw: dict[str, Any], key: str, default: float) -> float:
    value = raw.get(key, default)
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"{key} must be a number") from exc
    if number <= 0:
        raise ConfigurationError(f"{key} must be > 0")
    return number


def load_settings(path: str) -> ClientSettings:
    with open(path, "r", encoding="utf-8") as handle:
        raw = yaml.safe_load(handle) or {}

    data = _expand_env(raw)
    if not isinstance(data, dict):
        raise ConfigurationError("Config root must be a mapping")
    return settings_from_dict(data)


def settings_from_dict(data: dict[str, Any]) -> ClientSettings:
    defaults = ClientSettings()
    server_url = str(data.get("server_url", defaults.server_url)).rstrip("/")
    if not (server_url.startswith("http://") or server_url.startswith("https://")):
        raise ConfigurationError("server_url must start with http:// or https://")

    timeouts = _require_dict(data.get("timeouts"), "timeouts")
    return ClientSettings(
        server_url=server_url,
        user_agent=str(data.get("user_agent", defaults.user_agent)),
        request_timeout_seconds=_positive_number(timeouts, "request", defaults.request_timeout_seconds),
        publish_timeout_seconds=_positive_number(timeouts, "publish", defaults.publish_timeout_seconds),
        subscribe_timeout_seconds=_positive_number(
            timeouts, "subscribe", defaults.subscribe_timeout_seconds
        ),
        poll_timeout_seconds=_positive_number(timeouts, "poll", defaults.poll_timeout_seconds),
        credentials=_load_credentials(_require_dict(data.get("auth"), "auth")),
    )


def _load_credentials(auth: dict[str, Any]) -> Credentials | None:
    token = _unset_to_none(auth.get("token"))
    username = _unset_to_none(auth.get("username"))
    if token and username:
        raise ConfigurationError("auth must set either username or token, not both")
    if token:
        return Credentials.bearer(str(token))
    if username:
        return Credentials.basic(str(username), str(auth.get("password") or ""))
    return None


def _unset_to_none(value: Any) -> Any:
    # os.path.expandvars leaves unknown ${VARS} in place.
    if isinstance(value, str) and (not value.strip() or "${" in value):
        return None
    return value
