from __future__ import annotations

from dataclasses import dataclass, field
import json
import re
from typing import Any


@dataclass
class ServerInfo:
    base_url: str | None = None
    app_root: str | None = None
    enable_login: bool = False
    enable_signup: bool = False
    enable_payments: bool = False
    enable_reservations: bool = False
    disallowed_topics: list[str] = field(default_factory=list)


@dataclass
class ServerHealth:
    healthy: bool


@dataclass
class UserStats:
    messages: int | None = None
    messages_remaining: int | None = None
    emails: int | None = None
    emails_remaining: int | None = None
    reservations: int | None = None
    reservations_remaining: int | None = None
    attachment_bytes_total: int | None = None
    attachment_bytes_remaining: int | None = None
    attachment_bytes_used: int | None = None
    attachment_file_size_limit: int | None = None


_CONFIG_OBJECT = re.compile(r"var\s+config\s*=\s*(\{.*\})\s*;?", re.DOTALL)
_UNQUOTED_KEY = re.compile(r"(?m)^(\s*)([A-Za-z_][A-Za-z0-9_]*)\s*:")


def parse_server_info(payload: str | None) -> ServerInfo | None:
    """Parse the ``config.js`` document served by the web app.

    The document is a JavaScript assignment (``var config = {...};``) whose
    keys may or may not be quoted.
    """
    if not payload or not payload.strip():
        return None
    match = _CONFIG_OBJECT.search(payload)
    if not match:
        return None
    body = _UNQUOTED_KEY.sub(r'\1"\2":', match.group(1))
    body = re.sub(r",\s*([}\]])", r"\1", body)
    try:
        data = json.loads(body)
    except ValueError:
        return None
    if not isinstance(data, dict):
        return None
    return ServerInfo(
        base_url=_first(data, "base_url", "baseUrl"),
        app_root=_first(data, "app_root", "appRoot"),
        enable_login=bool(_first(data, "enable_login", "enableLogin")),
        enable_signup=bool(_first(data, "enable_signup", "enableSignup")),
        enable_payments=bool(_first(data, "enable_payments", "enablePayments")),
        enable_reservations=bool(_first(data, "enable_reservations", "enableReservations")),
        disallowed_topics=[
            str(topic) for topic in _first(data, "disallowed_topics", "disallowedTopics") or []
        ],
    )


def parse_server_health(data: Any) -> ServerHealth:
    if not isinstance(data, dict):
        return ServerHealth(healthy=False)
    return ServerHealth(healthy=bool(data.get("healthy", False)))


def parse_user_stats(data: Any) -> UserStats:
    """Parse the ``user/stats`` document.

    Visitor stats are a flat camelCase object. Account documents nest usage
    under ``stats`` and the allowances under ``limits``; there the
    ``attachment_total_size`` key means bytes used in ``stats`` and the
    allowance in ``limits``.
    """
    if not isinstance(data, dict):
        return UserStats()
    if isinstance(data.get("stats"), dict):
        return _parse_account_stats(data["stats"], data.get("limits"))
    return UserStats(
        messages=_int_or_none(data.get("messages")),
        messages_remaining=_int_or_none(_first(data, "messagesRemaining", "messages_remaining")),
        emails=_int_or_none(data.get("emails")),
        emails_remaining=_int_or_none(_first(data, "emailsRemaining", "emails_remaining")),
        reservations=_int_or_none(data.get("reservations")),
        reservations_remaining=_int_or_none(
            _first(data, "reservationsRemaining", "reservations_remaining")
        ),
        attachment_bytes_total=_int_or_none(data.get("visitorAttachmentBytesTotal")),
        attachment_bytes_remaining=_int_or_none(data.get("visitorAttachmentBytesRemaining")),
        attachment_bytes_used=_int_or_none(data.get("visitorAttachmentBytesUsed")),
        attachment_file_size_limit=_int_or_none(data.get("attachmentFileSizeLimit")),
    )


def _parse_account_stats(stats: dict[str, Any], limits: Any) -> UserStats:
    if not isinstance(limits, dict):
        limits = {}
    return UserStats(
        messages=_int_or_none(stats.get("messages")),
        messages_remaining=_int_or_none(stats.get("messages_remaining")),
        emails=_int_or_none(stats.get("emails")),
        emails_remaining=_int_or_none(stats.get("emails_remaining")),
        reservations=_int_or_none(stats.get("reservations")),
        reservations_remaining=_int_or_none(stats.get("reservations_remaining")),
        attachment_bytes_total=_int_or_none(limits.get("attachment_total_size")),
        attachment_bytes_remaining=_int_or_none(stats.get("attachment_total_size_remaining")),
        attachment_bytes_used=_int_or_none(stats.get("attachment_total_size")),
        attachment_file_size_limit=_int_or_none(limits.get("attachment_file_size")),
    )


def _first(data: dict[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in data:
            return data[key]
    return None


def _int_or_none(value: Any) -> int | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return int(value)
