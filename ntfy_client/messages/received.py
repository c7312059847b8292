from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
import json
import logging
from typing import Any

from ..errors import MessageDecodeError
from .actions import Action, ActionDecodeFailure, decode_actions
from .types import EventKind, Priority, event_kind_from_wire, priority_from_wire


_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Attachment:
    name: str
    url: str
    type: str | None = None
    size: int | None = None
    expires: datetime | None = None


@dataclass(frozen=True)
class Message:
    id: str
    time: datetime | None
    event: EventKind
    topics: list[str] = field(default_factory=list)
    title: str | None = None
    body: str | None = None
    tags: list[str] = field(default_factory=list)
    priority: Priority | None = None
    click: str | None = None
    attachment: Attachment | None = None
    actions: list[Action] = field(default_factory=list)
    action_errors: list[ActionDecodeFailure] = field(default_factory=list)
    skipped_actions: int = 0

    @property
    def topic(self) -> str | None:
        return self.topics[0] if self.topics else None


def decode_message_line(line: str) -> Message:
    try:
        raw = json.loads(line)
    except ValueError as exc:
        raise MessageDecodeError(f"Invalid JSON line: {exc}") from exc
    return decode_message(raw)


def decode_message(raw: Any) -> Message:
    if not isinstance(raw, dict):
        raise MessageDecodeError("Message envelope must be a JSON object")

    message_id = raw.get("id")
    if not isinstance(message_id, str) or not message_id:
        raise MessageDecodeError("Message is missing its id")

    actions_raw = raw.get("actions")
    if actions_raw is not None and not isinstance(actions_raw, list):
        raise MessageDecodeError(f"Message {message_id} actions must be a list")
    decoded = decode_actions(actions_raw)
    for failure in decoded.errors:
        _logger.warning(
            "Dropped action %s on message %s: %s", failure.index, message_id, failure.reason
        )

    return Message(
        id=message_id,
        time=_parse_timestamp(raw.get("time"), message_id, "time"),
        event=event_kind_from_wire(raw.get("event")),
        topics=_split_topics(_optional_str(raw, "topic", message_id)),
        title=_optional_str(raw, "title", message_id),
        body=_optional_str(raw, "message", message_id),
        tags=_parse_tags(raw.get("tags"), message_id),
        priority=priority_from_wire(raw.get("priority")),
        click=_optional_str(raw, "click", message_id),
        attachment=_parse_attachment(raw.get("attachment"), message_id),
        actions=decoded.actions,
        action_errors=list(decoded.errors),
        skipped_actions=decoded.skipped,
    )


def _parse_attachment(value: Any, message_id: str) -> Attachment | None:
    if value is None:
        return None
    if not isinstance(value, dict):
        raise MessageDecodeError(f"Message {message_id} attachment must be an object")
    size = value.get("size")
    if size is not None and (isinstance(size, bool) or not isinstance(size, int)):
        raise MessageDecodeError(f"Message {message_id} attachment size must be an integer")
    return Attachment(
        name=_optional_str(value, "name", message_id) or "",
        url=_optional_str(value, "url", message_id) or "",
        type=_optional_str(value, "type", message_id),
        size=size,
        expires=_parse_timestamp(value.get("expires"), message_id, "attachment expires"),
    )


def _parse_timestamp(value: Any, message_id: str, name: str) -> datetime | None:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise MessageDecodeError(f"Message {message_id} {name} must be Unix seconds")
    return datetime.fromtimestamp(value, tz=timezone.utc)


def _parse_tags(value: Any, message_id: str) -> list[str]:
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(tag, str) for tag in value):
        raise MessageDecodeError(f"Message {message_id} tags must be a list of strings")
    return list(value)


def _split_topics(value: str | None) -> list[str]:
    if not value:
        return []
    return [topic for topic in value.split(",") if topic]


def _optional_str(raw: dict[str, Any], key: str, message_id: str) -> str | None:
    value = raw.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise MessageDecodeError(f"Message {message_id} field '{key}' must be a string")
    return value
