from __future__ import annotations

from enum import Enum, IntEnum
from typing import Any


class EventKind(str, Enum):
    OPEN = "open"
    KEEPALIVE = "keepalive"
    MESSAGE = "message"
    POLL_REQUEST = "poll_request"
    UNKNOWN = "unknown"


class Priority(IntEnum):
    MIN = 1
    LOW = 2
    DEFAULT = 3
    HIGH = 4
    MAX = 5

    @property
    def word(self) -> str:
        return PRIORITY_WORDS[self]


PRIORITY_WORDS = {
    Priority.MIN: "min",
    Priority.LOW: "low",
    Priority.DEFAULT: "default",
    Priority.HIGH: "high",
    Priority.MAX: "max",
}

_EVENT_KINDS = {kind.value: kind for kind in EventKind if kind is not EventKind.UNKNOWN}
_PRIORITIES = {level.value: level for level in Priority}


def event_kind_from_wire(value: Any) -> EventKind:
    if not isinstance(value, str):
        return EventKind.UNKNOWN
    return _EVENT_KINDS.get(value, EventKind.UNKNOWN)


def priority_from_wire(value: Any) -> Priority | None:
    # bool is an int subclass; True must not read as MIN.
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return _PRIORITIES.get(value)
