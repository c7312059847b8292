from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class DelayUnit(str, Enum):
    SECONDS = "s"
    MINUTES = "m"
    HOURS = "h"
    DAYS = "d"


class SinceKind(str, Enum):
    ALL = "all"
    DURATION = "duration"
    TIMESTAMP = "timestamp"
    MESSAGE_ID = "message_id"


@dataclass(frozen=True)
class Since:
    kind: SinceKind
    value: str

    @classmethod
    def all(cls) -> Since:
        return cls(SinceKind.ALL, "all")

    @classmethod
    def duration(cls, value: int, unit: DelayUnit) -> Since:
        return cls(SinceKind.DURATION, _render_duration(value, unit))

    @classmethod
    def timestamp(cls, when: int | datetime) -> Since:
        return cls(SinceKind.TIMESTAMP, _render_timestamp(when))

    @classmethod
    def message_id(cls, message_id: str) -> Since:
        if not message_id:
            raise ValueError("message_id must not be empty")
        return cls(SinceKind.MESSAGE_ID, message_id)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Delay:
    value: str

    @classmethod
    def duration(cls, value: int, unit: DelayUnit) -> Delay:
        return cls(_render_duration(value, unit))

    @classmethod
    def timestamp(cls, when: int | datetime) -> Delay:
        return cls(_render_timestamp(when))

    @classmethod
    def statement(cls, text: str) -> Delay:
        cleaned = text.strip()
        if not cleaned:
            raise ValueError("Delay statement must not be empty")
        return cls(cleaned)

    def __str__(self) -> str:
        return self.value


def _render_duration(value: int, unit: DelayUnit) -> str:
    if value < 0:
        raise ValueError("Duration must not be negative")
    return f"{int(value)}{DelayUnit(unit).value}"


def _render_timestamp(when: int | datetime) -> str:
    if isinstance(when, datetime):
        return str(int(when.timestamp()))
    return str(int(when))
