from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..timing import Delay
from .actions import Action, encode_actions
from .types import Priority


@dataclass
class OutgoingMessage:
    message: str | None = None
    title: str | None = None
    tags: list[str] = field(default_factory=list)
    priority: Priority | None = None
    click: str | None = None
    actions: list[Action] = field(default_factory=list)
    attach: str | None = None
    filename: str | None = None
    email: str | None = None
    icon: str | None = None
    delay: Delay | None = None
    cache: bool = True
    firebase: bool = True
    unified_push: bool = False

    def to_payload(self, topic: str) -> dict[str, Any]:
        """Render the JSON body for ``POST /``; the topic travels inside the body."""
        payload: dict[str, Any] = {"topic": topic}
        optional = {
            "message": self.message,
            "title": self.title,
            "click": self.click,
            "attach": self.attach,
            "filename": self.filename,
            "email": self.email,
            "icon": self.icon,
        }
        payload.update({key: value for key, value in optional.items() if value is not None})
        if self.tags:
            payload["tags"] = list(self.tags)
        if self.priority is not None:
            payload["priority"] = int(self.priority)
        if self.actions:
            payload["actions"] = encode_actions(self.actions)
        if self.delay is not None:
            payload["delay"] = self.delay.value
        payload["cache"] = "yes" if self.cache else "no"
        payload["firebase"] = "yes" if self.firebase else "no"
        if self.unified_push:
            payload["unifiedpush"] = 1
        return payload
