from __future__ import annotations

from dataclasses import dataclass, field
from urllib.parse import quote

from .errors import InvalidFilterError
from .messages.types import Priority


@dataclass(frozen=True)
class ReceptionFilter:
    """Server-side filters for subscriptions and polls.

    ``priorities`` matches any listed level; ``tags`` must all be present.
    """

    id: str | None = None
    message: str | None = None
    title: str | None = None
    priorities: list[Priority] | None = None
    tags: list[str] | None = None

    def to_query_parameters(self) -> list[tuple[str, str]]:
        params: list[tuple[str, str]] = []
        if self.id is not None:
            params.append(("id", self.id))
        if self.message is not None:
            params.append(("message", self.message))
        if self.title is not None:
            params.append(("title", self.title))
        if self.priorities is not None:
            params.append(("priority", ",".join(Priority(level).word for level in self.priorities)))
        if self.tags is not None:
            for tag in self.tags:
                if not tag or "," in tag:
                    raise InvalidFilterError(f"Invalid tag filter: {tag!r}")
            params.append(("tags", ",".join(self.tags)))
        return params

    def to_query_string(self) -> str:
        return "&".join(
            f"{key}={quote(value, safe=',')}" for key, value in self.to_query_parameters()
        )
