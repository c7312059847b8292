from __future__ import annotations

from enum import Enum
import re
import secrets
import string
from typing import Iterable
from urllib.parse import quote

from .errors import InvalidTopicError
from .filters import ReceptionFilter
from .timing import Since


SERVER_INFO_ENDPOINT = "config.js"
SERVER_HEALTH_ENDPOINT = "v1/health"
USER_STATS_ENDPOINT = "user/stats"
PUBLISH_ENDPOINT = "/"

_VALID_TOPIC = re.compile(r"^[-_A-Za-z0-9]{1,64}$")


class StreamType(str, Enum):
    JSON = "json"
    WEBSOCKET = "ws"


def is_valid_topic(topic: str) -> bool:
    return isinstance(topic, str) and _VALID_TOPIC.fullmatch(topic) is not None


def validate_topic(topic: str) -> str:
    if not is_valid_topic(topic):
        raise InvalidTopicError(topic)
    return topic


def build_auth_endpoint(topic: str) -> str:
    return f"{validate_topic(topic)}/auth"


def build_publish_endpoint(topic: str) -> str:
    return validate_topic(topic)

_TOPIC_ALPHABET = string.ascii_letters + string.digits


def generate_random_topic(length: int = 32) -> str:
    """Return a random topic name; on a public server the name is the only secret."""
    if not 1 <= length <= 64:
        raise ValueError("Topic length must be between 1 and 64")
    return "".join(secrets.choice(_TOPIC_ALPHABET) for _ in range(length))


def build_receive_endpoint(
    topics: Iterable[str],
    since: Since | None = None,
    include_scheduled: bool = False,
    filters: ReceptionFilter | None = None,
    poll: bool = False,
    stream_type: StreamType = StreamType.JSON,
) -> str:
    if isinstance(topics, str):
        topics = [topics]
    validated = [validate_topic(topic) for topic in topics]
    if not validated:
        raise InvalidTopicError("")

    cursor = since or Since.all()
    stream = StreamType(stream_type).value
    url = f"{','.join(validated)}/{stream}?since={quote(cursor.value, safe='')}"
    if include_scheduled:
        url += "&sched=1"
    if filters is not None:
        query = filters.to_query_string()
        if query:
            url += f"&{query}"
    if poll:
        url += "&poll=1"
    return url
