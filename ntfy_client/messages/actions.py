from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Any, ClassVar, Iterable, Mapping, Union

from ..errors import ActionDecodeError


VIEW = "view"
BROADCAST = "broadcast"
HTTP = "http"

DEFAULT_INTENT = "io.heckel.ntfy.USER_ACTION"
DEFAULT_HTTP_METHOD = "POST"


@dataclass(frozen=True)
class ViewAction:
    kind: ClassVar[str] = VIEW

    label: str
    url: str
    clear: bool = False


@dataclass(frozen=True)
class BroadcastAction:
    kind: ClassVar[str] = BROADCAST

    label: str
    intent: str = DEFAULT_INTENT
    extras: dict[str, str] = field(default_factory=dict)
    clear: bool = False


@dataclass(frozen=True)
class HttpAction:
    kind: ClassVar[str] = HTTP

    label: str
    url: str
    method: str = DEFAULT_HTTP_METHOD
    headers: dict[str, str] = field(default_factory=dict)
    body: str = ""
    clear: bool = False


Action = Union[ViewAction, BroadcastAction, HttpAction]


@dataclass
class ActionDecodeFailure:
    index: int
    reason: str


@dataclass
class ActionDecodeResult:
    actions: list[Action] = field(default_factory=list)
    errors: list[ActionDecodeFailure] = field(default_factory=list)
    skipped: int = 0


_logger = logging.getLogger(__name__)


def decode_actions(records: Iterable[Any] | None) -> ActionDecodeResult:
    """Decode a batch of action records.

    Unknown or missing discriminators are counted in ``skipped``. Records of a
    known kind with malformed fields are reported in ``errors``. Neither case
    aborts the batch.
    """
    result = ActionDecodeResult()
    if records is None:
        return result
    for index, record in enumerate(records):
        kind = record.get("action") if isinstance(record, Mapping) else None
        if not isinstance(kind, str) or kind not in _DECODERS:
            _logger.debug("Skipping action record %s with unknown discriminator", index)
            result.skipped += 1
            continue
        try:
            result.actions.append(decode_action(record))
        except ActionDecodeError as exc:
            result.errors.append(ActionDecodeFailure(index=index, reason=str(exc)))
    return result


def decode_action(record: Mapping[str, Any]) -> Action:
    kind = record.get("action")
    decoder = _DECODERS.get(kind) if isinstance(kind, str) else None
    if decoder is None:
        raise ActionDecodeError(f"Unknown action kind: {kind!r}")
    return decoder(record)


def encode_action(action: Action) -> dict[str, Any]:
    payload: dict[str, Any] = {"action": action.kind, "label": action.label}
    if isinstance(action, ViewAction):
        payload["url"] = action.url
    elif isinstance(action, BroadcastAction):
        payload["intent"] = action.intent or DEFAULT_INTENT
        payload["extras"] = dict(action.extras)
    elif isinstance(action, HttpAction):
        payload["url"] = action.url
        payload["method"] = action.method or DEFAULT_HTTP_METHOD
        payload["headers"] = dict(action.headers)
        payload["body"] = action.body
    else:
        raise TypeError(f"Not an action: {action!r}")
    payload["clear"] = bool(action.clear)
    return payload


def encode_actions(actions: Iterable[Action]) -> list[dict[str, Any]]:
    return [encode_action(action) for action in actions]


def _decode_view(record: Mapping[str, Any]) -> ViewAction:
    return ViewAction(
        label=_required_str(record, "label"),
        url=_required_str(record, "url"),
        clear=_optional_bool(record, "clear"),
    )


def _decode_broadcast(record: Mapping[str, Any]) -> BroadcastAction:
    return BroadcastAction(
        label=_required_str(record, "label"),
        intent=_optional_str(record, "intent") or DEFAULT_INTENT,
        extras=_optional_str_map(record, "extras"),
        clear=_optional_bool(record, "clear"),
    )


def _decode_http(record: Mapping[str, Any]) -> HttpAction:
    return HttpAction(
        label=_required_str(record, "label"),
        url=_required_str(record, "url"),
        method=_optional_str(record, "method") or DEFAULT_HTTP_METHOD,
        headers=_optional_str_map(record, "headers"),
        body=_optional_str(record, "body") or "",
        clear=_optional_bool(record, "clear"),
    )


_DECODERS = {
    VIEW: _decode_view,
    BROADCAST: _decode_broadcast,
    HTTP: _decode_http,
}


def _required_str(record: Mapping[str, Any], key: str) -> str:
    value = record.get(key)
    if not isinstance(value, str):
        raise ActionDecodeError(f"{record.get('action')} action field '{key}' must be a string")
    return value


def _optional_str(record: Mapping[str, Any], key: str) -> str | None:
    value = record.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ActionDecodeError(f"{record.get('action')} action field '{key}' must be a string")
    return value


def _optional_bool(record: Mapping[str, Any], key: str) -> bool:
    value = record.get(key)
    if value is None:
        return False
    if not isinstance(value, bool):
        raise ActionDecodeError(f"{record.get('action')} action field '{key}' must be a boolean")
    return value


def _optional_str_map(record: Mapping[str, Any], key: str) -> dict[str, str]:
    value = record.get(key)
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ActionDecodeError(f"{record.get('action')} action field '{key}' must be a mapping")
    parsed: dict[str, str] = {}
    for name, item in value.items():
        if not isinstance(name, str) or not isinstance(item, str):
            raise ActionDecodeError(
                f"{record.get('action')} action field '{key}' must map strings to strings"
            )
        parsed[name] = item
    return parsed
