from .actions import (
    Action,
    ActionDecodeFailure,
    ActionDecodeResult,
    BroadcastAction,
    HttpAction,
    ViewAction,
    decode_action,
    decode_actions,
    encode_action,
    encode_actions,
)
from .outgoing import OutgoingMessage
from .received import Attachment, Message, decode_message, decode_message_line
from .types import EventKind, Priority

__all__ = [
    "Action",
    "ActionDecodeFailure",
    "ActionDecodeResult",
    "Attachment",
    "BroadcastAction",
    "EventKind",
    "HttpAction",
    "Message",
    "OutgoingMessage",
    "Priority",
    "ViewAction",
    "decode_action",
    "decode_actions",
    "decode_message",
    "decode_message_line",
    "encode_action",
    "encode_actions",
]
