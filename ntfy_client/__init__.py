from .auth import Credentials
from .client import NtfyClient
from .config import ClientSettings, load_settings
from .endpoints import (
    StreamType,
    build_auth_endpoint,
    build_receive_endpoint,
    generate_random_topic,
    validate_topic,
)
from .errors import (
    ActionDecodeError,
    ConfigurationError,
    EntityTooLargeError,
    InvalidFilterError,
    InvalidTopicError,
    MessageDecodeError,
    NtfyError,
    RateLimitedError,
    SubscriptionError,
    UnauthorizedError,
    UnexpectedStatusError,
)
from .filters import ReceptionFilter
from .messages import (
    Action,
    Attachment,
    BroadcastAction,
    EventKind,
    HttpAction,
    Message,
    OutgoingMessage,
    Priority,
    ViewAction,
    decode_actions,
    decode_message,
    encode_actions,
)
from .responses import (
    AuthCheck,
    PublishOutcome,
    PublishStatus,
    classify_auth_check_response,
    classify_publish_response,
)
from .server import ServerHealth, ServerInfo, UserStats
from .subscription import Subscription, SubscriptionState
from .timing import Delay, DelayUnit, Since

__version__ = "0.1.0"

__all__ = [
    "NtfyClient",
    "ClientSettings",
    "Credentials",
    "load_settings",
    # Messages
    "Action",
    "Attachment",
    "BroadcastAction",
    "EventKind",
    "HttpAction",
    "Message",
    "OutgoingMessage",
    "Priority",
    "ViewAction",
    "decode_actions",
    "decode_message",
    "encode_actions",
    # Reception
    "ReceptionFilter",
    "Since",
    "Delay",
    "DelayUnit",
    "StreamType",
    "Subscription",
    "SubscriptionState",
    "build_auth_endpoint",
    "build_receive_endpoint",
    "generate_random_topic",
    "validate_topic",
    # Responses
    "AuthCheck",
    "PublishOutcome",
    "PublishStatus",
    "ServerHealth",
    "ServerInfo",
    "UserStats",
    "classify_auth_check_response",
    "classify_publish_response",
    # Errors
    "NtfyError",
    "ActionDecodeError",
    "ConfigurationError",
    "EntityTooLargeError",
    "InvalidFilterError",
    "InvalidTopicError",
    "MessageDecodeError",
    "RateLimitedError",
    "SubscriptionError",
    "UnauthorizedError",
    "UnexpectedStatusError",
]
