from __future__ import annotations


class NtfyError(Exception):
    """Base exception for all ntfy client errors."""


class InvalidTopicError(NtfyError, ValueError):
    """Raised when a topic name fails validation."""

    def __init__(self, topic: str) -> None:
        super().__init__(f"Invalid topic name: {topic!r}")
        self.topic = topic


class InvalidFilterError(NtfyError, ValueError):
    """Raised when reception filters cannot be rendered."""


class ConfigurationError(NtfyError, ValueError):
    """Raised when configuration is invalid."""


class MessageDecodeError(NtfyError):
    """Raised when a received message envelope cannot be decoded."""


class ActionDecodeError(NtfyError):
    """Raised when a single action record cannot be decoded."""


class UnauthorizedError(NtfyError):
    """Raised when the server rejects the provided credentials."""

    def __init__(self, username: str | None = None) -> None:
        super().__init__(f"{username or 'user'} is not authorized to perform this action.")
        self.username = username


class EntityTooLargeError(NtfyError):
    """Raised when a publish payload exceeds the server limit."""

    def __init__(self) -> None:
        super().__init__("The payload is too large.")


class RateLimitedError(NtfyError):
    """Raised when the server is rate-limiting requests."""

    def __init__(self) -> None:
        super().__init__("Too many requests.")


class UnexpectedStatusError(NtfyError):
    """Raised for HTTP status codes outside the known set."""

    def __init__(self, status_code: int) -> None:
        super().__init__(f"Unexpected status code {status_code}")
        self.status_code = status_code


class SubscriptionError(NtfyError):
    """Raised when a subscription is misused."""
