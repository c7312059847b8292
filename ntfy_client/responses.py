from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .auth import Credentials
from .errors import (
    EntityTooLargeError,
    RateLimitedError,
    UnauthorizedError,
    UnexpectedStatusError,
)


class PublishStatus(str, Enum):
    OK = "ok"
    UNAUTHORIZED = "unauthorized"
    TOO_LARGE = "too_large"
    RATE_LIMITED = "rate_limited"
    UNEXPECTED = "unexpected"


class AuthCheck(str, Enum):
    ALLOWED = "allowed"
    DENIED = "denied"


@dataclass(frozen=True)
class PublishOutcome:
    status: PublishStatus
    code: int

    @property
    def ok(self) -> bool:
        return self.status is PublishStatus.OK


_PUBLISH_STATUSES = {
    200: PublishStatus.OK,
    401: PublishStatus.UNAUTHORIZED,
    403: PublishStatus.UNAUTHORIZED,
    413: PublishStatus.TOO_LARGE,
    429: PublishStatus.RATE_LIMITED,
}


def classify_publish_response(status_code: int) -> PublishOutcome:
    status = _PUBLISH_STATUSES.get(status_code, PublishStatus.UNEXPECTED)
    return PublishOutcome(status=status, code=status_code)


def classify_auth_check_response(status_code: int, was_anonymous: bool) -> AuthCheck:
    if 200 <= status_code < 300:
        return AuthCheck.ALLOWED
    # Older servers have no /<topic>/auth route; for anonymous users a 404 means open access.
    if was_anonymous and status_code == 404:
        return AuthCheck.ALLOWED
    if status_code in (401, 403):
        return AuthCheck.DENIED
    raise UnexpectedStatusError(status_code)


def raise_for_publish_outcome(outcome: PublishOutcome, credentials: Credentials | None = None) -> None:
    if outcome.status is PublishStatus.OK:
        return
    if outcome.status is PublishStatus.UNAUTHORIZED:
        raise UnauthorizedError(credentials.username if credentials else None)
    if outcome.status is PublishStatus.TOO_LARGE:
        raise EntityTooLargeError()
    if outcome.status is PublishStatus.RATE_LIMITED:
        raise RateLimitedError()
    raise UnexpectedStatusError(outcome.code)
