from __future__ import annotations

import unittest

from ntfy_client.auth import Credentials, build_headers
from ntfy_client.errors import (
    EntityTooLargeError,
    RateLimitedError,
    UnauthorizedError,
    UnexpectedStatusError,
)
from ntfy_client.responses import (
    AuthCheck,
    PublishStatus,
    classify_auth_check_response,
    classify_publish_response,
    raise_for_publish_outcome,
)


class PublishClassifierTests(unittest.TestCase):
    def test_known_codes(self) -> None:
        self.assertIs(classify_publish_response(200).status, PublishStatus.OK)
        self.assertIs(classify_publish_response(401).status, PublishStatus.UNAUTHORIZED)
        self.assertIs(classify_publish_response(403).status, PublishStatus.UNAUTHORIZED)
        self.assertIs(classify_publish_response(413).status, PublishStatus.TOO_LARGE)
        self.assertIs(classify_publish_response(429).status, PublishStatus.RATE_LIMITED)

    def test_unexpected_keeps_code(self) -> None:
        outcome = classify_publish_response(500)
        self.assertIs(outcome.status, PublishStatus.UNEXPECTED)
        self.assertEqual(outcome.code, 500)
        # Other 2xx codes are not treated as success.
        self.assertIs(classify_publish_response(201).status, PublishStatus.UNEXPECTED)

    def test_outcomes_raise_typed_errors(self) -> None:
        raise_for_publish_outcome(classify_publish_response(200))
        with self.assertRaises(UnauthorizedError) as ctx:
            raise_for_publish_outcome(classify_publish_response(403), Credentials.basic("phil", "pw"))
        self.assertEqual(ctx.exception.username, "phil")
        with self.assertRaises(EntityTooLargeError):
            raise_for_publish_outcome(classify_publish_response(413))
        with self.assertRaises(RateLimitedError):
            raise_for_publish_outcome(classify_publish_response(429))
        with self.assertRaises(UnexpectedStatusError) as unexpected:
            raise_for_publish_outcome(classify_publish_response(502))
        self.assertEqual(unexpected.exception.status_code, 502)


class AuthCheckClassifierTests(unittest.TestCase):
    def test_success_codes(self) -> None:
        self.assertIs(classify_auth_check_response(200, was_anonymous=False), AuthCheck.ALLOWED)
        self.assertIs(classify_auth_check_response(204, was_anonymous=True), AuthCheck.ALLOWED)

    def test_legacy_anonymous_404(self) -> None:
        self.assertIs(classify_auth_check_response(404, was_anonymous=True), AuthCheck.ALLOWED)
        with self.assertRaises(UnexpectedStatusError):
            classify_auth_check_response(404, was_anonymous=False)

    def test_denied(self) -> None:
        self.assertIs(classify_auth_check_response(401, was_anonymous=True), AuthCheck.DENIED)
        self.assertIs(classify_auth_check_response(403, was_anonymous=False), AuthCheck.DENIED)

    def test_other_codes_raise(self) -> None:
        with self.assertRaises(UnexpectedStatusError):
            classify_auth_check_response(500, was_anonymous=True)


class CredentialsTests(unittest.TestCase):
    def test_basic_header(self) -> None:
        creds = Credentials.basic("phil", "mypass")
        self.assertEqual(creds.authorization_header(), "Basic cGhpbDpteXBhc3M=")

    def test_empty_password_allowed(self) -> None:
        self.assertEqual(Credentials.basic("phil").authorization_header(), "Basic cGhpbDo=")

    def test_bearer_header(self) -> None:
        headers = build_headers("ua/1", Credentials.bearer("tk_abc"))
        self.assertEqual(headers, {"User-Agent": "ua/1", "Authorization": "Bearer tk_abc"})

    def test_anonymous_headers(self) -> None:
        self.assertEqual(build_headers("ua/1"), {"User-Agent": "ua/1"})
