from __future__ import annotations

import json
import unittest

import httpx

from ntfy_client.auth import Credentials
from ntfy_client.client import NtfyClient
from ntfy_client.config import ClientSettings
from ntfy_client.errors import (
    EntityTooLargeError,
    InvalidTopicError,
    RateLimitedError,
    UnauthorizedError,
    UnexpectedStatusError,
)
from ntfy_client.messages.actions import HttpAction
from ntfy_client.messages.outgoing import OutgoingMessage
from ntfy_client.messages.types import Priority
from ntfy_client.responses import PublishStatus
from ntfy_client.server import parse_server_info


CONFIG_JS = """// Generated server configuration
var config = {
  base_url: "https://ntfy.example.com",
  app_root: "/app",
  enable_login: true,
  enable_signup: false,
  enable_payments: false,
  enable_reservations: true,
  disallowed_topics: ["docs", "static", "file", "app", "settings"],
};
"""


class _Recorder:
    def __init__(self, response: httpx.Response) -> None:
        self.response = response
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        # A fresh response per request so one recorder can serve several calls.
        return httpx.Response(
            self.response.status_code,
            headers=self.response.headers,
            content=self.response.content,
        )


def _client(recorder: _Recorder, credentials: Credentials | None = None) -> NtfyClient:
    settings = ClientSettings(
        server_url="https://ntfy.example.com",
        user_agent="ntfy-client/test",
        credentials=credentials,
    )
    return NtfyClient(settings, transport=httpx.MockTransport(recorder))


class PublishTests(unittest.IsolatedAsyncioTestCase):
    async def test_publish_posts_json_to_root(self) -> None:
        recorder = _Recorder(httpx.Response(200, json={"id": "abc"}))
        message = OutgoingMessage(
            message="Door left open",
            priority=Priority.MAX,
            actions=[HttpAction(label="Close", url="https://home.example.com/door")],
        )
        outcome = await _client(recorder).publish("home", message)

        self.assertIs(outcome.status, PublishStatus.OK)
        request = recorder.requests[0]
        self.assertEqual(request.method, "POST")
        self.assertEqual(request.url.path, "/")
        payload = json.loads(request.content)
        self.assertEqual(payload["topic"], "home")
        self.assertEqual(payload["priority"], 5)
        self.assertEqual(payload["actions"][0]["method"], "POST")
        self.assertNotIn("Authorization", request.headers)

    async def test_publish_uses_configured_credentials(self) -> None:
        recorder = _Recorder(httpx.Response(200))
        client = _client(recorder, credentials=Credentials.basic("phil", "mypass"))
        await client.publish("home", OutgoingMessage(message="hi"))
        self.assertEqual(recorder.requests[0].headers["Authorization"], "Basic cGhpbDpteXBhc3M=")

    async def test_publish_failures_raise(self) -> None:
        cases = [
            (401, UnauthorizedError),
            (403, UnauthorizedError),
            (413, EntityTooLargeError),
            (429, RateLimitedError),
            (500, UnexpectedStatusError),
        ]
        for status, error in cases:
            with self.subTest(status=status):
                client = _client(_Recorder(httpx.Response(status)))
                with self.assertRaises(error):
                    await client.publish("home", OutgoingMessage(message="hi"))

    async def test_invalid_topic_fails_before_network(self) -> None:
        recorder = _Recorder(httpx.Response(200))
        with self.assertRaises(InvalidTopicError):
            await _client(recorder).publish("not/a/topic", OutgoingMessage(message="hi"))
        self.assertEqual(recorder.requests, [])


class AuthenticationTests(unittest.IsolatedAsyncioTestCase):
    async def test_allowed(self) -> None:
        recorder = _Recorder(httpx.Response(200, json={"success": True}))
        self.assertTrue(await _client(recorder).check_authentication("alerts"))
        self.assertEqual(recorder.requests[0].url.path, "/alerts/auth")

    async def test_anonymous_legacy_server(self) -> None:
        self.assertTrue(await _client(_Recorder(httpx.Response(404))).check_authentication("alerts"))

    async def test_user_on_legacy_server_is_unexpected(self) -> None:
        client = _client(_Recorder(httpx.Response(404)))
        with self.assertRaises(UnexpectedStatusError):
            await client.check_authentication("alerts", Credentials.bearer("tk_x"))

    async def test_denied(self) -> None:
        client = _client(_Recorder(httpx.Response(401)))
        self.assertFalse(await client.check_authentication("alerts", Credentials.basic("phil", "x")))


class ServerMetadataTests(unittest.IsolatedAsyncioTestCase):
    async def test_server_info(self) -> None:
        info = await _client(_Recorder(httpx.Response(200, text=CONFIG_JS))).get_server_info()
        self.assertEqual(info.base_url, "https://ntfy.example.com")
        self.assertEqual(info.app_root, "/app")
        self.assertTrue(info.enable_login)
        self.assertTrue(info.enable_reservations)
        self.assertIn("docs", info.disallowed_topics)

    def test_server_info_garbage(self) -> None:
        self.assertIsNone(parse_server_info(""))
        self.assertIsNone(parse_server_info("alert('hi')"))

    async def test_server_health(self) -> None:
        recorder = _Recorder(httpx.Response(200, json={"healthy": True}))
        health = await _client(recorder).get_server_health()
        self.assertTrue(health.healthy)
        self.assertEqual(recorder.requests[0].url.path, "/v1/health")

    async def test_attachment_allowance_from_visitor_stats(self) -> None:
        stats = {
            "attachmentFileSizeLimit": 15728640,
            "visitorAttachmentBytesTotal": 104857600,
            "visitorAttachmentBytesRemaining": 100000000,
            "visitorAttachmentBytesUsed": 4857600,
        }
        recorder = _Recorder(httpx.Response(200, json=stats))
        client = _client(recorder)
        self.assertEqual(await client.get_attachment_allowance(), 104857600)
        self.assertEqual(await client.get_attachment_allowance_remaining(), 100000000)
        self.assertEqual(await client.get_attachment_allowance_used(), 4857600)
        self.assertEqual(await client.get_attachment_size_limit(), 15728640)
        self.assertTrue(await client.is_attachment_of_size_allowed(100000000))
        self.assertFalse(await client.is_attachment_of_size_allowed(100000001))
        self.assertEqual(recorder.requests[0].url.path, "/user/stats")

    async def test_attachment_allowance_from_account_stats(self) -> None:
        account = {
            "username": "phil",
            "limits": {"attachment_total_size": 5000, "attachment_file_size": 1500},
            "stats": {
                "messages": 3,
                "messages_remaining": 997,
                "attachment_total_size": 2000,
                "attachment_total_size_remaining": 3000,
            },
        }
        client = _client(_Recorder(httpx.Response(200, json=account)))
        user = Credentials.bearer("tk_x")
        self.assertEqual(await client.get_attachment_allowance(user), 5000)
        self.assertEqual(await client.get_attachment_allowance_used(user), 2000)
        self.assertEqual(await client.get_attachment_allowance_remaining(user), 3000)
        self.assertEqual(await client.get_attachment_size_limit(user), 1500)

        stats = await client.get_user_stats(user)
        self.assertEqual(stats.messages_remaining, 997)
