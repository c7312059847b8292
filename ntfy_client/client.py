from __future__ import annotations

import asyncio
import inspect
import logging
from typing import Any, Callable, Iterable

import httpx

from .auth import Credentials, build_headers
from .config import ClientSettings
from .endpoints import (
    PUBLISH_ENDPOINT,
    SERVER_HEALTH_ENDPOINT,
    SERVER_INFO_ENDPOINT,
    USER_STATS_ENDPOINT,
    build_auth_endpoint,
    build_publish_endpoint,
    build_receive_endpoint,
)
from .filters import ReceptionFilter
from .messages.outgoing import OutgoingMessage
from .messages.received import Message
from .responses import (
    AuthCheck,
    PublishOutcome,
    classify_auth_check_response,
    classify_publish_response,
    raise_for_publish_outcome,
)
from .server import (
    ServerHealth,
    ServerInfo,
    UserStats,
    parse_server_health,
    parse_server_info,
    parse_user_stats,
)
from .subscription import Subscription
from .timing import Since


# Handlers may be plain functions or coroutine functions.
MessageHandler = Callable[[Message], Any]


class NtfyClient:
    """Client for a single ntfy server.

    Every call opens its own ``httpx.AsyncClient``; subscriptions hold their
    connection for as long as they are iterated. Credentials passed to a call
    override the ones configured in ``settings``.
    """

    def __init__(
        self,
        settings: ClientSettings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or ClientSettings()
        self._transport = transport
        self._logger = logging.getLogger(__name__)

    @property
    def settings(self) -> ClientSettings:
        return self._settings

    async def publish(
        self,
        topic: str,
        message: OutgoingMessage,
        credentials: Credentials | None = None,
    ) -> PublishOutcome:
        build_publish_endpoint(topic)
        user = self._credentials(credentials)
        payload = message.to_payload(topic)

        async with self._open_client(self._settings.publish_timeout_seconds) as client:
            response = await client.post(
                PUBLISH_ENDPOINT, json=payload, headers=self._headers(user)
            )

        outcome = classify_publish_response(response.status_code)
        if not outcome.ok:
            self._logger.error("Publish to %s failed with status %s", topic, response.status_code)
        raise_for_publish_outcome(outcome, user)
        return outcome

    async def check_authentication(self, topic: str, credentials: Credentials | None = None) -> bool:
        """Return whether the credentials (or anonymous access) may read ``topic``."""
        endpoint = build_auth_endpoint(topic)
        user = self._credentials(credentials)

        async with self._open_client(self._settings.request_timeout_seconds) as client:
            response = await client.get(endpoint, headers=self._headers(user))

        result = classify_auth_check_response(response.status_code, was_anonymous=user is None)
        return result is AuthCheck.ALLOWED

    def subscribe(
        self,
        topics: Iterable[str],
        since: Since | None = None,
        include_scheduled: bool = False,
        filters: ReceptionFilter | None = None,
        credentials: Credentials | None = None,
        cancel_event: asyncio.Event | None = None,
        ignore_keepalive: bool = True,
    ) -> Subscription:
        endpoint = build_receive_endpoint(topics, since, include_scheduled, filters)
        timeout = httpx.Timeout(
            self._settings.request_timeout_seconds,
            read=self._settings.subscribe_timeout_seconds,
        )
        return Subscription(
            client_factory=lambda: self._open_client(timeout),
            path=endpoint,
            headers=self._headers(self._credentials(credentials)),
            cancel_event=cancel_event,
            ignore_keepalive=ignore_keepalive,
        )

    async def poll(
        self,
        topics: Iterable[str],
        since: Since | None = None,
        include_scheduled: bool = False,
        filters: ReceptionFilter | None = None,
        credentials: Credentials | None = None,
    ) -> list[Message]:
        endpoint = build_receive_endpoint(topics, since, include_scheduled, filters, poll=True)
        subscription = Subscription(
            client_factory=lambda: self._open_client(self._settings.poll_timeout_seconds),
            path=endpoint,
            headers=self._headers(self._credentials(credentials)),
            ignore_keepalive=False,
        )
        messages = await subscription.collect()
        self._logger.debug("Polled %s messages from %s", len(messages), endpoint)
        return messages

    async def subscribe_and_process(
        self,
        topics: Iterable[str],
        on_message: MessageHandler,
        since: Since | None = None,
        include_scheduled: bool = False,
        filters: ReceptionFilter | None = None,
        credentials: Credentials | None = None,
        cancel_event: asyncio.Event | None = None,
        ignore_keepalive: bool = True,
    ) -> int:
        """Feed each received message to ``on_message`` in order; returns the count handled.

        The handler is awaited before the next line is read.
        """
        subscription = self.subscribe(
            topics,
            since=since,
            include_scheduled=include_scheduled,
            filters=filters,
            credentials=credentials,
            cancel_event=cancel_event,
            ignore_keepalive=ignore_keepalive,
        )
        processed = 0
        async with subscription:
            async for message in subscription:
                result = on_message(message)
                if inspect.isawaitable(result):
                    await result
                processed += 1
        return processed

    async def get_server_info(self) -> ServerInfo | None:
        async with self._open_client(self._settings.request_timeout_seconds) as client:
            response = await client.get(SERVER_INFO_ENDPOINT, headers=self._headers(None))
            response.raise_for_status()
        return parse_server_info(response.text)

    async def get_server_health(self) -> ServerHealth:
        async with self._open_client(self._settings.request_timeout_seconds) as client:
            response = await client.get(SERVER_HEALTH_ENDPOINT, headers=self._headers(None))
            response.raise_for_status()
        return parse_server_health(response.json())

    async def get_user_stats(self, credentials: Credentials | None = None) -> UserStats:
        user = self._credentials(credentials)
        async with self._open_client(self._settings.request_timeout_seconds) as client:
            response = await client.get(USER_STATS_ENDPOINT, headers=self._headers(user))
            response.raise_for_status()
        return parse_user_stats(response.json())

    async def get_attachment_allowance(self, credentials: Credentials | None = None) -> int:
        stats = await self.get_user_stats(credentials)
        return stats.attachment_bytes_total or 0

    async def get_attachment_allowance_remaining(self, credentials: Credentials | None = None) -> int:
        stats = await self.get_user_stats(credentials)
        return stats.attachment_bytes_remaining or 0

    async def get_attachment_allowance_used(self, credentials: Credentials | None = None) -> int:
        stats = await self.get_user_stats(credentials)
        return stats.attachment_bytes_used or 0

    async def get_attachment_size_limit(self, credentials: Credentials | None = None) -> int:
        stats = await self.get_user_stats(credentials)
        return stats.attachment_file_size_limit or 0

    async def is_attachment_of_size_allowed(self, size: int, credentials: Credentials | None = None) -> bool:
        return await self.get_attachment_allowance_remaining(credentials) >= size

    def _credentials(self, credentials: Credentials | None) -> Credentials | None:
        return credentials if credentials is not None else self._settings.credentials

    def _headers(self, credentials: Credentials | None) -> dict[str, str]:
        return build_headers(self._settings.user_agent, credentials)

    def _open_client(self, timeout: float | httpx.Timeout) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self._settings.server_url,
            timeout=timeout,
            transport=self._transport,
        )
