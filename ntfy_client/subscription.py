from __future__ import annotations

import asyncio
from enum import Enum
import logging
from typing import AsyncIterator, Callable

import httpx

from .errors import SubscriptionError, UnauthorizedError, UnexpectedStatusError
from .messages.received import Message, decode_message_line
from .messages.types import EventKind


class SubscriptionState(str, Enum):
    IDLE = "idle"
    CONNECTING = "connecting"
    STREAMING = "streaming"
    CLOSED = "closed"
    CANCELLED = "cancelled"
    FAULTED = "faulted"


TERMINAL_STATES = frozenset(
    {SubscriptionState.CLOSED, SubscriptionState.CANCELLED, SubscriptionState.FAULTED}
)

_END = object()
_CANCELLED = object()


class Subscription:
    """Single-use async iterator over the messages of one stream request.

    Setting the cancel event closes the connection and ends iteration without
    raising; a pending read is raced against the event so a quiet stream
    still stops promptly.
    """

    def __init__(
        self,
        client_factory: Callable[[], httpx.AsyncClient],
        path: str,
        headers: dict[str, str],
        cancel_event: asyncio.Event | None = None,
        ignore_keepalive: bool = True,
    ) -> None:
        self._client_factory = client_factory
        self._path = path
        self._headers = dict(headers)
        self._headers.setdefault("Accept", "application/x-ndjson")
        self._cancel_event = cancel_event or asyncio.Event()
        self._ignore_keepalive = ignore_keepalive
        self._state = SubscriptionState.IDLE
        self._iterator: AsyncIterator[Message] | None = None
        self._logger = logging.getLogger(__name__)

    @property
    def state(self) -> SubscriptionState:
        return self._state

    @property
    def path(self) -> str:
        return self._path

    def cancel(self) -> None:
        self._cancel_event.set()

    def __aiter__(self) -> AsyncIterator[Message]:
        if self._iterator is not None or self._state is not SubscriptionState.IDLE:
            raise SubscriptionError("A subscription can only be iterated once")
        self._iterator = self._stream()
        return self._iterator

    async def __aenter__(self) -> Subscription:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._iterator is not None:
            await self._iterator.aclose()
        elif self._state is SubscriptionState.IDLE:
            self._state = SubscriptionState.CANCELLED

    async def collect(self) -> list[Message]:
        return [message async for message in self]

    async def _stream(self) -> AsyncIterator[Message]:
        if self._cancel_event.is_set():
            self._state = SubscriptionState.CANCELLED
            return

        self._state = SubscriptionState.CONNECTING
        self._logger.debug("Opening stream %s", self._path)
        try:
            async with self._client_factory() as client:
                async with client.stream("GET", self._path, headers=self._headers) as response:
                    _check_stream_status(response)
                    self._state = SubscriptionState.STREAMING
                    lines = response.aiter_lines()
                    while True:
                        line = await self._next_line(lines)
                        if line is _CANCELLED:
                            self._state = SubscriptionState.CANCELLED
                            self._logger.debug("Stream %s cancelled", self._path)
                            return
                        if line is _END:
                            self._state = SubscriptionState.CLOSED
                            self._logger.debug("Stream %s closed by server", self._path)
                            return
                        if not line.strip():
                            continue
                        message = decode_message_line(line)
                        if self._ignore_keepalive and message.event is EventKind.KEEPALIVE:
                            self._logger.debug("Dropped keepalive %s", message.id)
                            continue
                        yield message
        except (GeneratorExit, asyncio.CancelledError):
            self._state = SubscriptionState.CANCELLED
            raise
        except Exception:
            self._state = SubscriptionState.FAULTED
            raise

    async def _next_line(self, lines: AsyncIterator[str]) -> object:
        if self._cancel_event.is_set():
            return _CANCELLED

        read = asyncio.ensure_future(_pull(lines))
        cancelled = asyncio.ensure_future(self._cancel_event.wait())
        try:
            await asyncio.wait({read, cancelled}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            for task in (read, cancelled):
                if not task.done():
                    task.cancel()
            await asyncio.gather(read, cancelled, return_exceptions=True)

        # A line that arrives together with cancellation is discarded.
        if self._cancel_event.is_set():
            return _CANCELLED
        return read.result()


async def _pull(lines: AsyncIterator[str]) -> object:
    try:
        return await lines.__anext__()
    except StopAsyncIteration:
        return _END


def _check_stream_status(response: httpx.Response) -> None:
    if response.is_success:
        return
    if response.status_code in (401, 403):
        raise UnauthorizedError()
    raise UnexpectedStatusError(response.status_code)
