"""Unbounded fan-in channel from many producers to one collector."""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator

from ygg_keygen.core.errors import ChannelClosedError

_CLOSED = object()


class Channel[T]:
    """Many-producer, single-consumer queue with explicit close.

    ``send`` never blocks. Iterating yields items until ``close`` has been
    called and everything sent before it was delivered.
    """

    def __init__(self, kind: str) -> None:
        self.kind = kind
        self.sent = 0
        self._queue: asyncio.Queue[T | object] = asyncio.Queue()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def send(self, item: T) -> None:
        """Deliver one item.

        Raises:
            ChannelClosedError: If the channel was already closed.
        """
        if self._closed:
            raise ChannelClosedError.for_kind(self.kind)
        self._queue.put_nowait(item)
        self.sent += 1

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._queue.put_nowait(_CLOSED)

    async def __aiter__(self) -> AsyncIterator[T]:
        while True:
            item = await self._queue.get()
            if item is _CLOSED:
                return
            yield item  # type: ignore[misc]
