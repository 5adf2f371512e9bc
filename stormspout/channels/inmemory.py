"""In-memory channel using asyncio.Queue for inbound messages."""

import asyncio
from typing import Any

from stormspout.channels.base import ChannelClosedError
from stormspout.core.messages import CommandMessage, TaskIdsMessage, parse_inbound
from stormspout.core.tuple import OutboundTuple

InboundMessage = TaskIdsMessage | CommandMessage

# Queued after close() so a blocked receive wakes up
_CLOSED = object()


class InMemoryChannel:
    """Async FIFO channel for development and testing.

    Inbound messages are fed by the caller; outbound tuples are recorded in
    ``sent`` in send order. Messages fed before ``close()`` are still
    delivered; after that ``receive`` raises ChannelClosedError.
    """

    def __init__(self) -> None:
        self._inbound: asyncio.Queue[Any] = asyncio.Queue()
        self._closed = False
        self._drained = False
        self.sent: list[OutboundTuple] = []

    def feed(self, message: InboundMessage | dict[str, Any]) -> None:
        """Queue an inbound message.

        Args:
            message: A message model, or a decoded mapping with a ``kind`` key.

        Raises:
            ChannelClosedError: If the channel has been closed.
            pydantic.ValidationError: If a mapping is not a valid message.
        """
        if self._closed:
            raise ChannelClosedError("cannot feed a closed channel")
        if isinstance(message, dict):
            message = parse_inbound(message)
        self._inbound.put_nowait(message)

    def command(self, name: str, tuple_id: str | None = None) -> None:
        """Shortcut for feeding a CommandMessage."""
        self.feed(CommandMessage(command=name, id=tuple_id))

    def close(self) -> None:
        if not self._closed:
            self._closed = True
            self._inbound.put_nowait(_CLOSED)

    @property
    def closed(self) -> bool:
        return self._closed

    async def receive(self, timeout: float = 1.0) -> InboundMessage | None:
        if self._drained:
            raise ChannelClosedError("channel closed")
        try:
            item = await asyncio.wait_for(self._inbound.get(), timeout)
        except TimeoutError:
            return None
        if item is _CLOSED:
            self._drained = True
            raise ChannelClosedError("channel closed")
        return item

    async def send(self, tuple_: OutboundTuple) -> None:
        self.sent.append(tuple_)

    def pending_inbound(self) -> int:
        """Number of inbound messages not yet received."""
        size = self._inbound.qsize()
        return size - 1 if self._closed and not self._drained else size
