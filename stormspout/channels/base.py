"""Channel protocol between a spout and its host.

Framing and encoding are the channel's business. The dispatcher only ever
sees validated inbound messages and hands over OutboundTuple models.
"""

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from stormspout.core.messages import CommandMessage, TaskIdsMessage
    from stormspout.core.tuple import OutboundTuple


class ChannelClosedError(Exception):
    """Raised by ``receive`` once the channel will deliver no more messages."""


class Channel(Protocol):
    """Protocol defining the transport boundary of a spout."""

    async def receive(self, timeout: float = 1.0) -> "TaskIdsMessage | CommandMessage | None":
        """Wait for the next inbound message.

        Args:
            timeout: Maximum seconds to wait.

        Returns:
            The next message, or None if timeout expires with none available.

        Raises:
            ChannelClosedError: If the channel is closed and drained.
        """
        ...

    async def send(self, tuple_: "OutboundTuple") -> None:
        """Hand a tuple to the host. Must not block on downstream processing."""
        ...
