"""Channel implementations for spout transport."""

from stormspout.channels.base import Channel, ChannelClosedError
from stormspout.channels.inmemory import InMemoryChannel

__all__ = ["Channel", "ChannelClosedError", "InMemoryChannel"]
