"""Pending store protocol for guaranteed-delivery tuples.

The dispatcher registers every guaranteed emission here and consults the
store on ack and fail. Entries expire on a sliding timer: any ``get`` or
``register`` resets the entry's deadline to ``ttl`` seconds from now.
"""

from typing import Protocol

from stormspout.core.tuple import OutboundTuple


class PendingStore(Protocol):
    """Protocol defining the interface for pending-tuple stores.

    Stores are responsible for:
    - Remembering the tuple last emitted under a delivery id (register)
    - Looking it up for replay, refreshing its expiry (get)
    - Forgetting it once acked (remove)

    Expiry is passive. An entry whose window has lapsed must be reported as
    absent even if it has not been swept yet.
    """

    async def register(self, tuple_id: str, tuple_: OutboundTuple, ttl: float) -> None:
        """Store a tuple under ``tuple_id``, replacing any previous entry.

        Args:
            tuple_id: Delivery id assigned at emission.
            tuple_: The exact tuple that was sent.
            ttl: Sliding expiration window in seconds.
        """
        ...

    async def contains(self, tuple_id: str) -> bool:
        """Return True if a live entry exists. Does not refresh the entry."""
        ...

    async def get(self, tuple_id: str) -> OutboundTuple | None:
        """Return the live entry for ``tuple_id`` and refresh its expiry.

        Returns:
            The stored tuple, or None if absent or expired.
        """
        ...

    async def remove(self, tuple_id: str) -> None:
        """Delete the entry if present; no-op otherwise."""
        ...

    async def sweep(self) -> int:
        """Drop expired entries.

        Returns:
            Number of entries dropped.
        """
        ...
