"""Pending-tuple stores for guaranteed delivery.

RedisPendingStore is not imported here so the package works without the
optional ``redis`` dependency; import it from ``stormspout.pending.redis_store``.
"""

from stormspout.pending.base import PendingStore
from stormspout.pending.memory import PendingTupleCache

__all__ = ["PendingStore", "PendingTupleCache"]
