"""In-memory pending-tuple cache with sliding expiration."""

import heapq
import time
from collections.abc import Callable
from dataclasses import dataclass

from stormspout.core.tuple import OutboundTuple

Clock = Callable[[], float]


@dataclass
class _Entry:
    tuple_: OutboundTuple
    ttl: float
    deadline: float


class PendingTupleCache:
    """Dict-backed pending store with a deadline heap.

    Every operation first drops entries whose deadline has passed, so an
    expired entry is never observable. Refreshing an entry pushes a new
    deadline onto the heap; the stale heap item is discarded when it
    surfaces, or when the heap is rebuilt after outgrowing twice the
    number of live entries.

    This cache is not thread-safe. The dispatcher serializes access with its
    own lock.

    Args:
        clock: Monotonic time source in seconds. Defaults to time.monotonic.
    """

    def __init__(self, clock: Clock | None = None) -> None:
        self._clock = clock or time.monotonic
        self._entries: dict[str, _Entry] = {}
        self._deadlines: list[tuple[float, str]] = []
        self._expired_count = 0

    def _expire(self) -> int:
        now = self._clock()
        dropped = 0
        while self._deadlines and self._deadlines[0][0] <= now:
            deadline, tuple_id = heapq.heappop(self._deadlines)
            entry = self._entries.get(tuple_id)
            # Skip heap items superseded by a refresh or a removal
            if entry is None or entry.deadline != deadline:
                continue
            del self._entries[tuple_id]
            dropped += 1
        self._expired_count += dropped
        return dropped

    def _touch(self, tuple_id: str, entry: _Entry) -> None:
        entry.deadline = self._clock() + entry.ttl
        heapq.heappush(self._deadlines, (entry.deadline, tuple_id))
        if len(self._deadlines) > 2 * len(self._entries):
            self._compact()

    def _compact(self) -> None:
        # Keep one heap item per live entry
        self._deadlines = [(e.deadline, tid) for tid, e in self._entries.items()]
        heapq.heapify(self._deadlines)

    async def register(self, tuple_id: str, tuple_: OutboundTuple, ttl: float) -> None:
        if ttl <= 0:
            raise ValueError(f"ttl must be positive, got {ttl!r}")
        self._expire()
        entry = _Entry(tuple_=tuple_, ttl=ttl, deadline=0.0)
        self._entries[tuple_id] = entry
        self._touch(tuple_id, entry)

    async def contains(self, tuple_id: str) -> bool:
        self._expire()
        return tuple_id in self._entries

    async def get(self, tuple_id: str) -> OutboundTuple | None:
        self._expire()
        entry = self._entries.get(tuple_id)
        if entry is None:
            return None
        self._touch(tuple_id, entry)
        return entry.tuple_

    async def remove(self, tuple_id: str) -> None:
        self._expire()
        self._entries.pop(tuple_id, None)

    async def sweep(self) -> int:
        return self._expire()

    def __len__(self) -> int:
        """Number of live entries."""
        self._expire()
        return len(self._entries)

    @property
    def expired_count(self) -> int:
        """Total entries dropped by expiry since creation."""
        return self._expired_count
