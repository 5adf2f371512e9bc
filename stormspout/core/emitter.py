"""Emission gate and delivery id generation."""

import asyncio
import logging
import random
import string
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from stormspout.core.config import SpoutConfig
from stormspout.core.stats import SpoutStats
from stormspout.core.tuple import DEFAULT_STREAM, OutboundTuple, VerificationResult
from stormspout.core.validation import AcceptAllValidator, OutputValidator

if TYPE_CHECKING:
    from stormspout.channels.base import Channel
    from stormspout.pending.base import PendingStore

ID_PREFIX = "id"
ID_ALPHABET = string.ascii_lowercase + string.digits
ID_LENGTH = 6


class IdGenerator:
    """Draws delivery ids of the form ``id`` + six lowercase alphanumerics.

    The id space is 36**6 (about 2.2e9), so collisions among pending ids
    become likely after tens of thousands of in-flight tuples. A collision
    overwrites the older pending entry.

    Args:
        rng: Source of randomness. Pass a seeded random.Random for
            reproducible ids.
    """

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng or random.Random()

    def next_id(self) -> str:
        return ID_PREFIX + "".join(self._rng.choices(ID_ALPHABET, k=ID_LENGTH))

    def __call__(self) -> str:
        return self.next_id()


class EmissionGate:
    """Validates, sends and tracks tuples emitted by a spout.

    Args:
        channel: Where validated tuples are sent.
        pending: Store for guaranteed tuples awaiting ack/fail.
        config: Spout settings; ``guaranteed`` and ``timeout_seconds`` apply.
        validator: Output schema check. Defaults to accepting everything.
        id_generator: Source of delivery ids.
        lock: Lock serializing pending-store access with the dispatcher.
        stats: Counters updated on emission and validation failure.
        logger: Logger for validation errors.
    """

    def __init__(
        self,
        channel: "Channel",
        pending: "PendingStore",
        config: SpoutConfig,
        validator: OutputValidator | None = None,
        id_generator: IdGenerator | None = None,
        lock: asyncio.Lock | None = None,
        stats: SpoutStats | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.channel = channel
        self.pending = pending
        self.config = config
        self.validator = validator or AcceptAllValidator()
        self.id_generator = id_generator or IdGenerator()
        self._lock = lock or asyncio.Lock()
        self._stats = stats if stats is not None else SpoutStats()
        self._log = logger or logging.getLogger("stormspout.emitter")

    async def emit(
        self,
        payload: Sequence[Any],
        stream: str = DEFAULT_STREAM,
        task: int = 0,
        need_task_ids: bool = False,
    ) -> str | None:
        """Emit one tuple.

        Args:
            payload: Ordered tuple values.
            stream: Output stream name.
            task: Target task for a direct emit, 0 for none.
            need_task_ids: Ask the host to report the receiving task ids.

        Returns:
            The delivery id when guaranteed delivery is on and the tuple was
            sent, None otherwise (including when validation dropped it).
        """
        tuple_id = self.id_generator.next_id() if self.config.guaranteed else None

        if stream.strip():
            result = self.validator.verify(stream, payload)
        else:
            result = VerificationResult(is_error=True, description="Stream name is empty")
        if result.is_error:
            self._stats.validation_errors += 1
            self._log.error(
                f"{result} for next tuple: {list(payload)!r}",
                extra={
                    "component": self.config.component_id,
                    "stream": stream,
                },
            )
            return None

        message = OutboundTuple(
            id=tuple_id,
            task=task,
            stream=stream,
            payload=list(payload),
            need_task_ids=need_task_ids,
        )
        await self.channel.send(message)
        self._stats.tuples_emitted += 1

        if tuple_id is not None:
            async with self._lock:
                await self.pending.register(tuple_id, message, self.config.timeout_seconds)
            self._log.debug(
                f"Registered pending tuple {tuple_id}",
                extra={
                    "component": self.config.component_id,
                    "tuple_id": tuple_id,
                    "stream": message.stream,
                },
            )
        return tuple_id
