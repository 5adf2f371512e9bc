"""Command dispatcher for stormspout spouts.

The Dispatcher is the spout's main control loop that:
- Receives inbound messages from a channel, strictly in arrival order
- Routes task-id notifications to the spout
- Executes next/ack/fail/activate/deactivate commands
- Calls the spout's sync hook after every command while enabled

Processing is single-threaded. The only concurrent activity is the optional
expiry sweeper, which shares one lock with every pending-store access.
"""

import asyncio
import contextlib
import random
from collections.abc import Callable
from typing import Any

from stormspout.channels.base import Channel, ChannelClosedError
from stormspout.core.activation import ActivationState
from stormspout.core.config import SpoutConfig
from stormspout.core.emitter import EmissionGate, IdGenerator
from stormspout.core.logging import configure_dispatcher_logger
from stormspout.core.messages import (
    ACK,
    ACTIVATE,
    DEACTIVATE,
    FAIL,
    NEXT,
    CommandMessage,
    TaskIdsMessage,
)
from stormspout.core.spout import Spout, invoke_hook
from stormspout.core.stats import SpoutStats
from stormspout.core.validation import OutputValidator
from stormspout.pending.base import PendingStore
from stormspout.pending.memory import PendingTupleCache


class Dispatcher:
    """Central command loop for a single spout."""

    def __init__(
        self,
        spout: Spout,
        channel: Channel,
        config: SpoutConfig | None = None,
        validator: OutputValidator | None = None,
        pending: PendingStore | None = None,
        id_generator: IdGenerator | None = None,
        clock: Callable[[], float] | None = None,
        rng: random.Random | None = None,
    ) -> None:
        if not isinstance(spout, Spout):
            raise TypeError(f"spout must be a Spout instance, got {type(spout).__name__}")
        self.spout = spout
        self.channel = channel
        self.config = config or SpoutConfig()
        self.pending = pending if pending is not None else PendingTupleCache(clock=clock)
        self._log = configure_dispatcher_logger()
        self._stats = SpoutStats()
        self._lock = asyncio.Lock()
        self._running = False

        self.activation = ActivationState(
            component_id=self.config.component_id,
            deactivate_disables=self.config.deactivate_disables,
            logger=self._log,
            stats=self._stats,
        )
        self.gate = EmissionGate(
            channel=channel,
            pending=self.pending,
            config=self.config,
            validator=validator,
            id_generator=id_generator or IdGenerator(rng),
            lock=self._lock,
            stats=self._stats,
            logger=self._log,
        )
        spout.bind(self.gate, self.activation)

    @property
    def is_enabled(self) -> bool:
        return self.activation.enabled

    @property
    def running(self) -> bool:
        return self._running

    def stop(self) -> None:
        """Ask ``run`` to return before the next receive."""
        self._running = False

    def get_stats(self) -> SpoutStats:
        """Return a copy of current statistics."""
        return self._stats.snapshot()

    def _extra(self, **fields: Any) -> dict[str, Any]:
        return {"component": self.config.component_id, **fields}

    async def _call_spout_hook(self, name: str, *args: Any) -> None:
        """Invoke a spout hook; failures are logged and counted, never raised."""
        try:
            await invoke_hook(getattr(self.spout, name), *args)
        except Exception as e:
            self._stats.hook_errors += 1
            self._log.error(
                f"Spout {self.spout.name}.{name} raised exception: {e}",
                exc_info=e,
                extra=self._extra(hook=name),
            )

    async def handle(self, message: TaskIdsMessage | CommandMessage) -> None:
        """Process one inbound message."""
        if message.kind == "task_ids":
            self._stats.task_id_messages += 1
            await self._call_spout_hook("on_task_ids", list(message.task_ids))
            return

        self._stats.commands_processed += 1
        command = message.command
        self._log.debug(
            f"Dispatching {command} to {self.spout.name}",
            extra=self._extra(command=command, tuple_id=message.id),
        )

        if not message.is_known:
            self._stats.ignored_commands += 1
        elif command == NEXT:
            await self._do_next()
        elif command == ACK:
            await self._do_ack(message.id)
        elif command == FAIL:
            await self._do_fail(message.id)
        elif command == ACTIVATE:
            await self.activation.activate(self.spout.on_activate)
        elif command == DEACTIVATE:
            await self.activation.deactivate(self.spout.on_deactivate)

        await self._do_sync()

    async def _do_next(self) -> None:
        if self.activation.enabled:
            await self._call_spout_hook("next")

    async def _do_sync(self) -> None:
        if self.activation.enabled:
            await self._call_spout_hook("sync")

    async def _do_ack(self, tuple_id: str | None) -> None:
        if not self.activation.enabled:
            return
        async with self._lock:
            found = tuple_id is not None and await self.pending.contains(tuple_id)
            if found:
                await self.pending.remove(tuple_id)
        if found:
            self._stats.tuples_acked += 1
        else:
            self._stats.unknown_ids += 1
            self._log.warning(
                f"Fail to ack message. Pending queue doesn't contain message: {tuple_id}.",
                extra=self._extra(command=ACK, tuple_id=tuple_id),
            )

    async def _do_fail(self, tuple_id: str | None) -> None:
        if not self.activation.enabled:
            return
        async with self._lock:
            pending = await self.pending.get(tuple_id) if tuple_id is not None else None
        if pending is None:
            self._stats.unknown_ids += 1
            self._log.warning(
                f"Fail to resend message. Pending queue doesn't contain message: {tuple_id}.",
                extra=self._extra(command=FAIL, tuple_id=tuple_id),
            )
            return
        await self.channel.send(pending)
        self._stats.tuples_replayed += 1
        self._log.info(
            f"Replayed tuple {tuple_id}",
            extra=self._extra(command=FAIL, tuple_id=tuple_id, stream=pending.stream),
        )

    async def _sweep_loop(self, interval: float) -> None:
        while True:
            await asyncio.sleep(interval)
            try:
                async with self._lock:
                    dropped = await self.pending.sweep()
            except Exception as e:
                self._log.error(f"Pending sweep failed: {e}", extra=self._extra(error=str(e)))
                continue
            if dropped:
                self._stats.expired_swept += dropped
                self._log.debug(
                    f"Swept {dropped} expired pending tuples",
                    extra=self._extra(expired=dropped),
                )

    async def run(self) -> SpoutStats:
        """Process inbound messages until stopped or the channel closes.

        Returns:
            A snapshot of the statistics at exit.
        """
        self._running = True
        self._log.info(f"Starting spout: {self.config.component_id}.", extra=self._extra())

        sweeper: asyncio.Task[None] | None = None
        if self.config.sweep_interval is not None:
            sweeper = asyncio.create_task(self._sweep_loop(self.config.sweep_interval))

        try:
            while self._running:
                try:
                    message = await self.channel.receive(timeout=self.config.receive_timeout)
                except ChannelClosedError:
                    self._log.info("Channel closed, stopping spout", extra=self._extra())
                    break

                if message is None:
                    continue

                await self.handle(message)
        finally:
            self._running = False
            if sweeper is not None:
                sweeper.cancel()
                with contextlib.suppress(asyncio.CancelledError):
                    await sweeper

        return self.get_stats()


async def run_spout(
    spout: Spout,
    channel: Channel,
    config: SpoutConfig | None = None,
    **kwargs: Any,
) -> SpoutStats:
    """Build a Dispatcher for ``spout`` and run it to completion."""
    dispatcher = Dispatcher(spout, channel, config=config, **kwargs)
    return await dispatcher.run()
