"""Sentence spout demo application.

Runs a SentenceSpout against a simulated host. The host activates the spout,
asks for one tuple per sentence, and answers every guaranteed tuple:

    first delivery of every ``fail_every``-th tuple  -> fail (spout replays it)
    every other delivery                             -> ack

The run ends when the host has acked every sentence and closes the channel.

Usage:
    python -m stormspout.apps.words.main
"""

import argparse
import asyncio
from collections.abc import Callable

from stormspout.apps.words.spouts import SentenceSpout
from stormspout.channels.inmemory import InMemoryChannel
from stormspout.core.config import SpoutConfig
from stormspout.core.dispatcher import Dispatcher
from stormspout.core.messages import TaskIdsMessage
from stormspout.core.stats import SpoutStats
from stormspout.core.tuple import OutboundTuple
from stormspout.core.validation import StreamSchemaValidator

SAMPLE_SENTENCES = [
    "the cow jumped over the moon",
    "an apple a day keeps the doctor away",
    "four score and seven years ago",
    "snow white and the seven dwarfs",
    "i am at two with nature",
]

DOWNSTREAM_TASKS = [3, 4]


class SimulatedHostChannel(InMemoryChannel):
    """In-memory channel that answers sent tuples like a topology would."""

    def __init__(self, expected: int, fail_every: int = 0) -> None:
        super().__init__()
        self.expected = expected
        self.fail_every = fail_every
        self.acked: list[str] = []
        self.failed: list[str] = []
        self._deliveries: dict[str, int] = {}

    async def send(self, tuple_: OutboundTuple) -> None:
        await super().send(tuple_)
        if tuple_.need_task_ids:
            self.feed(TaskIdsMessage(task_ids=DOWNSTREAM_TASKS))
        if tuple_.id is None:
            return

        first = tuple_.id not in self._deliveries
        self._deliveries[tuple_.id] = self._deliveries.get(tuple_.id, 0) + 1
        position = len(self._deliveries)
        if first and self.fail_every and position % self.fail_every == 0:
            self.failed.append(tuple_.id)
            self.command("fail", tuple_.id)
            return

        self.acked.append(tuple_.id)
        self.command("ack", tuple_.id)
        if len(self.acked) >= self.expected:
            self.close()


async def run_words(
    sentences: list[str] | None = None,
    fail_every: int = 3,
    output_callback: Callable[[str], None] | None = None,
) -> tuple[SpoutStats, SentenceSpout, SimulatedHostChannel]:
    """Run the sentence spout to completion against a simulated host.

    Args:
        sentences: Sentences to emit. Defaults to SAMPLE_SENTENCES.
        fail_every: Fail the first delivery of every n-th tuple; 0 never fails.
        output_callback: Optional callback receiving one line per sent tuple.

    Returns:
        A tuple of (SpoutStats, SentenceSpout, SimulatedHostChannel).
    """
    sentences = list(SAMPLE_SENTENCES if sentences is None else sentences)
    spout = SentenceSpout(sentences)
    channel = SimulatedHostChannel(expected=len(sentences), fail_every=fail_every)
    config = SpoutConfig(component_id="sentences", guaranteed=True, receive_timeout=0.1)
    dispatcher = Dispatcher(
        spout,
        channel,
        config=config,
        validator=StreamSchemaValidator({"default": ["sentence"]}),
    )

    channel.command("activate")
    for _ in sentences:
        channel.command("next")
    if not sentences:
        channel.close()

    stats = await dispatcher.run()

    if output_callback is not None:
        for sent in channel.sent:
            output_callback(f"{sent.id} {sent.payload[0]}")
    return stats, spout, channel


def main() -> None:
    """Main entry point for the sentence spout demo."""
    parser = argparse.ArgumentParser(description="Run the sentence spout demo.")
    parser.add_argument("--fail-every", type=int, default=3)
    args = parser.parse_args()

    stats, _, _ = asyncio.run(run_words(fail_every=args.fail_every, output_callback=print))
    print(
        f"\nEmitted {stats.tuples_emitted}, acked {stats.tuples_acked}, "
        f"replayed {stats.tuples_replayed}"
    )


if __name__ == "__main__":
    main()
