"""Shared test doubles for stormspout tests."""

import logging
from collections import deque

from stormspout.core.spout import Spout


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class LogCapture(logging.Handler):
    """Custom handler to capture log records for testing."""

    def __init__(self):
        super().__init__()
        self.records: list[logging.LogRecord] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)

    def clear(self) -> None:
        self.records.clear()

    def at(self, level: int) -> list[logging.LogRecord]:
        return [r for r in self.records if r.levelno == level]


class RecordingSpout(Spout):
    """Spout that emits queued payloads, one per ``next``, and counts hook calls."""

    def __init__(
        self,
        payloads: list[list] | None = None,
        stream: str = "default",
        fail_activate: bool = False,
        fail_deactivate: bool = False,
        fail_next: bool = False,
        name: str | None = None,
    ) -> None:
        super().__init__(name=name)
        self.payloads = deque(payloads or [])
        self.stream = stream
        self.fail_activate = fail_activate
        self.fail_deactivate = fail_deactivate
        self.fail_next = fail_next
        self.next_calls = 0
        self.sync_calls = 0
        self.activations = 0
        self.deactivations = 0
        self.task_ids: list[list[int]] = []
        self.emitted_ids: list[str | None] = []

    async def next(self) -> None:
        self.next_calls += 1
        if self.fail_next:
            raise RuntimeError("next exploded")
        if self.payloads:
            self.emitted_ids.append(await self.emit(self.payloads.popleft(), stream=self.stream))

    def on_activate(self) -> None:
        self.activations += 1
        if self.fail_activate:
            raise RuntimeError("activate exploded")

    def on_deactivate(self) -> None:
        self.deactivations += 1
        if self.fail_deactivate:
            raise RuntimeError("deactivate exploded")

    def sync(self) -> None:
        self.sync_calls += 1

    def on_task_ids(self, task_ids: list[int]) -> None:
        self.task_ids.append(task_ids)
