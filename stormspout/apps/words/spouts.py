"""SentenceSpout: emits one sentence per ``next`` command."""

from collections import deque
from collections.abc import Iterable

from stormspout.core.spout import Spout


class SentenceSpout(Spout):
    """Emits sentences in order, one per ``next``, until exhausted.

    Records the delivery ids it was given and the task ids reported back by
    the host, which the demo prints at the end.
    """

    def __init__(self, sentences: Iterable[str], name: str | None = None) -> None:
        super().__init__(name=name)
        self._sentences: deque[str] = deque(sentences)
        self.emitted_ids: list[str] = []
        self.task_ids: list[list[int]] = []
        self.activations = 0
        self.syncs = 0

    @property
    def exhausted(self) -> bool:
        return not self._sentences

    def on_activate(self) -> None:
        self.activations += 1

    async def next(self) -> None:
        if not self._sentences:
            return
        tuple_id = await self.emit([self._sentences.popleft()], need_task_ids=True)
        if tuple_id is not None:
            self.emitted_ids.append(tuple_id)

    def sync(self) -> None:
        self.syncs += 1

    def on_task_ids(self, task_ids: list[int]) -> None:
        self.task_ids.append(task_ids)
