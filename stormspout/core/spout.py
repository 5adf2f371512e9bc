"""Spout base class for stormspout sources."""

import inspect
from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING, Any, Awaitable

from stormspout.core.tuple import DEFAULT_STREAM

if TYPE_CHECKING:
    from stormspout.core.activation import ActivationState
    from stormspout.core.emitter import EmissionGate


class SpoutNotBoundError(RuntimeError):
    """Raised when a spout emits before a Dispatcher has bound it."""


class Spout(ABC):
    """Base class for tuple sources.

    Subclasses implement ``next`` and may override the lifecycle hooks. Any
    hook may be a plain method or a coroutine; the dispatcher awaits
    coroutines.

    Hooks are only called from the dispatcher loop. ``next`` and ``sync`` run
    only while the spout is enabled.
    """

    def __init__(self, name: str | None = None) -> None:
        """Initialize the Spout.

        Args:
            name: Optional name for the spout. Defaults to the class name.
        """
        self.name = name or self.__class__.__name__
        self._gate: "EmissionGate | None" = None
        self._activation: "ActivationState | None" = None

    def bind(self, gate: "EmissionGate", activation: "ActivationState") -> None:
        """Attach the emission gate and activation state. Called by Dispatcher."""
        self._gate = gate
        self._activation = activation

    @property
    def is_enabled(self) -> bool:
        return self._activation is not None and self._activation.enabled

    async def emit(
        self,
        payload: Sequence[Any],
        stream: str = DEFAULT_STREAM,
        task: int = 0,
        need_task_ids: bool = False,
    ) -> str | None:
        """Emit a tuple through the bound emission gate.

        Returns:
            The delivery id for a guaranteed emission, else None.

        Raises:
            SpoutNotBoundError: If no Dispatcher has bound this spout.
        """
        if self._gate is None:
            raise SpoutNotBoundError(f"{self.name} is not bound to a dispatcher")
        return await self._gate.emit(
            payload, stream=stream, task=task, need_task_ids=need_task_ids
        )

    @abstractmethod
    def next(self) -> None | Awaitable[None]:
        """Produce zero or more emissions in response to a ``next`` command."""
        ...

    def on_activate(self) -> None | Awaitable[None]:
        """Called before the spout becomes enabled. Raise to stay disabled."""
        return None

    def on_deactivate(self) -> None | Awaitable[None]:
        """Called when a ``deactivate`` command arrives while enabled."""
        return None

    def sync(self) -> None | Awaitable[None]:
        """Called after every command while enabled."""
        return None

    def on_task_ids(self, task_ids: list[int]) -> None | Awaitable[None]:
        """Called with the task ids reported for an emit with ``need_task_ids``."""
        return None


async def invoke_hook(hook: Callable[..., Any], *args: Any) -> None:
    """Call a spout hook, awaiting it if it returned an awaitable."""
    result = hook(*args)
    if inspect.isawaitable(result):
        await result
