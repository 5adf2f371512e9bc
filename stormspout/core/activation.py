"""Activation state machine gating spout processing.

States are Disabled (initial) and Enabled. Only ``activate`` enables the
spout. ``deactivate`` runs the deactivation hook; whether a successful
deactivate actually disables the spout depends on ``deactivate_disables``:

    deactivate_disables=False  hook runs, spout stays Enabled
    deactivate_disables=True   hook runs, spout becomes Disabled

The default keeps the behaviour of the host adapter this runtime is
compatible with, where a deactivated spout keeps receiving ``next``. See
DESIGN.md for the open question.
"""

import logging
from collections.abc import Callable
from typing import Any

from stormspout.core.spout import invoke_hook
from stormspout.core.stats import SpoutStats


class ActivationState:
    """Two-state gate with hook-driven transitions.

    Args:
        component_id: Name used in log records.
        deactivate_disables: Disable the spout after a successful deactivate.
        logger: Logger for hook failures.
        stats: Counters; hook failures are added to ``hook_errors``.
    """

    def __init__(
        self,
        component_id: str = "spout",
        deactivate_disables: bool = False,
        logger: logging.Logger | None = None,
        stats: SpoutStats | None = None,
    ) -> None:
        self.component_id = component_id
        self.deactivate_disables = deactivate_disables
        self._enabled = False
        self._log = logger or logging.getLogger("stormspout.activation")
        self._stats = stats if stats is not None else SpoutStats()

    @property
    def enabled(self) -> bool:
        return self._enabled

    async def activate(self, hook: Callable[[], Any]) -> bool:
        """Run ``hook`` and enable the spout if it succeeds.

        Returns:
            True if the state changed to Enabled.
        """
        if self._enabled:
            return False
        try:
            await invoke_hook(hook)
        except Exception as e:
            self._stats.hook_errors += 1
            self._log.error(
                f"Failed to activate component: {e}",
                exc_info=e,
                extra={"component": self.component_id, "command": "activate"},
            )
            return False
        self._enabled = True
        self._log.info(
            "Component activated",
            extra={"component": self.component_id, "command": "activate"},
        )
        return True

    async def deactivate(self, hook: Callable[[], Any]) -> bool:
        """Run ``hook`` while enabled.

        Returns:
            True if the state changed to Disabled.
        """
        if not self._enabled:
            return False
        try:
            await invoke_hook(hook)
        except Exception as e:
            self._stats.hook_errors += 1
            self._log.error(
                f"Failed to deactivate component: {e}",
                exc_info=e,
                extra={"component": self.component_id, "command": "deactivate"},
            )
            return False
        if not self.deactivate_disables:
            self._log.warning(
                "Deactivate hook completed; component remains enabled",
                extra={"component": self.component_id, "command": "deactivate"},
            )
            return False
        self._enabled = False
        self._log.info(
            "Component deactivated",
            extra={"component": self.component_id, "command": "deactivate"},
        )
        return True
