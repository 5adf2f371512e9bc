"""Runtime counters for a dispatcher run."""

from dataclasses import dataclass, replace


@dataclass
class SpoutStats:
    """Statistics from a Dispatcher run."""

    commands_processed: int = 0
    task_id_messages: int = 0
    ignored_commands: int = 0
    tuples_emitted: int = 0
    tuples_acked: int = 0
    tuples_replayed: int = 0
    validation_errors: int = 0
    unknown_ids: int = 0
    hook_errors: int = 0
    expired_swept: int = 0

    def snapshot(self) -> "SpoutStats":
        return replace(self)
