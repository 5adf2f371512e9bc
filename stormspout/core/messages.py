"""Inbound control messages received by a spout.

The host sends exactly one of two message kinds: a list of downstream task
ids (the reply to an emit with ``need_task_ids``) or a named command.
"""

from typing import Annotated, Literal

from pydantic import BaseModel, Field, TypeAdapter

# Command names understood by the dispatcher
NEXT = "next"
ACK = "ack"
FAIL = "fail"
ACTIVATE = "activate"
DEACTIVATE = "deactivate"

COMMANDS: frozenset[str] = frozenset({NEXT, ACK, FAIL, ACTIVATE, DEACTIVATE})


class TaskIdsMessage(BaseModel):
    """Downstream task ids that received the last emitted tuple."""

    kind: Literal["task_ids"] = "task_ids"
    task_ids: list[int] = Field(default_factory=list)

    model_config = {
        "extra": "forbid",
        "frozen": True,
    }


class CommandMessage(BaseModel):
    """A control command; ``id`` is set for ``ack`` and ``fail``."""

    kind: Literal["command"] = "command"
    command: str
    id: str | None = None

    model_config = {
        "extra": "forbid",
        "frozen": True,
    }

    @property
    def is_known(self) -> bool:
        return self.command in COMMANDS


InboundMessage = Annotated[TaskIdsMessage | CommandMessage, Field(discriminator="kind")]

_inbound_adapter: TypeAdapter[TaskIdsMessage | CommandMessage] = TypeAdapter(InboundMessage)


def parse_inbound(data: dict) -> TaskIdsMessage | CommandMessage:
    """Validate an already-decoded mapping into an inbound message.

    Raises:
        pydantic.ValidationError: If ``kind`` is missing or the fields do not
            match the selected variant.
    """
    return _inbound_adapter.validate_python(data)
