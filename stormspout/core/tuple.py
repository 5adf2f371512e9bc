"""Outbound tuple model for stormspout."""

from typing import Any

from pydantic import BaseModel, Field

DEFAULT_STREAM = "default"


class OutboundTuple(BaseModel):
    """Immutable tuple as handed to the channel.

    Attributes:
        id: Delivery id, present only when guaranteed delivery is enabled.
        task: Target task id for direct emits, 0 otherwise.
        stream: Output stream name.
        payload: Ordered values of the tuple.
        need_task_ids: Whether the host should reply with the receiving task ids.
    """

    id: str | None = None
    task: int = 0
    stream: str = DEFAULT_STREAM
    payload: list[Any] = Field(default_factory=list)
    need_task_ids: bool = False

    model_config = {
        "extra": "forbid",
        "frozen": True,
    }

    @property
    def guaranteed(self) -> bool:
        return self.id is not None


class VerificationResult(BaseModel):
    """Outcome of checking a payload against the declared output schema."""

    is_error: bool = False
    description: str = ""

    model_config = {"frozen": True}

    def __str__(self) -> str:
        return self.description or ("invalid output" if self.is_error else "ok")
