"""Spout configuration."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_TIMEOUT_SECONDS = 30


class SpoutConfig(BaseModel):
    """Validated, immutable spout settings.

    Attributes:
        component_id: Name used in log records.
        timeout_seconds: Sliding expiration window for pending tuples.
        guaranteed: Assign delivery ids and track emissions until ack/fail.
        receive_timeout: Seconds the dispatcher waits on the channel before
            re-checking its stop flag.
        sweep_interval: Seconds between background sweeps of expired pending
            tuples. None disables the sweeper; expiry is then checked on access.
        deactivate_disables: Move to the disabled state after a successful
            deactivate. Off by default, see DESIGN.md.
    """

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    component_id: str = Field(default="spout", min_length=1)
    timeout_seconds: int = Field(
        default=DEFAULT_TIMEOUT_SECONDS, gt=0, alias="timeoutSeconds"
    )
    guaranteed: bool = Field(default=False, alias="guaranteedDelivery")
    receive_timeout: float = Field(default=1.0, gt=0)
    sweep_interval: float | None = Field(default=None, gt=0)
    deactivate_disables: bool = False

    @classmethod
    def from_mapping(cls, data: dict[str, Any]) -> "SpoutConfig":
        """Build a config from host-style settings.

        Accepts both the field names and the ``timeoutSeconds`` /
        ``guaranteedDelivery`` keys used by topology configuration files.
        """
        return cls.model_validate(data)
