"""Core components for the stormspout runtime.

Types:
    Spout: Abstract base class for tuple sources.
    Dispatcher: Command loop driving a spout from a channel.
    SpoutConfig: Validated spout settings.
    SpoutStats: Counters from a Dispatcher run.
    OutboundTuple: Immutable tuple handed to the channel.
    TaskIdsMessage, CommandMessage: Inbound message variants.

Reliability:
    EmissionGate: Validates, sends and tracks emissions.
    IdGenerator: Delivery id source with injectable randomness.
    ActivationState: Enabled/disabled gate for processing commands.

Validation:
    OutputValidator: Protocol for output schema checks.
    AcceptAllValidator, StreamSchemaValidator: Provided validators.
"""

from stormspout.core.activation import ActivationState
from stormspout.core.config import SpoutConfig
from stormspout.core.dispatcher import Dispatcher, run_spout
from stormspout.core.emitter import EmissionGate, IdGenerator
from stormspout.core.messages import CommandMessage, TaskIdsMessage, parse_inbound
from stormspout.core.spout import Spout, SpoutNotBoundError
from stormspout.core.stats import SpoutStats
from stormspout.core.tuple import OutboundTuple, VerificationResult
from stormspout.core.validation import (
    AcceptAllValidator,
    OutputValidator,
    StreamSchemaValidator,
)

__all__ = [
    "Spout",
    "SpoutNotBoundError",
    "Dispatcher",
    "run_spout",
    "SpoutConfig",
    "SpoutStats",
    "OutboundTuple",
    "VerificationResult",
    "TaskIdsMessage",
    "CommandMessage",
    "parse_inbound",
    "EmissionGate",
    "IdGenerator",
    "ActivationState",
    "OutputValidator",
    "AcceptAllValidator",
    "StreamSchemaValidator",
]
