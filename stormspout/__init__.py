"""stormspout - Async reliability and control-command runtime for stream spouts."""

from stormspout.channels import Channel, ChannelClosedError, InMemoryChannel
from stormspout.core import (
    AcceptAllValidator,
    CommandMessage,
    Dispatcher,
    OutboundTuple,
    Spout,
    SpoutConfig,
    SpoutNotBoundError,
    SpoutStats,
    StreamSchemaValidator,
    TaskIdsMessage,
    VerificationResult,
    run_spout,
)
from stormspout.pending import PendingStore, PendingTupleCache

__version__ = "0.1.0"

__all__ = [
    # Core
    "Spout",
    "Dispatcher",
    "run_spout",
    "SpoutConfig",
    "SpoutStats",
    # Messages
    "OutboundTuple",
    "TaskIdsMessage",
    "CommandMessage",
    # Validation
    "VerificationResult",
    "AcceptAllValidator",
    "StreamSchemaValidator",
    # Errors
    "SpoutNotBoundError",
    "ChannelClosedError",
    # Channels
    "Channel",
    "InMemoryChannel",
    # Pending stores
    "PendingStore",
    "PendingTupleCache",
    # Meta
    "__version__",
]
