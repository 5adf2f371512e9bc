"""Output validators checked before every emission."""

from collections.abc import Mapping, Sequence
from typing import Any, Protocol

from stormspout.core.tuple import VerificationResult


class OutputValidator(Protocol):
    """Checks a candidate payload against the declared output schema."""

    def verify(self, stream: str, payload: Sequence[Any]) -> VerificationResult: ...


class AcceptAllValidator:
    """Validator used when no output schema is declared."""

    def verify(self, stream: str, payload: Sequence[Any]) -> VerificationResult:
        return VerificationResult()


class StreamSchemaValidator:
    """Validates payloads against declared stream fields.

    A payload is valid when its stream is declared and it carries exactly one
    value per declared field.

    Args:
        streams: Mapping of stream name to its ordered field names.
    """

    def __init__(self, streams: Mapping[str, Sequence[str]]) -> None:
        for name, fields in streams.items():
            if isinstance(fields, str):
                raise TypeError(
                    f"fields for stream {name!r} must be a sequence of names, got a string"
                )
        self.streams: dict[str, tuple[str, ...]] = {
            name: tuple(fields) for name, fields in streams.items()
        }

    def verify(self, stream: str, payload: Sequence[Any]) -> VerificationResult:
        fields = self.streams.get(stream)
        if fields is None:
            return VerificationResult(
                is_error=True, description=f"Stream {stream!r} is not declared"
            )
        if len(payload) != len(fields):
            return VerificationResult(
                is_error=True,
                description=(
                    f"Stream {stream!r} expects {len(fields)} values "
                    f"{list(fields)}, got {len(payload)}"
                ),
            )
        return VerificationResult()
