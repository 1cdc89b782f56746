"""Error types for the transcript segment builder.

The segmentation core is total over well-typed input: a hint that points
nowhere simply leaves a speaker unknown.  The exceptions below cover the
remaining failure modes (invalid options, malformed payloads, and words that
do not look like words at all) and carry the stage name plus a serialisable
context payload so that the CLI can report them without a traceback.
"""

from __future__ import annotations

from collections.abc import Mapping, MutableMapping
from dataclasses import dataclass, field
from typing import Any

__all__ = [
    "SegmentationError",
    "StageExecutionError",
    "ConfigurationError",
    "PayloadError",
    "attach_context",
    "coerce_stage_error",
]


@dataclass(slots=True)
class SegmentationError(RuntimeError):
    """Base class for segment builder failures.

    Attributes
    ----------
    message:
        Human readable description of the failure.
    stage:
        Optional stage identifier (``None`` for option and payload issues).
    context:
        JSON serialisable dictionary with granular diagnostics.
    cause:
        Underlying exception (kept for debugging, not included in ``__str__``).
    """

    message: str
    stage: str | None = None
    context: MutableMapping[str, Any] = field(default_factory=dict)
    cause: Exception | None = None

    def __post_init__(self) -> None:
        if self.context is None:
            self.context = {}

    def __str__(self) -> str:
        if self.stage:
            return f"[{self.stage}] {self.message}"
        return self.message


class StageExecutionError(SegmentationError):
    """Error raised when a pipeline stage fails on its input."""


class ConfigurationError(SegmentationError):
    """Raised when builder options fail validation."""


class PayloadError(SegmentationError):
    """Raised when a transcript payload cannot be parsed or validated."""


def attach_context(
    error: SegmentationError,
    context: Mapping[str, Any] | None,
) -> SegmentationError:
    """Merge ``context`` into ``error.context`` preserving existing keys."""

    if not context:
        return error
    for key, value in context.items():
        error.context.setdefault(key, value)
    return error


def coerce_stage_error(
    stage: str,
    message: str,
    *,
    context: Mapping[str, Any] | None = None,
    cause: Exception | None = None,
) -> StageExecutionError:
    """Create :class:`StageExecutionError` with a rich context payload."""

    payload: MutableMapping[str, Any] = {}
    if context:
        payload.update(context)
    if cause:
        payload.setdefault("cause", repr(cause))
    return StageExecutionError(message=message, stage=stage, context=payload, cause=cause)
