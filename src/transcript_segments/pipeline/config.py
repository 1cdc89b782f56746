"""Configuration defaults and helpers for the segment builder."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import asdict, dataclass
from typing import Any

from ..errors import ConfigurationError
from .models import ChannelProfile

# The remote channel carries exactly one speaker when the call has two people.
TWO_PARTY_SPEAKER_COUNT = 2

DEFAULT_BUILDER_OPTIONS: dict[str, Any] = {
    "max_gap_ms": None,
    "num_speakers": None,
}


def _ensure_numeric_range(
    name: str,
    value: float,
    *,
    ge: float | None = None,
    gt: float | None = None,
) -> None:
    """Validate numeric range constraints for option fields."""

    if ge is not None and value < ge:
        raise ConfigurationError(f"{name} must be >= {ge}", context={name: value})
    if gt is not None and value <= gt:
        raise ConfigurationError(f"{name} must be > {gt}", context={name: value})


@dataclass(slots=True)
class SegmentBuilderOptions:
    """Validated options for :func:`build_segments`.

    ``max_gap_ms`` splits runs of the same speaker key when the silence between
    two consecutive words is longer than the threshold; ``None`` never splits
    on time.  ``num_speakers`` is the number of call participants declared by
    the caller; only the value ``2`` changes behaviour.
    """

    max_gap_ms: float | None = None
    num_speakers: int | None = None

    def __post_init__(self) -> None:
        if self.max_gap_ms is not None:
            if isinstance(self.max_gap_ms, bool) or not isinstance(self.max_gap_ms, (int, float)):
                raise ConfigurationError(
                    "max_gap_ms must be a number", context={"max_gap_ms": repr(self.max_gap_ms)}
                )
            _ensure_numeric_range("max_gap_ms", self.max_gap_ms, ge=0)
        if self.num_speakers is not None:
            if isinstance(self.num_speakers, bool) or not isinstance(self.num_speakers, int):
                raise ConfigurationError(
                    "num_speakers must be an integer",
                    context={"num_speakers": repr(self.num_speakers)},
                )
            _ensure_numeric_range("num_speakers", self.num_speakers, ge=1)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def build_options(
    overrides: Mapping[str, Any] | SegmentBuilderOptions | None = None,
) -> SegmentBuilderOptions:
    """Return builder options merged with ``overrides``.

    ``None`` values keep the default; unknown keys are rejected.
    """

    if isinstance(overrides, SegmentBuilderOptions):
        return overrides
    config = dict(DEFAULT_BUILDER_OPTIONS)
    if overrides:
        unknown = sorted(key for key in overrides if key not in DEFAULT_BUILDER_OPTIONS)
        if unknown:
            raise ConfigurationError(
                f"Unknown builder option(s): {', '.join(unknown)}",
                context={"unknown": unknown},
            )
        for key, value in overrides.items():
            if value is not None:
                config[key] = value
    return SegmentBuilderOptions(**config)


def complete_channels_for(options: SegmentBuilderOptions) -> set[ChannelProfile]:
    """Channels on which the channel alone identifies the speaker."""

    channels = {ChannelProfile.DIRECT_MIC}
    if options.num_speakers == TWO_PARTY_SPEAKER_COUNT:
        channels.add(ChannelProfile.REMOTE_PARTY)
    return channels


__all__ = [
    "DEFAULT_BUILDER_OPTIONS",
    "SegmentBuilderOptions",
    "build_options",
    "complete_channels_for",
]
