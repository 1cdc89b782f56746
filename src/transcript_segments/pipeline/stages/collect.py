from __future__ import annotations

from collections.abc import Sequence

from ..config import SegmentBuilderOptions
from ..models import ProtoSegment, ResolvedWordFrame, SegmentKey
from .base import SegmentationState


def _exceeds_gap(
    previous: ResolvedWordFrame, frame: ResolvedWordFrame, max_gap_ms: float | None
) -> bool:
    if max_gap_ms is None:
        return False
    return frame.word.start_ms - previous.word.end_ms > max_gap_ms


def collect_segments(
    frames: Sequence[ResolvedWordFrame],
    options: SegmentBuilderOptions | None = None,
) -> list[ProtoSegment]:
    """Group resolved frames into maximal runs sharing one segment key.

    A run ends when the key changes or, with ``max_gap_ms`` set, when the
    silence since the previous word is longer than the threshold.
    """

    max_gap_ms = options.max_gap_ms if options is not None else None
    segments: list[ProtoSegment] = []
    current: ProtoSegment | None = None

    for frame in frames:
        key = SegmentKey.from_identity(frame.word.channel, frame.identity)
        if (
            current is not None
            and current.key == key
            and not _exceeds_gap(current.words[-1], frame, max_gap_ms)
        ):
            current.words.append(frame)
            continue
        current = ProtoSegment(key=key, words=[frame])
        segments.append(current)

    return segments


def run(state: SegmentationState) -> None:
    state.proto_segments = collect_segments(state.frames, state.options)


__all__ = ["collect_segments", "run"]
