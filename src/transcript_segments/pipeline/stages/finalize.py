from __future__ import annotations

from collections.abc import Iterable

from ..models import ProtoSegment, Segment
from .base import SegmentationState


def finalize_segments(segments: Iterable[ProtoSegment]) -> list[Segment]:
    return [
        Segment(
            key=segment.key,
            words=tuple(frame.word.to_segment_word() for frame in segment.words),
        )
        for segment in segments
    ]


def run(state: SegmentationState) -> None:
    state.segments = finalize_segments(state.proto_segments)


__all__ = ["finalize_segments", "run"]
