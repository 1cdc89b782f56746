"""Backfill complete-channel owners and compact adjacent known speakers."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import replace

from ..config import SegmentBuilderOptions
from ..models import ProtoSegment
from ..speaker_state import SpeakerState
from .base import SegmentationState


def assign_complete_channel_human_id(segment: ProtoSegment, state: SpeakerState) -> None:
    """Stamp the channel owner onto ``segment`` if it was learned anywhere in the stream."""

    if segment.key.speaker_human_id is not None:
        return
    channel = segment.key.channel
    if not state.is_complete_channel(channel):
        return
    human_id = state.human_id_by_channel.get(channel)
    if not human_id:
        return
    segment.key = replace(segment.key, speaker_human_id=human_id)


def _within_gap(previous: ProtoSegment, segment: ProtoSegment, max_gap_ms: float | None) -> bool:
    if max_gap_ms is None:
        return True
    return segment.words[0].word.start_ms - previous.words[-1].word.end_ms <= max_gap_ms


def propagate_identity(
    segments: Sequence[ProtoSegment],
    state: SpeakerState,
    options: SegmentBuilderOptions | None = None,
) -> list[ProtoSegment]:
    """Return ``segments`` with backfilled keys and known-speaker runs fused.

    A segment is fused into the previous kept one when both keys are equal and
    carry a speaker identity; runs split on silence by the collector stay split.
    """

    max_gap_ms = options.max_gap_ms if options is not None else None
    kept: list[ProtoSegment] = []

    for segment in segments:
        assign_complete_channel_human_id(segment, state)

        last_kept = kept[-1] if kept else None
        # Runs without any speaker identity are never fused.
        if (
            last_kept is not None
            and last_kept.key == segment.key
            and segment.key.has_speaker_identity
            and _within_gap(last_kept, segment, max_gap_ms)
        ):
            last_kept.words.extend(segment.words)
            continue

        kept.append(segment)

    return kept


def run(state: SegmentationState) -> None:
    state.proto_segments = propagate_identity(
        state.proto_segments, state.require_speaker_state(), state.options
    )


__all__ = ["assign_complete_channel_human_id", "propagate_identity", "run"]
