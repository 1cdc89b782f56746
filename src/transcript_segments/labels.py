"""Display labels for segment keys.

Segments whose speaker is not a known person get a stable "Speaker N"
number, assigned in the order their keys are first seen.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Protocol

from .pipeline.models import ChannelProfile, Segment, SegmentKey

SELF_FALLBACK_LABEL = "You"

_CHANNEL_LETTERS = {
    ChannelProfile.DIRECT_MIC: "A",
    ChannelProfile.REMOTE_PARTY: "B",
    ChannelProfile.MIXED_CAPTURE: "C",
}


class RenderLabelContext(Protocol):
    def get_self_human_id(self) -> str | None: ...

    def get_human_name(self, human_id: str) -> str | None: ...


@dataclass(frozen=True)
class StaticLabelContext:
    """Label context backed by a fixed id -> name mapping."""

    self_human_id: str | None = None
    names: Mapping[str, str] = field(default_factory=dict)

    def get_self_human_id(self) -> str | None:
        return self.self_human_id

    def get_human_name(self, human_id: str) -> str | None:
        return self.names.get(human_id)


def is_known_speaker(key: SegmentKey, ctx: RenderLabelContext | None = None) -> bool:
    if key.speaker_human_id:
        return True
    if ctx is not None and key.channel == ChannelProfile.DIRECT_MIC:
        return bool(ctx.get_self_human_id())
    return False


class SpeakerLabelManager:
    def __init__(self) -> None:
        self._unknown_speakers: dict[str, int] = {}
        self._next_index = 1

    def get_unknown_speaker_number(self, key: SegmentKey) -> int:
        serialized = key.serialize()
        existing = self._unknown_speakers.get(serialized)
        if existing is not None:
            return existing
        number = self._next_index
        self._unknown_speakers[serialized] = number
        self._next_index += 1
        return number

    @classmethod
    def from_segments(
        cls, segments: Iterable[Segment], ctx: RenderLabelContext | None = None
    ) -> SpeakerLabelManager:
        manager = cls()
        for segment in segments:
            if not is_known_speaker(segment.key, ctx):
                manager.get_unknown_speaker_number(segment.key)
        return manager


def render_label(
    key: SegmentKey,
    ctx: RenderLabelContext | None = None,
    manager: SpeakerLabelManager | None = None,
) -> str:
    if ctx is not None and key.speaker_human_id:
        name = ctx.get_human_name(key.speaker_human_id)
        if name:
            return name

    if ctx is not None and key.channel == ChannelProfile.DIRECT_MIC:
        self_human_id = ctx.get_self_human_id()
        if self_human_id:
            return ctx.get_human_name(self_human_id) or SELF_FALLBACK_LABEL

    if manager is not None:
        return f"Speaker {manager.get_unknown_speaker_number(key)}"

    if key.speaker_index is not None:
        return f"Speaker {key.speaker_index + 1}"
    return f"Speaker {_CHANNEL_LETTERS[ChannelProfile(key.channel)]}"


__all__ = [
    "RenderLabelContext",
    "SELF_FALLBACK_LABEL",
    "SpeakerLabelManager",
    "StaticLabelContext",
    "is_known_speaker",
    "render_label",
]
