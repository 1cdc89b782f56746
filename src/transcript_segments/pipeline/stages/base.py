"""Shared state and definitions for segment builder stages."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from ..config import SegmentBuilderOptions
from ..models import (
    NormalizedWord,
    ProtoSegment,
    ResolvedWordFrame,
    RuntimeSpeakerHint,
    Segment,
    WordLike,
)
from ..speaker_state import SpeakerState


@dataclass
class SegmentationState:
    """Mutable state passed between segment builder stages."""

    final_words: Sequence[WordLike]
    partial_words: Sequence[WordLike]
    speaker_hints: Sequence[RuntimeSpeakerHint] = ()
    options: SegmentBuilderOptions = field(default_factory=SegmentBuilderOptions)
    speaker_state: SpeakerState | None = None
    words: list[NormalizedWord] = field(default_factory=list)
    frames: list[ResolvedWordFrame] = field(default_factory=list)
    proto_segments: list[ProtoSegment] = field(default_factory=list)
    segments: list[Segment] = field(default_factory=list)
    stage_timings_ms: dict[str, float] = field(default_factory=dict)

    def mark(self, stage: str, elapsed_ms: float) -> None:
        self.stage_timings_ms[stage] = self.stage_timings_ms.get(stage, 0.0) + float(elapsed_ms)

    def require_speaker_state(self) -> SpeakerState:
        if self.speaker_state is None:
            raise RuntimeError("speaker_state stage has not run")
        return self.speaker_state


StageRunner = Callable[[SegmentationState], None]


@dataclass(frozen=True)
class StageDefinition:
    name: str
    runner: StageRunner


__all__ = ["SegmentationState", "StageDefinition", "StageRunner"]
