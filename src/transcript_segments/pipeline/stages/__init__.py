"""Stage registry for the segment builder."""

from __future__ import annotations

from . import collect, finalize, normalize, propagate, resolve, speaker_state
from .base import SegmentationState, StageDefinition

PIPELINE_STAGES: list[StageDefinition] = [
    StageDefinition("normalize", normalize.run),
    StageDefinition("speaker_state", speaker_state.run),
    StageDefinition("resolve_identities", resolve.run),
    StageDefinition("collect_segments", collect.run),
    StageDefinition("propagate_identity", propagate.run),
    StageDefinition("finalize", finalize.run),
]

__all__ = ["PIPELINE_STAGES", "SegmentationState", "StageDefinition"]
