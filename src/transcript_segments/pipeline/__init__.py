from __future__ import annotations

from .builder import build_segments, run_stages
from .config import DEFAULT_BUILDER_OPTIONS, SegmentBuilderOptions, build_options
from .models import (
    ChannelProfile,
    NormalizedWord,
    ProtoSegment,
    ProviderSpeakerIndex,
    ResolvedWordFrame,
    RuntimeSpeakerHint,
    Segment,
    SegmentKey,
    SegmentWord,
    SpeakerIdentity,
    UserSpeakerAssignment,
    Word,
    WordLike,
)
from .speaker_state import SpeakerState, create_speaker_state

__all__ = [
    "DEFAULT_BUILDER_OPTIONS",
    "ChannelProfile",
    "NormalizedWord",
    "ProtoSegment",
    "ProviderSpeakerIndex",
    "ResolvedWordFrame",
    "RuntimeSpeakerHint",
    "Segment",
    "SegmentBuilderOptions",
    "SegmentKey",
    "SegmentWord",
    "SpeakerIdentity",
    "SpeakerState",
    "UserSpeakerAssignment",
    "Word",
    "WordLike",
    "build_options",
    "build_segments",
    "create_speaker_state",
    "run_stages",
]
