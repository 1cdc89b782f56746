from __future__ import annotations

from .hint_adapter import StoredSpeakerHint, runtime_hints_from_stored
from .payload import TranscriptFrame, load_transcript_frame, parse_transcript_frame

__all__ = [
    "StoredSpeakerHint",
    "TranscriptFrame",
    "load_transcript_frame",
    "parse_transcript_frame",
    "runtime_hints_from_stored",
]
