from __future__ import annotations

from ..logger import logger
from ..speaker_state import create_speaker_state
from .base import SegmentationState


def run(state: SegmentationState) -> None:
    state.speaker_state = create_speaker_state(state.speaker_hints, state.options)

    word_count = len(state.words)
    inert = sum(
        1 for index in state.speaker_state.assignment_by_word_index if not 0 <= index < word_count
    )
    if inert:
        logger.debug("%d speaker hint position(s) fall outside %d words", inert, word_count)


__all__ = ["run"]
