from __future__ import annotations

import time
from collections.abc import Mapping, Sequence
from typing import Any

from ..errors import SegmentationError, attach_context, coerce_stage_error
from .config import SegmentBuilderOptions, build_options
from .logger import logger
from .models import RuntimeSpeakerHint, Segment, WordLike
from .stages import PIPELINE_STAGES, SegmentationState, StageDefinition


def run_stages(
    state: SegmentationState,
    stages: Sequence[StageDefinition] = PIPELINE_STAGES,
) -> SegmentationState:
    """Run ``stages`` over ``state`` in order, recording per-stage timings."""

    for stage in stages:
        start = time.perf_counter()
        try:
            stage.runner(state)
        except SegmentationError as exc:
            if exc.stage is None:
                exc.stage = stage.name
            raise attach_context(exc, {"words": len(state.words)})
        except (AttributeError, TypeError, ValueError, KeyError) as exc:
            raise coerce_stage_error(
                stage.name,
                f"{type(exc).__name__}: {exc}",
                context={"words": len(state.words), "segments": len(state.proto_segments)},
                cause=exc,
            ) from exc
        elapsed_ms = (time.perf_counter() - start) * 1000.0
        state.mark(stage.name, elapsed_ms)
        logger.debug("[%s] ok in %.3f ms", stage.name, elapsed_ms)
    return state


def build_segments(
    final_words: Sequence[WordLike],
    partial_words: Sequence[WordLike],
    speaker_hints: Sequence[RuntimeSpeakerHint] = (),
    options: SegmentBuilderOptions | Mapping[str, Any] | None = None,
) -> list[Segment]:
    """Build speaker-attributed segments from the current word set.

    Not incremental: callers pass the complete final/partial word lists and
    hints every time.  ``RuntimeSpeakerHint.word_index`` addresses the merged,
    ``start_ms``-sorted sequence (finals first on ties), not either input list.
    """

    if not final_words and not partial_words:
        return []

    state = SegmentationState(
        final_words=final_words,
        partial_words=partial_words,
        speaker_hints=tuple(speaker_hints),
        options=build_options(options),
    )
    run_stages(state)
    logger.debug(
        "built %d segment(s) from %d final and %d partial word(s)",
        len(state.segments),
        len(final_words),
        len(partial_words),
    )
    return state.segments


__all__ = ["build_segments", "run_stages"]
