"""Merge final and partial words into one time-ordered sequence."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import replace

from ..models import ChannelProfile, NormalizedWord, WordLike
from .base import SegmentationState


def _word_id(word: WordLike) -> str | None:
    value = getattr(word, "id", None)
    if isinstance(value, str) and value:
        return value
    return None


def _tag(word: WordLike, is_final: bool) -> NormalizedWord:
    return NormalizedWord(
        text=word.text,
        start_ms=word.start_ms,
        end_ms=word.end_ms,
        channel=ChannelProfile(word.channel),
        is_final=is_final,
        id=_word_id(word),
    )


def normalize_words(
    final_words: Iterable[WordLike],
    partial_words: Iterable[WordLike],
) -> list[NormalizedWord]:
    """Return finals and partials as one sequence sorted by ``start_ms``.

    Finals are placed ahead of partials before the (stable) sort, so a final
    word wins a timestamp tie.  ``order`` is the index after sorting.
    """

    combined = [_tag(word, True) for word in final_words]
    combined.extend(_tag(word, False) for word in partial_words)
    combined.sort(key=lambda word: word.start_ms)
    return [replace(word, order=order) for order, word in enumerate(combined)]


def run(state: SegmentationState) -> None:
    state.words = normalize_words(state.final_words, state.partial_words)


__all__ = ["normalize_words", "run"]
