"""Translate persisted, word-id keyed speaker hints into runtime hints.

Stored hints reference a word by its stable id.  The builder addresses words
by their position in the merged, time-sorted sequence, so the translation has
to normalize the same word lists the builder will see.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from ..pipeline.logger import logger
from ..pipeline.models import (
    ProviderSpeakerIndex,
    RuntimeSpeakerHint,
    SpeakerHintData,
    UserSpeakerAssignment,
    WordLike,
)
from ..pipeline.stages.normalize import normalize_words

PROVIDER_SPEAKER_INDEX = "provider_speaker_index"
USER_SPEAKER_ASSIGNMENT = "user_speaker_assignment"


@dataclass(frozen=True)
class StoredSpeakerHint:
    word_id: str
    type: str
    value: Mapping[str, Any] = field(default_factory=dict)


def _optional_int(value: Any) -> int | None:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"expected integer, got {type(value).__name__}")
    return value


def hint_data_from_stored(hint: StoredSpeakerHint) -> SpeakerHintData | None:
    """Decode the ``value`` blob of a stored hint; ``None`` when unusable."""

    value = hint.value or {}
    try:
        if hint.type == PROVIDER_SPEAKER_INDEX:
            speaker_index = _optional_int(value.get("speaker_index"))
            if speaker_index is None:
                return None
            provider = value.get("provider")
            return ProviderSpeakerIndex(
                speaker_index=speaker_index,
                provider=provider if isinstance(provider, str) else None,
                channel=_optional_int(value.get("channel")),
            )
        if hint.type == USER_SPEAKER_ASSIGNMENT:
            human_id = value.get("human_id")
            if not isinstance(human_id, str) or not human_id:
                return None
            return UserSpeakerAssignment(human_id=human_id)
    except TypeError as exc:
        logger.debug("ignoring malformed %s hint for word %s: %s", hint.type, hint.word_id, exc)
        return None
    return None


def runtime_hints_from_stored(
    final_words: Sequence[WordLike],
    partial_words: Sequence[WordLike],
    stored_hints: Iterable[StoredSpeakerHint],
) -> list[RuntimeSpeakerHint]:
    order_by_id: dict[str, int] = {}
    for word in normalize_words(final_words, partial_words):
        if word.id is not None:
            order_by_id.setdefault(word.id, word.order)

    hints: list[RuntimeSpeakerHint] = []
    skipped = 0
    for stored in stored_hints:
        order = order_by_id.get(stored.word_id)
        data = hint_data_from_stored(stored)
        if order is None or data is None:
            skipped += 1
            continue
        hints.append(RuntimeSpeakerHint(word_index=order, data=data))

    if skipped:
        logger.debug("skipped %d stored speaker hint(s) without a usable word or value", skipped)
    return hints


__all__ = [
    "PROVIDER_SPEAKER_INDEX",
    "USER_SPEAKER_ASSIGNMENT",
    "StoredSpeakerHint",
    "hint_data_from_stored",
    "runtime_hints_from_stored",
]
