from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Any

from .labels import RenderLabelContext, SpeakerLabelManager, render_label
from .pipeline.models import Segment

EMPTY_TRANSCRIPT_LINE = "No speech segments."


def _format_ms(milliseconds: Any) -> str:
    """Return ``MM:SS.mmm`` (``H:MM:SS.mmm`` past the hour) for ``milliseconds``."""

    try:
        safe_ms = max(0, int(milliseconds))
    except (TypeError, ValueError):
        return "--:--.---"
    seconds, fractional_ms = divmod(safe_ms, 1000)
    hours, remainder = divmod(seconds, 3600)
    minutes, secs = divmod(remainder, 60)
    if hours:
        return f"{hours:d}:{minutes:02d}:{secs:02d}.{fractional_ms:03d}"
    return f"{minutes:02d}:{secs:02d}.{fractional_ms:03d}"


def segments_to_dicts(
    segments: Sequence[Segment], ctx: RenderLabelContext | None = None
) -> list[dict[str, Any]]:
    """JSON-safe rendering of ``segments`` with a display label per segment."""

    manager = SpeakerLabelManager.from_segments(segments, ctx)
    rows: list[dict[str, Any]] = []
    for segment in segments:
        row = segment.to_dict()
        row["label"] = render_label(segment.key, ctx, manager)
        rows.append(row)
    return rows


def render_human_transcript(
    segments: Sequence[Segment], ctx: RenderLabelContext | None = None
) -> str:
    if not segments:
        return EMPTY_TRANSCRIPT_LINE + "\n"

    manager = SpeakerLabelManager.from_segments(segments, ctx)
    lines: list[str] = []
    for segment in segments:
        start = _format_ms(segment.start_ms)
        end = _format_ms(segment.end_ms)
        lines.append(f"[{start} - {end}] {render_label(segment.key, ctx, manager)}")
        lines.append(f"  Text: {segment.text or '(no speech recognized)'}")
        lines.append("")
    return "\n".join(lines).strip() + "\n"


def write_human_transcript(
    path: Path, segments: Sequence[Segment], ctx: RenderLabelContext | None = None
) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_human_transcript(segments, ctx), encoding="utf-8")


def build_speaker_rollup(
    segments: Sequence[Segment], ctx: RenderLabelContext | None = None
) -> list[dict[str, Any]]:
    """One row per distinct segment key, in order of first appearance."""

    manager = SpeakerLabelManager.from_segments(segments, ctx)
    rows: dict[str, dict[str, Any]] = {}
    for segment in segments:
        serialized = segment.key.serialize()
        row = rows.get(serialized)
        if row is None:
            row = {
                "key": segment.key.to_dict(),
                "label": render_label(segment.key, ctx, manager),
                "segments": 0,
                "words": 0,
                "speaking_ms": 0,
            }
            rows[serialized] = row
        row["segments"] += 1
        row["words"] += len(segment.words)
        row["speaking_ms"] += sum(
            max(0, word.end_ms - word.start_ms) for word in segment.words
        )
    return list(rows.values())


__all__ = [
    "EMPTY_TRANSCRIPT_LINE",
    "build_speaker_rollup",
    "render_human_transcript",
    "segments_to_dicts",
    "write_human_transcript",
]
