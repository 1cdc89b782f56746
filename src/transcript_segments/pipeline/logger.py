from __future__ import annotations

import logging

logger = logging.getLogger("transcript_segments.pipeline")
if not logger.handlers:
    handler = logging.StreamHandler()
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
    logger.addHandler(handler)
logger.setLevel(logging.INFO)


def set_verbose(enabled: bool) -> None:
    logger.setLevel(logging.DEBUG if enabled else logging.INFO)


__all__ = ["logger", "set_verbose"]
