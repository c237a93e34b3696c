"""
Overlap Deduplicator — Drops boundary segments transcribed twice.

Consecutive chunks share `overlap_sec` of audio, so the tail of one chunk
and the head of the next can both yield the same phrase. A segment is
treated as such a duplicate when its trimmed text exactly matches the
last kept segment and the two start within `overlap_sec + 0.2` seconds.

This is a text-equality heuristic: paraphrased boundary text slips
through, and a short phrase genuinely repeated within the tolerance is
collapsed.
"""

import logging
from typing import List, Sequence

from .asr_worker import Segment
from .timing import span_millis, to_millis

logger = logging.getLogger(__name__)

# Extra slack for timestamp drift at chunk boundaries
DRIFT_TOLERANCE_SEC = 0.2


def dedupe_overlap(segments: Sequence[Segment], overlap_sec: float) -> List[Segment]:
    """
    Remove overlap duplicates in a single left-to-right pass.

    Args:
        segments: Global, time-ordered segments.
        overlap_sec: Overlap used when chunking.

    Returns:
        Retained segments in their original order.
    """
    if len(segments) < 2:
        return list(segments)

    tolerance_ms = to_millis(overlap_sec) + to_millis(DRIFT_TOLERANCE_SEC)
    kept = [segments[0]]

    for seg in segments[1:]:
        last = kept[-1]
        if (seg.text.strip() == last.text.strip() and
                abs(span_millis(last.start_sec, seg.start_sec)) < tolerance_ms):
            logger.debug(f"Dropped overlap duplicate: {seg!r} (kept {last!r})")
            continue
        kept.append(seg)

    dropped = len(segments) - len(kept)
    if dropped:
        logger.info(f"Removed {dropped} overlap duplicate segment(s)")
    return kept
