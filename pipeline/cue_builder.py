"""
Cue Builder — Turns transcribed segments into display-ready caption cues.

Each segment's text is wrapped word-safely into at most `max_lines` lines
of at most `max_chars` characters. Cues shorter than 0.6s are then folded
into the cue that follows them in one non-cascading pass.
"""

import logging
from dataclasses import dataclass, field, replace
from typing import List, Sequence

from .asr_worker import Segment
from .timing import span_millis, to_millis

logger = logging.getLogger(__name__)

MIN_CUE_DURATION = 0.6


@dataclass
class Cue:
    """A single caption cue ready for VTT/SRT output."""
    index: int
    start_sec: float
    end_sec: float
    lines: List[str] = field(default_factory=list)
    raw_text: str = ""

    @property
    def duration(self) -> float:
        return self.end_sec - self.start_sec

    def __repr__(self):
        return (f"Cue#{self.index}({self.start_sec:.2f}–{self.end_sec:.2f}s, "
                f"'{self.raw_text[:50]}')")


def soft_truncate(text: str, max_chars: int) -> str:
    """
    Cut `text` to `max_chars` at the last space at or before the limit.

    Falls back to a hard character cut when there is no space to break on.
    """
    if len(text) <= max_chars:
        return text
    cut = text.rfind(" ", 0, max_chars + 1)
    if cut > 0:
        return text[:cut].rstrip()
    return text[:max_chars]


def wrap_words(text: str, max_chars: int, max_lines: int) -> List[str]:
    """
    Greedily pack whitespace-delimited words into lines.

    Words are never split across lines. A single word longer than
    `max_chars` gets a line of its own. Once `max_lines - 1` lines are
    complete, every remaining word goes on the final line, which is
    soft-truncated to `max_chars`.

    Returns:
        Between 0 and `max_lines` lines; empty text gives no lines.
    """
    words = text.split()
    if not words:
        return []
    max_lines = max(1, max_lines)

    lines: List[str] = []
    current = ""

    for i, word in enumerate(words):
        if len(lines) == max_lines - 1:
            remainder = " ".join(words[i:])
            if current:
                remainder = f"{current} {remainder}"
            lines.append(soft_truncate(remainder, max_chars))
            return lines

        if not current:
            current = word
        elif len(current) + 1 + len(word) <= max_chars:
            current += " " + word
        else:
            lines.append(current)
            current = word

    if current:
        if len(lines) == max_lines - 1:
            current = soft_truncate(current, max_chars)
        lines.append(current)

    return lines[:max_lines]


def merge_short_cues(
    cues: Sequence[Cue],
    max_chars: int,
    max_lines: int,
    min_duration: float = MIN_CUE_DURATION
) -> List[Cue]:
    """
    Merge every cue shorter than `min_duration` into the cue after it.

    Single pass: a freshly merged cue is not checked again, and the last
    cue is never merged. Indices are reassigned from 1.
    """
    min_ms = to_millis(min_duration)
    merged: List[Cue] = []
    i = 0

    while i < len(cues):
        cue = cues[i]
        if span_millis(cue.start_sec, cue.end_sec) >= min_ms or i == len(cues) - 1:
            merged.append(cue)
            i += 1
            continue

        nxt = cues[i + 1]
        raw = f"{cue.raw_text} {nxt.raw_text}".strip()
        merged.append(Cue(
            index=cue.index,
            start_sec=cue.start_sec,
            end_sec=nxt.end_sec,
            lines=wrap_words(raw, max_chars, max_lines),
            raw_text=raw,
        ))
        logger.debug(f"Merged short cue #{cue.index} into #{nxt.index}")
        i += 2

    return [replace(cue, index=idx) for idx, cue in enumerate(merged, start=1)]


class CueBuilder:
    """
    Builds caption cues from deduplicated segments.

    Rules:
    1. Text is wrapped word-safely to max_chars x max_lines
    2. Segments with no text produce no cue
    3. Cues under 0.6s are merged forward once
    4. Indices are contiguous from 1
    """

    def __init__(self, max_chars: int = 42, max_lines: int = 2):
        self.max_chars = max_chars
        self.max_lines = max_lines

    def build(self, segments: Sequence[Segment]) -> List[Cue]:
        """
        Convert segments into cues.

        Args:
            segments: Time-ordered segments in global time.

        Returns:
            Ordered list of Cue objects indexed from 1.
        """
        cues: List[Cue] = []

        for seg in segments:
            lines = wrap_words(seg.text, self.max_chars, self.max_lines)
            if not lines:
                continue
            cues.append(Cue(
                index=len(cues) + 1,
                start_sec=seg.start_sec,
                end_sec=seg.end_sec,
                lines=lines,
                raw_text=seg.text,
            ))

        result = merge_short_cues(cues, self.max_chars, self.max_lines)

        logger.info(
            f"Built {len(result)} cues from {len(segments)} segments "
            f"({len(cues) - len(result)} short cues merged)"
        )
        return result
