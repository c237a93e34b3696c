"""
Windower — Splits a PCM buffer into fixed-size overlapping chunks.

Chunk i starts at i * (window - overlap) seconds and spans `window`
seconds, clipped to the end of the buffer. The chunk that reaches the
end of the buffer is always the last one.
"""

import logging
import numpy as np
from dataclasses import dataclass
from typing import List

from .errors import ConfigError

logger = logging.getLogger(__name__)

SAMPLE_RATE = 16000


@dataclass
class Chunk:
    """A slice of the recording plus the time at which it begins."""
    index: int
    offset_sec: float
    audio_data: np.ndarray  # View into the caller's buffer, not a copy
    sample_rate: int = SAMPLE_RATE

    @property
    def duration(self) -> float:
        return len(self.audio_data) / self.sample_rate

    @property
    def end_sec(self) -> float:
        return self.offset_sec + self.duration

    def __repr__(self):
        return (f"Chunk(#{self.index}, {self.offset_sec:.2f}–"
                f"{self.end_sec:.2f}s)")


def split_pcm(
    pcm: np.ndarray,
    sample_rate: int = SAMPLE_RATE,
    window_sec: float = 60.0,
    overlap_sec: float = 1.0,
) -> List[Chunk]:
    """
    Split PCM samples into overlapping windows.

    Args:
        pcm: 1-D float32 samples.
        sample_rate: Samples per second of `pcm`.
        window_sec: Window length; <= 0 returns the whole buffer as one chunk.
        overlap_sec: Audio shared by consecutive windows.

    Returns:
        Chunks in increasing offset order.

    Raises:
        ConfigError: If the stride (window - overlap) is not positive or
            the overlap is negative.
    """
    if window_sec <= 0:
        return [Chunk(index=0, offset_sec=0.0, audio_data=pcm,
                      sample_rate=sample_rate)]

    if overlap_sec < 0:
        raise ConfigError(f"Overlap must be >= 0, got {overlap_sec}")
    if window_sec <= overlap_sec:
        raise ConfigError(
            f"Window ({window_sec}s) must be greater than overlap ({overlap_sec}s)"
        )

    window = int(round(window_sec * sample_rate))
    stride = int(round((window_sec - overlap_sec) * sample_rate))
    total = len(pcm)

    chunks: List[Chunk] = []
    start = 0
    while start < total:
        end = min(start + window, total)
        chunks.append(Chunk(
            index=len(chunks),
            offset_sec=start / sample_rate,
            audio_data=pcm[start:end],
            sample_rate=sample_rate,
        ))
        if end == total:
            break
        start += stride

    logger.debug(
        f"Split {total / sample_rate:.1f}s audio into {len(chunks)} chunks "
        f"(window={window_sec}s, overlap={overlap_sec}s)"
    )
    return chunks
