"""
Chunk Transcriber — Feeds chunks to the ASR engine in order and re-bases
their timestamps onto the global timeline.

Chunks are processed strictly sequentially. The engine is a single
session and later stages rely on time-ordered output. A failure on any
chunk aborts the run; there is no retry and no gap-filling.
"""

import logging
import numpy as np
from typing import Callable, List, Optional, Sequence

from .asr_worker import Segment
from .errors import CaptionError, InferenceError
from .windower import Chunk

logger = logging.getLogger(__name__)

# (chunk_index, total_chunks) -> None
ChunkCallback = Optional[Callable[[int, int], None]]


class ChunkTranscriber:
    """
    Drives an ASR engine over a sequence of chunks.

    The engine is any object with `infer(audio) -> List[Segment]`
    returning chunk-local segments.
    """

    def __init__(self, engine):
        self.engine = engine

    def transcribe(self, audio_data: np.ndarray) -> List[Segment]:
        """Transcribe one buffer, trimming text and dropping empty segments."""
        results = []
        for seg in self.engine.infer(audio_data):
            text = seg.text.strip()
            if not text:
                continue
            results.append(Segment(seg.start_sec, seg.end_sec, text))
        return results

    def transcribe_chunks(
        self,
        chunks: Sequence[Chunk],
        on_chunk: ChunkCallback = None
    ) -> List[Segment]:
        """
        Transcribe every chunk and concatenate the re-based segments.

        Raises:
            InferenceError: Carrying the index of the chunk that failed.
        """
        all_segments: List[Segment] = []
        total = len(chunks)

        for chunk in chunks:
            try:
                local = self.transcribe(chunk.audio_data)
            except CaptionError:
                raise
            except Exception as e:
                logger.error(
                    f"ASR error on chunk {chunk.index} "
                    f"(offset {chunk.offset_sec:.1f}s): {e}"
                )
                raise InferenceError(chunk.index, e) from e

            for seg in local:
                all_segments.append(Segment(
                    start_sec=seg.start_sec + chunk.offset_sec,
                    end_sec=seg.end_sec + chunk.offset_sec,
                    text=seg.text,
                ))

            logger.debug(
                f"Chunk {chunk.index + 1}/{total} @ {chunk.offset_sec:.1f}s: "
                f"{len(local)} segments"
            )
            if on_chunk:
                on_chunk(chunk.index, total)

        logger.info(
            f"Transcribed {total} chunks → {len(all_segments)} segments"
        )
        return all_segments
