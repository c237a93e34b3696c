"""
Pipeline Orchestrator — Coordinates the entire caption generation pipeline.

Stages:
  1. Audio Decoding (FFmpeg → 16kHz mono PCM)
  2. Windowing into overlapping chunks
  3. Chunk-by-chunk ASR (Faster-Whisper) with timestamp re-basing
  4. Overlap deduplication (chunked mode only)
  5. Cue building + VTT/SRT output
"""

import time
import logging
from pathlib import Path
from typing import Optional, Callable, List

from .audio_extractor import AudioExtractor
from .asr_worker import ASRWorker
from .caption_writer import CaptionWriter
from .cue_builder import Cue, CueBuilder
from .dedupe import dedupe_overlap
from .transcriber import ChunkTranscriber
from .windower import split_pcm

logger = logging.getLogger(__name__)

# Type alias for progress callbacks: (message: str, percent: int) -> None
ProgressCallback = Optional[Callable[[str, int], None]]


class SubtitlePipeline:
    """
    Main pipeline orchestrator for chunked caption generation.

    Usage:
        config = load_config()
        pipeline = SubtitlePipeline(config)
        pipeline.process("talk.mp4", "talk.vtt")

    The decoder and ASR engine can be injected; anything with
    `decode(path)` and `infer(audio)` respectively will do.
    """

    def __init__(self, config, extractor=None, asr=None):
        config.validate()
        self.config = config

        self.extractor = extractor or AudioExtractor(
            sample_rate=config.audio.sample_rate,
            channels=config.audio.channels
        )
        self.asr = asr or ASRWorker(config.asr)
        self.transcriber = ChunkTranscriber(self.asr)
        self.builder = CueBuilder(
            max_chars=config.captions.max_chars,
            max_lines=config.captions.max_lines
        )
        self.writer = CaptionWriter()

    def process(
        self,
        input_path: Path,
        output_path,
        progress_cb: ProgressCallback = None
    ) -> List[Cue]:
        """
        Run the full caption generation pipeline.

        Args:
            input_path: Path to the input audio/video file.
            output_path: Path for the output caption file, or "-" for stdout.
            progress_cb: Optional callback for progress updates.

        Returns:
            List of written Cue objects.
        """
        input_path = Path(input_path)
        chunking = self.config.chunking
        fmt = self.config.captions.format.lower()
        start_time = time.monotonic()

        logger.info(f"{'='*60}")
        logger.info(f"Chunked Caption Generator")
        logger.info(f"Input:  {input_path}")
        logger.info(f"Output: {output_path} ({fmt})")
        if self.config.chunked:
            logger.info(
                f"Chunks: {chunking.window_sec}s window, {chunking.overlap_sec}s overlap"
            )
        else:
            logger.info(f"Chunks: whole file")
        logger.info(f"{'='*60}")

        # ── Stage 1: Decode ──
        self._report(progress_cb, "Decoding audio...", 5)
        pcm = self.extractor.decode(input_path)

        # ── Stage 2: Windowing ──
        chunks = split_pcm(
            pcm,
            self.config.audio.sample_rate,
            chunking.window_sec,
            chunking.overlap_sec
        )
        self._report(progress_cb, f"Split audio into {len(chunks)} chunk(s)", 10)

        # ── Stage 3: ASR ──
        if hasattr(self.asr, "load"):
            self._report(progress_cb, "Loading ASR model...", 12)
            self.asr.load()

        def on_chunk(index: int, total: int):
            pct = 15 + int(70 * (index + 1) / max(total, 1))
            self._report(progress_cb, f"Transcribing... {index + 1}/{total} chunks", pct)

        segments = self.transcriber.transcribe_chunks(chunks, on_chunk=on_chunk)

        # ── Stage 4: Dedupe ──
        if self.config.chunked:
            self._report(progress_cb, "Removing overlap duplicates...", 87)
            segments = dedupe_overlap(segments, chunking.overlap_sec)

        # ── Stage 5: Cues + Output ──
        self._report(progress_cb, "Building cues and writing captions...", 90)
        cues = self.builder.build(segments)
        self.writer.write(cues, output_path, fmt)

        elapsed = time.monotonic() - start_time
        self._report(progress_cb, f"Done! ({elapsed:.1f}s)", 100)

        logger.info(f"{'='*60}")
        logger.info(f"Pipeline complete in {elapsed:.1f}s")
        logger.info(f"  Chunks:   {len(chunks)}")
        logger.info(f"  Segments: {len(segments)}")
        logger.info(f"  Cues:     {len(cues)}")
        logger.info(f"  Output:   {output_path}")
        logger.info(f"{'='*60}")

        preview = self.writer.write_preview(cues, max_entries=5)
        if preview:
            logger.info(f"Preview:\n{preview}")

        return cues

    # ── Utilities ──

    @staticmethod
    def _report(cb: ProgressCallback, msg: str, pct: int):
        """Report progress to logger and optional callback."""
        logger.info(f"[{pct:3d}%] {msg}")
        if cb:
            cb(msg, pct)
