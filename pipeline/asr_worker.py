"""
ASR Worker — Speech-to-text using Faster-Whisper.

Wraps a CTranslate2 Whisper model behind a narrow `infer(audio)` call that
returns chunk-local segments. Decoding is fixed for chunked captioning:
  - Greedy decoding (beam_size=1, single temperature)
  - condition_on_previous_text=False so every chunk decodes independently
  - Non-speech tokens suppressed
  - Transcription only, never translation
"""

import os
import logging
import numpy as np
from dataclasses import dataclass
from typing import List, Optional

from .errors import ModelLoadError

logger = logging.getLogger(__name__)


@dataclass
class Segment:
    """A recognized utterance span, in seconds."""
    start_sec: float
    end_sec: float
    text: str

    def __repr__(self):
        return (f"Segment({self.start_sec:.2f}–{self.end_sec:.2f}s, "
                f"'{self.text[:40]}')")


class ASRWorker:
    """
    Automatic Speech Recognition using Faster-Whisper.

    The model is lazily loaded on first use; call `load()` up front to
    surface initialization failures before any audio is processed.
    """

    def __init__(self, config):
        self.model_name = getattr(config, "model", "base.en")
        self.device = getattr(config, "device", "cpu")
        self.compute_type = getattr(config, "compute_type", "int8")
        self.language = getattr(config, "language", None) or None

        # Thread count: 0 = auto-detect
        raw_threads = getattr(config, "threads", 0)
        if raw_threads <= 0:
            self.cpu_threads = os.cpu_count() or 4
            logger.info(f"Auto-detected {self.cpu_threads} CPU threads")
        else:
            self.cpu_threads = raw_threads

        # Lazy-loaded
        self._model = None
        self._detected_language: Optional[str] = None

    def load(self):
        """Load the Faster-Whisper model if it is not loaded yet."""
        if self._model is not None:
            return

        logger.info(
            f"Loading Faster-Whisper model '{self.model_name}' "
            f"(device={self.device}, compute_type={self.compute_type}, "
            f"threads={self.cpu_threads})"
        )

        try:
            from faster_whisper import WhisperModel

            self._model = WhisperModel(
                self.model_name,
                device=self.device,
                compute_type=self.compute_type,
                cpu_threads=self.cpu_threads
            )
        except Exception as e:
            raise ModelLoadError(
                f"Could not load ASR model '{self.model_name}': {e}"
            ) from e

        logger.info("Faster-Whisper model loaded successfully.")

    def infer(self, audio_data: np.ndarray) -> List[Segment]:
        """
        Run the engine over one buffer of 16 kHz mono samples.

        Args:
            audio_data: Float32 PCM samples.

        Returns:
            Raw segments in buffer-local time, in time order. Text is
            returned untouched.
        """
        self.load()

        segments_iter, info = self._model.transcribe(
            audio_data.astype(np.float32, copy=False),
            task="transcribe",
            language=self.language,
            beam_size=1,
            best_of=1,
            temperature=0.0,
            condition_on_previous_text=False,
            suppress_blank=True,
            suppress_tokens=[-1],  # -1 = the model's non-speech token set
            without_timestamps=False,
            word_timestamps=False,
            vad_filter=False,
        )

        if self.language is None and self._detected_language != info.language:
            self._detected_language = info.language
            logger.info(
                f"Detected language: {info.language} "
                f"(probability: {info.language_probability:.2f})"
            )

        # The iterator is lazy; decoding happens while it is consumed
        return [
            Segment(start_sec=seg.start, end_sec=seg.end, text=seg.text)
            for seg in segments_iter
        ]
