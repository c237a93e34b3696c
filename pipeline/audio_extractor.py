"""
Audio Extractor — FFmpeg-based audio decoding.

Converts any audio/video input to 16kHz mono 16-bit PCM WAV and loads it
as float32 samples in [-1, 1] for the ASR engine.
"""

import os
import subprocess
import tempfile
import logging
import numpy as np
import soundfile as sf
from pathlib import Path

from .errors import DecodeError

logger = logging.getLogger(__name__)

SAMPLE_RATE = 16000


class AudioExtractor:
    """Decodes media files to mono 16kHz PCM using FFmpeg."""

    def __init__(self, sample_rate: int = SAMPLE_RATE, channels: int = 1):
        self.sample_rate = sample_rate
        self.channels = channels
        self._verify_ffmpeg()

    def _verify_ffmpeg(self):
        """Check that FFmpeg is available on the system PATH."""
        try:
            result = subprocess.run(
                ["ffmpeg", "-version"],
                capture_output=True, text=True, timeout=10
            )
        except FileNotFoundError as e:
            raise DecodeError(
                "FFmpeg not found. Please install FFmpeg and add it to PATH.\n"
                "Download: https://ffmpeg.org/download.html"
            ) from e
        if result.returncode != 0:
            raise DecodeError("FFmpeg returned non-zero exit code")
        version_line = result.stdout.split("\n")[0]
        logger.debug(f"FFmpeg found: {version_line}")

    def extract(self, input_path: Path) -> Path:
        """
        Convert an input file to a temporary PCM WAV.

        Args:
            input_path: Path to the input audio/video file.

        Returns:
            Path to the extracted temporary WAV file.

        Raises:
            DecodeError: If FFmpeg extraction fails.
            FileNotFoundError: If the input file doesn't exist.
        """
        input_path = Path(input_path)
        if not input_path.exists():
            raise FileNotFoundError(f"Input file not found: {input_path}")

        fd, tmp_name = tempfile.mkstemp(suffix=".wav", prefix="captions_")
        os.close(fd)
        output = Path(tmp_name)

        cmd = [
            "ffmpeg",
            "-i", str(input_path),
            "-vn",                          # No video
            "-acodec", "pcm_s16le",         # 16-bit PCM
            "-ar", str(self.sample_rate),   # Sample rate
            "-ac", str(self.channels),      # Mono
            "-loglevel", "error",           # Suppress verbose output
            "-y",                           # Overwrite
            str(output)
        ]

        logger.info(f"Extracting audio: {input_path.name} → {output.name}")
        logger.debug(f"FFmpeg command: {' '.join(cmd)}")

        result = subprocess.run(cmd, capture_output=True, text=True)

        if result.returncode != 0:
            self.cleanup(output)
            raise DecodeError(
                f"FFmpeg audio extraction failed:\n{result.stderr}"
            )

        file_size_mb = output.stat().st_size / (1024 * 1024)
        logger.info(f"Audio extracted: {file_size_mb:.1f} MB ({output})")

        return output

    def load_pcm(self, audio_path: Path) -> np.ndarray:
        """
        Read a WAV file as mono float32 samples.

        Raises:
            DecodeError: If the file is unreadable or not 16kHz.
        """
        try:
            audio_np, sr = sf.read(str(audio_path), dtype="float32")
        except (RuntimeError, OSError) as e:
            raise DecodeError(f"Could not read decoded audio {audio_path}: {e}") from e

        if sr != SAMPLE_RATE:
            raise DecodeError(
                f"Expected {SAMPLE_RATE}Hz audio, got {sr}Hz. "
                f"Re-extract with correct sample rate."
            )

        # Ensure 1-D
        if audio_np.ndim > 1:
            audio_np = audio_np[:, 0]

        logger.info(f"Loaded {len(audio_np) / SAMPLE_RATE:.1f}s of audio")
        return audio_np

    def decode(self, input_path: Path) -> np.ndarray:
        """Extract and load `input_path`, always removing the temporary WAV."""
        audio_path = self.extract(input_path)
        try:
            return self.load_pcm(audio_path)
        finally:
            self.cleanup(audio_path)

    @staticmethod
    def cleanup(audio_path: Path):
        """Remove the temporary audio file."""
        audio_path = Path(audio_path)
        if audio_path.exists():
            audio_path.unlink()
            logger.debug(f"Cleaned up temp audio: {audio_path}")
