"""
Pipeline Errors — Exception hierarchy for caption generation.

Every error is fatal to a run. They all derive from RuntimeError so the
CLI can report them uniformly.
"""

from typing import Optional


class CaptionError(RuntimeError):
    """Base class for all caption pipeline failures."""


class ConfigError(CaptionError):
    """Invalid window/overlap relationship, line limits, or output format."""


class DecodeError(CaptionError):
    """The external decoder failed or produced audio in the wrong format."""


class ModelLoadError(CaptionError):
    """The ASR engine could not be initialized."""


class InferenceError(CaptionError):
    """The ASR engine failed on a specific chunk."""

    def __init__(self, chunk_index: int, cause: Optional[BaseException] = None):
        self.chunk_index = chunk_index
        self.cause = cause
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"Transcription failed on chunk {chunk_index}{detail}")


class OutputWriteError(CaptionError):
    """The caption file could not be created or written."""
