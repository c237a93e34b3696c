"""
Deterministic stand-ins for the decoder and ASR engine.
"""

import numpy as np
from typing import Callable, Dict, List, Optional

from pipeline.asr_worker import Segment
from pipeline.windower import SAMPLE_RATE


class FakeEngine:
    """
    Returns scripted chunk-local segments.

    `script` maps call number (0-based) to the segments for that call.
    Calls with no entry return nothing; calls listed in `fail_on` raise.
    """

    def __init__(self, script: Optional[Dict[int, List[Segment]]] = None,
                 fail_on=(), responder: Optional[Callable] = None):
        self.script = script or {}
        self.fail_on = set(fail_on)
        self.responder = responder
        self.calls: List[np.ndarray] = []
        self.loaded = False

    def load(self):
        self.loaded = True

    def infer(self, audio_data: np.ndarray) -> List[Segment]:
        call = len(self.calls)
        self.calls.append(audio_data)
        if call in self.fail_on:
            raise RuntimeError("decoder exploded")
        if self.responder is not None:
            return self.responder(call, audio_data)
        return [Segment(s.start_sec, s.end_sec, s.text)
                for s in self.script.get(call, [])]


class FakeExtractor:
    """Returns a silent buffer of the requested length for any input."""

    def __init__(self, seconds: float):
        self.pcm = np.zeros(int(seconds * SAMPLE_RATE), dtype=np.float32)
        self.decoded = []

    def decode(self, input_path):
        self.decoded.append(input_path)
        return self.pcm
