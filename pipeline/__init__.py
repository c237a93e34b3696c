"""
Chunked Caption Generator — Pipeline Package

Modular processing pipeline for chunked caption generation:
  - audio_extractor: FFmpeg-based decoding to 16kHz mono PCM
  - windower: Overlapping fixed-size chunking
  - asr_worker: Speech-to-text via Faster-Whisper
  - transcriber: Sequential per-chunk ASR with timestamp re-basing
  - dedupe: Overlap duplicate removal
  - cue_builder: Word-safe wrapping and short-cue merging
  - caption_writer: WebVTT / SRT output
  - timing: Whole-millisecond rounding for comparisons and timestamps
  - errors: Fatal error hierarchy
  - config: YAML-backed application settings
  - cli: Command-line entry point
"""
