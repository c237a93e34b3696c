"""
Chunked Caption Generator — CLI Entry Point

Usage:
    chunk-captions talk.mp4
    python main.py talk.mp4
    python main.py talk.mp4 -o captions.srt --format srt
    python main.py talk.mp4 --window 30 --overlap 2 --max-chars 32
    python main.py talk.mp4 --language en -o -
"""

import sys
import argparse
import logging
from pathlib import Path

from .config import load_config, CAPTION_FORMATS
from .errors import CaptionError
from .orchestrator import SubtitlePipeline


def setup_logging(level: str = "INFO", log_file: str = None, stream=None):
    """Configure logging for the application."""
    log_format = (
        "%(asctime)s | %(levelname)-7s | %(name)-20s | %(message)s"
    )
    date_format = "%H:%M:%S"

    handlers = [logging.StreamHandler(stream or sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=log_format,
        datefmt=date_format,
        handlers=handlers
    )

    # Suppress noisy third-party loggers
    logging.getLogger("faster_whisper").setLevel(logging.WARNING)
    logging.getLogger("ctranslate2").setLevel(logging.WARNING)


def print_banner():
    """Print the application banner."""
    banner = """
==========================================================
          Chunked Caption Generator

  Overlapping-window transcription  ->  VTT / SRT
  Powered by Faster-Whisper
==========================================================
"""
    print(banner)


def print_progress(message: str, percent: int):
    """Console progress callback with progress bar."""
    bar_width = 30
    filled = int(bar_width * percent / 100)
    bar = "#" * filled + "-" * (bar_width - filled)
    print(f"\r  [{bar}] {percent:3d}%  {message:<50}", end="", flush=True)
    if percent >= 100:
        print()  # Newline at completion


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Chunked Caption Generator — Generate WebVTT/SRT captions "
                    "from long recordings with overlapping-window transcription.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py talk.mp4                       # talk.vtt next to the input
  python main.py talk.mp4 -f srt                # talk.srt
  python main.py talk.mp4 -o -                  # VTT to stdout
  python main.py talk.mp4 --window 0            # Whole file, no chunking
  python main.py talk.mp4 --window 30 --overlap 2
  python main.py talk.mp4 --language de         # Force German
        """
    )

    parser.add_argument(
        "input",
        type=Path,
        help="Path to the input audio/video file"
    )
    parser.add_argument(
        "-o", "--output",
        default=None,
        help="Output caption path, or '-' for stdout "
             "(default: input name with the format's extension)"
    )
    parser.add_argument(
        "-f", "--format",
        default=None,
        choices=list(CAPTION_FORMATS),
        help="Caption format (default: from config.yaml, usually 'vtt')"
    )
    parser.add_argument(
        "-m", "--model",
        default=None,
        help="Faster-Whisper model size or path (default: from config.yaml)"
    )
    parser.add_argument(
        "-l", "--language",
        default=None,
        help="Force language code (e.g., 'en', 'de'). Default: auto-detect"
    )
    parser.add_argument(
        "--window",
        type=float,
        default=None,
        help="Chunk window in seconds; 0 = whole file (default: 60)"
    )
    parser.add_argument(
        "--overlap",
        type=float,
        default=None,
        help="Overlap between chunks in seconds (default: 1)"
    )
    parser.add_argument(
        "--max-chars",
        type=int,
        default=None,
        help="Maximum characters per caption line (default: 42)"
    )
    parser.add_argument(
        "--max-lines",
        type=int,
        default=None,
        help="Maximum lines per cue (default: 2)"
    )
    parser.add_argument(
        "--threads",
        type=int,
        default=None,
        help="ASR CPU threads; 0 = auto (default: 0)"
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to custom config.yaml file"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose (DEBUG) logging"
    )
    parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Suppress all output except errors"
    )
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    # ── Validate input ──
    if not args.input.exists():
        print(f"Error: Input file not found: {args.input}", file=sys.stderr)
        sys.exit(1)

    # ── Load config ──
    try:
        config = load_config(args.config)
        config.update_from_args(args)
        config.validate()
    except CaptionError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    fmt = config.captions.format.lower()
    output = args.output or str(args.input.with_suffix(f".{fmt}"))
    to_stdout = output == "-"

    # ── Setup logging ──
    # Captions on stdout must not be interleaved with log lines
    quiet = args.quiet or to_stdout
    log_level = "DEBUG" if args.verbose else ("WARNING" if quiet else config.logging.level)
    setup_logging(
        level=log_level,
        log_file=config.logging.file,
        stream=sys.stderr if to_stdout else sys.stdout
    )

    # ── Banner ──
    if not quiet:
        print_banner()
        print(f"  Input:    {args.input}")
        print(f"  Output:   {output} ({fmt.upper()})")
        print(f"  Model:    Faster-Whisper {config.asr.model} ({config.asr.compute_type})")
        if config.chunked:
            print(f"  Chunks:   {config.chunking.window_sec:g}s window, "
                  f"{config.chunking.overlap_sec:g}s overlap")
        else:
            print(f"  Chunks:   whole file")
        print(f"  Layout:   {config.captions.max_lines} x {config.captions.max_chars} chars")
        print(f"  Language: {config.asr.language or 'Auto-detect'}")
        print()

    # ── Run pipeline ──
    try:
        pipeline = SubtitlePipeline(config)
        progress_fn = print_progress if not quiet else None
        cues = pipeline.process(args.input, output, progress_cb=progress_fn)

        print(f"Wrote {len(cues)} cues to {output}", file=sys.stderr)

    except KeyboardInterrupt:
        print("\n\n  [WARN] Processing interrupted by user.", file=sys.stderr)
        sys.exit(130)
    except FileNotFoundError as e:
        print(f"\n  [ERROR] File error: {e}", file=sys.stderr)
        sys.exit(1)
    except CaptionError as e:
        print(f"\n  [ERROR] {type(e).__name__}: {e}", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        logging.exception("Unexpected error")
        print(f"\n  [ERROR] Unexpected error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
