"""
Caption Writer — WebVTT and SubRip file generator.

Serializes Cue objects with HH:MM:SS.mmm (VTT) or HH:MM:SS,mmm (SRT)
timestamps, one block per cue, UTF-8 encoded.
"""

import sys
import logging
from pathlib import Path
from typing import List, Sequence, Union

from .cue_builder import Cue
from .errors import ConfigError, OutputWriteError
from .timing import to_millis

logger = logging.getLogger(__name__)

FORMATS = ("vtt", "srt")


def format_timestamp(seconds: float, decimal: str = ".") -> str:
    """
    Convert seconds to a caption timestamp: HH:MM:SS.mmm

    Args:
        seconds: Time in seconds (e.g., 125.340)
        decimal: Separator before the milliseconds ("." for VTT, "," for SRT)

    Returns:
        Formatted timestamp string (e.g., "00:02:05.340")
    """
    if seconds < 0:
        seconds = 0.0

    # Round once, half-up, so 59.9996 becomes 00:01:00.000 rather than 00:00:60.000
    total_ms = to_millis(seconds)
    hours = total_ms // 3_600_000
    minutes = (total_ms % 3_600_000) // 60_000
    secs = (total_ms % 60_000) // 1000
    millis = total_ms % 1000

    return f"{hours:02d}:{minutes:02d}:{secs:02d}{decimal}{millis:03d}"


def render_vtt(cues: Sequence[Cue]) -> str:
    """
    Render cues as WebVTT.

    WEBVTT

    00:00:01.200 --> 00:00:04.800
    Hello everyone, welcome
    to the show.
    """
    parts = ["WEBVTT\n\n"]
    for cue in cues:
        parts.append(
            f"{format_timestamp(cue.start_sec)} --> "
            f"{format_timestamp(cue.end_sec)}\n"
        )
        parts.extend(f"{line}\n" for line in cue.lines)
        parts.append("\n")
    return "".join(parts)


def render_srt(cues: Sequence[Cue]) -> str:
    """
    Render cues as SubRip.

    1
    00:00:01,200 --> 00:00:04,800
    Hello everyone, welcome
    to the show.
    """
    parts = []
    for cue in cues:
        parts.append(f"{cue.index}\n")
        parts.append(
            f"{format_timestamp(cue.start_sec, ',')} --> "
            f"{format_timestamp(cue.end_sec, ',')}\n"
        )
        parts.extend(f"{line}\n" for line in cue.lines)
        parts.append("\n")
    return "".join(parts)


class CaptionWriter:
    """Writes cues to a .vtt or .srt file, or to stdout when the path is "-"."""

    def render(self, cues: Sequence[Cue], fmt: str) -> str:
        fmt = fmt.lower()
        if fmt == "vtt":
            return render_vtt(cues)
        if fmt == "srt":
            return render_srt(cues)
        raise ConfigError(f"Caption format must be one of {FORMATS}, got '{fmt}'")

    def write(self, cues: Sequence[Cue], output_path: Union[str, Path], fmt: str = "vtt"):
        """
        Write cues to `output_path`.

        Args:
            cues: Cue objects sorted by time.
            output_path: Destination file, or "-" for stdout.
            fmt: "vtt" or "srt".

        Raises:
            ConfigError: If the format is unknown.
            OutputWriteError: If the file cannot be created or written.
        """
        content = self.render(cues, fmt)

        if str(output_path) == "-":
            sys.stdout.write(content)
            sys.stdout.flush()
            logger.info(f"{fmt.upper()} written: {len(cues)} cues → stdout")
            return

        output_path = Path(output_path)
        if output_path.suffix.lower() != f".{fmt.lower()}":
            logger.warning(
                f"Writing {fmt.upper()}; consider using a .{fmt.lower()} extension "
                f"(got '{output_path.name}')"
            )

        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            with open(output_path, "w", encoding="utf-8") as f:
                f.write(content)
        except OSError as e:
            raise OutputWriteError(
                f"Could not write captions to {output_path}: {e}"
            ) from e

        logger.info(
            f"{fmt.upper()} written: {len(cues)} cues → {output_path}"
        )

    def write_preview(self, cues: List[Cue], max_entries: int = 10) -> str:
        """
        Generate a text preview of the cues.

        Args:
            cues: List of Cue objects.
            max_entries: Maximum cues to include in preview.

        Returns:
            Formatted string preview.
        """
        lines = []
        shown = min(len(cues), max_entries)

        for cue in cues[:shown]:
            ts_start = format_timestamp(cue.start_sec)
            ts_end = format_timestamp(cue.end_sec)
            text_preview = cue.raw_text[:80]
            if len(cue.raw_text) > 80:
                text_preview += "..."
            lines.append(f"  [{ts_start} → {ts_end}] {text_preview}")

        if len(cues) > shown:
            lines.append(f"  ... and {len(cues) - shown} more entries")

        return "\n".join(lines)
