"""
Configuration loader for the Chunked Caption Generator.
Loads from config.yaml and allows CLI argument overrides.
"""

import yaml
import logging
from pathlib import Path
from dataclasses import dataclass, field
from typing import Optional

from .errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent / "config.yaml"

CAPTION_FORMATS = ("vtt", "srt")


@dataclass
class AudioConfig:
    sample_rate: int = 16000
    channels: int = 1


@dataclass
class ASRConfig:
    model: str = "base.en"
    device: str = "cpu"
    compute_type: str = "int8"
    threads: int = 0  # 0 = auto-detect CPU cores
    language: Optional[str] = None  # None = auto-detect


@dataclass
class ChunkConfig:
    window_sec: float = 60.0  # 0 = whole file
    overlap_sec: float = 1.0


@dataclass
class CaptionConfig:
    max_chars: int = 42
    max_lines: int = 2
    format: str = "vtt"


@dataclass
class LoggingConfig:
    level: str = "INFO"
    file: Optional[str] = None


@dataclass
class AppConfig:
    """Top-level application configuration."""
    audio: AudioConfig = field(default_factory=AudioConfig)
    asr: ASRConfig = field(default_factory=ASRConfig)
    chunking: ChunkConfig = field(default_factory=ChunkConfig)
    captions: CaptionConfig = field(default_factory=CaptionConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @property
    def chunked(self) -> bool:
        return self.chunking.window_sec > 0

    def update_from_args(self, args):
        """Override config values from CLI arguments."""
        if getattr(args, "model", None):
            self.asr.model = args.model
        if getattr(args, "language", None):
            self.asr.language = args.language
        if getattr(args, "threads", None) is not None:
            self.asr.threads = args.threads
        if getattr(args, "window", None) is not None:
            self.chunking.window_sec = args.window
        if getattr(args, "overlap", None) is not None:
            self.chunking.overlap_sec = args.overlap
        if getattr(args, "max_chars", None) is not None:
            self.captions.max_chars = args.max_chars
        if getattr(args, "max_lines", None) is not None:
            self.captions.max_lines = args.max_lines
        if getattr(args, "format", None):
            self.captions.format = args.format.lower()

    def validate(self):
        """
        Check value relationships the pipeline depends on.

        Raises:
            ConfigError: On the first invalid value found.
        """
        if self.chunked:
            if self.chunking.overlap_sec < 0:
                raise ConfigError(
                    f"overlap must be >= 0, got {self.chunking.overlap_sec}"
                )
            if self.chunking.window_sec <= self.chunking.overlap_sec:
                raise ConfigError(
                    f"window ({self.chunking.window_sec}s) must be greater than "
                    f"overlap ({self.chunking.overlap_sec}s)"
                )
        if self.captions.max_chars < 1:
            raise ConfigError(f"max_chars must be >= 1, got {self.captions.max_chars}")
        if self.captions.max_lines < 1:
            raise ConfigError(f"max_lines must be >= 1, got {self.captions.max_lines}")
        if self.captions.format.lower() not in CAPTION_FORMATS:
            raise ConfigError(
                f"format must be vtt or srt, got '{self.captions.format}'"
            )
        if self.audio.sample_rate != 16000:
            raise ConfigError(
                f"sample_rate must be 16000, got {self.audio.sample_rate}"
            )


def _dict_to_dataclass(cls, data: dict):
    """Recursively convert a dict to a dataclass, ignoring unknown keys."""
    if data is None:
        return cls()
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a mapping for {cls.__name__}, got {data!r}")
    field_names = {f.name for f in cls.__dataclass_fields__.values()}
    filtered = {k: v for k, v in data.items() if k in field_names}
    return cls(**filtered)


def load_config(config_path: Optional[Path] = None) -> AppConfig:
    """
    Load configuration from a YAML file.
    Falls back to defaults if file is missing.
    """
    path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH

    if not path.exists():
        logger.warning(f"Config file not found at {path}, using defaults.")
        return AppConfig()

    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(raw, dict):
        raise ConfigError(f"Top level of {path} must be a mapping")

    config = AppConfig(
        audio=_dict_to_dataclass(AudioConfig, raw.get("audio")),
        asr=_dict_to_dataclass(ASRConfig, raw.get("asr")),
        chunking=_dict_to_dataclass(ChunkConfig, raw.get("chunking")),
        captions=_dict_to_dataclass(CaptionConfig, raw.get("captions")),
        logging=_dict_to_dataclass(LoggingConfig, raw.get("logging")),
    )

    logger.info(f"Configuration loaded from {path}")
    return config
