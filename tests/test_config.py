"""
Tests for configuration loading and validation.
"""

import argparse
from pathlib import Path

import pytest
import pipeline
from pipeline.config import AppConfig, DEFAULT_CONFIG_PATH, load_config
from pipeline.errors import ConfigError


def make_args(**overrides):
    defaults = dict(model=None, language=None, threads=None, window=None,
                    overlap=None, max_chars=None, max_lines=None, format=None)
    defaults.update(overrides)
    return argparse.Namespace(**defaults)


class TestDefaults:
    """Test built-in defaults."""

    def test_caption_defaults(self):
        config = AppConfig()
        assert config.captions.max_chars == 42
        assert config.captions.max_lines == 2
        assert config.captions.format == "vtt"

    def test_chunk_defaults(self):
        config = AppConfig()
        assert config.chunking.window_sec == 60
        assert config.chunking.overlap_sec == 1
        assert config.chunked

    def test_language_auto(self):
        assert AppConfig().asr.language is None

    def test_defaults_valid(self):
        AppConfig().validate()


class TestLoadConfig:
    """Test YAML loading."""

    def test_missing_file_uses_defaults(self, tmp_path):
        config = load_config(tmp_path / "nope.yaml")
        assert config == AppConfig()

    def test_partial_file(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("chunking:\n  window_sec: 30\ncaptions:\n  format: srt\n")
        config = load_config(path)
        assert config.chunking.window_sec == 30
        assert config.chunking.overlap_sec == 1.0
        assert config.captions.format == "srt"
        assert config.captions.max_chars == 42

    def test_unknown_keys_ignored(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("asr:\n  model: tiny\n  beam_size: 9\nextra: true\n")
        config = load_config(path)
        assert config.asr.model == "tiny"
        assert not hasattr(config.asr, "beam_size")

    def test_empty_file(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("")
        assert load_config(path) == AppConfig()

    def test_malformed_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("asr: [unclosed\n")
        with pytest.raises(ConfigError):
            load_config(path)

    def test_section_not_mapping(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("captions: 42\n")
        with pytest.raises(ConfigError):
            load_config(path)

    def test_bundled_config_ships_inside_package(self):
        assert DEFAULT_CONFIG_PATH.parent == Path(pipeline.__file__).parent
        assert DEFAULT_CONFIG_PATH.is_file()

    def test_bundled_config_loads(self):
        config = load_config()
        config.validate()
        assert config.captions.max_chars == 42


class TestOverrides:
    """Test CLI overrides."""

    def test_overrides_applied(self):
        config = AppConfig()
        config.update_from_args(make_args(
            model="small", language="de", window=30.0, overlap=2.0,
            max_chars=32, max_lines=3, format="SRT", threads=4,
        ))
        assert config.asr.model == "small"
        assert config.asr.language == "de"
        assert config.asr.threads == 4
        assert config.chunking.window_sec == 30.0
        assert config.chunking.overlap_sec == 2.0
        assert config.captions.max_chars == 32
        assert config.captions.max_lines == 3
        assert config.captions.format == "srt"

    def test_zero_window_override(self):
        config = AppConfig()
        config.update_from_args(make_args(window=0))
        assert config.chunking.window_sec == 0
        assert not config.chunked

    def test_unset_args_leave_config(self):
        config = AppConfig()
        config.update_from_args(make_args())
        assert config == AppConfig()


class TestValidate:
    """Test configuration validation."""

    def test_overlap_not_less_than_window(self):
        config = AppConfig()
        config.chunking.window_sec = 5
        config.chunking.overlap_sec = 5
        with pytest.raises(ConfigError):
            config.validate()

    def test_whole_file_ignores_overlap(self):
        config = AppConfig()
        config.chunking.window_sec = 0
        config.chunking.overlap_sec = 10
        config.validate()

    def test_negative_overlap(self):
        config = AppConfig()
        config.chunking.overlap_sec = -1
        with pytest.raises(ConfigError):
            config.validate()

    def test_bad_format(self):
        config = AppConfig()
        config.captions.format = "ass"
        with pytest.raises(ConfigError):
            config.validate()

    @pytest.mark.parametrize("field,value", [("max_chars", 0), ("max_lines", 0)])
    def test_bad_layout(self, field, value):
        config = AppConfig()
        setattr(config.captions, field, value)
        with pytest.raises(ConfigError):
            config.validate()

    def test_wrong_sample_rate(self):
        config = AppConfig()
        config.audio.sample_rate = 44100
        with pytest.raises(ConfigError):
            config.validate()
