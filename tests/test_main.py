"""
Tests for the command-line entry point.
"""

import pytest
from pipeline import cli
from pipeline.asr_worker import Segment
from pipeline.orchestrator import SubtitlePipeline

from fakes import FakeEngine, FakeExtractor

SCRIPT = {0: [Segment(0.5, 2.5, "Hello there")]}


@pytest.fixture
def media(tmp_path):
    path = tmp_path / "talk.mp4"
    path.write_bytes(b"\x00")
    return path


@pytest.fixture
def engine():
    return FakeEngine(SCRIPT)


@pytest.fixture
def fake_pipeline(monkeypatch, engine):
    def factory(config):
        return SubtitlePipeline(config, extractor=FakeExtractor(10), asr=engine)

    monkeypatch.setattr(cli, "SubtitlePipeline", factory)
    return engine


def exit_code(argv):
    with pytest.raises(SystemExit) as exc_info:
        cli.main(argv)
    return exc_info.value.code


class TestOutputPath:
    """Test where captions are written."""

    def test_defaults_to_input_with_vtt_suffix(self, fake_pipeline, media):
        cli.main([str(media), "-q"])
        output = media.with_suffix(".vtt")
        assert output.read_text(encoding="utf-8") == (
            "WEBVTT\n\n00:00:00.500 --> 00:00:02.500\nHello there\n\n"
        )

    def test_suffix_follows_format(self, fake_pipeline, media):
        cli.main([str(media), "-q", "-f", "srt"])
        output = media.with_suffix(".srt")
        assert output.read_text(encoding="utf-8").startswith("1\n00:00:00,500")
        assert not media.with_suffix(".vtt").exists()

    def test_explicit_output(self, fake_pipeline, media, tmp_path):
        output = tmp_path / "out" / "captions.vtt"
        cli.main([str(media), "-q", "-o", str(output)])
        assert output.exists()

    def test_overrides_reach_pipeline(self, fake_pipeline, media):
        cli.main([str(media), "-q", "--window", "0"])
        # Whole-file mode: one engine call over the full buffer
        assert len(fake_pipeline.calls) == 1


class TestStdout:
    """Captions on stdout are not mixed with anything else."""

    def test_stdout_carries_only_captions(self, fake_pipeline, media, capsys):
        cli.main([str(media), "-o", "-", "-f", "srt"])
        captured = capsys.readouterr()
        assert captured.out == "1\n00:00:00,500 --> 00:00:02,500\nHello there\n\n"
        assert "Wrote 1 cues to -" in captured.err

    def test_no_file_written(self, fake_pipeline, media, tmp_path):
        cli.main([str(media), "-o", "-"])
        assert sorted(p.name for p in tmp_path.iterdir()) == ["talk.mp4"]


class TestExitCodes:
    """Failures map to process exit codes."""

    def test_missing_input(self, fake_pipeline, tmp_path):
        assert exit_code([str(tmp_path / "missing.mp4"), "-q"]) == 1

    def test_invalid_config(self, fake_pipeline, media, capsys):
        assert exit_code([str(media), "-q", "--window", "1", "--overlap", "1"]) == 1
        assert "overlap" in capsys.readouterr().err

    def test_inference_error(self, monkeypatch, media, capsys):
        def factory(config):
            return SubtitlePipeline(
                config, extractor=FakeExtractor(10), asr=FakeEngine(fail_on={0})
            )

        monkeypatch.setattr(cli, "SubtitlePipeline", factory)
        assert exit_code([str(media), "-q"]) == 1
        assert "InferenceError" in capsys.readouterr().err

    def test_keyboard_interrupt(self, monkeypatch, media):
        class Interrupted:
            def __init__(self, config):
                pass

            def process(self, *args, **kwargs):
                raise KeyboardInterrupt

        monkeypatch.setattr(cli, "SubtitlePipeline", Interrupted)
        assert exit_code([str(media), "-q"]) == 130
