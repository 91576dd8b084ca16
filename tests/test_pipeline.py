from __future__ import annotations

import subprocess
from pathlib import Path

import pytest

from textreveal.animation import encode, pipeline
from textreveal.animation.encode import CaptureUnavailable
from textreveal.animation.pipeline import default_filename, render_text_to_mp4
from textreveal.schemas import PlaybackConfig

SMALL = PlaybackConfig(resolution_px=64, alignment="center", effect="typewriter")


@pytest.fixture
def fake_ffmpeg(monkeypatch):
    frames = []

    def run(cmd, check, capture_output, text):
        out = Path(cmd[-1])
        frames.append(len(list(out.parent.glob("frame_*.png"))))
        out.write_bytes(b"\x00\x00\x00\x18ftypisom")
        return subprocess.CompletedProcess(cmd, 0, "", "")

    monkeypatch.setattr(encode.shutil, "which", lambda name: "/usr/bin/" + name)
    monkeypatch.setattr(encode.subprocess, "run", run)
    return frames


def test_renders_one_paragraph(tmp_path, fake_ffmpeg):
    out = tmp_path / "nested" / "hi.mp4"
    result = render_text_to_mp4("Hi", str(out), config=SMALL, fps=10)

    assert out.read_bytes().endswith(b"ftypisom")
    assert result.output_path == str(out)
    assert result.paragraphs == 1
    # frames from 100 ms, 620 ms reached at the 800 ms frame, then two 500 ms pauses
    assert result.duration_ms == 1800
    assert result.frames == 18
    assert fake_ffmpeg == [17]


def test_visits_every_paragraph(tmp_path, fake_ffmpeg):
    config = PlaybackConfig(resolution_px=64, effect="fade")
    result = render_text_to_mp4("one\n\ntwo words\n\nthree", str(tmp_path / "o.mp4"), config=config, fps=10)
    assert result.paragraphs == 3
    assert len(fake_ffmpeg) == 1


def test_empty_text(tmp_path):
    with pytest.raises(ValueError):
        render_text_to_mp4(" \n\n ", str(tmp_path / "x.mp4"), config=SMALL, fps=10)


def test_no_encoder(tmp_path, monkeypatch):
    monkeypatch.setattr(encode.shutil, "which", lambda name: None)
    out = tmp_path / "x.mp4"
    with pytest.raises(CaptureUnavailable):
        render_text_to_mp4("Hi", str(out), config=SMALL, fps=10)
    assert not out.exists()


def test_no_encoder_fails_before_playing(tmp_path, monkeypatch):
    def no_playback(*args, **kwargs):
        raise AssertionError("playback started without an encoder")

    monkeypatch.setattr(encode.shutil, "which", lambda name: None)
    monkeypatch.setattr(pipeline, "AnimationScheduler", no_playback)
    monkeypatch.setattr(pipeline, "PillowSurface", no_playback)
    with pytest.raises(CaptureUnavailable, match="ffmpeg"):
        render_text_to_mp4("Hi\n\nthere", str(tmp_path / "x.mp4"), config=SMALL, fps=10)


def test_encoder_failure_propagates(tmp_path, monkeypatch):
    def boom(cmd, **kwargs):
        raise subprocess.CalledProcessError(1, cmd, stderr="x264 missing")

    monkeypatch.setattr(encode.shutil, "which", lambda name: "/usr/bin/" + name)
    monkeypatch.setattr(encode.subprocess, "run", boom)
    with pytest.raises(subprocess.CalledProcessError):
        render_text_to_mp4("Hi", str(tmp_path / "x.mp4"), config=SMALL, fps=10)


def test_default_filename():
    assert default_filename(PlaybackConfig(resolution_px=1080)) == "text-animation-1080p.mp4"
