"""Command line entry point: render a text file to an MP4 without the API."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from .animation.encode import CaptureUnavailable
from .animation.pipeline import default_filename, render_text_to_mp4
from .animation.plan import Alignment, EffectName
from .config import settings
from .logging_utils import setup_logging
from .schemas import PlaybackConfig


def die(message: str) -> None:
    print(f"Error: {message}", file=sys.stderr)
    raise SystemExit(1)


def _read_text(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    path = Path(source)
    if not path.is_file():
        die(f"Input not found: {source}")
    return path.read_text(encoding="utf-8")


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="textreveal", description="Animate paragraphs of text into a square video.")
    sub = ap.add_subparsers(dest="command", required=True)

    render = sub.add_parser("render", help="Render a text file (or - for stdin) to MP4")
    render.add_argument("input", help="Text file; paragraphs are separated by blank lines")
    render.add_argument("-o", "--output", default="", help="Output path (default: text-animation-<res>p.mp4 in cwd)")
    render.add_argument("--resolution", type=int, default=settings.default_resolution, help="Side of the square video in pixels")
    render.add_argument("--align", choices=[a.value for a in Alignment], default=settings.default_alignment, help="Line alignment")
    render.add_argument("--effect", choices=[e.value for e in EffectName], default=settings.default_effect, help="Reveal effect")
    render.add_argument("--fps", type=int, default=settings.fps, help="Output frame rate")
    render.add_argument("--log-level", default=settings.log_level, help="DEBUG/INFO/WARNING/ERROR")
    return ap


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    setup_logging(level=args.log_level, log_file=settings.log_file or None, logger_name="textreveal")

    text = _read_text(args.input)
    if not text.strip():
        die("Input text is empty")
    if args.fps <= 0:
        die("--fps must be > 0")

    config = PlaybackConfig(resolution_px=args.resolution, alignment=args.align, effect=args.effect)
    output = args.output or default_filename(config)
    try:
        result = render_text_to_mp4(text, output, config=config, fps=args.fps)
    except CaptureUnavailable as e:
        die(str(e))

    print(f"{result.output_path} ({result.paragraphs} paragraphs, {result.duration_ms / 1000:.1f}s)")


if __name__ == "__main__":
    main()
