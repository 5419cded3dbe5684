"""
Command line entry point: auto-segment a recitation and export its timings.

Usage:
    muqassim 001.mp3 --surah 1 --aameen -o out/001_timings.json
    muqassim 112.wav --surah 112 --threshold 0.05 --slices out/112 --format mp3
"""

import argparse
import logging
import sys
from pathlib import Path

from muqassim import __version__
from muqassim.config import configure, get_settings
from muqassim.core.timefmt import format_time
from muqassim.exceptions import MuqassimError
from muqassim.session import AnnotationSession

logger = logging.getLogger("muqassim")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="muqassim",
        description="Split a Quran recitation into ayahs on silences and export the timings.",
    )
    parser.add_argument("audio", type=Path, help="Audio file to segment")
    parser.add_argument("--surah", default="", help="Surah number written to the export")
    parser.add_argument("--surah-name", default="", help="Surah name (defaults to the Arabic name)")
    parser.add_argument("--threshold", type=float, help="Silence amplitude threshold (0-1)")
    parser.add_argument("--min-silence", type=float, help="Silence (s) that separates ayahs")
    parser.add_argument("--min-sound", type=float, help="Shortest ayah (s) kept")
    parser.add_argument("--padding", type=float, help="Padding (s) around each ayah")
    parser.add_argument(
        "--aameen",
        action="store_true",
        help="Mark the last detected region as the aameen",
    )
    parser.add_argument("-o", "--output", type=Path, help="JSON output path")
    parser.add_argument("--slices", type=Path, help="Directory for per-ayah audio files")
    parser.add_argument("--format", choices=["wav", "mp3"], default="wav", help="Slice format")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _overrides(args: argparse.Namespace) -> dict:
    pairs = {
        "threshold": args.threshold,
        "min_silence_duration": args.min_silence,
        "min_sound_duration": args.min_sound,
        "padding": args.padding,
    }
    return {k: v for k, v in pairs.items() if v is not None}


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    settings = configure(log_level=args.log_level) if args.log_level else get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        with AnnotationSession(settings=settings) as session:
            session.open(args.audio)
            segments = session.auto_segment(**_overrides(args))

            if args.aameen and segments:
                last = segments[-1]
                session.annotations.remove(last.id)
                session.annotations.add_aameen(last.start, last.end)

            print(f"Found {len(session.annotations)} segments in {args.audio.name}")
            print("-" * 40)
            for segment in session.annotations:
                print(f"{segment.label:>4}: {format_time(segment.start)} - {format_time(segment.end)}")

            path = session.export(args.surah, args.surah_name, path=args.output)
            print(f"Timings saved to {path}")

            if args.slices:
                written = session.export_slices(args.slices, fmt=args.format)
                print(f"Wrote {len(written)} {args.format} files to {args.slices}")
    except MuqassimError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
