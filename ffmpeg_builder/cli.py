"""
ffmpeg-build: build, inspect, embed and extract static FFmpeg executables.

Usage:
    ffmpeg-build build --out-dir out --feature BUILD_LICENSE_GPL --feature BUILD_LIB_X264
    ffmpeg-build flags --feature BUILD_LIB_OPUS
    ffmpeg-build install /usr/local/bin
    ffmpeg-build verify out
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

import ffmpeg_bin
from ffmpeg_builder.build import run_build
from ffmpeg_builder.common import BuildError
from ffmpeg_builder.config import BuildSettings, load_settings
from ffmpeg_builder.configure_flags import annotate_flags
from ffmpeg_builder.embed import embed_binaries
from ffmpeg_builder.log_utils import configure_logging
from ffmpeg_builder.paths import BuildPaths
from ffmpeg_builder.probe import probe_binary
from ffmpeg_builder.validation import validate_build

# ── Colours ────────────────────────────────────────────────────────────
GREEN = "\033[0;32m"
RED = "\033[0;31m"
YELLOW = "\033[1;33m"
BOLD = "\033[1m"
NC = "\033[0m"  # No Color


def settings_from_args(args: argparse.Namespace) -> BuildSettings:
    """Environment and --config first, then explicit command line options.

    --feature adds to the features already enabled by the environment.
    """
    base = load_settings(args.config)
    features = list(base.features) + list(args.feature or [])
    return load_settings(
        args.config,
        out_dir=args.out_dir,
        jobs=args.jobs,
        features=features or None,
        keep_sources=True if getattr(args, "keep_sources", False) else None,
    )


def cmd_build(args: argparse.Namespace) -> int:
    settings = settings_from_args(args)
    configure_logging(args.log_level or settings.log_level)

    result = run_build(settings)
    if not args.no_embed:
        embed_binaries(result.paths)
    state = "already built" if result.skipped else "built"
    print(f"{GREEN}FFmpeg {state}:{NC} {result.paths.ffmpeg_binary}")
    return 0


def cmd_flags(args: argparse.Namespace) -> int:
    settings = settings_from_args(args)
    configure_logging(args.log_level or settings.log_level)

    annotated = annotate_flags(settings, BuildPaths.from_settings(settings))
    for annotation in annotated.annotations:
        print(f"  {annotation.flag:<60} {annotation.explanation}")

    validation = validate_build(settings)
    for warning in validation.warnings:
        print(f"{YELLOW}warning:{NC} {warning}")
    for error in validation.errors:
        print(f"{RED}error:{NC} {error}")
    return 0 if validation.valid else 1


def cmd_install(args: argparse.Namespace) -> int:
    configure_logging(args.log_level or "INFO")
    names = [args.only] if args.only else list(ffmpeg_bin.BINARIES)
    installers = {
        "ffmpeg": ffmpeg_bin.install_ffmpeg,
        "ffprobe": ffmpeg_bin.install_ffprobe,
    }
    for name in names:
        path = installers[name](args.dest)
        print(f"{GREEN}Installed{NC} {path}")
    return 0


def cmd_verify(args: argparse.Namespace) -> int:
    configure_logging(args.log_level or "INFO")
    failed = False
    for name in ffmpeg_bin.BINARIES:
        info = probe_binary(Path(args.dir) / name)
        if info.success:
            print(f"{GREEN}OK{NC}   {name} {info.version}")
        else:
            print(f"{RED}FAIL{NC} {name}: {info.error}")
            failed = True
    return 1 if failed else 0


def _add_build_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--out-dir", type=Path, help="Build output directory")
    parser.add_argument("--feature", "-f", action="append", metavar="FEATURE",
                        help="Enable a feature switch (repeatable), e.g. BUILD_LIB_X264")
    parser.add_argument("--jobs", "-j", type=int, help="Parallel make jobs")
    parser.add_argument("--config", type=Path, help="JSON settings file")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ffmpeg-build",
        description="Build FFmpeg from source and embed ffmpeg/ffprobe",
    )
    parser.add_argument("--log-level", help="DEBUG, INFO, WARNING, ERROR")
    sub = parser.add_subparsers(dest="command", required=True)

    build = sub.add_parser("build", help="Fetch, compile and embed FFmpeg")
    _add_build_options(build)
    build.add_argument("--keep-sources", action="store_true",
                       help="Keep the FFmpeg/x264/nasm source trees")
    build.add_argument("--no-embed", action="store_true",
                       help="Do not copy the binaries into the ffmpeg_bin package")
    build.set_defaults(func=cmd_build)

    flags = sub.add_parser("flags", help="Show the configure flags without building")
    _add_build_options(flags)
    flags.set_defaults(func=cmd_flags)

    install = sub.add_parser("install", help="Extract the embedded binaries")
    install.add_argument("dest", type=Path, help="Destination directory")
    install.add_argument("--only", choices=ffmpeg_bin.BINARIES)
    install.set_defaults(func=cmd_install)

    verify = sub.add_parser("verify", help="Run -version on built binaries")
    verify.add_argument("dir", type=Path, help="Directory holding ffmpeg and ffprobe")
    verify.set_defaults(func=cmd_verify)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        return args.func(args)
    except (BuildError, ValidationError, OSError) as exc:
        print(f"{RED}{BOLD}error:{NC} {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
