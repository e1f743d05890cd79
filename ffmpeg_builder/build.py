"""
FFmpeg build orchestration.

fetch -> build dependencies -> configure/make FFmpeg -> relocate binaries
-> remove intermediate sources. Strictly sequential; any failure aborts.
"""
import logging
import shutil
from dataclasses import dataclass, field
from typing import List, Optional

from ffmpeg_builder.common import BuildError, ValidationResult
from ffmpeg_builder.config import BuildSettings
from ffmpeg_builder.configure_flags import generate_configure_flags
from ffmpeg_builder.dependencies import (
    build_nasm,
    build_x264,
    nasm_installed,
    x264_installed,
)
from ffmpeg_builder.execution import CommandRunner
from ffmpeg_builder.fetch import fetch_ffmpeg, fetch_nasm, fetch_x264
from ffmpeg_builder.paths import BuildPaths
from ffmpeg_builder.probe import verify_binaries
from ffmpeg_builder.validation import validate_build

logger = logging.getLogger(__name__)


@dataclass
class BuildResult:
    """Outcome of run_build()."""

    paths: BuildPaths
    skipped: bool = False
    flags: List[str] = field(default_factory=list)
    validation: ValidationResult = field(default_factory=ValidationResult)


def configure_ffmpeg(runner: CommandRunner, flags: List[str], paths: BuildPaths) -> None:
    """Run FFmpeg's ./configure; configure's stdout is logged on failure."""
    try:
        runner.check(["./configure", *flags], step="configure", cwd=paths.source, capture=True)
    except BuildError as exc:
        if exc.result is not None and exc.result.stdout:
            logger.error("configure: %s", exc.result.stdout)
        raise


def make_ffmpeg(runner: CommandRunner, paths: BuildPaths, jobs: int) -> None:
    runner.check(["make", "-j", str(jobs)], step="make", cwd=paths.source)


def relocate_binaries(paths: BuildPaths) -> None:
    """Move the two executables out of the source tree into the output directory."""
    for src, dest in (
        (paths.source / "ffmpeg", paths.ffmpeg_binary),
        (paths.source / "ffprobe", paths.ffprobe_binary),
    ):
        try:
            src.replace(dest)
        except OSError as exc:
            raise BuildError(f"relocate of {src} failed: {exc}") from exc


def remove_sources(paths: BuildPaths) -> None:
    """Delete the FFmpeg, x264 and nasm source trees."""
    for directory in (paths.source, paths.x264_source, paths.nasm_source):
        if directory.is_dir():
            logger.info("Removing %s", directory)
            shutil.rmtree(directory)


def run_build(settings: BuildSettings, runner: Optional[CommandRunner] = None) -> BuildResult:
    """Build ffmpeg/ffprobe into settings.out_dir unless already built.

    Raises:
        BuildError: On invalid settings or the first failing step.
    """
    paths = BuildPaths.from_settings(settings)

    if paths.ffmpeg_binary.exists():
        logger.info("FFmpeg already built at %s, skipping", paths.ffmpeg_binary)
        return BuildResult(paths=paths, skipped=True)

    validation = validate_build(settings)
    for warning in validation.warnings:
        logger.warning(warning)
    if not validation.valid:
        raise BuildError("invalid build settings: " + "; ".join(validation.errors))

    try:
        paths.ensure()
    except OSError as exc:
        raise BuildError(f"failed to create build directory {paths.output}: {exc}") from exc

    if runner is None:
        runner = CommandRunner(tool_dir=paths.bin_dir, pkg_config_dir=paths.lib / "pkgconfig")
    jobs = settings.effective_jobs()

    # Installed dependencies survive source removal; reuse them without fetching
    if settings.build_nasm and not nasm_installed(paths):
        fetch_nasm(settings, paths)
        build_nasm(runner, settings, paths)

    if settings.build_x264 and not x264_installed(paths):
        fetch_x264(runner, settings, paths)
        build_x264(runner, settings, paths)

    fetch_ffmpeg(runner, settings, paths)

    flags = generate_configure_flags(settings, paths)
    configure_ffmpeg(runner, flags, paths)
    make_ffmpeg(runner, paths, jobs)
    relocate_binaries(paths)

    if not settings.keep_sources:
        remove_sources(paths)

    if settings.verify and not settings.is_cross_compiling():
        error = verify_binaries(paths.ffmpeg_binary, paths.ffprobe_binary)
        if error:
            raise BuildError(f"verify failed: {error}")

    logger.info("Finished building FFmpeg at %s", paths.output)
    return BuildResult(paths=paths, flags=flags, validation=validation)
