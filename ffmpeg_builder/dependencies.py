"""Builds of the optional native dependencies: nasm and x264.

Both install static artifacts under the search prefix so FFmpeg's configure
finds them through --extra-cflags/--extra-ldflags.
"""

import logging

from ffmpeg_builder.config import BuildSettings
from ffmpeg_builder.execution import CommandRunner
from ffmpeg_builder.paths import BuildPaths

logger = logging.getLogger(__name__)


def nasm_installed(paths: BuildPaths) -> bool:
    return (paths.bin_dir / "nasm").exists()


def x264_installed(paths: BuildPaths) -> bool:
    return (paths.lib / "libx264.a").exists()


def _make_and_install(runner: CommandRunner, name: str, cwd, jobs: int) -> None:
    runner.check(["make", f"-j{jobs}"], step=f"{name} make", cwd=cwd)
    runner.check(["make", "install"], step=f"{name} make install", cwd=cwd)


def build_nasm(runner: CommandRunner, settings: BuildSettings, paths: BuildPaths) -> bool:
    """Build and install the nasm assembler into bin_dir.

    Returns False when an installed nasm is already present.
    """
    if nasm_installed(paths):
        logger.info("nasm already installed in %s, skipping build", paths.bin_dir)
        return False

    runner.check(
        ["./configure", f"--prefix={paths.search}", f"--bindir={paths.bin_dir}"],
        step="nasm configure",
        cwd=paths.nasm_source,
    )
    _make_and_install(runner, "nasm", paths.nasm_source, settings.effective_jobs())
    return True


def x264_configure_flags(settings: BuildSettings, paths: BuildPaths) -> list:
    flags = [
        "--prefix", str(paths.search),
        "--bindir", str(paths.bin_dir),
        "--enable-static",
    ]
    # Without a built nasm the assembly paths cannot be compiled
    if not settings.build_nasm:
        flags.append("--disable-asm")
    if settings.is_cross_compiling():
        target = settings.resolved_target()
        flags.extend([f"--host={target}", f"--cross-prefix={target}-"])
    return flags


def build_x264(runner: CommandRunner, settings: BuildSettings, paths: BuildPaths) -> bool:
    """Build and install static libx264 under the search prefix.

    Returns False when libx264.a is already installed.
    """
    if x264_installed(paths):
        logger.info("libx264 already installed in %s, skipping build", paths.lib)
        return False

    runner.check(
        ["./configure", *x264_configure_flags(settings, paths)],
        step="x264 configure",
        cwd=paths.x264_source,
    )
    _make_and_install(runner, "x264", paths.x264_source, settings.effective_jobs())
    return True
