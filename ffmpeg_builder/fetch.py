"""Fetch upstream sources: the FFmpeg fork, x264 and the nasm release tarball."""

import logging
import tarfile
from pathlib import Path
from typing import Optional

import httpx

from ffmpeg_builder.common import BuildError
from ffmpeg_builder.config import BuildSettings
from ffmpeg_builder.execution import CommandRunner
from ffmpeg_builder.paths import BuildPaths

logger = logging.getLogger(__name__)

DOWNLOAD_CHUNK_SIZE = 64 * 1024


def clone_repository(
    runner: CommandRunner,
    url: str,
    dest: Path,
    branch: Optional[str] = None,
    step: str = "fetch",
) -> bool:
    """Shallow-clone url into dest. Returns False when dest already exists."""
    if dest.is_dir():
        logger.info("%s already present, skipping clone", dest)
        return False

    cmd = ["git", "clone"]
    if branch:
        cmd.extend(["-b", branch])
    cmd.extend(["--depth=1", url, dest.name])
    runner.check(cmd, step=step, cwd=dest.parent)
    return True


def fetch_ffmpeg(runner: CommandRunner, settings: BuildSettings, paths: BuildPaths) -> bool:
    return clone_repository(
        runner, settings.ffmpeg_repo, paths.source, branch=settings.ffmpeg_branch,
    )


def fetch_x264(runner: CommandRunner, settings: BuildSettings, paths: BuildPaths) -> bool:
    return clone_repository(runner, settings.x264_repo, paths.x264_source, step="x264 fetch")


def download_file(
    url: str,
    dest: Path,
    client: Optional[httpx.Client] = None,
    timeout: float = 120.0,
) -> Path:
    """Stream url to dest.

    A partial file is never left at dest: data goes to a ".part" file that
    is renamed on success and removed on failure.

    Raises:
        BuildError: On any HTTP status or transport error.
    """
    owns_client = client is None
    if owns_client:
        client = httpx.Client(timeout=timeout, follow_redirects=True)

    partial = dest.with_name(dest.name + ".part")
    logger.info("Downloading %s -> %s", url, dest)
    try:
        with client.stream("GET", url, follow_redirects=True) as response:
            response.raise_for_status()
            with open(partial, "wb") as fh:
                for chunk in response.iter_bytes(DOWNLOAD_CHUNK_SIZE):
                    fh.write(chunk)
        partial.replace(dest)
    except httpx.HTTPError as exc:
        partial.unlink(missing_ok=True)
        raise BuildError(f"download of {url} failed: {exc}") from exc
    finally:
        if owns_client:
            client.close()
    return dest


def fetch_nasm(
    settings: BuildSettings,
    paths: BuildPaths,
    client: Optional[httpx.Client] = None,
) -> bool:
    """Download and unpack the nasm release into the output directory."""
    if paths.nasm_source.is_dir():
        logger.info("%s already present, skipping download", paths.nasm_source)
        return False

    url = settings.nasm_tarball_url()
    tarball = paths.output / url.rsplit("/", 1)[-1]
    download_file(url, tarball, client=client, timeout=settings.download_timeout)

    try:
        with tarfile.open(tarball) as tar:
            tar.extractall(path=paths.output, filter="data")
    except tarfile.TarError as exc:
        raise BuildError(f"nasm extract failed: {exc}") from exc
    finally:
        tarball.unlink(missing_ok=True)

    if not paths.nasm_source.is_dir():
        raise BuildError(f"nasm extract failed: {paths.nasm_source} not found in {url}")
    return True
