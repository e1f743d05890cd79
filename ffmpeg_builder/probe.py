"""Probe built executables with `-version` to confirm they run."""

import logging
import re
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30

_VERSION_RE = re.compile(r"^(ffmpeg|ffprobe) version (\S+)", re.MULTILINE)
_CONFIGURATION_RE = re.compile(r"^configuration:(.*)$", re.MULTILINE)


@dataclass
class VersionInfo:
    """Result of running a binary with -version."""

    success: bool = True
    program: str = ""
    version: str = ""
    configuration: List[str] = field(default_factory=list)
    error: str = ""


def probe_binary(path: Union[str, Path], timeout: int = DEFAULT_TIMEOUT) -> VersionInfo:
    """Run `<path> -version` and parse its banner.

    Args:
        path: Path to an ffmpeg or ffprobe executable.
        timeout: Subprocess timeout in seconds.

    Returns:
        VersionInfo; failures are reported, not raised.
    """
    cmd = [str(path), "-version"]

    try:
        proc = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except (TimeoutError, subprocess.TimeoutExpired):
        return VersionInfo(success=False, error=f"Probe timeout after {timeout}s")
    except FileNotFoundError:
        return VersionInfo(success=False, error=f"{path} not found")
    except OSError as exc:
        return VersionInfo(success=False, error=str(exc))

    if proc.returncode != 0:
        return VersionInfo(
            success=False,
            error=proc.stderr.strip() or f"{path} exited with code {proc.returncode}",
        )

    return parse_version_output(proc.stdout)


def parse_version_output(output: str) -> VersionInfo:
    """Parse the banner printed by `ffmpeg -version` / `ffprobe -version`."""
    m = _VERSION_RE.search(output)
    if not m:
        return VersionInfo(success=False, error="No version banner in output")

    configuration: List[str] = []
    cm = _CONFIGURATION_RE.search(output)
    if cm:
        configuration = cm.group(1).split()

    return VersionInfo(
        success=True,
        program=m.group(1),
        version=m.group(2),
        configuration=configuration,
    )


def verify_binaries(*paths: Union[str, Path], timeout: int = DEFAULT_TIMEOUT) -> Optional[str]:
    """Probe each binary; return the first error message or None."""
    for path in paths:
        info = probe_binary(path, timeout=timeout)
        if not info.success:
            return f"{path}: {info.error}"
        logger.info("%s reports %s version %s", path, info.program, info.version)
    return None
