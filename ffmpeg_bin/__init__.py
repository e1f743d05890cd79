"""
Embedded FFmpeg executables.

The ffmpeg and ffprobe binaries produced by ffmpeg_builder ship as package
data in this package. install_ffmpeg()/install_ffprobe() write them out to a
directory chosen by the caller.
"""

import os
import stat
from importlib import resources
from pathlib import Path
from typing import Union

BIN_DIR = Path(__file__).parent / "bin"
BINARIES = ("ffmpeg", "ffprobe")

_EXECUTABLE = stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH

__all__ = ["BIN_DIR", "BINARIES", "install_ffmpeg", "install_ffprobe", "is_embedded"]


def _blob(name: str):
    return resources.files(__name__).joinpath("bin", name)


def is_embedded(name: str) -> bool:
    """True when the named executable was embedded at build time."""
    if name not in BINARIES:
        raise ValueError(f"Unknown binary {name!r}, expected one of {BINARIES}")
    return _blob(name).is_file()


def _install(name: str, dir_path: Union[str, os.PathLike]) -> Path:
    data = _blob(name).read_bytes()
    dest = Path(dir_path) / name
    dest.write_bytes(data)
    dest.chmod(dest.stat().st_mode | _EXECUTABLE)
    return dest


def install_ffmpeg(dir_path: Union[str, os.PathLike]) -> Path:
    """Write the embedded ffmpeg executable into dir_path and return its path.

    Filesystem errors (missing directory, missing blob) propagate.
    """
    return _install("ffmpeg", dir_path)


def install_ffprobe(dir_path: Union[str, os.PathLike]) -> Path:
    """Write the embedded ffprobe executable into dir_path and return its path."""
    return _install("ffprobe", dir_path)
