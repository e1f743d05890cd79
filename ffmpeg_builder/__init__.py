"""
FFMPEG Builder - fetch, configure, compile and embed a static FFmpeg.

Drives the upstream FFmpeg, x264 and nasm build systems and ships the
resulting ffmpeg/ffprobe executables inside the ffmpeg_bin package.
"""

__version__ = "4.1.0"

from ffmpeg_builder.common import BuildError, ValidationResult

__all__ = ["BuildError", "ValidationResult", "__version__"]
