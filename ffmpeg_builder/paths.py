"""Filesystem layout of one build run, derived from the settings."""

from dataclasses import dataclass
from pathlib import Path

from ffmpeg_builder.config import BuildSettings, resolve_version


@dataclass(frozen=True)
class BuildPaths:
    """Every directory and file the build touches."""

    output: Path
    source: Path
    search: Path
    bin_dir: Path
    x264_source: Path
    nasm_source: Path

    @property
    def include(self) -> Path:
        return self.search / "include"

    @property
    def lib(self) -> Path:
        return self.search / "lib"

    @property
    def ffmpeg_binary(self) -> Path:
        return self.output / "ffmpeg"

    @property
    def ffprobe_binary(self) -> Path:
        return self.output / "ffprobe"

    @classmethod
    def from_settings(cls, settings: BuildSettings) -> "BuildPaths":
        output = Path(settings.out_dir)
        return cls(
            output=output,
            source=output / f"ffmpeg-{resolve_version(settings)}",
            search=output.absolute() / "dist",
            bin_dir=output.absolute() / "bin",
            x264_source=output / "x264",
            nasm_source=output / f"nasm-{settings.nasm_version}",
        )

    def ensure(self) -> None:
        """Create the directories commands run in or install into."""
        for directory in (self.output, self.search, self.bin_dir):
            directory.mkdir(parents=True, exist_ok=True)
