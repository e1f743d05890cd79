"""Build settings loaded from the environment, an optional JSON file and CLI overrides."""

import json
import logging
import os
import platform
import sysconfig
from pathlib import Path
from typing import Annotated, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode

from ffmpeg_builder import __version__
from ffmpeg_builder.common import BuildError

logger = logging.getLogger(__name__)

DEFAULT_NASM_URL = "https://www.nasm.us/pub/nasm/releasebuilds/{version}/nasm-{version}.tar.gz"


def normalize_feature(name: str) -> str:
    """Canonical feature name: upper case, dashes folded to underscores."""
    return name.strip().upper().replace("-", "_")


def default_host_triple() -> str:
    """Best guess at the GNU triple of the machine running the build."""
    for var in ("MULTIARCH", "HOST_GNU_TYPE"):
        value = sysconfig.get_config_var(var)
        if value:
            return value
    return f"{platform.machine().lower()}-{platform.system().lower()}"


class BuildSettings(BaseSettings):
    """FFmpeg build settings from environment (FFMPEG_BUILD_*)."""
    out_dir: Path = Path("out")
    # Source directory is ffmpeg-MAJOR.MINOR; unset parts come from the package version
    version_major: Optional[int] = None
    version_minor: Optional[int] = None
    # GNU triples; a target different from the host turns on --cross-prefix
    target: str = ""
    host: str = ""
    # Enabled feature switches, e.g. "BUILD_LICENSE_GPL,BUILD_LIB_X264,AVFILTER"
    features: Annotated[list[str], NoDecode] = []
    # Parallel make jobs, defaults to the CPU count
    jobs: Optional[int] = None
    ffmpeg_repo: str = "https://github.com/ngotchac/FFmpeg.git"
    ffmpeg_branch: str = "ts-offset"
    x264_repo: str = "https://code.videolan.org/videolan/x264.git"
    nasm_version: str = "2.16.03"
    nasm_url: str = DEFAULT_NASM_URL
    build_nasm: bool = True
    build_x264: bool = True
    keep_sources: bool = False
    # Run `ffmpeg -version` on the result (native builds only)
    verify: bool = True
    download_timeout: float = 120.0
    log_level: str = "INFO"

    class Config:
        env_prefix = "FFMPEG_BUILD_"
        env_file = ".env"
        env_file_encoding = "utf-8"

    @field_validator("features", mode="before")
    @classmethod
    def _split_features(cls, value):
        if value is None:
            return []
        if isinstance(value, str):
            value = value.split(",")
        return [normalize_feature(v) for v in value if str(v).strip()]

    def is_enabled(self, feature: str) -> bool:
        return normalize_feature(feature) in self.features

    def effective_jobs(self) -> int:
        if self.jobs is not None:
            return self.jobs
        return os.cpu_count() or 1

    def resolved_host(self) -> str:
        return self.host or default_host_triple()

    def resolved_target(self) -> str:
        return self.target or self.resolved_host()

    def is_cross_compiling(self) -> bool:
        return self.resolved_target() != self.resolved_host()

    def nasm_tarball_url(self) -> str:
        return self.nasm_url.format(version=self.nasm_version)


def resolve_version(settings: BuildSettings) -> str:
    """Return "MAJOR.MINOR" used to name the FFmpeg source directory."""
    parts = __version__.split(".")
    major = settings.version_major if settings.version_major is not None else int(parts[0])
    minor = settings.version_minor if settings.version_minor is not None else int(parts[1])
    return f"{major}.{minor}"


def load_settings(config_file: Optional[Path] = None, **overrides) -> BuildSettings:
    """Load settings from env, then the optional JSON file, then overrides.

    Overrides whose value is None are ignored so CLI options that were not
    given do not mask the environment.
    """
    data: dict = {}
    if config_file is not None:
        config_file = Path(config_file)
        logger.info("Loading build settings from %s", config_file)
        try:
            data.update(json.loads(config_file.read_text()))
        except json.JSONDecodeError as exc:
            raise BuildError(f"invalid settings file {config_file}: {exc}") from exc
    data.update({k: v for k, v in overrides.items() if v is not None})
    settings = BuildSettings(**data)
    logger.debug(
        "Build settings: out_dir=%s features=%s jobs=%s",
        settings.out_dir, ",".join(settings.features), settings.effective_jobs(),
    )
    return settings
