"""Copy built executables into the ffmpeg_bin package so they ship in the wheel."""

import logging
import shutil
from pathlib import Path
from typing import List, Optional

import ffmpeg_bin
from ffmpeg_builder.common import BuildError
from ffmpeg_builder.paths import BuildPaths

logger = logging.getLogger(__name__)


def embed_binaries(paths: BuildPaths, dest: Optional[Path] = None) -> List[Path]:
    """Copy output/ffmpeg and output/ffprobe into dest (ffmpeg_bin's bin/ by default).

    Raises:
        BuildError: If either executable has not been built.
    """
    dest = Path(dest) if dest is not None else ffmpeg_bin.BIN_DIR
    sources = [paths.ffmpeg_binary, paths.ffprobe_binary]
    missing = [str(p) for p in sources if not p.is_file()]
    if missing:
        raise BuildError(f"embed failed, not built: {', '.join(missing)}")

    dest.mkdir(parents=True, exist_ok=True)
    embedded = []
    for src in sources:
        target = dest / src.name
        shutil.copy2(src, target)
        logger.info("Embedded %s -> %s", src, target)
        embedded.append(target)
    return embedded
