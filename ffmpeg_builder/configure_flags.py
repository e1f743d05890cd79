"""FFmpeg ./configure flag generation and annotation from build settings."""

from dataclasses import dataclass, field
from typing import List, Tuple

from ffmpeg_builder.config import BuildSettings
from ffmpeg_builder.libraries import all_switches
from ffmpeg_builder.paths import BuildPaths

# Always passed: static, stripped, position independent, no docs or ffplay
FIXED_FLAGS: Tuple[Tuple[str, str], ...] = (
    ("--disable-doc", "Skip building documentation"),
    ("--disable-ffplay", "Skip the ffplay player"),
    ("--disable-debug", "No debug symbols"),
    ("--enable-stripping", "Strip the produced executables"),
    ("--enable-static", "Build static libraries"),
    ("--disable-shared", "No shared libraries, executables are self-contained"),
    ("--enable-pic", "Position independent code"),
)

CATEGORY_LABELS = {
    "license": "License",
    "library": "FFmpeg library",
    "ssl": "SSL library",
    "filter": "External filter",
    "codec": "External encoder/decoder",
    "other": "External library",
    "protocol": "External protocol",
    "misc": "Build option",
}


@dataclass
class Annotation:
    """A single annotation for a configure flag."""

    flag: str
    explanation: str
    category: str  # path, cross, global, or a switch category


@dataclass
class AnnotatedFlags:
    """Configure flags with one annotation per flag."""

    flags: List[str]
    annotations: List[Annotation] = field(default_factory=list)


def generate_path_flags(paths: BuildPaths) -> List[str]:
    return [
        f"--prefix={paths.search}",
        f"--extra-cflags=-I{paths.include}",
        f"--extra-ldflags=-L{paths.lib}",
    ]


def generate_cross_flags(settings: BuildSettings) -> List[str]:
    """--cross-prefix when the target triple differs from the host."""
    if settings.is_cross_compiling():
        return [f"--cross-prefix={settings.resolved_target()}-"]
    return []


def generate_switch_flags(settings: BuildSettings) -> List[str]:
    """--enable-<option> for every enabled switch, in table order."""
    return [
        f"--enable-{switch.option}"
        for switch in all_switches()
        if settings.is_enabled(switch.feature)
    ]


def generate_configure_flags(settings: BuildSettings, paths: BuildPaths) -> List[str]:
    """Generate the complete FFmpeg configure argument list.

    Argument order: [paths] [cross-prefix] [fixed options] [switches]
    """
    flags: List[str] = []
    flags.extend(generate_path_flags(paths))
    flags.extend(generate_cross_flags(settings))
    flags.extend(flag for flag, _ in FIXED_FLAGS)
    flags.extend(generate_switch_flags(settings))
    return flags


def annotate_flags(settings: BuildSettings, paths: BuildPaths) -> AnnotatedFlags:
    """Generate the configure flags and explain each one."""
    flags = generate_configure_flags(settings, paths)
    annotations: List[Annotation] = []

    prefix, cflags, ldflags = generate_path_flags(paths)
    annotations.append(Annotation(prefix, f"Install prefix: {paths.search}", "path"))
    annotations.append(Annotation(cflags, f"Headers of built dependencies: {paths.include}", "path"))
    annotations.append(Annotation(ldflags, f"Libraries of built dependencies: {paths.lib}", "path"))

    for flag in generate_cross_flags(settings):
        annotations.append(Annotation(
            flag,
            f"Cross compiling for {settings.resolved_target()} on {settings.resolved_host()}",
            "cross",
        ))

    for flag, explanation in FIXED_FLAGS:
        annotations.append(Annotation(flag, explanation, "global"))

    for switch in all_switches():
        if not settings.is_enabled(switch.feature):
            continue
        label = CATEGORY_LABELS.get(switch.category, switch.category)
        annotations.append(Annotation(
            f"--enable-{switch.option}",
            f"{label}: {switch.option} (feature {switch.feature})",
            switch.category,
        ))

    return AnnotatedFlags(flags=flags, annotations=annotations)
