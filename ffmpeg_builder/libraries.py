"""Declarative tables that drive FFmpeg's --enable-* configure options."""

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Library:
    """One of FFmpeg's own libraries."""

    name: str
    is_feature: bool
    requires: Tuple[str, ...] = ()

    @property
    def feature(self) -> str:
        return self.name.upper()


@dataclass(frozen=True)
class Switch:
    """A feature-gated configure option."""

    feature: str
    option: str
    category: str  # license, ssl, filter, codec, other, protocol, misc
    requires: Tuple[str, ...] = ()


LIBRARIES: Tuple[Library, ...] = (
    Library("avcodec", True),
    Library("avdevice", True),
    Library("avfilter", True),
    Library("avformat", True),
    Library("avresample", True),
    Library("avutil", False),
    Library("postproc", True, requires=("gpl",)),
    Library("swresample", True),
    Library("swscale", True),
)

# Linking against the result must comply with the enabled license(s)
LICENSE_SWITCHES: Tuple[Switch, ...] = (
    Switch("BUILD_LICENSE_GPL", "gpl", "license"),
    Switch("BUILD_LICENSE_VERSION3", "version3", "license"),
    Switch("BUILD_LICENSE_NONFREE", "nonfree", "license"),
)

EXTERNAL_SWITCHES: Tuple[Switch, ...] = (
    # SSL
    Switch("BUILD_LIB_GNUTLS", "gnutls", "ssl"),
    Switch("BUILD_LIB_OPENSSL", "openssl", "ssl"),
    # filters
    Switch("BUILD_LIB_FONTCONFIG", "fontconfig", "filter"),
    Switch("BUILD_LIB_FREI0R", "frei0r", "filter", requires=("gpl",)),
    Switch("BUILD_LIB_LADSPA", "ladspa", "filter"),
    Switch("BUILD_LIB_ASS", "libass", "filter"),
    Switch("BUILD_LIB_FREETYPE", "libfreetype", "filter"),
    Switch("BUILD_LIB_FRIBIDI", "libfribidi", "filter"),
    Switch("BUILD_LIB_OPENCV", "libopencv", "filter"),
    # encoders/decoders
    Switch("BUILD_LIB_AACPLUS", "libaacplus", "codec", requires=("nonfree",)),
    Switch("BUILD_LIB_CELT", "libcelt", "codec"),
    Switch("BUILD_LIB_DCADEC", "libdcadec", "codec"),
    Switch("BUILD_LIB_FAAC", "libfaac", "codec", requires=("nonfree",)),
    Switch("BUILD_LIB_FDK_AAC", "libfdk-aac", "codec", requires=("nonfree",)),
    Switch("BUILD_LIB_GSM", "libgsm", "codec"),
    Switch("BUILD_LIB_ILBC", "libilbc", "codec"),
    Switch("BUILD_LIB_VAZAAR", "libvazaar", "codec"),
    Switch("BUILD_LIB_MP3LAME", "libmp3lame", "codec"),
    Switch("BUILD_LIB_OPENCORE_AMRNB", "libopencore-amrnb", "codec", requires=("version3",)),
    Switch("BUILD_LIB_OPENCORE_AMRWB", "libopencore-amrwb", "codec", requires=("version3",)),
    Switch("BUILD_LIB_OPENH264", "libopenh264", "codec"),
    Switch("BUILD_LIB_OPENH265", "libopenh265", "codec"),
    Switch("BUILD_LIB_OPENJPEG", "libopenjpeg", "codec"),
    Switch("BUILD_LIB_OPUS", "libopus", "codec"),
    Switch("BUILD_LIB_SCHROEDINGER", "libschroedinger", "codec"),
    Switch("BUILD_LIB_SHINE", "libshine", "codec"),
    Switch("BUILD_LIB_SNAPPY", "libsnappy", "codec"),
    Switch("BUILD_LIB_SPEEX", "libspeex", "codec"),
    Switch("BUILD_LIB_STAGEFRIGHT_H264", "libstagefright-h264", "codec"),
    Switch("BUILD_LIB_THEORA", "libtheora", "codec"),
    Switch("BUILD_LIB_TWOLAME", "libtwolame", "codec"),
    Switch("BUILD_LIB_UTVIDEO", "libutvideo", "codec", requires=("gpl",)),
    Switch("BUILD_LIB_VO_AACENC", "libvo-aacenc", "codec", requires=("version3",)),
    Switch("BUILD_LIB_VO_AMRWBENC", "libvo-amrwbenc", "codec", requires=("version3",)),
    Switch("BUILD_LIB_VORBIS", "libvorbis", "codec"),
    Switch("BUILD_LIB_VPX", "libvpx", "codec"),
    Switch("BUILD_LIB_WAVPACK", "libwavpack", "codec"),
    Switch("BUILD_LIB_WEBP", "libwebp", "codec"),
    Switch("BUILD_LIB_X264", "libx264", "codec", requires=("gpl",)),
    Switch("BUILD_LIB_X265", "libx265", "codec", requires=("gpl",)),
    Switch("BUILD_LIB_AVS", "libavs", "codec"),
    Switch("BUILD_LIB_XVID", "libxvid", "codec", requires=("gpl",)),
    # other
    Switch("BUILD_NVENC", "nvenc", "other"),
    # protocols
    Switch("BUILD_LIB_SMBCLIENT", "libsmbclient", "protocol", requires=("gpl", "version3")),
    Switch("BUILD_LIB_SSH", "libssh", "protocol"),
    # misc
    Switch("BUILD_PIC", "pic", "misc"),
)

LICENSE_FEATURES = {s.option: s.feature for s in LICENSE_SWITCHES}


def library_switches() -> Tuple[Switch, ...]:
    """Switches for the feature-toggleable FFmpeg libraries."""
    return tuple(
        Switch(lib.feature, lib.name, "library", requires=lib.requires)
        for lib in LIBRARIES
        if lib.is_feature
    )


def all_switches() -> Tuple[Switch, ...]:
    """Every switch in the order its option is emitted."""
    return LICENSE_SWITCHES + library_switches() + EXTERNAL_SWITCHES


def known_features() -> set:
    return {s.feature for s in all_switches()}
