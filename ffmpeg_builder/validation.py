"""Validation of a build configuration before anything is fetched."""

from ffmpeg_builder.common import ValidationResult
from ffmpeg_builder.config import BuildSettings
from ffmpeg_builder.libraries import LICENSE_FEATURES, all_switches, known_features


def validate_features(settings: BuildSettings) -> ValidationResult:
    """Unknown feature names and unmet license requirements are errors."""
    result = ValidationResult()

    known = known_features()
    for feature in settings.features:
        if feature not in known:
            result.add_error(f"Unknown feature '{feature}'")

    for switch in all_switches():
        if not settings.is_enabled(switch.feature):
            continue
        for license_name in switch.requires:
            if not settings.is_enabled(LICENSE_FEATURES[license_name]):
                result.add_error(
                    f"'{switch.option}' requires --enable-{license_name} "
                    f"(feature {LICENSE_FEATURES[license_name]})"
                )

    if (
        settings.is_enabled("BUILD_LICENSE_GPL")
        and settings.is_enabled("BUILD_LIB_OPENSSL")
        and not settings.is_enabled("BUILD_LICENSE_NONFREE")
    ):
        result.add_warning(
            "openssl is incompatible with gpl unless nonfree is enabled, "
            "configure may refuse it"
        )

    return result


def validate_build(settings: BuildSettings) -> ValidationResult:
    """Validate complete build settings.

    Returns a ValidationResult with errors for fatal issues and warnings
    for non-blocking concerns.
    """
    result = ValidationResult()
    result.merge(validate_features(settings))

    if settings.jobs is not None and settings.jobs < 1:
        result.add_error(f"jobs must be at least 1, got {settings.jobs}")

    if settings.is_enabled("BUILD_LIB_X264") and not settings.build_x264:
        result.add_warning(
            "libx264 enabled but the x264 build is off, relying on a system x264"
        )

    if settings.verify and settings.is_cross_compiling():
        result.add_warning(
            f"Cross compiling for {settings.resolved_target()}, "
            "the built binaries will not be verified"
        )

    return result
