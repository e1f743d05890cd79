"""Unit tests for the nasm and x264 dependency builds."""
import pytest

from ffmpeg_builder.common import BuildError
from ffmpeg_builder.dependencies import build_nasm, build_x264, x264_configure_flags
from ffmpeg_builder.paths import BuildPaths

from tests.fixtures.build_factories import RecordingRunner, create_settings, fail_when


@pytest.fixture
def paths(settings):
    p = BuildPaths.from_settings(settings)
    p.ensure()
    return p


class TestBuildNasm:
    def test_configure_make_install(self, runner, settings, paths):
        assert build_nasm(runner, settings, paths) is True

        assert runner.commands == [
            ["./configure", f"--prefix={paths.search}", f"--bindir={paths.bin_dir}"],
            ["make", "-j4"],
            ["make", "install"],
        ]
        assert all(cwd == paths.nasm_source for _, cwd in runner.calls)

    def test_skips_when_installed(self, runner, settings, paths):
        (paths.bin_dir / "nasm").write_text("")

        assert build_nasm(runner, settings, paths) is False
        assert runner.calls == []

    def test_make_failure_aborts(self, settings, paths):
        runner = RecordingRunner(fail=fail_when("make", "-j4"))

        with pytest.raises(BuildError, match="nasm make failed"):
            build_nasm(runner, settings, paths)
        assert ["make", "install"] not in runner.commands


class TestX264Flags:
    def test_native_without_nasm(self, out_dir):
        settings = create_settings(out_dir, build_nasm=False)
        paths = BuildPaths.from_settings(settings)

        assert x264_configure_flags(settings, paths) == [
            "--prefix", str(paths.search),
            "--bindir", str(paths.bin_dir),
            "--enable-static",
            "--disable-asm",
        ]

    def test_asm_enabled_with_nasm(self, out_dir):
        settings = create_settings(out_dir, build_nasm=True)
        flags = x264_configure_flags(settings, BuildPaths.from_settings(settings))
        assert "--disable-asm" not in flags

    def test_cross_compile(self, out_dir):
        settings = create_settings(out_dir, target="aarch64-linux-gnu")
        flags = x264_configure_flags(settings, BuildPaths.from_settings(settings))
        assert "--host=aarch64-linux-gnu" in flags
        assert "--cross-prefix=aarch64-linux-gnu-" in flags


class TestBuildX264:
    def test_configure_make_install(self, runner, settings, paths):
        assert build_x264(runner, settings, paths) is True

        assert runner.commands[0][0] == "./configure"
        assert runner.commands[1:] == [["make", "-j4"], ["make", "install"]]
        assert all(cwd == paths.x264_source for _, cwd in runner.calls)

    def test_skips_when_library_installed(self, runner, settings, paths):
        paths.lib.mkdir(parents=True)
        (paths.lib / "libx264.a").write_bytes(b"")

        assert build_x264(runner, settings, paths) is False
        assert runner.calls == []

    def test_configure_failure(self, settings, paths):
        runner = RecordingRunner(fail=fail_when("./configure"))

        with pytest.raises(BuildError, match="x264 configure failed"):
            build_x264(runner, settings, paths)
        assert len(runner.calls) == 1
