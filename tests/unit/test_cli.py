"""Unit tests for the ffmpeg-build command line."""
from unittest.mock import patch

import pytest

import ffmpeg_bin
from ffmpeg_builder.build import BuildResult
from ffmpeg_builder.cli import main, settings_from_args, build_parser
from ffmpeg_builder.common import BuildError
from ffmpeg_builder.paths import BuildPaths
from ffmpeg_builder.probe import VersionInfo

from tests.fixtures.build_factories import create_settings


@pytest.fixture(autouse=True)
def no_logging_setup():
    with patch("ffmpeg_builder.cli.configure_logging"):
        yield


class TestSettingsFromArgs:
    def test_cli_features_extend_env(self, monkeypatch, out_dir):
        monkeypatch.setenv("FFMPEG_BUILD_FEATURES", "BUILD_LICENSE_GPL")
        args = build_parser().parse_args(
            ["build", "--out-dir", str(out_dir), "-f", "build-lib-x264", "-j", "2"]
        )

        settings = settings_from_args(args)

        assert settings.features == ["BUILD_LICENSE_GPL", "BUILD_LIB_X264"]
        assert settings.out_dir == out_dir
        assert settings.jobs == 2
        assert settings.keep_sources is False

    def test_keep_sources(self):
        args = build_parser().parse_args(["build", "--keep-sources"])
        assert settings_from_args(args).keep_sources is True


class TestBuildCommand:
    def test_builds_and_embeds(self, out_dir, capsys):
        paths = BuildPaths.from_settings(create_settings(out_dir))
        with patch("ffmpeg_builder.cli.run_build", return_value=BuildResult(paths=paths)) as mock_build, \
             patch("ffmpeg_builder.cli.embed_binaries") as mock_embed:
            code = main(["build", "--out-dir", str(out_dir)])

        assert code == 0
        mock_build.assert_called_once()
        mock_embed.assert_called_once_with(paths)
        assert "built" in capsys.readouterr().out

    def test_no_embed(self, out_dir):
        paths = BuildPaths.from_settings(create_settings(out_dir))
        with patch("ffmpeg_builder.cli.run_build", return_value=BuildResult(paths=paths, skipped=True)), \
             patch("ffmpeg_builder.cli.embed_binaries") as mock_embed:
            assert main(["build", "--no-embed"]) == 0

        mock_embed.assert_not_called()

    def test_build_error_exit_code(self, capsys):
        with patch("ffmpeg_builder.cli.run_build", side_effect=BuildError("make failed")):
            assert main(["build"]) == 1

    def test_malformed_config_exit_code(self, tmp_path, capsys):
        config_file = tmp_path / "settings.json"
        config_file.write_text("{not json")

        assert main(["flags", "--config", str(config_file)]) == 1
        assert "invalid settings file" in capsys.readouterr().err

        assert "make failed" in capsys.readouterr().err

    def test_invalid_env_exit_code(self, monkeypatch):
        monkeypatch.setenv("FFMPEG_BUILD_JOBS", "many")
        assert main(["build"]) == 1


class TestFlagsCommand:
    def test_prints_flags(self, capsys):
        assert main(["flags", "-f", "BUILD_LICENSE_GPL", "-f", "BUILD_LIB_X264"]) == 0

        out = capsys.readouterr().out
        assert "--enable-libx264" in out
        assert "--disable-ffplay" in out

    def test_reports_license_errors(self, capsys):
        assert main(["flags", "-f", "BUILD_LIB_X264"]) == 1
        assert "requires --enable-gpl" in capsys.readouterr().out


class TestInstallCommand:
    @pytest.fixture
    def blobs(self, tmp_path, monkeypatch):
        blob_dir = tmp_path / "blobs"
        blob_dir.mkdir()
        for name in ffmpeg_bin.BINARIES:
            (blob_dir / name).write_bytes(name.encode())
        monkeypatch.setattr(ffmpeg_bin, "_blob", lambda name: blob_dir / name)
        return blob_dir

    def test_installs_both(self, blobs, tmp_path):
        dest = tmp_path / "dest"
        dest.mkdir()

        assert main(["install", str(dest)]) == 0

        assert (dest / "ffmpeg").read_bytes() == b"ffmpeg"
        assert (dest / "ffprobe").read_bytes() == b"ffprobe"

    def test_only_one(self, blobs, tmp_path):
        assert main(["install", str(tmp_path), "--only", "ffprobe"]) == 0
        assert (tmp_path / "ffprobe").exists()
        assert not (tmp_path / "ffmpeg").exists()

    def test_missing_destination(self, blobs, tmp_path):
        assert main(["install", str(tmp_path / "missing")]) == 1


class TestVerifyCommand:
    def test_ok(self, tmp_path, capsys):
        with patch("ffmpeg_builder.cli.probe_binary",
                   return_value=VersionInfo(program="ffmpeg", version="4.1")):
            assert main(["verify", str(tmp_path)]) == 0
        assert "4.1" in capsys.readouterr().out

    def test_failure(self, tmp_path):
        with patch("ffmpeg_builder.cli.probe_binary",
                   return_value=VersionInfo(success=False, error="not found")):
            assert main(["verify", str(tmp_path)]) == 1
