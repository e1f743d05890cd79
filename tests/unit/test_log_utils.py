"""Tests for log_utils: log line escaping and logging setup."""

import logging

import pytest

from ffmpeg_builder.log_utils import (
    _escape,
    _escaping_record_factory,
    configure_logging,
)


class TestEscape:
    def test_escapes_newlines(self):
        assert _escape("line1\nline2") == "line1\\nline2"

    def test_escapes_crlf(self):
        assert _escape("line1\r\nline2") == "line1\\r\\nline2"

    def test_passes_non_strings(self):
        assert _escape(42) == 42
        assert _escape(None) is None

    def test_escapes_command_lists(self):
        assert _escape(["--enable-gpl", "--x\n"]) == ["--enable-gpl", "--x\\n"]

    def test_mixed_lists_untouched(self):
        value = ["a\n", 1]
        assert _escape(value) is value


class TestEscapingRecordFactory:
    def _make_record(self, msg, args):
        return _escaping_record_factory(
            "test", logging.INFO, __file__, 0, msg, args, None,
        )

    def test_tuple_args(self):
        record = self._make_record("Running: %s (cwd=%s)", ("make\n-j", "/src"))
        assert record.getMessage() == "Running: make\\n-j (cwd=/src)"

    def test_no_args(self):
        record = self._make_record("Finished", None)
        assert record.getMessage() == "Finished"

    def test_non_string_args(self):
        record = self._make_record("%s exited with code %d", ("make", 2))
        assert record.getMessage() == "make exited with code 2"


class TestConfigureLogging:
    @pytest.fixture(autouse=True)
    def restore_logging(self):
        factory = logging.getLogRecordFactory()
        root = logging.getLogger()
        handlers, level = root.handlers[:], root.level
        yield
        logging.setLogRecordFactory(factory)
        root.handlers[:] = handlers
        root.setLevel(level)

    def test_installs_factory(self):
        configure_logging("info")
        assert logging.getLogRecordFactory() is _escaping_record_factory

    def test_sets_level(self):
        configure_logging("debug")
        assert logging.getLogger().level == logging.DEBUG
