"""
Logging setup for build runs.

Feature names, URLs and paths come from the environment and config files
and end up in log lines. A value with an embedded newline could forge a
log entry, so a LogRecord factory escapes CR/LF in every log argument.
"""

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

_ORIGINAL_FACTORY = logging.getLogRecordFactory()


def _escape(value):
    """Escape CR and LF in strings; other values pass through."""
    if isinstance(value, str):
        return value.replace('\r', '\\r').replace('\n', '\\n')
    if isinstance(value, (list, tuple)) and all(isinstance(v, str) for v in value):
        return type(value)(_escape(v) for v in value)
    return value


def _escaping_record_factory(*args, **kwargs):
    record = _ORIGINAL_FACTORY(*args, **kwargs)
    if record.args:
        if isinstance(record.args, dict):
            record.args = {k: _escape(v) for k, v in record.args.items()}
        elif isinstance(record.args, tuple):
            record.args = tuple(_escape(a) for a in record.args)
    return record


def configure_logging(level: str = "INFO") -> None:
    """Set the root log format/level and install the escaping record factory."""
    logging.setLogRecordFactory(_escaping_record_factory)
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT, force=True)
