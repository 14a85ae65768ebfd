"""Application-wide logging initialization

IMPORTANT: Call `initialize_logging()` in the lambda package's `__init__.py`
before anything logs.

Every record is written to stdout as one JSON line, so CloudWatch Logs
Insights can filter on any field passed through `extra=`:

    {"timestamp": "2025-12-26T12:00:00.000Z", "level": "INFO", "logger": "tinylink.store",
     "message": "Created link.", "shortcode": "Ab12", "attempt": 1}

A logged exception adds an "exception" field with the formatted traceback.
"""

import os
import json
import logging
import logging.config
from datetime import datetime, UTC

from tinylink.constants import ENV


# Attributes every LogRecord carries. Anything else was passed via `extra=`.
RESERVED_ATTRS = frozenset(logging.makeLogRecord({}).__dict__) | {'message', 'asctime'}

# SDK loggers that flood DEBUG output with request signing and wire dumps
QUIET_LOGGERS = ('boto3', 'botocore', 'urllib3')


def _utc_timestamp(created: float) -> str:
    return datetime.fromtimestamp(created, tz=UTC).isoformat(timespec='milliseconds').replace('+00:00', 'Z')


class JsonFormatter(logging.Formatter):
    """Render a LogRecord with its `extra` fields as a single JSON object"""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            'timestamp': _utc_timestamp(record.created),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }
        log.update((key, value) for key, value in record.__dict__.items() if key not in RESERVED_ATTRS)

        if record.exc_info:
            log['exception'] = self.formatException(record.exc_info)
        if record.stack_info:
            log['stack'] = self.formatStack(record.stack_info)

        # Decimals from DynamoDB and exception objects end up as str()
        return json.dumps(log, default=str)


def logging_config(log_level: str) -> dict:
    """Build the dictConfig schema: JSON to stdout at `log_level`, SDK loggers held at WARNING"""
    return {
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {'json': {'()': JsonFormatter}},
        'handlers': {
            'stdout': {
                'class': 'logging.StreamHandler',
                'formatter': 'json',
                'stream': 'ext://sys.stdout',
            }
        },
        'loggers': {name: {'level': 'WARNING'} for name in QUIET_LOGGERS},
        'root': {'level': log_level, 'handlers': ['stdout']},
    }


def initialize_logging() -> None:
    logging.config.dictConfig(logging_config(os.getenv(ENV.App.LOG_LEVEL, 'INFO').upper()))
