import sys
import json
import logging
from decimal import Decimal

from tinylink.constants import ENV
from tinylink.utils.logging import JsonFormatter, logging_config, initialize_logging


def make_record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name='tinylink.store',
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg='Created link %s.',
        args=('Ab12',),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_renders_standard_fields() -> None:
    record = make_record()
    record.created = 1766750400.0  # 2025-12-26T12:00:00Z

    log = json.loads(JsonFormatter().format(record))

    assert log == {
        'timestamp': '2025-12-26T12:00:00.000Z',
        'level': 'INFO',
        'logger': 'tinylink.store',
        'message': 'Created link Ab12.',
    }


def test_json_formatter_includes_extras() -> None:
    log = json.loads(JsonFormatter().format(make_record(shortcode='Ab12', attempt=2)))

    assert log['shortcode'] == 'Ab12'
    assert log['attempt'] == 2


def test_json_formatter_includes_exception() -> None:
    try:
        raise ValueError('boom')
    except ValueError:
        record = make_record(exc_info=sys.exc_info())

    log = json.loads(JsonFormatter().format(record))

    assert 'ValueError: boom' in log['exception']


def test_json_formatter_includes_stack_info() -> None:
    record = make_record(stack_info='Stack (most recent call last):\n  File "app.py", line 1')

    log = json.loads(JsonFormatter().format(record))

    assert log['stack'].startswith('Stack (most recent call last):')


def test_json_formatter_serializes_unknown_types_as_strings() -> None:
    log = json.loads(JsonFormatter().format(make_record(ttl=Decimal('1760486400'), error=ValueError('boom'))))

    assert log['ttl'] == '1760486400'
    assert log['error'] == 'boom'


def test_logging_config_quiets_sdk_loggers() -> None:
    config = logging_config('DEBUG')

    assert config['root'] == {'level': 'DEBUG', 'handlers': ['stdout']}
    assert config['loggers'] == {'boto3': {'level': 'WARNING'}, 'botocore': {'level': 'WARNING'}, 'urllib3': {'level': 'WARNING'}}


def test_initialize_logging_reads_log_level(monkeypatch) -> None:
    monkeypatch.setenv(ENV.App.LOG_LEVEL, 'debug')

    initialize_logging()

    root = logging.getLogger()
    assert root.level == logging.DEBUG
    assert isinstance(root.handlers[0].formatter, JsonFormatter)
    assert logging.getLogger('botocore').level == logging.WARNING

    monkeypatch.setenv(ENV.App.LOG_LEVEL, 'INFO')
    initialize_logging()
