"""Unit tests for JSON logging

Test coverage includes:
    1. JsonFormatter emits timestamp, level, logger, message and `extra` fields.
    2. initialize_logging() honours LOG_LEVEL.
"""

import sys
import json
import logging

from shortlinks.utils.logging import JsonFormatter, initialize_logging


def test_json_formatter_includes_extras():
    record = logging.makeLogRecord(
        {
            'name': 'shortlinks.allocation.allocator',
            'levelname': 'WARNING',
            'levelno': logging.WARNING,
            'msg': 'Shortcode collision, regenerating.',
            'shortcode': 'aB3xZ9',
            'attempt': 2,
        }
    )
    record.created = 1792324800.0  # 2026-10-18T12:00:00Z

    log = json.loads(JsonFormatter().format(record))

    assert log == {
        'timestamp': '2026-10-18T12:00:00.000Z',
        'level': 'WARNING',
        'logger': 'shortlinks.allocation.allocator',
        'message': 'Shortcode collision, regenerating.',
        'shortcode': 'aB3xZ9',
        'attempt': 2,
    }


def test_json_formatter_includes_exception():
    try:
        raise RuntimeError('boom')
    except RuntimeError:
        record = logging.getLogger('test').makeRecord('test', logging.ERROR, __file__, 1, 'failed', (), exc_info=sys.exc_info())

    log = json.loads(JsonFormatter().format(record))

    assert log['message'] == 'failed'
    assert 'RuntimeError: boom' in log['exception']


def test_initialize_logging_level(monkeypatch):
    monkeypatch.setenv('LOG_LEVEL', 'debug')
    initialize_logging()

    root = logging.getLogger()
    assert root.level == logging.DEBUG
    assert any(isinstance(handler.formatter, JsonFormatter) for handler in root.handlers)
