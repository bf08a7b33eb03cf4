import json
import logging
from collections.abc import Collection

import pytest

from kubeshift._core.actions.loggers import ClientFormatter, ClientJsonFormatter, \
                                            ClientTextFormatter, LogFormat, configure, \
                                            make_formatter


def _get_own_handlers(logger: logging.Logger) -> Collection[logging.Handler]:
    return [
        handler for handler in logger.handlers
        if isinstance(handler, logging.StreamHandler) and
           isinstance(handler.formatter, ClientFormatter)
    ]


def _make_record(level=logging.INFO, **extras):
    record = logging.LogRecord('kubeshift', level, __file__, 1, 'Hello %s', ('world',), None)
    record.__dict__.update(extras)
    return record


def test_own_formatter_is_used():
    configure()
    own_handlers = _get_own_handlers(logging.getLogger())
    assert len(own_handlers) == 1


def test_own_handlers_are_replaced_on_reconfiguration():
    configure()
    configure(log_format=LogFormat.JSON)
    own_handlers = _get_own_handlers(logging.getLogger())
    assert len(own_handlers) == 1
    assert type(own_handlers[0].formatter) is ClientJsonFormatter


@pytest.mark.parametrize('log_format', [LogFormat.FULL, LogFormat.PLAIN, '%(message)s'])
def test_text_formatters(log_format):
    configure(log_format=log_format)
    own_handlers = _get_own_handlers(logging.getLogger())
    assert type(own_handlers[0].formatter) is ClientTextFormatter


def test_json_formatter():
    configure(log_format=LogFormat.JSON)
    own_handlers = _get_own_handlers(logging.getLogger())
    assert type(own_handlers[0].formatter) is ClientJsonFormatter


@pytest.mark.parametrize('log_format', [None, 123, object()])
def test_unsupported_formats(log_format):
    with pytest.raises(ValueError):
        make_formatter(log_format=log_format)


@pytest.mark.parametrize('debug, verbose, quiet, expected', [
    (None, None, None, logging.INFO),
    (True, None, None, logging.DEBUG),
    (None, True, None, logging.DEBUG),
    (None, None, True, logging.WARNING),
    (True, None, True, logging.DEBUG),
])
def test_levels(debug, verbose, quiet, expected):
    configure(debug=debug, verbose=verbose, quiet=quiet)
    assert logging.getLogger().level == expected


def test_asyncio_is_silenced_unless_debugging():
    configure(debug=False)
    logger = logging.getLogger('asyncio')
    assert not logger.propagate
    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0], logging.NullHandler)


def test_asyncio_propagates_when_debugging():
    configure(debug=True)
    logger = logging.getLogger('asyncio')
    assert logger.propagate


def test_plain_text_format():
    formatter = make_formatter(log_format=LogFormat.PLAIN)
    assert formatter.format(_make_record()) == 'Hello world'


def test_json_format_has_a_severity():
    formatter = make_formatter(log_format=LogFormat.JSON)
    data = json.loads(formatter.format(_make_record(level=logging.WARNING)))
    assert data['message'] == 'Hello world'
    assert data['severity'] == 'warn'
    assert 'timestamp' in data


@pytest.mark.parametrize('refkey, expected_key', [(None, 'request'), ('k8s', 'k8s')])
def test_json_format_has_request_references(refkey, expected_key):
    formatter = make_formatter(log_format=LogFormat.JSON, log_refkey=refkey)
    k8s_request = {'method': 'GET', 'url': 'https://localhost/apis'}
    data = json.loads(formatter.format(_make_record(k8s_request=k8s_request)))
    assert data[expected_key] == k8s_request
    assert 'k8s_request' not in data


def test_json_format_without_request_references():
    formatter = make_formatter(log_format=LogFormat.JSON)
    data = json.loads(formatter.format(_make_record()))
    assert 'request' not in data
