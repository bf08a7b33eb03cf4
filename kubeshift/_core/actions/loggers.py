"""
Logging setup for the CLI and for the applications that want the same format.

The library itself only logs to the ``kubeshift`` logger (or to a logger given
to the client), and never configures the logging on its own.
Configuring is the job of the CLI, or of the application using the library.

The request-level log records carry the request's method & path in the extras,
so that the JSON logs can be parsed without parsing the messages.
"""
import enum
import logging
from collections.abc import MutableMapping
from typing import TYPE_CHECKING, TextIO

from pythonjsonlogger.core import RESERVED_ATTRS
from pythonjsonlogger.json import JsonFormatter

# A key for request references in JSON logs, as seen by the log parsers.
DEFAULT_JSON_REFKEY = 'request'


class LogFormat(enum.Enum):
    """ Log formats, as specified on CLI. """
    PLAIN = '%(message)s'
    FULL = '[%(asctime)s] %(name)-20.20s [%(levelname)-8.8s] %(message)s'
    JSON = '-json-'  # not used for formatting, only for detection


class ClientFormatter(logging.Formatter):
    pass


class ClientTextFormatter(ClientFormatter, logging.Formatter):
    pass


class ClientJsonFormatter(ClientFormatter, JsonFormatter):
    def __init__(
            self,
            *args: object,
            refkey: str | None = None,
            **kwargs: object,
    ) -> None:
        # Avoid type checking, as the args are not in the parent consructor.
        reserved_attrs = set(kwargs.pop('reserved_attrs', RESERVED_ATTRS))  # type: ignore
        reserved_attrs |= {'k8s_request'}
        kwargs |= dict(reserved_attrs=reserved_attrs)
        kwargs.setdefault('timestamp', True)
        super().__init__(*args, **kwargs)
        self._refkey: str = refkey or DEFAULT_JSON_REFKEY

    def add_fields(
            self,
            log_record: MutableMapping[str, object],
            record: logging.LogRecord,
            message_dict: MutableMapping[str, object],
    ) -> None:
        super().add_fields(log_record, record, message_dict)  # type: ignore

        if self._refkey and hasattr(record, 'k8s_request'):
            log_record[self._refkey] = getattr(record, 'k8s_request')

        if 'severity' not in log_record:
            log_record['severity'] = (
                "debug" if record.levelno <= logging.DEBUG else
                "info" if record.levelno <= logging.INFO else
                "warn" if record.levelno <= logging.WARNING else
                "error" if record.levelno <= logging.ERROR else
                "fatal")


# Used to identify and remove our own handlers on repeated configuration (e.g. in CLI tests),
# so that the handlers are replaced, not accumulated.
if TYPE_CHECKING:
    class _ClientStreamHandler(logging.StreamHandler[TextIO]):
        pass
else:
    class _ClientStreamHandler(logging.StreamHandler):
        pass


def configure(
        debug: bool | None = None,
        verbose: bool | None = None,
        quiet: bool | None = None,
        log_format: LogFormat | str = LogFormat.FULL,
        log_refkey: str | None = None,
) -> None:
    log_level = 'DEBUG' if debug or verbose else 'WARNING' if quiet else 'INFO'
    formatter = make_formatter(log_format=log_format, log_refkey=log_refkey)
    handler = _ClientStreamHandler()
    handler.setFormatter(formatter)
    logger = logging.getLogger()
    logger.handlers[:] = [h for h in logger.handlers if not isinstance(h, _ClientStreamHandler)]
    logger.addHandler(handler)
    logger.setLevel(log_level)

    # Prevent the low-level logging unless in the debug mode. Keep only the client's messages.
    # For no-propagation loggers, add a dummy null handler to prevent printing the messages.
    for name in ['asyncio']:
        logger = logging.getLogger(name)
        logger.propagate = bool(debug)
        if not debug:
            logger.handlers[:] = [logging.NullHandler()]


def make_formatter(
        log_format: LogFormat | str = LogFormat.FULL,
        log_refkey: str | None = None,
) -> ClientFormatter:
    match log_format:
        case LogFormat.JSON:
            return ClientJsonFormatter(refkey=log_refkey)
        case LogFormat():
            return ClientTextFormatter(log_format.value)
        case str():
            return ClientTextFormatter(log_format)
        case _:
            raise ValueError(f"Unsupported log format: {log_format!r}")
