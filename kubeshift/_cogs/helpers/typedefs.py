"""
Rudimentary type [re-]definitions used across the codebase.

The stdlib's ``logging.LoggerAdapter`` is generic only in the type-sheds,
not at runtime, so it is aliased here once in a form usable everywhere.
"""
import logging
from typing import TYPE_CHECKING, Any, Union

if TYPE_CHECKING:
    LoggerAdapter = logging.LoggerAdapter[Any]
else:
    LoggerAdapter = logging.LoggerAdapter

# As publicly exposed: we only promise that it is based on one of the built-in loggable classes.
Logger = Union[logging.Logger, LoggerAdapter]
