import logging

import pytest

from kubeshift._core.actions.loggers import ClientFormatter


@pytest.fixture(autouse=True)
def _caplog_all_levels(caplog):
    caplog.set_level(0)


@pytest.fixture(autouse=True)
def _clear_own_handlers():
    logger = logging.getLogger()
    original_level = logger.level
    original_handlers = [
        handler for handler in logger.handlers
        if not isinstance(handler.formatter, ClientFormatter)
    ]
    asyncio_logger = logging.getLogger('asyncio')
    original_asyncio_propagate = asyncio_logger.propagate
    original_asyncio_handlers = asyncio_logger.handlers[:]
    yield
    logger.handlers[:] = original_handlers
    logger.setLevel(original_level)
    asyncio_logger.propagate = original_asyncio_propagate
    asyncio_logger.handlers[:] = original_asyncio_handlers
