import functools
import logging

import click.testing
import pytest

from kubeshift._core.actions.loggers import ClientFormatter
from kubeshift._core.reactor import building
from kubeshift.cli import main


@pytest.fixture(autouse=True)
def _clear_own_handlers():
    logger = logging.getLogger()
    original_level = logger.level
    yield
    logger.handlers[:] = [
        handler for handler in logger.handlers
        if not isinstance(handler.formatter, ClientFormatter)
    ]
    logger.setLevel(original_level)


@pytest.fixture()
def runner():
    runner = click.testing.CliRunner()
    return runner


@pytest.fixture()
def invoke(runner):
    return functools.partial(runner.invoke, main, env={'KUBESHIFT_SERVER': 'https://localhost'})


@pytest.fixture()
def real_build(mocker, discoverable_transport):
    """ The real building, but over the fake transport instead of the network. """
    original_build = building.build

    async def build_fn(*, info, settings):
        return await original_build(transport=discoverable_transport, settings=settings)

    return mocker.patch('kubeshift._core.reactor.building.build', side_effect=build_fn)
