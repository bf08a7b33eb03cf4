import dataclasses
import json
import logging
import re
from collections.abc import Mapping
from typing import Any

import aiohttp.test_utils
import aiohttp.web
import pytest

from kubeshift._cogs.clients.api import APITransport, Response
from kubeshift._cogs.clients.auth import APIContext
from kubeshift._cogs.configs.configuration import ClientSettings
from kubeshift._cogs.structs.credentials import ConnectionInfo


@pytest.fixture()
def settings():
    return ClientSettings()


@pytest.fixture()
def logger():
    return logging.getLogger('kubeshift.tests')


#
# The discovery payloads as served by a typical cluster (reduced to the essentials).
#

@pytest.fixture()
def groups_listing():
    return {
        'kind': 'APIGroupList',
        'groups': [
            {
                'name': 'apps',
                'versions': [{'groupVersion': 'apps/v1', 'version': 'v1'}],
                'preferredVersion': {'groupVersion': 'apps/v1', 'version': 'v1'},
            },
        ],
    }


@pytest.fixture()
def apps_v1_listing():
    return {
        'kind': 'APIResourceList',
        'groupVersion': 'apps/v1',
        'resources': [
            {'name': 'deployments', 'kind': 'Deployment', 'namespaced': True,
             'verbs': ['get', 'list', 'create']},
        ],
    }


@pytest.fixture()
def empty_listing():
    return {'kind': 'APIResourceList', 'groupVersion': 'v1', 'resources': []}


#
# A fake transport for the tests of the layers above the HTTP requests.
# No sockets, no sessions: the requests are remembered, the responses are canned.
#

@dataclasses.dataclass(frozen=True)
class SentRequest:
    method: str
    path: str
    payload: object | None = None
    headers: Mapping[str, str] | None = None


class FakeTransport:

    def __init__(self) -> None:
        super().__init__()
        self.requests: list[SentRequest] = []
        self.responses: dict[tuple[str, str], Response | BaseException] = {}
        self.default: Response | BaseException = Response(status=200, data={})

    def add(self, method: str, path: str, result: Any, *, status: int = 200) -> None:
        if not isinstance(result, (Response, BaseException)):
            result = Response(status=status, data=result)
        self.responses[method, path] = result

    async def send(
            self,
            method: str,
            path: str,
            *,
            payload: object | None = None,
            headers: Mapping[str, str] | None = None,
    ) -> Response:
        self.requests.append(SentRequest(method=method, path=path, payload=payload, headers=headers))
        result = self.responses.get((method, path), self.default)
        if isinstance(result, BaseException):
            raise result
        return result


@pytest.fixture()
def fake_transport():
    return FakeTransport()


@pytest.fixture()
def discoverable_transport(fake_transport, groups_listing, apps_v1_listing, empty_listing):
    """ A fake transport that serves one group `apps/v1` and the empty legacy groups. """
    fake_transport.add('get', 'apis', groups_listing)
    fake_transport.add('get', 'apis/apps/v1', apps_v1_listing)
    fake_transport.add('get', 'api/v1', empty_listing)
    fake_transport.add('get', 'oapi/v1', empty_listing)
    return fake_transport


#
# A fake API server for the tests of the HTTP layer. It runs locally on a random port,
# serves the canned responses by method & path, and remembers all the requests.
#

@dataclasses.dataclass(frozen=True)
class ServedRequest:
    method: str
    path: str
    query: Mapping[str, str]
    headers: Mapping[str, str]
    data: Any


class FakeAPIServer:

    def __init__(self) -> None:
        super().__init__()
        self.url = ''
        self.requests: list[ServedRequest] = []
        self.responses: dict[tuple[str, str], tuple[int, Any]] = {}

    def add(self, method: str, path: str, payload: Any = None, *, status: int = 200) -> None:
        self.responses[method.upper(), path] = (status, payload)

    def respond(self, status: int, payload: Any) -> aiohttp.web.Response:
        # A new response every time: the prepared responses cannot be sent twice.
        match payload:
            case None:
                return aiohttp.web.Response(status=status)
            case str():
                return aiohttp.web.Response(status=status, text=payload)
            case _:
                return aiohttp.web.json_response(payload, status=status)

    async def handle(self, request: aiohttp.web.Request) -> aiohttp.web.StreamResponse:
        text = await request.text()
        try:
            data = json.loads(text) if text else None
        except json.JSONDecodeError:
            data = text
        self.requests.append(ServedRequest(
            method=request.method,
            path=request.path,
            query=dict(request.query),
            headers=dict(request.headers),
            data=data,
        ))
        try:
            status, payload = self.responses[request.method, request.path]
        except KeyError:
            return aiohttp.web.json_response({
                'kind': 'Status', 'apiVersion': 'v1', 'status': 'Failure',
                'reason': 'NotFound', 'code': 404, 'message': 'the server could not find it',
            }, status=404)
        else:
            return self.respond(status, payload)


@pytest.fixture()
async def api_server():
    server = FakeAPIServer()
    app = aiohttp.web.Application()
    app.router.add_route('*', '/{tail:.*}', server.handle)
    async with aiohttp.test_utils.TestServer(app) as test_server:
        server.url = str(test_server.make_url('/'))
        yield server


@pytest.fixture()
async def context(api_server):
    context = APIContext(ConnectionInfo(server=api_server.url, token='fake-token'))
    try:
        yield context
    finally:
        await context.close()


@pytest.fixture()
def transport(context, settings, logger):
    return APITransport(context, settings=settings, logger=logger)


#
# Helpers for the logging checks.
#

@pytest.fixture()
def assert_logs(caplog):
    """
    A function to assert the logs are present (by pattern).

    The listed message patterns MUST be present, in the order specified.
    Some other log messages can also be present, but they are ignored.
    """
    def assert_logs_fn(patterns, prohibited=[]):
        __traceback_hide__ = True
        remaining_patterns = list(patterns)
        for message in caplog.messages:
            if remaining_patterns and re.search(remaining_patterns[0], message):
                remaining_patterns[:1] = []

            # Check that the prohibited patterns do not appear in any message.
            for pattern in prohibited:
                if re.search(pattern, message):
                    raise AssertionError(f"Prohibited log pattern found: {message!r} ~ {pattern!r}")

        if remaining_patterns:
            raise AssertionError(f"Few patterns were missed: {remaining_patterns!r}")

    return assert_logs_fn
