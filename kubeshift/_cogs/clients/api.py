"""
The HTTP transport: send a request, get back a status and a body.

Everything above this layer (the discovery, the synthesized methods,
the escape hatch) sees only the :class:`Transport` protocol, so it can be
replaced by any other implementation, e.g. a fake one in tests.

The transport does not retry anything: every failure reaches the caller.
"""
import dataclasses
import json
from collections.abc import Mapping
from typing import Any, Protocol

import aiohttp

from kubeshift._cogs.clients import auth, errors
from kubeshift._cogs.configs import configuration
from kubeshift._cogs.helpers import typedefs


@dataclasses.dataclass(frozen=True)
class Response:
    """ A response as received: the HTTP status and the parsed body, if any. """
    status: int
    data: Any = None


class Transport(Protocol):
    async def send(
            self,
            method: str,
            path: str,
            *,
            payload: object | None = None,
            headers: Mapping[str, str] | None = None,
    ) -> Response:
        ...


def get_data(response: Response) -> Any:
    """
    Return the response's body if there is one, or the whole response otherwise.
    """
    return response.data if response.data is not None and response.data != '' else response


async def request(
        method: str,
        url: str,  # relative to the server/api root.
        *,
        context: auth.APIContext,
        settings: configuration.ClientSettings,
        payload: object | None = None,
        headers: Mapping[str, str] | None = None,
        timeout: aiohttp.ClientTimeout | None = None,
        logger: typedefs.Logger,
) -> Response:

    if '://' not in url:
        url = context.server.rstrip('/') + '/' + url.lstrip('/')

    if timeout is None:
        timeout = aiohttp.ClientTimeout(
            total=settings.networking.request_timeout,
            sock_connect=settings.networking.connect_timeout,
        )

    logger.debug(f"Request: {method.upper()} {url}",
                 extra=dict(k8s_request=dict(method=method.upper(), url=url)))
    response = await context.session.request(
        method=method,
        url=url,
        json=payload,
        headers=headers,
        timeout=timeout,
    )
    async with response:
        await errors.check_response(response)
        return Response(status=response.status, data=await parse_body(response))


async def parse_body(response: aiohttp.ClientResponse) -> Any:
    """
    Parse the body as JSON if it is JSON, or keep it as text (e.g. logs).

    Empty bodies are ``None``, so that the caller can tell "no body" apart.
    """
    text = await response.text()
    if not text:
        return None
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        return text


class APITransport:
    """
    The aiohttp-based transport bound to one API server and one session.
    """

    def __init__(
            self,
            context: auth.APIContext,
            *,
            settings: configuration.ClientSettings,
            logger: typedefs.Logger,
    ) -> None:
        super().__init__()
        self.context = context
        self.settings = settings
        self.logger = logger

    async def send(
            self,
            method: str,
            path: str,
            *,
            payload: object | None = None,
            headers: Mapping[str, str] | None = None,
    ) -> Response:
        return await request(
            method=method,
            url=path,
            payload=payload,
            headers=headers,
            context=self.context,
            settings=self.settings,
            logger=self.logger,
        )
