"""
Verbs of K8s API discovery mapped to HTTP requests.

Only the verbs with a known request shape are supported. Other verbs
that the discovery can report (``watch``, ``proxy``, etc.) still get their
methods, but those methods fail when called (not when the client is built).
"""
import dataclasses
from collections.abc import Mapping
from typing import Any

from kubeshift._cogs.clients import api, errors


@dataclasses.dataclass(frozen=True)
class Request:
    method: str
    payload: object | None = None
    headers: Mapping[str, str] | None = None


@dataclasses.dataclass(frozen=True)
class VerbShape:
    method: str
    content_type: str | None = None  # also means that the payload is sent.


VERBS: Mapping[str, VerbShape] = {
    'create': VerbShape('post', 'application/json'),
    'delete': VerbShape('delete'),
    'deletecollection': VerbShape('delete'),
    'get': VerbShape('get'),
    'list': VerbShape('get'),
    'update': VerbShape('put', 'application/json'),
    'patch': VerbShape('patch', 'application/strategic-merge-patch+json'),
}

# The escape hatch's verbs are the transport's own methods, not the discovery verbs.
TRANSPORT_METHODS = frozenset({'get', 'post', 'put', 'patch', 'delete', 'head', 'options'})

# Only these carry a body; for others, the body is not sent even if given.
PAYLOAD_METHODS = frozenset({'post', 'put', 'patch'})


def prepare(verb: str, payload: object | None = None) -> Request:
    """
    Shape the request for a verb; fail right away if the verb is not supported.
    """
    try:
        shape = VERBS[verb]
    except KeyError:
        raise errors.UnsupportedVerbError(f"Unsupported verb: {verb!r}.") from None
    if shape.content_type is None:
        return Request(method=shape.method)
    return Request(method=shape.method, payload=payload, headers={'Content-Type': shape.content_type})


async def send(
        request: Request,
        route: str,
        *,
        transport: api.Transport,
) -> Any:
    response = await transport.send(
        request.method,
        route,
        payload=request.payload,
        headers=request.headers,
    )
    return api.get_data(response)


def prepare_custom(method: str, payload: object | None = None) -> Request:
    if method.lower() not in TRANSPORT_METHODS:
        raise errors.UnsupportedVerbError(f"Unsupported transport method: {method!r}.")
    if method.lower() not in PAYLOAD_METHODS:
        return Request(method=method.lower())
    return Request(method=method.lower(), payload=payload)
