from collections.abc import Mapping
from typing import Any


def build_route(
        prefix: str,
        name: str,
        *,
        namespaced: bool,
        namespace: str | None = None,
        item: str | None = None,
        query: Mapping[str, Any] | None = None,
) -> str:
    """
    Build a path to be used with K8s API, relative to the server's root.

    For cluster-scoped resources, the namespace is ignored.
    If the item is not set, the path for the resource list is returned.
    Otherwise (if set), the path for the individual resource is returned.

    The query goes as ``?key1=value1&key2=value2...`` in the mapping's order.
    Neither the keys nor the values are url-encoded: they are inserted as is,
    and the caller is responsible for encoding them if needed.
    """
    parts: list[str | None] = [
        prefix,
        f'namespaces/{namespace}' if namespaced else None,
        name,
        item,
    ]
    segments = [segment for part in parts if part for segment in part.split('/') if segment]
    path = '/'.join(segments)
    if query:
        path += '?' + '&'.join(f'{key}={render(value)}' for key, value in query.items())
    return path


def render(value: Any) -> str:
    # Booleans & nulls as K8s API understands them (as in JSON), not as Python prints them.
    match value:
        case None:
            return 'null'
        case bool():
            return str(value).lower()
        case _:
            return str(value)
