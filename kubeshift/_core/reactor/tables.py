"""
The synthesized client: its method table, its specs, and the methods themselves.

The method table is keyed by the group-version's path (e.g. ``"apis/apps/v1"``,
``"api/v1"``), and then by the method name (e.g. ``"getDeployment"``)::

    client = await kubeshift.build(url=..., token=...)
    deployment = await client['apis/apps/v1']['getDeployment']('default', 'web')

Both the method table and the client spec are read-only once built:
the client is never re-discovered or extended.
"""
import dataclasses
import types
from collections.abc import Awaitable, Iterator, Mapping
from typing import Any

from kubeshift._cogs.clients import api, auth, errors
from kubeshift._core.methods import arguments, dispatching, routing


@dataclasses.dataclass(frozen=True)
class MethodSpec:
    """ A description of one method, for introspection & documentation only. """
    method_name: str
    resource_kind: str
    namespaced: bool


class Method:
    """
    A callable bound to one verb of one resource in one group-version.

    Calling it resolves the arguments, builds the route, and shapes the request
    immediately (so that the argument errors are raised at the call site),
    and returns an awaitable that makes the actual request.
    """

    def __init__(
            self,
            *,
            verb: str,
            kind: str,
            prefix: str,
            resource: str,
            namespaced: bool,
            transport: api.Transport,
    ) -> None:
        super().__init__()
        self.verb = verb
        self.kind = kind
        self.prefix = prefix
        self.resource = resource
        self.namespaced = namespaced
        self._transport = transport

    def __repr__(self) -> str:
        return f'<{self.__class__.__name__} {self.verb} {self.prefix}/{self.resource}>'

    def __call__(self, *args: Any) -> Awaitable[Any]:
        resolved = arguments.resolve(args, namespaced=self.namespaced)
        route = routing.build_route(
            self.prefix,
            self.resource,
            namespaced=self.namespaced,
            namespace=resolved.namespace,
            item=resolved.item,
            query=resolved.query,
        )
        request = dispatching.prepare(self.verb, resolved.body)
        return dispatching.send(request, route, transport=self._transport)


MethodTable = Mapping[str, Mapping[str, Method]]
ClientSpec = Mapping[str, tuple[MethodSpec, ...]]


class DynamicClient(Mapping[str, Mapping[str, Method]]):
    """
    The client as built from the API discovery.

    It is a read-only mapping of group-versions to their methods by name.
    Use as an async context manager (or call :meth:`close`) to close
    the HTTP session when the session is created by the client.
    """

    def __init__(
            self,
            *,
            methods: MethodTable,
            spec: ClientSpec,
            transport: api.Transport,
            context: auth.APIContext | None = None,
    ) -> None:
        super().__init__()
        self._methods: MethodTable = types.MappingProxyType({
            group_version: types.MappingProxyType(dict(table))
            for group_version, table in methods.items()
        })
        self._spec: ClientSpec = types.MappingProxyType(dict(spec))
        self._transport = transport
        self._context = context

    def __getitem__(self, group_version: str) -> Mapping[str, Method]:
        return self._methods[group_version]

    def __iter__(self) -> Iterator[str]:
        return iter(self._methods)

    def __len__(self) -> int:
        return len(self._methods)

    async def __aenter__(self) -> "DynamicClient":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def close(self) -> None:
        if self._context is not None:
            await self._context.close()

    @property
    def methods(self) -> MethodTable:
        return self._methods

    @property
    def spec(self) -> ClientSpec:
        return self._spec

    def get_methods(self, format: str | None = None) -> ClientSpec | str:
        """
        Get all the methods: either as a structure, or as a Markdown listing.
        """
        match format:
            case None:
                return self._spec
            case 'markdown':
                return render_markdown(self._spec)
            case _:
                raise ValueError(f"Unsupported methods format: {format!r}")

    def invoke(self, group_version: str, method_name: str, *args: Any) -> Awaitable[Any]:
        try:
            method = self._methods[group_version][method_name]
        except KeyError:
            raise errors.UnknownMethodError(
                f"No method {method_name!r} in {group_version!r}.") from None
        return method(*args)

    def custom_call(self, verb: str, path: str, body: object | None = None) -> Awaitable[Any]:
        """
        Make an arbitrary request for things not exposed by the discovery.

        The verb is the transport's method (``get``, ``post``, ``put``, etc.),
        not the API discovery's verb. The path is used as is.
        """
        request = dispatching.prepare_custom(verb, body)
        return dispatching.send(request, path, transport=self._transport)


def render_markdown(spec: ClientSpec) -> str:
    text = ''
    for group_version, method_specs in spec.items():
        text += f'### {group_version}\n\n'
        for method_spec in method_specs:
            text += f'- {method_spec.method_name}({"namespace" if method_spec.namespaced else ""})\n'
        text += '\n'
    return text
