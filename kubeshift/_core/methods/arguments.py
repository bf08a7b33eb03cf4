"""
Arguments of the synthesized methods: what is the namespace, the item, the config.

Every method accepts the same loosely-typed positional arguments,
and resolves them by their number and types::

    ()                                  # nothing
    ('ns',)                             # namespace
    ({'query': ...},)                   # config
    ('ns', {'query': ..., 'body': ...}) # namespace, config
    ('ns', 'name')                      # namespace, item
    ('ns', 'name', {'body': ...})       # namespace, item, config

Any other combination resolves to nothing at all (as with no arguments).
For cluster-scoped resources, the namespace is accepted but not used,
so items are addressed as ``('', 'name')``.

Alternatively, a single :class:`CallArguments` can be passed, built explicitly::

    CallArguments().with_namespace('ns').with_item('name').with_query({'limit': 10})
"""
import dataclasses
from collections.abc import Mapping, Sequence
from typing import Any

from kubeshift._cogs.clients import errors


@dataclasses.dataclass(frozen=True)
class CallConfig:
    query: Mapping[str, Any] | None = None
    body: Any | None = None

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> "CallConfig":
        # Unknown keys are ignored: the config is a loose user-supplied mapping.
        return cls(query=raw.get('query'), body=raw.get('body'))


@dataclasses.dataclass(frozen=True)
class CallArguments:
    """
    The resolved (or explicitly built) arguments of a method call.
    """
    namespace: str | None = None
    item: str | None = None
    config: CallConfig = CallConfig()

    @property
    def query(self) -> Mapping[str, Any] | None:
        return self.config.query

    @property
    def body(self) -> Any | None:
        return self.config.body

    def with_namespace(self, namespace: str | None) -> "CallArguments":
        return dataclasses.replace(self, namespace=namespace)

    def with_item(self, item: str | None) -> "CallArguments":
        return dataclasses.replace(self, item=item)

    def with_query(self, query: Mapping[str, Any] | None) -> "CallArguments":
        return dataclasses.replace(self, config=dataclasses.replace(self.config, query=query))

    def with_body(self, body: Any | None) -> "CallArguments":
        return dataclasses.replace(self, config=dataclasses.replace(self.config, body=body))

    def validate(self, *, namespaced: bool) -> "CallArguments":
        if namespaced and not self.namespace:
            raise errors.MissingNamespaceError("This method should contain at least a namespace.")
        return self


def resolve(args: Sequence[Any], *, namespaced: bool) -> CallArguments:
    """
    Resolve the positional arguments of a method call by their number & types.

    A namespaced resource requires a non-empty namespace; the error is raised
    here, i.e. before any request is made.
    """
    resolved: CallArguments
    match args:
        case [CallArguments() as explicit]:
            resolved = explicit
        case [str() as namespace]:
            resolved = CallArguments(namespace=namespace)
        case [Mapping() as config]:
            resolved = CallArguments(config=CallConfig.from_raw(config))
        case [str() as namespace, Mapping() as config]:
            resolved = CallArguments(namespace=namespace, config=CallConfig.from_raw(config))
        case [str() as namespace, str() as item]:
            resolved = CallArguments(namespace=namespace, item=item)
        case [str() as namespace, str() as item, Mapping() as config]:
            resolved = CallArguments(namespace=namespace, item=item, config=CallConfig.from_raw(config))
        case _:
            resolved = CallArguments()
    return resolved.validate(namespaced=namespaced)
