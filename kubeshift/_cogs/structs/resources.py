"""
The API discovery model: groups, their resource lists, and the resources.

These structures exist only while the client is being built: they are
parsed from the discovery responses, folded into the method tables,
and then dropped. Nothing of the built client refers to them afterwards.
"""
import dataclasses
from collections.abc import Collection, Mapping
from typing import Any


@dataclasses.dataclass(frozen=True)
class ResourceGroup:
    """
    An API group as listed by the API groups discovery (or a legacy one).

    ``prefix`` is ``"apis"`` for the regular groups, and empty for the legacy
    ``api`` & ``oapi`` groups, which are served at the server's root.
    """
    name: str
    preferred_version: str
    versions: tuple[str, ...] = ()
    prefix: str = 'apis'

    def get_path(self, version: str) -> str:
        return '/'.join(part for part in [self.prefix, self.name, version] if part)

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any], *, prefix: str = 'apis') -> "ResourceGroup":
        return cls(
            name=raw['name'],
            preferred_version=raw['preferredVersion']['version'],
            versions=tuple(version['version'] for version in raw.get('versions') or []),
            prefix=prefix,
        )


@dataclasses.dataclass(frozen=True)
class APIResource:
    """
    A REST resource available on the API server within one group-version.

    The ``name`` is the collection's path segment, e.g. ``"deployments"``;
    for subresources, it contains a slash, e.g. ``"pods/log"``.
    """
    kind: str
    name: str
    namespaced: bool
    verbs: tuple[str, ...] = ()

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> "APIResource":
        return cls(
            kind=raw['kind'],
            name=raw['name'],
            namespaced=bool(raw.get('namespaced', False)),
            verbs=tuple(raw.get('verbs') or []),
        )


@dataclasses.dataclass(frozen=True)
class ResourceList:
    """
    All resources of one group-version, and the path prefix to reach them.
    """
    group_version: str
    path: str
    resources: Collection[APIResource]

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any], *, path: str) -> "ResourceList":
        return cls(
            group_version=raw.get('groupVersion') or path,
            path=path,
            resources=tuple(APIResource.from_raw(item) for item in raw.get('resources') or []),
        )
