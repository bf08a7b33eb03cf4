"""
All configuration flags, options, settings to fine-tune a client.

All settings are grouped semantically just for convenience
(instead of a flat mega-object with all the values in it).

Some of the settings are flags, some are scalars, some are optional,
some are not (but all of them have reasonable defaults). The settings are
read when the client is built and when its methods are called; changing
them after the client is built affects only the requests made afterwards.
"""
import dataclasses
from collections.abc import Mapping


@dataclasses.dataclass
class NetworkingSettings:

    request_timeout: float | None = 5 * 60  # == aiohttp.client.DEFAULT_TIMEOUT
    """
    A timeout for the whole of a single API request, in seconds.
    ``None`` disables the timeout (on your own risk).
    """

    connect_timeout: float | None = None
    """
    A timeout for establishing a connection to the API server, in seconds.
    ``None`` means that only the total ``request_timeout`` applies.
    """


@dataclasses.dataclass
class DiscoverySettings:

    groups_path: str = 'apis'
    """
    The path of the API groups listing, relative to the server's root.
    Every discovered group's resources are then read from
    ``<groups_path>/<group>/<version>``.
    """

    legacy_groups: tuple[tuple[str, str], ...] = (('api', 'v1'), ('oapi', 'v1'))
    """
    The groups that are never listed by the API groups discovery, but exist:
    the core API (``api/v1``) and the OpenShift legacy API (``oapi/v1``).
    They are read from ``<name>/<version>``, i.e. not under ``groups_path``.

    Pure Kubernetes clusters serve no ``oapi/v1``, so the discovery fails
    there unless this is reduced to ``(('api', 'v1'),)``.
    """

    all_versions: bool = False
    """
    Should all served versions of every group be scanned, or only the
    preferred one. Every version gets its own method table either way.
    """


@dataclasses.dataclass
class NamingSettings:

    plurals: Mapping[str, str] | None = None
    """
    Irregular plurals of resource kinds, e.g. ``{"Ingress": "Ingresses"}``.
    Used for the ``get<Plural>`` aliases of the ``list`` verbs.
    ``None`` means the table packaged with the library.
    Kinds absent from the table are pluralised by appending ``"s"``.
    """


@dataclasses.dataclass
class ClientSettings:
    networking: NetworkingSettings = dataclasses.field(default_factory=NetworkingSettings)
    discovery: DiscoverySettings = dataclasses.field(default_factory=DiscoverySettings)
    naming: NamingSettings = dataclasses.field(default_factory=NamingSettings)
