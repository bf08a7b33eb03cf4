"""
Building the client from the API discovery.

The discovery is done once: the groups are listed, the resources of every
group-version are listed, and every verb of every resource gets its method(s).
If any of the discovery requests fails, no client is built at all.
"""
import logging
from collections.abc import Collection, Mapping

import aiohttp

from kubeshift._cogs.clients import api, auth, discovery
from kubeshift._cogs.configs import configuration
from kubeshift._cogs.helpers import typedefs
from kubeshift._cogs.structs import credentials, resources
from kubeshift._core.methods import naming
from kubeshift._core.reactor import tables


async def build(
        url: str | None = None,
        token: str | None = None,
        *,
        info: credentials.ConnectionInfo | None = None,
        settings: configuration.ClientSettings | None = None,
        session: aiohttp.ClientSession | None = None,
        transport: api.Transport | None = None,
        logger: typedefs.Logger | None = None,
) -> tables.DynamicClient:
    """
    Discover the API and build a client with methods for all resources & verbs.

    The server is given either as ``url`` & ``token``, or as a full ``info``.
    A ready-made ``session`` is used as is and is not closed by the client.
    A custom ``transport`` replaces the HTTP layer completely.
    """
    settings = settings if settings is not None else configuration.ClientSettings()
    logger = logger if logger is not None else logging.getLogger('kubeshift')

    context: auth.APIContext | None = None
    if transport is None:
        if info is None:
            if url is None:
                raise TypeError("Either a URL, or a connection info, or a transport is required.")
            info = credentials.ConnectionInfo(server=url, token=token)
        context = auth.APIContext(info, session=session)
        transport = api.APITransport(context, settings=settings, logger=logger)

    try:
        resource_lists = await discovery.scan_resources(
            transport=transport,
            settings=settings,
            logger=logger,
        )
    except BaseException:
        if context is not None:
            await context.close()
        raise

    methods, spec = fold_resource_lists(
        resource_lists,
        transport=transport,
        plurals=settings.naming.plurals,
    )
    client = tables.DynamicClient(methods=methods, spec=spec, transport=transport, context=context)
    logger.info(f"The client is built with {sum(len(table) for table in methods.values())} "
                f"methods in {len(methods)} group-versions.")
    return client


def fold_resource_lists(
        resource_lists: Collection[resources.ResourceList],
        *,
        transport: api.Transport,
        plurals: Mapping[str, str] | None = None,
) -> tuple[tables.MethodTable, tables.ClientSpec]:
    """
    Derive the methods & their specs for all verbs of all discovered resources.

    The same method name in the same group-version is overwritten by the later
    resource, both in the methods and in the specs (in its original position).
    """
    methods: dict[str, dict[str, tables.Method]] = {}
    specs: dict[str, dict[str, tables.MethodSpec]] = {}
    for resource_list in resource_lists:
        for resource in resource_list.resources:
            for verb in resource.verbs:
                method = tables.Method(
                    verb=verb,
                    kind=resource.kind,
                    prefix=resource_list.path,
                    resource=resource.name,
                    namespaced=resource.namespaced,
                    transport=transport,
                )
                method_spec_table = specs.setdefault(resource_list.path, {})
                method_table = methods.setdefault(resource_list.path, {})
                for method_name in naming.get_method_names(verb, resource.kind, resource.name,
                                                           plurals=plurals):
                    method_table[method_name] = method
                    method_spec_table[method_name] = tables.MethodSpec(
                        method_name=method_name,
                        resource_kind=resource.kind,
                        namespaced=resource.namespaced,
                    )
    spec = {path: tuple(method_specs.values()) for path, method_specs in specs.items()}
    return methods, spec
