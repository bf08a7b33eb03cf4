import asyncio
from collections.abc import Collection, Mapping
from typing import Any

from kubeshift._cogs.clients import api, errors
from kubeshift._cogs.configs import configuration
from kubeshift._cogs.helpers import typedefs
from kubeshift._cogs.structs import resources


async def scan_resources(
        *,
        transport: api.Transport,
        settings: configuration.ClientSettings,
        logger: typedefs.Logger,
) -> Collection[resources.ResourceList]:
    """
    Discover all groups, and then all resources in every group-version.

    The groups are read first (a single request), the resource lists are then
    read concurrently. The first failure aborts the whole scanning; other
    requests that are still in flight are not waited for, their results
    are discarded.

    The resource lists are returned in the order of the groups (the legacy
    groups are the last), regardless of the order of the responses.
    """
    groups = await read_groups(transport=transport, settings=settings, logger=logger)
    paths = [
        group.get_path(version)
        for group in groups
        for version in (
            group.versions or [group.preferred_version]
            if settings.discovery.all_versions else
            [group.preferred_version]
        )
    ]
    coros = [
        read_resource_list(path=path, transport=transport, logger=logger)
        for path in dict.fromkeys(paths)  # unique, but ordered
    ]
    return await asyncio.gather(*coros)


async def read_groups(
        *,
        transport: api.Transport,
        settings: configuration.ClientSettings,
        logger: typedefs.Logger,
) -> Collection[resources.ResourceGroup]:
    path = settings.discovery.groups_path
    rsp = await _read(path=path, transport=transport)
    try:
        groups = [resources.ResourceGroup.from_raw(raw, prefix=path) for raw in rsp['groups']]
    except (KeyError, TypeError) as e:
        raise errors.DiscoveryError(f"Malformed API groups listing at {path!r}.", path=path) from e

    # The legacy groups are never listed by the API, but they exist (or are assumed to exist).
    groups.extend(
        resources.ResourceGroup(name=name, preferred_version=version, prefix='')
        for name, version in settings.discovery.legacy_groups
    )
    logger.debug(f"Discovered {len(groups)} API groups: {[group.name for group in groups]!r}")
    return groups


async def read_resource_list(
        *,
        path: str,
        transport: api.Transport,
        logger: typedefs.Logger,
) -> resources.ResourceList:
    rsp = await _read(path=path, transport=transport)
    try:
        resource_list = resources.ResourceList.from_raw(rsp, path=path)
    except (KeyError, TypeError) as e:
        raise errors.DiscoveryError(f"Malformed resource list at {path!r}.", path=path) from e
    logger.debug(f"Discovered {len(resource_list.resources)} resources of "
                 f"{resource_list.group_version} in {path}")
    return resource_list


async def _read(
        *,
        path: str,
        transport: api.Transport,
) -> Mapping[str, Any]:
    try:
        response = await transport.send('get', path)
    except errors.KubeshiftError:
        raise
    except Exception as e:
        raise errors.DiscoveryError(f"API discovery failed at {path!r}: {e!r}", path=path) from e
    if not isinstance(response.data, Mapping):
        raise errors.DiscoveryError(f"API discovery got no listing at {path!r}.", path=path)
    return response.data
