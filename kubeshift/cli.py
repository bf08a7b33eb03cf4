import asyncio
import dataclasses
import functools
import json
from collections.abc import Awaitable, Callable
from typing import Any

import aiohttp
import click
import yaml

from kubeshift._cogs.clients import api, errors
from kubeshift._cogs.configs import configuration
from kubeshift._cogs.structs import credentials
from kubeshift._core.actions import loggers
from kubeshift._core.reactor import building, tables


class LogFormatParamType(click.Choice):

    def __init__(self) -> None:
        super().__init__(choices=[v.name.lower() for v in loggers.LogFormat])

    def convert(self, value: Any, param: Any, ctx: Any) -> loggers.LogFormat:
        name: str = super().convert(value, param, ctx)
        return loggers.LogFormat[name.upper()]


def logging_options(fn: Callable[..., Any]) -> Callable[..., Any]:
    """ A decorator to configure logging in all commands the same way."""
    @click.option('-v', '--verbose', is_flag=True)
    @click.option('-d', '--debug', is_flag=True)
    @click.option('-q', '--quiet', is_flag=True)
    @click.option('--log-format', type=LogFormatParamType(), default='full')
    @click.option('--log-refkey', type=str)
    @functools.wraps(fn)  # to preserve other opts/args
    def wrapper(verbose: bool, quiet: bool, debug: bool,
                log_format: loggers.LogFormat = loggers.LogFormat.FULL,
                log_refkey: str | None = None,
                *args: Any, **kwargs: Any) -> Any:
        loggers.configure(debug=debug, verbose=verbose, quiet=quiet,
                          log_format=log_format, log_refkey=log_refkey)
        return fn(*args, **kwargs)

    return wrapper


def connection_options(fn: Callable[..., Any]) -> Callable[..., Any]:
    """ A decorator to accept the server & its credentials in all commands the same way."""
    @click.option('-s', '--server', required=True, envvar='KUBESHIFT_SERVER')
    @click.option('-t', '--token', type=str, envvar='KUBESHIFT_TOKEN')
    @click.option('--ca-path', type=click.Path(exists=True, dir_okay=False))
    @click.option('--insecure', is_flag=True, default=None)
    @click.option('--legacy-group', 'legacy_groups', multiple=True, metavar='NAME/VERSION')
    @click.option('--all-versions', is_flag=True)
    @functools.wraps(fn)  # to preserve other opts/args
    def wrapper(server: str, token: str | None, ca_path: str | None, insecure: bool | None,
                legacy_groups: tuple[str, ...], all_versions: bool,
                *args: Any, **kwargs: Any) -> Any:
        info = credentials.ConnectionInfo(server=server, token=token, ca_path=ca_path,
                                          insecure=insecure)
        settings = configuration.ClientSettings()
        settings.discovery.all_versions = all_versions
        if legacy_groups:
            settings.discovery.legacy_groups = tuple(parse_group(group) for group in legacy_groups)
        return fn(*args, info=info, settings=settings, **kwargs)

    return wrapper


def parse_group(text: str) -> tuple[str, str]:
    name, slash, version = text.partition('/')
    if not name or not slash or not version:
        raise click.BadParameter(f"Expected NAME/VERSION, got {text!r}.", param_hint='--legacy-group')
    return name, version


def parse_body(text: str | None) -> Any:
    """ Parse a YAML/JSON payload, either inline or from a file (``@path``). """
    if text is None:
        return None
    if text.startswith('@'):
        with open(text[1:], encoding='utf-8') as f:
            text = f.read()
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise click.BadParameter(f"The body is neither YAML nor JSON: {e}", param_hint='--body')


def dump(data: Any, output: str) -> str:
    if isinstance(data, api.Response):  # no body at all: only the status is known.
        data = {'status': data.status}
    if isinstance(data, str):
        return data
    if output == 'json':
        return json.dumps(data, indent=2)
    return yaml.safe_dump(data, sort_keys=False).rstrip('\n')


def run_with_client(
        fn: Callable[[tables.DynamicClient], Awaitable[Any]],
        *,
        info: credentials.ConnectionInfo,
        settings: configuration.ClientSettings,
) -> Any:
    async def _run() -> Any:
        async with await building.build(info=info, settings=settings) as client:
            return await fn(client)

    try:
        return asyncio.run(_run())
    except (errors.KubeshiftError, errors.APIError, aiohttp.ClientError) as e:
        raise click.ClickException(f"{e.__class__.__name__}: {e}") from e


@click.version_option(prog_name='kubeshift')
@click.group(name='kubeshift', context_settings=dict(
    auto_envvar_prefix='KUBESHIFT',
))
def main() -> None:
    pass


@main.command()
@logging_options
@connection_options
@click.option('-f', '--format', 'output', type=click.Choice(['markdown', 'yaml', 'json']),
              default='markdown')
def methods(
        info: credentials.ConnectionInfo,
        settings: configuration.ClientSettings,
        output: str,
) -> None:
    """ Discover the API and list all the methods of the client. """
    async def fn(client: tables.DynamicClient) -> Any:
        if output == 'markdown':
            return client.get_methods('markdown')
        return {
            group_version: [dataclasses.asdict(method_spec) for method_spec in method_specs]
            for group_version, method_specs in client.spec.items()
        }

    result = run_with_client(fn, info=info, settings=settings)
    click.echo(result.rstrip('\n') if isinstance(result, str) else dump(result, output))


@main.command()
@logging_options
@connection_options
@click.option('-b', '--body', type=str, help="YAML/JSON payload, or @file.")
@click.option('-o', '--output', type=click.Choice(['yaml', 'json']), default='yaml')
@click.argument('verb')
@click.argument('path')
def call(
        info: credentials.ConnectionInfo,
        settings: configuration.ClientSettings,
        verb: str,
        path: str,
        body: str | None,
        output: str,
) -> None:
    """ Make an arbitrary request to the API, bypassing the discovered methods. """
    payload = parse_body(body)
    result = run_with_client(lambda client: client.custom_call(verb, path, payload),
                             info=info, settings=settings)
    click.echo(dump(result, output))


@main.command()
@logging_options
@connection_options
@click.option('-Q', '--query', 'queries', multiple=True, metavar='KEY=VALUE')
@click.option('-b', '--body', type=str, help="YAML/JSON payload, or @file.")
@click.option('-o', '--output', type=click.Choice(['yaml', 'json']), default='yaml')
@click.argument('group_version')
@click.argument('method_name')
@click.argument('args', nargs=-1)
def invoke(
        info: credentials.ConnectionInfo,
        settings: configuration.ClientSettings,
        group_version: str,
        method_name: str,
        args: tuple[str, ...],
        queries: tuple[str, ...],
        body: str | None,
        output: str,
) -> None:
    """ Call a discovered method with a namespace and an item name (if needed). """
    if len(args) > 2:
        raise click.UsageError("At most a namespace and an item name are accepted.")
    query = dict(pair.partition('=')[::2] for pair in queries)
    payload = parse_body(body)
    config = {'query': query or None, 'body': payload} if query or payload is not None else None
    call_args = args + ((config,) if config is not None else ())
    result = run_with_client(lambda client: client.invoke(group_version, method_name, *call_args),
                             info=info, settings=settings)
    click.echo(dump(result, output))
