"""
Access Key Commands.

Create, list and delete device server access keys. Each command loads the
credentials, opens one client for the duration of the command, and exits
with status 1 on any client error.
"""

import asyncio
import json
from typing import NoReturn

import typer
from rich.console import Console
from rich.markup import escape

from dsclient.cli.credentials import CliOptions, read_credentials
from dsclient.core.exceptions import ApplicationError, NotFoundError
from dsclient.core.logging import get_logger, log_with_source
from dsclient.deviceserver.client import ClientConfig, DeviceServerClient
from dsclient.deviceserver.keys import (
    SELF_REL,
    create_access_key,
    delete_access_key,
    get_access_keys,
    validate_self_link,
)
from dsclient.deviceserver.models import AccessKey, AccessKeys

logger = get_logger(__name__)

console = Console()
err_console = Console(stderr=True)

MISSING_SELF_LINK = "? unable to find self link"


def _options(ctx: typer.Context) -> CliOptions:
    return ctx.obj if isinstance(ctx.obj, CliOptions) else CliOptions()


def _fail(error: ApplicationError) -> NoReturn:
    log_with_source(logger, "cli", "debug", "Command failed", code=error.code, error=error.message)
    err_console.print(f"[red]Error:[/red] {escape(error.message)}")
    raise typer.Exit(1)


def create_key(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Name of the new key"),
) -> None:
    """
    Create a new key/secret.

    Prints the created key, including its secret, as JSON.

    Examples:
        cli.py create-key ci-runner
    """
    try:
        config = read_credentials(_options(ctx).base_url)
        key = asyncio.run(_create_key(config, name))
    except ApplicationError as e:
        _fail(e)

    typer.echo(json.dumps(key.model_dump(mode="json", by_alias=True, exclude_none=True), indent=2))


async def _create_key(config: ClientConfig, name: str) -> AccessKey:
    async with DeviceServerClient(config) as client:
        return await create_access_key(client, name)


def list_keys(ctx: typer.Context) -> None:
    """
    Lists the known access keys.

    Examples:
        cli.py list-keys
    """
    try:
        config = read_credentials(_options(ctx).base_url)
        keys = asyncio.run(_list_keys(config))
    except ApplicationError as e:
        _fail(e)

    for i, key in enumerate(keys.items):
        try:
            self_href = key.links.get(SELF_REL).href
        except NotFoundError:
            self_href = MISSING_SELF_LINK
        typer.echo(f"[{i}] '{key.name}' = {key.key}\n  {self_href}\n")


async def _list_keys(config: ClientConfig) -> AccessKeys:
    async with DeviceServerClient(config) as client:
        return await get_access_keys(client)


def delete_key(
    ctx: typer.Context,
    self_url: str = typer.Argument(..., metavar="KEY_SELF_URL", help="Self link of the key to delete"),
) -> None:
    """
    Delete the specified key.

    The self link must point at the configured device server; it is
    checked before any request is made.

    Examples:
        cli.py delete-key https://deviceserver.example/accesskeys/42
    """
    try:
        config = read_credentials(_options(ctx).base_url)
        validate_self_link(self_url, config.base_url)
        asyncio.run(_delete_key(config, self_url))
    except ApplicationError as e:
        _fail(e)

    console.print(f"[green]✓ Deleted[/green] {escape(self_url)}", soft_wrap=True)


async def _delete_key(config: ClientConfig, self_url: str) -> None:
    async with DeviceServerClient(config) as client:
        await delete_access_key(client, self_url)
