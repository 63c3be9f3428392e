#!/usr/bin/env python3
"""
Device Server CLI.

Command-line client for managing device server access keys.
Built with Typer for type-safe commands and Rich for formatted output.

Usage:
    python cli.py --help                          # Show help

    # Access keys
    python cli.py create-key <name>               # Create a new key/secret (alias: ck)
    python cli.py list-keys                       # List known keys (alias: lk)
    python cli.py delete-key <key self URL>       # Delete a key (alias: dk)

    # Target another device server
    python cli.py --url https://ds.example/ list-keys

Options:
    --url, -u         Device server URL (env: DEVICESERVER_URL)
    --verbose, -v     Enable verbose output
    --debug, -d       Enable debug mode (detailed logging)
    --help            Show help message

The signing key is read from DEVICESERVER_PSK (config/.env or environment).
"""

import sys
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

# Add project root to path for absolute imports
project_root = Path(__file__).resolve().parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from dsclient.cli.commands import create_key, delete_key, list_keys
from dsclient.cli.credentials import CliOptions
from dsclient.core.config import validate_project_root
from dsclient.core.logging import setup_logging

app = typer.Typer(
    name="cli",
    help="Device Server CLI - Create, list and delete access keys.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

console = Console(stderr=True)

KEYS_PANEL = "keys"

# Register commands, each with its short alias
app.command("create-key", rich_help_panel=KEYS_PANEL)(create_key)
app.command("ck", hidden=True)(create_key)
app.command("list-keys", rich_help_panel=KEYS_PANEL)(list_keys)
app.command("lk", hidden=True)(list_keys)
app.command("delete-key", rich_help_panel=KEYS_PANEL)(delete_key)
app.command("dk", hidden=True)(delete_key)


@app.callback()
def main(
    ctx: typer.Context,
    url: Optional[str] = typer.Option(
        None,
        "--url",
        "-u",
        envvar="DEVICESERVER_URL",
        help="Device server URL (overrides config/settings/deviceserver.yaml)",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output (INFO level logging)",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        "-d",
        help="Enable debug mode (DEBUG level logging)",
    ),
) -> None:
    """
    Device Server CLI.

    Manage access keys on a device server. Requests are signed with the
    pre-shared key from DEVICESERVER_PSK.
    """
    validate_project_root()

    if debug:
        setup_logging(level="DEBUG", format_type="console")
        console.print("[dim]Debug mode enabled[/dim]")
    elif verbose:
        setup_logging(level="INFO", format_type="console")
    else:
        setup_logging()

    ctx.obj = CliOptions(base_url=url)


if __name__ == "__main__":
    app()
