"""
CLI Commands.

Organized by domain/feature area.
"""

from dsclient.cli.commands.keys import create_key, delete_key, list_keys

__all__ = [
    "create_key",
    "delete_key",
    "list_keys",
]
