"""
CLI Module.

Command-line front end for device server access key management,
built with Typer for commands and Rich for formatted output.

Architecture:
- CLI is a thin presentation layer over dsclient.deviceserver
- Credentials come from config/settings/deviceserver.yaml and config/.env
- The device server URL can be overridden per invocation with --url

Usage:
    python cli.py --help
    python cli.py create-key <name>
    python cli.py list-keys
    python cli.py delete-key <key self URL>
"""
