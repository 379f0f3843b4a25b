"""
microfoxx CLI: `microfoxx` command.

Commands:
  microfoxx auth login         Log in and save the session
  microfoxx query <cmd>        Cursor queries
  microfoxx collections <cmd>  Collection management
  microfoxx docs <cmd>         Document CRUD
  microfoxx indexes <cmd>      Index management
"""

import asyncio
import json
import logging
import os
from pathlib import Path
from typing import Any

try:
    import click
    from rich.console import Console
except ImportError:
    raise SystemExit("CLI requires extras: pip install microfoxx[cli]")

from microfoxx.client import AsyncMicroFoxx
from microfoxx.models.results import OperationResult
from microfoxx.models.session import ConnectionParams, SessionInfo

console = Console()
CONFIG_FILE = Path.home() / ".microfoxx" / "config.json"
PASSWORD_ENV = "MICROFOXX_PASSWORD"
CONNECTION_KEYS = ("scheme", "host", "port", "database", "mount", "username")


def _load_config() -> dict:
    try:
        return json.loads(CONFIG_FILE.read_text())
    except (FileNotFoundError, json.JSONDecodeError):
        return {}


def _save_config(cfg: dict) -> None:
    CONFIG_FILE.parent.mkdir(parents=True, exist_ok=True)
    CONFIG_FILE.write_text(json.dumps(cfg, indent=2))


def _connection_params(cfg: dict) -> ConnectionParams:
    values = {k: cfg[k] for k in CONNECTION_KEYS if cfg.get(k) not in (None, "")}
    return ConnectionParams(password=os.environ.get(PASSWORD_ENV, ""), **values)


def _get_client() -> AsyncMicroFoxx:
    cfg = _load_config()
    if not cfg.get("sid") or not cfg.get("database"):
        console.print("[red]Not logged in. Run `microfoxx auth login` first.[/red]")
        raise SystemExit(1)
    return AsyncMicroFoxx(
        _connection_params(cfg),
        session=SessionInfo(session_id=cfg["sid"], user_id=cfg.get("uid")),
    )


def _run(coro):
    return asyncio.run(coro)


def _print_failure(result: OperationResult) -> None:
    kind = result.error_kind.value if result.error_kind else "error"
    status = f"HTTP {result.status_code} " if result.status_code else ""
    console.print(f"[red]{status}{kind}: {result.message or result.error}[/red]")
    if result.status_code in (401, 403):
        console.print("[yellow]The session may have expired. Run `microfoxx auth login`.[/yellow]")


def _print_json(value: Any, json_output: bool = False) -> None:
    if json_output:
        click.echo(json.dumps(value, indent=2))
    else:
        console.print_json(data=value)


def _check(result: OperationResult) -> None:
    if not result.ok:
        _print_failure(result)
        raise SystemExit(1)


@click.group()
@click.version_option("0.1.0")
@click.option("-v", "--verbose", is_flag=True, help="Log requests to stderr")
def main(verbose: bool):
    """microfoxx CLI: talk to a microfoxx document service."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


# Register subcommands from separate modules
from microfoxx.cli.auth import auth
from microfoxx.cli.query import query
from microfoxx.cli.collections import collections
from microfoxx.cli.docs import docs
from microfoxx.cli.indexes import indexes

main.add_command(auth)
main.add_command(query)
main.add_command(collections)
main.add_command(docs)
main.add_command(indexes)


if __name__ == "__main__":
    main()
