"""CLI: microfoxx auth login|status|logout"""

from typing import Optional

import click
from rich.console import Console

from microfoxx.client import AsyncMicroFoxx
from microfoxx.errors import AuthError

console = Console()


def _load_config() -> dict:
    from microfoxx.cli.main import _load_config
    return _load_config()


def _save_config(cfg: dict) -> None:
    from microfoxx.cli.main import _save_config
    _save_config(cfg)


def _connection_params(cfg: dict):
    from microfoxx.cli.main import _connection_params
    return _connection_params(cfg)


def _run(coro):
    from microfoxx.cli.main import _run
    return _run(coro)


@click.group()
def auth():
    """Authentication commands."""


@auth.command("login")
@click.option("--database", default=None, help="Database name")
@click.option("--host", default=None, help="Service host (default localhost)")
@click.option("--port", default=None, type=int, help="Service port (default 80)")
@click.option("--scheme", default=None, type=click.Choice(["http", "https"]))
@click.option("--mount", default=None, help="Service mount path (default /microfoxx)")
@click.option("--username", default=None)
def auth_login(database: Optional[str], host: Optional[str], port: Optional[int],
               scheme: Optional[str], mount: Optional[str], username: Optional[str]):
    """Log in and save the session."""
    cfg = _load_config()
    overrides = {"database": database, "host": host, "port": port, "scheme": scheme,
                 "mount": mount, "username": username}
    cfg.update({k: v for k, v in overrides.items() if v is not None})
    if not cfg.get("database"):
        cfg["database"] = click.prompt("Database")
    if not cfg.get("username"):
        cfg["username"] = click.prompt("Username")
    params = _connection_params(cfg)
    password = params.password or click.prompt("Password", hide_input=True)

    async def _login():
        async with AsyncMicroFoxx(params) as client:
            with console.status("Logging in..."):
                return await client.auth.establish(params.username, password)

    try:
        session = _run(_login())
    except AuthError as e:
        console.print(f"[red]{e}[/red]")
        raise SystemExit(1)

    console.print(f"[green]Logged in as {params.username} (session {session.session_id})[/green]")
    _save_config({**cfg, "sid": session.session_id, "uid": session.user_id})
    console.print("[dim]Session saved to ~/.microfoxx/config.json. It expires after 5 minutes idle.[/dim]")


@auth.command("status")
def auth_status():
    """Show current auth status."""
    cfg = _load_config()
    if cfg.get("sid"):
        console.print(f"[green]Logged in[/green] as {cfg.get('username', 'unknown')} "
                      f"on {_connection_params(cfg).endpoint} (session {cfg['sid']})")
    else:
        console.print("[yellow]Not logged in. Run `microfoxx auth login`.[/yellow]")


@auth.command("logout")
def auth_logout():
    """Forget the saved session."""
    cfg = _load_config()
    cfg.pop("sid", None)
    cfg.pop("uid", None)
    _save_config(cfg)
    console.print("[green]Logged out.[/green]")
