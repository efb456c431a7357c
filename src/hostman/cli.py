from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

import click

from .agent import SyncAgent, read_hosts
from .cli_helpers.display import (
    display_error,
    display_info,
    display_success,
    display_table,
    display_warning,
)
from .client import SyncClient
from .config import AgentConfig, ServerConfig, load_environment
from .exceptions import HostmanError, format_error_message
from .interfaces import discover_self_report
from .log_config import setup_logging
from .render import render_block
from .store import TableStore
from .table import extract_table

__all__ = ["cli"]

logger = logging.getLogger("hostman")


def _fail(error: HostmanError) -> None:
    logger.debug("Command failed", exc_info=True)
    display_error(format_error_message(error))
    sys.exit(1)


@click.group(context_settings={"help_option_names": ["--help"]})
@click.option(
    "--env-file",
    "-e",
    type=click.Path(file_okay=True, dir_okay=False, path_type=Path),
    default=Path(".env.hostman"),
    show_default=True,
    help="Optional dotenv file with HOSTMAN_* settings.",
)
@click.option(
    "--log-file",
    type=click.Path(file_okay=True, dir_okay=False, path_type=Path),
    default=None,
    help="Also write logs to this file.",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging output.")
@click.pass_context
def cli(ctx: click.Context, env_file: Path, log_file: Optional[Path], verbose: bool) -> None:
    """Hostman – keep /etc/hosts in sync across the machines of a LAN."""
    setup_logging(verbose, log_file)
    ctx.ensure_object(dict)
    ctx.obj["env"] = load_environment(env_file)


@cli.command()
@click.argument("hosts_file", type=click.Path(dir_okay=False, path_type=Path))
@click.option("--server", "-s", default=None, help="Service URL (default http://localhost:15332).")
@click.option("--network", "-n", default=None, help="Only report addresses inside this CIDR network.")
@click.option("--timeout", "-t", type=float, default=None, help="Request timeout in seconds.")
@click.option("--dry-run", is_flag=True, help="Show the result without writing the hosts file.")
@click.option("--backup", is_flag=True, help="Copy the hosts file to <file>.bak before rewriting it.")
@click.pass_context
def sync(
    ctx: click.Context,
    hosts_file: Path,
    server: Optional[str],
    network: Optional[str],
    timeout: Optional[float],
    dry_run: bool,
    backup: bool,
) -> None:
    """Report this host and rewrite the managed block of HOSTS_FILE."""
    try:
        config = AgentConfig.resolve(ctx.obj["env"], server=server, timeout=timeout, network=network)
        client = SyncClient(config.server, timeout=config.timeout)
        agent = SyncAgent(hosts_file, client, discover=lambda: discover_self_report(config.network))
        result = agent.run(dry_run=dry_run, backup=backup)
    except HostmanError as e:
        _fail(e)
        return

    if not result.reported:
        display_warning("No reportable address found; fetched the table only")
    self_host = result.local.current.host if result.local.current else None
    display_table(result.remote, self_host=self_host)

    if dry_run:
        display_info("Dry run – hosts file not modified. Managed block would be:")
        click.echo(render_block(result.remote), nl=False)
    elif result.changed:
        display_success(f"Updated {hosts_file}")
    else:
        display_success(f"{hosts_file} already up to date")


@cli.command()
@click.argument("hosts_file", type=click.Path(dir_okay=False, path_type=Path))
def show(hosts_file: Path) -> None:
    """Show the managed entries currently in HOSTS_FILE."""
    try:
        _, document, region = read_hosts(hosts_file)
    except HostmanError as e:
        _fail(e)
        return

    if region is None:
        display_info(f"No hostman block yet in {hosts_file}")
    display_table(extract_table(document, region), title=f"Managed Hosts in {hosts_file}")


@cli.command()
@click.argument("location", required=False, default=None)
@click.option("--host", "-H", default=None, help="Address to listen on (default 0.0.0.0).")
@click.option("--port", "-p", type=int, default=None, help="Port to listen on (default 15332).")
@click.pass_context
def serve(ctx: click.Context, location: Optional[str], host: Optional[str], port: Optional[int]) -> None:
    """Run the hostman service, storing its table at LOCATION."""
    from .server import serve as run_server

    try:
        config = ServerConfig.resolve(ctx.obj["env"], host=host, port=port, location=location)
        store = TableStore(config.location)
    except HostmanError as e:
        _fail(e)
        return

    display_info(f"Database at: {config.location}")
    try:
        run_server(store, host=config.host, port=config.port)
    finally:
        store.close()
