"""Command-line interface for lanwake."""

import dataclasses
import logging
import sys
from pathlib import Path
from typing import Optional

import click

from lanwake import __version__
from lanwake.core.errors import ConfigError, LanwakeError
from lanwake.core.models import Host, WakeSettings

DEFAULT_CONFIG = Path.home() / ".config" / "lanwake" / "config.yaml"


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
        datefmt="%H:%M:%S",
    )


def _load_cfg(config: Optional[str]) -> tuple[WakeSettings, list[Host]]:
    from lanwake.config.loader import hosts_from_config, read_config, settings_from_config

    if config is None:
        # The default location is optional; built-in defaults apply without it
        if not DEFAULT_CONFIG.exists():
            return WakeSettings(), []
        path = DEFAULT_CONFIG
    else:
        path = Path(config)

    try:
        raw = read_config(path)
    except ConfigError as exc:
        click.echo(f"{exc}:" if exc.errors else str(exc), err=True)
        for e in exc.errors:
            click.echo(f"  • {e}", err=True)
        sys.exit(exc.exit_code)
    return settings_from_config(raw), hosts_from_config(raw)


def _target_address(target: str, hosts: list[Host]) -> str:
    match = next((h for h in hosts if h.name == target), None)
    return match.address if match else target


# ── Root group ────────────────────────────────────────────────────────────────


@click.group()
@click.version_option(version=__version__, prog_name="lanwake")
@click.option(
    "--config",
    "-c",
    default=None,
    envvar="LANWAKE_CONFIG",
    help=f"Path to lanwake config.yaml  [default: {DEFAULT_CONFIG}]",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx: click.Context, config: Optional[str], verbose: bool) -> None:
    """lanwake: Wake-on-LAN with wake-up confirmation."""
    _setup_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["config"] = config


# ── wake command ──────────────────────────────────────────────────────────────


@main.command()
@click.argument("target")
@click.option(
    "--timeout",
    "-t",
    type=float,
    default=None,
    help="Seconds to wait in each confirmation phase (default: from config, else 60)",
)
@click.option("--broadcast", "-b", default=None, help="Broadcast address for the magic packet")
@click.option("--port", "-p", type=int, default=None, help="UDP port for the magic packet")
@click.option("--no-wait", is_flag=True, help="Send the magic packet and exit without confirming")
@click.pass_context
def wake(
    ctx: click.Context,
    target: str,
    timeout: Optional[float],
    broadcast: Optional[str],
    port: Optional[int],
    no_wait: bool,
) -> None:
    """Wake TARGET (a configured host name, an IP or a MAC address)."""
    settings, hosts = _load_cfg(ctx.obj["config"])
    address = _target_address(target, hosts)

    overrides: dict = {}
    if timeout is not None:
        overrides["resolution_timeout"] = timeout
        overrides["reachability_timeout"] = timeout
    if broadcast is not None:
        overrides["broadcast_ip"] = broadcast
    if port is not None:
        overrides["port"] = port
    settings = dataclasses.replace(settings, **overrides)

    from lanwake.core.wake import wake as do_wake
    from lanwake.core.wake import wake_only

    try:
        if no_wait:
            mac = wake_only(address, settings)
            click.echo(f"WOL packet sent to {mac}")
            return
        ip = do_wake(address, settings)
    except LanwakeError as exc:
        click.echo(f"✗  {exc}", err=True)
        sys.exit(exc.exit_code)

    click.echo(f"✓  {target} is awake at {ip}")


# ── resolve command ───────────────────────────────────────────────────────────


@main.command()
@click.argument("target")
@click.pass_context
def resolve(ctx: click.Context, target: str) -> None:
    """Print the MAC address TARGET resolves to, without waking it."""
    _, hosts = _load_cfg(ctx.obj["config"])
    address = _target_address(target, hosts)

    from lanwake.core.address import resolve_mac
    from lanwake.core.neighbors import IpNeighborTable

    try:
        mac = resolve_mac(address, IpNeighborTable())
    except LanwakeError as exc:
        click.echo(f"✗  {exc}", err=True)
        sys.exit(exc.exit_code)
    click.echo(str(mac))


# ── hosts command ─────────────────────────────────────────────────────────────


@main.command()
@click.pass_context
def hosts(ctx: click.Context) -> None:
    """List hosts configured in the config file."""
    _, host_objs = _load_cfg(ctx.obj["config"])
    if not host_objs:
        click.echo("No hosts configured.")
        return
    click.echo(f"{'NAME':<20} {'ADDRESS':<20} {'DESCRIPTION'}")
    click.echo("─" * 60)
    for h in host_objs:
        click.echo(f"{h.name:<20} {h.address:<20} {h.description}")


if __name__ == "__main__":
    main()
