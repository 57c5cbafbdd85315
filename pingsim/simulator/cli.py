"""Command line front end for the simulator.

Usage:
  pingsim run 10.0.0.1 10.0.0.2 --count 4 --trace
  pingsim path 10.0.0.1 10.0.0.2
  pingsim seed 10.0.0.1 10.0.0.2 --no-stable
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich import print
from rich.table import Table

from pingsim.utils import SimulatorSettings, load_settings

from .addressing import parse_address
from .config import SessionConfig
from .errors import INVALID_ADDRESS_MESSAGE, InvalidAddressError, SettingsError
from .logging_setup import configure_json_logging, log_event
from .path import build_path, reply_ttl
from .rng import Mulberry32, derive_seed
from .session import Pacer, PingSession

app = typer.Typer(add_completion=False, help="Simulated ping / traceroute transcripts (no network I/O)")


def _settings(config: Optional[Path]) -> SimulatorSettings:
    try:
        return load_settings(config)
    except SettingsError as exc:
        raise typer.BadParameter(str(exc), param_hint="--config")


@app.command()
def run(
    source: str = typer.Argument(..., help="Source IPv4 address"),
    destination: str = typer.Argument(..., help="Destination IPv4 address"),
    count: Optional[int] = typer.Option(None, "--count", "-c", help="Echo requests (1-20)"),
    size: Optional[int] = typer.Option(None, "--size", "-s", help="Payload bytes (8-1500)"),
    trace: Optional[bool] = typer.Option(None, "--trace/--no-trace", help="Run a traceroute first"),
    stable: Optional[bool] = typer.Option(None, "--stable/--no-stable", help="Reproducible seed from the address pair"),
    no_pace: bool = typer.Option(False, "--no-pace", help="Skip the simulated pauses between probes"),
    config: Optional[Path] = typer.Option(None, "--config", help="Settings YAML (or $PINGSIM_CONFIG)"),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Log level for JSON logs on stderr"),
):
    """Print a simulated ping transcript line by line."""
    settings = _settings(config)
    logger = configure_json_logging(level=log_level or settings.log_level, force=True)
    d = settings.defaults
    cfg = SessionConfig(
        source=source,
        destination=destination,
        count=d.count if count is None else count,
        size=d.size if size is None else size,
        trace=d.trace if trace is None else trace,
        stable=d.stable if stable is None else stable,
    )
    pacer = Pacer(enabled=settings.pacing.enabled and not no_pace, time_scale=settings.pacing.time_scale)
    session = PingSession(cfg, pacer=pacer)
    try:
        for line in session.lines():
            typer.echo(line)
    except KeyboardInterrupt:
        session.cancel()
        log_event(logger, "session_interrupted", destination=cfg.destination)
        raise typer.Exit(130)
    if session.error is not None:
        raise typer.Exit(1)


def _endpoints(source: str, destination: str):
    try:
        return parse_address(source.strip()), parse_address(destination.strip())
    except InvalidAddressError:
        typer.echo(INVALID_ADDRESS_MESSAGE)
        raise typer.Exit(1)


@app.command()
def path(
    source: str = typer.Argument(..., help="Source IPv4 address"),
    destination: str = typer.Argument(..., help="Destination IPv4 address"),
    stable: bool = typer.Option(True, "--stable/--no-stable", help="Reproducible seed from the address pair"),
):
    """Show the synthetic hop chain a session would use."""
    src, dst = _endpoints(source, destination)
    seed = derive_seed(source.strip(), destination.strip(), stable=stable)
    hops = build_path(src, dst, Mulberry32(seed))
    table = Table(title=f"Simulated path {src} → {dst}")
    table.add_column("Hop", justify="right")
    table.add_column("Address")
    table.add_column("TTL", justify="right")
    for i, hop in enumerate(hops, start=1):
        # ttl a reply from this hop would carry on arrival
        table.add_row(str(i), f"[bold]{hop}" if hop == dst else str(hop), str(reply_ttl(i)))
    print(table)
    print(f"{len(hops)} hops, reply ttl={reply_ttl(len(hops))}, seed=[bold]{seed:#010x}[/bold]")


@app.command()
def seed(
    source: str = typer.Argument(..., help="Source IPv4 address"),
    destination: str = typer.Argument(..., help="Destination IPv4 address"),
    stable: bool = typer.Option(True, "--stable/--no-stable", help="Reproducible seed from the address pair"),
):
    """Print the session seed for an address pair."""
    _endpoints(source, destination)
    value = derive_seed(source.strip(), destination.strip(), stable=stable)
    typer.echo(f"{value} {value:#010x}")


def main():  # pragma: no cover - entrypoint
    app()


if __name__ == "__main__":  # pragma: no cover
    main()
