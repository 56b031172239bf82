"""
Plugin server commands.
"""

from dataclasses import asdict
from typing import Optional

import typer

from objectivefs_volume.api.server import serve as serve_plugin
from objectivefs_volume.cli.lib.config import LOG_LEVELS, load_config

app = typer.Typer(help="Plugin server commands")


@app.command()
def serve(
    socket: Optional[str] = typer.Option(None, "--socket", help="Unix socket path (default: from config)"),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Log level (default: from config)"),
):
    """
    Run the Docker volume plugin server.

    Listens on the plugin unix socket until interrupted. Volume state is kept
    in memory only.
    """
    if log_level is not None and log_level.lower() not in LOG_LEVELS:
        typer.echo(f"Error: invalid log level {log_level}; choose from {', '.join(LOG_LEVELS)}", err=True)
        raise typer.Exit(1)

    try:
        cfg = load_config()
        typer.echo(f"Serving ObjectiveFS volume plugin on {socket or cfg.socket_path}")
        serve_plugin(cfg, socket_path=socket, log_level=log_level.lower() if log_level else None)
    except KeyboardInterrupt:
        raise
    except Exception as e:
        typer.echo(f"Error running plugin server: {e}", err=True)
        raise typer.Exit(1)


@app.command()
def config():
    """
    Show the effective plugin configuration.
    """
    cfg = load_config()
    for key, value in asdict(cfg).items():
        typer.echo(f"{key} = {value}")
    typer.echo(f"volume_root = {cfg.volume_root}")
    typer.echo(f"socket_path = {cfg.socket_path}")
