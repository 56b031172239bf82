#!/usr/bin/env python3
"""
Main CLI entry point using Typer.
"""

import sys

import typer

from objectivefs_volume import __version__
from objectivefs_volume.cli.commands import plugin

app = typer.Typer(
    name="objectivefs-volume",
    help="ObjectiveFS Docker volume plugin",
    add_completion=False,
)

# Add command groups
app.add_typer(plugin.app, name="plugin", help="Plugin server commands")


@app.command()
def version():
    """
    Show the plugin version.
    """
    typer.echo(f"objectivefs-volume {__version__}")


def main() -> int:
    """Main entry point."""
    try:
        app()
        return 0
    except KeyboardInterrupt:
        typer.echo("\nOperation cancelled by user", err=True)
        return 130
    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
