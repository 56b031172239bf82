"""
Uvicorn server entrypoint for the ObjectiveFS volume plugin.

Docker discovers the plugin through its unix socket in the plugin directory.
"""

from __future__ import annotations

import argparse
import grp
import logging
import os
import socket
from pathlib import Path
from typing import Optional

import uvicorn

from objectivefs_volume import __version__
from objectivefs_volume.api.main import create_app
from objectivefs_volume.api.services.volume_service import build_coordinator
from objectivefs_volume.cli.lib.config import LOG_LEVELS, PluginConfig, load_config

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def bind_socket(path: Path, group: Optional[str] = None) -> socket.socket:
    """
    Create the plugin's listening unix socket.

    A stale socket left by a previous run is removed first. When `group` is
    given the socket file is handed to that group so Docker can connect.

    Args:
        path: Socket path
        group: Group name owning the socket file

    Returns:
        Bound socket

    Raises:
        RuntimeError: If the group does not exist
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    try:
        path.unlink()
    except FileNotFoundError:
        pass

    sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
    sock.bind(str(path))
    if group:
        try:
            gid = grp.getgrnam(group).gr_gid
        except KeyError:
            sock.close()
            raise RuntimeError(f"Group {group} does not exist")
        os.chown(str(path), -1, gid)
    os.chmod(str(path), 0o660)
    return sock


def serve(cfg: PluginConfig, socket_path: Optional[str] = None, log_level: Optional[str] = None) -> None:
    """
    Run the plugin server until interrupted.

    Args:
        cfg: Plugin configuration
        socket_path: Override for the configured socket path
        log_level: Override for the configured log level
    """
    level = log_level or cfg.log_level
    configure_logging(level)
    path = Path(socket_path) if socket_path else cfg.socket_path

    app = create_app(build_coordinator(cfg))
    logger.info("Starting ObjectiveFS Volume Driver, version %s", __version__)
    logger.info("Listening on %s (volumes under %s)", path, cfg.volume_root)

    sock = bind_socket(path, cfg.socket_group)
    server = uvicorn.Server(uvicorn.Config(app, log_level=level))
    try:
        server.run(sockets=[sock])
    finally:
        sock.close()
        try:
            path.unlink()
        except FileNotFoundError:
            pass


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="objectivefs-volume-plugin", description="ObjectiveFS Docker volume plugin")
    parser.add_argument("--socket", default=None, help="Unix socket path (default: from config)")
    parser.add_argument("--log-level", default=None, choices=LOG_LEVELS, help="Log level (default: from config)")
    return parser


def main(argv: list[str] | None = None) -> int:
    cfg = load_config()
    args = build_parser().parse_args(argv)
    serve(cfg, socket_path=args.socket, log_level=args.log_level)
    return 0
