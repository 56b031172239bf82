"""
Configuration loader for the ObjectiveFS volume plugin.

Keeps host-specific paths (volume root, plugin socket directory, mount helper)
out of the code.
"""

from __future__ import annotations

import configparser
import os
from dataclasses import dataclass
from pathlib import Path


DEFAULT_CONFIG_PATH = Path("/etc/objectivefs-volume/plugin.conf")

LOG_LEVELS = ("critical", "error", "warning", "info", "debug")


@dataclass(frozen=True)
class PluginConfig:
    root_dir: str = "/var/lib/docker-volumes"
    driver_name: str = "objectivefs"
    plugin_dir: str = "/run/docker/plugins"
    mount_command: str = "/sbin/mount.objectivefs"
    umount_command: str = "umount"
    socket_group: str = "root"
    log_level: str = "info"

    @property
    def volume_root(self) -> Path:
        """Directory holding one mountpoint per volume."""
        return Path(self.root_dir) / self.driver_name

    @property
    def socket_path(self) -> Path:
        return Path(self.plugin_dir) / f"{self.driver_name}.sock"


def _config_path() -> Path:
    env = os.environ.get("OFS_VOLUME_CONFIG_PATH")
    if env:
        return Path(env)
    return DEFAULT_CONFIG_PATH


def _read_ini(path: Path) -> configparser.ConfigParser:
    parser = configparser.ConfigParser()
    if path.exists():
        parser.read(path, encoding="utf-8")
    return parser


def load_config() -> PluginConfig:
    """
    Load config from `OFS_VOLUME_CONFIG_PATH` or `/etc/objectivefs-volume/plugin.conf`.

    Missing files are not an error; defaults are returned.
    """
    parser = _read_ini(_config_path())
    section = parser["plugin"] if parser.has_section("plugin") else {}

    def _get(key: str, default: str) -> str:
        if isinstance(section, dict):
            value = str(section.get(key, default)).strip()
        else:
            value = str(section.get(key, fallback=default)).strip()
        return value or default

    def _parse_log_level(raw: str) -> str:
        level = raw.lower()
        if level not in LOG_LEVELS:
            return "info"
        return level

    return PluginConfig(
        root_dir=_get("root_dir", "/var/lib/docker-volumes"),
        driver_name=_get("driver_name", "objectivefs"),
        plugin_dir=_get("plugin_dir", "/run/docker/plugins"),
        mount_command=_get("mount_command", "/sbin/mount.objectivefs"),
        umount_command=_get("umount_command", "umount"),
        socket_group=_get("socket_group", "root"),
        log_level=_parse_log_level(_get("log_level", "info")),
    )
