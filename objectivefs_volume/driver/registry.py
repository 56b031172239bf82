"""
In-memory volume registry.

Holds every ObjectiveFS volume known to the plugin together with its mount
configuration and current mount/use state. Nothing is persisted: a plugin
restart starts from an empty registry.

All access goes through one lock owned by the registry. The mount coordinator
takes the same lock, so creation, lookup, mounting and removal are serialized
against each other.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Set

from objectivefs_volume.cli.lib.validators import parse_bool, validate_name
from objectivefs_volume.driver.exceptions import (
    InvalidVolumeName,
    VolumeAlreadyExists,
    VolumeInUse,
    VolumeNotFound,
)

logger = logging.getLogger(__name__)

DEFAULT_MOUNT_OPTIONS = "auto"

# "ptions" is accepted as a misspelling of "options".
MOUNT_OPTION_KEYS = ("options", "ptions")


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass
class VolumeInfo:
    """Public view of a volume.

    Attributes:
        name: Volume name
        mountpoint: Mountpoint path
        created_at: RFC 3339 creation timestamp
        status: Optional mount status, reported by get only
    """

    name: str
    mountpoint: str
    created_at: str
    status: Optional[Dict[str, Any]] = None


@dataclass
class Volume:
    """A registered volume and its mount state."""

    name: str
    mountpoint: str
    fs: str = ""
    options: str = DEFAULT_MOUNT_OPTIONS
    env: List[str] = field(default_factory=list)
    asap: bool = False
    mounted: bool = False
    use: Set[str] = field(default_factory=set)
    created_at: str = field(default_factory=_utc_now_iso)

    def info(self, with_status: bool = False) -> VolumeInfo:
        status = None
        if with_status:
            status = {"mounted": self.mounted, "refs": len(self.use), "asap": self.asap, "fs": self.fs}
        return VolumeInfo(name=self.name, mountpoint=self.mountpoint, created_at=self.created_at, status=status)


class VolumeRegistry:
    """Named volumes, their configuration and mount state."""

    def __init__(self, root: str, lock: Optional[threading.Lock] = None):
        """
        Args:
            root: Directory under which each volume gets `<root>/<name>`
            lock: Lock shared with the mount coordinator (created if omitted)
        """
        self.root = Path(root)
        self.lock = lock or threading.Lock()
        self._volumes: Dict[str, Volume] = {}

    def mountpoint_for(self, name: str) -> str:
        return str(self.root / name)

    def create(self, name: str, options: Optional[Dict[str, str]] = None) -> Volume:
        """
        Register a new volume. Nothing is mounted yet.

        Args:
            name: Volume name
            options: Creation options; `fs`, `options`/`ptions` and `asap`
                configure the volume, every other key becomes a `KEY=VALUE`
                environment entry for the mount helper.

        Returns:
            The new volume

        Raises:
            InvalidVolumeName: If the name cannot be used as a path component
            VolumeAlreadyExists: If the name is already registered
        """
        logger.info("Create ObjectiveFS Volume '%s'", name)
        try:
            validate_name(name)
        except ValueError as e:
            raise InvalidVolumeName(name=name, reason=str(e))

        with self.lock:
            if name in self._volumes:
                raise VolumeAlreadyExists(name=name)

            volume = Volume(name=name, mountpoint=self.mountpoint_for(name))
            for key, value in (options or {}).items():
                value = "" if value is None else str(value)
                if key == "fs":
                    volume.fs = value
                elif key in MOUNT_OPTION_KEYS:
                    volume.options = volume.options + "," + value
                elif key == "asap":
                    volume.asap = parse_bool(value)
                else:
                    volume.env.append(f"{key}={value}")

            self._volumes[name] = volume
            return volume

    def list(self) -> List[VolumeInfo]:
        with self.lock:
            return [v.info() for v in self._volumes.values()]

    def get(self, name: str) -> VolumeInfo:
        with self.lock:
            return self.lookup(name).info(with_status=True)

    def path(self, name: str) -> str:
        with self.lock:
            return self.lookup(name).mountpoint

    def lookup(self, name: str) -> Volume:
        """Return the live volume record. Caller must hold `lock`."""
        volume = self._volumes.get(name)
        if volume is None:
            raise VolumeNotFound(name=name)
        return volume

    def remove(self, name: str, unmount: Callable[[Volume], None]) -> None:
        """
        Deregister a volume, unmounting it first if needed.

        Args:
            name: Volume name
            unmount: Forced unmount, called with the lock held

        Raises:
            VolumeNotFound: If the name is not registered
            VolumeInUse: If callers are still attached
            UnmountFailed: If the forced unmount fails; the volume stays registered
        """
        with self.lock:
            volume = self.lookup(name)
            if volume.use:
                raise VolumeInUse(name=name, count=len(volume.use))
            unmount(volume)
            del self._volumes[name]
        logger.info("Removed ObjectiveFS Volume '%s'", name)
