"""
Mount coordinator.

Attaching a caller mounts the volume only when it is not mounted yet; further
attaches just record the caller. Detaching drops the caller and unmounts only
when the last caller is gone and the volume was created with `asap`. Volumes
without `asap` stay mounted until they are removed.

Every operation runs under the registry lock, including the mount helper and
`umount` invocations, so at most one mount or unmount is in flight at a time.
"""

from __future__ import annotations

import logging
import os
from typing import Dict

from objectivefs_volume.cli.lib.mount import CommandError, MountExecutor
from objectivefs_volume.driver.exceptions import DirectoryError, MountFailed, UnmountFailed
from objectivefs_volume.driver.registry import Volume, VolumeRegistry

logger = logging.getLogger(__name__)

MOUNTPOINT_MODE = 0o755


class MountCoordinator:
    """Reference-counted attach/detach on top of a volume registry."""

    def __init__(self, registry: VolumeRegistry, executor: MountExecutor):
        self.registry = registry
        self.executor = executor

    def attach(self, name: str, caller_id: str) -> str:
        """
        Attach a caller to a volume, mounting it if it is not mounted.

        Args:
            name: Volume name
            caller_id: Opaque caller identifier (container ID)

        Returns:
            Mountpoint path

        Raises:
            VolumeNotFound: If the volume is not registered
            DirectoryError: If the mountpoint directory cannot be created
            MountFailed: If the mount helper fails; the volume stays unmounted
        """
        with self.registry.lock:
            volume = self.registry.lookup(name)
            logger.info("Attach ObjectiveFS Volume '%s' to '%s'", name, caller_id)
            if not volume.mounted:
                self._mount(volume)
            volume.use.add(caller_id)
            return volume.mountpoint

    def detach(self, name: str, caller_id: str) -> None:
        """
        Detach a caller from a volume.

        Detaching a caller that is not attached is not an error.

        Raises:
            VolumeNotFound: If the volume is not registered
            UnmountFailed: If the eager unmount fails
        """
        with self.registry.lock:
            volume = self.registry.lookup(name)
            logger.info("Detach ObjectiveFS Volume '%s' from '%s'", name, caller_id)
            volume.use.discard(caller_id)
            if not volume.use and volume.asap:
                self._unmount(volume)

    def remove(self, name: str) -> None:
        """Deregister a volume, forcing an unmount if it is still mounted."""
        self.registry.remove(name, self._unmount)

    def capabilities(self) -> Dict[str, str]:
        with self.registry.lock:
            return {"Scope": "local"}

    def _mount(self, volume: Volume) -> None:
        try:
            os.makedirs(volume.mountpoint, MOUNTPOINT_MODE, exist_ok=True)
        except OSError as e:
            raise DirectoryError(name=volume.name, details=str(e))

        logger.info("Mount ObjectiveFS Volume '%s': -o%s %s %s", volume.name, volume.options, volume.fs, volume.mountpoint)
        try:
            self.executor.mount(volume.options, volume.fs, volume.mountpoint, list(volume.env))
        except CommandError as e:
            logger.error("Mounting ObjectiveFS Volume '%s' failed: %s", volume.name, e)
            raise MountFailed(name=volume.name, details=str(e))
        volume.mounted = True

    def _unmount(self, volume: Volume) -> None:
        logger.info("Unmount ObjectiveFS Volume '%s'", volume.name)
        if not volume.mounted:
            return

        try:
            self.executor.unmount(volume.mountpoint)
        except CommandError as e:
            raise UnmountFailed(name=volume.name, details=str(e))
        volume.mounted = False

        # The filesystem is gone at this point; a leftover directory is only cosmetic.
        try:
            os.rmdir(volume.mountpoint)
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning("Could not remove mountpoint %s of volume '%s': %s", volume.mountpoint, volume.name, e)
