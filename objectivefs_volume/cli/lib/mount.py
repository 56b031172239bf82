"""
Mount helper invocation.

The driver never mounts anything itself: it runs the ObjectiveFS mount helper
and `umount` and only looks at their exit status.
"""

import logging
import subprocess
from abc import ABC, abstractmethod
from typing import List, Optional

logger = logging.getLogger(__name__)


class CommandError(RuntimeError):
    """External command failed or could not be started."""


class MountExecutor(ABC):
    """Abstract mount/unmount mechanism used by the mount coordinator."""

    @abstractmethod
    def mount(self, options: str, source: str, target: str, env: List[str]) -> None:
        """Mount `source` on `target`.

        Args:
            options: Comma-joined mount options
            source: Backing filesystem identifier
            target: Mountpoint directory
            env: `KEY=VALUE` strings forming the whole command environment
                (empty means inherit the current environment)

        Raises:
            CommandError: If mounting fails
        """
        pass

    @abstractmethod
    def unmount(self, target: str) -> None:
        """Unmount `target`.

        Raises:
            CommandError: If unmounting fails
        """
        pass


def _env_dict(env: List[str]) -> dict:
    result = {}
    for entry in env:
        key, sep, value = entry.partition("=")
        if not sep:
            continue
        result[key] = value
    return result


def _run(cmd: List[str], env: Optional[dict] = None) -> None:
    try:
        result = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            check=False,
            env=env,
        )
    except OSError as e:
        raise CommandError(f"{cmd[0]}: {e}")

    if result.returncode != 0:
        details = (result.stderr or "").strip() or f"exit status {result.returncode}"
        raise CommandError(details)


class CommandMountExecutor(MountExecutor):
    """Runs the mount helper and `umount` as child processes."""

    def __init__(self, mount_command: str = "/sbin/mount.objectivefs", umount_command: str = "umount"):
        self.mount_command = mount_command
        self.umount_command = umount_command

    def mount_args(self, options: str, source: str, target: str) -> List[str]:
        return [self.mount_command, "-o" + options, source, target]

    def mount(self, options: str, source: str, target: str, env: List[str]) -> None:
        cmd = self.mount_args(options, source, target)
        logger.debug("Running %s", " ".join(cmd))
        # No per-volume variables: the helper inherits the plugin's environment.
        _run(cmd, env=_env_dict(env) if env else None)

    def unmount(self, target: str) -> None:
        cmd = [self.umount_command, target]
        logger.debug("Running %s", " ".join(cmd))
        _run(cmd)
