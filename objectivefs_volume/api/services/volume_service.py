"""
Volume service layer.

Translates Docker volume plugin requests into registry and coordinator calls
and shapes the results as protocol payloads.
"""

from typing import Any, Dict, List

from objectivefs_volume.api.models import VolumeCreateRequest, VolumeMountRequest
from objectivefs_volume.cli.lib.config import PluginConfig
from objectivefs_volume.cli.lib.mount import CommandMountExecutor
from objectivefs_volume.driver.coordinator import MountCoordinator
from objectivefs_volume.driver.registry import VolumeInfo, VolumeRegistry


def build_coordinator(cfg: PluginConfig) -> MountCoordinator:
    """
    Build an empty registry and a coordinator running the configured commands.

    Args:
        cfg: Plugin configuration

    Returns:
        Mount coordinator owning a fresh registry
    """
    registry = VolumeRegistry(str(cfg.volume_root))
    executor = CommandMountExecutor(mount_command=cfg.mount_command, umount_command=cfg.umount_command)
    return MountCoordinator(registry, executor)


def _volume_payload(info: VolumeInfo) -> Dict[str, Any]:
    payload: Dict[str, Any] = {"Name": info.name, "Mountpoint": info.mountpoint, "CreatedAt": info.created_at}
    if info.status is not None:
        payload["Status"] = info.status
    return payload


def create_volume(coordinator: MountCoordinator, request: VolumeCreateRequest) -> None:
    coordinator.registry.create(request.name, request.opts or {})


def list_volumes(coordinator: MountCoordinator) -> List[Dict[str, Any]]:
    return [_volume_payload(info) for info in coordinator.registry.list()]


def get_volume(coordinator: MountCoordinator, name: str) -> Dict[str, Any]:
    return _volume_payload(coordinator.registry.get(name))


def volume_path(coordinator: MountCoordinator, name: str) -> str:
    return coordinator.registry.path(name)


def mount_volume(coordinator: MountCoordinator, request: VolumeMountRequest) -> str:
    return coordinator.attach(request.name, request.id)


def unmount_volume(coordinator: MountCoordinator, request: VolumeMountRequest) -> None:
    coordinator.detach(request.name, request.id)


def remove_volume(coordinator: MountCoordinator, name: str) -> None:
    coordinator.remove(name)


def capabilities(coordinator: MountCoordinator) -> Dict[str, str]:
    return coordinator.capabilities()
