"""
Pytest configuration and fixtures.
"""

import shutil
import tempfile
from pathlib import Path
from unittest.mock import patch

import pytest

from objectivefs_volume.cli.lib.mount import CommandError, MountExecutor
from objectivefs_volume.driver.coordinator import MountCoordinator
from objectivefs_volume.driver.registry import VolumeRegistry


class FakeMountExecutor(MountExecutor):
    """Records mount/unmount calls instead of running commands."""

    def __init__(self):
        self.mounts = []
        self.unmounts = []
        self.mount_error = None
        self.unmount_error = None

    def mount(self, options, source, target, env):
        self.mounts.append({"options": options, "source": source, "target": target, "env": list(env)})
        if self.mount_error:
            raise CommandError(self.mount_error)

    def unmount(self, target):
        self.unmounts.append(target)
        if self.unmount_error:
            raise CommandError(self.unmount_error)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    temp_path = tempfile.mkdtemp()
    yield Path(temp_path)
    shutil.rmtree(temp_path)


@pytest.fixture
def mock_subprocess():
    """Mock subprocess.run for testing."""
    with patch("subprocess.run") as mock:
        yield mock


@pytest.fixture
def volume_root(temp_dir):
    """Driver root directory holding the mountpoints."""
    return temp_dir / "objectivefs"


@pytest.fixture
def registry(volume_root):
    return VolumeRegistry(str(volume_root))


@pytest.fixture
def executor():
    return FakeMountExecutor()


@pytest.fixture
def coordinator(registry, executor):
    return MountCoordinator(registry, executor)
