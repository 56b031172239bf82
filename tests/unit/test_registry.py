"""
Unit tests for the volume registry.
"""

from datetime import datetime

import pytest

from objectivefs_volume.driver.exceptions import (
    InvalidVolumeName,
    VolumeAlreadyExists,
    VolumeInUse,
    VolumeNotFound,
)


class TestCreate:
    """Tests for VolumeRegistry.create."""

    @pytest.mark.unit
    def test_create_defaults(self, registry, volume_root):
        """Test a volume without options."""
        volume = registry.create("data")

        assert volume.name == "data"
        assert volume.mountpoint == str(volume_root / "data")
        assert volume.fs == ""
        assert volume.options == "auto"
        assert volume.env == []
        assert volume.asap is False
        assert volume.mounted is False
        assert volume.use == set()
        datetime.fromisoformat(volume.created_at)

    @pytest.mark.unit
    def test_create_with_options(self, registry):
        """Test recognized keys and environment entries."""
        volume = registry.create(
            "data",
            {
                "fs": "s3://bucket/data",
                "options": "listcache",
                "OBJECTIVEFS_PASSPHRASE": "secret",
                "CACHESIZE": "30%",
            },
        )

        assert volume.fs == "s3://bucket/data"
        assert volume.options == "auto,listcache"
        assert volume.env == ["OBJECTIVEFS_PASSPHRASE=secret", "CACHESIZE=30%"]
        assert volume.asap is False

    @pytest.mark.unit
    def test_create_options_accumulate(self, registry):
        """Test that options and its misspelling both append."""
        volume = registry.create("data", {"options": "listcache", "ptions": "noatime"})

        assert volume.options == "auto,listcache,noatime"
        assert volume.env == []

    @pytest.mark.unit
    @pytest.mark.parametrize("value,expected", [("", True), ("true", True), ("1", True), ("false", False), ("no", False)])
    def test_create_asap(self, registry, value, expected):
        """Test eager unmount flag parsing."""
        volume = registry.create("tmp", {"fs": "x", "asap": value})

        assert volume.asap is expected

    @pytest.mark.unit
    def test_create_none_value(self, registry):
        """Test option values sent as null."""
        volume = registry.create("data", {"fs": "x", "REGION": None})

        assert volume.env == ["REGION="]

    @pytest.mark.unit
    def test_create_duplicate(self, registry):
        """Test creating a name twice."""
        registry.create("data", {"fs": "a"})

        with pytest.raises(VolumeAlreadyExists, match="volume 'data' already exists"):
            registry.create("data", {"fs": "b", "asap": "true"})

        assert registry.get("data").status["fs"] == "a"

    @pytest.mark.unit
    def test_create_distinct_names(self, registry):
        """Test that distinct names all succeed."""
        for i in range(10):
            registry.create(f"vol{i}")

        assert len(registry.list()) == 10

    @pytest.mark.unit
    @pytest.mark.parametrize("name", ["", "../etc", "a/b", ".hidden", "with space", "data\n"])
    def test_create_invalid_name(self, registry, name):
        """Test names that are not a single safe path component."""
        with pytest.raises(InvalidVolumeName):
            registry.create(name)

        assert registry.list() == []


class TestLookup:
    """Tests for list, get and path."""

    @pytest.mark.unit
    def test_list(self, registry, volume_root):
        """Test listing volumes."""
        registry.create("a")
        registry.create("b")

        infos = {info.name: info for info in registry.list()}

        assert set(infos) == {"a", "b"}
        assert infos["a"].mountpoint == str(volume_root / "a")
        assert infos["a"].status is None

    @pytest.mark.unit
    def test_list_empty(self, registry):
        """Test listing with no volumes."""
        assert registry.list() == []

    @pytest.mark.unit
    def test_get(self, registry, volume_root):
        """Test getting a volume descriptor."""
        created = registry.create("data", {"fs": "s3://bucket/data", "asap": "true"})

        info = registry.get("data")

        assert info.name == "data"
        assert info.mountpoint == str(volume_root / "data")
        assert info.created_at == created.created_at
        assert info.status == {"mounted": False, "refs": 0, "asap": True, "fs": "s3://bucket/data"}

    @pytest.mark.unit
    def test_get_not_found(self, registry):
        """Test getting an unknown volume."""
        with pytest.raises(VolumeNotFound, match="volume 'missing' not found"):
            registry.get("missing")

    @pytest.mark.unit
    def test_path_does_not_require_mount(self, registry, volume_root):
        """Test path of an unmounted volume."""
        registry.create("data")

        assert registry.path("data") == str(volume_root / "data")

    @pytest.mark.unit
    def test_path_not_found(self, registry):
        """Test path of an unknown volume."""
        with pytest.raises(VolumeNotFound):
            registry.path("missing")


class TestRemove:
    """Tests for VolumeRegistry.remove."""

    @pytest.mark.unit
    def test_remove_calls_unmount(self, registry):
        """Test removal runs the forced unmount and deregisters."""
        volume = registry.create("data")
        unmounted = []

        registry.remove("data", unmounted.append)

        assert unmounted == [volume]
        assert registry.list() == []

    @pytest.mark.unit
    def test_remove_not_found(self, registry):
        """Test removing an unknown volume."""
        with pytest.raises(VolumeNotFound):
            registry.remove("missing", lambda volume: None)

    @pytest.mark.unit
    def test_remove_in_use(self, registry):
        """Test removing a volume with attached callers."""
        volume = registry.create("data")
        volume.use.update({"c1", "c2"})

        with pytest.raises(VolumeInUse, match=r"currently in use \(2 unique\)") as exc_info:
            registry.remove("data", lambda v: pytest.fail("unmount must not run"))

        assert exc_info.value.count == 2
        assert registry.get("data").name == "data"

    @pytest.mark.unit
    def test_remove_unmount_failure_keeps_volume(self, registry):
        """Test that an unmount failure aborts the removal."""
        registry.create("data")

        def failing_unmount(volume):
            raise RuntimeError("busy")

        with pytest.raises(RuntimeError, match="busy"):
            registry.remove("data", failing_unmount)

        assert registry.path("data")

    @pytest.mark.unit
    def test_remove_frees_name(self, registry):
        """Test that a removed name can be created again."""
        registry.create("data", {"fs": "a"})
        registry.remove("data", lambda volume: None)

        volume = registry.create("data", {"fs": "b"})

        assert volume.fs == "b"
