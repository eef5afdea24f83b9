"""Tests for value objects and configuration artifact entities."""

from pathlib import Path
import pytest
from hostsync.domain.entities.config_artifact import (
    BulkAssetDirectory,
    ConfigArtifact,
    ServiceAllowlist,
)
from hostsync.domain.value_objects.key_value_record import KeyValueRecord
from hostsync.domain.value_objects.revision import Revision


class TestRevision:
    def test_exact_equality(self):
        assert Revision("abc123") == Revision("abc123")
        assert Revision("abc123") != Revision("abc1234")

    def test_empty_rejected(self):
        with pytest.raises(ValueError):
            Revision("")
        with pytest.raises(ValueError):
            Revision("   ")

    def test_surrounding_whitespace_rejected(self):
        with pytest.raises(ValueError):
            Revision("abc123\n")

    def test_str(self):
        assert str(Revision("v0.12.0")) == "v0.12.0"


class TestKeyValueRecord:
    def test_to_dict(self):
        record = KeyValueRecord("mainsail", "general.printername", "Shaper Compact")
        assert record.to_dict() == {
            "namespace": "mainsail",
            "key": "general.printername",
            "value": "Shaper Compact",
        }

    def test_empty_key_rejected(self):
        with pytest.raises(ValueError):
            KeyValueRecord("mainsail", "", "x")


class TestConfigArtifact:
    def test_backup_recorded_once(self):
        artifact = ConfigArtifact(Path("/src/a.cfg"), Path("/cfg/a.cfg"), Path("/cfg/Backup"))
        artifact.record_backup(Path("/cfg/Backup/a.cfg.bak-1"))
        with pytest.raises(ValueError):
            artifact.record_backup(Path("/cfg/Backup/a.cfg.bak-2"))


class TestBulkAssetDirectory:
    def test_label_required(self):
        with pytest.raises(ValueError):
            BulkAssetDirectory(Path("/src/macros"), Path("/cfg/macros"), "")


class TestServiceAllowlist:
    def test_multiline_entry_rejected(self):
        with pytest.raises(ValueError):
            ServiceAllowlist(Path("/data/moonraker.asvc"), "a\nb")
