"""
Tests for the config infrastructure layer.

This module tests the repository and manager components.
"""

import json
import tempfile
from pathlib import Path

import pytest

from doctrack.domain.config import ComplianceConfig
from doctrack.infrastructure.config.manager import ConfigManager
from doctrack.infrastructure.config.repository import CONFIG_FILENAME, ConfigRepository


class TestConfigRepository:
    """Test cases for ConfigRepository."""

    def setup_method(self):
        """Set up test fixtures."""
        self.temp_dir = Path(tempfile.mkdtemp())
        self.repo = ConfigRepository(self.temp_dir)

    def teardown_method(self):
        """Clean up test fixtures."""
        import shutil
        shutil.rmtree(self.temp_dir)

    def test_load_json_file_success(self):
        test_data = {"key": "value", "number": 42}
        (self.temp_dir / "test.json").write_text(json.dumps(test_data))

        assert self.repo.load_json_file("test") == test_data

    def test_load_jsonc_file_with_comments(self):
        (self.temp_dir / "test.jsonc").write_text(
            '{\n  // organization\n  "url": "http://example.com", /* inline */ "n": 1\n}'
        )

        result = self.repo.load_json_file("test")
        assert result == {"url": "http://example.com", "n": 1}

    def test_load_json_file_not_found(self):
        with pytest.raises(FileNotFoundError):
            self.repo.load_json_file("nonexistent")

    def test_load_invalid_json(self):
        (self.temp_dir / "bad.json").write_text("{not json")
        with pytest.raises(ValueError):
            self.repo.load_json_file("bad")

    def test_save_json_file_creates_directory(self):
        repo = ConfigRepository(self.temp_dir / "nested")
        path = repo.save_json_file("test", {"a": 1})
        assert path.exists()
        assert json.loads(path.read_text()) == {"a": 1}

    def test_config_exists(self):
        assert not self.repo.config_exists()
        (self.temp_dir / f"{CONFIG_FILENAME}.jsonc").write_text("{}")
        assert self.repo.config_exists()

    def test_load_compliance_config(self):
        (self.temp_dir / f"{CONFIG_FILENAME}.json").write_text(
            json.dumps({"organization": "Test Corp", "alert_limit": 5})
        )
        config = self.repo.load_compliance_config()
        assert config.organization == "Test Corp"
        assert config.alert_limit == 5

    def test_load_compliance_config_invalid(self):
        (self.temp_dir / f"{CONFIG_FILENAME}.json").write_text(json.dumps({"alert_limit": 0}))
        with pytest.raises(ValueError, match="Invalid compliance configuration"):
            self.repo.load_compliance_config()

    def test_save_and_load_round_trip(self):
        self.repo.save_compliance_config(ComplianceConfig(organization="Round Trip"))
        loaded = self.repo.load_compliance_config()
        assert loaded.organization == "Round Trip"
        assert len(loaded.document_types) == 9


class TestConfigManager:
    """Test cases for ConfigManager."""

    def setup_method(self):
        self.temp_dir = Path(tempfile.mkdtemp())
        self.manager = ConfigManager(self.temp_dir)

    def teardown_method(self):
        import shutil
        shutil.rmtree(self.temp_dir)

    def write_config(self, data):
        (self.temp_dir / f"{CONFIG_FILENAME}.json").write_text(json.dumps(data))

    def test_defaults_when_missing(self, caplog):
        config = self.manager.load_config()
        assert config.organization == "DocTrack"
        assert self.manager.using_defaults
        assert "using built-in defaults" in caplog.text

    def test_load_config_caches(self):
        self.write_config({"organization": "First"})
        first = self.manager.load_config()
        self.write_config({"organization": "Second"})
        assert self.manager.load_config() is first
        assert self.manager.load_config(force_reload=True).organization == "Second"

    def test_clear_cache(self):
        self.write_config({"organization": "First"})
        self.manager.load_config()
        self.write_config({"organization": "Second"})
        self.manager.clear_cache()
        assert self.manager.load_config().organization == "Second"

    def test_get_catalog(self):
        catalog = self.manager.get_catalog()
        assert "health_insurance" in catalog.mandatory_types
        assert catalog.display_name("medical_fitness") == "Medical Fitness Certificate"

    def test_write_default_config(self):
        path = self.manager.write_default_config()
        assert path.exists()
        assert not self.manager.using_defaults
        with pytest.raises(FileExistsError):
            self.manager.write_default_config()
        self.manager.write_default_config(overwrite=True)

    def test_validate_defaults(self):
        assert self.manager.validate_all_configs() == []

    def test_validate_strict_missing_file(self):
        errors = self.manager.validate_all_configs(strict=True)
        assert len(errors) == 1
        assert "not found" in errors[0]

    def test_validate_invalid_model(self):
        self.write_config({"currency": "DIRHAM"})
        errors = self.manager.validate_all_configs()
        assert len(errors) == 1
        assert "validation failed" in errors[0]

    def test_validate_unknown_references(self):
        self.write_config({
            "document_types": [
                {"doc_type": "passport", "display_name": "Passport", "is_mandatory": True},
            ],
            "compliance_rules": [{"doc_type": "visa", "fine_per_day": 50}],
            "dependencies": [{"blocking_doc_type": "passport", "blocked_doc_type": "visa"}],
        })
        errors = self.manager.validate_all_configs()
        assert len(errors) == 2
        assert any("Dependency passport -> visa" in e for e in errors)
        assert any("Compliance rule references unknown" in e for e in errors)

    def test_validate_no_mandatory_types(self):
        self.write_config({
            "document_types": [{"doc_type": "trade_license", "display_name": "Trade License"}],
            "compliance_rules": [],
            "dependencies": [],
        })
        errors = self.manager.validate_all_configs()
        assert errors == ["No active mandatory document types configured"]

    def test_get_config_summary(self):
        summary = self.manager.get_config_summary()
        assert summary["using_defaults"] is True
        assert summary["currency"] == "AED"
        assert summary["document_types"] == 9
        assert summary["mandatory_types"] == 7
        assert summary["dependencies"] == 4
        assert summary["compliance_rules"] == 7
