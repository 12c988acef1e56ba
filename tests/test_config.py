"""Tests for YAML bundle declarations.

These tests verify:
- BundleConfig parsing and validation
- Parse-time rejection of unknown mapping formats
- Registry availability from installed_drivers
- ConfigPath discovery order
"""

from __future__ import annotations

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from bundle_mapping import (
    BuildCoordinator,
    BundleConfig,
    ConfigPath,
    ConfigurationError,
    ContainerBuilder,
    DriverKind,
    MappingFormat,
    UnknownDriverError,
)

DECLARATIONS = """
installed_drivers:
  - doctrine/orm
bundles:
  - identity: AttributeBundle
    path: /srv/app/src/AttributeBundle
    model_namespace: App\\Model
    mapping_format: XML
    supported_drivers: [doctrine/orm, doctrine/mongodb-odm]
  - identity: CoreBundle
    supported_drivers: [doctrine/orm]
"""


class TestBundleConfig:
    """Tests for BundleConfig."""

    def test_load(self, tmp_path: Path):
        """Test loading a declaration file."""
        config_file = tmp_path / "bundles.yaml"
        config_file.write_text(DECLARATIONS)

        config = BundleConfig.load(config_file)

        assert config.installed_drivers == ["doctrine/orm"]
        descriptors = config.descriptors()
        assert [d.identity for d in descriptors] == ["AttributeBundle", "CoreBundle"]
        assert descriptors[0].mapping_format is MappingFormat.XML
        assert descriptors[0].model_namespace == "App\\Model"
        assert descriptors[0].supported_drivers == (
            DriverKind.RELATIONAL_ORM,
            DriverKind.DOCUMENT_STORE,
        )
        assert descriptors[1].has_mapping is False

    def test_resolve_loaded_declarations(self, tmp_path: Path):
        """Test declarations resolve against the configured registry."""
        config_file = tmp_path / "bundles.yaml"
        config_file.write_text(DECLARATIONS)
        config = BundleConfig.load(config_file)
        coordinator = BuildCoordinator(config.registry())
        container = ContainerBuilder()

        for descriptor in config.descriptors():
            coordinator.build(descriptor, container)

        # mongodb-odm is not installed, CoreBundle has no namespace
        assert [p.pass_identifier for p in container.compiler_passes] == [
            "attribute.driver.doctrine/orm",
        ]

    def test_defaults(self):
        """Test defaults for optional fields."""
        config = BundleConfig.from_dict({"bundles": [{"identity": "AttributeBundle"}]})

        bundle = config.bundles[0]
        assert config.installed_drivers is None
        assert bundle.mapping_format is MappingFormat.XML
        assert bundle.doctrine_mapping_directory == "model"
        assert bundle.supported_drivers == []

    def test_empty_document(self):
        """Test an empty document yields no bundles."""
        assert BundleConfig.from_dict(None).bundles == []

    def test_yaml_alias(self):
        """Test 'yaml' is accepted for the yml format."""
        config = BundleConfig.from_dict(
            {"bundles": [{"identity": "AttributeBundle", "mapping_format": "yaml"}]}
        )
        assert config.bundles[0].mapping_format is MappingFormat.YAML

    def test_unknown_format_rejected(self):
        """Test an unknown mapping format fails at parse time."""
        with pytest.raises(ConfigurationError, match="Unknown mapping format"):
            BundleConfig.from_dict(
                {"bundles": [{"identity": "AttributeBundle", "mapping_format": "php"}]}
            )

    def test_unknown_field_rejected(self):
        """Test unexpected keys are rejected."""
        with pytest.raises(ConfigurationError):
            BundleConfig.from_dict({"bundles": [{"identity": "AttributeBundle", "color": "red"}]})

    def test_missing_identity_rejected(self):
        """Test bundles must have an identity."""
        with pytest.raises(ConfigurationError):
            BundleConfig.from_dict({"bundles": [{"path": "/srv/app"}]})

    def test_duplicate_drivers_rejected(self):
        """Test duplicate drivers fail when building descriptors."""
        config = BundleConfig.from_dict(
            {
                "bundles": [
                    {
                        "identity": "AttributeBundle",
                        "supported_drivers": ["doctrine/orm", "doctrine/orm"],
                    }
                ]
            }
        )

        with pytest.raises(ConfigurationError):
            config.descriptors()

    def test_unknown_driver_kept_until_resolution(self):
        """Test unknown drivers parse and fail during resolution."""
        config = BundleConfig.from_dict(
            {
                "bundles": [
                    {
                        "identity": "AttributeBundle",
                        "model_namespace": "App\\Model",
                        "supported_drivers": ["doctrine/orm", "unknown-driver"],
                    }
                ]
            }
        )
        descriptor = config.descriptors()[0]

        with pytest.raises(UnknownDriverError):
            BuildCoordinator(config.registry()).resolve(descriptor)

    def test_unknown_installed_driver_rejected(self):
        """Test installed_drivers must name known drivers."""
        config = BundleConfig.from_dict({"installed_drivers": ["doctrine/couchdb-odm"]})

        with pytest.raises(ConfigurationError):
            config.registry()

    def test_malformed_yaml(self, tmp_path: Path):
        """Test invalid YAML is a configuration error."""
        config_file = tmp_path / "bundles.yaml"
        config_file.write_text("bundles: [unclosed")

        with pytest.raises(ConfigurationError, match="Failed to parse"):
            BundleConfig.load(config_file)

    def test_non_mapping_document(self, tmp_path: Path):
        """Test a top-level list is rejected."""
        config_file = tmp_path / "bundles.yaml"
        config_file.write_text("- identity: AttributeBundle\n")

        with pytest.raises(ConfigurationError, match="must be a mapping"):
            BundleConfig.load(config_file)

    def test_missing_file(self, tmp_path: Path):
        """Test a missing file is a configuration error."""
        with pytest.raises(ConfigurationError):
            BundleConfig.load(tmp_path / "missing.yaml")


class TestConfigPath:
    """Tests for ConfigPath discovery."""

    def test_env_var(self, tmp_path: Path):
        """Test BUNDLE_MAPPING_CONFIG takes priority."""
        config_file = tmp_path / "custom.yaml"
        config_file.write_text("bundles: []")

        with patch.dict(os.environ, {"BUNDLE_MAPPING_CONFIG": str(config_file)}):
            assert ConfigPath.find_config_file() == config_file

    def test_workspace_path(self, tmp_path: Path):
        """Test WORKSPACE_PATH/config/bundles.yaml is used."""
        config_dir = tmp_path / "config"
        config_dir.mkdir()
        config_file = config_dir / "bundles.yaml"
        config_file.write_text("bundles: []")

        env = {"BUNDLE_MAPPING_CONFIG": "", "WORKSPACE_PATH": str(tmp_path)}
        with patch.dict(os.environ, env):
            assert ConfigPath.find_config_file() == config_file

    def test_detected_workspace(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        """Test the workspace root is detected from marker files."""
        (tmp_path / "pyproject.toml").write_text("")
        config_dir = tmp_path / "config"
        config_dir.mkdir()
        (config_dir / "bundles.yaml").write_text("bundles: []")
        nested = tmp_path / "src" / "app"
        nested.mkdir(parents=True)
        monkeypatch.chdir(nested)
        monkeypatch.delenv("BUNDLE_MAPPING_CONFIG", raising=False)
        monkeypatch.delenv("WORKSPACE_PATH", raising=False)

        assert ConfigPath.find_config_file() == tmp_path / "config" / "bundles.yaml"

    def test_invalid_env_var_falls_through(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        """Test a missing override falls back to other locations."""
        (tmp_path / ".git").mkdir()
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("BUNDLE_MAPPING_CONFIG", "/nonexistent/bundles.yaml")
        monkeypatch.delenv("WORKSPACE_PATH", raising=False)

        assert ConfigPath.find_config_file() is None
