"""YAML bundle declarations.

Bundles that are not Python classes can be declared in a YAML file:

    installed_drivers:          # optional; absent = every driver available
      - doctrine/orm
    bundles:
      - identity: AttributeBundle
        path: /srv/app/src/AttributeBundle
        model_namespace: App\\Model
        mapping_format: xml
        supported_drivers: [doctrine/orm]

The file is located with this priority:
1. BUNDLE_MAPPING_CONFIG environment variable (explicit override)
2. WORKSPACE_PATH/config/bundles.yaml
3. Workspace detection + config/bundles.yaml
4. ./config/bundles.yaml fallback

Example:
    >>> from bundle_mapping.config import BundleConfig, ConfigPath
    >>>
    >>> config_file = ConfigPath.find_config_file()
    >>> if config_file:
    ...     config = BundleConfig.load(config_file)
    ...     coordinator = BuildCoordinator(config.registry())
    ...     for descriptor in config.descriptors():
    ...         coordinator.build(descriptor, container)
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from .descriptor import DEFAULT_MAPPING_DIRECTORY, ModuleDescriptor
from .exceptions import ConfigurationError
from .logging import log_debug, log_info, log_warn
from .registry import DriverRegistry
from .types import MappingFormat

CONFIG_ENV_VAR = "BUNDLE_MAPPING_CONFIG"

CONFIG_FILE_NAME = "bundles.yaml"

# Workspace marker files for detecting project root
WORKSPACE_MARKERS = (
    "pyproject.toml",
    ".git",
    "composer.json",
)


class BundleDeclaration(BaseModel):
    """One bundle entry of the declaration file."""

    identity: str = Field(min_length=1, description="Bundle type name.")
    path: str = Field(default="", description="Bundle base directory.")
    model_namespace: str | None = Field(
        default=None,
        description="Model namespace. Absent disables mapping registration.",
    )
    mapping_format: MappingFormat = Field(
        default=MappingFormat.XML,
        description="Mapping format (xml, yml or annotation).",
    )
    supported_drivers: list[str] = Field(
        default_factory=list,
        description="Drivers in registration order.",
    )
    doctrine_mapping_directory: str = Field(
        default=DEFAULT_MAPPING_DIRECTORY,
        description="Mapping subdirectory under Resources/config/doctrine.",
    )

    model_config = {"extra": "forbid"}

    @field_validator("mapping_format", mode="before")
    @classmethod
    def _parse_mapping_format(cls, value: Any) -> MappingFormat:
        try:
            return MappingFormat.parse(value)
        except ConfigurationError as e:
            raise ValueError(e.message) from e

    def to_descriptor(self) -> ModuleDescriptor:
        return ModuleDescriptor(
            identity=self.identity,
            model_namespace=self.model_namespace,
            mapping_format=self.mapping_format,
            supported_drivers=tuple(self.supported_drivers),
            path=self.path,
            doctrine_mapping_directory=self.doctrine_mapping_directory,
        )


class BundleConfig(BaseModel):
    """Parsed declaration file.

    Example:
        >>> config = BundleConfig.from_dict({"bundles": [{"identity": "AttributeBundle"}]})
        >>> [d.prefix for d in config.descriptors()]
        ['attribute']
    """

    installed_drivers: list[str] | None = Field(
        default=None,
        description="Drivers whose integration is installed. None = all.",
    )
    bundles: list[BundleDeclaration] = Field(default_factory=list)

    model_config = {"extra": "forbid"}

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> BundleConfig:
        """Validate parsed YAML data.

        Raises:
            ConfigurationError: If the data does not match the schema.
        """
        try:
            return cls.model_validate(data or {})
        except ValidationError as e:
            raise ConfigurationError(
                f"Invalid bundle declarations: {e}",
                metadata={"errors": e.errors(include_url=False)},
            ) from e

    @classmethod
    def load(cls, config_file: Path) -> BundleConfig:
        """Load and validate a declaration file.

        Args:
            config_file: Path to the YAML file.

        Raises:
            ConfigurationError: If the file cannot be read or is invalid.
        """
        try:
            with config_file.open() as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(
                f"Failed to parse bundle declarations {config_file}: {e}",
                metadata={"file_path": str(config_file)},
            ) from e

        if data is not None and not isinstance(data, dict):
            raise ConfigurationError(
                f"Bundle declarations {config_file} must be a mapping.",
                metadata={"file_path": str(config_file)},
            )

        config = cls.from_dict(data)
        log_info(
            f"Loaded {len(config.bundles)} bundle declarations",
            {"file_path": str(config_file)},
        )
        return config

    def descriptors(self) -> list[ModuleDescriptor]:
        """Descriptors in declaration order."""
        return [bundle.to_descriptor() for bundle in self.bundles]

    def registry(self) -> DriverRegistry:
        """Default registry with availability taken from installed_drivers."""
        return DriverRegistry.default(installed=self.installed_drivers)


class ConfigPath:
    """Locates the bundle declaration file."""

    @staticmethod
    def find_config_file() -> Path | None:
        """Find the declaration file.

        Returns:
            Path to the file, or None if not found.
        """
        # 1. Explicit override via environment variable
        env_path = os.environ.get(CONFIG_ENV_VAR)
        if env_path:
            path = Path(env_path)
            if path.is_file():
                log_debug(f"Using {CONFIG_ENV_VAR}: {path}")
                return path
            log_warn(f"{CONFIG_ENV_VAR} does not exist: {env_path}")

        # 2. WORKSPACE_PATH environment variable
        workspace_path = os.environ.get("WORKSPACE_PATH")
        if workspace_path:
            config_path = Path(workspace_path) / "config" / CONFIG_FILE_NAME
            if config_path.is_file():
                log_debug(f"Using WORKSPACE_PATH config: {config_path}")
                return config_path

        # 3. Auto-detect workspace root
        workspace_root = ConfigPath._detect_workspace_root()
        if workspace_root:
            config_path = workspace_root / "config" / CONFIG_FILE_NAME
            if config_path.is_file():
                log_debug(f"Using detected workspace config: {config_path}")
                return config_path

        # 4. Fallback to current directory
        fallback_path = Path.cwd() / "config" / CONFIG_FILE_NAME
        if fallback_path.is_file():
            log_debug(f"Using fallback config path: {fallback_path}")
            return fallback_path

        log_debug("No bundle declaration file found")
        return None

    @staticmethod
    def _detect_workspace_root() -> Path | None:
        """Detect workspace root by searching up for marker files."""
        current = Path.cwd()

        # Search up to 10 levels
        for _ in range(10):
            for marker in WORKSPACE_MARKERS:
                if (current / marker).exists():
                    log_debug(f"Detected workspace root: {current}")
                    return current

            parent = current.parent
            if parent == current:
                break
            current = parent

        return None


__all__ = [
    "BundleConfig",
    "BundleDeclaration",
    "ConfigPath",
    "CONFIG_ENV_VAR",
]
