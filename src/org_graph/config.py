"""Configuration for DOT generation and the org-graph CLI, stored as YAML."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal

import structlog
import yaml
from pydantic import TypeAdapter, ValidationError

from org_graph.errors import ConfigError

logger = structlog.get_logger()

RankDir = Literal["TB", "LR", "BT", "RL"]

DEFAULT_STORAGE_PATH = ".org-graph/store"

# CLI settings read by org-graph, with their descriptions
SETTINGS = {
    "storage.path": "Directory holding stored DOT sources",
    "dot.config": "YAML file with default DOT options",
}


@dataclass(frozen=True)
class NodeShapeConfig:
    """DOT node shape per entity type."""

    purpose: str = "ellipse"
    person: str = "box"
    project: str = "component"
    production: str = "cylinder"
    property: str = "folder"
    progress: str = "box"


@dataclass(frozen=True)
class ColorConfig:
    """Default fill colors per entity type and status."""

    purpose: str = "lightblue"
    person: str = "lightgreen"
    project_planning: str = "lightyellow"
    project_active: str = "lightcyan"
    project_completed: str = "lightgray"
    project_onhold: str = "orange"
    production_operational: str = "green"
    production_maintenance: str = "yellow"
    production_degraded: str = "orange"
    production_offline: str = "red"
    property: str = "wheat"
    progress: str = "lightblue"


@dataclass(frozen=True)
class DotConfig:
    """Options controlling how an organization is rendered to DOT.

    Layout selection: ``use_hierarchical_layout`` wins over ``use_subgraphs``;
    with both off, nodes are written flat.
    """

    use_subgraphs: bool = True
    rankdir: RankDir = "TB"
    show_status: bool = True
    node_shapes: NodeShapeConfig = field(default_factory=NodeShapeConfig)
    colors: ColorConfig = field(default_factory=ColorConfig)
    use_hierarchical_layout: bool = True
    # Fixed "digraph Organization" header without rankdir
    use_template_mode: bool = False


_dot_config_adapter = TypeAdapter(DotConfig)


def dot_config_from_dict(data: dict[str, Any]) -> DotConfig:
    """Build a DotConfig from a plain mapping, filling unset options with defaults.

    Args:
        data: Mapping with any subset of the DotConfig fields

    Returns:
        Validated DotConfig

    Raises:
        ConfigError: If the mapping contains invalid values
    """
    try:
        return _dot_config_adapter.validate_python(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid DOT configuration: {e}") from e


def load_dot_config(path: str | Path) -> DotConfig:
    """Load a DotConfig from a YAML file.

    Args:
        path: Path to a YAML mapping of DotConfig options

    Returns:
        Validated DotConfig
    """
    path = Path(path)
    try:
        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.error("Failed to load DOT config", path=str(path), error=str(e))
        raise ConfigError(f"Failed to load DOT config from {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"DOT config in {path} must be a mapping")

    config = dot_config_from_dict(data)
    logger.debug("DOT config loaded", path=str(path), keys=list(data.keys()))
    return config


class Config:
    """CLI settings stored in YAML files.

    Local settings live in .org-graph/config.yaml in the current directory,
    global settings in ~/.org-graph/config.yaml. Reads check local settings
    first and fall back to global ones.
    """

    def __init__(self, use_global: bool = False, config_dir: Path | None = None) -> None:
        """Initialize configuration manager.

        Args:
            use_global: If True, use global config only. If False, use local config with global fallback.
            config_dir: Custom directory to store config file (overrides use_global)
        """
        if config_dir is not None:
            self.config_dir = Path(config_dir)
            self.is_global = use_global
        elif use_global:
            self.config_dir = Path.home() / ".org-graph"
            self.is_global = True
        else:
            self.config_dir = Path.cwd() / ".org-graph"
            self.is_global = False

        self.config_file = self.config_dir / "config.yaml"
        self._config: dict[str, Any] = self._load(self.config_file)

        self._global_config: dict[str, Any] = {}
        if not self.is_global:
            global_config_file = Path.home() / ".org-graph" / "config.yaml"
            if global_config_file != self.config_file and global_config_file.exists():
                try:
                    self._global_config = self._load(global_config_file)
                except ConfigError as e:
                    logger.warning("Failed to load global config", error=str(e))

        logger.debug("Config initialized", config_file=str(self.config_file), is_global=self.is_global)

    @staticmethod
    def _load(config_file: Path) -> dict[str, Any]:
        if not config_file.exists():
            logger.debug("Config file does not exist, initializing empty config", config_file=str(config_file))
            return {}

        try:
            with open(config_file, "r") as f:
                config = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.error("Failed to load config", error=str(e))
            raise ConfigError(f"Failed to load config from {config_file}: {e}") from e

        logger.debug("Config loaded successfully", keys=list(config.keys()))
        return config

    def _save(self) -> None:
        try:
            self.config_dir.mkdir(parents=True, exist_ok=True)
            with open(self.config_file, "w") as f:
                yaml.safe_dump(self._config, f, default_flow_style=False, sort_keys=False)
        except OSError as e:
            logger.error("Failed to save config", error=str(e))
            raise ConfigError(f"Failed to save config to {self.config_file}: {e}") from e
        logger.debug("Config saved successfully")

    def get(self, key: str, default: str | None = None) -> str | None:
        """Get a configuration value, falling back to global config for local instances.

        Args:
            key: Configuration key
            default: Default value if key doesn't exist

        Returns:
            Configuration value or default
        """
        if key in self._config:
            logger.debug("Getting config value from local", key=key)
            return self._config[key]

        if not self.is_global and key in self._global_config:
            logger.debug("Getting config value from global", key=key)
            return self._global_config[key]

        logger.debug("Config value not found", key=key)
        return default

    def set(self, key: str, value: str) -> None:
        """Set a configuration value and persist it."""
        logger.debug("Setting config value", key=key)
        self._config[key] = value
        self._save()

    def unset(self, key: str) -> None:
        """Remove a configuration value if present."""
        logger.debug("Unsetting config value", key=key)
        if key in self._config:
            del self._config[key]
            self._save()

    def list(self) -> dict[str, str]:
        """List all configuration settings, local values taking precedence."""
        if self.is_global:
            return self._config.copy()
        merged = self._global_config.copy()
        merged.update(self._config)
        return merged


def get_config(use_global: bool = False) -> Config:
    """Get a configuration instance.

    Args:
        use_global: If True, return global config. If False, return local config with global fallback.

    Returns:
        Config instance
    """
    return Config(use_global=use_global)


def check_setting_key(key: str) -> None:
    """Raise ConfigError unless key is one of SETTINGS."""
    if key not in SETTINGS:
        raise ConfigError(f"Unknown setting {key!r}. Known settings: {', '.join(SETTINGS)}")


def validate_setting(key: str, value: str) -> None:
    """Check a CLI setting before it is stored.

    Args:
        key: Setting name, one of SETTINGS
        value: Value to store

    Raises:
        ConfigError: If the key is unknown or dot.config does not hold valid DOT options
    """
    check_setting_key(key)
    if key == "dot.config":
        load_dot_config(value)
