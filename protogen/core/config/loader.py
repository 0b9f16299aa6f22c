"""
Configuration loader — reads protogen.yml into a ProjectConfig.

It reads YAML, validates against the Pydantic schema, and returns a
typed config. A project without protogen.yml still works: callers fall
back to ``ProjectConfig()`` and the current directory as project root.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from protogen.core.models.project import ProjectConfig

logger = logging.getLogger(__name__)

# Default config filename
CONFIG_FILE = "protogen.yml"


class ConfigError(Exception):
    """Raised when project configuration is invalid or unreadable."""


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Search for protogen.yml starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to protogen.yml, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / CONFIG_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break
        current = parent

    return None


def load_config(path: Path) -> ProjectConfig:
    """Load and validate protogen.yml.

    An empty file yields the default configuration.

    Raises:
        ConfigError: If the file is missing or invalid.
    """
    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    # Allow everything nested under a "project:" key
    if isinstance(data.get("project"), dict):
        data = {**data["project"], **{k: v for k, v in data.items() if k != "project"}}

    try:
        config = ProjectConfig.model_validate(data)
    except Exception as e:
        raise ConfigError(f"Invalid configuration: {e}") from e

    logger.info("Loaded config '%s' (language=%s)", config.name or path.parent.name, config.language or "-")
    return config


def project_root(config_path: Path | None) -> Path:
    """Project root: the config file's directory, or the cwd without one."""
    return config_path.parent.resolve() if config_path else Path.cwd().resolve()


def generator_override(config: ProjectConfig, root: Path) -> str | None:
    """Configured generator path, resolved against the project root."""
    if not config.generator.path:
        return None
    path = Path(config.generator.path).expanduser()
    if not path.is_absolute():
        path = root / path
    return str(path)
