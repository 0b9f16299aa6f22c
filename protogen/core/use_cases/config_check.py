"""
Config check use case — validate protogen.yml and report issues.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from protogen.core.config.kinds import kind_for_language, unknown_overrides
from protogen.core.config.loader import (
    ConfigError,
    find_config_file,
    generator_override,
    load_config,
    project_root,
)
from protogen.core.models.project import ProjectConfig
from protogen.core.services.locator import resolve_generator_path


@dataclass
class ConfigCheckResult:
    """Result of configuration validation."""

    valid: bool = False
    config: ProjectConfig | None = None
    config_path: Path | None = None
    generator_path: Path | None = None
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "valid": self.valid,
            "config_path": str(self.config_path) if self.config_path else None,
            "generator_path": str(self.generator_path) if self.generator_path else None,
            "errors": self.errors,
            "warnings": self.warnings,
            "project_name": self.config.name if self.config else None,
            "language": self.config.language if self.config else None,
        }


def check_config(config_path: Path | None = None) -> ConfigCheckResult:
    """Validate project configuration and report issues."""
    result = ConfigCheckResult()

    if config_path is None:
        config_path = find_config_file()
    if config_path is None:
        result.errors.append("No protogen.yml found.")
        return result
    result.config_path = config_path

    try:
        config = load_config(config_path)
    except ConfigError as e:
        result.errors.append(str(e))
        return result
    result.config = config

    # Semantic checks
    if not config.language:
        result.warnings.append("No language declared; pass --kind to generate.")
    elif kind_for_language(config.language) is None:
        result.errors.append(f"Unsupported language '{config.language}'.")
    for name in unknown_overrides(config.kinds):
        result.errors.append(f"Unknown output kind '{name}' under kinds.")

    generator = resolve_generator_path(generator_override(config, project_root(config_path)))
    result.generator_path = generator
    if not generator.is_file():
        result.warnings.append(f"Generator binary not found at {generator}.")

    result.valid = len(result.errors) == 0
    return result
