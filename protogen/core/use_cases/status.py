"""
Status use case — what has been generated, and how the last runs went.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from protogen.core.config.loader import ConfigError, find_config_file, load_config, project_root
from protogen.core.models.project import ProjectConfig
from protogen.core.models.state import ProjectState
from protogen.core.persistence.state_file import default_state_path, load_state


@dataclass
class StatusResult:
    """Project summary for display."""

    config: ProjectConfig | None = None
    project_root: Path | None = None
    state: ProjectState | None = None
    error: str | None = None

    @property
    def item_count(self) -> int:
        return len(self.state.items) if self.state else 0

    @property
    def generated_count(self) -> int:
        if not self.state:
            return 0
        return sum(len(i.generated) for i in self.state.items.values())

    def to_dict(self) -> dict:
        if self.error:
            return {"error": self.error}
        return {
            "project_root": str(self.project_root),
            "name": self.config.name if self.config else "",
            "language": self.config.language if self.config else "",
            "items": self.item_count,
            "generated": self.generated_count,
            "state": self.state.model_dump(mode="json") if self.state else None,
        }


def get_status(config_path: Path | None = None) -> StatusResult:
    """Load config and state for the current project."""
    result = StatusResult()

    try:
        if config_path is None:
            config_path = find_config_file()
        result.config = load_config(config_path) if config_path else ProjectConfig()
    except ConfigError as e:
        result.error = str(e)
        return result

    result.project_root = project_root(config_path)
    result.state = load_state(default_state_path(result.project_root))
    return result
