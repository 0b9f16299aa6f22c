"""
Directory project — a plain directory tree acting as the host project.

The project root is where protogen.yml lives (or the cwd). Attached
files are recorded in .protogen/state.json, keyed by the schema path
relative to the root.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from protogen.adapters.project.base import ProjectModel
from protogen.core.models.generation import GenerationResult
from protogen.core.models.project import ProjectConfig, ProjectItem
from protogen.core.models.state import ProjectState
from protogen.core.persistence.state_file import default_state_path, load_state, save_state

logger = logging.getLogger(__name__)


class DirectoryProject(ProjectModel):
    """Project backed by a directory and its state file."""

    def __init__(
        self,
        root: Path,
        config: ProjectConfig | None = None,
        selection: list[Path] | None = None,
        state_path: Path | None = None,
    ):
        self.root = Path(os.path.abspath(root))
        self.config = config or ProjectConfig()
        self._selection = [Path(p) for p in (selection or [])]
        self.state_path = state_path or default_state_path(self.root)
        self.state: ProjectState = load_state(self.state_path)
        if self.config.name:
            self.state.project_name = self.config.name

    def _key(self, path: Path) -> str:
        absolute = Path(os.path.abspath(path))
        try:
            return absolute.relative_to(self.root).as_posix()
        except ValueError:
            return absolute.as_posix()

    def _from_key(self, key: str) -> Path:
        path = Path(key)
        return path if path.is_absolute() else self.root / path

    def selected_items(self) -> list[ProjectItem]:
        return [ProjectItem.from_path(p) for p in self._selection]

    def language(self) -> str:
        return self.config.language

    def attach_file(self, source: Path, generated: Path) -> None:
        item = self.state.get_item(self._key(source))
        if item.attach(self._key(generated)):
            logger.info("Attached %s under %s", generated.name, source.name)
        else:
            logger.debug("%s already attached under %s", generated.name, source.name)

    def attached_files(self, source: Path) -> list[Path]:
        item = self.state.items.get(self._key(source))
        if item is None:
            return []
        return [self._from_key(p) for p in item.generated]

    def record_result(self, result: GenerationResult) -> None:
        """Remember the outcome of the last run for an item."""
        self.state.set_item_result(
            self._key(Path(result.source_path)),
            status=result.status,
            reason=result.reason,
        )

    def save(self) -> None:
        save_state(self.state, self.state_path)
