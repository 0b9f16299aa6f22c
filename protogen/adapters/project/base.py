"""
Project model contract — what the orchestrator needs from a host project.

An IDE would expose its selection, the project's source language, and
a way to nest a file under a project item. Any host implements these
four operations; the orchestrator only consumes them.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

from protogen.core.models.project import ProjectItem


class ProjectModel(ABC):
    """Abstract host project."""

    @abstractmethod
    def selected_items(self) -> list[ProjectItem]:
        """Items the user selected, in selection order."""

    @abstractmethod
    def language(self) -> str:
        """Declared source language of the containing project."""

    @abstractmethod
    def attach_file(self, source: Path, generated: Path) -> None:
        """Attach an existing file as a child of the item at ``source``.

        Attaching the same file twice must not duplicate it.
        """

    @abstractmethod
    def attached_files(self, source: Path) -> list[Path]:
        """Files currently attached under the item at ``source``."""
