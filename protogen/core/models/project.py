"""
Project model — configuration and selected items.

Loaded from protogen.yml. The declared ``language`` decides which
compiler output kind a schema file gets, the way an IDE project's
source language would.
"""

from __future__ import annotations

import hashlib
import os
from pathlib import Path

from pydantic import BaseModel, Field

# Design constant: seconds to wait for the compiler before giving up
DEFAULT_TIMEOUT = 10.0


class GeneratorSettings(BaseModel):
    """Where the compiler lives and how long it may run."""

    path: str | None = None         # None = bundled binary
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)


class OutputKindOverride(BaseModel):
    """Per-project tweaks to a built-in output kind. Unset keys keep the default."""

    flag: str | None = None
    subdir: str | None = None
    suffix: str | None = None


class ProjectConfig(BaseModel):
    """Root project configuration — loaded from protogen.yml.

    Every key is optional; a missing file behaves like an empty one.
    """

    version: int = 1

    name: str = ""
    language: str = ""
    generator: GeneratorSettings = Field(default_factory=GeneratorSettings)
    kinds: dict[str, OutputKindOverride] = Field(default_factory=dict)


def item_identifier(path: Path) -> str:
    """Stable identifier for a project item: hash of its normalized path."""
    normalized = os.path.normcase(str(path.resolve()))
    return hashlib.sha256(normalized.encode("utf-8")).hexdigest()[:16]


class ProjectItem(BaseModel):
    """A schema file selected for generation."""

    path: str
    identifier: str

    @property
    def name(self) -> str:
        return Path(self.path).name

    @classmethod
    def from_path(cls, path: Path) -> ProjectItem:
        # Keep symlinked schemas where they were selected; outputs land beside them
        return cls(path=os.path.abspath(path), identifier=item_identifier(path))
