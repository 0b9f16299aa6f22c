"""
ProjectState — which generated files belong to which schema.

Serialized to .protogen/state.json. This is the directory project's
equivalent of child nodes under a project item: attaching a file
records it here, once.
"""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel, Field


def _now_iso() -> str:
    """Current UTC time as ISO string."""
    return datetime.now(UTC).isoformat()


class ItemState(BaseModel):
    """Generated children and last outcome of one schema file."""

    source: str
    generated: list[str] = Field(default_factory=list)
    last_status: str | None = None  # ok, failed, skipped
    last_reason: str | None = None
    last_run_at: str | None = None

    def attach(self, path: str) -> bool:
        """Record a generated file. Returns False if it was already attached."""
        if path in self.generated:
            return False
        self.generated.append(path)
        return True


class ProjectState(BaseModel):
    """Root state document."""

    schema_version: int = 1
    project_name: str = ""
    updated_at: str = Field(default_factory=_now_iso)
    items: dict[str, ItemState] = Field(default_factory=dict)

    def touch(self) -> None:
        """Update the modification timestamp."""
        self.updated_at = _now_iso()

    def get_item(self, key: str) -> ItemState:
        """Get or create the state entry for an item."""
        if key not in self.items:
            self.items[key] = ItemState(source=key)
        return self.items[key]

    def set_item_result(self, key: str, status: str, reason: str | None = None) -> None:
        item = self.get_item(key)
        item.last_status = status
        item.last_reason = reason
        item.last_run_at = _now_iso()
