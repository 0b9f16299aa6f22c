"""
Action and Receipt models — the contract between orchestrator and adapters.

An Action asks an adapter to do one thing (run the compiler once).
A Receipt reports what happened. Adapters return receipts, never
exceptions, so the orchestrator can always reach its cleanup step.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any, Literal

from pydantic import BaseModel, Field


def _now_iso() -> str:
    """Current UTC time as ISO string."""
    return datetime.now(UTC).isoformat()


class Action(BaseModel):
    """A single requested adapter operation."""

    id: str                         # request identifier
    adapter: str                    # which adapter handles this
    name: str = ""
    params: dict[str, Any] = Field(default_factory=dict)


class Receipt(BaseModel):
    """Outcome of an adapter execution.

    ``metadata["reason"]`` carries the failure kind when an adapter
    knows it (``timeout``, ``binary_missing`` ...).
    """

    adapter: str
    action_id: str
    status: Literal["ok", "skipped", "failed"] = "ok"

    started_at: str = Field(default_factory=_now_iso)
    ended_at: str = Field(default_factory=_now_iso)
    duration_ms: int = 0

    output: str = ""
    error: str | None = None

    metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.status == "ok"

    @property
    def failed(self) -> bool:
        return self.status == "failed"

    @property
    def reason(self) -> str | None:
        """Failure kind reported by the adapter, if any."""
        return self.metadata.get("reason")

    @classmethod
    def success(
        cls,
        adapter: str,
        action_id: str,
        output: str = "",
        **kwargs: Any,
    ) -> Receipt:
        """Create a success receipt."""
        return cls(
            adapter=adapter,
            action_id=action_id,
            status="ok",
            output=output,
            **kwargs,
        )

    @classmethod
    def failure(
        cls,
        adapter: str,
        action_id: str,
        error: str,
        reason: str | None = None,
        **kwargs: Any,
    ) -> Receipt:
        """Create a failure receipt, tagging ``reason`` into metadata."""
        metadata = dict(kwargs.pop("metadata", {}) or {})
        if reason:
            metadata["reason"] = reason
        return cls(
            adapter=adapter,
            action_id=action_id,
            status="failed",
            error=error,
            metadata=metadata,
            **kwargs,
        )
