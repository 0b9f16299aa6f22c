"""
Generation models — output kinds, requests, and results.

A GenerationRequest is the one transient value threaded through a
single orchestrator run. Its scratch directory is named after a stable
identifier of the project item, so re-running on the same item reuses
(and first wipes) the same directory.
"""

from __future__ import annotations

import tempfile
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from protogen.core.models.project import ProjectItem

# Directory name prefix for per-request scratch directories
SCRATCH_PREFIX = "protogen-"

FailureReason = Literal[
    "binary_missing",
    "timeout",
    "unexpected_output_count",
    "filesystem_error",
    "unsupported_language",
    "source_missing",
]


class OutputKind(BaseModel):
    """A compiler output mode and the naming rules for its artifacts.

    Destination file name is ``<source stem><suffix><output extension>``,
    placed in ``subdir`` under the schema's directory (or next to the
    schema when ``subdir`` is empty).
    """

    model_config = ConfigDict(frozen=True)

    name: str
    flag: str                                   # e.g. "csharp_out"
    expected_count: int = Field(ge=1)
    subdir: str = ""
    suffix: str = ""
    extensions: tuple[str, ...] = ()            # what the compiler emits
    description: str = ""

    @property
    def multi_file(self) -> bool:
        return self.expected_count > 1

    def destination_dir(self, source: Path) -> Path:
        base = source.parent
        return base / self.subdir if self.subdir else base

    def destination_for(self, source: Path, output: Path) -> Path:
        """Compute where a compiler output file lands in the project."""
        return self.destination_dir(source) / f"{source.stem}{self.suffix}{output.suffix}"


class GenerationRequest(BaseModel):
    """One generator run for one schema file."""

    request_id: str
    source_path: Path
    output_kind: OutputKind
    scratch_dir: Path

    @classmethod
    def for_item(
        cls,
        item: ProjectItem,
        kind: OutputKind,
        scratch_root: Path | None = None,
    ) -> GenerationRequest:
        """Build a request whose scratch dir is derived from the item identity."""
        root = scratch_root or Path(tempfile.gettempdir())
        return cls(
            request_id=item.identifier,
            source_path=Path(item.path),
            output_kind=kind,
            scratch_dir=root / f"{SCRATCH_PREFIX}{item.identifier}",
        )


class GenerationResult(BaseModel):
    """What one request produced.

    Either ``expected_count`` files were generated and attached, or the
    request failed / was skipped with a ``reason``.
    """

    source_path: str
    kind: str = ""
    status: Literal["ok", "failed", "skipped"] = "ok"
    reason: FailureReason | None = None
    message: str = ""
    files: list[str] = Field(default_factory=list)
    duration_ms: int = 0

    @property
    def ok(self) -> bool:
        return self.status == "ok"

    @property
    def failed(self) -> bool:
        return self.status == "failed"

    @classmethod
    def failure(
        cls,
        request: GenerationRequest,
        reason: FailureReason,
        message: str = "",
        files: list[str] | None = None,
    ) -> GenerationResult:
        return cls(
            source_path=str(request.source_path),
            kind=request.output_kind.name,
            status="failed",
            reason=reason,
            message=message,
            files=files or [],
        )

    @classmethod
    def skipped(cls, source: Path, reason: FailureReason, message: str = "") -> GenerationResult:
        return cls(
            source_path=str(source),
            status="skipped",
            reason=reason,
            message=message,
        )

    def to_dict(self) -> dict:
        return self.model_dump(mode="json")
