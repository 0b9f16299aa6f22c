"""
Generate use case — run the compiler for every selected schema file.

Loads config, builds the directory project, picks the output kind,
then runs one orchestrator request per item, sequentially and in
selection order. A failed item never stops the ones after it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from protogen.adapters.base import Adapter
from protogen.adapters.project.directory import DirectoryProject
from protogen.core.config.kinds import get_kind, kind_for_language
from protogen.core.config.loader import (
    ConfigError,
    find_config_file,
    generator_override,
    load_config,
    project_root,
)
from protogen.core.engine.orchestrator import GenerationOrchestrator
from protogen.core.models.generation import GenerationRequest, GenerationResult, OutputKind
from protogen.core.models.project import ProjectConfig

logger = logging.getLogger(__name__)


@dataclass
class GenerateBatchResult:
    """Outcome of one ``generate`` invocation over a selection."""

    results: list[GenerationResult] = field(default_factory=list)
    project_root: Path | None = None
    kind: str | None = None
    generator: str = ""
    error: str | None = None

    @property
    def generated(self) -> int:
        return sum(1 for r in self.results if r.ok)

    @property
    def failed(self) -> int:
        return sum(1 for r in self.results if r.failed)

    @property
    def skipped(self) -> int:
        return sum(1 for r in self.results if r.status == "skipped")

    @property
    def all_ok(self) -> bool:
        return self.error is None and self.failed == 0

    def to_dict(self) -> dict:
        if self.error:
            return {"error": self.error}
        return {
            "project_root": str(self.project_root),
            "kind": self.kind,
            "generator": self.generator,
            "generated": self.generated,
            "failed": self.failed,
            "skipped": self.skipped,
            "results": [r.to_dict() for r in self.results],
        }


def _default_generator(config: ProjectConfig, root: Path, kind: OutputKind | None, mock: bool) -> Adapter:
    if mock:
        from protogen.adapters.mock import MockGeneratorAdapter

        return MockGeneratorAdapter.for_kind(kind) if kind else MockGeneratorAdapter()

    from protogen.adapters.generator.protoc import ProtocAdapter
    from protogen.core.services.locator import resolve_generator_path

    return ProtocAdapter(resolve_generator_path(generator_override(config, root)))


def run_generate(
    paths: list[Path],
    config_path: Path | None = None,
    kind: str | None = None,
    timeout: float | None = None,
    mock: bool = False,
    generator: Adapter | None = None,
    scratch_root: Path | None = None,
) -> GenerateBatchResult:
    """Generate code for each schema file in ``paths``.

    Args:
        paths: Selected schema files, in selection order.
        config_path: Optional explicit path to protogen.yml.
        kind: Output kind name; overrides the project language.
        timeout: Seconds per compiler run; overrides the config.
        mock: Use the mock generator instead of the real compiler.
        generator: Optional pre-built generator adapter.
        scratch_root: Parent of scratch dirs (default: system temp).

    Returns:
        GenerateBatchResult with one result per item.
    """
    result = GenerateBatchResult()

    # ── Load config ──────────────────────────────────────────────
    try:
        if config_path is None:
            config_path = find_config_file()
        config = load_config(config_path) if config_path else ProjectConfig()
    except ConfigError as e:
        result.error = str(e)
        return result

    root = project_root(config_path)
    result.project_root = root
    project = DirectoryProject(root, config, selection=paths)

    # ── Resolve output kind ──────────────────────────────────────
    if kind:
        out_kind = get_kind(kind, config.kinds)
        if out_kind is None:
            result.error = f"Unknown output kind '{kind}'."
            return result
    else:
        out_kind = kind_for_language(project.language(), config.kinds)
    result.kind = out_kind.name if out_kind else None

    if generator is None:
        generator = _default_generator(config, root, out_kind, mock)
    result.generator = generator.name

    orchestrator = GenerationOrchestrator(
        generator,
        project,
        timeout=timeout if timeout is not None else config.generator.timeout,
    )

    # ── One request per item, in order ───────────────────────────
    for item in project.selected_items():
        if out_kind is None:
            item_result = GenerationResult.skipped(
                Path(item.path),
                "unsupported_language",
                f"No generator for project language '{project.language() or '-'}'",
            )
        else:
            request = GenerationRequest.for_item(item, out_kind, scratch_root=scratch_root)
            item_result = orchestrator.generate(request)
        project.record_result(item_result)
        result.results.append(item_result)

    try:
        project.save()
    except OSError as e:
        logger.warning("Could not save project state: %s", e)

    return result
