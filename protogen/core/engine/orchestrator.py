"""
Generation orchestrator — one compiler run, reconciled into the project.

Flow per request:
    fresh scratch dir → run generator → count outputs → copy + attach → remove scratch

The scratch directory is removed on every path out of ``generate``,
including timeouts, count mismatches and copy failures. Files copied
before a failure stay where they are; there is no rollback.
"""

from __future__ import annotations

import logging
import shutil
import time
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path

from protogen.adapters.base import Adapter, ExecutionContext
from protogen.adapters.project.base import ProjectModel
from protogen.core.models.action import Action
from protogen.core.models.generation import GenerationRequest, GenerationResult
from protogen.core.models.project import DEFAULT_TIMEOUT

logger = logging.getLogger(__name__)


class GenerationOrchestrator:
    """Runs generation requests against one generator and one project.

    The orchestrator holds no per-request state; ``generate`` depends
    only on its request plus the generator and project it was built with.
    """

    def __init__(
        self,
        generator: Adapter,
        project: ProjectModel | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self._generator = generator
        self._project = project
        self._timeout = timeout
        self._executor: ThreadPoolExecutor | None = None

    # ── Public API ──────────────────────────────────────────────

    def generate(self, request: GenerationRequest) -> GenerationResult:
        """Run one request to completion. Never raises for request failures."""
        start = time.monotonic()
        source = request.source_path

        if not source.is_file():
            result = GenerationResult.failure(request, "source_missing", f"Schema file not found: {source}")
        elif not self._generator.is_available():
            result = GenerationResult.failure(request, "binary_missing", "Generator binary is not available")
        else:
            try:
                result = self._run_in_scratch(request)
            finally:
                self._remove_scratch(request.scratch_dir)

        result.duration_ms = int((time.monotonic() - start) * 1000)
        if result.ok:
            logger.info("Generated %d file(s) from %s", len(result.files), source.name)
        else:
            logger.warning("No files generated from %s: %s %s", source.name, result.reason, result.message)
        return result

    def submit(self, request: GenerationRequest) -> Future[GenerationResult]:
        """Schedule ``generate`` and return a future.

        A single worker runs submitted requests one at a time, in
        submission order.
        """
        if self._executor is None:
            self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="protogen")
        return self._executor.submit(self.generate, request)

    def close(self) -> None:
        """Wait for submitted requests and release the worker."""
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None

    def __enter__(self) -> GenerationOrchestrator:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # ── Steps ───────────────────────────────────────────────────

    def _run_in_scratch(self, request: GenerationRequest) -> GenerationResult:
        kind = request.output_kind

        try:
            self._prepare_scratch(request.scratch_dir)
        except OSError as e:
            return GenerationResult.failure(request, "filesystem_error", f"Cannot create scratch dir: {e}")

        action = Action(
            id=request.request_id,
            adapter=self._generator.name,
            name=f"generate:{kind.name}",
            params={
                "schema": str(request.source_path),
                "flag": kind.flag,
                "out_dir": str(request.scratch_dir),
                "timeout": self._timeout,
            },
        )
        context = ExecutionContext(action=action)

        valid, error = self._generator.validate(context)
        if not valid:
            return GenerationResult.failure(request, "filesystem_error", error)

        receipt = self._generator.execute(context)
        if receipt.failed:
            return GenerationResult.failure(
                request,
                receipt.reason or "filesystem_error",
                receipt.error or "",
            )

        try:
            outputs = sorted(p for p in request.scratch_dir.iterdir() if p.is_file())
        except OSError as e:
            return GenerationResult.failure(request, "filesystem_error", f"Cannot list scratch dir: {e}")

        if len(outputs) != kind.expected_count:
            return GenerationResult.failure(
                request,
                "unexpected_output_count",
                f"Expected {kind.expected_count} file(s) for '{kind.name}', got {len(outputs)}",
            )

        return self._import_outputs(request, outputs)

    def _import_outputs(self, request: GenerationRequest, outputs: list[Path]) -> GenerationResult:
        kind = request.output_kind
        source = request.source_path
        imported: list[str] = []

        for output in outputs:
            dest = kind.destination_for(source, output)
            try:
                dest.parent.mkdir(parents=True, exist_ok=True)
                shutil.copyfile(output, dest)
            except OSError as e:
                return GenerationResult.failure(
                    request,
                    "filesystem_error",
                    f"Cannot copy {output.name} to {dest}: {e}",
                    files=imported,
                )
            if self._project is not None:
                self._project.attach_file(source, dest)
            imported.append(str(dest))
            logger.debug("Imported %s → %s", output.name, dest)

        return GenerationResult(
            source_path=str(source),
            kind=kind.name,
            status="ok",
            files=imported,
        )

    @staticmethod
    def _prepare_scratch(scratch: Path) -> None:
        # Same item, same name: leftovers from an aborted run are expected
        if scratch.exists():
            shutil.rmtree(scratch)
        scratch.mkdir(parents=True)

    @staticmethod
    def _remove_scratch(scratch: Path) -> None:
        if not scratch.exists():
            return
        try:
            shutil.rmtree(scratch)
        except OSError as e:
            logger.warning("Cannot remove scratch dir %s: %s", scratch, e)
