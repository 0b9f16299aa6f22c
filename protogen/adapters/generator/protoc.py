"""
Protoc adapter — run the protocol-buffer compiler on one schema file.

The compiler is invoked with an argument vector, never through a shell,
from the schema's own directory:

    protoc <schema basename> --<flag>=<out dir>

The exit code is recorded but not judged; the orchestrator decides
success by counting what landed in the output directory.
"""

from __future__ import annotations

import logging
import subprocess
import time
from pathlib import Path

from protogen.adapters.base import Adapter, ExecutionContext
from protogen.core.models.action import Receipt
from protogen.core.models.project import DEFAULT_TIMEOUT

logger = logging.getLogger(__name__)


def build_command(binary: Path, schema: Path, flag: str, out_dir: Path) -> list[str]:
    """Argument vector for one compiler run."""
    return [str(binary), schema.name, f"--{flag}={out_dir}"]


class ProtocAdapter(Adapter):
    """Spawn the compiler and wait for it with a hard deadline.

    Action params:
        schema (str): Absolute path of the schema file.
        flag (str): Output-mode flag name, e.g. 'csharp_out'.
        out_dir (str): Directory the compiler writes into.
        timeout (float): Seconds to wait (default: 10).
    """

    def __init__(self, binary: Path):
        self._binary = Path(binary)

    @property
    def name(self) -> str:
        return "protoc"

    def is_available(self) -> bool:
        return self._binary.is_file()

    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        for key in ("schema", "flag", "out_dir"):
            if not context.params.get(key):
                return False, f"Missing required param: '{key}'"

        schema = Path(context.params["schema"])
        if not schema.is_file():
            return False, f"Schema file does not exist: {schema}"

        out_dir = Path(context.params["out_dir"])
        if not out_dir.is_dir():
            return False, f"Output directory does not exist: {out_dir}"

        return True, ""

    def execute(self, context: ExecutionContext) -> Receipt:
        schema = Path(context.params["schema"])
        out_dir = Path(context.params["out_dir"])
        timeout = context.params.get("timeout", DEFAULT_TIMEOUT)
        cmd = build_command(self._binary, schema, context.params["flag"], out_dir)

        logger.debug("Executing: %s (cwd=%s)", cmd, schema.parent)
        start = time.monotonic()

        try:
            result = subprocess.run(
                cmd,
                cwd=schema.parent,
                capture_output=True,
                text=True,
                errors="replace",
                timeout=timeout,
            )
        except subprocess.TimeoutExpired:
            return Receipt.failure(
                adapter=self.name,
                action_id=context.action.id,
                error=f"Generator timed out after {timeout}s",
                reason="timeout",
                metadata={"command": cmd, "timeout": timeout},
            )
        except FileNotFoundError as e:
            return Receipt.failure(
                adapter=self.name,
                action_id=context.action.id,
                error=f"Generator binary not found: {e}",
                reason="binary_missing",
                metadata={"command": cmd},
            )
        except OSError as e:
            return Receipt.failure(
                adapter=self.name,
                action_id=context.action.id,
                error=f"Cannot start generator: {e}",
                reason="filesystem_error",
                metadata={"command": cmd},
            )

        elapsed_ms = int((time.monotonic() - start) * 1000)
        stderr = result.stderr.strip()
        if result.returncode != 0:
            logger.info("Generator exited with code %d: %s", result.returncode, stderr)

        return Receipt.success(
            adapter=self.name,
            action_id=context.action.id,
            output=result.stdout.strip(),
            duration_ms=elapsed_ms,
            metadata={
                "command": cmd,
                "return_code": result.returncode,
                "stderr": stderr,
            },
        )
