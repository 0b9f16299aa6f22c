"""
Mock generator — stands in for the compiler in tests and --mock runs.

Writes a configurable set of file names into the requested output
directory, or pretends the compiler hung.
"""

from __future__ import annotations

from pathlib import Path

from protogen.adapters.base import Adapter, ExecutionContext
from protogen.core.models.action import Receipt
from protogen.core.models.generation import OutputKind


class MockGeneratorAdapter(Adapter):
    """Test double for ProtocAdapter.

    By default writes nothing; use ``outputs`` or :meth:`for_kind` to
    make it produce files.
    """

    def __init__(
        self,
        outputs: list[str] | None = None,
        available: bool = True,
        hang: bool = False,
    ):
        self._outputs = list(outputs or [])
        self._available = available
        self._hang = hang
        self._call_log: list[ExecutionContext] = []

    @classmethod
    def for_kind(cls, kind: OutputKind) -> MockGeneratorAdapter:
        """A mock that produces exactly what ``kind`` expects."""
        exts = kind.extensions or tuple(f".out{i}" for i in range(1, kind.expected_count + 1))
        return cls(outputs=[f"mock{kind.suffix}{ext}" for ext in exts])

    @property
    def name(self) -> str:
        return "mock"

    @property
    def call_log(self) -> list[ExecutionContext]:
        return self._call_log

    @property
    def call_count(self) -> int:
        return len(self._call_log)

    def is_available(self) -> bool:
        return self._available

    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        if not context.params.get("out_dir"):
            return False, "Missing required param: 'out_dir'"
        return True, ""

    def execute(self, context: ExecutionContext) -> Receipt:
        self._call_log.append(context)

        if self._hang:
            return Receipt.failure(
                adapter=self.name,
                action_id=context.action.id,
                error="[mock] generator timed out",
                reason="timeout",
            )

        out_dir = Path(context.params["out_dir"])
        for name in self._outputs:
            (out_dir / name).write_text(f"// [mock] {context.params.get('schema', '')}\n", encoding="utf-8")

        return Receipt.success(
            adapter=self.name,
            action_id=context.action.id,
            output=f"[mock] wrote {len(self._outputs)} file(s)",
            metadata={"mock": True, "return_code": 0},
        )
