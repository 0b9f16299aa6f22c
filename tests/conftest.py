"""
Shared test fixtures and configuration.
"""

import stat
import sys
from pathlib import Path
from typing import Callable

import pytest

from protogen.core.services.locator import resolve_generator_path

# A stand-in compiler: a Python script that mimics protoc's contract
# (schema basename + --<flag>=<dir>) and writes the configured files.
_STUB_TEMPLATE = """#!{python}
import json
import pathlib
import sys
import time

argv = sys.argv[1:]
log_path = {log_path!r}
if log_path:
    pathlib.Path(log_path).write_text(json.dumps({{"argv": argv, "cwd": str(pathlib.Path.cwd())}}))
time.sleep({delay!r})
out_dir = pathlib.Path(argv[-1].split("=", 1)[1])
for name in {outputs!r}:
    (out_dir / name).write_text("// generated from " + argv[0] + "\\n")
sys.exit({exit_code!r})
"""


@pytest.fixture
def make_generator(tmp_path: Path) -> Callable[..., Path]:
    """Factory for executable stub generators.

    Usage: ``make_generator(outputs=["stub.out1"], delay=0, log=path)``
    """
    counter = {"n": 0}

    def _make(
        outputs: list[str] | None = None,
        delay: float = 0,
        log: Path | None = None,
        exit_code: int = 0,
    ) -> Path:
        counter["n"] += 1
        bin_dir = tmp_path / "bin"
        bin_dir.mkdir(exist_ok=True)
        script = bin_dir / f"protoc-stub-{counter['n']}"
        script.write_text(
            _STUB_TEMPLATE.format(
                python=sys.executable,
                log_path=str(log) if log else "",
                delay=delay,
                outputs=list(outputs or []),
                exit_code=exit_code,
            )
        )
        script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return script

    return _make


@pytest.fixture
def scratch_root(tmp_path: Path) -> Path:
    """Parent directory for per-request scratch dirs."""
    root = tmp_path / "scratch"
    root.mkdir()
    return root


@pytest.fixture
def schema_dir(tmp_path: Path) -> Path:
    """A project directory holding schema files."""
    d = tmp_path / "project" / "schemas"
    d.mkdir(parents=True)
    return d


@pytest.fixture(autouse=True)
def _fresh_generator_path(monkeypatch):
    """Binary resolution is cached per process; reset it per test."""
    monkeypatch.delenv("PROTOGEN_PROTOC", raising=False)
    resolve_generator_path.cache_clear()
    yield
    resolve_generator_path.cache_clear()


