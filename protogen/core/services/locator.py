"""
Generator locator — find the protocol-buffer compiler binary.

The compiler ships next to the package in ``protoc/``. The location is
resolved once per process; an explicit override (config or the
PROTOGEN_PROTOC env var) takes precedence over the bundled binary.
"""

from __future__ import annotations

import functools
import logging
import os
import sys
from pathlib import Path

logger = logging.getLogger(__name__)

BUNDLED_DIR = "protoc"
ENV_OVERRIDE = "PROTOGEN_PROTOC"


def _binary_name() -> str:
    return "protoc.exe" if sys.platform == "win32" else "protoc"


def bundled_generator_path() -> Path:
    """Path of the compiler bundled with this installation."""
    package_dir = Path(__file__).resolve().parents[2]
    return package_dir / BUNDLED_DIR / _binary_name()


@functools.lru_cache(maxsize=None)
def resolve_generator_path(override: str | None = None) -> Path:
    """Resolve the compiler path. Cached for the life of the process.

    The path is returned even when nothing exists there; callers check
    availability and fail without spawning anything.
    """
    if override:
        path = Path(override)
    elif os.environ.get(ENV_OVERRIDE):
        path = Path(os.environ[ENV_OVERRIDE])
    else:
        path = bundled_generator_path()

    if path.is_file():
        logger.debug("Using generator at %s", path)
    else:
        logger.info("Generator binary not found at %s", path)
    return path
