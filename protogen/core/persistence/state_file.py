"""
State file persistence — atomic read/write for ProjectState.

State is stored as JSON in .protogen/state.json. Writes go to a temp
file in the same directory and are then renamed into place.
"""

from __future__ import annotations

import json
import logging
import tempfile
from pathlib import Path

from protogen.core.models.state import ProjectState

logger = logging.getLogger(__name__)

DEFAULT_STATE_DIR = ".protogen"
DEFAULT_STATE_FILE = "state.json"


def default_state_path(project_root: Path) -> Path:
    """Get the default state file path for a project."""
    return project_root / DEFAULT_STATE_DIR / DEFAULT_STATE_FILE


def load_state(path: Path) -> ProjectState:
    """Load project state from a JSON file.

    Returns a fresh state if the file is missing or unreadable.
    """
    if not path.is_file():
        logger.info("No state file at %s, starting fresh", path)
        return ProjectState()

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        state = ProjectState.model_validate(data)
        logger.debug("Loaded state from %s (updated_at=%s)", path, state.updated_at)
        return state
    except json.JSONDecodeError as e:
        logger.warning("Corrupt state file %s: %s, starting fresh", path, e)
        return ProjectState()
    except Exception as e:
        logger.warning("Cannot load state from %s: %s, starting fresh", path, e)
        return ProjectState()


def save_state(state: ProjectState, path: Path) -> None:
    """Save project state to a JSON file (atomic write)."""
    state.touch()
    path.parent.mkdir(parents=True, exist_ok=True)

    content = json.dumps(state.model_dump(mode="json"), indent=2, ensure_ascii=False) + "\n"

    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=".state_", suffix=".tmp")
    tmp = Path(tmp_name)
    try:
        with open(fd, "w", encoding="utf-8") as fh:
            fh.write(content)
        tmp.replace(path)
        logger.debug("State saved to %s", path)
    except Exception as e:
        tmp.unlink(missing_ok=True)
        logger.error("Failed to save state to %s: %s", path, e)
        raise
