"""
Tests for persistence — the project state file.
"""

import json
import time
from pathlib import Path

from protogen.core.models.state import ProjectState
from protogen.core.persistence.state_file import default_state_path, load_state, save_state


class TestStateFile:
    def test_save_and_load(self, tmp_path: Path):
        path = tmp_path / ".protogen" / "state.json"
        state = ProjectState(project_name="demo")
        state.get_item("a.proto").attach("a.cs")
        state.set_item_result("a.proto", status="ok")

        save_state(state, path)
        loaded = load_state(path)

        assert loaded.project_name == "demo"
        assert loaded.items["a.proto"].generated == ["a.cs"]
        assert loaded.items["a.proto"].last_status == "ok"

    def test_default_path(self, tmp_path: Path):
        assert default_state_path(tmp_path) == tmp_path / ".protogen" / "state.json"

    def test_load_missing_returns_fresh(self, tmp_path: Path):
        state = load_state(tmp_path / "nope.json")
        assert state.items == {}

    def test_load_corrupt_returns_fresh(self, tmp_path: Path):
        path = tmp_path / "state.json"
        path.write_text("not json {{{")
        assert load_state(path).project_name == ""

    def test_save_is_readable_json(self, tmp_path: Path):
        path = tmp_path / "state.json"
        save_state(ProjectState(project_name="json"), path)
        data = json.loads(path.read_text())
        assert data["schema_version"] == 1
        assert data["project_name"] == "json"

    def test_no_temp_files_left(self, tmp_path: Path):
        path = tmp_path / "state.json"
        save_state(ProjectState(), path)
        save_state(ProjectState(), path)
        assert list(tmp_path.glob(".state_*.tmp")) == []

    def test_save_updates_timestamp(self, tmp_path: Path):
        state = ProjectState()
        old = state.updated_at
        time.sleep(0.01)
        save_state(state, tmp_path / "state.json")
        assert state.updated_at != old
