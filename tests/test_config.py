"""
Tests for configuration — protogen.yml loading, generator location, config check.
"""

import textwrap
from pathlib import Path

import pytest

from protogen.core.config.loader import (
    ConfigError,
    find_config_file,
    generator_override,
    load_config,
    project_root,
)
from protogen.core.models.project import ProjectConfig
from protogen.core.services.locator import bundled_generator_path, resolve_generator_path
from protogen.core.use_cases.config_check import check_config


@pytest.fixture
def valid_config(tmp_path: Path) -> Path:
    content = textwrap.dedent("""\
        version: 1
        name: demo
        language: csharp
        generator:
          path: tools/protoc
          timeout: 5
    """)
    path = tmp_path / "protogen.yml"
    path.write_text(content)
    return path


class TestLoadConfig:
    def test_valid(self, valid_config: Path):
        cfg = load_config(valid_config)
        assert cfg.name == "demo"
        assert cfg.language == "csharp"
        assert cfg.generator.timeout == 5
        assert cfg.generator.path == "tools/protoc"

    def test_empty_file_gives_defaults(self, tmp_path: Path):
        path = tmp_path / "protogen.yml"
        path.write_text("")
        assert load_config(path) == ProjectConfig()

    def test_wrapped_under_project_key(self, tmp_path: Path):
        path = tmp_path / "protogen.yml"
        path.write_text("project:\n  name: wrapped\n  language: cpp\n")
        cfg = load_config(path)
        assert cfg.name == "wrapped"
        assert cfg.language == "cpp"

    def test_kind_overrides(self, tmp_path: Path):
        path = tmp_path / "protogen.yml"
        path.write_text("language: cpp\nkinds:\n  cpp:\n    subdir: gen_out\n")
        cfg = load_config(path)
        assert cfg.kinds["cpp"].subdir == "gen_out"
        assert cfg.kinds["cpp"].suffix is None

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(ConfigError, match="not found"):
            load_config(tmp_path / "protogen.yml")

    def test_invalid_yaml(self, tmp_path: Path):
        path = tmp_path / "protogen.yml"
        path.write_text("name: [unclosed\n")
        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_config(path)

    def test_not_a_mapping(self, tmp_path: Path):
        path = tmp_path / "protogen.yml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigError, match="mapping"):
            load_config(path)

    def test_schema_error(self, tmp_path: Path):
        path = tmp_path / "protogen.yml"
        path.write_text("generator:\n  timeout: -1\n")
        with pytest.raises(ConfigError, match="Invalid configuration"):
            load_config(path)


class TestFindConfigFile:
    def test_walks_up(self, valid_config: Path):
        nested = valid_config.parent / "a" / "b"
        nested.mkdir(parents=True)
        assert find_config_file(nested) == valid_config.resolve()

    def test_not_found(self, tmp_path: Path):
        assert find_config_file(tmp_path) is None


class TestGeneratorLocation:
    def test_override_relative_to_root(self, valid_config: Path):
        cfg = load_config(valid_config)
        root = project_root(valid_config)
        assert generator_override(cfg, root) == str(root / "tools" / "protoc")

    def test_no_override(self, tmp_path: Path):
        assert generator_override(ProjectConfig(), tmp_path) is None

    def test_bundled_path(self):
        path = bundled_generator_path()
        assert path.parent.name == "protoc"
        assert path.parent.parent.name == "protogen"

    def test_resolution_is_cached(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("PROTOGEN_PROTOC", str(tmp_path / "first"))
        first = resolve_generator_path()
        monkeypatch.setenv("PROTOGEN_PROTOC", str(tmp_path / "second"))
        assert resolve_generator_path() == first == tmp_path / "first"

    def test_explicit_override_wins(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("PROTOGEN_PROTOC", str(tmp_path / "env"))
        assert resolve_generator_path(str(tmp_path / "cfg")) == tmp_path / "cfg"


class TestConfigCheck:
    def test_valid_with_missing_binary_warning(self, valid_config: Path):
        result = check_config(valid_config)
        assert result.valid
        assert any("not found" in w for w in result.warnings)

    def test_binary_present(self, valid_config: Path):
        tools = valid_config.parent / "tools"
        tools.mkdir()
        (tools / "protoc").write_text("")
        result = check_config(valid_config)
        assert result.valid
        assert result.warnings == []

    def test_unsupported_language(self, tmp_path: Path):
        path = tmp_path / "protogen.yml"
        path.write_text("language: cobol\n")
        result = check_config(path)
        assert not result.valid
        assert "cobol" in result.errors[0]

    def test_unknown_kind_override(self, tmp_path: Path):
        path = tmp_path / "protogen.yml"
        path.write_text("language: cpp\nkinds:\n  cpp:\n    subdir: gen_out\n  rust:\n    suffix: .rs\n")
        result = check_config(path)
        assert not result.valid
        assert result.errors == ["Unknown output kind 'rust' under kinds."]

    def test_no_language_warns(self, tmp_path: Path):
        path = tmp_path / "protogen.yml"
        path.write_text("name: x\n")
        result = check_config(path)
        assert result.valid
        assert any("language" in w for w in result.warnings)

    def test_no_config(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setattr(
            "protogen.core.use_cases.config_check.find_config_file", lambda: None
        )
        result = check_config()
        assert not result.valid
        assert "No protogen.yml" in result.errors[0]
