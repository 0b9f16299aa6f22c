"""
Tests for CLI commands — generate, kinds, status, config check.
"""

import json
from pathlib import Path

from click.testing import CliRunner

from protogen.main import cli


def _project(tmp_path: Path, language: str = "csharp") -> Path:
    config = tmp_path / "protogen.yml"
    config.write_text(f"name: cli-demo\nlanguage: {language}\n")
    (tmp_path / "person.proto").write_text('syntax = "proto3";\n')
    return config


class TestCLIGlobal:
    def test_help(self):
        result = CliRunner().invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "protocol-buffer" in result.output

    def test_version(self):
        result = CliRunner().invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output


class TestGenerateCommand:
    def test_mock_generate(self, tmp_path: Path):
        config = _project(tmp_path)
        runner = CliRunner()
        result = runner.invoke(
            cli, ["--config", str(config), "generate", "--mock", str(tmp_path / "person.proto")]
        )
        assert result.exit_code == 0, result.output
        assert "person.proto" in result.output
        assert "1 generated" in result.output
        assert (tmp_path / "person.cs").is_file()

    def test_json_output(self, tmp_path: Path):
        config = _project(tmp_path, "cpp")
        result = CliRunner().invoke(
            cli, ["--config", str(config), "generate", "--mock", "--json", str(tmp_path / "person.proto")]
        )
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["kind"] == "cpp"
        assert data["generated"] == 1
        assert len(data["results"][0]["files"]) == 2

    def test_failure_exits_nonzero(self, tmp_path: Path):
        config = _project(tmp_path)
        result = CliRunner().invoke(
            cli, ["--config", str(config), "generate", "--mock", str(tmp_path / "ghost.proto")]
        )
        assert result.exit_code == 1
        assert "source_missing" in result.output

    def test_unknown_kind(self, tmp_path: Path):
        config = _project(tmp_path)
        result = CliRunner().invoke(
            cli, ["--config", str(config), "generate", "--kind", "go", str(tmp_path / "person.proto")]
        )
        assert result.exit_code == 1
        assert "Unknown output kind" in result.output

    def test_timeout_must_be_positive(self, tmp_path: Path):
        config = _project(tmp_path)
        for value in ("0", "-1"):
            result = CliRunner().invoke(
                cli,
                ["--config", str(config), "generate", "--mock", "--timeout", value, str(tmp_path / "person.proto")],
            )
            assert result.exit_code == 2
            assert not (tmp_path / "person.cs").exists()

    def test_requires_files(self):
        result = CliRunner().invoke(cli, ["generate"])
        assert result.exit_code != 0


class TestKindsCommand:
    def test_lists_kinds(self):
        result = CliRunner().invoke(cli, ["kinds"])
        assert result.exit_code == 0
        assert "csharp_out" in result.output
        assert "cpp_out" in result.output
        assert "multi-file" in result.output
        assert "single-file" in result.output

    def test_json(self):
        result = CliRunner().invoke(cli, ["kinds", "--json"])
        data = json.loads(result.output)
        assert data["cpp"]["expected_count"] == 2
        assert "c++" in data["cpp"]["languages"]
        assert data["cpp"]["multi_file"] is True
        assert data["csharp"]["multi_file"] is False


class TestStatusCommand:
    def test_after_generate(self, tmp_path: Path):
        config = _project(tmp_path)
        runner = CliRunner()
        runner.invoke(cli, ["--config", str(config), "generate", "--mock", str(tmp_path / "person.proto")])

        result = runner.invoke(cli, ["--config", str(config), "status"])
        assert result.exit_code == 0
        assert "cli-demo" in result.output
        assert "person.cs" in result.output

    def test_json(self, tmp_path: Path):
        config = _project(tmp_path)
        result = CliRunner().invoke(cli, ["--config", str(config), "status", "--json"])
        data = json.loads(result.output)
        assert data["name"] == "cli-demo"
        assert data["items"] == 0


class TestConfigCheckCommand:
    def test_valid(self, tmp_path: Path):
        config = _project(tmp_path)
        result = CliRunner().invoke(cli, ["--config", str(config), "config", "check"])
        assert result.exit_code == 0
        assert "valid" in result.output

    def test_invalid_json(self, tmp_path: Path):
        config = _project(tmp_path, "cobol")
        result = CliRunner().invoke(cli, ["--config", str(config), "config", "check", "--json"])
        assert result.exit_code == 1
        data = json.loads(result.output)
        assert data["valid"] is False
