"""Tests for the simplify CLI, config, and diagnostic rendering."""

from __future__ import annotations

import pytest
from click.testing import CliRunner

from simplify.cli import main
from simplify.config import SimplifyConfig, config_for, find_config, load_config
from simplify.errors import Diagnostic, DiagnosticRenderer, Severity, SourceError
from simplify.fix import RemoveRange
from simplify.source import Range, SourceFile

SIMPLIFIABLE = "module Main exposing (main)\n\n\nmain =\n    List.map identity items\n"
CLEAN = "module Main exposing (main)\n\n\nmain =\n    List.map f items\n"


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def tmp_project(tmp_path):
    """Create a minimal Elm project in a temp dir."""
    toml = tmp_path / "simplify.toml"
    toml.write_text(
        '[paths]\nsource_directories = ["src"]\nexclude = ["src/Generated/*"]\n'
        "[analysis]\nexpect_nan = true\n"
        "[fix]\nmax_passes = 3\n"
    )
    src = tmp_path / "src"
    src.mkdir()
    (src / "Main.elm").write_text(SIMPLIFIABLE)
    generated = src / "Generated"
    generated.mkdir()
    (generated / "Api.elm").write_text(SIMPLIFIABLE)
    return tmp_path


# --- CLI tests ---


class TestCLI:
    def test_help(self, runner):
        result = runner.invoke(main, ["--help"])
        assert result.exit_code == 0
        assert "Simplify Elm code" in result.output
        assert "check" in result.output
        assert "fix" in result.output
        assert "lsp" in result.output
        assert "view" in result.output

    def test_version(self, runner):
        result = runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output

    def test_check_reports(self, runner, tmp_project):
        result = runner.invoke(main, ["--no-color", "check", str(tmp_project / "src" / "Main.elm")])
        assert result.exit_code == 1
        assert "Using List.map with an identity function" in result.output
        assert "Main.elm:5:5" in result.output
        assert "found 1 simplification(s) in 1 file(s)" in result.output

    def test_check_project_honours_exclude(self, runner, tmp_project, monkeypatch):
        monkeypatch.chdir(tmp_project)
        result = runner.invoke(main, ["--no-color", "check"])
        assert result.exit_code == 1
        assert "Api.elm" not in result.output
        assert "in 1 file(s)" in result.output

    def test_check_clean_file(self, runner, tmp_path):
        elm_file = tmp_path / "Clean.elm"
        elm_file.write_text(CLEAN)
        result = runner.invoke(main, ["check", str(elm_file)])
        assert result.exit_code == 0
        assert "checked 1 file(s): nothing to simplify" in result.output

    def test_check_syntax_error(self, runner, tmp_path):
        elm_file = tmp_path / "Bad.elm"
        elm_file.write_text("module Bad exposing (..)\n\n\nmain =\n    (\n")
        result = runner.invoke(main, ["--no-color", "check", str(elm_file)])
        assert result.exit_code == 1
        assert "error:" in result.output

    def test_check_no_files(self, runner, tmp_path):
        empty = tmp_path / "empty"
        empty.mkdir()
        result = runner.invoke(main, ["check", str(empty)])
        assert result.exit_code == 0
        assert "no .elm files found" in result.output

    def test_color_output(self, runner, tmp_project):
        path = str(tmp_project / "src" / "Main.elm")
        colored = runner.invoke(main, ["check", path], color=True)
        plain = runner.invoke(main, ["--no-color", "check", path])
        assert "\033[" in colored.output
        assert "\033[" not in plain.output

    def test_fix_writes_file(self, runner, tmp_project):
        elm_file = tmp_project / "src" / "Main.elm"
        result = runner.invoke(main, ["fix", str(elm_file)])
        assert result.exit_code == 0
        assert "simplified" in result.output
        assert elm_file.read_text() == "module Main exposing (main)\n\n\nmain =\n    items\n"

    def test_fix_check_leaves_file(self, runner, tmp_project):
        elm_file = tmp_project / "src" / "Main.elm"
        result = runner.invoke(main, ["fix", "--check", str(elm_file)])
        assert result.exit_code == 1
        assert "would simplify" in result.output
        assert elm_file.read_text() == SIMPLIFIABLE

    def test_fix_clean_file(self, runner, tmp_path):
        elm_file = tmp_path / "Clean.elm"
        elm_file.write_text(CLEAN)
        result = runner.invoke(main, ["fix", "--check", str(elm_file)])
        assert result.exit_code == 0
        assert result.output == ""

    def test_lsp_help(self, runner):
        result = runner.invoke(main, ["lsp", "--help"])
        assert result.exit_code == 0
        assert "language server" in result.output

    def test_view_command(self, runner, tmp_project):
        result = runner.invoke(main, ["view", str(tmp_project / "src" / "Main.elm")])
        assert result.exit_code == 0
        assert "Module" in result.output
        assert "FunctionDeclaration" in result.output
        assert "name: 'main'" in result.output


class TestConfig:
    def test_load_config(self, tmp_project):
        config = load_config(tmp_project / "simplify.toml")
        assert config.paths.source_directories == ["src"]
        assert config.paths.exclude == ["src/Generated/*"]
        assert config.analysis.expect_nan is True
        assert config.fix.max_passes == 3
        assert config.root == tmp_project.resolve()

    def test_load_config_defaults(self, tmp_path):
        toml = tmp_path / "simplify.toml"
        toml.write_text("")
        config = load_config(toml)
        assert config.paths.source_directories == ["src"]
        assert config.analysis.expect_nan is False
        assert config.fix.max_passes == 10

    def test_find_config(self, tmp_project):
        found = find_config(tmp_project / "src" / "Generated")
        assert found == (tmp_project / "simplify.toml").resolve()

    def test_find_config_from_file(self, tmp_project):
        found = find_config(tmp_project / "src" / "Main.elm")
        assert found == (tmp_project / "simplify.toml").resolve()

    def test_find_config_not_found(self, tmp_path):
        empty = tmp_path / "empty"
        empty.mkdir()
        with pytest.raises(FileNotFoundError, match="No simplify.toml found"):
            find_config(empty)

    def test_config_for_defaults(self, tmp_path):
        empty = tmp_path / "empty"
        empty.mkdir()
        config = config_for(empty)
        assert config.paths == SimplifyConfig().paths
        assert config.fix.max_passes == 10


class TestDiagnostics:
    source = SourceFile("a =\n    x + 0\n", "Test.elm")

    def _diag(self, **kwargs) -> Diagnostic:
        defaults = dict(
            message="Unnecessary addition with 0",
            details=["This operation does not change the value it is applied to."],
            range=Range.of(2, 7, 2, 8),
            fixes=[RemoveRange(Range.of(2, 6, 2, 10))],
        )
        defaults.update(kwargs)
        return Diagnostic(**defaults)

    def test_render_warning(self):
        output = DiagnosticRenderer(color=False).render(self._diag(), self.source)
        lines = output.split("\n")
        assert lines[0] == "warning: Unnecessary addition with 0"
        assert lines[1] == "  --> Test.elm:2:7"
        assert lines[3] == "     2 |     x + 0"
        assert lines[4] == "     |       ^"
        assert "= note: This operation does not change" in output

    def test_render_fix_preview(self):
        output = DiagnosticRenderer(color=False).render(self._diag(), self.source)
        lines = output.split("\n")
        assert "  fix:" in lines
        assert lines[-1] == "     |     x"

    def test_render_without_fix(self):
        output = DiagnosticRenderer(color=False).render(self._diag(fixes=[]), self.source)
        assert "fix:" not in output

    def test_render_error(self):
        diag = self._diag(severity=Severity.ERROR, fixes=[])
        output = DiagnosticRenderer(color=False).render(diag, self.source)
        assert output.startswith("error: ")

    def test_colors(self):
        output = DiagnosticRenderer(color=True).render(self._diag(), self.source)
        assert "\033[1;33m" in output

    def test_source_error(self):
        err = SourceError([self._diag(severity=Severity.ERROR), self._diag(message="other")])
        assert "2 error(s)" in str(err)
        assert len(err.diagnostics) == 2

    def test_has_fix(self):
        assert self._diag().has_fix
        assert not self._diag(fixes=[]).has_fix
