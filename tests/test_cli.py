"""
Tests for the blockscope command line

Tests verify:
- Exit codes: 0 clean, 1 error-severity problems, 2 usage/config errors
- Report formats selected with --format
- --env, --global, --config and --rulesdir reach the Linter
- No files prints help
"""

import json
import sys

import pytest
from loguru import logger

from blockscope import __version__
from blockscope.cli import main, build_parser, EXIT_OK, EXIT_LINT_ERRORS, EXIT_USAGE

# Check if tree-sitter-language-pack is available
try:
    import tree_sitter_language_pack  # noqa: F401
    TREE_SITTER_AVAILABLE = True
except ImportError:
    TREE_SITTER_AVAILABLE = False

# Skip marker for tree-sitter dependent tests
requires_tree_sitter = pytest.mark.skipif(
    not TREE_SITTER_AVAILABLE,
    reason="tree-sitter-language-pack not installed"
)


@pytest.fixture(autouse=True)
def isolated(tmp_path, monkeypatch):
    """Run from an empty directory with no user config or env overrides."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.setattr("blockscope.config.ConfigManager.USER_CONFIG_FILE",
                        tmp_path / "home" / ".blockscope" / "config.yaml")
    monkeypatch.setenv("BLOCKSCOPE_ASCII_ONLY", "1")
    for name in ("BLOCKSCOPE_FORMAT", "BLOCKSCOPE_JOBS", "BLOCKSCOPE_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    yield
    # main() installs its own stderr sink
    logger.remove()
    logger.add(sys.stderr)
    logger.disable("blockscope")


class TestParser:
    """Test argument parsing."""

    def test_repeatable_options(self):
        """--env, --global and --rulesdir may be given more than once."""
        args = build_parser().parse_args([
            "--env", "browser", "--env", "node",
            "--global", "a", "--global", "b",
            "--rulesdir", "r1", "--rulesdir", "r2",
            "src",
        ])

        assert args.env == ["browser", "node"]
        assert args.globals == ["a", "b"]
        assert args.rulesdir == ["r1", "r2"]
        assert args.files == ["src"]

    def test_version(self, capsys):
        """--version prints the version and exits."""
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])

        assert exc_info.value.code == 0
        assert __version__ in capsys.readouterr().out

    def test_unknown_format(self, capsys):
        """argparse rejects unknown formats."""
        with pytest.raises(SystemExit) as exc_info:
            main(["--format", "xml", "a.js"])
        assert exc_info.value.code == 2

    def test_no_files_prints_help(self, capsys):
        """Without files the usage text is printed."""
        assert main([]) == EXIT_OK
        assert "blockscope [options] file.js" in capsys.readouterr().out


@requires_tree_sitter
class TestLinting:
    """Test end-to-end runs."""

    def test_clean_project(self, js_project, capsys):
        """A clean file exits 0 and prints nothing."""
        assert main([str(js_project / "src" / "clean.js")]) == EXIT_OK
        assert capsys.readouterr().out == ""

    def test_problems_exit_1(self, js_project, capsys):
        """Error-severity problems exit 1 with a stylish report."""
        assert main([str(js_project)]) == EXIT_LINT_ERRORS

        out = capsys.readouterr().out
        assert "leak.js" in out
        assert '2:9  error  "x" used outside of binding context.  block-scoped-var' in out
        assert "X 1 problem (1 error, 0 warnings)" in out

    def test_json_format(self, js_project, capsys):
        """--format json lists every linted file."""
        assert main(["--format", "json", str(js_project)]) == EXIT_LINT_ERRORS

        data = json.loads(capsys.readouterr().out)
        assert [entry["filePath"].rsplit("/", 1)[-1] for entry in data] == [
            "clean.js", "leak.js", "util.mjs",
        ]

    def test_compact_format(self, js_project, capsys):
        """--format compact prints one line per problem."""
        main(["-f", "compact", str(js_project / "src" / "leak.js")])
        out = capsys.readouterr().out
        assert "leak.js: line 2, col 9, Error" in out

    def test_warnings_exit_0(self, js_project, tmp_path):
        """Warnings alone do not fail the run."""
        config_file = tmp_path / "warn.yaml"
        config_file.write_text("rules:\n  block-scoped-var: warn\n")
        assert main(["-c", str(config_file), str(js_project)]) == EXIT_OK

    def test_project_config_read(self, js_project, tmp_path):
        """.blockscope/config.yaml in the working directory is used."""
        (tmp_path / ".blockscope").mkdir()
        (tmp_path / ".blockscope" / "config.yaml").write_text("rules:\n  block-scoped-var: off\n")
        assert main([str(js_project)]) == EXIT_OK

    def test_global_option(self, tmp_path):
        """--global declares names for every file."""
        source = tmp_path / "uses_global.js"
        source.write_text("jQuery('#id');\n")

        assert main([str(source)]) == EXIT_LINT_ERRORS
        assert main(["--global", "jQuery", str(source)]) == EXIT_OK

    def test_env_option(self, tmp_path):
        """--env enables an environment's globals."""
        source = tmp_path / "browser.js"
        source.write_text("document.title = window.name;\n")
        assert main(["--env", "browser", str(source)]) == EXIT_OK

    def test_parse_error(self, tmp_path, capsys):
        """Syntax errors are reported as problems."""
        source = tmp_path / "broken.js"
        source.write_text("var = ;\n")

        assert main([str(source)]) == EXIT_LINT_ERRORS
        assert "Parsing error:" in capsys.readouterr().out

    def test_oversized_file_fails(self, tmp_path, capsys):
        """A file over the size limit is reported and fails the run."""
        source = tmp_path / "big.js"
        source.write_text("function f(){ { var x = 1; } x; }\n" + "// padding\n" * 100_000)

        assert main([str(source)]) == EXIT_LINT_ERRORS
        out = capsys.readouterr().out
        assert "big.js" in out
        assert "File not linted:" in out
        assert "byte limit" in out

    def test_rulesdir(self, tmp_path):
        """Rules from --rulesdir run when enabled in config."""
        rules = tmp_path / "rules"
        rules.mkdir()
        (rules / "no_todo.py").write_text(
            "from blockscope.core.nodes import NodeKind, Phase\n"
            "RULE_ID = 'no-todo'\n"
            "def create(context):\n"
            "    def check(node):\n"
            "        if node.name == 'TODO':\n"
            "            context.report(node, 'TODO found.')\n"
            "    return {(NodeKind.IDENTIFIER, Phase.ENTER): check}\n"
        )
        config_file = tmp_path / "rules.yaml"
        config_file.write_text("rules:\n  block-scoped-var: 0\n  no-todo: 2\n")
        source = tmp_path / "todo.js"
        source.write_text("var TODO = 1;\n")

        assert main(["-c", str(config_file), "--rulesdir", str(rules), str(source)]) == EXIT_LINT_ERRORS

    def test_parallel_jobs(self, js_project, capsys):
        """--jobs spreads files over worker processes with the same result."""
        assert main(["--jobs", "2", "--format", "json", str(js_project)]) == EXIT_LINT_ERRORS
        data = json.loads(capsys.readouterr().out)
        assert sum(entry["errorCount"] for entry in data) == 1


class TestErrors:
    """Test usage and configuration errors."""

    def test_missing_config_file(self, tmp_path, capsys):
        """A missing --config file exits 2."""
        code = main(["-c", str(tmp_path / "absent.yaml"), "a.js"])

        assert code == EXIT_USAGE
        assert "Error: Cannot read config file" in capsys.readouterr().err

    def test_invalid_config(self, tmp_path, capsys):
        """Invalid config values exit 2."""
        config_file = tmp_path / "bad.yaml"
        config_file.write_text("env:\n  martian: true\n")

        assert main(["-c", str(config_file), "a.js"]) == EXIT_USAGE
        assert "Unknown environment" in capsys.readouterr().err

    def test_unknown_rule(self, tmp_path, capsys):
        """Enabling an unknown rule exits 2."""
        config_file = tmp_path / "rules.yaml"
        config_file.write_text("rules:\n  no-such-rule: 2\n")

        assert main(["-c", str(config_file), "a.js"]) == EXIT_USAGE
        assert "no-such-rule" in capsys.readouterr().err

    def test_missing_rulesdir(self, tmp_path, capsys):
        """A missing --rulesdir exits 2."""
        assert main(["--rulesdir", str(tmp_path / "nope"), "a.js"]) == EXIT_USAGE
        assert "Rules directory not found" in capsys.readouterr().err

    def test_missing_file(self, tmp_path, capsys):
        """A file that does not exist exits 2."""
        assert main([str(tmp_path / "absent.js")]) == EXIT_USAGE
        assert "Error:" in capsys.readouterr().err
