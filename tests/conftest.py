"""
Shared pytest fixtures for the blockscope test suite.

Usage in tests:
    def test_something(nodes):
        tree = nodes.program(nodes.expr(nodes.ident("x")))

    def test_with_files(js_project):
        # js_project is a temp directory holding a few .js files
        ...
"""

import pytest
from loguru import logger

from blockscope.config import Config
from tests.factories import NodeFactory


@pytest.fixture
def nodes():
    """
    Create a NodeFactory for hand-built syntax trees.

    Example:
        def test_block(nodes):
            tree = nodes.program(nodes.block(nodes.var("x")))
    """
    return NodeFactory()


@pytest.fixture
def config():
    """Default configuration: block-scoped-var at error, no environments."""
    return Config()


@pytest.fixture
def js_project(tmp_path):
    """
    Create a small project tree.

    Layout:
        src/clean.js          no problems
        src/leak.js           one problem ("x" at 2:9)
        src/lib/util.mjs      no problems
        node_modules/dep.js   excluded by default
        README.md             not JavaScript
    """
    src = tmp_path / "src"
    (src / "lib").mkdir(parents=True)
    (tmp_path / "node_modules").mkdir()

    (src / "clean.js").write_text("var a = 1;\nfunction f(b) { return a + b; }\n")
    (src / "leak.js").write_text("if (true) { var x = 1; }\nvar y = x;\n")
    (src / "lib" / "util.mjs").write_text("export const twice = (n) => n * 2;\n")
    (tmp_path / "node_modules" / "dep.js").write_text("undeclared;\n")
    (tmp_path / "README.md").write_text("# project\n")
    return tmp_path


@pytest.fixture
def loguru_messages():
    """
    Capture loguru records emitted by blockscope during a test.

    Yields a list of message strings.
    """
    messages = []
    logger.enable("blockscope")
    handler_id = logger.add(lambda message: messages.append(message.record["message"]), level="DEBUG")
    yield messages
    logger.remove(handler_id)
    logger.disable("blockscope")
