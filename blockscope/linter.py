"""
Linter -- Runs enabled rules over source files

One pass per file: parse, collect the ambient names, give every enabled
rule its own RuleContext, then walk the tree once with all rule handlers
attached.

Usage:
    from blockscope.linter import Linter

    linter = Linter(config)
    result = linter.lint_source("if (a) { var b; } b;", "example.js")
    for violation in result.violations:
        print(violation.line, violation.column, violation.message)
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Set

from loguru import logger

from .config import Config
from .core.globals import environment_globals, parse_global_comment
from .core.nodes import declared_names
from .core.traversal import RuleContext, Traverser
from .core.violations import Severity, Violation
from .errors import ConfigError, ParseError
from .log import time_block
from .parsing import ExclusionConfig, LanguageConfig, ParsedSource, ParserRegistry, TreeBuilder
from .rules import RuleRegistry


STDIN_FILENAME = "<input>"


@dataclass
class LintResult:
    """Violations found in one file, in document order."""
    file_path: str
    violations: List[Violation] = field(default_factory=list)
    skipped: bool = False

    @property
    def error_count(self) -> int:
        return sum(1 for v in self.violations if v.severity == Severity.ERROR)

    @property
    def warning_count(self) -> int:
        return sum(1 for v in self.violations if v.severity == Severity.WARN)

    @property
    def has_errors(self) -> bool:
        return self.error_count > 0

    def to_dict(self) -> Dict:
        return {
            "filePath": self.file_path,
            "messages": [v.to_dict() for v in self.violations],
            "errorCount": self.error_count,
            "warningCount": self.warning_count,
        }


class Linter:
    """
    Lints JavaScript sources with the rules enabled in a Config.

    A Linter holds no per-file state between calls; it can be reused for
    any number of files.
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        registry: Optional[RuleRegistry] = None,
        parsers: Optional[ParserRegistry] = None,
    ):
        """
        Args:
            config: Rule severities, environments and globals
            registry: Available rules (built-ins when omitted)
            parsers: Language routing (JavaScript when omitted)

        Raises:
            ConfigError: If an enabled rule is unknown or an environment
                is not recognised
        """
        self.config = config or Config()
        self.registry = registry or RuleRegistry.with_builtins()
        self.parsers = parsers or ParserRegistry.default()
        self._builders: Dict[str, TreeBuilder] = {}

        for rule_id in self.config.enabled_rules():
            if rule_id not in self.registry:
                raise ConfigError(f"Definition for rule '{rule_id}' was not found")

        try:
            self._config_globals: Set[str] = environment_globals(self.config.env)
        except KeyError as e:
            raise ConfigError(f"Unknown environment {e}")
        self._config_globals.update(self.config.globals)

        self.exclusions = ExclusionConfig(extra=self.config.ignore_patterns)

    # =========================================================================
    # Linting
    # =========================================================================

    def lint_source(self, source: str, filename: str = STDIN_FILENAME) -> LintResult:
        """
        Lint one source text.

        Syntax errors produce a single fatal violation and no rule runs.

        Args:
            source: JavaScript source text
            filename: Name used for routing and in results

        Returns:
            LintResult with violations sorted by line, then column
        """
        builder = self._get_builder(self._language_for(filename))

        try:
            with time_block("parse {}", filename):
                parsed = builder.build(source)
        except ParseError as e:
            logger.debug("Parse error in {}: {}", filename, e.message)
            return LintResult(filename, [Violation(
                message=f"Parsing error: {e.message}",
                line=e.line,
                column=e.column,
                fatal=True,
            )])

        ambient = self.ambient_names(parsed)
        traverser = Traverser()
        contexts: List[RuleContext] = []

        for rule_id in self.config.enabled_rules():
            severity, options = self.config.rule_settings(rule_id)
            rule = self.registry.get(rule_id)
            context = RuleContext(rule_id, traverser, ambient, severity, options)
            traverser.add_handlers(rule.create(context))
            contexts.append(context)

        with time_block("rules {}", filename):
            traverser.traverse(parsed.tree)

        violations = [v for context in contexts for v in context.violations]
        violations.sort(key=lambda v: (v.line, v.column))
        return LintResult(filename, violations)

    def lint_file(self, path: Path) -> LintResult:
        """
        Lint one file from disk.

        Files over the language size limit are not parsed; they get a
        single fatal violation so the run still fails.

        Raises:
            OSError: If the file cannot be read
        """
        path = Path(path)
        language = self._language_for(str(path))

        size = path.stat().st_size
        if size > language.max_file_size:
            logger.debug("Skipping {}: {} bytes exceeds {}", path, size, language.max_file_size)
            return LintResult(str(path), [Violation(
                message=f"File not linted: {size} bytes exceeds the {language.max_file_size} byte limit",
                line=1,
                column=1,
                fatal=True,
            )], skipped=True)

        source = path.read_text(encoding="utf-8", errors="replace")
        return self.lint_source(source, str(path))

    def ambient_names(self, parsed: ParsedSource) -> Set[str]:
        """
        Names bound before the tree is entered.

        Built-in and environment globals, configured globals,
        /* global */ comments, and names declared by top-level statements.
        """
        names = set(self._config_globals)
        for comment in parsed.comments:
            names.update(parse_global_comment(comment.text))
        for statement in parsed.tree.children:
            names.update(declared_names(statement))
        return names

    # =========================================================================
    # File discovery
    # =========================================================================

    def iter_files(self, paths: Iterable[Path]) -> Iterator[Path]:
        """
        Expand command line paths into files to lint.

        Directories are searched recursively for supported extensions,
        minus excluded paths. Files named explicitly are always yielded.
        """
        for path in paths:
            path = Path(path)
            if not path.is_dir():
                yield path
                continue

            for candidate in sorted(path.rglob("*")):
                if not candidate.is_file() or not self.parsers.is_supported(candidate):
                    continue
                rel_path = candidate.relative_to(path).as_posix()
                if self.exclusions.is_excluded(rel_path):
                    logger.debug("Excluded {}", candidate)
                    continue
                logger.debug("Discovered {}", candidate)
                yield candidate

    # =========================================================================
    # Helpers
    # =========================================================================

    def _language_for(self, filename: str) -> LanguageConfig:
        language = self.parsers.get_config(Path(filename))
        if language is None:
            # stdin and unknown extensions are linted as JavaScript
            language = self.parsers.get_config_by_name("JavaScript")
        return language

    def _get_builder(self, language: LanguageConfig) -> TreeBuilder:
        builder = self._builders.get(language.name)
        if builder is None:
            builder = TreeBuilder(language)
            self._builders[language.name] = builder
        return builder
