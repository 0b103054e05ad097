"""
Rules -- Registry of lint rules with directory loading

Each rule module exports:
1. RULE_ID: the id used in config and output (e.g. "block-scoped-var")
2. DESCRIPTION: one-line summary
3. create(context): returns a {(NodeKind, Phase): handler} table

Built-in rules are listed in BUILTIN_RULE_MODULES. Extra rules are loaded
from a directory (--rulesdir); every *.py file not starting with "_" is
imported as a rule module.

Usage:
    registry = RuleRegistry.with_builtins()
    registry.load_directory(Path("my_rules"))
    rule = registry.get("block-scoped-var")
"""

import importlib
import importlib.util
from dataclasses import dataclass
from pathlib import Path
from types import ModuleType
from typing import Callable, Dict, List, Optional

from loguru import logger

from ..errors import RuleLoadError


# Modules inside this package that provide built-in rules
BUILTIN_RULE_MODULES = [
    'block_scoped_var',
]


@dataclass
class Rule:
    """A loaded rule module, reduced to its interface."""
    rule_id: str
    description: str
    create: Callable
    source: str = "builtin"


def rule_from_module(module: ModuleType, source: str = "builtin") -> Rule:
    """
    Extract the rule interface from an imported module.

    Raises:
        RuleLoadError: If RULE_ID or create() is missing
    """
    rule_id = getattr(module, 'RULE_ID', None)
    create = getattr(module, 'create', None)
    if not rule_id or not callable(create):
        raise RuleLoadError(
            f"Module '{module.__name__}' is not a rule",
            details="rule modules must define RULE_ID and create(context)",
        )
    return Rule(
        rule_id=rule_id,
        description=getattr(module, 'DESCRIPTION', ""),
        create=create,
        source=source,
    )


class RuleRegistry:
    """
    Registry of available rules, keyed by rule id.
    """

    def __init__(self):
        self._rules: Dict[str, Rule] = {}

    @classmethod
    def with_builtins(cls) -> 'RuleRegistry':
        """Create a registry holding every built-in rule."""
        registry = cls()
        for module_name in BUILTIN_RULE_MODULES:
            module = importlib.import_module(f'.{module_name}', __package__)
            registry.register(rule_from_module(module))
        return registry

    def register(self, rule: Rule) -> None:
        """
        Register a rule.

        Raises:
            ValueError: If a different rule already uses the same id
        """
        existing = self._rules.get(rule.rule_id)
        if existing is not None and existing.create is not rule.create:
            raise ValueError(
                f"Rule '{rule.rule_id}' already registered from {existing.source}, "
                f"cannot register from {rule.source}"
            )
        self._rules[rule.rule_id] = rule

    def get(self, rule_id: str) -> Optional[Rule]:
        return self._rules.get(rule_id)

    def load_directory(self, directory: Path) -> List[str]:
        """
        Import every rule module in a directory.

        Args:
            directory: Directory containing rule modules

        Returns:
            Ids of the rules loaded

        Raises:
            RuleLoadError: If the directory is missing or a module fails to import,
                or a rule id is already taken
        """
        directory = Path(directory)
        if not directory.is_dir():
            raise RuleLoadError(f"Rules directory not found: {directory}")

        loaded = []
        for path in sorted(directory.glob("*.py")):
            if path.name.startswith("_"):
                continue
            module = _import_file(path)
            rule = rule_from_module(module, source=str(path))
            try:
                self.register(rule)
            except ValueError as e:
                raise RuleLoadError(str(e)) from e
            loaded.append(rule.rule_id)
            logger.debug("Loaded rule {rule_id} from {path}", rule_id=rule.rule_id, path=path)
        return loaded

    def __len__(self) -> int:
        return len(self._rules)

    def __contains__(self, rule_id: str) -> bool:
        return rule_id in self._rules


def _import_file(path: Path) -> ModuleType:
    """Import a standalone Python file as a module."""
    module_name = f"blockscope_rules_{path.stem}"
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise RuleLoadError(f"Cannot import rule file: {path}")
    module = importlib.util.module_from_spec(spec)
    try:
        spec.loader.exec_module(module)
    except Exception as e:
        raise RuleLoadError(f"Failed to load rule file {path}: {e}", details=repr(e)) from e
    return module


__all__ = ['Rule', 'RuleRegistry', 'rule_from_module', 'BUILTIN_RULE_MODULES']
