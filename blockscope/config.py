"""
Configuration -- Centralized settings management

Config hierarchy (highest to lowest priority):
  1. Command line flags
  2. Environment variables (BLOCKSCOPE_FORMAT, BLOCKSCOPE_JOBS)
  3. Explicit config file (--config)
  4. Project config (.blockscope/config.yaml)
  5. User config (~/.blockscope/config.yaml)
  6. Defaults

Example config.yaml:

    rules:
      block-scoped-var: 2      # 0/off, 1/warn, 2/error
    env:
      browser: true
    globals:
      - jQuery
    format: stylish
    jobs: 4
"""

import os
import yaml
from pathlib import Path
from dataclasses import dataclass, field
from typing import Optional, Dict, Any, List, Tuple

from loguru import logger

from .core.globals import ENVIRONMENTS, known_environments
from .core.violations import Severity, severity_from_value
from .errors import ConfigError


DEFAULT_RULES: Dict[str, Any] = {
    "block-scoped-var": 2,
}

FORMATS = ("stylish", "compact", "json")
SYMBOL_MODES = ("unicode", "ascii", "auto")


def _default_rules() -> Dict[str, Any]:
    return dict(DEFAULT_RULES)


@dataclass
class Config:
    """Application configuration."""
    rules: Dict[str, Any] = field(default_factory=_default_rules)
    env: Dict[str, bool] = field(default_factory=dict)
    globals: List[str] = field(default_factory=list)
    ignore_patterns: List[str] = field(default_factory=list)
    format: str = "stylish"
    symbols: str = "auto"  # "unicode" | "ascii" | "auto"
    jobs: int = 1

    def rule_settings(self, rule_id: str) -> Tuple[Severity, Dict[str, Any]]:
        """
        Severity and options configured for a rule.

        Accepts a bare severity (2, "warn") or an ESLint-style list whose
        first item is the severity and second an options mapping.
        Unlisted rules are off.
        """
        value = self.rules.get(rule_id, 0)
        options: Dict[str, Any] = {}
        if isinstance(value, (list, tuple)):
            if len(value) > 1 and isinstance(value[1], dict):
                options = dict(value[1])
            value = value[0] if value else 0
        severity = severity_from_value(value)
        return (severity if severity is not None else Severity.OFF), options

    def enabled_rules(self) -> List[str]:
        """Rule ids whose severity is above off, in config order."""
        return [rule_id for rule_id in self.rules
                if self.rule_settings(rule_id)[0] > Severity.OFF]

    def validate(self) -> Optional[str]:
        """Validate config. Returns error message or None if valid."""
        for rule_id, value in self.rules.items():
            raw = value[0] if isinstance(value, (list, tuple)) and value else value
            if severity_from_value(raw) is None:
                return f"Invalid severity {raw!r} for rule '{rule_id}'. Valid: 0, 1, 2, off, warn, error"

        for env_name in self.env:
            if env_name not in ENVIRONMENTS or env_name == "builtin":
                valid = ", ".join(known_environments())
                return f"Unknown environment '{env_name}'. Valid: {valid}"

        if self.format not in FORMATS:
            return f"Unknown format '{self.format}'. Valid: {', '.join(FORMATS)}"

        if self.symbols not in SYMBOL_MODES:
            return f"Unknown symbols setting '{self.symbols}'. Valid: {', '.join(SYMBOL_MODES)}"

        if self.jobs < 1:
            return f"jobs must be >= 1, got {self.jobs}"

        return None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "rules": dict(self.rules),
            "env": dict(self.env),
            "globals": list(self.globals),
            "ignore_patterns": list(self.ignore_patterns),
            "format": self.format,
            "symbols": self.symbols,
            "jobs": self.jobs,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Config':
        """
        Create from dictionary.

        Raises:
            ConfigError: If a section has the wrong shape
        """
        rules = _default_rules()
        rules_data = data.get("rules") or {}
        if not isinstance(rules_data, dict):
            raise ConfigError("'rules' must be a mapping of rule id to severity")
        rules.update(rules_data)

        env_data = data.get("env") or {}
        if not isinstance(env_data, dict):
            raise ConfigError("'env' must be a mapping of environment name to true/false")

        globals_data = data.get("globals") or []
        if isinstance(globals_data, dict):
            # ESLint style: {name: writable}
            globals_data = list(globals_data)
        if not isinstance(globals_data, list):
            raise ConfigError("'globals' must be a list of names")

        ignore_data = data.get("ignore_patterns") or []
        if not isinstance(ignore_data, list):
            raise ConfigError("'ignore_patterns' must be a list of glob patterns")

        try:
            jobs = int(data.get("jobs", 1))
        except (TypeError, ValueError):
            raise ConfigError(f"'jobs' must be an integer, got {data.get('jobs')!r}")

        return cls(
            rules=rules,
            env={str(name): bool(enabled) for name, enabled in env_data.items()},
            globals=[str(name) for name in globals_data],
            ignore_patterns=[str(pattern) for pattern in ignore_data],
            format=str(data.get("format", "stylish")),
            symbols=str(data.get("symbols", "auto")),
            jobs=jobs,
        )


class ConfigManager:
    """
    Manages configuration loading.

    Hierarchy (later wins):
      1. User config (~/.blockscope/config.yaml)
      2. Project config (.blockscope/config.yaml)
      3. Explicit config file
      4. Environment variables
      5. Overrides (command line)
    """

    USER_CONFIG_DIR = Path.home() / ".blockscope"
    USER_CONFIG_FILE = USER_CONFIG_DIR / "config.yaml"
    PROJECT_CONFIG_DIR = ".blockscope"
    PROJECT_CONFIG_FILE = "config.yaml"

    def __init__(
        self,
        project_dir: Optional[Path] = None,
        config_path: Optional[Path] = None,
        user_config_path: Optional[Path] = None,
    ):
        self.project_dir = Path(project_dir) if project_dir else Path.cwd()
        self.config_path = Path(config_path) if config_path else None
        self._user_config_path = Path(user_config_path) if user_config_path else self.USER_CONFIG_FILE
        self._config: Optional[Config] = None

    @property
    def project_config_path(self) -> Path:
        return self.project_dir / self.PROJECT_CONFIG_DIR / self.PROJECT_CONFIG_FILE

    @property
    def user_config_path(self) -> Path:
        return self._user_config_path

    def load(self, overrides: Optional[Dict[str, Any]] = None) -> Config:
        """
        Load configuration from all sources.

        Args:
            overrides: Highest-priority values (command line flags)

        Raises:
            ConfigError: If the explicit config file is missing or malformed,
                or if the merged configuration does not validate
        """
        if self._config is not None and not overrides:
            return self._config

        # Start with defaults
        config_data: Dict[str, Any] = {}

        # Layer 1: User config
        config_data = self._merge(config_data, self._read_optional(self.user_config_path))

        # Layer 2: Project config
        config_data = self._merge(config_data, self._read_optional(self.project_config_path))

        # Layer 3: Explicit config file
        if self.config_path is not None:
            config_data = self._merge(config_data, self._read_required(self.config_path))

        # Layer 4: Environment overrides
        if os.environ.get("BLOCKSCOPE_FORMAT"):
            config_data["format"] = os.environ["BLOCKSCOPE_FORMAT"]
        if os.environ.get("BLOCKSCOPE_JOBS"):
            config_data["jobs"] = os.environ["BLOCKSCOPE_JOBS"]

        # Layer 5: Command line
        if overrides:
            config_data = self._merge(config_data, overrides)

        config = Config.from_dict(config_data)
        error = config.validate()
        if error:
            raise ConfigError(error)

        self._config = config
        return config

    def _read_optional(self, path: Path) -> Dict[str, Any]:
        """Read a config file that may be absent; malformed files are skipped."""
        if not path.exists():
            return {}
        try:
            return self._read(path)
        except ConfigError as e:
            logger.warning("Ignoring config {}: {}", path, e.message)
            return {}

    def _read_required(self, path: Path) -> Dict[str, Any]:
        if not path.exists():
            raise ConfigError(f"Cannot read config file {path}")
        return self._read(path)

    def _read(self, path: Path) -> Dict[str, Any]:
        try:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Cannot read config file {path}", details=str(e))
        if not isinstance(data, dict):
            raise ConfigError(f"Config file {path} must contain a mapping")
        logger.debug("Loaded config {}", path)
        return data

    def _merge(self, base: Dict, override: Dict) -> Dict:
        """Deep merge two dicts, override wins."""
        result = base.copy()
        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._merge(result[key], value)
            else:
                result[key] = value
        return result
