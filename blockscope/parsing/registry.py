"""
Parser Registry -- Which grammar handles which file.

Linting routes each file by extension; directory discovery asks the same
registry whether a file is worth linting at all.

Usage:
    registry = ParserRegistry.default()
    registry.get_config(Path("src/app.mjs"))    # JAVASCRIPT_CONFIG
    registry.is_supported(Path("README.md"))   # False
"""

from pathlib import Path
from typing import Dict, Optional, Set

from .config import LanguageConfig


def _extension(file_path: Path) -> str:
    return Path(file_path).suffix.lower()


class ParserRegistry:
    """Language configs by name, and by lowercase file extension."""

    def __init__(self):
        self._by_name: Dict[str, LanguageConfig] = {}
        self._by_extension: Dict[str, LanguageConfig] = {}

    @classmethod
    def default(cls) -> 'ParserRegistry':
        """Registry with every bundled language registered."""
        from .languages import JAVASCRIPT_CONFIG

        registry = cls()
        registry.register(JAVASCRIPT_CONFIG)
        return registry

    def register(self, config: LanguageConfig) -> None:
        """
        Add a language, replacing an earlier config of the same name.

        Raises:
            ValueError: If one of its extensions belongs to another language
        """
        extensions = {ext.lower() for ext in config.extensions}
        for ext in sorted(extensions):
            owner = self._by_extension.get(ext)
            if owner is not None and owner.name != config.name:
                raise ValueError(
                    f"Extension {ext} already registered to {owner.name}, "
                    f"cannot register to {config.name}"
                )

        self._by_name[config.name] = config
        for ext in extensions:
            self._by_extension[ext] = config

    def get_config(self, file_path: Path) -> Optional[LanguageConfig]:
        """Config for a file, or None when no grammar handles its extension."""
        return self._by_extension.get(_extension(file_path))

    def get_config_by_name(self, name: str) -> Optional[LanguageConfig]:
        return self._by_name.get(name)

    def supported_extensions(self) -> Set[str]:
        return set(self._by_extension)

    def is_supported(self, file_path: Path) -> bool:
        return _extension(file_path) in self._by_extension

    def __len__(self) -> int:
        return len(self._by_name)

    def __contains__(self, name: str) -> bool:
        return name in self._by_name
