"""
WorkerConfig -- Configuration for parallel file linting

Worker count comes from the lint configuration (config file,
BLOCKSCOPE_JOBS or --jobs). Pool behaviour can be tuned from the
environment.

Environment variables:
- BLOCKSCOPE_PARALLEL_ENABLED: Enable/disable the process pool (default: true)
- BLOCKSCOPE_FALLBACK_SEQUENTIAL: Lint sequentially when the pool cannot start (default: true)
"""

import os
import multiprocessing
from dataclasses import dataclass
from typing import Optional


@dataclass
class WorkerConfig:
    """
    Configuration for the file pool.

    Loaded from environment variables with sensible defaults.
    """

    # Feature toggle
    enabled: bool = True

    # Worker processes (1 = sequential)
    jobs: int = 1

    # Behavior
    fallback_sequential: bool = True       # Fall back on pool failure

    @classmethod
    def from_env(cls, jobs: Optional[int] = None) -> 'WorkerConfig':
        """
        Load configuration from environment variables.

        Args:
            jobs: Worker count; None means one per available core
        """
        if jobs is None:
            jobs = multiprocessing.cpu_count()

        return cls(
            enabled=_get_bool_env("BLOCKSCOPE_PARALLEL_ENABLED", True),
            jobs=jobs,
            fallback_sequential=_get_bool_env("BLOCKSCOPE_FALLBACK_SEQUENTIAL", True),
        )

    def validate(self) -> None:
        """Validate configuration values."""
        if self.jobs < 1:
            raise ValueError("jobs must be >= 1")

    def to_dict(self) -> dict:
        """Serialize for display/logging."""
        return {
            "enabled": self.enabled,
            "jobs": self.jobs,
            "fallback_sequential": self.fallback_sequential,
        }


def _get_bool_env(key: str, default: bool) -> bool:
    """Get boolean from environment variable."""
    value = os.environ.get(key, "").lower()
    if value in ("true", "1", "yes", "on"):
        return True
    if value in ("false", "0", "no", "off"):
        return False
    return default
