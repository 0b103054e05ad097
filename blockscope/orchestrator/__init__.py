"""
Orchestrator -- Parallel linting of many files

Usage:
    from blockscope.orchestrator import FilePool, LintJob, WorkerConfig

    pool = FilePool(WorkerConfig.from_env(jobs=4), LintJob(config, rules_dirs=[]))
    results = pool.lint_files(paths)   # same order as paths

Configuration via environment variables:
    BLOCKSCOPE_PARALLEL_ENABLED=true      # Enable/disable the process pool
    BLOCKSCOPE_FALLBACK_SEQUENTIAL=true   # Lint sequentially if the pool fails
"""

from .config import WorkerConfig
from .pools import FilePool, LintJob

__all__ = [
    'WorkerConfig',
    'FilePool',
    'LintJob',
]
