"""
FilePool -- Lints many files across worker processes

Parsing and traversal are CPU-bound, so files are spread over a
ProcessPoolExecutor. Each worker builds its own Linter once (rules are
re-imported in the worker, including --rulesdir modules); nothing is
shared between workers.

Design principles:
- ProcessPool for CPU (bypasses GIL for true parallelism)
- Results come back in input order
- Graceful degradation to sequential on pool failure
"""

from concurrent.futures import ProcessPoolExecutor
from concurrent.futures.process import BrokenProcessPool
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence

from loguru import logger

from ..config import Config
from ..linter import Linter, LintResult
from ..log import time_block
from ..rules import RuleRegistry
from .config import WorkerConfig


@dataclass
class LintJob:
    """
    Everything a worker needs to build its Linter.

    Must stay picklable: it is sent to every worker process.
    """
    config: Config = field(default_factory=Config)
    rules_dirs: List[str] = field(default_factory=list)

    def build_linter(self) -> Linter:
        registry = RuleRegistry.with_builtins()
        for directory in self.rules_dirs:
            registry.load_directory(Path(directory))
        return Linter(self.config, registry)


# Per-process linter, set by the pool initializer
_worker_linter: Optional[Linter] = None


def _init_worker(job: LintJob) -> None:
    global _worker_linter
    _worker_linter = job.build_linter()


def _lint_in_worker(path: str) -> LintResult:
    """Lint one file (standalone for ProcessPool)."""
    return _worker_linter.lint_file(Path(path))


class FilePool:
    """
    Lints a batch of files, in parallel when it pays off.

    Sequential when parallelism is disabled, jobs <= 1, or there is at
    most one file.
    """

    def __init__(self, worker_config: WorkerConfig, job: LintJob, linter: Optional[Linter] = None):
        """
        Args:
            worker_config: Pool size and fallback behaviour
            job: Settings each worker builds its Linter from
            linter: Linter for sequential runs, if one was already built from job
        """
        worker_config.validate()
        self._config = worker_config
        self._job = job
        self._linter = linter

    @property
    def linter(self) -> Linter:
        """Linter used for sequential runs (built on first use)."""
        if self._linter is None:
            self._linter = self._job.build_linter()
        return self._linter

    def lint_files(self, paths: Sequence[Path]) -> List[LintResult]:
        """
        Lint files and return results in the order given.

        Raises:
            OSError: If a file cannot be read
        """
        paths = [Path(p) for p in paths]
        if not paths:
            return []

        workers = min(self._config.jobs, len(paths))
        if not self._config.enabled or workers <= 1:
            return self._sequential(paths)

        with time_block("lint {} files with {} workers", len(paths), workers):
            try:
                executor = ProcessPoolExecutor(
                    max_workers=workers,
                    initializer=_init_worker,
                    initargs=(self._job,),
                )
            except (OSError, NotImplementedError) as e:
                return self._fallback(paths, e)

            with executor:
                try:
                    return list(executor.map(_lint_in_worker, [str(p) for p in paths]))
                except BrokenProcessPool as e:
                    return self._fallback(paths, e)

    def _sequential(self, paths: List[Path]) -> List[LintResult]:
        with time_block("lint {} files sequentially", len(paths)):
            return [self.linter.lint_file(path) for path in paths]

    def _fallback(self, paths: List[Path], error: Exception) -> List[LintResult]:
        if not self._config.fallback_sequential:
            raise error
        logger.debug("Process pool unavailable ({}); falling back to sequential", error)
        return self._sequential(paths)
