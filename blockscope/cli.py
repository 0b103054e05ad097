"""
CLI -- blockscope [options] file.js [file.js] [dir]

Lints the given files and directories and prints a report.

Exit codes:
  0  no error-severity problems
  1  at least one error-severity problem
  2  usage, configuration or file access error
"""

import argparse
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from loguru import logger

from .config import ConfigManager
from .errors import BlockscopeError, ScopeStackError
from .log import setup_logger
from .orchestrator import FilePool, LintJob, WorkerConfig
from .output import RENDERERS, render
from .presentation.symbols import get_symbols, safe_print
from . import __version__


EXIT_OK = 0
EXIT_LINT_ERRORS = 1
EXIT_USAGE = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="blockscope",
        usage="blockscope [options] file.js [file.js] [dir]",
        description="blockscope -- flags variables used outside the block that declares them",
    )

    parser.add_argument('files', nargs='*', help='Files and directories to lint')

    parser.add_argument(
        '--config', '-c',
        type=Path,
        help='Load configuration data from this file.'
    )
    parser.add_argument(
        '--rulesdir',
        action='append',
        default=[],
        metavar='PATH',
        help='Load additional rules from this directory (repeatable).'
    )
    parser.add_argument(
        '--format', '-f',
        choices=sorted(RENDERERS),
        help='Use a specific output format (default: stylish).'
    )
    parser.add_argument(
        '--version', '-v',
        action='version',
        version=f'blockscope {__version__}'
    )
    parser.add_argument(
        '--env',
        action='append',
        default=[],
        metavar='NAME',
        help='Enable an environment\'s globals, e.g. browser or node (repeatable).'
    )
    parser.add_argument(
        '--global',
        dest='globals',
        action='append',
        default=[],
        metavar='NAME',
        help='Declare a global variable name (repeatable).'
    )
    parser.add_argument(
        '--jobs', '-j',
        type=int,
        help='Number of worker processes (default: 1).'
    )
    parser.add_argument(
        '--debug',
        action='store_true',
        help='Log debug output to stderr.'
    )

    return parser


def _overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """Config values set on the command line."""
    overrides: Dict[str, Any] = {}
    if args.format:
        overrides["format"] = args.format
    if args.jobs is not None:
        overrides["jobs"] = args.jobs
    if args.env:
        overrides["env"] = {name: True for name in args.env}
    return overrides


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the blockscope CLI.

    Returns:
        Process exit code
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logger(debug=args.debug)

    if not args.files:
        parser.print_help()
        return EXIT_OK

    try:
        config = ConfigManager(Path.cwd(), args.config).load(_overrides(args))
        for name in args.globals:
            if name not in config.globals:
                config.globals.append(name)

        job = LintJob(config=config, rules_dirs=list(args.rulesdir))
        linter = job.build_linter()
        files = list(linter.iter_files(args.files))
        logger.debug("Linting {} files", len(files))

        pool = FilePool(WorkerConfig.from_env(config.jobs), job, linter=linter)
        results = pool.lint_files(files)
    except ScopeStackError:
        raise
    except BlockscopeError as e:
        if e.details:
            logger.debug(e.details)
        safe_print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_USAGE
    except OSError as e:
        safe_print(f"Error: {e}", file=sys.stderr)
        return EXIT_USAGE

    report = render(results, format=config.format, symbols=get_symbols(config.symbols))
    if report:
        safe_print(report)

    if any(result.has_errors for result in results):
        return EXIT_LINT_ERRORS
    return EXIT_OK


if __name__ == '__main__':
    sys.exit(main())
