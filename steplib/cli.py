"""CLI entrypoint: ``steplib <source_directory> [output_file]``."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import NoReturn

from .config import ConfigError, DEFAULT_OUTPUT_FILE, StepLibConfig, load_config
from .errors import NotFoundError, WriteError
from .logging import configure_logging
from .orchestrator import Orchestrator
from .path_filter import PathFilter

_EPILOG = """\
The tool will:
  1. Recursively scan the source directory for .java files
  2. Extract @Given, @When, @Then step definitions
  3. Analyze parameter types and placeholders
  4. Generate YAML output compatible with the HLR-to-Test CLI tool

Examples:
  steplib ./src/test/java
  steplib ./src/test/java custom_steps.yaml
"""


class _ArgumentParser(argparse.ArgumentParser):
    """Usage errors exit with status 1 instead of argparse's default 2."""

    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def _build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="steplib",
        description="Extract Cucumber step definitions from Java source files.",
        epilog=_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "source_directory",
        help="Directory containing Java source files.",
    )
    parser.add_argument(
        "output_file",
        nargs="?",
        default=None,
        help=f"Output YAML file name (default: {DEFAULT_OUTPUT_FILE}).",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to a .steplib.yml file (defaults to the one in the source directory).",
    )
    parser.add_argument(
        "--include",
        action="append",
        default=[],
        metavar="GLOB",
        help="Include glob; replaces the default extension filter. Repeatable.",
    )
    parser.add_argument(
        "--exclude",
        action="append",
        default=[],
        metavar="GLOB",
        help="Additional exclude glob. Repeatable.",
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Increase log verbosity for troubleshooting.",
    )
    verbosity.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Only report warnings and errors.",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write a debug log to this file.",
    )
    return parser


def _build_path_filter(config: StepLibConfig, args: argparse.Namespace) -> PathFilter:
    include = [*config.include, *args.include]
    exclude = [*config.exclude, *args.exclude]
    return PathFilter(include or None, exclude or None, extension=config.extension)


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for step extraction."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=args.verbose, quiet=args.quiet, log_file=args.log_file)

    source = Path(args.source_directory)
    if not source.exists():
        parser.exit(1, f"Error: Source directory does not exist: {args.source_directory}\n")
    if not source.is_dir():
        parser.exit(1, f"Error: Source path is not a directory: {args.source_directory}\n")

    try:
        config = load_config(args.config if args.config is not None else source)
    except ConfigError as exc:
        parser.exit(1, f"Error: {exc}\n")

    output = args.output_file or config.output or DEFAULT_OUTPUT_FILE
    orchestrator = Orchestrator(path_filter=_build_path_filter(config, args))

    try:
        orchestrator.run(source, output)
    except (NotFoundError, NotADirectoryError) as exc:
        parser.exit(1, f"Error: {exc}\n")
    except WriteError as exc:
        parser.exit(1, f"Error during extraction: {exc}\n")
    except Exception as exc:  # pragma: no cover
        parser.exit(1, f"Unexpected error: {exc}\nRun with --verbose for more details.\n")


if __name__ == "__main__":
    main(sys.argv[1:])
