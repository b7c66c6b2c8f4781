"""
CLI interface for code_outline.

Provides the command-line interface for outlining source trees.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from code_outline import __version__
from code_outline.config import (
    DEFAULT_CONFIG,
    DEFAULT_EXCLUDE,
    DEFAULT_MAX_FILE_SIZE,
    get_config_template,
    load_config,
)
from code_outline.errors import ConfigError, ProfileNotFoundError, RootPathError
from code_outline.parsers import ParserRegistry, profiles_from_config
from code_outline.report import render_json, render_text, write_report
from code_outline.scanner import OutlineScanner

if TYPE_CHECKING:
    from typing import Any, NoReturn

    from code_outline.parsers import LanguageProfile

logger = logging.getLogger(__name__)


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="code-outline",
        description="Outline the modules, types and functions of a source tree",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
QUICK START
━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
  code-outline                           # Outline current directory
  code-outline -i src -o outline.txt     # Outline src, write to file
  code-outline -i src --lang rust        # Only Rust files
  code-outline --format json -o out.json # Machine-readable output

━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
EXTRA LANGUAGES
━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
  code-outline --init-config > code-outline.yaml
  code-outline --config code-outline.yaml

━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
DISCLAIMER
━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
Declarations are recognised line by line with keyword tests and regular
expressions, not with a parser. Expect misses on declarations split over
several lines and the occasional statement reported as a declaration.
        """,
    )

    parser.add_argument(
        "-i", "--input",
        default=".",
        metavar="DIR",
        help="Directory to scan (default: current directory)",
    )
    parser.add_argument(
        "-o", "--output",
        help="Output file (default: stdout)",
    )
    parser.add_argument(
        "-l", "--lang",
        metavar="NAME",
        help="Only process files of this language (see --list-languages)",
    )
    parser.add_argument(
        "--format",
        choices=("text", "json"),
        default="text",
        help="Report format (default: text)",
    )
    parser.add_argument(
        "--exclude",
        nargs="+",
        metavar="PATTERN",
        help="Additional patterns to exclude",
    )
    parser.add_argument(
        "--workers",
        type=int,
        metavar="N",
        help="Parse files on N threads (default: 1, or scan.workers from config)",
    )

    # Configuration options
    config_group = parser.add_argument_group("Configuration")
    config_group.add_argument(
        "--config",
        metavar="FILE",
        help="Load config from a YAML or JSON file (extra languages, exclusions)",
    )
    config_group.add_argument(
        "--init-config",
        action="store_true",
        help="Print a starter config file",
    )
    config_group.add_argument(
        "--list-languages",
        action="store_true",
        help="List registered languages and their extensions",
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Report per-file status and a final summary on stderr",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"code_outline {__version__}",
    )

    return parser


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.ERROR
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
    )


def fail(message: str) -> NoReturn:
    """Print an error and exit with status 1."""
    print(f"Error: {message}", file=sys.stderr)
    sys.exit(1)


def load_settings(args: argparse.Namespace) -> tuple[dict[str, Any], list[LanguageProfile]]:
    """Load the config file named on the command line, if any."""
    if not args.config:
        return DEFAULT_CONFIG, []

    config_path = Path(args.config)
    if not config_path.exists():
        fail(f"Config file '{config_path}' does not exist")
    try:
        config = load_config(config_path)
        profiles = profiles_from_config(config)
    except ConfigError as e:
        fail(str(e))

    if args.verbose:
        print(f"Loaded config: {config_path}", file=sys.stderr)
        print(f"  languages: {len(profiles)}", file=sys.stderr)
        print(f"  exclude: {len(config['exclude'])} patterns", file=sys.stderr)
    return config, profiles


def list_languages(registry: ParserRegistry) -> str:
    """Format the registered languages and the extensions each one owns."""
    owned: dict[str, list[str]] = {name: [] for name in registry.list_languages()}
    for ext, language in registry.list_extensions().items():
        owned.setdefault(language, []).append(ext)
    lines = [
        f"{name:<12} {', '.join(sorted(exts))}"
        for name, exts in sorted(owned.items())
        if exts
    ]
    return "\n".join(lines) + "\n"


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)

    # Handle --init-config: just output the template and exit
    if args.init_config:
        print(get_config_template())
        return

    config, extra_profiles = load_settings(args)
    registry = ParserRegistry.with_builtins(extra_profiles)

    if args.list_languages:
        sys.stdout.write(list_languages(registry))
        return

    exclude = DEFAULT_EXCLUDE.copy()
    exclude.extend(config.get("exclude") or [])
    if args.exclude:
        exclude.extend(args.exclude)

    scan_config = config.get("scan") or {}
    workers = args.workers if args.workers is not None else scan_config.get("workers", 1)
    if workers < 1:
        fail("--workers must be at least 1")

    root = Path(args.input)
    if args.verbose:
        print(f"Scanning: {root.resolve()}", file=sys.stderr)

    try:
        scanner = OutlineScanner(
            registry,
            language=args.lang,
            exclude=exclude,
            workers=workers,
            max_file_size=scan_config.get("max_file_size", DEFAULT_MAX_FILE_SIZE),
        )
        results = scanner.run(root)
    except (ProfileNotFoundError, RootPathError) as e:
        fail(str(e))

    if args.format == "json":
        output = render_json(results, scanner.stats, root=root.resolve())
    else:
        output = render_text(results)

    try:
        write_report(output, args.output)
    except OSError as e:
        fail(f"Cannot write output: {e}")

    if args.verbose:
        stats = scanner.stats
        if args.output:
            print(f"Output written to: {args.output}", file=sys.stderr)
        print(
            f"Processed: {stats.processed}, succeeded: {stats.succeeded}, failed: {stats.failed}",
            file=sys.stderr,
        )
        for path, message in stats.errors:
            print(f"  ! {path}: {message}", file=sys.stderr)


if __name__ == "__main__":
    main()
