"""
Extraction pipeline for code_outline.

Walks a directory tree, dispatches every file to the parser registered for
its extension and collects the non-empty results. Per-file problems are
counted in ScanStats and never abort a run.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import TYPE_CHECKING

from code_outline.config import DEFAULT_EXCLUDE, DEFAULT_MAX_FILE_SIZE
from code_outline.errors import RootPathError
from code_outline.models import ParseResult, ScanStats
from code_outline.parsers.base import normalize_extension
from code_outline.utils import walk_files

if TYPE_CHECKING:
    from code_outline.parsers.base import BaseParser, ParserRegistry

logger = logging.getLogger(__name__)


class OutlineScanner:
    """Runs the registered parsers over a directory tree."""

    def __init__(
        self,
        registry: ParserRegistry,
        language: str | None = None,
        exclude: list[str] | None = None,
        workers: int = 1,
        max_file_size: int = DEFAULT_MAX_FILE_SIZE,
    ):
        """
        Initialize the scanner.

        Args:
            registry: Registry used to resolve a parser per file.
            language: Only process files of this language.
            exclude: Patterns to exclude (directories, file suffixes).
            workers: Number of parsing threads; 1 parses sequentially.
            max_file_size: Files larger than this many bytes count as failed.

        Raises:
            ProfileNotFoundError: If `language` is not registered.
        """
        self.registry = registry
        self.exclude = DEFAULT_EXCLUDE.copy() if exclude is None else list(exclude)
        self.workers = max(1, workers)
        self.max_file_size = max_file_size
        self.stats = ScanStats()
        self._lock = threading.Lock()

        self.language_parser: BaseParser | None = None
        if language:
            self.language_parser = registry.for_language(language)

    def run(self, root: Path) -> list[ParseResult]:
        """
        Scan a directory tree.

        Args:
            root: Directory to scan.

        Returns:
            Results that have at least one element, sorted by file path.

        Raises:
            RootPathError: If root doesn't exist or is not a directory.
        """
        root = Path(root)
        if not root.exists():
            raise RootPathError(f"Input directory does not exist: {root}")
        if not root.is_dir():
            raise RootPathError(f"Input path is not a directory: {root}")

        self.stats = ScanStats()
        tasks = self._collect(root)
        logger.info("Scanning %d files under %s", len(tasks), root)

        results: list[ParseResult] = []
        if self.workers == 1 or len(tasks) < 2:
            for filepath, parser in tasks:
                result = self._scan_file(filepath, parser)
                if result is not None:
                    results.append(result)
        else:
            with ThreadPoolExecutor(max_workers=self.workers) as executor:
                futures = [executor.submit(self._scan_file, filepath, parser) for filepath, parser in tasks]
                for future in as_completed(futures):
                    result = future.result()
                    if result is not None:
                        results.append(result)

        results.sort(key=lambda r: r.file_path)
        logger.info(
            "Processed %d files: %d succeeded, %d failed, %d skipped",
            self.stats.processed,
            self.stats.succeeded,
            self.stats.failed,
            self.stats.skipped,
        )
        return results

    def _collect(self, root: Path) -> list[tuple[Path, BaseParser]]:
        """Pair every eligible file with its parser."""
        tasks = []
        for filepath in walk_files(root, self.exclude):
            parser = self._parser_for(filepath)
            if parser is None:
                self.stats.skipped += 1
                logger.debug("Skipping %s: no language profile", filepath)
                continue
            tasks.append((filepath, parser))
        return tasks

    def _parser_for(self, filepath: Path) -> BaseParser | None:
        if self.language_parser is None:
            return self.registry.get_parser(filepath)
        suffix = normalize_extension(filepath.suffix)
        if suffix and suffix in {normalize_extension(e) for e in self.language_parser.extensions}:
            return self.language_parser
        return None

    def _scan_file(self, filepath: Path, parser: BaseParser) -> ParseResult | None:
        """Parse one file. Failures are recorded, never raised."""
        with self._lock:
            self.stats.processed += 1

        try:
            size = filepath.stat().st_size
            if size > self.max_file_size:
                self._fail(filepath, f"file too large ({size} bytes)")
                return None
            result = parser.scan(filepath)
        except (OSError, UnicodeDecodeError) as e:
            self._fail(filepath, str(e))
            return None

        with self._lock:
            self.stats.succeeded += 1

        if not result.elements:
            logger.debug("%s: no declarations", filepath)
            return None
        logger.debug("%s: %d declarations (%s)", filepath, len(result.elements), result.language)
        return result

    def _fail(self, filepath: Path, message: str) -> None:
        logger.warning("Could not process %s: %s", filepath, message)
        with self._lock:
            self.stats.record_failure(str(filepath), message)
