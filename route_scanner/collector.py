"""Source file collection: recursive walk with extension and test-file filters."""

from __future__ import annotations

import os
import re
import logging
from pathlib import Path
from typing import Dict, List, Optional, Set

from .config import DEFAULT_EXTENSIONS, DEFAULT_IGNORE_DIRS

logger = logging.getLogger("route_scanner.collector")

TEST_FILE_MARKERS = ("spec", "test")


class SourceCollector:
    """
    Walks a directory tree and returns the source files to scan, in sorted
    walk order.

    A file is kept when its extension is allowed and, unless test files are
    included, its name does not end in ``.spec.<ext>`` or ``.test.<ext>``.
    """

    def __init__(self, extensions: Optional[Set[str]] = None,
                 ignore_dirs: Optional[Set[str]] = None,
                 include_tests: bool = False):
        self.extensions = {e.lower() for e in (extensions or DEFAULT_EXTENSIONS)}
        self.ignore_dirs = ignore_dirs if ignore_dirs is not None else DEFAULT_IGNORE_DIRS
        self.include_tests = include_tests
        self.stats: Dict[str, int] = {"files_collected": 0, "files_skipped": 0, "test_files_skipped": 0}

        suffixes = "|".join(re.escape(e) for e in sorted(self.extensions))
        markers = "|".join(TEST_FILE_MARKERS)
        self._test_re = re.compile(rf"\.({markers})({suffixes})$", re.IGNORECASE)

    def is_test_file(self, path: Path) -> bool:
        return bool(self._test_re.search(path.name))

    def collect(self, root: Path) -> List[Path]:
        """
        Collect all scannable files under ``root``.

        Entries of each directory are visited in name order and a
        subdirectory is descended into where it sorts among the files, so
        ``a/x.js`` comes before ``z.js``.
        """
        self.stats = {"files_collected": 0, "files_skipped": 0, "test_files_skipped": 0}
        all_files: List[Path] = []
        self._walk(Path(root), all_files)

        self.stats["files_collected"] = len(all_files)
        logger.info(f"Collected {len(all_files)} source files under {root}")
        return all_files

    def _walk(self, directory: Path, all_files: List[Path]) -> None:
        try:
            with os.scandir(directory) as it:
                entries = sorted(it, key=lambda e: e.name)
        except OSError as e:
            logger.warning(f"Cannot list directory {directory}: {e}")
            return

        for entry in entries:
            fp = directory / entry.name

            if entry.is_dir():
                # Symlinked directories are not followed
                if entry.name not in self.ignore_dirs and not entry.is_symlink():
                    self._walk(fp, all_files)
                continue

            if fp.suffix.lower() not in self.extensions:
                self.stats["files_skipped"] += 1
                continue

            if not self.include_tests and self.is_test_file(fp):
                self.stats["test_files_skipped"] += 1
                continue

            all_files.append(fp)
