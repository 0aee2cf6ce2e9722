"""
Report writer: serializes a ScanResult into ``<output_dir>/<folder_name>/``.

Every run overwrites the files of the previous one.
"""

from __future__ import annotations

import csv
import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List

from .orchestrator import ScanResult

logger = logging.getLogger("route_scanner.report")

REPORT_FILES = (
    "routes.json",
    "endpoints.txt",
    "body_parameters.json",
    "query_parameters.json",
    "path_parameters.json",
    "headers.json",
    "headers.txt",
    "other_urls.json",
    "query_string.txt",
    "environment_variables.txt",
    "hardcoded_secrets.json",
    "comments.csv",
)


class ReportWriter:
    """Writes the per-category report files for one scan."""

    def __init__(self, output_dir: str = "data"):
        self.output_dir = Path(output_dir)

    def folder_for(self, result: ScanResult) -> Path:
        return self.output_dir / result.folder_name

    def write(self, result: ScanResult) -> Dict[str, Path]:
        """Write every report file and return their paths keyed by file name."""
        folder = self.folder_for(result)
        folder.mkdir(parents=True, exist_ok=True)

        written = {
            "routes.json": self._write_json(folder / "routes.json", [c.to_dict() for c in result.combinations]),
            "endpoints.txt": self._write_lines(folder / "endpoints.txt", result.endpoints),
            "body_parameters.json": self._write_json(
                folder / "body_parameters.json", [p.to_dict() for p in result.body_parameters]),
            "query_parameters.json": self._write_json(
                folder / "query_parameters.json", [p.to_dict() for p in result.query_parameters]),
            "path_parameters.json": self._write_json(
                folder / "path_parameters.json", [p.to_dict() for p in result.path_parameters]),
            "headers.json": self._write_json(folder / "headers.json", [h.to_dict() for h in result.headers]),
            "headers.txt": self._write_lines(folder / "headers.txt", result.header_names),
            "other_urls.json": self._write_json(folder / "other_urls.json", [u.to_dict() for u in result.other_urls]),
            "query_string.txt": self._write_text(folder / "query_string.txt", result.query_string),
            "environment_variables.txt": self._write_lines(folder / "environment_variables.txt", result.env_vars),
            "hardcoded_secrets.json": self._write_json(
                folder / "hardcoded_secrets.json", [s.to_dict() for s in result.secrets]),
            "comments.csv": self._write_comments(folder / "comments.csv", result),
        }
        return written

    def write_combined(self, result: ScanResult, output_file: str, extra: Dict[str, Any]) -> Path:
        """Write the whole scan result as a single JSON document."""
        data = dict(extra)
        data.update(result.to_dict())
        return self._write_json(Path(output_file), data)

    @staticmethod
    def _write_json(path: Path, data: Any) -> Path:
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2)
        logger.info(f"Written: {path}")
        return path

    @staticmethod
    def _write_text(path: Path, text: str) -> Path:
        with open(path, 'w', encoding='utf-8') as f:
            f.write(text)
        logger.info(f"Written: {path}")
        return path

    def _write_lines(self, path: Path, lines: Iterable[str]) -> Path:
        return self._write_text(path, "\n".join(lines))

    @staticmethod
    def _write_comments(path: Path, result: ScanResult) -> Path:
        # QUOTE_ALL doubles embedded quote characters
        rows: List[List[str]] = [
            [entry.file, comment]
            for entry in result.comments
            for comment in entry.comments
        ]
        with open(path, 'w', encoding='utf-8', newline='') as f:
            writer = csv.writer(f, quoting=csv.QUOTE_ALL, lineterminator="\n")
            f.write("File,Comment\n")
            writer.writerows(rows)
        logger.info(f"Written: {path}")
        return path
