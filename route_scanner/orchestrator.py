"""
Scan orchestration: runs every extraction pass over every collected file and
assembles the results handed to the report layer.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from pathlib import Path
from threading import Lock
from typing import Any, Callable, Dict, List, Optional, Tuple

from .base import (
    BaseExtractor,
    Combination,
    CommentEntry,
    FileExtraction,
    HeaderMapping,
    OtherUrl,
    ParameterMapping,
    PathParameterMapping,
    RouteMapping,
    SecretMapping,
)
from .collector import SourceCollector
from .composer import build_endpoint_inventory, generate_combinations
from .config import ScannerConfig
from .javascript import JavaScriptExtractor
from .parameters import ParameterAggregator
from .secrets import SecretDetector

logger = logging.getLogger("route_scanner.orchestrator")

ProgressCallback = Callable[[int, int, Path], None]


def read_source(fp: Path) -> str:
    with open(fp, 'r', encoding='utf-8', errors='ignore') as f:
        return f.read()


@dataclass
class ScanResult:
    """Aggregated scan output, keyed by ``folder_name`` in the report layer."""
    folder_name: str
    route_mappings: List[RouteMapping] = field(default_factory=list)
    base_paths: List[str] = field(default_factory=list)
    combinations: List[Combination] = field(default_factory=list)
    endpoints: List[str] = field(default_factory=list)
    path_parameters: List[PathParameterMapping] = field(default_factory=list)
    body_parameters: List[ParameterMapping] = field(default_factory=list)
    query_parameters: List[ParameterMapping] = field(default_factory=list)
    headers: List[HeaderMapping] = field(default_factory=list)
    header_names: List[str] = field(default_factory=list)
    other_urls: List[OtherUrl] = field(default_factory=list)
    query_string: str = ""
    env_vars: List[str] = field(default_factory=list)
    comments: List[CommentEntry] = field(default_factory=list)
    secrets: List[SecretMapping] = field(default_factory=list)
    stats: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "folder_name": self.folder_name,
            "routes": [c.to_dict() for c in self.combinations],
            "base_paths": self.base_paths,
            "endpoints": self.endpoints,
            "path_parameters": [p.to_dict() for p in self.path_parameters],
            "body_parameters": [p.to_dict() for p in self.body_parameters],
            "query_parameters": [p.to_dict() for p in self.query_parameters],
            "headers": [h.to_dict() for h in self.headers],
            "header_names": self.header_names,
            "other_urls": [u.to_dict() for u in self.other_urls],
            "query_string": self.query_string,
            "environment_variables": self.env_vars,
            "comments": [c.to_dict() for c in self.comments],
            "hardcoded_secrets": [s.to_dict() for s in self.secrets],
            "stats": self.stats,
        }


class RouteScanner:
    """
    Route scanner orchestrator.

    Each extraction pass reads the file on its own, so a read failure only
    drops that pass's contribution for that file. Parallel scans extract
    files on worker threads and merge the results in collection order.
    """

    def __init__(self, target_path: str, config: Optional[ScannerConfig] = None,
                 extractor: Optional[BaseExtractor] = None, folder_name: Optional[str] = None):
        self.target = Path(target_path)
        self.config = config or ScannerConfig.from_env()
        self.folder_name = folder_name or self.target.resolve().name or "root"
        self.extractor = extractor or JavaScriptExtractor()
        self.secret_detector = SecretDetector(self.config.secret_keywords)
        self.aggregator = ParameterAggregator(self.config.query_tag)
        self.collector = SourceCollector(
            extensions=self.config.extensions,
            ignore_dirs=self.config.ignore_dirs,
            include_tests=self.config.include_tests,
        )
        self._lock = Lock()
        self._reset_stats()

    # -------------------------------------------------------------------------
    # Per-file extraction
    # -------------------------------------------------------------------------
    def _passes(self) -> List[Tuple[str, Callable[[str, str, FileExtraction], None]]]:
        ex = self.extractor
        passes = [
            ("routes", lambda path, content, res: ex.extract_routes(path, content, res)),
            ("parameters", lambda path, content, res: ex.extract_parameters(content, res)),
            ("headers", lambda path, content, res: ex.extract_headers(content, res)),
            ("environment variables", lambda path, content, res: ex.extract_env_vars(content, res)),
        ]
        # A disabled detector never needs the file contents
        if self.secret_detector.enabled:
            passes.append(("hardcoded secrets", self._secrets_pass))
        passes.append(("comments", lambda path, content, res: ex.extract_comments(content, res)))
        return passes

    def _secrets_pass(self, path: str, content: str, result: FileExtraction) -> None:
        result.secrets = self.secret_detector.detect(content)

    def _too_large(self, fp: Path) -> bool:
        file_size_mb = fp.stat().st_size / (1024 * 1024)
        if file_size_mb > self.config.max_file_size_mb:
            logger.warning(f"Skipping large file {fp}: {file_size_mb:.1f}MB > {self.config.max_file_size_mb}MB")
            return True
        return False

    def _scan_single_file(self, fp: Path) -> Optional[FileExtraction]:
        """
        Run every extraction pass on one file.
        Returns None when the file is skipped for size.
        """
        try:
            if self._too_large(fp):
                return None
        except IOError as e:
            # Reported below by whichever passes fail to read the file
            logger.debug(f"Could not stat {fp}: {e}")

        path = str(fp)
        result = FileExtraction(file=path)

        for name, run in self._passes():
            try:
                content = read_source(fp)
            except (IOError, UnicodeDecodeError) as e:
                logger.error(f"Error reading file for {name}: {fp}: {e}")
                result.failed_passes.append(name)
                continue
            run(path, content, result)

        return result

    # -------------------------------------------------------------------------
    # Scanning
    # -------------------------------------------------------------------------
    def _reset_stats(self) -> None:
        self.stats = {
            "files_scanned": 0,
            "files_too_large": 0,
            "files_errored": 0,
            "read_errors": 0,
        }

    def _record(self, extraction: Optional[FileExtraction]) -> None:
        with self._lock:
            if extraction is None:
                self.stats["files_too_large"] += 1
                return
            self.stats["files_scanned"] += 1
            if extraction.failed_passes:
                self.stats["files_errored"] += 1
                self.stats["read_errors"] += len(extraction.failed_passes)

    def scan(self, progress_cb: Optional[ProgressCallback] = None) -> ScanResult:
        """
        Scan the target directory sequentially.
        Use scan_parallel() for large codebases.
        """
        self._reset_stats()
        all_files = self.collector.collect(self.target)
        extractions = []

        for i, fp in enumerate(all_files):
            if progress_cb:
                progress_cb(i + 1, len(all_files), fp)

            extraction = self._scan_single_file(fp)
            self._record(extraction)
            if extraction is not None:
                extractions.append(extraction)

        return self.build_result(extractions)

    def scan_parallel(self, progress_cb: Optional[ProgressCallback] = None) -> ScanResult:
        """
        Parallel file scanning for large codebases.
        Results are merged in collection order once every file is done.
        """
        self._reset_stats()
        all_files = self.collector.collect(self.target)
        by_file: Dict[Path, Optional[FileExtraction]] = {}
        completed = 0

        logger.info(f"Starting parallel scan with {self.config.parallel_workers} workers")

        with ThreadPoolExecutor(max_workers=self.config.parallel_workers) as executor:
            future_to_file = {
                executor.submit(self._scan_single_file, fp): fp
                for fp in all_files
            }

            for future in as_completed(future_to_file):
                fp = future_to_file[future]
                completed += 1

                if progress_cb:
                    progress_cb(completed, len(all_files), fp)

                extraction = future.result()
                self._record(extraction)
                by_file[fp] = extraction

        extractions = [by_file[fp] for fp in all_files if by_file.get(fp) is not None]
        return self.build_result(extractions)

    # -------------------------------------------------------------------------
    # Aggregation
    # -------------------------------------------------------------------------
    def build_result(self, extractions: List[FileExtraction]) -> ScanResult:
        """Merge per-file extractions into the structures the report layer consumes."""
        result = ScanResult(folder_name=self.folder_name)
        env_vars = set()
        body: Dict[str, List[str]] = {}
        query: Dict[str, List[str]] = {}

        for ex in extractions:
            result.route_mappings.extend(ex.routes)
            result.base_paths.extend(ex.base_paths)
            result.other_urls.extend(ex.other_urls)
            body[ex.file] = ex.body_params
            query[ex.file] = ex.query_params
            env_vars.update(ex.env_vars)
            if ex.headers:
                result.headers.append(HeaderMapping(file=ex.file, headers=ex.headers))
            if ex.comments:
                result.comments.append(CommentEntry(file=ex.file, comments=ex.comments))
            if ex.secrets:
                result.secrets.append(SecretMapping(file=ex.file, secrets=ex.secrets))

        result.combinations = generate_combinations(result.route_mappings, result.base_paths)
        result.endpoints = build_endpoint_inventory(result.combinations, result.other_urls)
        result.path_parameters = self.aggregator.extract_path_parameters(result.route_mappings)
        result.body_parameters = self.aggregator.aggregate(body)
        result.query_parameters = self.aggregator.aggregate(query)
        result.query_string = self.aggregator.build_query_string(result.body_parameters, result.query_parameters)
        result.header_names = sorted({h for mapping in result.headers for h in mapping.headers})
        result.env_vars = sorted(env_vars)
        result.stats = dict(self.stats, **self.collector.stats)

        logger.info(f"Scan complete: {len(result.endpoints)} endpoints, {len(result.combinations)} routes "
                     f"from {self.stats['files_scanned']} files")
        return result
