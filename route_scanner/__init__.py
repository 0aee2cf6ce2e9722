"""
Route Scanner package.

Exports the extraction engine, its data models and the report writer.
"""

__version__ = "1.0.0"

from .base import (
    Language,
    ParameterKind,
    RouteMapping,
    Combination,
    OtherUrl,
    PathParameterMapping,
    ParameterMapping,
    HeaderMapping,
    CommentEntry,
    SecretMapping,
    FileExtraction,
    BaseExtractor,
)

from .config import ScannerConfig, DEFAULT_IGNORE_DIRS, DEFAULT_EXTENSIONS
from .collector import SourceCollector
from .javascript import JavaScriptExtractor
from .composer import join_route, generate_combinations, normalize_endpoint, build_endpoint_inventory
from .parameters import ParameterAggregator
from .secrets import SecretDetector
from .orchestrator import RouteScanner, ScanResult
from .report import ReportWriter, REPORT_FILES

__all__ = [
    # Data models
    "Language",
    "ParameterKind",
    "RouteMapping",
    "Combination",
    "OtherUrl",
    "PathParameterMapping",
    "ParameterMapping",
    "HeaderMapping",
    "CommentEntry",
    "SecretMapping",
    "FileExtraction",
    "BaseExtractor",
    # Configuration
    "ScannerConfig",
    "DEFAULT_IGNORE_DIRS",
    "DEFAULT_EXTENSIONS",
    # Engine
    "SourceCollector",
    "JavaScriptExtractor",
    "join_route",
    "generate_combinations",
    "normalize_endpoint",
    "build_endpoint_inventory",
    "ParameterAggregator",
    "SecretDetector",
    "RouteScanner",
    "ScanResult",
    # Output
    "ReportWriter",
    "REPORT_FILES",
]
