"""Scanner configuration: defaults, environment variables and config files."""

from __future__ import annotations

import os
import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Set

import yaml

from .parameters import DEFAULT_QUERY_TAG

# =============================================================================
# CONFIGURATION - STRICT IGNORE PATTERNS
# =============================================================================
DEFAULT_IGNORE_DIRS: Set[str] = {
    # Version control
    ".git", ".svn", ".hg", ".bzr",
    # Dependencies
    "node_modules", "bower_components", "jspm_packages",
    # Python
    "__pycache__", ".pytest_cache", ".mypy_cache", ".tox", ".nox",
    "venv", ".venv", "virtualenv", ".virtualenv",
    # JavaScript build output
    ".next", ".nuxt", "coverage", ".cache", ".parcel-cache",
    # IDE/OS
    ".vscode", ".idea", ".DS_Store",
}

DEFAULT_EXTENSIONS: Set[str] = {".js", ".ts"}


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() == "true"


def _env_list(name: str) -> List[str]:
    raw = os.getenv(name, "")
    return [item.strip() for item in raw.split(",") if item.strip()]


@dataclass
class ScannerConfig:
    """
    Scanner configuration with sensible defaults.
    Can be loaded from environment variables, config file, or CLI args.
    """
    # File selection
    ignore_dirs: Set[str] = field(default_factory=set)
    extensions: Set[str] = field(default_factory=set)
    include_tests: bool = False
    max_file_size_mb: int = 10

    # Execution
    parallel_workers: int = 4

    # Output
    output_dir: str = "data"
    query_tag: str = DEFAULT_QUERY_TAG
    verbose: bool = False

    # Hardcoded secret keywords; empty keeps detection disabled
    secret_keywords: List[str] = field(default_factory=list)

    def __post_init__(self):
        """Apply default ignore dirs and extensions if not set."""
        if not self.ignore_dirs:
            self.ignore_dirs = DEFAULT_IGNORE_DIRS.copy()
        if not self.extensions:
            self.extensions = DEFAULT_EXTENSIONS.copy()
        self.extensions = {e if e.startswith(".") else f".{e}" for e in self.extensions}

    @classmethod
    def from_env(cls) -> "ScannerConfig":
        """Load configuration from ROUTESCAN_* environment variables."""
        return cls(
            ignore_dirs=set(_env_list("ROUTESCAN_IGNORE_DIRS")),
            extensions=set(_env_list("ROUTESCAN_EXTENSIONS")),
            include_tests=_env_bool("ROUTESCAN_INCLUDE_TESTS"),
            max_file_size_mb=int(os.getenv("ROUTESCAN_MAX_FILE_SIZE", 10)),
            parallel_workers=int(os.getenv("ROUTESCAN_WORKERS", 4)),
            output_dir=os.getenv("ROUTESCAN_OUTPUT_DIR", "data"),
            query_tag=os.getenv("ROUTESCAN_QUERY_TAG", DEFAULT_QUERY_TAG),
            verbose=_env_bool("ROUTESCAN_VERBOSE"),
            secret_keywords=_env_list("ROUTESCAN_SECRET_KEYWORDS"),
        )

    @classmethod
    def from_file(cls, path: str) -> "ScannerConfig":
        """Load configuration from JSON or YAML file."""
        with open(path, 'r') as f:
            if path.endswith(('.yaml', '.yml')):
                data = yaml.safe_load(f) or {}
            else:
                data = json.load(f)

        for key in ('ignore_dirs', 'extensions'):
            if key in data and isinstance(data[key], list):
                data[key] = set(data[key])

        return cls(**data)

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary."""
        return {
            "ignore_dirs": sorted(self.ignore_dirs),
            "extensions": sorted(self.extensions),
            "include_tests": self.include_tests,
            "max_file_size_mb": self.max_file_size_mb,
            "parallel_workers": self.parallel_workers,
            "output_dir": self.output_dir,
            "query_tag": self.query_tag,
            "verbose": self.verbose,
            "secret_keywords": list(self.secret_keywords),
        }
