"""
Shared data models and BaseExtractor for the Route Scanner.

All extraction, composition and reporting modules import from this module.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Set


# =============================================================================
# ENUMS
# =============================================================================

class Language(Enum):
    JAVASCRIPT = "JavaScript/TypeScript"


class ParameterKind(Enum):
    BODY = "body"
    QUERY = "query"


# =============================================================================
# DATA STRUCTURES
# =============================================================================

@dataclass
class RouteMapping:
    """A verb + literal path pair recovered from a route declaration."""
    route: str
    method: str
    file: str

    def to_dict(self) -> Dict[str, Any]:
        return {"route": self.route, "method": self.method, "file": self.file}


@dataclass
class Combination:
    """A route mapping joined with one mount prefix (or passed through)."""
    route: str
    method: str
    file: str

    def to_dict(self) -> Dict[str, Any]:
        return {"route": self.route, "method": self.method, "file": self.file}


@dataclass
class OtherUrl:
    url: str
    file: str

    def to_dict(self) -> Dict[str, Any]:
        return {"url": self.url, "file": self.file}


@dataclass
class PathParameterMapping:
    route: str
    file: str
    parameters: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"route": self.route, "file": self.file, "parameters": self.parameters}


@dataclass
class ParameterMapping:
    """Body or query parameter names accessed in one file, first-seen order."""
    file: str
    parameters: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"file": self.file, "parameters": self.parameters}


@dataclass
class HeaderMapping:
    file: str
    headers: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"file": self.file, "headers": self.headers}


@dataclass
class CommentEntry:
    file: str
    comments: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"file": self.file, "comments": self.comments}


@dataclass
class SecretMapping:
    file: str
    secrets: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"file": self.file, "secrets": self.secrets}


@dataclass
class FileExtraction:
    """
    Everything a single source file contributes to a scan.

    Each field is filled by one extraction pass. A pass that could not read
    the file leaves its fields empty; the other passes are unaffected.
    """
    file: str
    routes: List[RouteMapping] = field(default_factory=list)
    base_paths: List[str] = field(default_factory=list)
    other_urls: List[OtherUrl] = field(default_factory=list)
    headers: List[str] = field(default_factory=list)
    body_params: List[str] = field(default_factory=list)
    query_params: List[str] = field(default_factory=list)
    env_vars: List[str] = field(default_factory=list)
    comments: List[str] = field(default_factory=list)
    secrets: List[str] = field(default_factory=list)
    failed_passes: List[str] = field(default_factory=list)


# =============================================================================
# BASE EXTRACTOR (Abstract)
# =============================================================================

class BaseExtractor(ABC):
    """
    Abstract base class for pattern extractors.

    Every ``extract_*`` method works on the raw text of one file and is
    purely lexical: string and comment context is not tracked.
    """

    @property
    @abstractmethod
    def language(self) -> Language:
        """The primary language this extractor handles."""
        pass

    @property
    @abstractmethod
    def extensions(self) -> Set[str]:
        """File extensions this extractor processes."""
        pass

    @abstractmethod
    def extract_routes(self, file_path: str, content: str, result: FileExtraction) -> None:
        """Fill routes, base paths and bare literal URLs."""
        pass

    @abstractmethod
    def extract_parameters(self, content: str, result: FileExtraction) -> None:
        """Fill body and query parameter names."""
        pass

    @abstractmethod
    def extract_headers(self, content: str, result: FileExtraction) -> None:
        pass

    @abstractmethod
    def extract_env_vars(self, content: str, result: FileExtraction) -> None:
        pass

    @abstractmethod
    def extract_comments(self, content: str, result: FileExtraction) -> None:
        pass
