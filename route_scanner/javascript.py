"""JavaScript/TypeScript extractor: Express-style routes, mounts, request data, env vars, comments."""
from __future__ import annotations

import re
import logging
from typing import Iterable, List, Set

from .base import BaseExtractor, FileExtraction, Language, OtherUrl, ParameterKind, RouteMapping

logger = logging.getLogger("route_scanner.javascript")

RECEIVERS = ("router", "app")
VERBS = ("get", "post", "put", "delete", "patch", "use", "all", "param", "head", "options")
MOUNT_VERB = "use"

QUOTE = "['\"`]"
NOT_QUOTE = "[^'\"`]"


def _unique(values: Iterable[str]) -> List[str]:
    """Order-preserving de-duplication."""
    return list(dict.fromkeys(values))


class JavaScriptExtractor(BaseExtractor):
    """Regex extractor for Express-style JavaScript/TypeScript sources."""

    ROUTE_RE = re.compile(
        rf"({'|'.join(RECEIVERS)})\.({'|'.join(VERBS)})\({QUOTE}({NOT_QUOTE}+){QUOTE}",
        re.IGNORECASE,
    )
    # Any quoted literal starting with "/"
    OTHER_URL_RE = re.compile(rf"{QUOTE}(/[^\s\"'`;]+){QUOTE}")
    HEADER_RE = re.compile(rf"req\.headers\[{QUOTE}([a-zA-Z0-9_-]+){QUOTE}\]")
    PARAM_RE = {
        ParameterKind.BODY: re.compile(
            rf"req\.body(?:\.([a-zA-Z0-9_]+)|\[{QUOTE}([a-zA-Z0-9_]+){QUOTE}\])"
        ),
        ParameterKind.QUERY: re.compile(
            rf"req\.query(?:\.([a-zA-Z0-9_]+)|\[{QUOTE}([a-zA-Z0-9_]+){QUOTE}\])"
        ),
    }
    DESTRUCTURE_RE = re.compile(r"const\s*\{\s*([^}]+)\s*\}\s*=\s*req\.(body|query)")
    ENV_VAR_RE = re.compile(r"process\.env\.([a-zA-Z0-9_]+)")
    LINE_COMMENT_RE = re.compile(r"//(.*)")
    BLOCK_COMMENT_RE = re.compile(r"/\*([\s\S]*?)\*/")

    @property
    def language(self) -> Language:
        return Language.JAVASCRIPT

    @property
    def extensions(self) -> Set[str]:
        return {".js", ".ts"}

    def extract_routes(self, file_path: str, content: str, result: FileExtraction) -> None:
        for match in self.ROUTE_RE.finditer(content):
            verb, route = match.group(2), match.group(3)
            if verb.lower() == MOUNT_VERB:
                result.base_paths.append(route)
            else:
                result.routes.append(RouteMapping(route=route, method=verb.upper(), file=file_path))

        for match in self.OTHER_URL_RE.finditer(content):
            result.other_urls.append(OtherUrl(url=match.group(1), file=file_path))

        logger.debug(f"{file_path}: {len(result.routes)} routes, {len(result.base_paths)} mounts, "
                     f"{len(result.other_urls)} literal URLs")

    def extract_parameters(self, content: str, result: FileExtraction) -> None:
        found = {ParameterKind.BODY: [], ParameterKind.QUERY: []}

        for kind, pattern in self.PARAM_RE.items():
            for match in pattern.finditer(content):
                name = match.group(1) or match.group(2)
                if name:
                    found[kind].append(name)

        for match in self.DESTRUCTURE_RE.finditer(content):
            kind = ParameterKind(match.group(2))
            found[kind].extend(self.split_destructured(match.group(1)))

        result.body_params = _unique(found[ParameterKind.BODY])
        result.query_params = _unique(found[ParameterKind.QUERY])

    @staticmethod
    def split_destructured(names: str) -> List[str]:
        """
        Split the inside of a destructuring pattern into bound names.

        ``"a, b = 1, c: d"`` gives ``["a", "b", "c:"]``: only the first
        whitespace-separated token of each entry is kept.
        """
        params = []
        for entry in names.split(","):
            tokens = entry.split()
            if tokens:
                params.append(tokens[0])
        return params

    def extract_headers(self, content: str, result: FileExtraction) -> None:
        result.headers = _unique(m.group(1) for m in self.HEADER_RE.finditer(content))

    def extract_env_vars(self, content: str, result: FileExtraction) -> None:
        result.env_vars = _unique(m.group(1) for m in self.ENV_VAR_RE.finditer(content))

    def extract_comments(self, content: str, result: FileExtraction) -> None:
        # Block comments are appended after all line comments of the file
        comments = [m.group(1).strip() for m in self.LINE_COMMENT_RE.finditer(content)]
        comments.extend(m.group(1).strip() for m in self.BLOCK_COMMENT_RE.finditer(content))
        result.comments = comments
