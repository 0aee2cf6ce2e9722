"""
Route composition: mount prefixes x declared routes, and the endpoint inventory.

Mount prefixes are pooled across the whole scan. Every route is joined with
every prefix, whichever file either of them came from.
"""

from __future__ import annotations

import re
import posixpath
import logging
from typing import Iterable, List, Sequence

from .base import Combination, OtherUrl, RouteMapping

logger = logging.getLogger("route_scanner.composer")

_SLASH_RUN = re.compile(r"/{2,}")


def join_route(prefix: str, route: str) -> str:
    """
    Join a mount prefix and a route as path segments.

    Backslashes become forward slashes, repeated separators collapse and
    ``.``/``..`` segments resolve. A trailing slash on the joined value is kept.

        >>> join_route("/api/", "/users")
        '/api/users'
        >>> join_route("/api", "items/")
        '/api/items/'
    """
    joined = "/".join(part for part in (prefix, route) if part)
    joined = joined.replace("\\", "/")
    if not joined:
        return "."

    trailing = joined.endswith("/")
    normalized = posixpath.normpath(_SLASH_RUN.sub("/", joined))
    if trailing and not normalized.endswith("/"):
        normalized += "/"
    return normalized


def generate_combinations(route_mappings: Sequence[RouteMapping],
                          base_paths: Sequence[str]) -> List[Combination]:
    """Cross-join every route with every base path; pass routes through when there are none."""
    combinations = []

    for mapping in route_mappings:
        if base_paths:
            for base_path in base_paths:
                combinations.append(Combination(
                    route=join_route(base_path, mapping.route),
                    method=mapping.method,
                    file=mapping.file,
                ))
        else:
            combinations.append(Combination(route=mapping.route, method=mapping.method, file=mapping.file))

    logger.debug(f"Composed {len(combinations)} combinations from {len(route_mappings)} routes "
                 f"and {len(base_paths)} base paths")
    return combinations


def normalize_endpoint(value: str) -> str:
    """Strip one trailing ``?`` and then every trailing ``/``."""
    if value.endswith("?"):
        value = value[:-1]
    return value.rstrip("/")


def build_endpoint_inventory(combinations: Iterable[Combination],
                             other_urls: Iterable[OtherUrl]) -> List[str]:
    """Deduplicated, sorted endpoint paths from combinations and bare literal URLs."""
    endpoints = dict.fromkeys(normalize_endpoint(c.route) for c in combinations)
    endpoints.update(dict.fromkeys(normalize_endpoint(u.url) for u in other_urls))

    # "/" normalizes to the empty string; neither is reported
    return sorted(e for e in endpoints if e not in ("", "/"))
