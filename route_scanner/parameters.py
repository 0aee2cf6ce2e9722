#!/usr/bin/env python3
"""
Parameter Aggregator
====================
Derives request parameters from the extraction results.

- Path parameters: Express-style ``:name`` segments of declared routes
- Body/query parameters: per-file name lists, empty files dropped
- Synthetic query string: every body/query name with a numbered placeholder,
  e.g. ``userId=TAG1&page=TAG2``, for building requests by hand
"""

import re
import logging
from typing import Dict, List, Sequence

from .base import ParameterMapping, PathParameterMapping, RouteMapping

logger = logging.getLogger("route_scanner.parameters")

DEFAULT_QUERY_TAG = "TAG"


class ParameterAggregator:
    """
    Aggregate path, body and query parameters.

    No state is kept between calls; every method works on the lists it is given.
    """

    PATH_PARAM_RE = re.compile(r":([a-zA-Z0-9_]+)")

    def __init__(self, query_tag: str = DEFAULT_QUERY_TAG):
        self.query_tag = query_tag

    def extract_path_parameters(self, route_mappings: Sequence[RouteMapping]) -> List[PathParameterMapping]:
        """
        Collect ``:name`` segments of every route, left to right.

        Example:
            >>> ParameterAggregator().extract_path_parameters(
            ...     [RouteMapping("/users/:id/posts/:postId", "GET", "app.js")])
            [PathParameterMapping(route='/users/:id/posts/:postId', file='app.js', parameters=['id', 'postId'])]
        """
        mappings = []

        for mapping in route_mappings:
            params = self.PATH_PARAM_RE.findall(mapping.route)
            if params:
                mappings.append(PathParameterMapping(route=mapping.route, file=mapping.file, parameters=params))

        if mappings:
            logger.debug(f"Extracted path parameters for {len(mappings)} routes")

        return mappings

    @staticmethod
    def aggregate(per_file: Dict[str, List[str]]) -> List[ParameterMapping]:
        """One mapping per file that accessed at least one parameter, in file order."""
        return [
            ParameterMapping(file=file, parameters=list(params))
            for file, params in per_file.items()
            if params
        ]

    def build_query_string(self, body: Sequence[ParameterMapping], query: Sequence[ParameterMapping]) -> str:
        """
        Render every distinct body/query name as ``name=<tag><n>`` joined by ``&``.

        Names keep the order they were first seen, body mappings before query
        mappings. Colons left over from destructuring renames are dropped.
        """
        names: Dict[str, None] = {}
        for mapping in list(body) + list(query):
            for param in mapping.parameters:
                names[param.replace(":", "")] = None

        return "&".join(
            f"{name}={self.query_tag}{ordinal}"
            for ordinal, name in enumerate(names, 1)
        )
