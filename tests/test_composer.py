"""Tests for route composition and the endpoint inventory."""

import pytest

from route_scanner import (
    Combination,
    OtherUrl,
    RouteMapping,
    build_endpoint_inventory,
    generate_combinations,
    join_route,
    normalize_endpoint,
)


class TestJoinRoute:

    @pytest.mark.parametrize("prefix, route, expected", [
        ("/api", "/users", "/api/users"),
        ("/api/", "/users", "/api/users"),
        ("/api", "users", "/api/users"),
        ("api", "users", "api/users"),
        ("/api", "items/", "/api/items/"),
        ("/api//v1", "//users", "/api/v1/users"),
        ("/api\\v1", "users", "/api/v1/users"),
        ("/api", "../admin", "/admin"),
        ("/", "/", "/"),
        ("/api", "*", "/api/*"),
    ])
    def test_join(self, prefix, route, expected) -> None:
        assert join_route(prefix, route) == expected


class TestGenerateCombinations:

    def test_single_mount_prefix(self) -> None:
        routes = [RouteMapping(route="/users", method="GET", file="users.js")]

        combinations = generate_combinations(routes, ["/api"])

        assert combinations == [Combination(route="/api/users", method="GET", file="users.js")]

    def test_full_cross_product(self) -> None:
        routes = [
            RouteMapping(route="/users", method="GET", file="users.js"),
            RouteMapping(route="/orders", method="POST", file="orders.js"),
        ]

        combinations = generate_combinations(routes, ["/api", "/v2"])

        assert len(combinations) == 4
        assert [(c.route, c.method) for c in combinations] == [
            ("/api/users", "GET"),
            ("/v2/users", "GET"),
            ("/api/orders", "POST"),
            ("/v2/orders", "POST"),
        ]

    def test_pass_through_without_base_paths(self) -> None:
        routes = [
            RouteMapping(route="users/", method="GET", file="a.js"),
            RouteMapping(route="/x/:y", method="PUT", file="b.js"),
        ]

        combinations = generate_combinations(routes, [])

        assert [c.to_dict() for c in combinations] == [r.to_dict() for r in routes]

    def test_duplicates_are_kept(self) -> None:
        routes = [
            RouteMapping(route="/users", method="GET", file="a.js"),
            RouteMapping(route="/users", method="GET", file="b.js"),
        ]

        assert len(generate_combinations(routes, ["/api"])) == 2

    def test_no_routes(self) -> None:
        assert generate_combinations([], ["/api"]) == []


class TestEndpointInventory:

    @pytest.mark.parametrize("value, expected", [
        ("/x/", "/x"),
        ("/x///", "/x"),
        ("/x?", "/x"),
        ("/x/?", "/x"),
        ("/x??", "/x?"),
        ("/x", "/x"),
    ])
    def test_normalize_endpoint(self, value, expected) -> None:
        assert normalize_endpoint(value) == expected

    def test_trailing_slash_variants_collapse(self) -> None:
        combinations = [
            Combination(route="/x/", method="GET", file="a.js"),
            Combination(route="/x", method="POST", file="b.js"),
        ]

        assert build_endpoint_inventory(combinations, []) == ["/x"]

    def test_union_with_other_urls_sorted(self) -> None:
        combinations = [Combination(route="/users", method="GET", file="a.js")]
        other_urls = [
            OtherUrl(url="/static/app.css", file="a.js"),
            OtherUrl(url="/users/", file="b.js"),
            OtherUrl(url="/admin?", file="b.js"),
        ]

        assert build_endpoint_inventory(combinations, other_urls) == ["/admin", "/static/app.css", "/users"]

    def test_root_is_discarded(self) -> None:
        combinations = [
            Combination(route="/", method="GET", file="a.js"),
            Combination(route="/home", method="GET", file="a.js"),
        ]

        assert build_endpoint_inventory(combinations, []) == ["/home"]
