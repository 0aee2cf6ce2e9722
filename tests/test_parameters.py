"""Tests for the ParameterAggregator."""

from route_scanner import ParameterAggregator, ParameterMapping, PathParameterMapping, RouteMapping


class TestPathParameters:

    def setup_method(self) -> None:
        self.aggregator = ParameterAggregator()

    def test_names_in_order(self) -> None:
        routes = [RouteMapping(route="/users/:id/posts/:postId", method="GET", file="users.js")]

        mappings = self.aggregator.extract_path_parameters(routes)

        assert mappings == [
            PathParameterMapping(route="/users/:id/posts/:postId", file="users.js", parameters=["id", "postId"])
        ]

    def test_repeated_name_is_kept(self) -> None:
        routes = [RouteMapping(route="/a/:id/b/:id", method="GET", file="a.js")]

        assert self.aggregator.extract_path_parameters(routes)[0].parameters == ["id", "id"]

    def test_routes_without_parameters_are_skipped(self) -> None:
        routes = [
            RouteMapping(route="/health", method="GET", file="a.js"),
            RouteMapping(route="/items/:item_id(\\d+)", method="GET", file="a.js"),
        ]

        mappings = self.aggregator.extract_path_parameters(routes)

        assert len(mappings) == 1
        assert mappings[0].parameters == ["item_id"]


class TestAggregate:

    def test_empty_files_are_dropped(self) -> None:
        per_file = {"a.js": ["name"], "b.js": [], "c.js": ["page", "sort"]}

        mappings = ParameterAggregator.aggregate(per_file)

        assert mappings == [
            ParameterMapping(file="a.js", parameters=["name"]),
            ParameterMapping(file="c.js", parameters=["page", "sort"]),
        ]


class TestQueryString:

    def test_insertion_order_not_alphabetical(self) -> None:
        body = [ParameterMapping(file="a.js", parameters=["b", "a"])]

        assert ParameterAggregator().build_query_string(body, []) == "b=TAG1&a=TAG2"

    def test_body_before_query_and_deduplicated(self) -> None:
        body = [ParameterMapping(file="a.js", parameters=["name", "email"])]
        query = [
            ParameterMapping(file="a.js", parameters=["page", "name"]),
            ParameterMapping(file="b.js", parameters=["email", "limit"]),
        ]

        query_string = ParameterAggregator().build_query_string(body, query)

        assert query_string == "name=TAG1&email=TAG2&page=TAG3&limit=TAG4"

    def test_colons_are_stripped(self) -> None:
        body = [ParameterMapping(file="a.js", parameters=["user:", "user"])]

        assert ParameterAggregator().build_query_string(body, []) == "user=TAG1"

    def test_custom_tag(self) -> None:
        query = [ParameterMapping(file="a.js", parameters=["q"])]

        assert ParameterAggregator(query_tag="FUZZ").build_query_string([], query) == "q=FUZZ1"

    def test_no_parameters(self) -> None:
        assert ParameterAggregator().build_query_string([], []) == ""
