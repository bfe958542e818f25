"""
Tests for grouping route descriptors by controller class.
"""
from itertools import chain

from sanicmvc.routing import RouteDescriptor, group_routes, join_paths


def descriptor(class_name: str, method: str, path: str, action: str) -> RouteDescriptor:
    return RouteDescriptor(class_name, f"/{class_name.lower()}", method, path, action)


class TestGroupRoutes:

    def test_empty_input_gives_empty_mapping(self):
        assert group_routes([]) == {}

    def test_groups_keep_first_seen_class_order(self):
        routes = [
            descriptor("Users", "GET", "/", "index"),
            descriptor("Items", "GET", "/", "index"),
            descriptor("Users", "POST", "/", "create"),
            descriptor("Orders", "GET", "/", "index"),
            descriptor("Items", "DELETE", "/:id", "destroy"),
        ]

        groups = group_routes(routes)

        assert list(groups) == ["Users", "Items", "Orders"]
        assert [route.action_name for route in groups["Users"]] == ["index", "create"]
        assert [route.action_name for route in groups["Items"]] == ["index", "destroy"]

    def test_concatenated_groups_are_a_stable_permutation_of_the_input(self):
        routes = [
            descriptor(name, "GET", f"/{index}", f"action{index}")
            for index, name in enumerate(["A", "B", "A", "C", "B", "A"])
        ]

        flattened = list(chain.from_iterable(group_routes(routes).values()))

        assert sorted(flattened, key=routes.index) == routes
        assert len(flattened) == len(routes)
        for group in group_routes(routes).values():
            positions = [routes.index(route) for route in group]
            assert positions == sorted(positions)

    def test_class_names_are_compared_exactly(self):
        routes = [
            descriptor("Users", "GET", "/", "index"),
            descriptor("users", "GET", "/", "index"),
        ]

        assert list(group_routes(routes)) == ["Users", "users"]

    def test_input_is_not_mutated(self):
        routes = [descriptor("Users", "GET", "/", "index")]
        snapshot = list(routes)

        group_routes(routes)

        assert routes == snapshot


class TestRouteDescriptor:

    def test_route_name_defaults_to_joined_paths(self):
        route = RouteDescriptor("Users", "/users/", "GET", "/:id", "show")
        assert route.route == "/users/:id"

    def test_explicit_route_name_is_kept(self):
        route = RouteDescriptor("Home", "/", "GET", "/", "index", route="home.index")
        assert route.route == "home.index"

    def test_join_paths(self):
        assert join_paths() == "/"
        assert join_paths("/", "/") == "/"
        assert join_paths("users", "/:id/") == "/users/:id"
