"""
Tests for the layered Router and path patterns.
"""
import pytest
from sanic.response import text

from conftest import RecordingMiddleware, handler_returning, make_request, unhandled
from sanicmvc.exceptions import ConfigurationError
from sanicmvc.routing import PathPattern, Router


# ============================================================================
# PathPattern
# ============================================================================


class TestPathPattern:

    def test_exact_match_tolerates_trailing_slash(self):
        pattern = PathPattern("/items")
        assert pattern.match("/items") == ({}, "/")
        assert pattern.match("/items/") is not None
        assert pattern.match("/items/7") is None

    def test_matching_is_case_insensitive(self):
        assert PathPattern("/Items").match("/ITEMS") is not None

    @pytest.mark.parametrize("path", ["/items/:id", "/items/{id}"])
    def test_parameters_are_extracted_and_decoded(self, path):
        params, _ = PathPattern(path).match("/items/a%20b")
        assert params == {"id": "a b"}

    def test_optional_parameter(self):
        pattern = PathPattern("/archive/:year?")
        assert pattern.match("/archive") == ({}, "/")
        assert pattern.match("/archive/2024")[0] == {"year": "2024"}

    def test_prefix_match_reports_remaining_path(self):
        pattern = PathPattern("/items", end=False)
        assert pattern.match("/items/7/edit") == ({}, "/7/edit")
        assert pattern.match("/items") == ({}, "/")
        assert pattern.match("/itemsx") is None

    def test_root_prefix_matches_everything(self):
        assert PathPattern("/", end=False).match("/anything/at/all") == ({}, "/anything/at/all")

    def test_duplicate_parameter_names_are_a_configuration_error(self):
        with pytest.raises(ConfigurationError):
            PathPattern("/:id/:id")


# ============================================================================
# Router
# ============================================================================


class TestRouterRoutes:

    async def test_first_matching_layer_wins(self, events):
        router = Router()
        router.get("/items", handler_returning("first", events))
        router.get("/items", handler_returning("second", events))

        response = await router.dispatch(make_request("GET", "/items"))

        assert response.body == b"first"
        assert events == ["first"]

    async def test_method_must_match(self):
        router = Router()
        router.route("POST", "/items", handler_returning("created"))

        assert await router.dispatch(make_request("GET", "/items")) is None
        response = await router.dispatch(make_request("POST", "/items"))
        assert response.body == b"created"

    async def test_get_routes_answer_head(self):
        router = Router()
        router.get("/items", handler_returning("list"))

        assert await router.dispatch(make_request("HEAD", "/items")) is not None

    async def test_any_method_route(self):
        router = Router()
        router.route(None, "/ping", handler_returning("pong"))

        for method in ("GET", "DELETE", "PATCH"):
            assert (await router.dispatch(make_request(method, "/ping"))).body == b"pong"

    async def test_handler_returning_none_falls_through(self):
        router = Router()
        router.get("/items", unhandled)
        router.get("/items", handler_returning("next"))

        assert (await router.dispatch(make_request("GET", "/items"))).body == b"next"

    async def test_route_params_are_exposed_on_request_context(self):
        seen = {}

        async def show(request):
            seen.update(request.ctx.params)
            return text("ok")

        router = Router()
        router.get("/items/:id", show)
        await router.dispatch(make_request("GET", "/items/42"))

        assert seen == {"id": "42"}

    async def test_invalid_method_is_a_configuration_error(self):
        with pytest.raises(ConfigurationError):
            Router().route("FETCH", "/items", handler_returning("x"))

    async def test_unmatched_request_returns_none(self):
        router = Router()
        router.get("/items", handler_returning("list"))

        assert await router.dispatch(make_request("GET", "/other")) is None


class TestRouterMiddleware:

    async def test_use_wraps_only_later_layers(self, events):
        router = Router()
        router.get("/early", handler_returning("early", events))
        router.use(RecordingMiddleware(events, "mw"))
        router.get("/late", handler_returning("late", events))

        await router.dispatch(make_request("GET", "/early"))
        assert events == ["early"]

        events.clear()
        await router.dispatch(make_request("GET", "/late"))
        assert events == ["mw", "late", "after:mw"]

    async def test_middleware_short_circuit_skips_later_layers(self, events):
        router = Router()
        router.use(RecordingMiddleware(events, "guard", respond_with=401))
        router.get("/items", handler_returning("list", events))

        response = await router.dispatch(make_request("GET", "/items"))

        assert response.status == 401
        assert events == ["guard"]

    async def test_route_middleware_runs_in_order(self, events):
        router = Router()
        router.get(
            "/items",
            handler_returning("list", events),
            middleware=(RecordingMiddleware(events, "one"), RecordingMiddleware(events, "two")),
        )

        await router.dispatch(make_request("GET", "/items"))

        assert events == ["one", "two", "list", "after:two", "after:one"]

    async def test_after_hooks_do_not_run_when_nothing_handled(self, events):
        router = Router()
        router.use(RecordingMiddleware(events, "mw"))

        assert await router.dispatch(make_request("GET", "/nothing")) is None
        assert events == ["mw"]


class TestRouterMount:

    async def test_child_router_sees_remaining_path(self, events):
        child = Router("items")
        child.get("/:id", handler_returning("show", events))

        parent = Router()
        parent.mount("/items", child, middleware=(RecordingMiddleware(events, "mount"),))

        response = await parent.dispatch(make_request("GET", "/items/7"))

        assert response.body == b"show"
        assert events == ["mount", "show", "after:mount"]

    async def test_mount_middleware_does_not_run_outside_prefix(self, events):
        child = Router("items")
        child.get("/", handler_returning("list"))

        parent = Router()
        parent.mount("/items", child, middleware=(RecordingMiddleware(events, "mount"),))

        assert await parent.dispatch(make_request("GET", "/users")) is None
        assert events == []

    async def test_mount_params_are_inherited_then_restored(self):
        seen = {}

        async def show(request):
            seen.update(request.ctx.params)
            return text("ok")

        child = Router("comments")
        child.get("/:comment", show)

        parent = Router()
        parent.mount("/posts/:post/comments", child)

        request = make_request("GET", "/posts/3/comments/9")
        await parent.dispatch(request)
        assert seen == {"post": "3", "comment": "9"}

        request = make_request("GET", "/posts/3/comments/9/extra")
        assert await parent.dispatch(request) is None
        assert request.ctx.params == {}

    async def test_fallback_matches_any_verb_and_path(self):
        router = Router()
        router.get("/items", handler_returning("list"))
        router.fallback(handler_returning("fallback"))

        response = await router.dispatch(make_request("DELETE", "/no/such/path"))

        assert response.body == b"fallback"

    def test_walk_lists_routes_in_dispatch_order(self):
        child = Router("items")
        child.get("/", handler_returning("list"))
        child.route("POST", "/", handler_returning("create"))

        parent = Router()
        parent.get("/", handler_returning("home"))
        parent.mount("/items", child)
        parent.fallback(handler_returning("fallback"))

        paths = [(path, methods) for methods, path, _ in parent.walk()]

        assert paths == [
            ("/", frozenset({"GET", "HEAD"})),
            ("/items", frozenset({"GET", "HEAD"})),
            ("/items", frozenset({"POST"})),
            ("/*", None),
        ]
