"""
Router
Ordered layer stack: middleware, routes and mounted sub-routers

Layers are tried in registration order and the first one producing a
response wins, so registration order is dispatch precedence.
"""
import re
from dataclasses import dataclass
from functools import partial
from typing import Dict, FrozenSet, Iterator, List, Optional, Sequence, Tuple, Union
from urllib.parse import unquote
from sanic import Request
from sanic.response import HTTPResponse

from sanicmvc.exceptions.custom import ConfigurationError
from sanicmvc.http.methods import HttpMethod
from sanicmvc.middleware.base_middleware import Handler, Middleware, MiddlewareChain, run_middleware
from sanicmvc.routing.route_descriptor import join_paths

# ':id', ':id?', '{id}', '{id?}'
_PARAMETER = re.compile(r'^(?::(?P<colon>\w+)(?P<colon_opt>\?)?|\{(?P<brace>\w+)(?P<brace_opt>\?)?\})$')


class PathPattern:
    """
    Compiled path matcher

    end=True matches the whole path (a trailing slash is tolerated),
    end=False matches a prefix on a segment boundary and reports the rest.
    Matching is case-insensitive.
    """

    def __init__(self, path: str, end: bool = True):
        self.path = join_paths(path or '/')
        self.end = end
        self.parameter_names: List[str] = []
        try:
            self.regex = re.compile(self._compile(), re.IGNORECASE)
        except re.error as e:
            raise ConfigurationError(f"Invalid route path '{path}': {e}") from e

    def _compile(self) -> str:
        source = ''
        for segment in self.path.strip('/').split('/'):
            if not segment:
                continue
            match = _PARAMETER.match(segment)
            if match is None:
                source += '/' + re.escape(segment)
                continue
            name = match.group('colon') or match.group('brace')
            optional = match.group('colon_opt') or match.group('brace_opt')
            self.parameter_names.append(name)
            group = f'/(?P<{name}>[^/]+)'
            source += f'(?:{group})?' if optional else group

        if self.end:
            return '^' + source + '/?$'
        return '^' + source + '(?=/|$)'

    def match(self, path: str) -> Optional[Tuple[Dict[str, str], str]]:
        """Return (params, remaining path) or None"""
        found = self.regex.match(path)
        if found is None:
            return None
        params = {
            name: unquote(value)
            for name, value in found.groupdict().items()
            if value is not None
        }
        remaining = path[found.end():]
        if not remaining.startswith('/'):
            remaining = '/' + remaining
        return params, remaining

    def __repr__(self) -> str:
        return f"<PathPattern {self.path}{'' if self.end else '/*'}>"


@dataclass(frozen=True)
class Layer:
    """
    One entry of a router's stack

    Exactly one of handler/router is set for route and mount layers;
    middleware layers have neither and wrap every later layer.
    """
    pattern: PathPattern
    methods: Optional[FrozenSet[str]] = None
    middleware: MiddlewareChain = ()
    handler: Optional[Handler] = None
    router: Optional['Router'] = None

    @property
    def is_middleware(self) -> bool:
        return self.handler is None and self.router is None

    def accepts(self, method: str) -> bool:
        return self.methods is None or method in self.methods


class Router:
    """
    Usage:
        items = Router('ItemController')
        items.route('GET', '/', list_items, middleware=(audit,))
        items.route('POST', '/', create_item)

        app_router = Router('application')
        app_router.use(request_id)
        app_router.mount('/items', items, middleware=(auth,))
        app_router.fallback(not_found)

        response = await app_router.dispatch(request)
    """

    def __init__(self, name: str = 'router'):
        self.name = name
        self._layers: List[Layer] = []

    @property
    def layers(self) -> Tuple[Layer, ...]:
        return tuple(self._layers)

    # =========================================================================
    # Registration
    # =========================================================================

    def use(self, *middleware: Middleware, path: str = '/') -> None:
        """Run middleware ahead of every layer registered after this one"""
        if middleware:
            self._layers.append(Layer(PathPattern(path, end=False), middleware=tuple(middleware)))

    def route(
        self,
        method: Union[str, HttpMethod, None],
        path: str,
        handler: Handler,
        middleware: Sequence[Middleware] = (),
    ) -> None:
        """
        Bind handler to method and exact path; method=None accepts any verb

        Raises:
            ConfigurationError: method is not a bindable HTTP method
        """
        self._layers.append(Layer(
            PathPattern(path),
            self._methods_for(method),
            tuple(middleware),
            handler=handler,
        ))

    def get(self, path: str, handler: Handler, middleware: Sequence[Middleware] = ()) -> None:
        self.route(HttpMethod.GET, path, handler, middleware)

    def mount(self, path: str, router: 'Router', middleware: Sequence[Middleware] = ()) -> None:
        """Delegate every request under path to router, behind middleware"""
        self._layers.append(Layer(PathPattern(path, end=False), middleware=tuple(middleware), router=router))

    def fallback(self, handler: Handler) -> None:
        """Bind handler to any verb and any path not claimed by an earlier layer"""
        self._layers.append(Layer(PathPattern('/', end=False), handler=handler))

    @staticmethod
    def _methods_for(method: Union[str, HttpMethod, None]) -> Optional[FrozenSet[str]]:
        if method is None:
            return None
        try:
            parsed = HttpMethod.parse(method)
        except ValueError as e:
            raise ConfigurationError(str(e)) from e
        if parsed is HttpMethod.GET:
            return frozenset((HttpMethod.GET.value, HttpMethod.HEAD.value))
        return frozenset((parsed.value,))

    # =========================================================================
    # Dispatch
    # =========================================================================

    async def dispatch(self, request: Request, path: Optional[str] = None) -> Optional[HTTPResponse]:
        """
        Run the first matching layers until one produces a response

        Returns:
            The response, or None when no layer handled the request
        """
        if path is None:
            path = request.path
        return await self._dispatch(request, path=path, start=0)

    async def _dispatch(self, request: Request, path: str, start: int) -> Optional[HTTPResponse]:
        method = (request.method or '').upper()

        for index in range(start, len(self._layers)):
            layer = self._layers[index]
            if not layer.accepts(method):
                continue

            matched = layer.pattern.match(path)
            if matched is None:
                continue

            params, remaining = matched
            previous = getattr(request.ctx, 'params', None) or {}
            request.ctx.params = {**previous, **params}

            response = await run_middleware(
                layer.middleware,
                request,
                self._terminal(layer, path, remaining, index),
            )
            if response is not None:
                return response

            request.ctx.params = previous
            if layer.is_middleware:
                # Later layers already ran inside the middleware chain
                return None

        return None

    def _terminal(self, layer: Layer, path: str, remaining: str, index: int) -> Handler:
        if layer.router is not None:
            return partial(layer.router.dispatch, path=remaining)
        if layer.handler is not None:
            return layer.handler
        return partial(self._dispatch, path=path, start=index + 1)

    # =========================================================================
    # Introspection
    # =========================================================================

    def walk(self, prefix: str = '/') -> Iterator[Tuple[Optional[FrozenSet[str]], str, Layer]]:
        """Yield (methods, full path, layer) for every route layer, in dispatch order"""
        for layer in self._layers:
            path = join_paths(prefix, layer.pattern.path)
            if layer.router is not None:
                yield from layer.router.walk(path)
            elif layer.handler is not None:
                yield layer.methods, path if layer.pattern.end else join_paths(path, '*'), layer

    def __repr__(self) -> str:
        return f"<Router {self.name} layers={len(self._layers)}>"
