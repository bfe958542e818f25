"""
Router Composer
Builds the application router from route descriptors

Precedence of the finished stack, first to last:
    static files < global middleware < default page < controllers < catch-all
Within a controller: class middleware < action middleware < action.
"""
from typing import List, Optional, Sequence

from sanicmvc.exceptions.custom import ConfigurationError
from sanicmvc.http.methods import HttpMethod
from sanicmvc.invoker import ActionInvoker, ControllerBinding
from sanicmvc.logging import getLogger
from sanicmvc.middleware.static_files_middleware import StaticFilesMiddleware
from sanicmvc.routing.middleware_resolver import MiddlewareResolver
from sanicmvc.routing.route_descriptor import RouteDescriptor
from sanicmvc.routing.route_grouper import group_routes
from sanicmvc.routing.router import Router
from sanicmvc.support.config import EngineOptions
from sanicmvc.view.engine import ViewEngine

logger = getLogger(__name__)


class RouterComposer:

    def __init__(
        self,
        invoker: ActionInvoker,
        resolver: MiddlewareResolver,
        options: EngineOptions,
        view_engine: Optional[ViewEngine] = None,
    ):
        self.invoker = invoker
        self.resolver = resolver
        self.options = options
        self.view_engine = view_engine

    def compose(self, routes: Sequence[RouteDescriptor]) -> Router:
        """
        Raises:
            ConfigurationError: a route has an unsupported HTTP method or
                                refers to unknown middleware
        """
        routes = list(routes)
        self.validate(routes)

        application = Router('application')

        static_middleware = self._static_middleware()
        if static_middleware is not None:
            application.use(static_middleware)

        if self.options.middlewares:
            application.use(*self.resolver.resolve(self.options.middlewares))

        default_route = self.find_default_route(routes)
        if default_route is not None:
            application.get('/', self._bind(default_route))

        groups = group_routes(routes)
        for class_name, group in groups.items():
            application.mount('/', self.build_class_router(class_name, group))

        application.fallback(self._bind(None))

        logger.debug(
            "Composed %d routes from %d controllers",
            len(routes), len(groups)
        )
        return application

    @staticmethod
    def validate(routes: Sequence[RouteDescriptor]) -> None:
        for route in routes:
            try:
                HttpMethod.parse(route.http_method)
            except ValueError:
                raise ConfigurationError(
                    f"Route {route.class_name}.{route.action_name} has unsupported "
                    f"HTTP method {route.http_method!r}"
                ) from None

    def find_default_route(self, routes: Sequence[RouteDescriptor]) -> Optional[RouteDescriptor]:
        """
        The single route whose name equals the default page (case-insensitive)

        Zero or several matches bind nothing; both cases are logged.
        """
        default_page = self.options.default_page
        if not default_page:
            return None

        matches: List[RouteDescriptor] = [
            route for route in routes
            if route.route.lower() == default_page.lower()
        ]
        if len(matches) == 1:
            return matches[0]

        if matches:
            logger.warning(
                "Default page %r matches %d routes (%s); no default route installed",
                default_page, len(matches), ', '.join(str(route) for route in matches)
            )
        else:
            logger.warning("Default page %r matches no route; no default route installed", default_page)
        return None

    def build_class_router(self, class_name: str, group: Sequence[RouteDescriptor]) -> Router:
        """
        Two levels: the method router holds one route per action behind its
        action middleware; the class router mounts it at the class path
        behind the class middleware.
        """
        method_router = Router(f'{class_name}.actions')
        for route in group:
            method_router.route(
                route.http_method,
                route.method_path,
                self._bind(route),
                self.resolver.resolve_method_middleware(route.controller, route.action_name),
            )

        # Every descriptor of a group shares the controller type
        first = group[0]
        class_router = Router(class_name)
        class_router.mount(
            first.class_path,
            method_router,
            self.resolver.resolve_class_middleware(first.controller),
        )
        return class_router

    def _bind(self, route: Optional[RouteDescriptor]) -> ControllerBinding:
        return ControllerBinding(self.invoker, route, self.view_engine)

    def _static_middleware(self) -> Optional[StaticFilesMiddleware]:
        if not self.options.static_file_path:
            return None
        directory = self.options.resolve_path(self.options.static_file_path)
        if not directory.is_dir():
            return None
        return StaticFilesMiddleware(directory)
