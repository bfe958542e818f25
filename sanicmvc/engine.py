"""
Sanic Engine
Turns route descriptors into a running Sanic application
"""
import time
from functools import partial
from typing import Optional, Sequence
from sanic import Request, Sanic
from sanic.response import HTTPResponse

from sanicmvc.exceptions.custom import NotFoundException
from sanicmvc.exceptions.error_handler import ErrorInterceptor
from sanicmvc.http.methods import HttpMethod
from sanicmvc.invoker import ActionInvoker, ControllerInvoker
from sanicmvc.logging import ROOT_LOGGER, LoggerConfig, getLogger
from sanicmvc.routing.composer import RouterComposer
from sanicmvc.routing.middleware_resolver import MiddlewareResolver
from sanicmvc.routing.route_descriptor import RouteDescriptor
from sanicmvc.routing.router import Router
from sanicmvc.support.config import EngineOptions
from sanicmvc.view.engine import ViewEngine

access_logger = getLogger('access')


class SanicEngine:
    """
    Dispatch engine on top of Sanic

    The composed router is mounted on '/' and '/<path:path>' for every
    bindable verb, so route precedence comes from the router's layer order
    and not from Sanic's own route matching.

    Usage:
        engine = SanicEngine(invoker=ControllerInvoker())
        app = engine.init(routes, EngineOptions(default_page='/home/index'))
        app.run()
    """

    def __init__(
        self,
        application: Optional[Sanic] = None,
        invoker: Optional[ActionInvoker] = None,
        resolver: Optional[MiddlewareResolver] = None,
    ):
        self.application = application
        self.invoker = invoker or ControllerInvoker()
        self.resolver = resolver or MiddlewareResolver()
        self.view_engine: Optional[ViewEngine] = None
        self.router: Optional[Router] = None
        self.dispatcher: Optional[ErrorInterceptor] = None

    def _init_sanic(self, options: EngineOptions):
        app = Sanic(options.app_name)
        # Our own middleware and error handling replace sanic-ext
        app.config.AUTO_EXTEND = False
        self.application = app

    def _init_logging(self, options: EngineOptions):
        log_file = options.resolve_path(options.log_file) if options.log_file else None
        LoggerConfig.setup_logger(
            ROOT_LOGGER,
            format_type=options.log_format,
            log_file=log_file,
            environment=options.environment,
            console=options.show_console_log,
        )
        if options.show_console_log:
            self._init_request_log()

    def _init_request_log(self):
        @self.application.middleware('request')
        async def start_request_timer(request: Request):
            request.ctx.started_at = time.perf_counter()

        @self.application.middleware('response')
        async def log_request(request: Request, response: HTTPResponse):
            started_at = getattr(request.ctx, 'started_at', None)
            elapsed = (time.perf_counter() - started_at) * 1000 if started_at else 0.0
            url = f"{request.path}?{request.query_string}" if request.query_string else request.path
            access_logger.info(
                "%s %s %s %.3f ms - %s",
                request.method, url, response.status, elapsed, len(response.body or b'')
            )

    def _init_controller(self, routes: Sequence[RouteDescriptor], options: EngineOptions) -> Router:
        composer = RouterComposer(self.invoker, self.resolver, options, self.view_engine)
        self.router = composer.compose(routes)
        return self.router

    def _init_error_handler(self, router: Router, options: EngineOptions) -> ErrorInterceptor:
        self.dispatcher = ErrorInterceptor.from_options(
            partial(self._dispatch, router),
            options,
            self.view_engine,
        )
        return self.dispatcher

    @staticmethod
    async def _dispatch(router: Router, request: Request) -> HTTPResponse:
        response = await router.dispatch(request)
        if response is None:
            raise NotFoundException(f"No handler for {request.method} {request.path}")
        return response

    def _mount(self, dispatcher: ErrorInterceptor):
        async def dispatch(request: Request, path: str = '') -> HTTPResponse:
            return await dispatcher(request)

        methods = HttpMethod.bindable()
        self.application.add_route(dispatch, '/', methods=methods, name='dispatch_root')
        self.application.add_route(dispatch, '/<path:path>', methods=methods, name='dispatch')

    def init(self, routes: Sequence[RouteDescriptor], options: Optional[EngineOptions] = None) -> Sanic:
        """
        Compose the router and mount it on the Sanic application

        Raises:
            ConfigurationError: malformed route or middleware configuration
        """
        options = options or EngineOptions()
        if self.application is None:
            self._init_sanic(options)
        self._init_logging(options)
        self.view_engine = ViewEngine(options.resolve_path(options.view_path), options.view_engine)

        router = self._init_controller(routes, options)
        self._mount(self._init_error_handler(router, options))
        return self.application

    def run(self, host: Optional[str] = None, port: Optional[int] = None, **kwargs):
        """Run the Sanic server"""
        from sanicmvc.defaults import DEFAULT_HOST, DEFAULT_PORT
        if self.application is None:
            raise RuntimeError("SanicEngine.init() must be called before run()")
        self.application.run(host=host or DEFAULT_HOST, port=port or DEFAULT_PORT, **kwargs)
