"""
Framework Package
Export the dispatch engine and the types applications build against
"""
from sanicmvc.engine import SanicEngine
from sanicmvc.exceptions import (
    ConfigurationError,
    HttpError,
    HttpException,
    NotFoundException,
)
from sanicmvc.http import HttpMethod, RequestAdapter, ResponseAdapter
from sanicmvc.invoker import ActionInvoker, ControllerBinding, ControllerInvoker
from sanicmvc.middleware import FunctionMiddleware, Middleware
from sanicmvc.routing import (
    MiddlewareResolver,
    RouteDescriptor,
    RouteMiddlewareRegistry,
    Router,
    group_routes,
    use_middleware,
)
from sanicmvc.routing.composer import RouterComposer
from sanicmvc.support import EngineOptions
from sanicmvc.view import ViewEngine

__all__ = [
    # Engine
    'SanicEngine',
    'EngineOptions',
    'RouterComposer',
    'Router',

    # Routes
    'RouteDescriptor',
    'group_routes',

    # Controllers
    'ActionInvoker',
    'ControllerBinding',
    'ControllerInvoker',
    'RequestAdapter',
    'ResponseAdapter',
    'HttpMethod',
    'ViewEngine',

    # Middleware
    'Middleware',
    'FunctionMiddleware',
    'MiddlewareResolver',
    'RouteMiddlewareRegistry',
    'use_middleware',

    # Errors
    'ConfigurationError',
    'HttpError',
    'HttpException',
    'NotFoundException',
]
