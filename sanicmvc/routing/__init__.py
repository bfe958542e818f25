"""
Routing Package
Route descriptors, the layered Router and middleware resolution

RouterComposer lives in sanicmvc.routing.composer and is not imported
here: it depends on sanicmvc.invoker, which itself imports this package.
"""
from sanicmvc.routing.route_descriptor import RouteDescriptor, join_paths
from sanicmvc.routing.route_grouper import group_routes
from sanicmvc.routing.router import Layer, PathPattern, Router
from sanicmvc.routing.route_middleware_registry import RouteMiddlewareRegistry
from sanicmvc.routing.middleware_resolver import MiddlewareResolver, use_middleware

__all__ = [
    'RouteDescriptor',
    'join_paths',
    'group_routes',
    'Layer',
    'PathPattern',
    'Router',
    'RouteMiddlewareRegistry',
    'MiddlewareResolver',
    'use_middleware',
]
