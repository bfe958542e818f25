"""
Middleware Package
"""
from sanicmvc.middleware.base_middleware import (
    FunctionMiddleware,
    Handler,
    Middleware,
    MiddlewareChain,
    run_middleware,
)
from sanicmvc.middleware.static_files_middleware import StaticFilesMiddleware

__all__ = [
    'FunctionMiddleware',
    'Handler',
    'Middleware',
    'MiddlewareChain',
    'StaticFilesMiddleware',
    'run_middleware',
]
