"""
Route Middleware Registry
Named middleware that controllers and actions can refer to by string
"""
from typing import Dict, List, Optional

from sanicmvc.middleware.base_middleware import Middleware


class RouteMiddlewareRegistry:
    """
    Usage:
        registry = RouteMiddlewareRegistry()
        registry.register('auth', AuthMiddleware())

        @use_middleware('auth')
        class AccountController: ...
    """

    def __init__(self):
        """Initialize empty registry"""
        self._middleware: Dict[str, Middleware] = {}

    def register(self, name: str, middleware_instance: Middleware):
        self._middleware[name] = middleware_instance

    def get(self, name: str) -> Optional[Middleware]:
        return self._middleware.get(name)

    def has(self, name: str) -> bool:
        return name in self._middleware

    def get_registered(self) -> List[str]:
        return list(self._middleware.keys())
