"""
Middleware Resolver
Reads middleware declared on controllers and actions
"""
from typing import Any, Callable, Iterable, Optional, TypeVar

from sanicmvc.exceptions.custom import ConfigurationError
from sanicmvc.middleware.base_middleware import FunctionMiddleware, Middleware, MiddlewareChain
from sanicmvc.routing.route_middleware_registry import RouteMiddlewareRegistry

MIDDLEWARE_ATTRIBUTE = '__sanicmvc_middleware__'

T = TypeVar('T')


def use_middleware(*entries: Any) -> Callable[[T], T]:
    """
    Declare middleware on a controller class or an action method

    Entries may be Middleware instances, Middleware subclasses, async
    callables taking the request, or names registered in a
    RouteMiddlewareRegistry. Stacked decorators run top to bottom.

    Example:
        @use_middleware('auth')
        class InvoiceController:

            @use_middleware(AuditMiddleware, rate_limit)
            async def delete(self, id): ...
    """
    def decorator(target: T) -> T:
        existing = vars(target).get(MIDDLEWARE_ATTRIBUTE, ())
        setattr(target, MIDDLEWARE_ATTRIBUTE, tuple(entries) + tuple(existing))
        return target
    return decorator


class MiddlewareResolver:
    """
    Resolves class-scope and method-scope middleware chains

    Lookups are not cached here; RouterComposer resolves each class chain
    once per controller group.
    """

    def __init__(self, registry: Optional[RouteMiddlewareRegistry] = None):
        self.registry = registry or RouteMiddlewareRegistry()

    def resolve_class_middleware(self, controller_type: Optional[type]) -> MiddlewareChain:
        if controller_type is None:
            return ()
        return self.resolve(getattr(controller_type, MIDDLEWARE_ATTRIBUTE, ()))

    def resolve_method_middleware(self, controller_type: Optional[type], action_name: str) -> MiddlewareChain:
        if controller_type is None:
            return ()
        action = getattr(controller_type, action_name, None)
        if action is None:
            return ()
        return self.resolve(getattr(action, MIDDLEWARE_ATTRIBUTE, ()))

    def resolve(self, entries: Iterable[Any]) -> MiddlewareChain:
        """
        Normalize declared entries into Middleware instances

        Raises:
            ConfigurationError: unknown middleware name or unsupported entry
        """
        return tuple(self._resolve_entry(entry) for entry in entries or ())

    def _resolve_entry(self, entry: Any) -> Middleware:
        if isinstance(entry, Middleware):
            return entry

        if isinstance(entry, str):
            middleware = self.registry.get(entry)
            if middleware is None:
                raise ConfigurationError(
                    f"Route middleware '{entry}' is not registered "
                    f"(registered: {', '.join(self.registry.get_registered()) or 'none'})"
                )
            return middleware

        if isinstance(entry, type):
            if issubclass(entry, Middleware):
                return entry()
            raise ConfigurationError(f"{entry.__name__} is not a Middleware subclass")

        if callable(entry):
            return FunctionMiddleware(entry)

        raise ConfigurationError(f"Unsupported middleware entry: {entry!r}")
