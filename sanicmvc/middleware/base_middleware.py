"""
Base Middleware Class
Abstract base class for all middlewares, and the chain runner
"""
import inspect
from abc import ABC, abstractmethod
from typing import Awaitable, Callable, Optional, Sequence, Tuple
from sanic import Request
from sanic.response import HTTPResponse

Handler = Callable[[Request], Awaitable[Optional[HTTPResponse]]]


class Middleware(ABC):
    """
    Base middleware class

    Middlewares can:
    - Inspect/modify requests before they reach routes
    - Inspect/modify responses before they're sent
    - Short-circuit requests (return response early)
    """

    @abstractmethod
    async def before_request(self, request: Request) -> Optional[HTTPResponse]:
        """
        Called before the request reaches the next handler

        Args:
            request: The Sanic request object

        Returns:
            None: Continue to next middleware/route
            HTTPResponse: Short-circuit and return response immediately
        """
        pass

    async def after_response(self, request: Request, response: HTTPResponse) -> HTTPResponse:
        """
        Called after the downstream handler produced a response

        Returns:
            response: Modified or original response
        """
        return response

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}>"


class FunctionMiddleware(Middleware):
    """
    Adapts a plain callable to the Middleware interface

    Example:
        async def require_json(request):
            if request.content_type != 'application/json':
                return text('JSON only', status=415)

        FunctionMiddleware(require_json)
    """

    def __init__(self, function: Callable):
        self.function = function
        self.name = getattr(function, '__name__', repr(function))

    async def before_request(self, request: Request) -> Optional[HTTPResponse]:
        result = self.function(request)
        if inspect.isawaitable(result):
            result = await result
        return result

    def __repr__(self) -> str:
        return f"<FunctionMiddleware {self.name}>"


MiddlewareChain = Tuple[Middleware, ...]


async def run_middleware(
    chain: Sequence[Middleware],
    request: Request,
    terminal: Handler,
) -> Optional[HTTPResponse]:
    """
    Run a middleware chain around a terminal handler

    before_request hooks run in chain order; the first one returning a
    response stops the chain and the terminal is never called.
    after_response hooks run in reverse order for the middlewares whose
    before_request ran. A terminal returning None means nothing handled
    the request, so no after_response hook runs.
    """
    executed = []
    response = None

    for middleware in chain:
        response = await middleware.before_request(request)
        if response is not None:
            break
        executed.append(middleware)
    else:
        response = await terminal(request)
        if response is None:
            return None

    for middleware in reversed(executed):
        response = await middleware.after_response(request, response)

    return response
