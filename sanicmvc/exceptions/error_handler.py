"""
Error Interceptor
Outermost wrapper of the dispatch chain; turns unhandled failures into responses
"""
import html as html_escape
import inspect
import traceback
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional
from jinja2 import TemplateError
from sanic import Request
from sanic.response import HTTPResponse, html

from sanicmvc.defaults import DEFAULT_ERROR_MESSAGE, DEFAULT_ERROR_STATUS, DEFAULT_ERROR_VIEW
from sanicmvc.exceptions.custom import HttpException
from sanicmvc.http.request_adapter import RequestAdapter
from sanicmvc.http.response_adapter import ResponseAdapter
from sanicmvc.logging import getLogger
from sanicmvc.middleware.base_middleware import Handler
from sanicmvc.view.engine import ViewEngine

logger = getLogger('error')


def get_status_code(error: BaseException) -> int:
    """
    Status carried by a failure: `status`, then `status_code`, else 500
    """
    for attribute in ('status', 'status_code'):
        status = getattr(error, attribute, None)
        if isinstance(status, int) and not isinstance(status, bool):
            return status
    return DEFAULT_ERROR_STATUS


@dataclass
class HttpError:
    """
    Structured error handed to a custom error handler

    The handler owns the response: it either returns a Sanic response or
    fills `response` (whose status is preset to `status`).
    """
    status: int
    error: BaseException
    request: RequestAdapter
    response: ResponseAdapter


class ErrorStrategy(ABC):

    def __init__(self, view_engine: Optional[ViewEngine] = None):
        self.view_engine = view_engine

    @abstractmethod
    async def handle(self, request: Request, error: Exception) -> HTTPResponse:
        pass


class CustomErrorStrategy(ErrorStrategy):
    """Delegates to the application's error_handler option"""

    def __init__(self, callback: Callable[[HttpError], Any], view_engine: Optional[ViewEngine] = None):
        super().__init__(view_engine)
        self.callback = callback

    async def handle(self, request: Request, error: Exception) -> HTTPResponse:
        status = get_status_code(error)
        response = ResponseAdapter(self.view_engine).status(status)
        result = self.callback(HttpError(status, error, RequestAdapter(request), response))
        if inspect.isawaitable(result):
            result = await result
        if isinstance(result, HTTPResponse):
            return result
        return await response.build()


class DefaultErrorStrategy(ErrorStrategy):
    """
    Renders the `error` view with {message, error}

    `error` is the exception itself only in development; elsewhere it is
    an empty dict and messages of unexpected (non-HTTP) 5xx failures are
    replaced by a generic one. Without a usable `error` view (missing or
    failing to render) a minimal HTML page is sent instead.
    """

    def __init__(self, view_engine: Optional[ViewEngine] = None, development: bool = False):
        super().__init__(view_engine)
        self.development = development

    async def handle(self, request: Request, error: Exception) -> HTTPResponse:
        status = get_status_code(error)
        context = {
            'message': self._get_error_message(error, status),
            'error': error if self.development else {},
        }

        if self.view_engine is not None:
            try:
                if self.view_engine.view_exists(DEFAULT_ERROR_VIEW):
                    response = ResponseAdapter(self.view_engine).status(status)
                    return await response.view(DEFAULT_ERROR_VIEW, context).build()
            except TemplateError:
                logger.exception("Error view '%s' failed to render", DEFAULT_ERROR_VIEW)

        return html(self._fallback_page(status, context, error), status=status)

    def _get_error_message(self, error: Exception, status: int) -> str:
        if self.development or status < 500 or isinstance(error, HttpException):
            return getattr(error, 'message', None) or str(error) or error.__class__.__name__
        # Don't expose internals outside development
        return DEFAULT_ERROR_MESSAGE

    def _fallback_page(self, status: int, context: Dict[str, Any], error: Exception) -> str:
        body = f"<h1>{status}</h1><p>{html_escape.escape(context['message'])}</p>"
        if self.development:
            trace = ''.join(traceback.format_exception(type(error), error, error.__traceback__))
            body += f"<pre>{html_escape.escape(trace)}</pre>"
        return f"<!DOCTYPE html><html><head><title>Error {status}</title></head><body>{body}</body></html>"


class ErrorInterceptor:
    """
    Wraps a handler; any exception it raises is logged and passed to the
    strategy chosen at composition time

    State is per call: a failure in one request never affects another.
    """

    def __init__(self, handler: Handler, strategy: ErrorStrategy):
        self.handler = handler
        self.strategy = strategy

    @classmethod
    def from_options(cls, handler: Handler, options: Any, view_engine: Optional[ViewEngine] = None) -> 'ErrorInterceptor':
        if options.error_handler is not None:
            strategy = CustomErrorStrategy(options.error_handler, view_engine)
        else:
            strategy = DefaultErrorStrategy(view_engine, development=options.is_development)
        return cls(handler, strategy)

    async def __call__(self, request: Request) -> HTTPResponse:
        try:
            return await self.handler(request)
        except Exception as error:
            self._log_error(error, request)
            return await self.strategy.handle(request, error)

    @staticmethod
    def _log_error(error: Exception, request: Request):
        status_code = get_status_code(error)
        log_data = {
            'error_type': error.__class__.__name__,
            'status_code': status_code,
            'method': request.method,
            'path': request.path,
        }

        if status_code >= 500:
            logger.error(
                "%s Error: %s", status_code, error.__class__.__name__,
                extra=log_data,
                exc_info=error
            )
        else:
            logger.warning(
                "%s Error: %s", status_code, error.__class__.__name__,
                extra=log_data
            )
