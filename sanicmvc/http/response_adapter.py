"""
Response Adapter
Collects response data during request processing and builds the final Sanic response
"""
from typing import Any, Dict, Optional, TYPE_CHECKING
from sanic.response import HTTPResponse, empty, html, json, text, redirect, raw

if TYPE_CHECKING:
    from sanicmvc.view import ViewEngine


class ResponseAdapter:
    """
    Framework-neutral response handed to actions and error handlers

    Setters are chainable; nothing reaches the wire until build() runs.

    Example:
        response.status(201).header('X-Request-Id', rid).json({'id': 7})
        response.view('home.index', {'user': user})
    """

    def __init__(self, view_engine: Optional['ViewEngine'] = None):
        self.view_engine = view_engine
        self._content: Any = None
        self._type: Optional[str] = None
        self._headers: Dict[str, str] = {}
        self._cookies: Dict[str, Dict[str, Any]] = {}
        self._status = 200
        self._template: Optional[str] = None
        self._model: Dict[str, Any] = {}

    @property
    def status_code(self) -> int:
        return self._status

    @property
    def has_content(self) -> bool:
        return self._type is not None

    def status(self, code: int) -> 'ResponseAdapter':
        """Set status code (chainable)"""
        self._status = code
        return self

    def header(self, key: str, value: str) -> 'ResponseAdapter':
        """Add a header (chainable)"""
        self._headers[key] = value
        return self

    def cookie(
        self,
        key: str,
        value: str,
        max_age: Optional[int] = None,
        path: str = '/',
        domain: Optional[str] = None,
        secure: bool = False,
        httponly: bool = True,
        samesite: Optional[str] = 'Lax',
    ) -> 'ResponseAdapter':
        """Add a cookie (chainable)"""
        self._cookies[key] = {
            'value': value,
            'max_age': max_age,
            'path': path,
            'domain': domain,
            'secure': secure,
            'httponly': httponly,
            'samesite': samesite,
        }
        return self

    def json(self, data: Any) -> 'ResponseAdapter':
        return self._set('json', data)

    def html(self, body: str) -> 'ResponseAdapter':
        return self._set('html', body)

    def send(self, content: Any) -> 'ResponseAdapter':
        """Send content, response type is detected from the value"""
        return self._set(self._determine_response_type(content), content)

    def redirect(self, url: str, status: int = 302) -> 'ResponseAdapter':
        self._status = status
        return self._set('redirect', url)

    def view(self, template: str, model: Optional[Dict[str, Any]] = None) -> 'ResponseAdapter':
        """Render a template through the view engine when the response is built"""
        self._template = template
        self._model = dict(model or {})
        return self._set('view', None)

    def _set(self, response_type: str, content: Any) -> 'ResponseAdapter':
        self._type = response_type
        self._content = content
        return self

    @staticmethod
    def _determine_response_type(content: Any) -> str:
        match content:
            case HTTPResponse():
                return 'native'
            case dict() | list():
                return 'json'
            case bytes():
                return 'raw'
            case str():
                stripped = content.strip().lower()
                if stripped.startswith('<!doctype') or stripped.startswith('<html'):
                    return 'html'
                return 'text'
            case None:
                return 'empty'
            case _:
                return 'json'

    async def build(self) -> HTTPResponse:
        """Build the Sanic HTTPResponse from the collected data"""
        response = await self._create_response()

        for key, value in self._headers.items():
            response.headers[key] = value

        for key, cookie_data in self._cookies.items():
            response.add_cookie(key, **cookie_data)

        return response

    async def _create_response(self) -> HTTPResponse:
        status_code = self._status
        content = self._content

        if self._type == 'native':
            if status_code != 200:
                content.status = status_code
            return content

        if self._type == 'view':
            if self.view_engine is None:
                raise RuntimeError(f"Cannot render view '{self._template}': no view engine configured")
            body = await self.view_engine.render(self._template, self._model)
            return html(body, status=status_code)

        if self._type == 'json':
            return json(content, status=status_code)

        if self._type == 'html':
            return html(str(content), status=status_code)

        if self._type == 'text':
            return text(str(content), status=status_code)

        if self._type == 'raw':
            return raw(content, status=status_code)

        if self._type == 'redirect':
            return redirect(str(content), status=status_code)

        return empty(status=status_code)
