"""
Request Adapter
Framework-neutral, case-insensitive view over a Sanic request
"""
from typing import Any, Dict, Optional
from sanic import Request
from sanic.exceptions import SanicException

from sanicmvc.http.methods import HttpMethod

FORM_CONTENT_TYPES = ('application/x-www-form-urlencoded', 'multipart/form-data')


def _lower_keys(collection: Any) -> Dict[str, Any]:
    """
    Copy a native collection into a dict keyed by lower-cased names

    Multi-value collections (headers, query args, cookies) keep their
    first value, which is what their own .get() returns.
    """
    if not collection:
        return {}
    normalized: Dict[str, Any] = {}
    for key in collection.keys():
        normalized.setdefault(str(key).lower(), collection.get(key))
    return normalized


class RequestAdapter:
    """
    Read-side projection of an inbound request

    Built once per request. Lookups are case-insensitive and never raise:
    a missing key yields None.

    Example:
        request = RequestAdapter(sanic_request)
        request.get_header('content-type')   # 'Content-Type' header
        request.get_param('id')              # route parameter
    """

    def __init__(self, request: Request):
        self.request = request
        self.headers = _lower_keys(getattr(request, 'headers', None))
        self.cookies = _lower_keys(getattr(request, 'cookies', None))
        self.params = _lower_keys(getattr(request.ctx, 'params', None))
        self.query = _lower_keys(getattr(request, 'args', None))
        self.http_method = HttpMethod.from_native(getattr(request, 'method', None))
        self.http_version = getattr(request, 'version', None)
        self.url = self._original_url(request)
        self.referrer = self.headers.get('referer', self.headers.get('referrer'))
        self.body = self._read_body(request)

    def get_header(self, key: str) -> Optional[str]:
        return self.headers.get(str(key).lower())

    def get_cookie(self, key: str) -> Optional[str]:
        return self.cookies.get(str(key).lower())

    def get_param(self, key: str) -> Optional[str]:
        return self.params.get(str(key).lower())

    def get_query(self, key: str) -> Optional[str]:
        return self.query.get(str(key).lower())

    @staticmethod
    def _original_url(request: Request) -> str:
        path = getattr(request, 'path', '') or '/'
        query_string = getattr(request, 'query_string', '')
        return f"{path}?{query_string}" if query_string else path

    @staticmethod
    def _read_body(request: Request) -> Any:
        """
        Parsed payload: JSON, form fields, raw bytes or None

        Malformed payloads yield None instead of failing the request here;
        the action decides whether a missing body is an error.
        """
        content_type = (getattr(request, 'content_type', '') or '').lower()
        try:
            if 'json' in content_type:
                return request.json
            if content_type.startswith(FORM_CONTENT_TYPES):
                form = request.form
                return {key: form.get(key) for key in form.keys()}
        except (SanicException, ValueError):
            return None

        body = getattr(request, 'body', None)
        return body or None

    def __repr__(self) -> str:
        return f"<RequestAdapter {self.http_method.value} {self.url}>"
