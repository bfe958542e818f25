"""
HTTP Methods
Closed set of verbs the dispatch engine can bind
"""
from enum import Enum
from typing import Any


class HttpMethod(str, Enum):
    GET = 'GET'
    POST = 'POST'
    PUT = 'PUT'
    DELETE = 'DELETE'
    PATCH = 'PATCH'
    HEAD = 'HEAD'
    OPTIONS = 'OPTIONS'

    # Inbound requests with any other verb
    UNKNOWN = 'UNKNOWN'

    @classmethod
    def from_native(cls, value: Any) -> 'HttpMethod':
        """Map a native request method, never raises"""
        try:
            return cls.parse(value)
        except ValueError:
            return cls.UNKNOWN

    @classmethod
    def parse(cls, value: Any) -> 'HttpMethod':
        """
        Strict lookup used at composition time

        Raises:
            ValueError: value is not one of the bindable verbs
        """
        if isinstance(value, cls):
            method = value
        elif isinstance(value, str):
            try:
                method = cls(value.strip().upper())
            except ValueError:
                raise ValueError(f"Unsupported HTTP method: {value!r}") from None
        else:
            raise ValueError(f"Unsupported HTTP method: {value!r}")

        if method is cls.UNKNOWN:
            raise ValueError(f"Unsupported HTTP method: {value!r}")
        return method

    @classmethod
    def bindable(cls) -> tuple:
        return tuple(method.value for method in cls if method is not cls.UNKNOWN)
