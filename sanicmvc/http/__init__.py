"""
HTTP Package
Request/response adapters between Sanic and controller actions
"""
from sanicmvc.http.methods import HttpMethod
from sanicmvc.http.request_adapter import RequestAdapter
from sanicmvc.http.response_adapter import ResponseAdapter

__all__ = [
    'HttpMethod',
    'RequestAdapter',
    'ResponseAdapter',
]
