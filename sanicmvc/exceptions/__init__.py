"""
Exceptions Package
HTTP exceptions and the error interceptor
"""
from sanicmvc.exceptions.custom import (
    ConfigurationError,
    HttpException,
    BadRequestException,
    UnauthorizedException,
    ForbiddenException,
    NotFoundException,
    MethodNotAllowedException,
    ConflictException,
)
from sanicmvc.exceptions.error_handler import (
    CustomErrorStrategy,
    DefaultErrorStrategy,
    ErrorInterceptor,
    ErrorStrategy,
    HttpError,
    get_status_code,
)

__all__ = [
    # Error handling
    'ErrorInterceptor',
    'ErrorStrategy',
    'CustomErrorStrategy',
    'DefaultErrorStrategy',
    'HttpError',
    'get_status_code',

    # Custom exceptions
    'ConfigurationError',
    'HttpException',
    'BadRequestException',
    'UnauthorizedException',
    'ForbiddenException',
    'NotFoundException',
    'MethodNotAllowedException',
    'ConflictException',
]
