"""
Custom Exception Classes
Framework-specific exceptions with HTTP status codes
"""
from typing import Optional


class ConfigurationError(Exception):
    """
    Raised while composing the router when route or middleware
    configuration is malformed. Aborts startup.
    """


class HttpException(Exception):
    """Base exception for failures that carry an HTTP status code"""
    status_code = 500
    message = "An error occurred"

    def __init__(self, message: Optional[str] = None, status_code: Optional[int] = None):
        self.message = message or self.__class__.message
        self.status_code = status_code or self.__class__.status_code
        super().__init__(self.message)


class BadRequestException(HttpException):
    """
    Raised when request is malformed or invalid

    Example:
        raise BadRequestException("Invalid JSON payload")
    """
    status_code = 400
    message = "Bad request"


class UnauthorizedException(HttpException):
    """Raised when authentication is required but not provided"""
    status_code = 401
    message = "Authentication required"


class ForbiddenException(HttpException):
    """Raised when the caller may not access the resource"""
    status_code = 403
    message = "Access forbidden"


class NotFoundException(HttpException):
    """
    Raised when a requested resource doesn't exist

    The catch-all binding raises it through ControllerInvoker when
    no route claimed the request.

    Example:
        raise NotFoundException("User not found")
    """
    status_code = 404
    message = "Resource not found"


class MethodNotAllowedException(HttpException):
    status_code = 405
    message = "Method not allowed"


class ConflictException(HttpException):
    """
    Raised when request conflicts with current state

    Example:
        raise ConflictException("Email already exists")
    """
    status_code = 409
    message = "Resource conflict"
