"""Management API errors and exceptions."""
from .api_errors import (
    ErrorKind,
    classify,
    TransportError,
    RequestTimeoutError,
    StatusCodeError,
    ResponseDecodeError,
)

__all__ = [
    'ErrorKind',
    'classify',
    'TransportError',
    'RequestTimeoutError',
    'StatusCodeError',
    'ResponseDecodeError',
]
