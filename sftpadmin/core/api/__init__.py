"""Management API plumbing: configuration, requests, sessions and errors."""
from .config import APIConfig, BasicAuth, ProxyConfig, SSLConfig, TimeoutConfig
from .errors import (
    ErrorKind,
    classify,
    TransportError,
    RequestTimeoutError,
    StatusCodeError,
    ResponseDecodeError,
)
from .request import RequestBuilder, RequestHandler, ResponseHandler
from .session import SessionFactory, SessionManager

__all__ = [
    # Configuration
    'APIConfig',
    'BasicAuth',
    'ProxyConfig',
    'SSLConfig',
    'TimeoutConfig',
    
    # Errors
    'ErrorKind',
    'classify',
    'TransportError',
    'RequestTimeoutError',
    'StatusCodeError',
    'ResponseDecodeError',
    
    # Requests
    'RequestBuilder',
    'RequestHandler',
    'ResponseHandler',
    
    # Sessions
    'SessionFactory',
    'SessionManager',
]
