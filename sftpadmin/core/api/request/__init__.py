"""Request building, sending and response classification."""
from .request_handler import RequestHandler
from .request_builder import RequestBuilder
from .response_handler import ResponseHandler

__all__ = [
    'RequestHandler',
    'RequestBuilder',
    'ResponseHandler',
]
