"""Operation result wrapper."""
from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

T = TypeVar('T')


@dataclass
class APIResult(Generic[T]):
    """
    Outcome of a management API call.
    
    Attributes:
        status_code: HTTP status received
        data: Decoded payload, None when the operation does not decode
        body: Raw response body when it was captured for diagnostics
    """
    status_code: int
    data: Optional[T] = None
    body: bytes = b''
