"""Management API error kinds and exceptions."""
from enum import Enum
from typing import Dict, Optional

from ...exceptions import SftpAdminError
from ...models import ApiResponse


class ErrorKind(Enum):
    """Server side error variants."""
    VALIDATION = 'validation'
    METHOD_DISABLED = 'method_disabled'
    NOT_FOUND = 'not_found'
    INTERNAL = 'internal'
    
    @classmethod
    def from_status(cls, status_code: int) -> Optional['ErrorKind']:
        """
        Variant suggested by a received status code, None when it has none.
        
        This is not an inverse of ``classify``: missing records are
        answered with 404, while ``classify(NOT_FOUND)`` is 400, the
        status of a missing backup file.
        """
        if status_code == 400:
            return cls.VALIDATION
        if status_code == 404:
            return cls.NOT_FOUND
        if status_code == 403:
            return cls.METHOD_DISABLED
        if status_code >= 500:
            return cls.INTERNAL
        return None


_KIND_STATUS: Dict[ErrorKind, int] = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.METHOD_DISABLED: 403,
    # missing files are reported as bad requests
    ErrorKind.NOT_FOUND: 400,
    ErrorKind.INTERNAL: 500,
}


def classify(kind: ErrorKind) -> int:
    """Maps an error variant to the HTTP status the server answers with."""
    return _KIND_STATUS[kind]


class TransportError(SftpAdminError):
    """Raised when the request never produced an HTTP response."""
    
    def __init__(self, method: str, url: str, message: str):
        self.method = method
        self.url = url
        super().__init__(f"{method} {url} failed: {message}")


class RequestTimeoutError(TransportError):
    """Raised when the request exceeded the configured timeout."""
    pass


class StatusCodeError(SftpAdminError):
    """
    Raised when the server answered with an unexpected status code.
    
    The raw response body is kept for diagnostics, together with the
    parsed error envelope when the server sent one.
    """
    
    def __init__(self, expected: int, actual: int, body: bytes = b''):
        self.expected = expected
        self.actual = actual
        self.body = body
        self.kind = ErrorKind.from_status(actual)
        super().__init__(
            f"wrong status code: got {actual} want {expected}",
            status_code=actual
        )
    
    @property
    def api_error(self) -> Optional[ApiResponse]:
        """Server error envelope decoded from the body, or None."""
        return ApiResponse.from_body(self.body)


class ResponseDecodeError(SftpAdminError):
    """Raised when a successful response body cannot be decoded."""
    
    def __init__(self, body: bytes, cause: Exception):
        self.body = body
        self.cause = cause
        super().__init__(f"unable to decode response: {cause}")
