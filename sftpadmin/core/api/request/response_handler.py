"""Response handler for API responses."""
from typing import Any, Callable, Optional

import requests

from ..errors import StatusCodeError, ResponseDecodeError


class ResponseHandler:
    """Classifies responses against the expected status code."""
    
    @staticmethod
    def check_status(actual: int, expected: int, body: bytes = b'') -> Optional[StatusCodeError]:
        """Returns a StatusCodeError when the codes differ, None otherwise."""
        if actual != expected:
            return StatusCodeError(expected, actual, body)
        return None
    
    @staticmethod
    def read_body(response: requests.Response) -> bytes:
        """Reads the raw response body."""
        return response.content or b''
    
    @staticmethod
    def parse_response(response: requests.Response) -> Any:
        """Parses JSON response."""
        try:
            return response.json()
        except ValueError as e:
            raise ResponseDecodeError(ResponseHandler.read_body(response), e) from e
    
    @staticmethod
    def decode(response: requests.Response, factory: Optional[Callable[[Any], Any]] = None) -> Any:
        """
        Decodes the body into the operation target type.
        
        Args:
            response: Response with a JSON body
            factory: Builds the typed payload from the parsed JSON
        """
        data = ResponseHandler.parse_response(response)
        if factory is None:
            return data
        try:
            return factory(data)
        except (TypeError, ValueError, KeyError, AttributeError) as e:
            raise ResponseDecodeError(ResponseHandler.read_body(response), e) from e
