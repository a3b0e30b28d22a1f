"""Request handler sending one HTTP request per call."""
import time
from typing import Optional

import requests

from ..config import APIConfig
from ..errors import TransportError, RequestTimeoutError
from ...logging import get_logger

logger = get_logger(__name__)

CHUNK_SIZE = 8192


class RequestHandler:
    """Sends requests through a session with the client configuration."""
    
    def __init__(self, session: requests.Session, config: APIConfig):
        """Initializes request handler."""
        self.session = session
        self.config = config
    
    def send(
        self,
        method: str,
        url: str,
        data: Optional[str] = None,
        headers: Optional[dict] = None
    ) -> requests.Response:
        """
        Issues a single request and returns the response with its body loaded.
        
        The total timeout covers the whole call, from connecting to the
        last byte of the body. The caller owns the response and must
        close it.
        
        Raises:
            RequestTimeoutError: The configured timeout elapsed
            TransportError: No complete HTTP response was received
        """
        request_headers = self.config.get_headers()
        if headers:
            request_headers.update(headers)
        
        logger.debug("%s %s", method, url)
        deadline = time.monotonic() + self.config.timeout.total
        try:
            response = self.session.request(
                method,
                url,
                data=data,
                headers=request_headers,
                stream=True,
                **self.config.get_request_kwargs()
            )
        except requests.Timeout as e:
            raise RequestTimeoutError(method, url, str(e)) from e
        except requests.RequestException as e:
            raise TransportError(method, url, str(e)) from e
        
        try:
            self._load_body(response, deadline, method, url)
        except Exception:
            response.close()
            raise
        return response
    
    def _load_body(self, response: requests.Response, deadline: float, method: str, url: str):
        chunks = []
        try:
            for chunk in response.iter_content(CHUNK_SIZE):
                chunks.append(chunk)
                if time.monotonic() > deadline:
                    raise RequestTimeoutError(
                        method, url, f"body not received within {self.config.timeout.total}s"
                    )
        except requests.Timeout as e:
            raise RequestTimeoutError(method, url, str(e)) from e
        except requests.RequestException as e:
            raise TransportError(method, url, str(e)) from e
        # later reads of .content and .json() use the loaded body
        response._content = b''.join(chunks)
        response._content_consumed = True
