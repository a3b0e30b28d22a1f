"""Request builder for API requests."""
import json
from urllib.parse import urlencode
from typing import Any, Dict, Optional

from ...path import join_path


class RequestBuilder:
    """Builds URLs, headers and bodies relative to a base URL."""
    
    def __init__(self, base_url: str, api_prefix: str = ''):
        """Initializes request builder."""
        self.base_url = base_url
        self.api_prefix = api_prefix
    
    def build_url(self, *paths: Any, params: Optional[Dict[str, Any]] = None) -> str:
        """
        Builds a URL for the given path segments.
        
        Segments are joined with ``/`` regardless of the host OS and the
        result is cleaned, so ``('user/', '/5')`` and ``('user', '5')``
        give the same URL. Params set to None are skipped.
        """
        segments = [self.api_prefix] + [str(p) for p in paths]
        path = join_path(*segments)
        url = f"{self.base_url.rstrip('/')}/{path.lstrip('/')}"
        if params:
            query = {k: v for k, v in params.items() if v is not None}
            if query:
                url = f"{url}?{urlencode(query)}"
        return url
    
    def build_headers(self, content_type: Optional[str] = None) -> Dict[str, str]:
        """Builds request headers."""
        headers = {}
        if content_type:
            headers['Content-Type'] = content_type
        return headers
    
    def build_data(self, payload: Any) -> str:
        """Serializes a model or a plain object to JSON."""
        if hasattr(payload, 'to_dict'):
            payload = payload.to_dict()
        return json.dumps(payload)
