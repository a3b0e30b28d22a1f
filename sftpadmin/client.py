"""
AdminClient - synchronous client for the SFTP server management API.

Example:
    >>> from sftpadmin import AdminClient, APIConfig, User
    >>> config = APIConfig.with_credentials('admin', 'secret')
    >>> with AdminClient(config) as client:
    ...     result = client.add_user(User(username='test', home_dir='/srv/test',
    ...                                   permissions={'/': ['*']}))
    ...     print(result.data.id)

Every operation takes the status code the caller expects. When the
server answers differently a StatusCodeError carrying the raw body is
raised. Mutating user operations verify the returned user with the
equivalence checker before returning.
"""
from contextlib import closing
from typing import Any, Callable, Dict, List, Optional

import requests

from .core.api import (
    APIConfig,
    RequestBuilder,
    RequestHandler,
    ResponseHandler,
    SessionManager,
)
from .core.checker import check_user
from .core.logging import get_logger, setup_logging, truncate_body
from .core.models import (
    APIResult,
    ConnectionStatus,
    QuotaScan,
    User,
    VersionInfo,
)

logger = get_logger(__name__)

JSON_CONTENT_TYPE = 'application/json'

USER_PATH = 'user'
QUOTA_SCAN_PATH = 'quota_scan'
CONNECTION_PATH = 'connection'
VERSION_PATH = 'version'
PROVIDER_STATUS_PATH = 'status'
DUMP_DATA_PATH = 'dumpdata'
LOAD_DATA_PATH = 'loaddata'


def _list_of(model) -> Callable[[Any], List[Any]]:
    def factory(data: Any) -> List[Any]:
        if data is None:
            return []
        if not isinstance(data, list):
            raise TypeError(f"expected a JSON array, got {type(data).__name__}")
        return [model.from_dict(item) for item in data]
    return factory


def _dict_payload(data: Any) -> Dict[str, Any]:
    if not isinstance(data, dict):
        raise TypeError(f"expected a JSON object, got {type(data).__name__}")
    return data


class AdminClient:
    """
    Client for the administrative API of an SFTP/SCP server.
    
    The configuration is fixed for the lifetime of the client. The
    underlying requests session is not guaranteed to be thread-safe, so
    use one client per thread.
    
    Args:
        config: Base URL, credentials and transport options
        session: Optional pre-built requests session (not closed by the client)
    """
    
    def __init__(self, config: Optional[APIConfig] = None,
                 session: Optional[requests.Session] = None):
        self.config = config or APIConfig.default()
        if self.config.log_level is not None:
            setup_logging(self.config.log_level)
        self.session_manager = SessionManager(self.config.user_agent, session)
        self.builder = RequestBuilder(self.config.base_url, self.config.api_prefix)
        self.request_handler = RequestHandler(
            self.session_manager.get_sync_session(), self.config
        )
    
    def __enter__(self) -> 'AdminClient':
        return self
    
    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
    
    def close(self):
        """Releases the underlying HTTP session."""
        self.session_manager.close()
    
    # ------------------------------------------------------------------
    # plumbing
    # ------------------------------------------------------------------
    
    def _send(self, method: str, url: str, payload: Any = None,
              content_type: Optional[str] = None) -> requests.Response:
        data = self.builder.build_data(payload) if payload is not None else None
        headers = self.builder.build_headers(content_type)
        return self.request_handler.send(method, url, data=data, headers=headers)
    
    def _request(
        self,
        method: str,
        url: str,
        expected_status: int,
        factory: Optional[Callable[[Any], Any]] = None,
        payload: Any = None,
        content_type: Optional[str] = None,
        decode_on: tuple = (200,)
    ) -> APIResult:
        """
        Sends a request and classifies the response.
        
        The body is decoded with ``factory`` only when the status matches
        and ``expected_status`` is one of ``decode_on``; otherwise the raw
        body is captured.
        """
        response = self._send(method, url, payload, content_type)
        with closing(response):
            status = response.status_code
            if status == expected_status and factory is not None and expected_status in decode_on:
                return APIResult(status, ResponseHandler.decode(response, factory))
            body = ResponseHandler.read_body(response)
            self._raise_for_status(method, url, status, expected_status, body)
            return APIResult(status, body=body)
    
    @staticmethod
    def _raise_for_status(method: str, url: str, actual: int, expected: int, body: bytes):
        error = ResponseHandler.check_status(actual, expected, body)
        if error is not None:
            logger.warning("%s %s: %s, body: %s", method, url, error, truncate_body(body))
            raise error
    
    # ------------------------------------------------------------------
    # users
    # ------------------------------------------------------------------
    
    def add_user(self, user: User, expected_status: int = 200) -> APIResult[User]:
        """
        Adds a new user and checks the returned one against ``user``.
        
        Raises:
            StatusCodeError: Unexpected status code
            UserMismatchError: The created user differs from the one sent
        """
        url = self.builder.build_url(USER_PATH)
        result = self._request('POST', url, expected_status, User.from_dict,
                               payload=user, content_type=JSON_CONTENT_TYPE)
        if expected_status == 200:
            check_user(user, result.data)
        return result
    
    def update_user(self, user: User, expected_status: int = 200) -> APIResult[User]:
        """
        Updates an existing user.
        
        The PUT response is not trusted: the user is fetched again by id
        and that copy is checked against ``user``.
        """
        url = self.builder.build_url(USER_PATH, user.id)
        result = self._request('PUT', url, expected_status,
                               payload=user, content_type=JSON_CONTENT_TYPE)
        if expected_status != 200:
            return result
        fetched = self.get_user_by_id(user.id, expected_status)
        check_user(user, fetched.data)
        return APIResult(fetched.status_code, fetched.data, result.body)
    
    def remove_user(self, user: User, expected_status: int = 200) -> APIResult[None]:
        """Removes an existing user."""
        url = self.builder.build_url(USER_PATH, user.id)
        return self._request('DELETE', url, expected_status)
    
    def get_user_by_id(self, user_id: int, expected_status: int = 200) -> APIResult[User]:
        """Gets a user by database id."""
        url = self.builder.build_url(USER_PATH, user_id)
        return self._request('GET', url, expected_status, User.from_dict)
    
    def get_users(self, limit: int = 0, offset: int = 0, username: str = '',
                  expected_status: int = 200) -> APIResult[List[User]]:
        """
        Lists users.
        
        Args:
            limit: Maximum number of results, ignored when <= 0
            offset: Number of results to skip, ignored when <= 0
            username: Exact match filter, ignored when empty
        """
        params = {
            'limit': limit if limit > 0 else None,
            'offset': offset if offset > 0 else None,
            'username': username or None,
        }
        url = self.builder.build_url(USER_PATH, params=params)
        return self._request('GET', url, expected_status, _list_of(User))
    
    # ------------------------------------------------------------------
    # quota scans and connections
    # ------------------------------------------------------------------
    
    def get_quota_scans(self, expected_status: int = 200) -> APIResult[List[QuotaScan]]:
        """Gets the active quota scans."""
        url = self.builder.build_url(QUOTA_SCAN_PATH)
        return self._request('GET', url, expected_status, _list_of(QuotaScan))
    
    def start_quota_scan(self, user: User, expected_status: int = 201) -> APIResult[None]:
        """Starts a quota scan for the given user."""
        url = self.builder.build_url(QUOTA_SCAN_PATH)
        return self._request('POST', url, expected_status,
                             payload=user, content_type=JSON_CONTENT_TYPE)
    
    def get_connections(self, expected_status: int = 200) -> APIResult[List[ConnectionStatus]]:
        """Gets status and stats for the active SFTP/SCP connections."""
        url = self.builder.build_url(CONNECTION_PATH)
        return self._request('GET', url, expected_status, _list_of(ConnectionStatus))
    
    def close_connection(self, connection_id: str, expected_status: int = 200) -> APIResult[None]:
        """Closes the active connection identified by ``connection_id``."""
        url = self.builder.build_url(CONNECTION_PATH, connection_id)
        return self._request('DELETE', url, expected_status)
    
    # ------------------------------------------------------------------
    # server
    # ------------------------------------------------------------------
    
    def get_version(self, expected_status: int = 200) -> APIResult[VersionInfo]:
        """Gets the server version details."""
        url = self.builder.build_url(VERSION_PATH)
        return self._request('GET', url, expected_status, VersionInfo.from_dict)
    
    def get_provider_status(self, expected_status: int = 200) -> APIResult[Dict[str, Any]]:
        """
        Gets the data provider status.
        
        A failing provider is reported with status 500 and a JSON body,
        so the body is decoded for 500 too.
        """
        url = self.builder.build_url(PROVIDER_STATUS_PATH)
        return self._request('GET', url, expected_status, _dict_payload,
                             decode_on=(200, 500))
    
    def dump_data(self, output_file: str, indent: str = '',
                  expected_status: int = 200) -> APIResult[Dict[str, Any]]:
        """
        Requests a backup to ``output_file``.
        
        ``output_file`` is relative to the server backups path.
        """
        params = {'output_file': output_file, 'indent': indent or None}
        url = self.builder.build_url(DUMP_DATA_PATH, params=params)
        return self._request('GET', url, expected_status, _dict_payload)
    
    def load_data(self, input_file: str, scan_quota: str = '', mode: str = '',
                  expected_status: int = 200) -> APIResult[Dict[str, Any]]:
        """
        Restores a backup.
        
        New users are added and existing ones updated, one by one; the
        restore stops at the first user that cannot be saved, so it can
        be partial.
        """
        params = {
            'input_file': input_file,
            'scan_quota': scan_quota or None,
            'mode': mode or None,
        }
        url = self.builder.build_url(LOAD_DATA_PATH, params=params)
        return self._request('GET', url, expected_status, _dict_payload)
    
