"""
sftpadmin - Python client for the SFTP server management API.

Usage:
    >>> from sftpadmin import AdminClient, APIConfig
    >>> 
    >>> with AdminClient(APIConfig.with_credentials("admin", "password")) as client:
    ...     for user in client.get_users().data:
    ...         print(user.username)
"""
from .client import AdminClient
from .core.logging import setup_logging

# Configuration
from .core.api import (
    APIConfig,
    BasicAuth,
    ProxyConfig,
    SSLConfig,
    TimeoutConfig,
    ErrorKind,
    classify,
    TransportError,
    RequestTimeoutError,
    StatusCodeError,
    ResponseDecodeError,
)

# Models
from .core.models import (
    APIResult,
    ApiResponse,
    ConnectionStatus,
    ExtensionsFilter,
    Filesystem,
    FsProvider,
    GCSConfig,
    QuotaScan,
    S3Config,
    Transfer,
    User,
    UserFilters,
    UserStatus,
    VersionInfo,
    VirtualFolder,
)

from .core.checker import UserChecker, check_user
from .core.exceptions import SftpAdminError, UserMismatchError, MismatchKind

__version__ = '1.0.0'

__all__ = [
    'AdminClient',
    'APIConfig',
    'BasicAuth',
    'ProxyConfig',
    'SSLConfig',
    'TimeoutConfig',
    'ErrorKind',
    'classify',
    'SftpAdminError',
    'TransportError',
    'RequestTimeoutError',
    'StatusCodeError',
    'ResponseDecodeError',
    'UserMismatchError',
    'MismatchKind',
    'APIResult',
    'ApiResponse',
    'ConnectionStatus',
    'ExtensionsFilter',
    'Filesystem',
    'FsProvider',
    'GCSConfig',
    'QuotaScan',
    'S3Config',
    'Transfer',
    'User',
    'UserFilters',
    'UserStatus',
    'VersionInfo',
    'VirtualFolder',
    'UserChecker',
    'check_user',
    'setup_logging',
]
