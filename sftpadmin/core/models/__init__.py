"""Management API domain models."""
from .user import (
    User,
    UserFilters,
    ExtensionsFilter,
    Filesystem,
    FsProvider,
    S3Config,
    GCSConfig,
    VirtualFolder,
    UserStatus,
)
from .status import (
    QuotaScan,
    Transfer,
    ConnectionStatus,
    VersionInfo,
    ApiResponse,
)
from .result import APIResult

__all__ = [
    'User',
    'UserFilters',
    'ExtensionsFilter',
    'Filesystem',
    'FsProvider',
    'S3Config',
    'GCSConfig',
    'VirtualFolder',
    'UserStatus',
    'QuotaScan',
    'Transfer',
    'ConnectionStatus',
    'VersionInfo',
    'ApiResponse',
    'APIResult',
]
