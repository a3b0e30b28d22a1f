"""
Custom exceptions for sftpadmin operations.

This module defines the base exception and the user equivalence
errors raised when a server round trip alters a user record.
"""
from enum import Enum
from typing import Optional, Any


class SftpAdminError(Exception):
    """Base exception for all sftpadmin errors."""
    
    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        """
        Initialize the exception.
        
        Args:
            message: Error message
            status_code: HTTP status code (if available)
        """
        self.status_code = status_code
        super().__init__(message)


class MismatchKind(Enum):
    """Sub-check of the user equivalence pipeline that failed."""
    IDENTITY = 'identity'
    PERMISSIONS = 'permissions'
    FILTERS = 'filters'
    FILESYSTEM = 'filesystem'
    SECRET = 'secret'
    VIRTUAL_FOLDERS = 'virtual_folders'
    FIELDS = 'fields'


class UserMismatchError(SftpAdminError):
    """Raised when a user returned by the server does not match the one sent."""
    
    def __init__(
        self,
        kind: MismatchKind,
        message: str,
        actual: Any = None
    ) -> None:
        """
        Initialize the exception.
        
        Args:
            kind: Failing sub-check
            message: Human readable mismatch reason
            actual: User decoded from the server response (if available)
        """
        self.kind = kind
        self.reason = message
        self.actual = actual
        super().__init__(message)
