"""Read-only payloads returned by the management API."""
import json
from dataclasses import dataclass, field
from typing import Dict, Any, List, Optional


@dataclass
class QuotaScan:
    """A quota scan running on the server."""
    username: str
    start_time: int = 0
    
    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'QuotaScan':
        return cls(
            username=data.get('username', ''),
            start_time=int(data.get('start_time') or 0),
        )


@dataclass
class Transfer:
    """An upload or download in progress on a connection."""
    operation_type: str
    path: str
    start_time: int = 0
    size: int = 0
    last_activity: int = 0
    
    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Transfer':
        return cls(
            operation_type=data.get('operation_type', ''),
            path=data.get('path', ''),
            start_time=int(data.get('start_time') or 0),
            size=int(data.get('size') or 0),
            last_activity=int(data.get('last_activity') or 0),
        )


@dataclass
class ConnectionStatus:
    """
    Status of an active SFTP/SCP connection.
    
    Attributes:
        username: Connected user
        connection_id: Identifier to use with close_connection
        client_version: SSH client version string
        remote_address: Client address as ip:port
        connection_time: Login time, unix timestamp in milliseconds
        last_activity: Last activity, unix timestamp in milliseconds
        protocol: SFTP, SCP or SSH
        active_transfers: Transfers in progress
    """
    username: str
    connection_id: str
    client_version: str = ''
    remote_address: str = ''
    connection_time: int = 0
    last_activity: int = 0
    protocol: str = ''
    active_transfers: List[Transfer] = field(default_factory=list)
    
    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ConnectionStatus':
        return cls(
            username=data.get('username', ''),
            connection_id=data.get('connection_id', ''),
            client_version=data.get('client_version', ''),
            remote_address=data.get('remote_address', ''),
            connection_time=int(data.get('connection_time') or 0),
            last_activity=int(data.get('last_activity') or 0),
            protocol=data.get('protocol', ''),
            active_transfers=[
                Transfer.from_dict(t) for t in data.get('active_transfers') or []
            ],
        )


@dataclass
class VersionInfo:
    """Server build information."""
    version: str
    build_date: str = ''
    commit_hash: str = ''
    
    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'VersionInfo':
        return cls(
            version=data.get('version', ''),
            build_date=data.get('build_date', ''),
            commit_hash=data.get('commit_hash', ''),
        )
    
    def __str__(self) -> str:
        parts = [self.version]
        if self.commit_hash:
            parts.append(self.commit_hash)
        if self.build_date:
            parts.append(self.build_date)
        return '-'.join(parts)


@dataclass
class ApiResponse:
    """Generic envelope the server uses for errors and simple acks."""
    error: str = ''
    message: str = ''
    status: int = 0
    
    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ApiResponse':
        return cls(
            error=data.get('error', '') or '',
            message=data.get('message', '') or '',
            status=int(data.get('status') or 0),
        )
    
    @classmethod
    def from_body(cls, body: bytes) -> Optional['ApiResponse']:
        """Decodes the envelope from a raw body, None if it is not one."""
        if not body:
            return None
        try:
            data = json.loads(body)
        except ValueError:
            return None
        if not isinstance(data, dict):
            return None
        return cls.from_dict(data)
