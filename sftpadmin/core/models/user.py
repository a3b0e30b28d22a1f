"""
User models.

Mirrors the JSON representation of a user account on the management
API. Every model converts to and from the wire dict with ``to_dict``
and ``from_dict``; missing or null values fall back to defaults.
"""
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Dict, Any, Optional, List


class UserStatus(IntEnum):
    """Account status flag."""
    DISABLED = 0
    ENABLED = 1


class FsProvider(IntEnum):
    """Filesystem backend of a user."""
    LOCAL = 0
    S3 = 1
    GCS = 2


def _str_list(value: Optional[List[Any]]) -> List[str]:
    return [str(v) for v in value] if value else []


@dataclass
class ExtensionsFilter:
    """Allowed and denied file extensions for a path."""
    path: str
    allowed_extensions: List[str] = field(default_factory=list)
    denied_extensions: List[str] = field(default_factory=list)
    
    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {'path': self.path}
        if self.allowed_extensions:
            result['allowed_extensions'] = list(self.allowed_extensions)
        if self.denied_extensions:
            result['denied_extensions'] = list(self.denied_extensions)
        return result
    
    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ExtensionsFilter':
        return cls(
            path=data.get('path', ''),
            allowed_extensions=_str_list(data.get('allowed_extensions')),
            denied_extensions=_str_list(data.get('denied_extensions')),
        )


@dataclass
class UserFilters:
    """
    Additional login restrictions.
    
    Attributes:
        allowed_ip: IP/Mask allowed to login, empty means any
        denied_ip: IP/Mask refused at login
        denied_login_methods: Login methods the user cannot use
        file_extensions: Per path file extension filters
    """
    allowed_ip: List[str] = field(default_factory=list)
    denied_ip: List[str] = field(default_factory=list)
    denied_login_methods: List[str] = field(default_factory=list)
    file_extensions: List[ExtensionsFilter] = field(default_factory=list)
    
    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {}
        if self.allowed_ip:
            result['allowed_ip'] = list(self.allowed_ip)
        if self.denied_ip:
            result['denied_ip'] = list(self.denied_ip)
        if self.denied_login_methods:
            result['denied_login_methods'] = list(self.denied_login_methods)
        if self.file_extensions:
            result['file_extensions'] = [f.to_dict() for f in self.file_extensions]
        return result
    
    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'UserFilters':
        data = data or {}
        return cls(
            allowed_ip=_str_list(data.get('allowed_ip')),
            denied_ip=_str_list(data.get('denied_ip')),
            denied_login_methods=_str_list(data.get('denied_login_methods')),
            file_extensions=[
                ExtensionsFilter.from_dict(f) for f in data.get('file_extensions') or []
            ],
        )


@dataclass
class S3Config:
    """S3 compatible object storage settings."""
    bucket: str = ''
    region: str = ''
    access_key: str = ''
    access_secret: str = ''
    endpoint: str = ''
    storage_class: str = ''
    key_prefix: str = ''
    upload_part_size: int = 0
    upload_concurrency: int = 0
    
    def to_dict(self) -> Dict[str, Any]:
        # the server omits empty values, so do we
        result = {
            'bucket': self.bucket,
            'region': self.region,
            'access_key': self.access_key,
            'access_secret': self.access_secret,
            'endpoint': self.endpoint,
            'storage_class': self.storage_class,
            'key_prefix': self.key_prefix,
            'upload_part_size': self.upload_part_size,
            'upload_concurrency': self.upload_concurrency,
        }
        return {k: v for k, v in result.items() if v}
    
    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'S3Config':
        data = data or {}
        return cls(
            bucket=data.get('bucket', ''),
            region=data.get('region', ''),
            access_key=data.get('access_key', ''),
            access_secret=data.get('access_secret', ''),
            endpoint=data.get('endpoint', ''),
            storage_class=data.get('storage_class', ''),
            key_prefix=data.get('key_prefix', ''),
            upload_part_size=int(data.get('upload_part_size') or 0),
            upload_concurrency=int(data.get('upload_concurrency') or 0),
        )


@dataclass
class GCSConfig:
    """Google Cloud Storage settings."""
    bucket: str = ''
    key_prefix: str = ''
    credentials: str = ''  # base64 encoded credentials file
    automatic_credentials: int = 0
    storage_class: str = ''
    
    def to_dict(self) -> Dict[str, Any]:
        result = {
            'bucket': self.bucket,
            'key_prefix': self.key_prefix,
            'credentials': self.credentials,
            'automatic_credentials': self.automatic_credentials,
            'storage_class': self.storage_class,
        }
        return {k: v for k, v in result.items() if v}
    
    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'GCSConfig':
        data = data or {}
        return cls(
            bucket=data.get('bucket', ''),
            key_prefix=data.get('key_prefix', ''),
            credentials=data.get('credentials', ''),
            automatic_credentials=int(data.get('automatic_credentials') or 0),
            storage_class=data.get('storage_class', ''),
        )


@dataclass
class Filesystem:
    """Storage backend configuration of a user."""
    provider: FsProvider = FsProvider.LOCAL
    s3config: S3Config = field(default_factory=S3Config)
    gcsconfig: GCSConfig = field(default_factory=GCSConfig)
    
    def to_dict(self) -> Dict[str, Any]:
        return {
            'provider': int(self.provider),
            's3config': self.s3config.to_dict(),
            'gcsconfig': self.gcsconfig.to_dict(),
        }
    
    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'Filesystem':
        data = data or {}
        return cls(
            provider=FsProvider(int(data.get('provider') or 0)),
            s3config=S3Config.from_dict(data.get('s3config')),
            gcsconfig=GCSConfig.from_dict(data.get('gcsconfig')),
        )


@dataclass
class VirtualFolder:
    """A path visible to the user mapped to a different real path."""
    virtual_path: str
    mapped_path: str
    
    def to_dict(self) -> Dict[str, Any]:
        return {'virtual_path': self.virtual_path, 'mapped_path': self.mapped_path}
    
    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'VirtualFolder':
        return cls(
            virtual_path=data.get('virtual_path', ''),
            mapped_path=data.get('mapped_path', ''),
        )


@dataclass
class User:
    """
    SFTP user account.
    
    A user built by the caller normally has ``id == 0``; the server
    assigns the database id on creation.
    
    Example:
        >>> user = User(username='test', home_dir='/srv/test',
        ...             permissions={'/': ['*']})
        >>> user.to_dict()['username']
        'test'
    """
    username: str = ''
    id: int = 0
    status: int = UserStatus.ENABLED
    expiration_date: int = 0  # unix timestamp in milliseconds, 0 means no expiration
    password: str = ''
    public_keys: List[str] = field(default_factory=list)
    home_dir: str = ''
    uid: int = 0
    gid: int = 0
    max_sessions: int = 0
    quota_size: int = 0
    quota_files: int = 0
    permissions: Dict[str, List[str]] = field(default_factory=dict)
    used_quota_size: int = 0
    used_quota_files: int = 0
    last_quota_update: int = 0
    upload_bandwidth: int = 0
    download_bandwidth: int = 0
    last_login: int = 0
    filters: UserFilters = field(default_factory=UserFilters)
    filesystem: Filesystem = field(default_factory=Filesystem)
    virtual_folders: List[VirtualFolder] = field(default_factory=list)
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert to the JSON body expected by the server."""
        result: Dict[str, Any] = {
            'id': self.id,
            'status': int(self.status),
            'username': self.username,
            'expiration_date': self.expiration_date,
            'home_dir': self.home_dir,
            'uid': self.uid,
            'gid': self.gid,
            'max_sessions': self.max_sessions,
            'quota_size': self.quota_size,
            'quota_files': self.quota_files,
            'permissions': {d: list(p) for d, p in self.permissions.items()},
            'used_quota_size': self.used_quota_size,
            'used_quota_files': self.used_quota_files,
            'last_quota_update': self.last_quota_update,
            'upload_bandwidth': self.upload_bandwidth,
            'download_bandwidth': self.download_bandwidth,
            'last_login': self.last_login,
            'filters': self.filters.to_dict(),
            'filesystem': self.filesystem.to_dict(),
            'virtual_folders': [f.to_dict() for f in self.virtual_folders],
        }
        if self.password:
            result['password'] = self.password
        if self.public_keys:
            result['public_keys'] = list(self.public_keys)
        return result
    
    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'User':
        """Create from a decoded JSON object."""
        permissions = data.get('permissions') or {}
        return cls(
            id=int(data.get('id') or 0),
            status=int(data.get('status') or 0),
            username=data.get('username', ''),
            expiration_date=int(data.get('expiration_date') or 0),
            password=data.get('password') or '',
            public_keys=_str_list(data.get('public_keys')),
            home_dir=data.get('home_dir', ''),
            uid=int(data.get('uid') or 0),
            gid=int(data.get('gid') or 0),
            max_sessions=int(data.get('max_sessions') or 0),
            quota_size=int(data.get('quota_size') or 0),
            quota_files=int(data.get('quota_files') or 0),
            permissions={d: _str_list(p) for d, p in permissions.items()},
            used_quota_size=int(data.get('used_quota_size') or 0),
            used_quota_files=int(data.get('used_quota_files') or 0),
            last_quota_update=int(data.get('last_quota_update') or 0),
            upload_bandwidth=int(data.get('upload_bandwidth') or 0),
            download_bandwidth=int(data.get('download_bandwidth') or 0),
            last_login=int(data.get('last_login') or 0),
            filters=UserFilters.from_dict(data.get('filters')),
            filesystem=Filesystem.from_dict(data.get('filesystem')),
            virtual_folders=[
                VirtualFolder.from_dict(f) for f in data.get('virtual_folders') or []
            ],
        )
