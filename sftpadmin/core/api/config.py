"""
API configuration module.

Provides the configuration for the management API client. A config is
built once and handed to a client; it is never changed while requests
are in flight.
"""
import os
from dataclasses import dataclass, field
from typing import Optional, Dict, Any, Mapping, Tuple, Union


DEFAULT_BASE_URL = 'http://127.0.0.1:8080'
DEFAULT_API_PREFIX = '/api/v1'
DEFAULT_TIMEOUT = 15.0


@dataclass
class BasicAuth:
    """HTTP basic auth credentials."""
    username: str = ''
    password: str = ''
    
    @property
    def enabled(self) -> bool:
        """Credentials are only sent when one of them is set."""
        return bool(self.username or self.password)
    
    def to_requests_auth(self) -> Optional[Tuple[str, str]]:
        """Convert to requests auth tuple."""
        if not self.enabled:
            return None
        return (self.username, self.password)


@dataclass
class ProxyConfig:
    """
    Proxy configuration.
    
    Supports HTTP and HTTPS proxies.
    """
    url: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None
    
    def to_requests_proxies(self) -> Optional[Dict[str, str]]:
        """Convert to requests proxies mapping."""
        if not self.url:
            return None
        
        url = self.url
        if self.username and self.password and '://' in url:
            protocol, rest = url.split('://', 1)
            url = f"{protocol}://{self.username}:{self.password}@{rest}"
        
        return {'http': url, 'https': url}


@dataclass
class SSLConfig:
    """
    SSL/TLS configuration.
    
    Allows customization of SSL behavior for security requirements.
    """
    verify: bool = True
    ca_file: Optional[str] = None
    
    def to_requests_verify(self) -> Union[bool, str]:
        """Convert to the requests ``verify`` argument."""
        if not self.verify:
            return False
        return self.ca_file or True


@dataclass
class TimeoutConfig:
    """
    Timeout configuration.
    
    ``total`` bounds the whole call, body download included. It also
    bounds each socket read. ``connect`` optionally bounds the
    connection phase separately.
    """
    total: float = DEFAULT_TIMEOUT
    connect: Optional[float] = None
    
    def to_requests_timeout(self) -> Union[float, Tuple[float, float]]:
        """Convert to the requests ``timeout`` argument."""
        if self.connect is None:
            return self.total
        return (self.connect, self.total)


@dataclass
class APIConfig:
    """
    Complete API configuration.
    
    Centralizes the base URL, credentials and transport options for one
    client instance.
    """
    base_url: str = DEFAULT_BASE_URL
    api_prefix: str = DEFAULT_API_PREFIX
    
    auth: BasicAuth = field(default_factory=BasicAuth)
    
    user_agent: str = 'sftpadmin/1.0.0'
    
    # Sub-configurations
    proxy: Optional[ProxyConfig] = None
    ssl: SSLConfig = field(default_factory=SSLConfig)
    timeout: TimeoutConfig = field(default_factory=TimeoutConfig)
    
    extra_headers: Dict[str, str] = field(default_factory=dict)
    
    # Logging, None leaves the package loggers as they are
    log_level: Optional[int] = None
    
    @classmethod
    def default(cls) -> 'APIConfig':
        """Create default configuration."""
        return cls()
    
    @classmethod
    def with_credentials(cls, username: str, password: str, **kwargs) -> 'APIConfig':
        """Create configuration with basic auth credentials."""
        return cls(auth=BasicAuth(username, password), **kwargs)
    
    @classmethod
    def insecure(cls, **kwargs) -> 'APIConfig':
        """Create configuration with SSL verification disabled."""
        return cls(ssl=SSLConfig(verify=False), **kwargs)
    
    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'APIConfig':
        """
        Create configuration from ``SFTPADMIN_*`` environment variables.
        
        Args:
            environ: Mapping to read instead of ``os.environ``
        """
        env = os.environ if environ is None else environ
        verify = env.get('SFTPADMIN_VERIFY_SSL', '1').lower() not in ('0', 'false', 'no')
        return cls(
            base_url=env.get('SFTPADMIN_BASE_URL', DEFAULT_BASE_URL),
            api_prefix=env.get('SFTPADMIN_API_PREFIX', DEFAULT_API_PREFIX),
            auth=BasicAuth(
                env.get('SFTPADMIN_USERNAME', ''),
                env.get('SFTPADMIN_PASSWORD', '')
            ),
            ssl=SSLConfig(verify=verify),
        )
    
    def get_headers(self) -> Dict[str, str]:
        """Headers sent with every request."""
        return {
            'User-Agent': self.user_agent,
            **self.extra_headers
        }
    
    def get_request_kwargs(self) -> Dict[str, Any]:
        """Get kwargs for ``requests.Session.request``."""
        kwargs: Dict[str, Any] = {
            'timeout': self.timeout.to_requests_timeout(),
            'verify': self.ssl.to_requests_verify(),
        }
        auth = self.auth.to_requests_auth()
        if auth:
            kwargs['auth'] = auth
        if self.proxy:
            proxies = self.proxy.to_requests_proxies()
            if proxies:
                kwargs['proxies'] = proxies
        return kwargs
