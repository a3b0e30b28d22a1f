"""Tests for API configuration."""
from sftpadmin.core.api.config import (
    APIConfig,
    BasicAuth,
    ProxyConfig,
    SSLConfig,
    TimeoutConfig,
    DEFAULT_BASE_URL,
)


class TestAPIConfig:
    """Test suite for APIConfig."""
    
    def test_defaults(self):
        """Test default configuration."""
        config = APIConfig.default()
        
        assert config.base_url == DEFAULT_BASE_URL
        assert config.api_prefix == '/api/v1'
        assert config.timeout.total == 15.0
        assert not config.auth.enabled
    
    def test_default_request_kwargs(self):
        """Test default kwargs carry the fixed timeout and no auth."""
        kwargs = APIConfig.default().get_request_kwargs()
        
        assert kwargs == {'timeout': 15.0, 'verify': True}
    
    def test_with_credentials(self):
        """Test credentials are rendered as requests auth."""
        config = APIConfig.with_credentials('admin', 'secret')
        
        assert config.get_request_kwargs()['auth'] == ('admin', 'secret')
    
    def test_auth_with_only_password(self):
        """Test auth is sent when only the password is set."""
        assert BasicAuth(password='x').to_requests_auth() == ('', 'x')
    
    def test_insecure(self):
        """Test SSL verification disabled."""
        config = APIConfig.insecure()
        
        assert config.get_request_kwargs()['verify'] is False
    
    def test_ca_file(self):
        """Test custom CA bundle."""
        assert SSLConfig(ca_file='/etc/ca.pem').to_requests_verify() == '/etc/ca.pem'
    
    def test_connect_timeout(self):
        """Test separate connect timeout."""
        assert TimeoutConfig(connect=3.0).to_requests_timeout() == (3.0, 15.0)
    
    def test_proxy(self):
        """Test proxy with credentials."""
        proxy = ProxyConfig(url='http://proxy:3128', username='u', password='p')
        config = APIConfig(proxy=proxy)
        
        assert config.get_request_kwargs()['proxies'] == {
            'http': 'http://u:p@proxy:3128',
            'https': 'http://u:p@proxy:3128',
        }
    
    def test_headers(self):
        """Test user agent and extra headers."""
        config = APIConfig(extra_headers={'X-Test': '1'})
        headers = config.get_headers()
        
        assert headers['User-Agent'].startswith('sftpadmin/')
        assert headers['X-Test'] == '1'
    
    def test_from_env(self):
        """Test configuration from environment variables."""
        config = APIConfig.from_env({
            'SFTPADMIN_BASE_URL': 'https://sftp.example.com',
            'SFTPADMIN_USERNAME': 'admin',
            'SFTPADMIN_PASSWORD': 'pwd',
            'SFTPADMIN_VERIFY_SSL': 'false',
        })
        
        assert config.base_url == 'https://sftp.example.com'
        assert config.api_prefix == '/api/v1'
        assert config.auth.to_requests_auth() == ('admin', 'pwd')
        assert config.ssl.verify is False
    
    def test_from_env_empty(self):
        """Test defaults when no variable is set."""
        config = APIConfig.from_env({})
        
        assert config.base_url == DEFAULT_BASE_URL
        assert config.ssl.verify is True
        assert not config.auth.enabled
