"""Pytest fixtures for sftpadmin tests."""
import json
from unittest.mock import Mock

import pytest
import requests

from sftpadmin import AdminClient, APIConfig, User


def make_response(status_code, payload=None, body=None):
    """Builds a requests.Response with a preloaded body."""
    response = requests.Response()
    response.status_code = status_code
    if payload is not None:
        body = json.dumps(payload).encode()
    response._content = body if body is not None else b''
    response._content_consumed = True
    response.close = Mock()
    return response


@pytest.fixture
def session():
    """Fake requests session; set request.return_value or side_effect."""
    return Mock(spec=requests.Session)


@pytest.fixture
def config():
    """Client configuration with credentials."""
    return APIConfig.with_credentials('admin', 'password', base_url='http://sftp.test:8080/')


@pytest.fixture
def client(config, session):
    """AdminClient wired to the fake session."""
    return AdminClient(config, session=session)


@pytest.fixture
def sample_user():
    """A user as built by a caller, before the server assigns an id."""
    return User(
        username='test_user',
        password='test_password',
        home_dir='/srv/sftp/test_user',
        uid=1000,
        gid=1000,
        max_sessions=2,
        quota_size=1024 * 1024,
        quota_files=100,
        permissions={'/': ['list', 'download'], '/sub': ['*']},
        upload_bandwidth=100,
        download_bandwidth=200,
    )


@pytest.fixture
def sample_user_data():
    """The same user as returned by the server."""
    return {
        'id': 1,
        'status': 1,
        'username': 'test_user',
        'expiration_date': 0,
        'home_dir': '/srv/sftp/test_user',
        'uid': 1000,
        'gid': 1000,
        'max_sessions': 2,
        'quota_size': 1024 * 1024,
        'quota_files': 100,
        'permissions': {'/': ['download', 'list'], '/sub': ['*']},
        'used_quota_size': 0,
        'used_quota_files': 0,
        'last_quota_update': 0,
        'upload_bandwidth': 100,
        'download_bandwidth': 200,
        'last_login': 0,
        'filters': {},
        'filesystem': {'provider': 0, 's3config': {}, 'gcsconfig': {}},
        'virtual_folders': None,
    }
