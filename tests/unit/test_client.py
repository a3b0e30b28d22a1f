"""Tests for AdminClient entity operations."""
import json
from urllib.parse import urlparse, parse_qs

import pytest
import requests

from sftpadmin import (
    AdminClient,
    APIConfig,
    ConnectionStatus,
    ErrorKind,
    MismatchKind,
    QuotaScan,
    RequestTimeoutError,
    ResponseDecodeError,
    StatusCodeError,
    TransportError,
    User,
    UserMismatchError,
    VersionInfo,
)
from tests.conftest import make_response


BASE = 'http://sftp.test:8080/api/v1'


def sent(session, index=-1):
    """Returns (method, url, kwargs) of a request made on the fake session."""
    call = session.request.call_args_list[index]
    method, url = call.args
    return method, url, call.kwargs


class TestTransport:
    """Test suite for request sending."""
    
    def test_auth_and_timeout(self, client, session):
        """Test credentials and the fixed timeout are attached."""
        session.request.return_value = make_response(200, {'version': '1.0'})
        
        client.get_version()
        
        _, _, kwargs = sent(session)
        assert kwargs['auth'] == ('admin', 'password')
        assert kwargs['timeout'] == 15.0
        assert kwargs['data'] is None
        assert 'Content-Type' not in kwargs['headers']
    
    def test_no_auth(self, session):
        """Test no credentials are sent when none are configured."""
        session.request.return_value = make_response(200, {'version': '1.0'})
        client = AdminClient(APIConfig(), session=session)
        
        client.get_version()
        
        _, url, kwargs = sent(session)
        assert url == 'http://127.0.0.1:8080/api/v1/version'
        assert 'auth' not in kwargs
    
    def test_connection_error(self, client, session):
        """Test network failures raise TransportError."""
        session.request.side_effect = requests.ConnectionError('refused')
        
        with pytest.raises(TransportError) as exc_info:
            client.get_version()
        
        assert not isinstance(exc_info.value, RequestTimeoutError)
        assert isinstance(exc_info.value.__cause__, requests.ConnectionError)
        assert exc_info.value.method == 'GET'
    
    def test_timeout(self, client, session):
        """Test timeouts raise RequestTimeoutError."""
        session.request.side_effect = requests.Timeout('slow')
        
        with pytest.raises(RequestTimeoutError):
            client.get_version()
    
    def test_no_retry(self, client, session):
        """Test failed requests are not retried."""
        session.request.side_effect = requests.ConnectionError('refused')
        
        with pytest.raises(TransportError):
            client.get_users()
        
        assert session.request.call_count == 1
    
    def test_context_manager_keeps_external_session(self, config, session):
        """Test a session passed in is not closed by the client."""
        with AdminClient(config, session=session):
            pass
        
        session.close.assert_not_called()


class TestAddUser:
    """Test suite for add_user."""
    
    def test_add_user(self, client, session, sample_user, sample_user_data):
        """Test created user is decoded and checked."""
        session.request.return_value = make_response(200, sample_user_data)
        
        result = client.add_user(sample_user)
        
        assert result.status_code == 200
        assert result.data.id == 1
        method, url, kwargs = sent(session)
        assert method == 'POST'
        assert url == f'{BASE}/user'
        assert kwargs['headers']['Content-Type'] == 'application/json'
        assert json.loads(kwargs['data'])['username'] == 'test_user'
        assert json.loads(kwargs['data'])['password'] == 'test_password'
    
    def test_add_user_mismatch(self, client, session, sample_user, sample_user_data):
        """Test a server copy that differs raises UserMismatchError."""
        sample_user_data['quota_files'] = 1
        session.request.return_value = make_response(200, sample_user_data)
        
        with pytest.raises(UserMismatchError) as exc_info:
            client.add_user(sample_user)
        
        assert exc_info.value.kind == MismatchKind.FIELDS
        assert exc_info.value.actual.id == 1
    
    def test_add_user_password_returned(self, client, session, sample_user, sample_user_data):
        """Test a visible password fails the check."""
        sample_user_data['password'] = 'test_password'
        session.request.return_value = make_response(200, sample_user_data)
        
        with pytest.raises(UserMismatchError) as exc_info:
            client.add_user(sample_user)
        
        assert exc_info.value.kind == MismatchKind.SECRET
    
    def test_add_user_expected_error(self, client, session, sample_user):
        """Test expected failures return the raw body without decoding."""
        body = b'{"error":"invalid user","message":"","status":400}'
        session.request.return_value = make_response(400, body=body)
        
        result = client.add_user(sample_user, expected_status=400)
        
        assert result.status_code == 400
        assert result.data is None
        assert result.body == body
    
    def test_add_user_unexpected_status(self, client, session, sample_user):
        """Test status mismatch carries both codes and the body."""
        body = b'{"error":"username already exists","message":"","status":400}'
        session.request.return_value = make_response(400, body=body)
        
        with pytest.raises(StatusCodeError) as exc_info:
            client.add_user(sample_user)
        
        error = exc_info.value
        assert error.expected == 200
        assert error.actual == 400
        assert error.body == body
        assert error.kind == ErrorKind.VALIDATION
        assert error.api_error.error == 'username already exists'
    
    def test_add_user_invalid_json(self, client, session, sample_user):
        """Test decode failures raise ResponseDecodeError."""
        session.request.return_value = make_response(200, body=b'not json')
        
        with pytest.raises(ResponseDecodeError) as exc_info:
            client.add_user(sample_user)
        
        assert exc_info.value.body == b'not json'
        assert isinstance(exc_info.value.cause, ValueError)
    
    def test_response_closed(self, client, session, sample_user, sample_user_data):
        """Test the response is released on success and on failure."""
        ok = make_response(200, sample_user_data)
        bad = make_response(500, body=b'boom')
        session.request.side_effect = [ok, bad]
        
        client.add_user(sample_user)
        with pytest.raises(StatusCodeError):
            client.add_user(sample_user)
        
        ok.close.assert_called_once()
        bad.close.assert_called_once()


class TestUpdateUser:
    """Test suite for update_user."""
    
    def test_update_refetches(self, client, session, sample_user, sample_user_data):
        """Test the user is fetched again by id and checked."""
        sample_user.id = 1
        put_body = b'{"error":"","message":"User updated","status":200}'
        session.request.side_effect = [
            make_response(200, body=put_body),
            make_response(200, sample_user_data),
        ]
        
        result = client.update_user(sample_user)
        
        assert result.data.id == 1
        assert result.body == put_body
        assert session.request.call_count == 2
        assert sent(session, 0)[:2] == ('PUT', f'{BASE}/user/1')
        assert sent(session, 1)[:2] == ('GET', f'{BASE}/user/1')
    
    def test_update_id_changed(self, client, session, sample_user, sample_user_data):
        """Test the id must be preserved."""
        sample_user.id = 2
        session.request.side_effect = [
            make_response(200, body=b'{}'),
            make_response(200, sample_user_data),
        ]
        
        with pytest.raises(UserMismatchError) as exc_info:
            client.update_user(sample_user)
        
        assert exc_info.value.kind == MismatchKind.IDENTITY
    
    def test_update_expected_error(self, client, session, sample_user):
        """Test no re-fetch when a failure is expected."""
        sample_user.id = 1
        session.request.return_value = make_response(404, body=b'not found')
        
        result = client.update_user(sample_user, expected_status=404)
        
        assert result.body == b'not found'
        assert session.request.call_count == 1
    
    def test_update_unexpected_status(self, client, session, sample_user):
        """Test status mismatch on PUT stops before the re-fetch."""
        sample_user.id = 1
        session.request.return_value = make_response(400, body=b'bad')
        
        with pytest.raises(StatusCodeError):
            client.update_user(sample_user)
        
        assert session.request.call_count == 1


class TestUserReads:
    """Test suite for user removal and reads."""
    
    def test_remove_user(self, client, session):
        """Test DELETE and raw body."""
        session.request.return_value = make_response(200, body=b'{"message":"User deleted"}')
        
        result = client.remove_user(User(id=3))
        
        assert sent(session)[:2] == ('DELETE', f'{BASE}/user/3')
        assert result.body == b'{"message":"User deleted"}'
        assert result.data is None
    
    def test_get_user_by_id(self, client, session, sample_user_data):
        """Test decoded user."""
        session.request.return_value = make_response(200, sample_user_data)
        
        result = client.get_user_by_id(1)
        
        assert isinstance(result.data, User)
        assert result.data.permissions['/'] == ['download', 'list']
        assert result.data.virtual_folders == []
    
    def test_get_user_not_found(self, client, session):
        """Test missing user reports both codes and keeps the body."""
        body = b'{"error":"sql: no rows in result set","message":"","status":404}'
        session.request.return_value = make_response(404, body=body)
        
        with pytest.raises(StatusCodeError) as exc_info:
            client.get_user_by_id(999)
        
        error = exc_info.value
        assert '200' in str(error) and '404' in str(error)
        assert error.body == body
        assert error.kind == ErrorKind.NOT_FOUND
        assert sent(session)[1] == f'{BASE}/user/999'
    
    def test_get_users_params(self, client, session, sample_user_data):
        """Test positive limit/offset and non-empty username are sent."""
        session.request.return_value = make_response(200, [sample_user_data])
        
        result = client.get_users(limit=10, offset=5, username='test_user')
        
        url = urlparse(sent(session)[1])
        assert url.path == '/api/v1/user'
        assert parse_qs(url.query) == {'limit': ['10'], 'offset': ['5'], 'username': ['test_user']}
        assert [u.username for u in result.data] == ['test_user']
    
    def test_get_users_no_params(self, client, session):
        """Test zero and empty filters are omitted."""
        session.request.return_value = make_response(200, [])
        
        result = client.get_users(limit=0, offset=-1, username='')
        
        assert sent(session)[1] == f'{BASE}/user'
        assert result.data == []
    
    def test_get_users_not_a_list(self, client, session):
        """Test a JSON object where a list is expected."""
        session.request.return_value = make_response(200, {'id': 1})
        
        with pytest.raises(ResponseDecodeError):
            client.get_users()


class TestQuotaAndConnections:
    """Test suite for quota scans and connections."""
    
    def test_get_quota_scans(self, client, session):
        """Test decoded quota scans."""
        session.request.return_value = make_response(
            200, [{'username': 'test_user', 'start_time': 1700000000000}]
        )
        
        result = client.get_quota_scans()
        
        assert result.data == [QuotaScan('test_user', 1700000000000)]
        assert sent(session)[:2] == ('GET', f'{BASE}/quota_scan')
    
    def test_start_quota_scan(self, client, session, sample_user):
        """Test scan started with the user as body."""
        session.request.return_value = make_response(201, body=b'{"message":"Scan started"}')
        
        result = client.start_quota_scan(sample_user)
        
        method, url, kwargs = sent(session)
        assert (method, url) == ('POST', f'{BASE}/quota_scan')
        assert json.loads(kwargs['data'])['username'] == 'test_user'
        assert result.status_code == 201
    
    def test_start_quota_scan_conflict(self, client, session, sample_user):
        """Test a scan already running."""
        session.request.return_value = make_response(409, body=b'{"error":"another scan is already in progress"}')
        
        with pytest.raises(StatusCodeError) as exc_info:
            client.start_quota_scan(sample_user)
        
        assert exc_info.value.actual == 409
        assert exc_info.value.kind is None
    
    def test_get_connections(self, client, session):
        """Test decoded connections with transfers."""
        session.request.return_value = make_response(200, [{
            'username': 'test_user',
            'connection_id': 'abc',
            'client_version': 'SSH-2.0-OpenSSH_8.2',
            'remote_address': '127.0.0.1:5000',
            'connection_time': 1,
            'last_activity': 2,
            'protocol': 'SFTP',
            'active_transfers': [{'operation_type': 'upload', 'path': '/f', 'start_time': 1, 'size': 10}],
        }])
        
        result = client.get_connections()
        
        conn = result.data[0]
        assert isinstance(conn, ConnectionStatus)
        assert conn.connection_id == 'abc'
        assert conn.active_transfers[0].size == 10
    
    def test_get_connections_null(self, client, session):
        """Test null body decodes as an empty list."""
        session.request.return_value = make_response(200, body=b'null')
        
        assert client.get_connections().data == []
    
    def test_close_connection(self, client, session):
        """Test DELETE on the connection id."""
        session.request.return_value = make_response(200, body=b'{"message":"Connection closed"}')
        
        client.close_connection('abc')
        
        assert sent(session)[:2] == ('DELETE', f'{BASE}/connection/abc')
    
    def test_close_connection_not_found(self, client, session):
        """Test closing an unknown connection."""
        session.request.return_value = make_response(404, body=b'{"error":"not found"}')
        
        result = client.close_connection('missing', expected_status=404)
        
        assert result.body == b'{"error":"not found"}'


class TestServer:
    """Test suite for version, provider status, dump and load."""
    
    def test_get_version(self, client, session):
        """Test decoded version."""
        session.request.return_value = make_response(
            200, {'version': '0.9.6', 'build_date': '2020-01-01', 'commit_hash': 'abc'}
        )
        
        result = client.get_version()
        
        assert result.data == VersionInfo('0.9.6', '2020-01-01', 'abc')
        assert str(result.data) == '0.9.6-abc-2020-01-01'
    
    def test_get_provider_status(self, client, session):
        """Test provider status decoded as a dict."""
        session.request.return_value = make_response(200, {'error': '', 'message': 'Alive', 'status': 200})
        
        result = client.get_provider_status()
        
        assert result.data['message'] == 'Alive'
        assert sent(session)[1] == f'{BASE}/status'
    
    def test_get_provider_status_failing(self, client, session):
        """Test an expected 500 is still decoded."""
        session.request.return_value = make_response(500, {'error': 'db down', 'status': 500})
        
        result = client.get_provider_status(expected_status=500)
        
        assert result.data['error'] == 'db down'
    
    def test_dump_data(self, client, session):
        """Test output file always sent, indent only when set."""
        session.request.return_value = make_response(200, {'message': 'Data saved'})
        
        client.dump_data('backup.json')
        client.dump_data('backup.json', indent='1')
        
        first = urlparse(sent(session, 0)[1])
        second = urlparse(sent(session, 1)[1])
        assert first.path == '/api/v1/dumpdata'
        assert parse_qs(first.query) == {'output_file': ['backup.json']}
        assert parse_qs(second.query) == {'output_file': ['backup.json'], 'indent': ['1']}
    
    def test_load_data(self, client, session):
        """Test optional load parameters."""
        session.request.return_value = make_response(200, {'message': 'Data restored'})
        
        result = client.load_data('backup.json', scan_quota='1', mode='')
        
        url = urlparse(sent(session)[1])
        assert url.path == '/api/v1/loaddata'
        assert parse_qs(url.query) == {'input_file': ['backup.json'], 'scan_quota': ['1']}
        assert result.data['message'] == 'Data restored'
    
    def test_load_data_error(self, client, session):
        """Test expected failure keeps the body."""
        session.request.return_value = make_response(400, body=b'{"error":"invalid input_file"}')
        
        result = client.load_data('../etc/passwd', expected_status=400)
        
        assert result.data is None
        assert b'invalid input_file' in result.body
