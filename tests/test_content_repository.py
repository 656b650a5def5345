# tests/test_content_repository.py
import pytest
import requests

from provenance.repositories import content_repository
from provenance.repositories.content_repository import LighthouseRepository
from provenance.utils.exceptions import UpstreamError


class FakeResponse:
    def __init__(self, payload, status_code=200):
        self._payload = payload
        self.status_code = status_code
        self.text = str(payload)

    @property
    def ok(self):
        return self.status_code < 400

    def json(self):
        return self._payload


@pytest.fixture
def repo():
    return LighthouseRepository('key', 'https://api.example', 'https://node.example/', timeout=5)


class Calls(list):
    pass


@pytest.fixture
def lighthouse(monkeypatch):
    calls = Calls()
    calls.responses = []

    def fake_request(method, url, **kwargs):
        calls.append((method, url, kwargs))
        response = calls.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    monkeypatch.setattr(content_repository.requests, 'request', fake_request)
    return calls


def test_upload_uses_bearer_token(repo, lighthouse, tmp_path):
    path = tmp_path / 'data.csv'
    path.write_bytes(b'a,b\n1,2\n')
    lighthouse.responses.append(FakeResponse({'Name': 'data.csv', 'Hash': 'bafy123', 'Size': '8'}))

    result = repo.upload(str(path))

    assert result == {'cid': 'bafy123', 'name': 'data.csv', 'size': 8}
    method, url, kwargs = lighthouse[0]
    assert (method, url) == ('POST', 'https://node.example/api/v0/add')
    assert kwargs['headers'] == {'Authorization': 'Bearer key'}
    assert kwargs['timeout'] == 5

def test_exists_pages_through_uploads(repo, lighthouse):
    lighthouse.responses.extend([
        FakeResponse({'fileList': [{'id': 'k1', 'cid': 'a'}], 'totalFiles': 2}),
        FakeResponse({'fileList': [{'id': 'k2', 'cid': 'b'}], 'totalFiles': 2}),
    ])

    assert repo.exists('b') is True
    assert lighthouse[1][2]['params'] == {'lastKey': 'k1'}

def test_exists_false_when_not_listed(repo, lighthouse):
    lighthouse.responses.extend([
        FakeResponse({'fileList': [{'id': 'k1', 'cid': 'a'}], 'totalFiles': 1}),
        FakeResponse({'fileList': [], 'totalFiles': 1}),
    ])
    assert repo.exists('zzz') is False

def test_http_error_raises_upstream_error(repo, lighthouse):
    lighthouse.responses.append(FakeResponse({'error': 'bad key'}, status_code=401))
    with pytest.raises(UpstreamError) as excinfo:
        repo.exists('a')
    assert 'HTTP 401' in str(excinfo.value)

def test_connection_error_raises_upstream_error(repo, lighthouse):
    lighthouse.responses.append(requests.ConnectionError('refused'))
    with pytest.raises(UpstreamError) as excinfo:
        repo.list_uploads()
    assert 'refused' in str(excinfo.value)

def test_deal_status_wraps_list(repo, lighthouse):
    lighthouse.responses.append(FakeResponse([{'dealId': 1, 'status': 'Active'}]))
    assert repo.deal_status('bafy') == {'dealStatus': [{'dealId': 1, 'status': 'Active'}]}
    assert lighthouse[0][2]['params'] == {'cid': 'bafy'}
