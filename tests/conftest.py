# tests/conftest.py
import pytest
from eth_account import Account
from eth_account.messages import encode_defunct

from provenance import create_app, db
from provenance.config.settings import Config
from provenance.repositories.nonce_repository import NonceRepository


class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SECRET_KEY = 'test-secret-key'
    JWT_SECRET_KEY = 'test-jwt-secret-key-that-is-long-enough'
    LIGHTHOUSE_API_KEY = None


class FakeClock:
    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


class FakeContentStore:
    """Content store double: a set of known CIDs, optionally failing."""

    def __init__(self, cids=(), error=None):
        self.cids = set(cids)
        self.error = error
        self.checked = []

    def exists(self, cid):
        self.checked.append(cid)
        if self.error is not None:
            raise self.error
        return cid in self.cids


@pytest.fixture
def app(tmp_path):
    app = create_app(TestingConfig)
    app.config['UPLOAD_DIR'] = str(tmp_path / 'uploads')
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    with app.test_client() as client:
        yield client


@pytest.fixture
def clock(app):
    clock = FakeClock()
    app.extensions['nonce_repository'] = NonceRepository(app.config['NONCE_TTL_SECONDS'], clock=clock)
    return clock


@pytest.fixture
def wallet():
    return Account.create()


def sign(account, message):
    signed = Account.sign_message(encode_defunct(text=message), private_key=account.key)
    return signed.signature.hex()


@pytest.fixture
def signer():
    return sign


@pytest.fixture
def fake_store():
    return FakeContentStore
