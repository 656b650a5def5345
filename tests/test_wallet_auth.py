# tests/test_wallet_auth.py
from provenance.repositories.nonce_repository import NonceRepository
from provenance.services.wallet_auth_service import AuthFailure, WalletAuthService

TTL = 600


def _service(clock):
    return WalletAuthService(NonceRepository(TTL, clock=clock))


def _login_message(nonce):
    return f"Sign this message to authenticate with Cactus: {nonce}"


def test_signed_nonce_authenticates(wallet, signer):
    service = _service(lambda: 0)
    nonce = service.issue_nonce(wallet.address)
    message = _login_message(nonce)

    result = service.verify(wallet.address, signer(wallet, message), message)

    assert result.authenticated
    assert result.address == wallet.address.lower()
    assert result.failure is None

def test_nonce_is_64_hex_chars(wallet):
    nonce = _service(lambda: 0).issue_nonce(wallet.address)
    assert len(nonce) == 64
    int(nonce, 16)

def test_message_without_nonce_is_invalid_even_if_signed(wallet, signer):
    service = _service(lambda: 0)
    service.issue_nonce(wallet.address)
    message = "Sign this message to authenticate with Cactus: not-the-nonce"

    result = service.verify(wallet.address, signer(wallet, message), message)

    assert not result.authenticated
    assert result.failure is AuthFailure.INVALID_NONCE

def test_unknown_address_has_no_nonce(wallet, signer):
    service = _service(lambda: 0)
    message = _login_message("whatever")

    result = service.verify(wallet.address, signer(wallet, message), message)

    assert result.failure is AuthFailure.MISSING_NONCE

def test_expired_nonce_is_missing(wallet, signer):
    from conftest import FakeClock
    clock = FakeClock()
    service = _service(clock)
    nonce = service.issue_nonce(wallet.address)
    message = _login_message(nonce)

    clock.advance(TTL)
    result = service.verify(wallet.address, signer(wallet, message), message)

    assert result.failure is AuthFailure.MISSING_NONCE

def test_nonce_still_valid_just_before_expiry(wallet, signer):
    from conftest import FakeClock
    clock = FakeClock()
    service = _service(clock)
    nonce = service.issue_nonce(wallet.address)
    message = _login_message(nonce)

    clock.advance(TTL - 1)
    assert service.verify(wallet.address, signer(wallet, message), message).authenticated

def test_nonce_is_single_use(wallet, signer):
    service = _service(lambda: 0)
    nonce = service.issue_nonce(wallet.address)
    message = _login_message(nonce)
    signature = signer(wallet, message)

    assert service.verify(wallet.address, signature, message).authenticated
    second = service.verify(wallet.address, signature, message)
    assert second.failure is AuthFailure.MISSING_NONCE

def test_signature_from_other_wallet_is_mismatch(wallet, signer):
    from eth_account import Account
    intruder = Account.create()
    service = _service(lambda: 0)
    nonce = service.issue_nonce(wallet.address)
    message = _login_message(nonce)

    result = service.verify(wallet.address, signer(intruder, message), message)

    assert result.failure is AuthFailure.SIGNATURE_MISMATCH

def test_failed_attempt_keeps_nonce_for_retry(wallet, signer):
    from eth_account import Account
    service = _service(lambda: 0)
    nonce = service.issue_nonce(wallet.address)
    message = _login_message(nonce)

    assert not service.verify(wallet.address, signer(Account.create(), message), message).authenticated
    assert service.verify(wallet.address, signer(wallet, message), message).authenticated

def test_garbage_signature_is_invalid(wallet):
    service = _service(lambda: 0)
    nonce = service.issue_nonce(wallet.address)

    result = service.verify(wallet.address, '0x1234', _login_message(nonce))

    assert result.failure is AuthFailure.INVALID_SIGNATURE

def test_new_nonce_replaces_previous(wallet, signer):
    service = _service(lambda: 0)
    first = service.issue_nonce(wallet.address)
    second = service.issue_nonce(wallet.address)
    message = _login_message(first)

    result = service.verify(wallet.address, signer(wallet, message), message)

    assert first != second
    assert result.failure is AuthFailure.INVALID_NONCE

def test_address_is_case_insensitive(wallet, signer):
    service = _service(lambda: 0)
    nonce = service.issue_nonce(wallet.address)
    message = _login_message(nonce)

    result = service.verify(wallet.address.lower(), signer(wallet, message), message)

    assert result.authenticated

def test_bare_hex_address_authenticates(wallet, signer):
    service = _service(lambda: 0)
    bare = wallet.address[2:].lower()
    nonce = service.issue_nonce(bare)
    message = _login_message(nonce)

    result = service.verify(bare, signer(wallet, message), message)

    assert result.authenticated
    assert result.address == wallet.address.lower()

def test_upper_case_address_authenticates(wallet, signer):
    service = _service(lambda: 0)
    upper = '0x' + wallet.address[2:].upper()
    nonce = service.issue_nonce(upper)
    message = _login_message(nonce)

    result = service.verify(wallet.address, signer(wallet, message), message)

    assert result.authenticated
    assert result.address == wallet.address.lower()

def test_session_helpers():
    session = {}
    assert WalletAuthService.session_status(session) == {'authenticated': False}

    WalletAuthService.establish_session(session, type('R', (), {'address': '0xabc'})())
    assert WalletAuthService.session_status(session) == {'authenticated': True, 'address': '0xabc'}

    WalletAuthService.clear_session(session)
    assert WalletAuthService.session_status(session) == {'authenticated': False}


# HTTP flow

def test_nonce_requires_address(client):
    response = client.get('/api/auth/nonce')
    assert response.status_code == 400
    assert response.json['error'] == 'Address is required'

def test_nonce_rejects_malformed_address(client):
    response = client.get('/api/auth/nonce?address=not-an-address')
    assert response.status_code == 400

def test_wallet_login_flow(client, wallet, signer):
    nonce = client.get(f'/api/auth/nonce?address={wallet.address}').json['nonce']
    message = _login_message(nonce)

    response = client.post('/api/auth/verify', json={
        'address': wallet.address,
        'signature': signer(wallet, message),
        'message': message,
    })
    assert response.status_code == 200
    assert response.json == {'authenticated': True, 'address': wallet.address.lower()}

    status = client.get('/api/auth/status')
    assert status.json == {'authenticated': True, 'address': wallet.address.lower()}

    assert client.post('/api/auth/logout').json == {'success': True}
    assert client.get('/api/auth/status').json == {'authenticated': False}

def test_status_without_login(client):
    assert client.get('/api/auth/status').json == {'authenticated': False}

def test_verify_errors_map_to_status_codes(client, wallet, signer):
    message = _login_message('nothing-issued')
    payload = {'address': wallet.address, 'signature': signer(wallet, message), 'message': message}
    assert client.post('/api/auth/verify', json=payload).status_code == 404

    client.get(f'/api/auth/nonce?address={wallet.address}')
    response = client.post('/api/auth/verify', json=payload)
    assert response.status_code == 401
    assert response.json['error'] == 'Invalid nonce in message'
    assert client.get('/api/auth/status').json == {'authenticated': False}

def test_verify_requires_fields(client, wallet):
    response = client.post('/api/auth/verify', json={'address': wallet.address})
    assert response.status_code == 400

def test_expired_nonce_over_http(client, clock, wallet, signer):
    nonce = client.get(f'/api/auth/nonce?address={wallet.address}').json['nonce']
    message = _login_message(nonce)
    clock.advance(10 * 60)

    response = client.post('/api/auth/verify', json={
        'address': wallet.address,
        'signature': signer(wallet, message),
        'message': message,
    })
    assert response.status_code == 404
    assert response.json['error'] == 'No nonce found for this address or nonce expired'
