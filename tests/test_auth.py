# tests/test_auth.py

def test_register(client):
    response = client.post('/api/auth/register', json={
        'username': 'testuser',
        'password': 'testpass',
    })
    assert response.status_code == 201
    assert response.json['message'] == 'User registered successfully'
    assert response.json['userId'] == 2  # the demo user is 1

def test_register_duplicate_username(client):
    response = client.post('/api/auth/register', json={'username': 'demo', 'password': 'x'})
    assert response.status_code == 400
    assert response.json['error'] == 'Username already exists'

def test_login(client):
    client.post('/api/auth/register', json={
        'username': 'testuser',
        'password': 'testpass',
    })

    response = client.post('/api/auth/login', json={
        'username': 'testuser',
        'password': 'testpass'
    })
    assert response.status_code == 200
    assert 'accessToken' in response.json

def test_login_wrong_password(client):
    response = client.post('/api/auth/login', json={'username': 'demo', 'password': 'nope'})
    assert response.status_code == 401
    assert response.json['error'] == 'Invalid username or password'

def test_current_user(client):
    login_response = client.post('/api/auth/login', json={
        'username': 'demo',
        'password': 'password'
    })
    token = login_response.json['accessToken']

    response = client.get('/api/auth/me', headers={'Authorization': f'Bearer {token}'})
    assert response.status_code == 200
    assert response.json == {'id': 1, 'username': 'demo'}

def test_current_user_requires_token(client):
    response = client.get('/api/auth/me')
    assert response.status_code == 401
