"""End-to-end tests for sign up, sign in and sign out."""

import pytest

from tests.utils.factories import create_user_data


@pytest.mark.integration
def test_sign_up_then_sign_in(client):
    data = create_user_data()
    response = client.post('/users', json={'user': data})
    assert response.status_code == 201
    assert response.get_json()['email'] == data['email']
    assert 'password_hash' not in response.get_json()

    response = client.post('/users/sign_in', json={'user': {'email': data['email'], 'password': data['password']}})
    assert response.status_code == 200
    assert response.headers['Authorization'].startswith('Bearer ')

    current = client.get('/users/current', headers={'Authorization': response.headers['Authorization']})
    assert current.status_code == 200
    assert current.get_json()['email'] == data['email']


@pytest.mark.integration
def test_sign_up_errors(client, user):
    response = client.post('/users', json={'user': {'email': user.email, 'password': '123',
                                                    'password_confirmation': '456'}})
    assert response.status_code == 422
    assert response.get_json()['errors'] == [
        'Email has already been taken',
        'Password is too short (minimum is 6 characters)',
        "Password confirmation doesn't match Password",
    ]


@pytest.mark.integration
def test_sign_in_wrong_password(client, user):
    response = client.post('/users/sign_in', json={'user': {'email': user.email, 'password': 'wrong-password'}})
    assert response.status_code == 401
    assert response.get_json() == {'error': 'Invalid email or password'}
    assert 'Authorization' not in response.headers


@pytest.mark.integration
def test_sign_out_revokes_token(client, auth_headers):
    assert client.get('/users/current', headers=auth_headers).status_code == 200

    response = client.delete('/users/sign_out', headers=auth_headers)
    assert response.status_code == 200

    assert client.get('/users/current', headers=auth_headers).status_code == 401


@pytest.mark.integration
def test_current_requires_token(client):
    assert client.get('/users/current').status_code == 401


@pytest.mark.integration
def test_sign_up_ignores_requested_role(client):
    data = create_user_data(role='superuser')
    response = client.post('/users', json={'user': data})
    assert response.status_code == 201
    assert response.get_json()['role'] == 'admin'
