"""End-to-end tests for /api/v1/general_info and /health."""

import pytest

from properlia.models import GeneralInfo

URL = '/api/v1/general_info'


@pytest.mark.integration
def test_health(client):
    response = client.get('/health')
    assert response.status_code == 200
    assert response.get_json() == {'status': 'ok'}


@pytest.mark.integration
def test_requires_token(client):
    assert client.get(URL).status_code == 401
    assert client.put(URL, json={'general_info': {'phone': '1'}}).status_code == 401


@pytest.mark.integration
def test_get_creates_singleton(client, auth_headers, app):
    response = client.get(URL, headers=auth_headers)
    assert response.status_code == 200
    assert response.get_json() == {
        'phone': app.config['DEFAULT_CONTACT_PHONE'],
        'whatsapp': app.config['DEFAULT_CONTACT_WHATSAPP'],
        'email_to': app.config['DEFAULT_CONTACT_EMAIL'],
    }
    client.get(URL, headers=auth_headers)
    assert GeneralInfo.query.count() == 1


@pytest.mark.integration
def test_update(client, auth_headers):
    response = client.put(URL, json={'general_info': {'whatsapp': '2229876543'}}, headers=auth_headers)
    assert response.status_code == 200
    assert response.get_json()['whatsapp'] == '2229876543'

    response = client.put(URL, json={'general_info': {'email_to': 'bad'}}, headers=auth_headers)
    assert response.status_code == 422
    assert response.get_json() == {'errors': ['Email to is invalid']}

    assert client.put(URL, json={}, headers=auth_headers).status_code == 400


@pytest.mark.integration
def test_unknown_route_is_json(client):
    response = client.get('/api/v1/nothing-here')
    assert response.status_code == 404
    assert 'error' in response.get_json()
