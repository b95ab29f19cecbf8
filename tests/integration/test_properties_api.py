"""End-to-end tests for /api/v1/properties."""

import uuid
from unittest.mock import patch

import pytest

from properlia.models import Property
from tests.utils.factories import create_property_data, multipart_property, upload_tuple

URL = '/api/v1/properties'


@pytest.mark.integration
def test_create_with_image_multipart(client, auth_headers, reference_data):
    data = create_property_data(reference_data, title='Casa X', address='Calle 1', price=500000)
    response = client.post(
        URL,
        data=multipart_property(data, images=[upload_tuple('front.jpg')]),
        headers=auth_headers,
        content_type='multipart/form-data',
    )

    assert response.status_code == 201
    body = response.get_json()
    assert body['price'] == 500000
    assert len(body['images']) == 1
    assert body['images'][0]['filename'] == 'front.jpg'
    assert body['videos'] == []
    assert body['property_type']['name'] == 'house'


@pytest.mark.integration
def test_image_url_is_fetchable_without_token(client, auth_headers, reference_data):
    data = create_property_data(reference_data)
    created = client.post(
        URL,
        data=multipart_property(data, images=[upload_tuple('front.jpg', content=b'jpeg-bytes')]),
        headers=auth_headers,
        content_type='multipart/form-data',
    ).get_json()

    url = created['images'][0]['url']
    response = client.get(url.replace('http://localhost', ''))
    assert response.status_code == 200
    assert response.data == b'jpeg-bytes'
    assert response.mimetype == 'image/jpeg'

    tampered = url.replace('http://localhost', '').replace('/front.jpg', 'x/front.jpg')
    assert client.get(tampered).status_code == 404


@pytest.mark.integration
def test_create_json(client, auth_headers, reference_data):
    response = client.post(URL, json={'property': create_property_data(reference_data)}, headers=auth_headers)
    assert response.status_code == 201
    assert Property.query.count() == 1


@pytest.mark.integration
def test_create_requires_token(client, reference_data):
    response = client.post(URL, json={'property': create_property_data(reference_data)})
    assert response.status_code == 401
    assert 'error' in response.get_json()


@pytest.mark.integration
def test_create_without_root_key(client, auth_headers):
    response = client.post(URL, json={'title': 'Casa'}, headers=auth_headers)
    assert response.status_code == 400
    assert response.get_json() == {'error': 'param is missing or the value is empty: property'}


@pytest.mark.integration
def test_create_invalid_returns_every_error(client, auth_headers, reference_data):
    data = create_property_data(reference_data, title='', price=-1)
    response = client.post(
        URL,
        data=multipart_property(data, videos=[upload_tuple('still.png', 'image/png')]),
        headers=auth_headers,
        content_type='multipart/form-data',
    )

    assert response.status_code == 422
    errors = response.get_json()['errors']
    assert "Title can't be blank" in errors
    assert 'Price must be greater than or equal to 0' in errors
    assert 'Videos still.png must be a video' in errors
    assert Property.query.count() == 0


@pytest.mark.integration
def test_email_failure_does_not_change_create_response(client, auth_headers, reference_data, app):
    app.config['RESEND_API_KEY'] = 're_test_key'
    with patch('properlia.services.email_service.requests.post', side_effect=Exception('resend down')):
        response = client.post(URL, json={'property': create_property_data(reference_data)}, headers=auth_headers)

    assert response.status_code == 201
    assert Property.query.count() == 1


@pytest.mark.integration
def test_featured_second_page(client, make_property):
    for _ in range(25):
        make_property(featured=True)
    make_property(featured=False)

    response = client.get(f'{URL}?featured=true&page=2&items=10')
    assert response.status_code == 200
    body = response.get_json()
    assert body['metadata'] == {'count': 25, 'page': 2, 'pages': 3, 'next': 3, 'prev': 1}
    assert len(body['data']) == 10


@pytest.mark.integration
def test_list_defaults_and_out_of_range(client, make_property):
    make_property()

    body = client.get(URL).get_json()
    assert body['metadata'] == {'count': 1, 'page': 1, 'pages': 1, 'next': None, 'prev': None}

    body = client.get(f'{URL}?page=99&items=5000').get_json()
    assert body['data'] == []
    assert body['metadata']['count'] == 1


@pytest.mark.integration
def test_show(client, make_property):
    prop = make_property(title='Casa X')
    response = client.get(f'{URL}/{prop.id}')
    assert response.status_code == 200
    assert response.get_json()['title'] == 'Casa X'

    assert client.get(f'{URL}/{uuid.uuid4()}').status_code == 404
    assert client.get(f'{URL}/not-a-uuid').get_json() == {'error': 'Property not found'}


@pytest.mark.integration
def test_update_price_only(client, auth_headers, reference_data):
    data = create_property_data(reference_data, title='Casa X', price=500000)
    created = client.post(
        URL,
        data=multipart_property(data, images=[upload_tuple('a.jpg')], videos=[upload_tuple('t.mp4', 'video/mp4')]),
        headers=auth_headers,
        content_type='multipart/form-data',
    ).get_json()

    response = client.put(f"{URL}/{created['id']}", json={'property': {'price': 600000}}, headers=auth_headers)
    assert response.status_code == 200
    updated = response.get_json()

    assert updated['price'] == 600000
    unchanged = {key: value for key, value in created.items() if key not in ('price', 'images', 'videos')}
    assert {key: updated[key] for key in unchanged} == unchanged
    assert [i['id'] for i in updated['images']] == [i['id'] for i in created['images']]
    assert [v['id'] for v in updated['videos']] == [v['id'] for v in created['videos']]


@pytest.mark.integration
def test_patch_appends_images(client, auth_headers, make_property):
    prop = make_property()
    response = client.patch(
        f'{URL}/{prop.id}',
        data={'property[images][]': [upload_tuple('a.jpg'), upload_tuple('b.jpg')]},
        headers=auth_headers,
        content_type='multipart/form-data',
    )
    assert response.status_code == 200
    assert [i['filename'] for i in response.get_json()['images']] == ['a.jpg', 'b.jpg']

    response = client.patch(
        f'{URL}/{prop.id}',
        data={'property[images][]': [upload_tuple('c.jpg')]},
        headers=auth_headers,
        content_type='multipart/form-data',
    )
    assert [i['filename'] for i in response.get_json()['images']] == ['a.jpg', 'b.jpg', 'c.jpg']


@pytest.mark.integration
def test_update_unknown_property(client, auth_headers):
    response = client.put(f'{URL}/{uuid.uuid4()}', json={'property': {'price': 1}}, headers=auth_headers)
    assert response.status_code == 404


@pytest.mark.integration
def test_delete_attachment_twice(client, auth_headers, reference_data):
    data = create_property_data(reference_data)
    created = client.post(
        URL,
        data=multipart_property(data, videos=[upload_tuple('tour.mp4', 'video/mp4')]),
        headers=auth_headers,
        content_type='multipart/form-data',
    ).get_json()
    video_id = created['videos'][0]['id']
    path = f"{URL}/{created['id']}/attachments/{video_id}"

    first = client.delete(path, headers=auth_headers)
    assert first.status_code == 200
    assert first.get_json() == {'message': 'Attachment deleted successfully'}

    second = client.delete(path, headers=auth_headers)
    assert second.status_code == 404
    assert client.get(f"{URL}/{created['id']}").get_json()['videos'] == []


@pytest.mark.integration
def test_list_huge_page_number(client, make_property):
    make_property()
    make_property()

    response = client.get(f'{URL}?page=1000000000000000000')
    assert response.status_code == 200
    body = response.get_json()
    assert body['data'] == []
    assert body['metadata']['count'] == 2
    assert body['metadata']['page'] == 1000000000000000000


@pytest.mark.integration
def test_create_with_values_too_large_for_columns(client, auth_headers, reference_data):
    data = create_property_data(reference_data, rooms=10 ** 20, price=10 ** 12)
    response = client.post(URL, json={'property': data}, headers=auth_headers)

    assert response.status_code == 422
    errors = response.get_json()['errors']
    assert 'Rooms is too large' in errors
    assert 'Price is too large' in errors
    assert Property.query.count() == 0
