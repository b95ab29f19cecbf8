"""Shared pytest fixtures and configuration."""

import pytest

from config import TestingConfig
from properlia import create_app, db
from properlia.models import User
from properlia.services import catalog
from properlia.utils.auth import issue_token
from properlia.utils.db_init import seed_reference_data
from tests.utils.factories import create_property_data, create_user_data


@pytest.fixture
def app(tmp_path):
    """App with a fresh in-memory database and upload folder per test."""
    app = create_app(TestingConfig)
    app.config['UPLOAD_FOLDER'] = str(tmp_path / 'uploads')

    # A request context lets url_for build absolute attachment URLs outside requests
    with app.test_request_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def reference_data(app):
    """Seeded lookups, keyed by English name."""
    from properlia.models import PropertyType, Status, ListingType

    seed_reference_data()
    return {
        'property_type': PropertyType.query.filter_by(name='house').one(),
        'other_property_type': PropertyType.query.filter_by(name='land').one(),
        'status': Status.query.filter_by(name='sell').one(),
        'other_status': Status.query.filter_by(name='rent').one(),
        'listing_type': ListingType.query.filter_by(name='sale').one(),
    }


@pytest.fixture
def make_property(app, reference_data):
    """Create a property through the catalog service."""
    def _make(images=None, videos=None, **overrides):
        data = create_property_data(reference_data, **overrides)
        return catalog.create_property(data, images, videos)
    return _make


@pytest.fixture
def user(app):
    data = create_user_data()
    user = User(email=data['email'], name=data['name'])
    user.set_password(data['password'])
    db.session.add(user)
    db.session.commit()
    user.plain_password = data['password']
    return user


@pytest.fixture
def auth_headers(user):
    return {'Authorization': f'Bearer {issue_token(user)}'}
