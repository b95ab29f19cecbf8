"""Tests for database bootstrap."""

import pytest
from sqlalchemy import event

from properlia import db
from properlia.models import ListingType, PropertyType, Status
from properlia.utils.db_init import initialize_database, seed_reference_data


@pytest.mark.unit
def test_seed_is_idempotent(app):
    first = seed_reference_data()
    second = seed_reference_data()

    assert first == {'property_types': 5, 'statuses': 2, 'listing_types': 2}
    assert second == {'property_types': 0, 'statuses': 0, 'listing_types': 0}
    assert PropertyType.query.filter_by(name='retail space').one().es_name == 'local comercial'
    assert Status.query.count() == 2
    assert ListingType.query.filter_by(name='sale').one().es_name == 'venta'


@pytest.mark.unit
def test_initialize_database(app):
    assert initialize_database() is True
    assert PropertyType.query.count() == 5


@pytest.mark.unit
def test_init_db_command(app):
    result = app.test_cli_runner().invoke(args=['init-db'])
    assert 'Database initialized' in result.output


@pytest.mark.unit
def test_initialize_database_runs_no_extension_ddl(app):
    statements = []

    def record(conn, cursor, statement, *args):
        statements.append(statement)

    event.listen(db.engine, 'before_cursor_execute', record)
    try:
        assert initialize_database() is True
    finally:
        event.remove(db.engine, 'before_cursor_execute', record)

    assert statements
    assert not any('EXTENSION' in s.upper() for s in statements)
    assert Status.query.count() == 2
