"""Tests for pagination metadata and page slicing."""

import math

import pytest
from werkzeug.datastructures import MultiDict

from properlia.services import catalog
from properlia.utils.pagination import build_metadata, page_params


@pytest.mark.unit
def test_metadata_middle_page():
    assert build_metadata(25, 2, 10) == {'count': 25, 'page': 2, 'pages': 3, 'next': 3, 'prev': 1}


@pytest.mark.unit
def test_metadata_first_and_last_page():
    assert build_metadata(25, 1, 10)['prev'] is None
    assert build_metadata(25, 3, 10)['next'] is None


@pytest.mark.unit
def test_metadata_empty_collection():
    assert build_metadata(0, 1, 20) == {'count': 0, 'page': 1, 'pages': 0, 'next': None, 'prev': None}


@pytest.mark.unit
def test_metadata_past_the_end():
    meta = build_metadata(5, 9, 10)
    assert meta['pages'] == 1
    assert meta['next'] is None
    assert meta['prev'] == 8


@pytest.mark.unit
@pytest.mark.parametrize("args, expected", [
    ({}, (1, 20)),
    ({'page': '3', 'items': '5'}, (3, 5)),
    ({'page': '0', 'items': '1000'}, (1, 100)),
    ({'page': '-4', 'items': '-1'}, (1, 1)),
    ({'page': 'abc', 'items': 'xyz'}, (1, 20)),
])
def test_page_params_clamps(app, args, expected):
    assert page_params(MultiDict(args)) == expected


@pytest.mark.unit
@pytest.mark.parametrize("items", [1, 3, 7, 20])
def test_pages_cover_every_row_once(make_property, items):
    for _ in range(7):
        make_property()

    seen = []
    _, meta = catalog.list_properties({}, 1, items)
    assert meta['pages'] == math.ceil(meta['count'] / items)
    for page in range(1, meta['pages'] + 1):
        rows, _ = catalog.list_properties({}, page, items)
        seen.extend(row.id for row in rows)

    assert len(seen) == meta['count'] == 7
    assert len(set(seen)) == 7


@pytest.mark.unit
def test_page_beyond_last_is_empty(make_property):
    make_property()
    rows, meta = catalog.list_properties({}, 5, 20)
    assert rows == []
    assert meta['count'] == 1


@pytest.mark.unit
def test_huge_page_is_empty_without_querying_offset(make_property):
    make_property()
    rows, meta = catalog.list_properties({}, 10 ** 18, 20)
    assert rows == []
    assert meta['count'] == 1
    assert meta['pages'] == 1
    assert meta['next'] is None
