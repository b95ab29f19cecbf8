"""Offset pagination shared by every list endpoint"""
import math

from flask import current_app, request


def page_params(args=None):
    """
    Read ?page= and ?items= from the query string.
    Bad or out-of-range values are clamped, never rejected.
    """
    args = request.args if args is None else args
    default_items = current_app.config.get('ITEMS_PER_PAGE', 20)
    max_items = current_app.config.get('MAX_ITEMS_PER_PAGE', 100)

    page = args.get('page', 1, type=int) or 1
    items = args.get('items', default_items, type=int) or default_items

    page = max(page, 1)
    items = max(1, min(items, max_items))
    return page, items


def build_metadata(count, page, items):
    pages = math.ceil(count / items) if items else 0
    return {
        'count': count,
        'page': page,
        'pages': pages,
        'next': page + 1 if page < pages else None,
        'prev': page - 1 if page > 1 else None
    }


def paginate(query, page, items):
    """Return (rows, metadata) for one page of an ordered query"""
    count = query.order_by(None).count()
    metadata = build_metadata(count, page, items)
    # Past the last page there is nothing to fetch, and a huge offset can overflow the driver
    if page > max(metadata['pages'], 1):
        return [], metadata
    rows = query.offset((page - 1) * items).limit(items).all()
    return rows, metadata
