"""Request body helpers for `{"<root>": {...}}` and `root[field]` forms"""
from flask import request

from properlia.utils.errors import ParameterMissing


def _form_fields(root):
    prefix = f'{root}['
    fields = {}
    for key in request.form:
        if key.startswith(prefix) and key.endswith(']'):
            field = key[len(prefix):-1]
            # Nested keys such as root[images][] are not plain fields
            if field and '[' not in field and ']' not in field:
                fields[field] = request.form.get(key)
    return fields


def require_params(root):
    """
    Attributes nested under root, from a JSON body or a multipart form.
    Raises ParameterMissing when root is absent or empty.
    """
    if request.is_json:
        body = request.get_json(silent=True)
        data = body.get(root) if isinstance(body, dict) else None
        if not isinstance(data, dict) or not data:
            raise ParameterMissing(root)
        return data

    data = _form_fields(root)
    has_files = any(key.startswith(f'{root}[') for key in request.files)
    if not data and not has_files:
        raise ParameterMissing(root)
    return data


def uploaded(root, field):
    """Files sent as root[field][] (or root[field])"""
    return request.files.getlist(f'{root}[{field}][]') + request.files.getlist(f'{root}[{field}]')
