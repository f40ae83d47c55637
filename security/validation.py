"""
Query-string validation for GET pages (search box, auth error page).
"""
from functools import wraps

from flask import request, abort, g
from jsonschema import validate, ValidationError


def _validate_schema(data, schema):
    if not schema:
        return
    try:
        validate(instance=data, schema=schema)
    except ValidationError as e:
        abort(400, description=f"invalid query: {e.message}")


def _safe_args(schema=None):
    args = {}
    for k, v in request.args.items():
        v = v.strip()
        if v:
            args[k] = v
    _validate_schema(args, schema)
    return args


def require_safe_args(json_schema=None):
    """Validated query args land on g.safe_args."""
    def deco(f):
        @wraps(f)
        def wrapped(*args, **kwargs):
            g.safe_args = _safe_args(json_schema)
            return f(*args, **kwargs)
        return wrapped
    return deco
