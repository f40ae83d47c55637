from functools import wraps

from flask import make_response, jsonify

# auth pages and session-dependent JSON must never be served from a shared cache
NO_CACHE_HEADERS = {
    "Cache-Control": "no-store, no-cache, must-revalidate, max-age=0",
    "Pragma": "no-cache",
    "Expires": "0",
}


def _no_cache(resp):
    resp.headers.update(NO_CACHE_HEADERS)
    return resp


def nocache(view):
    @wraps(view)
    def _wrapped(*args, **kwargs):
        return _no_cache(make_response(view(*args, **kwargs)))

    return _wrapped


def _json_ok(payload=None, status=200):
    body = {"ok": True}
    body.update(payload or {})
    return _no_cache(make_response(jsonify(body), status))


def _json_err(code, message=None, status=400):
    body = {"ok": False, "error": code}
    if message:
        body["message"] = message
    return _no_cache(make_response(jsonify(body), status))
