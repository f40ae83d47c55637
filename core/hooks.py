from flask import request, abort, current_app

from auth.entitlements import load_current_user


def load_user():
    load_current_user()


def guard_payload_size():
    # nothing on this site takes a body beyond the logout form
    if request.content_length and request.content_length > 16 * 1024:
        abort(413)


def log_client_errors(resp):
    if 400 <= resp.status_code < 500 and resp.status_code != 404:
        current_app.logger.info(
            "[%s] %s %s args=%s",
            resp.status_code, request.method, request.path, request.args.to_dict(),
        )
    return resp


def register_hooks(app):
    app.before_request(load_user)
    app.before_request(guard_payload_size)
    app.after_request(log_client_errors)
