from flask import Blueprint, render_template, request, redirect, session, g

from core.http_utils import nocache
from domain.schema import auth_error_query_schema
from security.validation import require_safe_args
from utils.text import is_safe_next_url

auth_bp = Blueprint("auth", __name__, url_prefix="/auth")

ERROR_MESSAGES = {
    "Configuration": "There is a problem with the server configuration.",
    "AccessDenied": "You do not have permission to sign in.",
    "Verification": "The verification token has expired or has already been used.",
}
DEFAULT_ERROR_MESSAGE = "An error occurred during authentication."


def error_message(code: str) -> str:
    return ERROR_MESSAGES.get(code or "", DEFAULT_ERROR_MESSAGE)


@auth_bp.get("/signin")
@nocache
def signin():
    next_url = request.args.get("next") or "/"
    if not is_safe_next_url(next_url):
        next_url = "/"
    return render_template("auth/signin.html", next_url=next_url)


@auth_bp.get("/error")
@nocache
@require_safe_args(auth_error_query_schema)
def error():
    code = g.safe_args.get("error", "")
    return render_template("auth/error.html", error=code, message=error_message(code))


@auth_bp.post("/logout")
def logout():
    session.pop("user", None)
    return redirect("/")
