import re
import unicodedata


def slugify(value: str) -> str:
    """'My First Post!' -> 'my-first-post'"""
    value = unicodedata.normalize("NFKD", value or "").encode("ascii", "ignore").decode("ascii")
    value = re.sub(r"[^a-zA-Z0-9\s-]", "", value).strip().lower()
    return re.sub(r"[\s_-]+", "-", value).strip("-")


def xml_escape(s: str) -> str:
    return (
        (s or "")
        .replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&apos;")
    )


def is_safe_next_url(url: str) -> bool:
    # relative paths only; blocks //evil.com and scheme urls
    if not url or not url.startswith("/"):
        return False
    return not url.startswith("//") and not url.startswith("/\\")
