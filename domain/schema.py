DATE_RE = r"^\d{4}-\d{2}-\d{2}([T ]\d{2}:\d{2}(:\d{2}(\.\d+)?)?(Z|[+-]\d{2}:?\d{2})?)?$"
PROJECT_STATUS_ALLOW = ["active", "archived", "planning"]

_optional_str = {"type": ["string", "null"], "maxLength": 2000}
_optional_bool = {"type": ["boolean", "null"]}
# unknown or oddly cased ids parse fine and fail closed at the gate
_tier_id = {"type": ["string", "null"], "maxLength": 64}

# -------------------- frontmatter --------------------
post_frontmatter_schema = {
    "type": "object",
    "properties": {
        "title": {"type": "string", "minLength": 1, "maxLength": 300},
        "publishedAt": {"type": "string", "pattern": DATE_RE},
        "summary": {"type": "string", "minLength": 1, "maxLength": 2000},
        "image": _optional_str,
        "draft": _optional_bool,
        "paid": _optional_bool,
        "tier": _tier_id,
    },
    "required": ["title", "publishedAt", "summary"],
    "additionalProperties": True,
}

project_frontmatter_schema = {
    "type": "object",
    "properties": {
        "title": {"type": "string", "minLength": 1, "maxLength": 300},
        "publishedAt": {"type": "string", "pattern": DATE_RE},
        "description": _optional_str,
        "summary": _optional_str,
        "image": _optional_str,
        "link": _optional_str,
        "url": _optional_str,
        "repo": _optional_str,
        "tags": {"type": ["array", "null"], "items": {"type": "string"}},
        "status": {"enum": PROJECT_STATUS_ALLOW + [None]},
        "featured": _optional_bool,
        "draft": _optional_bool,
        "paid": _optional_bool,
        "tier": _tier_id,
    },
    "required": ["title", "publishedAt"],
    "additionalProperties": True,
}

# projects.json entries in the remote content repo
remote_project_schema = {
    "type": "object",
    "properties": {
        "name": {"type": "string", "minLength": 1, "maxLength": 300},
        "description": {"type": "string"},
        "publishedAt": {"type": "string", "pattern": DATE_RE},
        "url": _optional_str,
        "repo": _optional_str,
        "image": _optional_str,
        "tags": {"type": ["array", "null"], "items": {"type": "string"}},
        "status": {"enum": PROJECT_STATUS_ALLOW + [None]},
        "featured": _optional_bool,
        "tier": _tier_id,
    },
    "required": ["name", "description"],
    "additionalProperties": True,
}

# -------------------- query args --------------------
search_query_schema = {
    "type": "object",
    "properties": {
        "q": {"type": "string", "maxLength": 200},
    },
    "additionalProperties": True,
}

auth_error_query_schema = {
    "type": "object",
    "properties": {
        "error": {"type": "string", "maxLength": 64},
    },
    "additionalProperties": True,
}
