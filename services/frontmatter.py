# services/frontmatter.py
"""
Markdown-with-frontmatter -> typed Post / Project records.

    ---
    title: Hello
    publishedAt: 2024-06-03
    summary: First post
    tier: nebula-nomad
    ---
    body...

The YAML block is validated against the JSON schemas in domain/schema.py;
anything malformed raises FrontmatterError instead of producing a half-filled
record.
"""
import re

import yaml
from jsonschema import validate, ValidationError

from domain.models import Post, PostMetadata, Project, ProjectMetadata
from domain.schema import post_frontmatter_schema, project_frontmatter_schema
from utils.time_utils import parse_published_at, to_iso_string

FRONTMATTER_RE = re.compile(r"\A\ufeff?---[ \t]*\r?\n(.*?)\r?\n---[ \t]*(?:\r?\n|\Z)", re.DOTALL)


class FrontmatterError(ValueError):
    def __init__(self, source: str, message: str):
        super().__init__(f"{source}: {message}")
        self.source = source
        self.message = message


def split_frontmatter(text: str, source: str = "<string>"):
    match = FRONTMATTER_RE.match(text or "")
    if not match:
        raise FrontmatterError(source, "missing frontmatter block")

    try:
        data = yaml.safe_load(match.group(1))
    except yaml.YAMLError as e:
        raise FrontmatterError(source, f"invalid YAML: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise FrontmatterError(source, "frontmatter must be a mapping")

    data = {str(k): to_iso_string(v) for k, v in data.items()}
    body = text[match.end():].strip()
    return data, body


def _validate(data: dict, schema: dict, source: str) -> None:
    try:
        validate(instance=data, schema=schema)
    except ValidationError as e:
        field = ".".join(str(p) for p in e.absolute_path) or "frontmatter"
        raise FrontmatterError(source, f"{field}: {e.message}") from e

    try:
        parse_published_at(data["publishedAt"])
    except ValueError as e:
        raise FrontmatterError(source, f"publishedAt: not a valid date ({data['publishedAt']})") from e


def parse_post(text: str, slug: str, source: str = "local") -> Post:
    data, body = split_frontmatter(text, source=slug)
    _validate(data, post_frontmatter_schema, slug)

    meta = PostMetadata(
        title=data["title"],
        published_at=data["publishedAt"],
        summary=data["summary"],
        image=data.get("image"),
        draft=bool(data.get("draft")),
        paid=bool(data.get("paid")),
        tier=data.get("tier") or None,
    )
    return Post(metadata=meta, slug=slug, content=body, source=source)


def parse_project(text: str, slug: str, source: str = "local") -> Project:
    data, body = split_frontmatter(text, source=slug)
    _validate(data, project_frontmatter_schema, slug)

    meta = ProjectMetadata(
        title=data["title"],
        published_at=data["publishedAt"],
        description=data.get("description"),
        summary=data.get("summary"),
        image=data.get("image"),
        link=data.get("link"),
        url=data.get("url"),
        repo=data.get("repo"),
        tags=tuple(data.get("tags") or ()),
        status=data.get("status"),
        featured=bool(data.get("featured")),
        draft=bool(data.get("draft")),
        paid=bool(data.get("paid")),
        tier=data.get("tier") or None,
    )
    return Project(metadata=meta, slug=slug, content=body, source=source)
