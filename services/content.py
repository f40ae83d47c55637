# services/content.py
"""
Where posts and projects come from.

    ContentSource           get_posts() / get_projects()
      LocalContentSource    markdown files on disk
      GitHubContentSource   markdown files + projects.json in the content repo
      FallbackContentSource remote when it has anything, local otherwise

ContentRepository sits on top: sorting, draft filtering, lookup and search.
Routes only ever talk to the repository.
"""
import json
import logging
import os
from abc import ABC, abstractmethod

from jsonschema import validate, ValidationError

from domain.models import Project, ProjectMetadata
from domain.schema import remote_project_schema
from services.frontmatter import FrontmatterError, parse_post, parse_project
from services.github import GitHubAPIError, RemoteContentConfigError
from utils.text import slugify
from utils.time_utils import parse_published_at, to_iso_string

log = logging.getLogger(__name__)

MARKDOWN_EXTS = (".md", ".mdx")
PROJECTS_JSON_PATHS = ("projects.json", "projects/projects.json")


class ContentSource(ABC):
    @abstractmethod
    def get_posts(self) -> list:
        ...

    @abstractmethod
    def get_projects(self) -> list:
        ...


# -------------------- local --------------------
class LocalContentSource(ContentSource):

    def __init__(self, posts_dir: str, projects_dir: str):
        self.posts_dir = posts_dir
        self.projects_dir = projects_dir

    def _read_dir(self, directory, parse):
        if not directory or not os.path.isdir(directory):
            log.warning("content directory does not exist: %s", directory)
            return []

        items = []
        for name in sorted(os.listdir(directory)):
            stem, ext = os.path.splitext(name)
            if ext.lower() not in MARKDOWN_EXTS:
                continue
            path = os.path.join(directory, name)
            with open(path, "r", encoding="utf-8") as f:
                raw = f.read()
            try:
                items.append(parse(raw, slugify(stem), source="local"))
            except FrontmatterError as e:
                log.error("skipping %s: %s", path, e)
        return items

    def get_posts(self) -> list:
        return self._read_dir(self.posts_dir, parse_post)

    def get_projects(self) -> list:
        return self._read_dir(self.projects_dir, parse_project)


# -------------------- remote --------------------
def project_from_json(entry: dict) -> Project:
    validate(instance=entry, schema=remote_project_schema)
    name = entry["name"]
    published_at = to_iso_string(entry.get("publishedAt")) or "1970-01-01"
    try:
        parse_published_at(published_at)
    except ValueError:
        raise ValidationError(f"publishedAt: not a valid date ({published_at})")
    meta = ProjectMetadata(
        title=name,
        published_at=published_at,
        description=entry.get("description"),
        summary=entry.get("description"),
        image=entry.get("image"),
        link=entry.get("url") or entry.get("repo"),
        url=entry.get("url"),
        repo=entry.get("repo"),
        tags=tuple(entry.get("tags") or ()),
        status=entry.get("status"),
        featured=bool(entry.get("featured")),
        tier=entry.get("tier") or None,
    )
    return Project(metadata=meta, slug=slugify(name), content=entry.get("description") or "", source="remote")


class GitHubContentSource(ContentSource):
    """
    `client_factory` returns a GitHubClient, or raises RemoteContentConfigError
    when the content repo is not configured. Failures degrade to [].
    """

    def __init__(self, client_factory, cache):
        self.client_factory = client_factory
        self.cache = cache

    def get_posts(self) -> list:
        cached = self.cache.get("remote-posts")
        if cached is not None:
            return cached

        try:
            client = self.client_factory()
            files = client.list_directory()
        except RemoteContentConfigError:
            log.warning("remote content repository not configured")
            return []
        except GitHubAPIError as e:
            log.error("GitHub API error listing posts: %s", e)
            return []

        md_files = [
            f for f in files
            if f.get("type") == "file" and os.path.splitext(f.get("name", ""))[1].lower() in MARKDOWN_EXTS
        ]
        if not md_files:
            log.warning("no markdown files found in content repository")
            return []

        posts = []
        for f in md_files:
            name = f["name"]
            try:
                raw = client.fetch_file(f.get("path") or f"{client.config.path}/{name}")
                posts.append(parse_post(raw, slugify(os.path.splitext(name)[0]), source="remote"))
            except (GitHubAPIError, FrontmatterError) as e:
                log.error("failed to process remote post %s: %s", name, e)

        log.info("loaded %d remote post(s)", len(posts))
        self.cache.set("remote-posts", posts)
        return posts

    def get_projects(self) -> list:
        cached = self.cache.get("remote-projects")
        if cached is not None:
            return cached

        try:
            client = self.client_factory()
        except RemoteContentConfigError:
            log.warning("remote content repository not configured for projects")
            return []

        for path in PROJECTS_JSON_PATHS:
            try:
                entries = json.loads(client.fetch_file(path))
            except GitHubAPIError as e:
                log.debug("projects not found at %s: %s", path, e)
                continue
            except ValueError as e:
                log.error("invalid JSON in %s: %s", path, e)
                continue

            if not isinstance(entries, list):
                log.warning("%s is not an array", path)
                return []

            projects = []
            for entry in entries:
                try:
                    projects.append(project_from_json(entry))
                except ValidationError as e:
                    log.error("skipping project entry in %s: %s", path, e.message)

            log.info("loaded %d remote project(s)", len(projects))
            self.cache.set("remote-projects", projects)
            return projects

        log.warning("no projects.json found in content repository")
        return []


# -------------------- policy --------------------
class FallbackContentSource(ContentSource):
    """Per collection: primary's result if non-empty, else fallback's. No merging."""

    def __init__(self, primary: ContentSource, fallback: ContentSource):
        self.primary = primary
        self.fallback = fallback

    def get_posts(self) -> list:
        posts = self.primary.get_posts()
        if posts:
            return posts
        log.info("no remote posts, falling back to local posts")
        return self.fallback.get_posts()

    def get_projects(self) -> list:
        projects = self.primary.get_projects()
        if projects:
            return projects
        return self.fallback.get_projects()


# -------------------- repository --------------------
def _sort_newest_first(items):
    return sorted(items, key=lambda i: parse_published_at(i.metadata.published_at), reverse=True)


def _matches(query: str, *fields) -> bool:
    haystack = " ".join(f or "" for f in fields).lower()
    return query.lower() in haystack


class ContentRepository:

    def __init__(self, source: ContentSource, filter_drafts: bool = True):
        self.source = source
        self.filter_drafts = filter_drafts

    def _visible(self, items):
        if self.filter_drafts:
            items = [i for i in items if not i.metadata.draft]
        return _sort_newest_first(items)

    def get_posts(self) -> list:
        return self._visible(self.source.get_posts())

    def get_projects(self) -> list:
        return self._visible(self.source.get_projects())

    def get_post(self, slug: str):
        return next((p for p in self.get_posts() if p.slug == slug), None)

    def get_project(self, slug: str):
        return next((p for p in self.get_projects() if p.slug == slug), None)

    def search_posts(self, query: str = "") -> list:
        posts = self.get_posts()
        query = (query or "").strip()
        if not query:
            return posts
        return [p for p in posts if _matches(query, p.metadata.title, p.metadata.summary, p.content)]

    def search_projects(self, query: str = "") -> list:
        projects = self.get_projects()
        query = (query or "").strip()
        if not query:
            return projects
        return [
            p for p in projects
            if _matches(query, p.metadata.title, p.metadata.description, p.metadata.summary,
                        " ".join(p.metadata.tags), p.content)
        ]

    def featured_projects(self) -> list:
        return [p for p in self.get_projects() if p.metadata.featured]
