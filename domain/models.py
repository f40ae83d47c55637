# models.py
from dataclasses import dataclass, field
from typing import Optional


# =========================
#       Content
# =========================
@dataclass(frozen=True)
class PostMetadata:
    title: str
    published_at: str
    summary: str
    image: Optional[str] = None
    draft: bool = False
    paid: bool = False
    tier: Optional[str] = None


@dataclass(frozen=True)
class ProjectMetadata:
    title: str
    published_at: str
    description: Optional[str] = None
    summary: Optional[str] = None
    image: Optional[str] = None
    link: Optional[str] = None
    url: Optional[str] = None
    repo: Optional[str] = None
    tags: tuple = field(default_factory=tuple)
    status: Optional[str] = None
    featured: bool = False
    draft: bool = False
    paid: bool = False
    tier: Optional[str] = None


@dataclass(frozen=True)
class Post:
    metadata: PostMetadata
    slug: str
    content: str
    source: str = "local"  # "local" | "remote"

    @property
    def required_tier(self) -> Optional[str]:
        return self.metadata.tier or None

    @property
    def is_paid(self) -> bool:
        return self.metadata.paid or bool(self.metadata.tier)


@dataclass(frozen=True)
class Project:
    metadata: ProjectMetadata
    slug: str
    content: str
    source: str = "local"

    @property
    def required_tier(self) -> Optional[str]:
        return self.metadata.tier or None

    @property
    def is_paid(self) -> bool:
        return self.metadata.paid or bool(self.metadata.tier)


# =========================
#     Auth: entitlement
# =========================
@dataclass(frozen=True)
class UserEntitlement:
    """Per-request view of the Patreon membership. Never stored server side."""
    pledge_amount_cents: Optional[int] = None
    is_active_patron: bool = False


ANONYMOUS = UserEntitlement()
