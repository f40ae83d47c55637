# guards.py
"""
Content gate: decides how much of a tier-gated item the current visitor sees.

    FULL                         free item, or the visitor's tier is high enough
    PREVIEW_WITH_UPGRADE_PROMPT  truncated body + call to action
        prompt=UPGRADE           visitor holds a tier, just not a high enough one
        prompt=SUBSCRIBE         visitor holds no tier at all

Unknown tier ids never raise; they end up in PREVIEW (fail closed).
"""
import enum
from dataclasses import dataclass
from typing import Optional

from flask import current_app

from auth.entitlements import get_current_entitlement
from domain.models import UserEntitlement
from domain.tiers import Tier, TierRegistry, has_access, resolve_tier


class PresentationMode(enum.Enum):
    FULL = "full"
    PREVIEW_WITH_UPGRADE_PROMPT = "preview"


class PromptKind(enum.Enum):
    SUBSCRIBE = "subscribe"
    UPGRADE = "upgrade"


@dataclass(frozen=True)
class GateDecision:
    mode: PresentationMode
    prompt: Optional[PromptKind] = None
    user_tier: Optional[Tier] = None
    required_tier: Optional[Tier] = None

    @property
    def is_full(self) -> bool:
        return self.mode is PresentationMode.FULL


def entitled_tier_id(registry: TierRegistry, entitlement: UserEntitlement) -> Optional[str]:
    # lapsed / declined patrons hold no tier whatever the pledge says
    if not entitlement.is_active_patron:
        return None
    return resolve_tier(registry, entitlement.pledge_amount_cents)


def decide_presentation(registry: TierRegistry, required_tier_id: Optional[str],
                        entitlement: UserEntitlement) -> GateDecision:
    user_tier_id = entitled_tier_id(registry, entitlement)
    user_tier = registry.get(user_tier_id)
    required_tier = registry.get(required_tier_id)

    if not required_tier_id or has_access(registry, user_tier_id, required_tier_id):
        return GateDecision(PresentationMode.FULL, None, user_tier, required_tier)

    prompt = PromptKind.UPGRADE if user_tier is not None else PromptKind.SUBSCRIBE
    return GateDecision(PresentationMode.PREVIEW_WITH_UPGRADE_PROMPT, prompt, user_tier, required_tier)


def make_preview(text: str, max_chars: int) -> str:
    """
    Leading paragraphs of a markdown body, up to max_chars.

    The preview is never the whole body: the last paragraph is always held
    back, and a lone paragraph is cut to half (or max_chars) on a word boundary.
    """
    paras = [p.strip() for p in (text or "").strip().split("\n\n") if p.strip()]
    if not paras:
        return ""

    out = []
    used = 0
    for para in paras[:-1]:
        extra = len(para) + (2 if out else 0)
        if used + extra > max_chars:
            break
        out.append(para)
        used += extra

    if out:
        return "\n\n".join(out)

    first = paras[0]
    # one char reserved for the ellipsis
    window = first[:max(min(max_chars, len(first) // 2) - 1, 1)]
    cut = window.rsplit(" ", 1)[0].rstrip()
    return f"{cut or window}…"


# -------------------- request-bound helpers --------------------
def current_registry() -> TierRegistry:
    return current_app.extensions["tier_registry"]


def resolve_current_tier() -> Optional[Tier]:
    registry = current_registry()
    return registry.get(entitled_tier_id(registry, get_current_entitlement()))


def gate_for(item) -> GateDecision:
    return decide_presentation(current_registry(), item.required_tier, get_current_entitlement())
