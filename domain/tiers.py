"""
Patreon tier registry and the two pure access functions built on it.

The registry is built once in create_app() and handed to callers explicitly;
nothing here reads Flask state.
"""
from dataclasses import dataclass, field
from typing import Iterable, Iterator, Optional


@dataclass(frozen=True)
class Tier:
    id: str
    name: str
    minimum_pledge_cents: int
    benefits: tuple = field(default_factory=tuple)
    color: str = "gray"


class TierRegistry:
    """Tiers ordered highest minimum first. Position 0 is the top tier."""

    def __init__(self, tiers: Iterable[Tier]):
        tiers = tuple(tiers)
        seen = set()
        prev = None
        for t in tiers:
            if t.id in seen:
                raise ValueError(f"duplicate tier id: {t.id}")
            if t.minimum_pledge_cents < 0:
                raise ValueError(f"negative minimum for tier {t.id}")
            if prev is not None and t.minimum_pledge_cents >= prev.minimum_pledge_cents:
                raise ValueError(
                    f"tier {t.id} must have a lower minimum than {prev.id}"
                )
            seen.add(t.id)
            prev = t

        self._tiers = tiers
        self._positions = {t.id: i for i, t in enumerate(tiers)}

    def __iter__(self) -> Iterator[Tier]:
        return iter(self._tiers)

    def __len__(self) -> int:
        return len(self._tiers)

    def get(self, tier_id: Optional[str]) -> Optional[Tier]:
        if not tier_id:
            return None
        pos = self._positions.get(tier_id)
        return None if pos is None else self._tiers[pos]

    def position(self, tier_id: Optional[str]) -> Optional[int]:
        if not tier_id:
            return None
        return self._positions.get(tier_id)

    def lowest(self) -> Optional[Tier]:
        return self._tiers[-1] if self._tiers else None


def build_registry(rows) -> TierRegistry:
    """dict rows (config form) -> TierRegistry"""
    return TierRegistry(
        Tier(
            id=r["id"],
            name=r["name"],
            minimum_pledge_cents=int(r["minimum_pledge_cents"]),
            benefits=tuple(r.get("benefits") or ()),
            color=r.get("color") or "gray",
        )
        for r in rows
    )


def resolve_tier(registry: TierRegistry, pledge_amount_cents: Optional[int]) -> Optional[str]:
    """Highest tier whose minimum the pledge meets, or None."""
    if pledge_amount_cents is None or pledge_amount_cents <= 0:
        return None
    for tier in registry:
        if tier.minimum_pledge_cents <= pledge_amount_cents:
            return tier.id
    return None


def has_access(registry: TierRegistry, user_tier_id: Optional[str],
               required_tier_id: Optional[str]) -> bool:
    # free content
    if not required_tier_id:
        return True
    if not user_tier_id:
        return False

    user_pos = registry.position(user_tier_id)
    required_pos = registry.position(required_tier_id)
    # unknown ids fail closed
    if user_pos is None or required_pos is None:
        return False
    return user_pos <= required_pos


def format_tier_amount(amount_cents: int) -> str:
    dollars = amount_cents / 100
    if amount_cents % 100 == 0:
        return f"${int(dollars)}/month"
    return f"${dollars:.2f}/month"
