# scheduling/suggestions.py
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import List

from django.conf import settings

from .models import Allocation, Promoter


def _default_days() -> list[int]:
    conf = getattr(settings, "FIELDPLAN", {}) or {}
    return list(conf.get("DEFAULT_AVAILABILITY_DAYS", [1, 2, 3, 4, 5]))


@dataclass
class Suggestion:
    suggestedDays: List[int] = field(default_factory=list)
    availableDays: List[int] = field(default_factory=list)
    conflictingAllocations: List[dict] = field(default_factory=list)

    def as_dict(self) -> dict:
        return asdict(self)


def distribute_evenly(days: list[int], count: int) -> list[int]:
    """
    Pick `count` entries spread across `days` (index floor(i * n / count)).
    Returns all of `days` when count >= n.
    """
    if count >= len(days):
        return list(days)
    if count <= 0:
        return []
    step = len(days) / count
    picked = {days[int(i * step)] for i in range(count)}
    return sorted(picked)


def suggest_days(promoter: Promoter, brand_id: int, store_id: int, frequency: int) -> Suggestion:
    """
    Advisory weekday suggestion for a promoter's schedule of one brand at one store.

    Days already used by the promoter's other active allocations at the same
    store (other brands) are the conflicts; free available days are preferred,
    then conflicting available days, then any available day.

    An empty `availability_days` is the unset value (the field defaults to
    []), so it falls back to FIELDPLAN["DEFAULT_AVAILABILITY_DAYS"]
    rather than meaning "never available".
    """
    available = list(promoter.availability_days or []) or _default_days()

    conflicts_qs = (
        Allocation.objects.active().filter(promoter=promoter, store_id=store_id)
        .exclude(brand_id=brand_id)
        .select_related("brand", "store")
        .order_by("id")
    )
    conflicts = [
        {
            "brand_id": a.brand_id,
            "brand_name": a.brand.name,
            "store_id": a.store_id,
            "store_name": a.store.chain_name,
            "days": list(a.days_of_week or []),
        }
        for a in conflicts_qs
    ]
    busy = {d for c in conflicts for d in c["days"]}

    free = [d for d in available if d not in busy]
    contested = [d for d in available if d in busy]

    if len(free) >= frequency:
        picked = distribute_evenly(free, frequency)
    else:
        picked = list(free)
        remaining = frequency - len(free)
        if remaining > 0 and contested:
            picked.extend(distribute_evenly(contested, remaining))

    if len(picked) < frequency:
        needed = frequency - len(picked)
        picked.extend([d for d in available if d not in picked][:needed])

    picked.sort()
    return Suggestion(
        suggestedDays=picked[:frequency],
        availableDays=available,
        conflictingAllocations=conflicts,
    )
