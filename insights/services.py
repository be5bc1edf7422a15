# insights/services.py
from __future__ import annotations

import logging
from collections import Counter
from dataclasses import asdict, dataclass, field
from typing import Dict, List, Optional, Set

from django.db import DatabaseError

from scheduling.models import Allocation, Brand, BrandStore, Promoter
from visits.models import Visit

from .periods import ReportPeriod, count_weekday_occurrences, round_half_up, round_one_decimal
from .relations import RelationSnapshot, Triple, load_relations

log = logging.getLogger(__name__)


# ============================================================
# Result types
# ============================================================

@dataclass
class PlannedVisitsReport:
    planned: int = 0
    executed: int = 0
    completion_rate: float = 0.0
    period_days: int = 0
    unprogrammed_allocations: int = 0
    by_promoter: List[dict] = field(default_factory=list)
    by_brand: List[dict] = field(default_factory=list)

    def as_dict(self) -> dict:
        return asdict(self)


@dataclass
class ReportResult:
    """
    ok=False means the report could not be computed (read failure); `report`
    is then all zeros and `error` carries the reason. An agency with nothing
    to plan gives ok=True and a zero report.
    """
    ok: bool
    report: PlannedVisitsReport
    error: Optional[str] = None


@dataclass
class PlannedTotals:
    # float accumulators; rounded once in format_report
    total: float = 0.0
    by_promoter: Dict[int, float] = field(default_factory=dict)
    by_brand: Dict[int, float] = field(default_factory=dict)


@dataclass
class ExecutionTally:
    total: int = 0
    by_promoter: Counter = field(default_factory=Counter)
    by_brand: Counter = field(default_factory=Counter)
    covered: Set[Triple] = field(default_factory=set)


# ============================================================
# Planned-visit aggregation
# ============================================================

def effective_weekly_frequency(promoter: Promoter, brand: Brand, pair_frequency: Optional[int]) -> int:
    """
    Weekly visits for one promoter/brand/store without an explicit schedule:
    promoter per-brand override, else the brand-store override, else the brand default.
    """
    override = promoter.frequency_override_for(brand.id)
    if override:
        return override
    if pair_frequency:
        return pair_frequency
    return brand.visit_frequency or 0


def planned_for_triple(
    snap: RelationSnapshot, promoter: Promoter, brand_id: int, store_id: int, period: ReportPeriod
) -> float:
    alloc = snap.allocations.get((promoter.id, brand_id, store_id))
    if alloc is not None and alloc.days_of_week:
        return float(count_weekday_occurrences(alloc.days_of_week, period.start_date, period.end_date))
    freq = effective_weekly_frequency(promoter, snap.brands[brand_id], snap.pair_frequency(brand_id, store_id))
    return freq * period.weeks


def aggregate_planned(snap: RelationSnapshot, period: ReportPeriod) -> PlannedTotals:
    totals = PlannedTotals()
    for promoter in snap.promoters:
        promoter_total = 0.0
        for brand_id, store_id in snap.valid_pairs(promoter.id):
            planned = planned_for_triple(snap, promoter, brand_id, store_id, period)
            promoter_total += planned
            totals.by_brand[brand_id] = totals.by_brand.get(brand_id, 0.0) + planned
        totals.by_promoter[promoter.id] = promoter_total
        totals.total += promoter_total
    return totals


# ============================================================
# Execution matching / coverage
# ============================================================

def match_executed(snap: RelationSnapshot, period: ReportPeriod) -> ExecutionTally:
    tally = ExecutionTally()
    if not snap.promoters:
        return tally
    rows = Visit.objects.filter(
        promoter_id__in=snap.promoter_ids,
        timestamp__gte=period.start,
        timestamp__lte=period.end,
    ).values_list("promoter_id", "brand_id", "store_id")
    for pid, bid, sid in rows:
        tally.total += 1
        tally.by_promoter[pid] += 1
        tally.by_brand[bid] += 1
        tally.covered.add((pid, bid, sid))
    return tally


def count_unprogrammed(snap: RelationSnapshot, period: ReportPeriod, covered: Set[Triple]) -> int:
    """
    Active allocations expecting at least one visit in the period whose
    triple has no recorded visit at all. One visit is enough to cover it.
    """
    n = 0
    for alloc in snap.allocation_rows:
        expected = count_weekday_occurrences(alloc.days_of_week or [], period.start_date, period.end_date)
        if expected > 0 and alloc.triple not in covered:
            n += 1
    return n


def completion_rate(executed: int, planned: int) -> float:
    if planned <= 0:
        return 0.0
    return round_one_decimal(executed / planned * 100)


# ============================================================
# Report assembly
# ============================================================

def format_report(
    snap: RelationSnapshot,
    period: ReportPeriod,
    planned: PlannedTotals,
    executed: ExecutionTally,
    unprogrammed: int,
) -> PlannedVisitsReport:
    planned_total = round_half_up(planned.total)
    return PlannedVisitsReport(
        planned=planned_total,
        executed=executed.total,
        completion_rate=completion_rate(executed.total, planned_total),
        period_days=period.period_days,
        unprogrammed_allocations=unprogrammed,
        by_promoter=[
            {
                "promoter_id": p.id,
                "promoter_name": p.name,
                "planned": round_half_up(planned.by_promoter.get(p.id, 0.0)),
                "executed": executed.by_promoter.get(p.id, 0),
            }
            for p in snap.promoters
        ],
        by_brand=[
            {
                "brand_id": b.id,
                "brand_name": b.name,
                "planned": round_half_up(planned.by_brand.get(b.id, 0.0)),
                "executed": executed.by_brand.get(b.id, 0),
            }
            for b in snap.brands.values()
        ],
    )


def calculate_planned_visits(agency, period: ReportPeriod) -> ReportResult:
    """
    Planned-vs-executed visits for `agency` over `period`.

    Never raises for data problems: a database error is logged and returned
    as ReportResult(ok=False) with a zero report.
    """
    try:
        snap = load_relations(agency)
        planned = aggregate_planned(snap, period)
        executed = match_executed(snap, period)
        unprogrammed = count_unprogrammed(snap, period, executed.covered)
    except DatabaseError as e:
        log.exception("planned_visits_failed agency=%s start=%s end=%s", getattr(agency, "pk", agency),
                      period.start_date, period.end_date)
        return ReportResult(ok=False, report=PlannedVisitsReport(period_days=period.period_days), error=str(e))

    report = format_report(snap, period, planned, executed, unprogrammed)
    log.info(
        "planned_visits agency=%s days=%s planned=%s executed=%s unprogrammed=%s",
        getattr(agency, "pk", agency), report.period_days, report.planned, report.executed,
        report.unprogrammed_allocations,
    )
    return ReportResult(ok=True, report=report)


# ============================================================
# Brands that need visits but have no schedule
# ============================================================

def brands_without_allocations(agency) -> List[dict]:
    """
    Agency brands carried by at least one store, needing visits (brand or
    some pair frequency > 0), with no active allocation on any of their
    brand-store pairs.
    """
    brands = list(Brand.objects.for_agency(agency).order_by("name", "id"))
    if not brands:
        return []
    brand_ids = [b.id for b in brands]

    links: Dict[int, List[BrandStore]] = {}
    for link in (
        BrandStore.objects.filter(brand_id__in=brand_ids, store__agency=agency)
        .select_related("store")
        .order_by("store__chain_name", "store_id")
    ):
        links.setdefault(link.brand_id, []).append(link)

    allocated = set(
        Allocation.objects.active().filter(brand_id__in=brand_ids).values_list("brand_id", "store_id")
    )

    out = []
    for brand in brands:
        brand_links = links.get(brand.id, [])
        if not brand_links:
            continue
        if any((brand.id, link.store_id) in allocated for link in brand_links):
            continue
        needs_visits = (brand.visit_frequency or 0) > 0 or any((l.visit_frequency or 0) > 0 for l in brand_links)
        if not needs_visits:
            continue
        out.append({
            "brand_id": brand.id,
            "brand_name": brand.name,
            "visit_frequency": brand.visit_frequency,
            "stores_count": len(brand_links),
            "stores": [
                {
                    "store_id": l.store_id,
                    "store_name": l.store.chain_name,
                    "visit_frequency": l.visit_frequency,
                }
                for l in brand_links
            ],
        })
    return out
