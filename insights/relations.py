# insights/relations.py
from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Set, Tuple

from scheduling.models import Allocation, Brand, BrandStore, Promoter, PromoterBrand, PromoterStore

Triple = Tuple[int, int, int]  # (promoter_id, brand_id, store_id)


@dataclass
class RelationSnapshot:
    """
    Everything the planning engine needs for one agency, read once and
    indexed by id. Built by `load_relations`; never written back.
    """
    promoters: List[Promoter] = field(default_factory=list)
    brands: Dict[int, Brand] = field(default_factory=dict)
    brands_by_promoter: Dict[int, Set[int]] = field(default_factory=dict)
    stores_by_promoter: Dict[int, Set[int]] = field(default_factory=dict)
    # brand_id -> {store_id: per-pair weekly frequency override or None}
    stores_by_brand: Dict[int, Dict[int, Optional[int]]] = field(default_factory=dict)
    # active allocations of the resolved promoters, as read and keyed by triple
    allocation_rows: List[Allocation] = field(default_factory=list)
    allocations: Dict[Triple, Allocation] = field(default_factory=dict)

    @property
    def promoter_ids(self) -> List[int]:
        return [p.id for p in self.promoters]

    def valid_pairs(self, promoter_id: int) -> Iterator[Tuple[int, int]]:
        """
        (brand_id, store_id) pairs the promoter can be planned for: the brand is
        an agency brand the promoter is authorized for, the store carries the
        brand and the promoter is authorized for the store.
        """
        authorized_stores = self.stores_by_promoter.get(promoter_id, set())
        for brand_id in sorted(self.brands_by_promoter.get(promoter_id, ())):
            if brand_id not in self.brands:
                continue
            for store_id in sorted(self.stores_by_brand.get(brand_id, {})):
                if store_id in authorized_stores:
                    yield brand_id, store_id

    def pair_frequency(self, brand_id: int, store_id: int) -> Optional[int]:
        return self.stores_by_brand.get(brand_id, {}).get(store_id)


def load_relations(agency) -> RelationSnapshot:
    """
    One query per relation, executed sequentially:
    promoters, brands, promoter↔brand, promoter↔store, brand↔store, allocations.
    """
    snap = RelationSnapshot()

    snap.promoters = list(
        Promoter.objects.filter(active=True, user__membership__agency=agency).order_by("name", "id")
    )
    snap.brands = {b.id: b for b in Brand.objects.for_agency(agency).order_by("name", "id")}
    if not snap.promoters and not snap.brands:
        return snap

    promoter_ids = snap.promoter_ids

    by_promoter: Dict[int, Set[int]] = defaultdict(set)
    for pid, bid in PromoterBrand.objects.filter(promoter_id__in=promoter_ids).values_list("promoter_id", "brand_id"):
        by_promoter[pid].add(bid)
    snap.brands_by_promoter = dict(by_promoter)

    by_promoter = defaultdict(set)
    for pid, sid in PromoterStore.objects.filter(promoter_id__in=promoter_ids).values_list("promoter_id", "store_id"):
        by_promoter[pid].add(sid)
    snap.stores_by_promoter = dict(by_promoter)

    by_brand: Dict[int, Dict[int, Optional[int]]] = defaultdict(dict)
    pairs = BrandStore.objects.filter(brand_id__in=list(snap.brands), store__agency=agency).values_list(
        "brand_id", "store_id", "visit_frequency"
    )
    for bid, sid, freq in pairs:
        by_brand[bid][sid] = freq
    snap.stores_by_brand = dict(by_brand)

    snap.allocation_rows = list(
        Allocation.objects.active().filter(promoter_id__in=promoter_ids).order_by("id")
    )
    for a in snap.allocation_rows:
        # at most one row per triple is expected; the oldest wins if not
        snap.allocations.setdefault(a.triple, a)

    return snap
