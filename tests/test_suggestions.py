# tests/test_suggestions.py
import pytest

from scheduling.models import Allocation
from scheduling.suggestions import distribute_evenly, suggest_days


def test_distribute_evenly_spreads_picks():
    assert distribute_evenly([1, 2, 3, 4, 5], 2) == [1, 3]
    assert distribute_evenly([1, 2, 3, 4, 5], 3) == [1, 2, 4]
    assert distribute_evenly([2, 4], 5) == [2, 4]
    assert distribute_evenly([1, 2], 0) == []


@pytest.mark.django_db
class TestSuggestDays:
    @pytest.fixture
    def ctx(self, agency, make_promoter, make_brand, make_store):
        promoter = make_promoter(agency, "Ana", availability_days=[1, 2, 3, 4, 5])
        return {
            "promoter": promoter,
            "brand": make_brand(agency, "Cola"),
            "other_brand": make_brand(agency, "Snacks"),
            "store": make_store(agency, "Mercado"),
            "other_store": make_store(agency, "Kiosk"),
        }

    def _alloc(self, promoter, brand, store, days, active=True):
        return Allocation.objects.create(
            promoter=promoter, brand=brand, store=store, days_of_week=days, frequency_per_week=len(days), active=active
        )

    def test_no_conflicts_spreads_over_availability(self, ctx):
        s = suggest_days(ctx["promoter"], ctx["brand"].id, ctx["store"].id, 2)
        assert s.suggestedDays == [1, 3]
        assert s.availableDays == [1, 2, 3, 4, 5]
        assert s.conflictingAllocations == []

    def test_prefers_days_free_at_the_same_store(self, ctx):
        self._alloc(ctx["promoter"], ctx["other_brand"], ctx["store"], [1, 3])
        s = suggest_days(ctx["promoter"], ctx["brand"].id, ctx["store"].id, 2)
        assert s.suggestedDays == [2, 4]
        assert s.conflictingAllocations == [{
            "brand_id": ctx["other_brand"].id,
            "brand_name": "Snacks",
            "store_id": ctx["store"].id,
            "store_name": "Mercado",
            "days": [1, 3],
        }]

    def test_fills_with_conflicting_days_when_needed(self, ctx):
        self._alloc(ctx["promoter"], ctx["other_brand"], ctx["store"], [1, 3])
        s = suggest_days(ctx["promoter"], ctx["brand"].id, ctx["store"].id, 4)
        assert s.suggestedDays == [1, 2, 4, 5]

    def test_never_exceeds_frequency_or_availability(self, ctx):
        s = suggest_days(ctx["promoter"], ctx["brand"].id, ctx["store"].id, 7)
        assert s.suggestedDays == [1, 2, 3, 4, 5]

    def test_ignores_same_brand_other_stores_and_inactive(self, ctx):
        self._alloc(ctx["promoter"], ctx["brand"], ctx["store"], [1, 2])
        self._alloc(ctx["promoter"], ctx["other_brand"], ctx["other_store"], [1, 2])
        self._alloc(ctx["promoter"], ctx["other_brand"], ctx["store"], [1, 2], active=False)
        s = suggest_days(ctx["promoter"], ctx["brand"].id, ctx["store"].id, 2)
        assert s.conflictingAllocations == []

    def test_default_availability_is_weekdays(self, agency, make_promoter, ctx):
        promoter = make_promoter(agency, "Bruno")
        s = suggest_days(promoter, ctx["brand"].id, ctx["store"].id, 1)
        assert s.availableDays == [1, 2, 3, 4, 5]
        assert s.suggestedDays == [1]

    def test_empty_availability_list_is_treated_as_unset(self, agency, make_promoter, ctx):
        promoter = make_promoter(agency, "Carla", availability_days=[])
        s = suggest_days(promoter, ctx["brand"].id, ctx["store"].id, 2)
        assert s.availableDays == [1, 2, 3, 4, 5]
        assert s.suggestedDays == [1, 3]
