# tests/test_allocations.py
import pytest
from django.core.exceptions import ValidationError
from django.http import Http404

from scheduling import services
from scheduling.models import Allocation, BrandStore, PromoterBrand, PromoterStore

pytestmark = pytest.mark.django_db


@pytest.fixture
def setup(agency, make_promoter, make_brand, make_store, link):
    promoter = make_promoter(agency, "Ana")
    brand = make_brand(agency, "Cola")
    store = make_store(agency, "Mercado")
    link(promoter, brand, store)
    return promoter, brand, store


def _payload(promoter, brand, store, **extra):
    data = {"promoter_id": promoter.id, "brand_id": brand.id, "store_id": store.id, "days_of_week": [5, 1, 3]}
    data.update(extra)
    return data


def _messages(exc_info) -> str:
    return " ".join(exc_info.value.messages)


# -----------------------
# Create
# -----------------------
def test_create_sorts_days_and_defaults_frequency(agency, setup):
    alloc = services.create_allocation(agency, _payload(*setup))
    alloc.refresh_from_db()
    assert alloc.days_of_week == [1, 3, 5]
    assert alloc.frequency_per_week == 3
    assert alloc.active is True


def test_second_allocation_for_same_triple_is_rejected(agency, setup):
    services.create_allocation(agency, _payload(*setup))
    with pytest.raises(ValidationError) as ei:
        services.create_allocation(agency, _payload(*setup, days_of_week=[2]))
    assert "already exists" in _messages(ei)
    assert Allocation.objects.count() == 1


@pytest.mark.parametrize(
    "days, expected",
    [
        ([], "At least one day must be selected"),
        ([1, 7], "Days must be between 0 (Sunday) and 6 (Saturday)"),
        ([-1], "Days must be between 0 (Sunday) and 6 (Saturday)"),
        ("1,2", "At least one day must be selected"),
    ],
)
def test_invalid_days_are_rejected(agency, setup, days, expected):
    with pytest.raises(ValidationError) as ei:
        services.create_allocation(agency, _payload(*setup, days_of_week=days))
    assert expected in _messages(ei)
    assert not Allocation.objects.exists()


def test_frequency_must_match_day_count(agency, setup):
    with pytest.raises(ValidationError) as ei:
        services.create_allocation(agency, _payload(*setup, frequency_per_week=2))
    assert "Frequency per week (2) must match number of selected days (3)" in _messages(ei)


def test_missing_fields(agency):
    with pytest.raises(ValidationError) as ei:
        services.create_allocation(agency, {"days_of_week": [1]})
    assert set(ei.value.message_dict) == {"promoter_id", "brand_id", "store_id"}


@pytest.mark.parametrize(
    "revoke, expected",
    [
        (lambda p, b, s: PromoterBrand.objects.filter(promoter=p, brand=b).delete(), "not authorized for this brand"),
        (lambda p, b, s: PromoterStore.objects.filter(promoter=p, store=s).delete(), "not authorized for this store"),
        (lambda p, b, s: BrandStore.objects.filter(brand=b, store=s).delete(), "not present in this store"),
    ],
)
def test_authorization_and_presence_are_required(agency, setup, revoke, expected):
    revoke(*setup)
    with pytest.raises(ValidationError) as ei:
        services.create_allocation(agency, _payload(*setup))
    assert expected in _messages(ei)


def test_entities_of_another_agency_are_not_found(agency, other_agency, setup, make_brand):
    promoter, _, store = setup
    foreign_brand = make_brand(other_agency, "Foreign")
    with pytest.raises(Http404):
        services.create_allocation(agency, _payload(promoter, foreign_brand, store))


# -----------------------
# Update / delete / read
# -----------------------
def test_update_days_rederives_frequency(agency, setup):
    alloc = services.create_allocation(agency, _payload(*setup))
    services.update_allocation(agency, alloc.id, {"days_of_week": [6, 0]})
    alloc.refresh_from_db()
    assert alloc.days_of_week == [0, 6]
    assert alloc.frequency_per_week == 2


def test_update_frequency_checks_existing_days(agency, setup):
    alloc = services.create_allocation(agency, _payload(*setup))
    with pytest.raises(ValidationError):
        services.update_allocation(agency, alloc.id, {"frequency_per_week": 1})
    services.update_allocation(agency, alloc.id, {"frequency_per_week": 3, "active": False})
    alloc.refresh_from_db()
    assert alloc.active is False


def test_update_rejects_non_boolean_active(agency, setup):
    alloc = services.create_allocation(agency, _payload(*setup))
    with pytest.raises(ValidationError):
        services.update_allocation(agency, alloc.id, {"active": "no"})


def test_allocation_of_another_agency_is_invisible(agency, other_agency, setup):
    alloc = services.create_allocation(agency, _payload(*setup))
    with pytest.raises(Http404):
        services.get_allocation(other_agency, alloc.id)
    with pytest.raises(Http404):
        services.delete_allocation(other_agency, alloc.id)
    assert services.list_allocations(other_agency) == []


def test_list_is_newest_first_with_names(agency, setup, make_store, link):
    promoter, brand, store = setup
    first = services.create_allocation(agency, _payload(promoter, brand, store))
    second_store = make_store(agency, "Kiosk")
    link(promoter, brand, second_store)
    second = services.create_allocation(agency, _payload(promoter, brand, second_store, days_of_week=[2]))

    rows = services.list_allocations(agency)
    assert [r["id"] for r in rows] == [second.id, first.id]
    assert rows[0]["store_name"] == "Kiosk"
    assert rows[0]["promoter_name"] == "Ana"
    assert rows[0]["brand_name"] == "Cola"


def test_delete(agency, setup):
    alloc = services.create_allocation(agency, _payload(*setup))
    services.delete_allocation(agency, alloc.id)
    assert not Allocation.objects.filter(pk=alloc.id).exists()


def test_active_queryset_skips_deactivated_rows(agency, setup, make_store, link):
    promoter, brand, _ = setup
    kept = services.create_allocation(agency, _payload(*setup))
    other = make_store(agency, "Kiosk")
    link(promoter, brand, other)
    paused = services.create_allocation(agency, _payload(promoter, brand, other))
    services.update_allocation(agency, paused.id, {"active": False})

    assert list(Allocation.objects.active().values_list("id", flat=True)) == [kept.id]
    assert Allocation.objects.for_agency(agency).count() == 2
