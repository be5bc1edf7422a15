# conftest.py — pytest config to make tests stable & fast

import os
from datetime import datetime

import pytest
from django.utils import timezone

# Ensure Django settings are discoverable for pytest
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "cc.settings")


# You can also skip keepdb so a fresh transient DB is used each run.
@pytest.fixture(scope="session")
def django_db_keepdb():
    return False


# --- Relax settings so Client() requests are resilient in tests --------------
@pytest.fixture(autouse=True)
def _relaxed_test_settings(settings):
    settings.SECURE_SSL_REDIRECT = False
    settings.ALLOWED_HOSTS = ["*", "testserver", "localhost", "127.0.0.1"]
    settings.TIME_ZONE = "UTC"
    # Speed up password hashing in tests
    settings.PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]


# ============================================================================
# Domain factories
# ============================================================================

@pytest.fixture
def agency(db):
    from tenants.models import Agency
    return Agency.objects.create(name="Acme Field")


@pytest.fixture
def other_agency(db):
    from tenants.models import Agency
    return Agency.objects.create(name="Other Field")


@pytest.fixture
def make_user(db, django_user_model):
    """make_user(username, role, agency) -> User with a Membership."""
    from tenants.models import Membership

    def _make(username, role=None, agency=None):
        user = django_user_model.objects.create_user(username=username, password="pw")
        if role:
            Membership.objects.create(user=user, agency=agency, role=role)
        return user
    return _make


@pytest.fixture
def agency_user(make_user, agency):
    from tenants.models import Membership
    return make_user("manager", Membership.AGENCY, agency)


@pytest.fixture
def make_promoter(make_user):
    """make_promoter(agency, name, **fields) -> Promoter owned by a PROMOTER user of `agency`."""
    from scheduling.models import Promoter
    from tenants.models import Membership

    counter = {"n": 0}

    def _make(agency, name="Promoter", **fields):
        counter["n"] += 1
        user = make_user(f"promoter{counter['n']}", Membership.PROMOTER, agency)
        return Promoter.objects.create(user=user, name=name, **fields)
    return _make


@pytest.fixture
def make_brand(db):
    from scheduling.models import Brand

    def _make(agency, name="Brand", visit_frequency=1, **fields):
        return Brand.objects.create(agency=agency, name=name, visit_frequency=visit_frequency, **fields)
    return _make


@pytest.fixture
def make_store(db):
    from scheduling.models import Store

    def _make(agency, chain_name="Store", **fields):
        return Store.objects.create(agency=agency, chain_name=chain_name, **fields)
    return _make


@pytest.fixture
def link(db):
    """
    link(promoter, brand, store, pair_frequency=None): authorize the promoter
    for brand and store and place the brand in the store.
    """
    from scheduling.models import BrandStore, PromoterBrand, PromoterStore

    def _link(promoter, brand, store, pair_frequency=None):
        PromoterBrand.objects.get_or_create(promoter=promoter, brand=brand)
        PromoterStore.objects.get_or_create(promoter=promoter, store=store)
        bs, _ = BrandStore.objects.get_or_create(brand=brand, store=store)
        if pair_frequency is not None:
            bs.visit_frequency = pair_frequency
            bs.save(update_fields=["visit_frequency"])
        return bs
    return _link


@pytest.fixture
def make_visit(db):
    from visits.models import Visit

    def _make(promoter, brand, store, when: datetime):
        if timezone.is_naive(when):
            when = timezone.make_aware(when, timezone.get_current_timezone())
        return Visit.objects.create(promoter=promoter, brand=brand, store=store, timestamp=when)
    return _make
