# tests/test_commands.py
import json
from datetime import datetime
from io import StringIO

import pytest
from django.core.management import CommandError, call_command

pytestmark = pytest.mark.django_db


def test_planned_visits_command_prints_json(agency, make_promoter, make_brand, make_store, link, make_visit):
    promoter = make_promoter(agency, "Ana")
    brand = make_brand(agency, "Cola", visit_frequency=2)
    store = make_store(agency, "Mercado")
    link(promoter, brand, store)
    make_visit(promoter, brand, store, datetime(2024, 1, 9, 10, 0))

    out = StringIO()
    call_command("planned_visits", agency.slug, "--start", "2024-01-07", "--end", "2024-01-13", "--json", stdout=out)
    report = json.loads(out.getvalue())
    assert report["planned"] == 2
    assert report["executed"] == 1
    assert report["completion_rate"] == 50.0


def test_planned_visits_command_accepts_agency_id(agency):
    out = StringIO()
    call_command("planned_visits", str(agency.id), "--start", "2024-01-07", "--end", "2024-01-13", stdout=out)
    assert "Planned 0, executed 0" in out.getvalue()


def test_planned_visits_command_rejects_unknown_agency(db):
    with pytest.raises(CommandError):
        call_command("planned_visits", "nowhere")


def test_planned_visits_command_rejects_bad_dates(agency):
    with pytest.raises(CommandError):
        call_command("planned_visits", agency.slug, "--start", "07/01/2024")
