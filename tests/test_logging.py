# tests/test_logging.py
import logging

import pytest

from cc.logging_filters import RedactPIIFilter


def _filtered(msg, *args):
    record = logging.LogRecord("scheduling", logging.INFO, __file__, 1, msg, args, None)
    assert RedactPIIFilter().filter(record) is True
    return record.getMessage()


def test_emails_are_masked():
    out = _filtered("invite sent to %s", "ana.souza@example.com")
    assert "ana.souza" not in out
    assert out == "invite sent to a***@example.com"


def test_international_phone_numbers_are_masked():
    out = _filtered("promoter phone +55 (11) 98765-4321 updated")
    assert "98765" not in out
    assert "PHONE:****4321" in out


def test_dates_and_ids_are_left_alone():
    msg = "planned_visits agency=3 start=2024-01-07 end=2024-01-13"
    assert _filtered(msg) == msg


@pytest.mark.django_db
def test_request_id_is_echoed(client):
    r = client.get("/healthz/", HTTP_X_REQUEST_ID="abc-123")
    assert r.status_code == 200
    assert r["X-Request-ID"] == "abc-123"
