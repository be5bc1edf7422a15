# tests/test_migrations.py
from io import StringIO

import pytest
from django.core.management import call_command


@pytest.mark.django_db
def test_models_match_hand_written_migrations(settings):
    # the suite runs with --nomigrations; load the real migration modules here
    settings.MIGRATION_MODULES = {}
    out = StringIO()
    call_command("makemigrations", "--check", "--dry-run", stdout=out)
    assert "No changes detected" in out.getvalue()
