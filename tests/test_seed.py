"""
Tests for the demo data script.
"""

import logging

from sqlmodel import select

from workspot.models.business import Business
from workspot.models.daily_hours import DailyHours
from workspot.models.desk import Desk
from workspot.scripts import seed


def test_seed_is_repeatable_and_reports(engine, session, monkeypatch, caplog):
    monkeypatch.setattr(seed, "engine", engine)
    monkeypatch.setattr(seed, "create_db_and_tables", lambda: None)

    with caplog.at_level(logging.INFO, logger=seed.__name__):
        seed.main()
        seed.main()

    assert "Seed complete" in caplog.text
    assert len(session.exec(select(Business)).all()) == 1
    assert len(session.exec(select(Desk)).all()) == 3
    assert len(session.exec(select(DailyHours)).all()) == seed.DAYS_AHEAD
