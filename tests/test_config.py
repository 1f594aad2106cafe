from barberbook.core.config import Settings
from barberbook.services.availability_service import BusinessCalendar


def test_no_holidays_by_default(monkeypatch):
    monkeypatch.delenv("HOLIDAYS", raising=False)

    assert Settings().HOLIDAYS == []


def test_holidays_from_environment(monkeypatch):
    monkeypatch.setenv("HOLIDAYS", '["2025-12-25", "2026-01-01"]')

    app_settings = Settings()
    calendar = BusinessCalendar.from_settings(app_settings)

    assert app_settings.HOLIDAYS == ["2025-12-25", "2026-01-01"]
    assert calendar.is_non_working_day("2025-12-25")
    assert not calendar.is_non_working_day("2025-12-24")
