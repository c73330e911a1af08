import pytest

from models.schedule import UNSCHEDULED, Scheduled, parse_schedule, schedule_month


@pytest.mark.parametrize(
    ("text", "month"),
    [
        ("04.2026–05.2026", 4),
        ("15.09.2026", 9),
        ("2026-11", 11),
        ("3", 3),
        ("aprill", 4),
        ("aprillis", 4),
        ("Märtsist maini", 3),
        ("  Detsember ", 12),
    ],
)
def test_parse_schedule_finds_first_month(text, month):
    assert parse_schedule(text) == Scheduled(month)


@pytest.mark.parametrize("text", [None, "", "sügisel", "13.2026", "jooksvalt"])
def test_parse_schedule_leaves_unknown_periods_unscheduled(text):
    assert parse_schedule(text) is UNSCHEDULED


def test_schedule_month():
    assert schedule_month(Scheduled(6)) == 6
    assert schedule_month(UNSCHEDULED) is None


def test_scheduled_rejects_out_of_range_month():
    with pytest.raises(ValueError):
        Scheduled(13)
