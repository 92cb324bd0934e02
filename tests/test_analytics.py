"""Analytics service tests."""

from datetime import UTC, date, datetime

import pytest

from src.errors import InvalidError
from src.services.analytics import AnalyticsService, round_rating


@pytest.fixture
def service(db):
    return AnalyticsService(db)


def test_average_rating_empty_store(service):
    summary = service.average_rating()
    assert summary.model_dump() == {
        "average_rating": 0,
        "total_feedback": 0,
        "min_rating": None,
        "max_rating": None,
    }


def test_average_rating(service, create_user, create_feedback):
    user = create_user("avg@example.com")
    for rating in (1, 2, 2):
        create_feedback(user, rating=rating)

    summary = service.average_rating()
    assert summary.average_rating == 1.67
    assert summary.total_feedback == 3
    assert summary.min_rating == 1
    assert summary.max_rating == 2


def test_average_rating_counts_every_user(service, create_user, create_feedback):
    create_feedback(create_user("one@example.com"), rating=5)
    create_feedback(create_user("two@example.com"), rating=3)
    assert service.average_rating().average_rating == 4.0


@pytest.mark.parametrize(
    "value, expected",
    [
        (None, 0.0),
        (4, 4.0),
        (4.125, 4.13),
        (4.135, 4.14),
        (3.3333333333, 3.33),
        (2.6666666667, 2.67),
        (2.005, 2.01),
    ],
)
def test_round_rating_half_up(value, expected):
    assert round_rating(value) == expected


def test_feedback_per_day(service, create_user, create_feedback):
    user = create_user("days@example.com")
    create_feedback(user, rating=3, created_at=datetime(2025, 6, 3, 8, tzinfo=UTC))
    create_feedback(user, rating=5, created_at=datetime(2025, 6, 1, 23, 59, tzinfo=UTC))
    create_feedback(user, rating=4, created_at=datetime(2025, 6, 1, 0, 0, tzinfo=UTC))
    create_feedback(user, rating=4, created_at=datetime(2025, 6, 1, 12, tzinfo=UTC))

    days = service.feedback_per_day()

    assert [(day.date, day.count, day.average_rating) for day in days] == [
        ("2025-06-01", 3, 4.33),
        ("2025-06-03", 1, 3.0),
    ]


def test_feedback_per_day_sorted_and_sums_to_total(service, create_user, create_feedback):
    user = create_user("sum@example.com")
    for day, rating in [(9, 1), (2, 5), (5, 3), (2, 4), (9, 2), (7, 5)]:
        create_feedback(user, rating=rating, created_at=datetime(2025, 7, day, 10, tzinfo=UTC))

    days = service.feedback_per_day()

    dates = [day.date for day in days]
    assert dates == sorted(dates)
    assert sum(day.count for day in days) == service.average_rating().total_feedback == 6


def test_feedback_per_day_range(service, create_user, create_feedback):
    user = create_user("range@example.com")
    for day in (1, 2, 3, 4):
        create_feedback(user, created_at=datetime(2025, 8, day, 15, tzinfo=UTC))

    days = service.feedback_per_day(date(2025, 8, 2), date(2025, 8, 3))
    assert [day.date for day in days] == ["2025-08-02", "2025-08-03"]

    days = service.feedback_per_day(start_date=date(2025, 8, 4))
    assert [day.date for day in days] == ["2025-08-04"]

    days = service.feedback_per_day(end_date=datetime(2025, 8, 1, 12, tzinfo=UTC))
    assert days == []


def test_feedback_per_day_empty(service):
    assert service.feedback_per_day() == []


def test_feedback_per_day_rejects_non_dates(service):
    with pytest.raises(InvalidError):
        service.feedback_per_day(start_date="2025-01-01")
