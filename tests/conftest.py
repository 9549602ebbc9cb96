# conftest.py

from datetime import datetime, timezone

import pytest
from django.conf import settings

NOW = datetime(2024, 6, 15, 12, 0, tzinfo=timezone.utc)


# Configure Django settings for the test environment; pytest-django runs
# django.setup() and builds the test database afterwards
def pytest_configure():
    if not settings.configured:
        settings.configure(
            INSTALLED_APPS=[
                "django.contrib.contenttypes",
                "book_reviews",
            ],
            DATABASES={
                "default": {
                    "ENGINE": "django.db.backends.sqlite3",
                    "NAME": ":memory:",
                }
            },
            USE_TZ=True,
            TIME_ZONE="UTC",
        )


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def clock(now):
    return lambda: now


@pytest.fixture
def make_review():
    from book_reviews.models import Review

    def _make_review(book, rating=4, created_at=NOW, review="A thoughtful read overall"):
        return Review.objects.create(
            book=book, rating=rating, review=review, created_at=created_at
        )

    return _make_review
