from datetime import timedelta
from io import StringIO

import pytest
from django.core.management import call_command
from django.core.management.base import CommandError
from django.utils import timezone

from book_reviews.management.commands.rank_books import Command as RankBooksCommand
from book_reviews.models import Book, Review


@pytest.mark.django_db
class TestRankBooks:
    @pytest.fixture(autouse=True)
    def library(self, db, make_review):
        recent = timezone.now() - timedelta(days=3)
        self.busy = Book.objects.create(title="Busy Book")
        self.loved = Book.objects.create(title="Loved Book")
        self.quiet = Book.objects.create(title="Quiet Tome")
        for _ in range(4):
            make_review(self.busy, rating=2, created_at=recent)
        for _ in range(2):
            make_review(self.loved, rating=5, created_at=recent)

    def rank(self, **options):
        out = StringIO()
        call_command("rank_books", stdout=out, **options)
        return out.getvalue().splitlines()

    def test_lists_books_by_title_without_preset(self):
        lines = self.rank()

        assert lines == [
            "  1. Busy Book (reviews: 4, average: 2.00)",
            "  2. Loved Book (reviews: 2, average: 5.00)",
            "  3. Quiet Tome (reviews: 0, average: -)",
        ]

    def test_title_search(self):
        assert self.rank(title="tome") == ["  1. Quiet Tome (reviews: 0, average: -)"]

    def test_preset(self):
        lines = self.rank(preset="popular_last_month")

        assert [line.split(". ", 1)[1].split(" (")[0] for line in lines] == [
            "Loved Book",
            "Busy Book",
        ]

    def test_limit(self):
        assert len(self.rank(limit=1)) == 1

    def test_no_match(self):
        assert self.rank(title="missing") == ["No books matched."]

    def test_unknown_preset(self):
        with pytest.raises(CommandError):
            self.rank(preset="most_borrowed")

    def test_invalid_limit(self):
        with pytest.raises(CommandError):
            self.rank(limit=0)

    def test_preset_added_in_settings(self, settings):
        settings.BOOK_REVIEWS_PRESETS = {"trending": {"months": 1, "min_reviews": 4}}

        lines = self.rank(preset="trending")

        assert lines == ["  1. Busy Book (reviews: 4, average: 2.00)"]

    def test_help_lists_presets_added_in_settings(self, settings):
        settings.BOOK_REVIEWS_PRESETS = {"trending": {"months": 1, "min_reviews": 4}}

        parser = RankBooksCommand().create_parser("manage.py", "rank_books")

        assert "trending" in parser.format_help()
        assert "popular_last_month" in parser.format_help()


@pytest.mark.django_db
class TestAddReview:
    @pytest.fixture(autouse=True)
    def book(self, db):
        self.book = Book.objects.create(title="Piranesi")

    def test_success_message(self):
        out = StringIO()

        call_command(
            "add_review",
            str(self.book.pk),
            rating="5",
            review="A labyrinth worth getting lost in.",
            stdout=out,
        )

        assert "Review added successfully. Thank you!" in out.getvalue()
        assert self.book.reviews.get().rating == 5

    def test_invalid_review(self):
        with pytest.raises(CommandError, match="rating"):
            call_command(
                "add_review",
                str(self.book.pk),
                rating="6",
                review="A labyrinth worth getting lost in.",
            )

        assert Review.objects.count() == 0

    def test_missing_book(self):
        with pytest.raises(CommandError, match="does not exist"):
            call_command(
                "add_review", "999", rating="4", review="A labyrinth worth getting lost in."
            )
