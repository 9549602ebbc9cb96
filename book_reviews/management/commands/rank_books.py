from typing import Optional

from django.core.management.base import BaseCommand, CommandError

from book_reviews import constants
from book_reviews import settings as local_settings
from book_reviews.models import Book
from book_reviews.querysets import BookQuerySet


class Command(BaseCommand):
    help = "List books ranked by review count and average rating"

    def add_arguments(self, parser):
        parser.add_argument(
            "--preset",
            default=None,
            help="One of: " + ", ".join(local_settings.presets()),
        )
        parser.add_argument(
            "--title",
            default=None,
            help="Only list books whose title contains this text",
        )
        parser.add_argument(
            "--limit",
            type=int,
            default=None,
            help="Maximum number of books to list",
        )

    def handle(self, *args, **kwargs):
        preset = kwargs.get("preset")
        title = kwargs.get("title")
        limit = kwargs.get("limit")
        if limit is None:
            limit = local_settings.default_limit()

        # Validations
        if preset is not None and preset not in local_settings.presets():
            raise CommandError(f"The following preset is not supported: {preset}")

        if limit < 1:
            raise CommandError(f"Limit must be a positive number, got {limit}")

        books = list(self.get_queryset(preset=preset, title=title)[:limit])
        if not books:
            self.stdout.write(self.style.WARNING("No books matched."))
            return

        for position, book in enumerate(books, start=1):
            self.stdout.write(self.format_line(position, book))

    def get_queryset(
        self, preset: Optional[str] = None, title: Optional[str] = None
    ) -> BookQuerySet:
        """Build the ranked queryset

        Without a preset every book is listed by title, annotated with its
        all-time review count and average rating.
        """
        books = Book.objects.all()
        if title:
            books = books.title(title)
        if preset is None:
            return books.popular().highest_rated().order_by("title")
        return books.preset(preset)

    def format_line(self, position: int, book: Book) -> str:
        average = getattr(book, constants.REVIEWS_AVG_RATING)
        average = "-" if average is None else f"{average:.2f}"
        count = getattr(book, constants.REVIEWS_COUNT)
        return f"{position:>3}. {book.title} (reviews: {count}, average: {average})"
