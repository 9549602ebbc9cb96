from django.core.management.base import BaseCommand, CommandError

from book_reviews.exceptions import BookNotFound, ReviewValidationError
from book_reviews.services import submit_review


class Command(BaseCommand):
    help = "Add a rated review to a book"

    def add_arguments(self, parser):
        parser.add_argument("book_id", help="ID of the reviewed book")
        parser.add_argument("--rating", required=True, help="Rating from 1 to 5")
        parser.add_argument("--review", required=True, help="Review text")

    def handle(self, *args, **kwargs):
        try:
            review = submit_review(
                kwargs["book_id"], kwargs["rating"], kwargs["review"]
            )
        except BookNotFound as exc:
            raise CommandError(str(exc))
        except ReviewValidationError as exc:
            raise CommandError(f"Review was not added. {exc}")

        self.stdout.write(
            self.style.SUCCESS(
                f"Review added successfully. Thank you! (review {review.pk} "
                f"for '{review.book.title}')"
            )
        )
