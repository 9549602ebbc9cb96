import logging
from datetime import datetime
from typing import Callable

from django import forms
from django.core.exceptions import ValidationError
from django.db import DatabaseError, transaction
from django.utils import timezone

from book_reviews.exceptions import BookNotFound, ReviewValidationError, StoreError
from book_reviews.forms import ReviewForm
from book_reviews.models import Book, Review

logger = logging.getLogger(__name__)


def submit_review(
    book_id, rating, review, clock: Callable[[], datetime] = timezone.now
) -> Review:
    """Validate and store a single review for an existing book

    Args:
        book_id: primary key of the reviewed book
        rating: raw rating input, must parse as an integer from 1 to 5
        review: raw review text
        clock (Callable): source of the review's creation time

    Returns:
        Review: the stored review

    Raises:
        BookNotFound: no book has ``book_id``; checked before the content
        ReviewValidationError: the rating or text is invalid
        StoreError: the database failed the lookup or rejected the insert
    """
    try:
        # Rejects ids such as 1.7 that the primary key would truncate
        pk = forms.IntegerField().clean(book_id)
        book = Book.objects.get(pk=pk)
    except (ValidationError, Book.DoesNotExist):
        logger.warning(f"Review submitted for missing book {book_id}")
        raise BookNotFound(book_id) from None
    except DatabaseError as exc:
        logger.exception(f"Failed to look up book {book_id}")
        raise StoreError(str(exc)) from exc

    form = ReviewForm({"rating": rating, "review": review})
    if not form.is_valid():
        errors = {
            field: [error["message"] for error in field_errors]
            for field, field_errors in form.errors.get_json_data().items()
        }
        logger.warning(f"Rejected review for book {book.pk}: {errors}")
        raise ReviewValidationError(errors)

    instance = form.save(commit=False)
    instance.book = book
    instance.created_at = clock()
    try:
        with transaction.atomic():
            instance.save()
    except DatabaseError as exc:
        logger.exception(f"Failed to store review for book {book.pk}")
        raise StoreError(str(exc)) from exc

    logger.info(f"Stored review {instance.pk} for book {book.pk} (rating {instance.rating})")
    return instance
