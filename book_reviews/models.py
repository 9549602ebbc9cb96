from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.utils import timezone

from book_reviews import constants
from book_reviews.querysets import BookQuerySet, ReviewQuerySet


class Book(models.Model):
    title = models.CharField(max_length=255)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = BookQuerySet.as_manager()

    def __str__(self):
        return self.title


class Review(models.Model):
    book = models.ForeignKey(Book, on_delete=models.CASCADE, related_name="reviews")
    review = models.TextField()
    rating = models.PositiveSmallIntegerField(
        validators=[
            MinValueValidator(constants.MIN_RATING),
            MaxValueValidator(constants.MAX_RATING),
        ]
    )
    created_at = models.DateTimeField(default=timezone.now, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = ReviewQuerySet.as_manager()

    def __str__(self):
        return f"{self.book.title}: {self.rating}"
