from django.apps import AppConfig


class BookReviewsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "book_reviews"
    verbose_name = "Book reviews"
