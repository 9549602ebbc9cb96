from typing import Dict

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

from book_reviews import constants


def min_review_length() -> int:
    return getattr(
        settings, "BOOK_REVIEWS_MIN_REVIEW_LENGTH", constants.MIN_REVIEW_LENGTH
    )


def default_limit() -> int:
    return getattr(settings, "BOOK_REVIEWS_DEFAULT_LIMIT", 10)


def presets() -> Dict[str, dict]:
    """Preset table with any project overrides merged over the defaults

    Returns:
        dict: preset name -> {"months": int, "min_reviews": int}
    """
    merged = {name: dict(config) for name, config in constants.PRESETS.items()}
    for name, config in getattr(settings, "BOOK_REVIEWS_PRESETS", {}).items():
        merged.setdefault(name, {}).update(config)

    for name, config in merged.items():
        for key in ("months", "min_reviews"):
            if key not in config:
                raise ImproperlyConfigured(
                    f"BOOK_REVIEWS_PRESETS['{name}'] is missing '{key}'"
                )
    return merged
