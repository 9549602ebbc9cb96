import calendar
import logging
from datetime import datetime
from typing import Callable, Optional

from django.db.models import Avg, Count, F, Q, QuerySet
from django.utils import timezone

from book_reviews import constants
from book_reviews import settings as local_settings
from book_reviews.exceptions import MissingAnnotationError, UnknownPreset

logger = logging.getLogger(__name__)


def date_range_filter(
    from_: Optional[datetime] = None,
    to: Optional[datetime] = None,
    field: str = "created_at",
) -> Q:
    """Build the condition restricting ``field`` to a date window

    Args:
        from_ (datetime, optional): inclusive lower bound
        to (datetime, optional): inclusive upper bound
        field (str): lookup path of the timestamp, e.g. ``reviews__created_at``

    Returns:
        Q: empty when neither bound is given
    """
    if from_ is not None and to is None:
        return Q(**{f"{field}__gte": from_})
    elif from_ is None and to is not None:
        return Q(**{f"{field}__lte": to})
    elif from_ is not None and to is not None:
        return Q(**{f"{field}__range": (from_, to)})
    return Q()


def subtract_months(moment: datetime, months: int) -> datetime:
    """Step back whole calendar months, clamping to the end of shorter months"""
    month_index = moment.year * 12 + moment.month - 1 - months
    year, month = divmod(month_index, 12)
    month += 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


class ReviewQuerySet(QuerySet):
    def created_between(
        self, from_: Optional[datetime] = None, to: Optional[datetime] = None
    ) -> "ReviewQuerySet":
        return self.filter(date_range_filter(from_, to))


class BookQuerySet(QuerySet):
    """Composable book scopes

    Every scope returns a new queryset. ``popular`` and ``highest_rated``
    each replace the ordering, so the aggregate applied last decides the
    sort order of the chain.
    """

    def title(self, title: str) -> "BookQuerySet":
        return self.filter(title__icontains=title)

    def popular(
        self, from_: Optional[datetime] = None, to: Optional[datetime] = None
    ) -> "BookQuerySet":
        window = date_range_filter(from_, to, field="reviews__created_at")
        return self.annotate(
            **{constants.REVIEWS_COUNT: Count("reviews", filter=window or None)}
        ).order_by(F(constants.REVIEWS_COUNT).desc())

    def highest_rated(
        self, from_: Optional[datetime] = None, to: Optional[datetime] = None
    ) -> "BookQuerySet":
        # A book with no reviews in the window averages to NULL and sorts last
        window = date_range_filter(from_, to, field="reviews__created_at")
        return self.annotate(
            **{
                constants.REVIEWS_AVG_RATING: Avg(
                    "reviews__rating", filter=window or None
                )
            }
        ).order_by(F(constants.REVIEWS_AVG_RATING).desc(nulls_last=True))

    def min_reviews(self, minimum: int) -> "BookQuerySet":
        if constants.REVIEWS_COUNT not in self.query.annotations:
            raise MissingAnnotationError(
                "min_reviews() filters on the review count, apply popular() first"
            )
        return self.filter(**{f"{constants.REVIEWS_COUNT}__gte": minimum})

    def preset(
        self, name: str, clock: Callable[[], datetime] = timezone.now
    ) -> "BookQuerySet":
        presets = local_settings.presets()
        if name not in presets:
            raise UnknownPreset(name)

        config = presets[name]
        to = clock()
        from_ = subtract_months(to, config["months"])
        logger.debug(
            f"Applying preset {name} over [{from_.isoformat()}, {to.isoformat()}]"
            f" with at least {config['min_reviews']} reviews"
        )
        return (
            self.popular(from_, to)
            .highest_rated(from_, to)
            .min_reviews(config["min_reviews"])
        )

    def popular_last_month(
        self, clock: Callable[[], datetime] = timezone.now
    ) -> "BookQuerySet":
        return self.preset(constants.POPULAR_LAST_MONTH, clock=clock)

    def popular_last_6months(
        self, clock: Callable[[], datetime] = timezone.now
    ) -> "BookQuerySet":
        return self.preset(constants.POPULAR_LAST_6MONTHS, clock=clock)

    def highest_rated_last_month(
        self, clock: Callable[[], datetime] = timezone.now
    ) -> "BookQuerySet":
        return self.preset(constants.HIGHEST_RATED_LAST_MONTH, clock=clock)

    def highest_rated_last_6months(
        self, clock: Callable[[], datetime] = timezone.now
    ) -> "BookQuerySet":
        return self.preset(constants.HIGHEST_RATED_LAST_6MONTHS, clock=clock)
