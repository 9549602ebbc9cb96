MIN_RATING = 1
MAX_RATING = 5
MIN_REVIEW_LENGTH = 15

REVIEWS_COUNT = "reviews_count"
REVIEWS_AVG_RATING = "reviews_avg_rating"

POPULAR_LAST_MONTH = "popular_last_month"
POPULAR_LAST_6MONTHS = "popular_last_6months"
HIGHEST_RATED_LAST_MONTH = "highest_rated_last_month"
HIGHEST_RATED_LAST_6MONTHS = "highest_rated_last_6months"


PRESETS = {
    POPULAR_LAST_MONTH: {"months": 1, "min_reviews": 2},
    POPULAR_LAST_6MONTHS: {"months": 6, "min_reviews": 5},
    HIGHEST_RATED_LAST_MONTH: {"months": 1, "min_reviews": 2},
    HIGHEST_RATED_LAST_6MONTHS: {"months": 6, "min_reviews": 5},
}
