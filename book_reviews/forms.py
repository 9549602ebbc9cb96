from django import forms

from book_reviews import constants
from book_reviews import settings as local_settings
from book_reviews.models import Review


class ReviewForm(forms.ModelForm):
    rating = forms.IntegerField(
        min_value=constants.MIN_RATING, max_value=constants.MAX_RATING
    )

    class Meta:
        model = Review
        fields = ["review", "rating"]

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        # Built per instance so BOOK_REVIEWS_MIN_REVIEW_LENGTH is read at request time
        self.fields["review"] = forms.CharField(
            min_length=local_settings.min_review_length(), widget=forms.Textarea
        )
