from typing import Dict, List


class BookReviewsError(Exception):
    pass


class ReviewValidationError(BookReviewsError):
    """Submitted review failed validation

    ``errors`` maps each failing field name to its list of messages.
    """

    def __init__(self, errors: Dict[str, List[str]]):
        self.errors = errors
        super().__init__(
            "; ".join(
                f"{field}: {' '.join(messages)}" for field, messages in errors.items()
            )
        )

    @property
    def fields(self) -> List[str]:
        return list(self.errors)

    @property
    def field(self) -> str:
        return self.fields[0]

    @property
    def reason(self) -> str:
        return self.errors[self.field][0]


class BookNotFound(BookReviewsError):
    def __init__(self, book_id):
        self.book_id = book_id
        super().__init__(f"Book {book_id} does not exist")


class StoreError(BookReviewsError):
    pass


class MissingAnnotationError(BookReviewsError):
    pass


class UnknownPreset(BookReviewsError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"The following preset is not supported: {name}")
