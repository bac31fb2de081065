"""Exceptions raised for malformed recommendation inputs."""


class RecommendationInputError(ValueError):
    """Base class for inputs that indicate a programming error by the caller."""


class InvalidCountError(RecommendationInputError):
    """A requested result count was zero or negative."""

    def __init__(self, count):
        self.count = count
        super().__init__(f"count must be a positive integer, got {count!r}")


class DuplicateMovieIdError(RecommendationInputError):
    """Two catalog movies share the same id."""

    def __init__(self, movie_id: int):
        self.movie_id = movie_id
        super().__init__(f"Duplicate movie id in catalog: {movie_id}")


class RatingOutOfRangeError(RecommendationInputError):
    """A rating fell outside the 1-5 scale."""

    def __init__(self, user_id, movie_id: int, rating):
        self.user_id = user_id
        self.movie_id = movie_id
        self.rating = rating
        super().__init__(
            f"Rating {rating!r} for movie {movie_id} (user {user_id}) is outside [1, 5]"
        )


class InvalidMovieError(RecommendationInputError):
    """A movie record is missing fields or violates catalog invariants."""
