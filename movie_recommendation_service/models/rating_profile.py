"""Historical user rating profiles."""
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Iterable, Mapping, Tuple, Union

from movie_recommendation_service.errors import RatingOutOfRangeError

MIN_RATING = 1.0
MAX_RATING = 5.0

UserId = Union[int, str]


def validate_ratings(user_id: UserId, ratings: Mapping[int, float]) -> None:
    """
    Check every rating lies on the 1-5 scale.

    Raises:
        RatingOutOfRangeError: On the first rating outside [1, 5]
    """
    for movie_id, rating in ratings.items():
        if not MIN_RATING <= rating <= MAX_RATING:
            raise RatingOutOfRangeError(user_id, movie_id, rating)


@dataclass(frozen=True)
class RatingProfile:
    """One historical user's ratings, keyed by movie id."""

    user_id: UserId
    ratings: Mapping[int, float]

    def __post_init__(self):
        validate_ratings(self.user_id, self.ratings)
        # read-only view so loaded profiles stay immutable
        object.__setattr__(self, "ratings", MappingProxyType(dict(self.ratings)))

    @classmethod
    def from_dict(cls, record: Dict[str, Any]) -> "RatingProfile":
        """
        Build a profile from a JSON record.

        JSON object keys are strings, so movie ids are converted to int.

        Args:
            record: Dict with userId (or user_id) and ratings

        Returns:
            RatingProfile instance
        """
        user_id = record.get("userId", record.get("user_id"))
        ratings = {
            int(movie_id): float(rating)
            for movie_id, rating in record.get("ratings", {}).items()
        }
        return cls(user_id=user_id, ratings=ratings)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "userId": self.user_id,
            "ratings": {str(movie_id): rating for movie_id, rating in self.ratings.items()},
        }

    def __hash__(self):
        return hash(self.user_id)

    def __eq__(self, other):
        if not isinstance(other, RatingProfile):
            return NotImplemented
        return self.user_id == other.user_id and dict(self.ratings) == dict(other.ratings)

    def __repr__(self):
        return f"<RatingProfile(user_id={self.user_id!r}, ratings={len(self.ratings)})>"


def build_profiles(profiles: Iterable[RatingProfile]) -> Tuple[RatingProfile, ...]:
    """Freeze rating profiles into an ordered tuple."""
    return tuple(profiles)
