"""Recommendation output records."""
from dataclasses import dataclass
from typing import Any, Dict, Optional

from movie_recommendation_service.models.movie import Movie

METHOD_CONTENT = "Content"
METHOD_COLLABORATIVE = "Collaborative"
METHOD_HYBRID = "Hybrid"


@dataclass(frozen=True)
class ScoredMovie:
    """A catalog movie annotated with recommendation scores.

    Only produced as function output; never persisted.
    """

    movie: Movie
    similarity_score: int
    predicted_rating: Optional[float] = None
    method: Optional[str] = None

    @property
    def id(self) -> int:
        return self.movie.id

    def to_dict(self) -> Dict[str, Any]:
        """Flatten movie fields and scores into a JSON-ready dict."""
        data = self.movie.to_dict()
        data["similarityScore"] = self.similarity_score
        if self.predicted_rating is not None:
            data["predictedRating"] = self.predicted_rating
        if self.method is not None:
            data["method"] = self.method
        return data


@dataclass(frozen=True)
class CatalogStatistics:
    """Aggregate figures for the catalog."""

    total_movies: int
    total_genres: int
    average_rating: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalMovies": self.total_movies,
            "totalGenres": self.total_genres,
            "averageRating": self.average_rating,
        }
