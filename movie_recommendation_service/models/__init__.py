"""Domain models"""

from movie_recommendation_service.models.movie import Movie, build_catalog
from movie_recommendation_service.models.rating_profile import RatingProfile, build_profiles
from movie_recommendation_service.models.scored_movie import (
    METHOD_COLLABORATIVE,
    METHOD_CONTENT,
    METHOD_HYBRID,
    CatalogStatistics,
    ScoredMovie,
)

__all__ = [
    "Movie",
    "RatingProfile",
    "ScoredMovie",
    "CatalogStatistics",
    "build_catalog",
    "build_profiles",
    "METHOD_CONTENT",
    "METHOD_COLLABORATIVE",
    "METHOD_HYBRID",
]
