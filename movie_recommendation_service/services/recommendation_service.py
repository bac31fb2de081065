"""Service for movie recommendations over an in-memory catalog."""
from typing import Dict, List, Mapping, Optional, Sequence
import logging

import numpy as np

from movie_recommendation_service.config import get_default_recommendation_count
from movie_recommendation_service.ml import (
    CollaborativeFilteringEngine,
    ContentSimilarityEngine,
    HybridRanker,
)
from movie_recommendation_service.models import (
    Movie,
    RatingProfile,
    ScoredMovie,
    build_catalog,
    build_profiles,
)
from movie_recommendation_service.models.rating_profile import validate_ratings
from movie_recommendation_service.services.catalog_query_service import CatalogQueryService
from movie_recommendation_service.services.data_loader_service import DatasetLoader

logger = logging.getLogger(__name__)

ACTIVE_USER = "active-user"


class RecommendationService:
    """
    Binds the catalog and rating profiles to the recommenders.

    The datasets are frozen at construction. Ratings of the user being served
    are passed on every call and never kept.
    """

    def __init__(
            self,
            catalog: Sequence[Movie],
            profiles: Sequence[RatingProfile],
            content_engine: Optional[ContentSimilarityEngine] = None,
            collaborative_engine: Optional[CollaborativeFilteringEngine] = None,
            rng: Optional[np.random.Generator] = None
    ):
        """
        Initialize the recommendation service.

        Args:
            catalog: Ordered movie catalog
            profiles: Historical rating profiles
            content_engine: Content similarity engine (default weights if None)
            collaborative_engine: Collaborative engine (default neighbourhood if None)
            rng: Random generator for rating samples (None = unseeded)

        Raises:
            DuplicateMovieIdError: If two catalog movies share an id
        """
        self.catalog = build_catalog(catalog)
        self.profiles = build_profiles(profiles)
        self.content_engine = content_engine or ContentSimilarityEngine()
        self.collaborative_engine = collaborative_engine or CollaborativeFilteringEngine()
        self.hybrid_ranker = HybridRanker(self.content_engine, self.collaborative_engine)
        self.queries = CatalogQueryService(self.catalog, rng=rng)
        self._movies_by_id = {movie.id: movie for movie in self.catalog}

        logger.info(
            f"Initialized RecommendationService ({len(self.catalog)} movies, "
            f"{len(self.profiles)} rating profiles)"
        )

    @classmethod
    def from_loader(cls, loader: Optional[DatasetLoader] = None, **kwargs) -> "RecommendationService":
        """Build a service from the configured datasets."""
        loader = loader or DatasetLoader()
        return cls(loader.load_catalog(), loader.load_rating_profiles(), **kwargs)

    def get_movie(self, movie_id: int) -> Optional[Movie]:
        return self._movies_by_id.get(movie_id)

    def recommend_by_content(self, movie_id: int, count: Optional[int] = None) -> List[ScoredMovie]:
        """
        Movies similar to movie_id.

        Args:
            movie_id: Seed movie
            count: Number of recommendations (default from config)

        Returns:
            Content-ranked ScoredMovies; empty for an unknown movie
        """
        count = count if count is not None else get_default_recommendation_count()
        recommendations = self.content_engine.recommend(self.catalog, movie_id, count)
        logger.info(f"Found {len(recommendations)} content recommendations for movie {movie_id}")
        return recommendations

    def recommend_collaborative(
            self,
            active_ratings: Mapping[int, float],
            count: Optional[int] = None
    ) -> List[ScoredMovie]:
        """
        Movies liked by users who rate like the caller.

        Args:
            active_ratings: Caller's ratings (movie id -> 1..5), used for this call only
            count: Number of recommendations (default from config)

        Returns:
            ScoredMovies ranked by predicted rating; empty without ratings
        """
        count = count if count is not None else get_default_recommendation_count()
        validate_ratings(ACTIVE_USER, active_ratings)
        recommendations = self.collaborative_engine.recommend(
            self.catalog, active_ratings, self.profiles, count
        )
        logger.info(
            f"Found {len(recommendations)} collaborative recommendations "
            f"from {len(active_ratings)} ratings"
        )
        return recommendations

    def recommend_hybrid(
            self,
            movie_id: int,
            active_ratings: Mapping[int, float],
            count: Optional[int] = None
    ) -> List[ScoredMovie]:
        """
        Content and collaborative recommendations blended into one list.

        Args:
            movie_id: Seed movie for content similarity
            active_ratings: Caller's ratings, may be empty
            count: Number of recommendations (default from config)

        Returns:
            Hybrid-ranked ScoredMovies labelled with the contributing method
        """
        count = count if count is not None else get_default_recommendation_count()
        validate_ratings(ACTIVE_USER, active_ratings)
        recommendations = self.hybrid_ranker.recommend(
            self.catalog, self.profiles, movie_id, active_ratings, count
        )
        logger.info(f"Found {len(recommendations)} hybrid recommendations for movie {movie_id}")
        return recommendations

    def get_stats(self) -> Dict:
        """Get statistics about the catalog and the recommenders."""
        return {
            'catalog': self.queries.statistics().to_dict(),
            'rating_profiles': len(self.profiles),
            'weights': {
                'genre': self.content_engine.genre_weight,
                'director': self.content_engine.director_weight,
                'year': self.content_engine.year_weight,
                'rating': self.content_engine.rating_weight,
                'hybrid_content': self.hybrid_ranker.content_weight,
                'hybrid_collaborative': self.hybrid_ranker.collaborative_weight
            },
            'neighbor_count': self.collaborative_engine.neighbor_count
        }
