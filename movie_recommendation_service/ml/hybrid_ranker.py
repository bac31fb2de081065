"""Weighted merge of content and collaborative recommendations."""
from typing import Dict, List, Mapping, Optional, Sequence
import logging

from movie_recommendation_service.ml.collaborative_filtering import CollaborativeFilteringEngine
from movie_recommendation_service.ml.content_similarity import ContentSimilarityEngine
from movie_recommendation_service.models import (
    METHOD_COLLABORATIVE,
    METHOD_CONTENT,
    METHOD_HYBRID,
    Movie,
    RatingProfile,
    ScoredMovie,
)
from movie_recommendation_service.utils import round_half_up, validate_count

logger = logging.getLogger(__name__)


class _Candidate:
    """Running hybrid score for one movie."""

    __slots__ = ("movie", "predicted_rating", "content_score", "collab_score", "in_content", "in_collab")

    def __init__(self, movie: Movie):
        self.movie = movie
        self.predicted_rating: Optional[float] = None
        self.content_score = 0.0
        self.collab_score = 0.0
        self.in_content = False
        self.in_collab = False

    @property
    def method(self) -> str:
        if self.content_score > 0 and self.collab_score > 0:
            return METHOD_HYBRID
        if self.content_score > 0:
            return METHOD_CONTENT
        if self.collab_score > 0:
            return METHOD_COLLABORATIVE
        # zero contribution: label by the list the movie came from
        return METHOD_CONTENT if self.in_content else METHOD_COLLABORATIVE


class HybridRanker:
    """
    Blend content and collaborative candidates into one ranking.

    Both engines are asked for a fixed-width candidate list regardless of the
    requested count, then scores are combined per movie.
    """

    def __init__(
        self,
        content_engine: Optional[ContentSimilarityEngine] = None,
        collaborative_engine: Optional[CollaborativeFilteringEngine] = None,
        content_weight: float = 0.6,
        collaborative_weight: float = 0.4,
        candidate_width: int = 15
    ):
        self.content_engine = content_engine or ContentSimilarityEngine()
        self.collaborative_engine = collaborative_engine or CollaborativeFilteringEngine()
        self.content_weight = content_weight
        self.collaborative_weight = collaborative_weight
        self.candidate_width = candidate_width

    def merge(
        self,
        content_recs: Sequence[ScoredMovie],
        collaborative_recs: Sequence[ScoredMovie],
        count: int
    ) -> List[ScoredMovie]:
        """
        Combine two candidate lists into one hybrid ranking.

        Args:
            content_recs: Content-based candidates
            collaborative_recs: Collaborative candidates
            count: Maximum number of results

        Returns:
            ScoredMovies with hybrid scores and method labels, best first,
            ties in ascending movie id order
        """
        count = validate_count(count)
        candidates: Dict[int, _Candidate] = {}

        for rec in content_recs:
            candidate = candidates.setdefault(rec.id, _Candidate(rec.movie))
            candidate.content_score = rec.similarity_score * self.content_weight
            candidate.in_content = True

        for rec in collaborative_recs:
            candidate = candidates.setdefault(rec.id, _Candidate(rec.movie))
            candidate.collab_score = rec.similarity_score * self.collaborative_weight
            candidate.predicted_rating = rec.predicted_rating
            candidate.in_collab = True

        # ascending id so ties keep id order through the stable sort
        merged = [
            ScoredMovie(
                movie=candidate.movie,
                similarity_score=round_half_up(candidate.content_score + candidate.collab_score),
                predicted_rating=candidate.predicted_rating,
                method=candidate.method
            )
            for _, candidate in sorted(candidates.items())
        ]
        merged.sort(key=lambda rec: rec.similarity_score, reverse=True)
        return merged[:count]

    def recommend(
        self,
        catalog: Sequence[Movie],
        profiles: Sequence[RatingProfile],
        movie_id: int,
        active_ratings: Mapping[int, float],
        count: int
    ) -> List[ScoredMovie]:
        """
        Hybrid recommendations for a seed movie and the caller's ratings.

        Args:
            catalog: Ordered movie catalog
            profiles: Historical rating profiles
            movie_id: Seed movie for content similarity
            active_ratings: Ratings supplied by the caller for this request only
            count: Maximum number of results

        Returns:
            Hybrid-ranked ScoredMovies
        """
        count = validate_count(count)

        content_recs = self.content_engine.recommend(catalog, movie_id, self.candidate_width)
        collaborative_recs = self.collaborative_engine.recommend(
            catalog, active_ratings, profiles, self.candidate_width
        )
        logger.debug(
            f"Hybrid candidates - Content: {len(content_recs)}, Collaborative: {len(collaborative_recs)}"
        )

        return self.merge(content_recs, collaborative_recs, count)
