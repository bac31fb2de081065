"""User-based collaborative filtering over rating profiles."""
import numpy as np
from typing import Dict, List, Mapping, Sequence, Tuple
import logging

from movie_recommendation_service.models import Movie, RatingProfile, ScoredMovie
from movie_recommendation_service.utils import round_half_up, validate_count

logger = logging.getLogger(__name__)


class CollaborativeFilteringEngine:
    """Predict ratings for unseen movies from the most similar historical users."""

    def __init__(self, neighbor_count: int = 5, max_rating: float = 5.0):
        """
        Initialize the collaborative filtering engine.

        Args:
            neighbor_count: Number of most similar profiles used for prediction
            max_rating: Top of the rating scale, used to express predictions as a percentage
        """
        self.neighbor_count = neighbor_count
        self.max_rating = max_rating

    def user_similarity(
        self,
        active_ratings: Mapping[int, float],
        profile_ratings: Mapping[int, float]
    ) -> float:
        """
        Pearson correlation over commonly rated movies, remapped to [0, 1].

        Args:
            active_ratings: Ratings of the user being served
            profile_ratings: Ratings of a historical user

        Returns:
            (r + 1) / 2, or 0 when there is no overlap or either side has zero variance
        """
        # sorted so both argument orders sum in the same sequence
        common_ids = sorted(set(active_ratings) & set(profile_ratings))
        if not common_ids:
            return 0.0

        active = np.array([active_ratings[movie_id] for movie_id in common_ids], dtype=float)
        profile = np.array([profile_ratings[movie_id] for movie_id in common_ids], dtype=float)

        active_diff = active - active.mean()
        profile_diff = profile - profile.mean()

        numerator = float(np.sum(active_diff * profile_diff))
        active_var = float(np.sum(active_diff * active_diff))
        profile_var = float(np.sum(profile_diff * profile_diff))

        if active_var == 0 or profile_var == 0:
            return 0.0

        correlation = numerator / np.sqrt(active_var * profile_var)
        return float(np.clip((correlation + 1) / 2, 0.0, 1.0))

    def find_neighbors(
        self,
        active_ratings: Mapping[int, float],
        profiles: Sequence[RatingProfile]
    ) -> List[Tuple[RatingProfile, float]]:
        """
        Most similar profiles to the active user.

        Args:
            active_ratings: Ratings of the user being served
            profiles: Historical rating profiles

        Returns:
            (profile, similarity) pairs, best first, ties in dataset order
        """
        scored = [
            (profile, self.user_similarity(active_ratings, profile.ratings))
            for profile in profiles
        ]
        scored.sort(key=lambda pair: pair[1], reverse=True)
        return scored[:self.neighbor_count]

    def recommend(
        self,
        catalog: Sequence[Movie],
        active_ratings: Mapping[int, float],
        profiles: Sequence[RatingProfile],
        count: int
    ) -> List[ScoredMovie]:
        """
        Recommend unseen movies weighted by neighbour similarity.

        Args:
            catalog: Ordered movie catalog
            active_ratings: Ratings supplied by the caller for this request only
            profiles: Historical rating profiles
            count: Maximum number of recommendations

        Returns:
            ScoredMovies sorted by descending predicted rating, ties in ascending movie id order
        """
        count = validate_count(count)
        if not active_ratings:
            return []

        neighbors = self.find_neighbors(active_ratings, profiles)
        logger.debug(
            f"Neighbors: {[(profile.user_id, round(weight, 3)) for profile, weight in neighbors]}"
        )

        # movie_id -> [weighted rating sum, weight sum]
        accumulator: Dict[int, List[float]] = {}
        for profile, weight in neighbors:
            if weight == 0:
                continue
            for movie_id, rating in profile.ratings.items():
                if movie_id in active_ratings:
                    continue
                totals = accumulator.setdefault(movie_id, [0.0, 0.0])
                totals[0] += rating * weight
                totals[1] += weight

        movies_by_id = {movie.id: movie for movie in catalog}
        recommendations = []
        # ascending id so ties keep id order through the stable sort
        for movie_id, (total_score, total_weight) in sorted(accumulator.items()):
            if total_weight == 0:
                continue
            movie = movies_by_id.get(movie_id)
            if movie is None:
                logger.debug(f"Skipping movie ID {movie_id}: rated by a neighbor but not in catalog")
                continue

            predicted = total_score / total_weight
            recommendations.append(ScoredMovie(
                movie=movie,
                similarity_score=round_half_up(predicted / self.max_rating * 100),
                predicted_rating=round_half_up(predicted, 1)
            ))

        recommendations.sort(key=lambda rec: rec.predicted_rating, reverse=True)
        return recommendations[:count]
