"""Content-based movie-to-movie similarity."""
import numpy as np
from typing import Dict, Iterable, List, Sequence
from sklearn.preprocessing import MultiLabelBinarizer  # type: ignore
import logging

from movie_recommendation_service.models import Movie, ScoredMovie
from movie_recommendation_service.utils import validate_count

logger = logging.getLogger(__name__)


class ContentSimilarityEngine:
    """Score movies against each other from their static attributes."""

    def __init__(
        self,
        genre_weight: float = 0.50,
        director_weight: float = 0.20,
        year_weight: float = 0.15,
        rating_weight: float = 0.15,
        year_horizon: float = 50.0,
        rating_horizon: float = 5.0
    ):
        """
        Initialize the content similarity engine.

        Args:
            genre_weight: Weight for genre overlap (Jaccard index)
            director_weight: Weight added when directors match exactly
            year_weight: Weight for release year proximity
            rating_weight: Weight for catalog rating proximity
            year_horizon: Year gap at which the year term reaches zero
            rating_horizon: Rating gap at which the rating term reaches zero
        """
        self.genre_weight = genre_weight
        self.director_weight = director_weight
        self.year_weight = year_weight
        self.rating_weight = rating_weight
        self.year_horizon = year_horizon
        self.rating_horizon = rating_horizon

    def genre_similarity(self, genres_a: Iterable[str], genres_b: Iterable[str]) -> float:
        """
        Jaccard index of two genre sets.

        Args:
            genres_a: Genres of the first movie
            genres_b: Genres of the second movie

        Returns:
            |A ∩ B| / |A ∪ B| in [0, 1]
        """
        set_a = set(genres_a)
        set_b = set(genres_b)
        union = set_a | set_b
        if not union:
            return 0.0
        return len(set_a & set_b) / len(union)

    def compute_genre_similarity(self, target: Movie, candidates: Sequence[Movie]) -> np.ndarray:
        """
        Jaccard index between the target and each candidate, vectorized.

        Args:
            target: Movie to compare against
            candidates: Movies to score

        Returns:
            Array of genre similarities, one per candidate
        """
        encoder = MultiLabelBinarizer()
        genre_features = encoder.fit_transform(
            [target.genres] + [movie.genres for movie in candidates]
        )
        target_features = genre_features[0]
        candidate_features = genre_features[1:]

        intersection = candidate_features @ target_features
        union = candidate_features.sum(axis=1) + target_features.sum() - intersection
        return intersection / np.maximum(union, 1)

    def score_candidates(self, target: Movie, candidates: Sequence[Movie]) -> np.ndarray:
        """
        Weighted content similarity of each candidate to the target.

        Each term is clamped to [0, 1] before weighting; the weighted sum is
        scaled to a percentage and rounded half-up.

        Args:
            target: Movie to compare against
            candidates: Movies to score

        Returns:
            Integer array of scores in [0, 100], one per candidate
        """
        if len(candidates) == 0:
            return np.zeros(0, dtype=int)

        genre_scores = np.clip(self.compute_genre_similarity(target, candidates), 0.0, 1.0)

        director_scores = np.array(
            [movie.director == target.director for movie in candidates], dtype=float
        )

        years = np.array([movie.year for movie in candidates], dtype=float)
        year_scores = np.clip(1 - np.abs(years - target.year) / self.year_horizon, 0.0, 1.0)

        ratings = np.array([movie.rating for movie in candidates], dtype=float)
        rating_scores = np.clip(1 - np.abs(ratings - target.rating) / self.rating_horizon, 0.0, 1.0)

        total = (
            genre_scores * self.genre_weight +
            director_scores * self.director_weight +
            year_scores * self.year_weight +
            rating_scores * self.rating_weight
        )
        return np.clip(np.floor(total * 100 + 0.5), 0, 100).astype(int)

    def movie_similarity(self, movie_a: Movie, movie_b: Movie) -> int:
        """
        Content similarity between two movies as an integer percentage.

        Args:
            movie_a: First movie
            movie_b: Second movie

        Returns:
            Score in [0, 100]
        """
        return int(self.score_candidates(movie_a, [movie_b])[0])

    def recommend(self, catalog: Sequence[Movie], target_id: int, count: int) -> List[ScoredMovie]:
        """
        Rank catalog movies by similarity to one movie.

        Args:
            catalog: Ordered movie catalog
            target_id: Id of the movie to find neighbours for
            count: Maximum number of recommendations

        Returns:
            ScoredMovies sorted by descending score, ties in catalog order.
            Empty if target_id is not in the catalog.
        """
        count = validate_count(count)

        target = next((movie for movie in catalog if movie.id == target_id), None)
        if target is None:
            logger.warning(f"Movie ID {target_id} not found in catalog")
            return []

        candidates = [movie for movie in catalog if movie.id != target_id]
        scores = self.score_candidates(target, candidates)

        order = np.argsort(-scores, kind="stable")[:count]
        return [
            ScoredMovie(movie=candidates[idx], similarity_score=int(scores[idx]))
            for idx in order
        ]

    def compute_similarity_matrix(self, catalog: Sequence[Movie]) -> np.ndarray:
        """
        Pairwise content similarity for the whole catalog.

        Args:
            catalog: Ordered movie catalog

        Returns:
            Integer matrix (n_movies x n_movies); the diagonal is each movie against itself
        """
        logger.info(f"Computing content similarity matrix for {len(catalog)} movies...")
        if not catalog:
            return np.zeros((0, 0), dtype=int)

        matrix = np.vstack([self.score_candidates(movie, catalog) for movie in catalog])
        logger.info(f" Content similarity: {matrix.shape}, range [{matrix.min()}, {matrix.max()}]")
        return matrix

    def get_similarity_statistics(self, similarity_matrix: np.ndarray) -> Dict[str, float]:
        """
        Compute statistics for a similarity matrix.

        Args:
            similarity_matrix: Similarity matrix

        Returns:
            Dictionary with statistics
        """
        # Get upper triangle (exclude diagonal and duplicates)
        upper_triangle = similarity_matrix[np.triu_indices_from(similarity_matrix, k=1)]
        if upper_triangle.size == 0:
            return {'mean': 0.0, 'std': 0.0, 'min': 0.0, 'max': 0.0, 'median': 0.0}

        return {
            'mean': float(upper_triangle.mean()),
            'std': float(upper_triangle.std()),
            'min': float(upper_triangle.min()),
            'max': float(upper_triangle.max()),
            'median': float(np.median(upper_triangle))
        }
