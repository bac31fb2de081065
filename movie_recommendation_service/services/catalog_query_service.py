"""Search, filtering and statistics over the movie catalog."""
from typing import List, Optional, Sequence
import logging

import numpy as np
import pandas as pd

from movie_recommendation_service.config import get_rating_sample_size
from movie_recommendation_service.models import CatalogStatistics, Movie
from movie_recommendation_service.utils import round_half_up, validate_count

logger = logging.getLogger(__name__)


class CatalogQueryService:
    """
    Read-only queries over the catalog.
    Independent of the recommenders; used for browsing and rating elicitation.
    """

    def __init__(self, catalog: Sequence[Movie], rng: Optional[np.random.Generator] = None):
        """
        Initialize the query service.

        Args:
            catalog: Ordered movie catalog
            rng: Random generator for sampling (None = unseeded default)
        """
        self.catalog = tuple(catalog)
        self.rng = rng if rng is not None else np.random.default_rng()

    def by_genre(self, genre: Optional[str] = None) -> List[Movie]:
        """Movies tagged with genre; the whole catalog when genre is empty."""
        if not genre:
            return list(self.catalog)
        return [movie for movie in self.catalog if genre in movie.genres]

    def search(self, query: str) -> List[Movie]:
        """Case-insensitive substring match on titles."""
        lower_query = (query or "").lower()
        return [movie for movie in self.catalog if lower_query in movie.title.lower()]

    def browse(self, query: Optional[str] = None, genre: Optional[str] = None) -> List[Movie]:
        """
        Title search narrowed by genre; either filter may be omitted.

        Args:
            query: Title substring
            genre: Genre name

        Returns:
            Matching movies in catalog order
        """
        results = self.search(query) if query else list(self.catalog)
        if genre:
            results = [movie for movie in results if genre in movie.genres]
        return results

    def all_genres(self) -> List[str]:
        """Distinct genres across the catalog, sorted."""
        return sorted({genre for movie in self.catalog for genre in movie.genres})

    def to_dataframe(self) -> pd.DataFrame:
        """Catalog as a DataFrame, one row per movie."""
        return pd.DataFrame(
            [movie.to_dict() for movie in self.catalog],
            columns=["id", "title", "year", "genres", "director", "rating", "description"]
        )

    def statistics(self) -> CatalogStatistics:
        """
        Aggregate catalog figures.

        Returns:
            Movie count, distinct genre count and mean rating to one decimal
        """
        df = self.to_dataframe()
        total_movies = len(df)
        total_genres = int(df["genres"].explode().dropna().nunique()) if total_movies else 0
        average = float(df["rating"].mean()) if total_movies else 0.0

        return CatalogStatistics(
            total_movies=total_movies,
            total_genres=total_genres,
            average_rating=f"{round_half_up(average, 1):.1f}"
        )

    def sample_for_rating(
        self,
        n: Optional[int] = None,
        rng: Optional[np.random.Generator] = None
    ) -> List[Movie]:
        """
        Random distinct movies for a new user to rate.

        Args:
            n: Number of movies (default from config); larger than the catalog
               returns the whole catalog shuffled
            rng: Generator for this call only (None = service generator)

        Returns:
            Movies drawn without replacement, freshly shuffled on every call
        """
        n = validate_count(n if n is not None else get_rating_sample_size())
        generator = rng if rng is not None else self.rng

        order = generator.permutation(len(self.catalog))[:n]
        return [self.catalog[idx] for idx in order]
