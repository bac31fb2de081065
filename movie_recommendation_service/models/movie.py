"""Catalog movie record."""
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Tuple

from movie_recommendation_service.errors import DuplicateMovieIdError, InvalidMovieError

MIN_MOVIE_RATING = 0.0
MAX_MOVIE_RATING = 10.0


@dataclass(frozen=True)
class Movie:
    """A catalog movie. Immutable once loaded; identity is ``id``."""

    id: int
    title: str
    year: int
    genres: Tuple[str, ...]
    director: str
    rating: float
    description: str = ""

    def __post_init__(self):
        if isinstance(self.id, bool) or not isinstance(self.id, int) or self.id <= 0:
            raise InvalidMovieError(f"Movie id must be a positive integer, got {self.id!r}")
        if not self.genres:
            raise InvalidMovieError(f"Movie {self.id} has no genres")
        if not MIN_MOVIE_RATING <= self.rating <= MAX_MOVIE_RATING:
            raise InvalidMovieError(
                f"Movie {self.id} rating {self.rating!r} is outside "
                f"[{MIN_MOVIE_RATING:g}, {MAX_MOVIE_RATING:g}]"
            )
        if isinstance(self.genres, (list, set, frozenset)):
            object.__setattr__(self, "genres", tuple(self.genres))

    @classmethod
    def from_dict(cls, record: Dict[str, Any]) -> "Movie":
        """
        Build a Movie from a JSON-style record.

        Args:
            record: Dict with id, title, year, genres, director, rating, description

        Returns:
            Movie instance

        Raises:
            InvalidMovieError: If a required field is missing or malformed
        """
        if isinstance(record.get("genres"), str):
            raise InvalidMovieError(f"Movie genres must be a list, got {record['genres']!r}")
        try:
            fields = {
                "id": int(record["id"]),
                "title": str(record["title"]),
                "year": int(record["year"]),
                "genres": tuple(record["genres"]),
                "director": str(record.get("director") or ""),
                "rating": float(record["rating"]),
                "description": str(record.get("description") or ""),
            }
        except KeyError as e:
            raise InvalidMovieError(f"Movie record is missing field {e.args[0]!r}: {record!r}") from e
        except (TypeError, ValueError) as e:
            raise InvalidMovieError(f"Malformed movie record {record!r}: {e}") from e
        return cls(**fields)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "year": self.year,
            "genres": list(self.genres),
            "director": self.director,
            "rating": self.rating,
            "description": self.description,
        }

    def __repr__(self):
        return f"<Movie(id={self.id}, title='{self.title}', year={self.year})>"


def build_catalog(movies: Iterable[Movie]) -> Tuple[Movie, ...]:
    """
    Freeze a sequence of movies into a catalog, preserving order.

    Raises:
        DuplicateMovieIdError: If two movies share an id
    """
    seen = set()
    catalog = []
    for movie in movies:
        if movie.id in seen:
            raise DuplicateMovieIdError(movie.id)
        seen.add(movie.id)
        catalog.append(movie)
    return tuple(catalog)
