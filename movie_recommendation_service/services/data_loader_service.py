"""Service to load the movie catalog and rating profiles from disk or a data service"""
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple
import json
import logging
import requests

from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from movie_recommendation_service.config import get_data_dir, get_data_service_url
from movie_recommendation_service.models import (
    Movie,
    RatingProfile,
    build_catalog,
    build_profiles,
)

logger = logging.getLogger(__name__)

MOVIES_FILENAME = "movies.json"
RATINGS_FILENAME = "user_ratings.json"


class DatasetLoader:
    """Load the immutable datasets the recommenders work from."""

    def __init__(
            self,
            data_dir: Optional[Path] = None,
            data_service_url: Optional[str] = None
    ):
        """
        Initialize the loader.

        Args:
            data_dir: Directory with movies.json and user_ratings.json (default from config)
            data_service_url: Base URL of a movie data service; when set, takes precedence
                over the local directory (default from config)
        """
        self.data_dir = Path(data_dir) if data_dir is not None else get_data_dir()
        self.data_service_url = data_service_url or get_data_service_url()

        # Configure session with retries
        self.session = requests.Session()
        retry_strategy = Retry(
            total=3,
            backoff_factor=1,
            status_forcelist=[429, 500, 502, 503, 504]
        )
        adapter = HTTPAdapter(max_retries=retry_strategy)
        # noinspection HttpUrlsUsage
        self.session.mount("http://", adapter)
        self.session.mount("https://", adapter)

        if self.data_service_url:
            logger.info(f"Using data service: {self.data_service_url}")
        else:
            logger.info(f"Using local data directory: {self.data_dir}")

    # ===== RAW RECORDS =====

    def _read_local(self, filename: str) -> Any:
        path = self.data_dir / filename
        if not path.exists():
            raise FileNotFoundError(f"Dataset file not found: {path}")
        with open(path) as f:
            return json.load(f)

    def _fetch_remote(self, endpoint: str) -> Any:
        url = f"{self.data_service_url}/{endpoint}"
        response = self.session.get(url, timeout=10)
        response.raise_for_status()
        return response.json()

    def get_movie_records(self) -> List[Dict]:
        """Fetch raw movie records"""
        if self.data_service_url:
            return self._fetch_remote("movies")
        return self._read_local(MOVIES_FILENAME)

    def get_rating_records(self) -> List[Dict]:
        """Fetch raw rating-profile records"""
        if self.data_service_url:
            return self._fetch_remote("user-ratings")
        return self._read_local(RATINGS_FILENAME)

    # ===== DOMAIN OBJECTS =====

    def load_catalog(self) -> Tuple[Movie, ...]:
        """
        Load and validate the movie catalog.

        Returns:
            Movies in dataset order

        Raises:
            InvalidMovieError: If a record is malformed
            DuplicateMovieIdError: If two records share an id
        """
        records = self.get_movie_records()
        catalog = build_catalog(Movie.from_dict(record) for record in records)
        logger.info(f"✓ Loaded {len(catalog)} movies")
        return catalog

    def load_rating_profiles(self) -> Tuple[RatingProfile, ...]:
        """
        Load and validate historical rating profiles.

        Returns:
            Profiles in dataset order

        Raises:
            RatingOutOfRangeError: If any rating is outside [1, 5]
        """
        records = self.get_rating_records()
        profiles = build_profiles(RatingProfile.from_dict(record) for record in records)
        logger.info(f"✓ Loaded {len(profiles)} rating profiles")
        return profiles
