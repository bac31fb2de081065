"""Shared test fixtures and configuration for pytest."""
import pytest
import numpy as np
from pathlib import Path
from typing import Dict, List
import tempfile
import json

from movie_recommendation_service.models import Movie, RatingProfile


# ===== Sample Data Fixtures =====

@pytest.fixture
def sample_movie_data() -> Dict:
    """Sample movie record for testing."""
    return {
        'id': 1,
        'title': 'The Dark Knight',
        'year': 2008,
        'genres': ['Action', 'Crime', 'Drama'],
        'director': 'Christopher Nolan',
        'rating': 9.0,
        'description': 'Batman faces the Joker.'
    }


@pytest.fixture
def sample_movies_list() -> List[Dict]:
    """List of sample movie records for testing."""
    return [
        {
            'id': 1,
            'title': 'Alpha',
            'year': 2000,
            'genres': ['Action', 'Drama'],
            'director': 'X',
            'rating': 8.0,
            'description': 'First movie.'
        },
        {
            'id': 2,
            'title': 'Beta',
            'year': 2000,
            'genres': ['Action', 'Comedy'],
            'director': 'Y',
            'rating': 8.0,
            'description': 'Second movie.'
        },
        {
            'id': 3,
            'title': 'Gamma',
            'year': 1990,
            'genres': ['Drama'],
            'director': 'X',
            'rating': 7.0,
            'description': 'Third movie.'
        },
        {
            'id': 4,
            'title': 'Delta Force',
            'year': 2010,
            'genres': ['Comedy', 'Romance'],
            'director': 'Z',
            'rating': 6.0,
            'description': 'Fourth movie.'
        },
        {
            'id': 5,
            'title': 'Epsilon',
            'year': 1950,
            'genres': ['Horror'],
            'director': 'W',
            'rating': 9.0,
            'description': 'Fifth movie.'
        }
    ]


@pytest.fixture
def sample_catalog(sample_movies_list) -> List[Movie]:
    """Sample catalog of Movie objects."""
    return [Movie.from_dict(record) for record in sample_movies_list]


@pytest.fixture
def sample_ratings_list() -> List[Dict]:
    """Sample rating-profile records, as stored in user_ratings.json."""
    return [
        {'userId': 'u1', 'ratings': {'1': 5, '2': 1, '3': 4, '4': 2}},
        {'userId': 'u2', 'ratings': {'1': 1, '2': 5, '3': 1, '5': 5}},
        {'userId': 'u3', 'ratings': {'3': 2}},
        {'userId': 'u4', 'ratings': {'1': 4, '2': 2, '3': 2, '5': 4}}
    ]


@pytest.fixture
def sample_profiles(sample_ratings_list) -> List[RatingProfile]:
    """Sample RatingProfile objects."""
    return [RatingProfile.from_dict(record) for record in sample_ratings_list]


@pytest.fixture
def active_ratings() -> Dict[int, float]:
    """Ratings of the user being served: loves movie 1, dislikes movie 2."""
    return {1: 5.0, 2: 1.0}


@pytest.fixture
def seeded_rng() -> np.random.Generator:
    """Deterministic random generator."""
    return np.random.default_rng(42)


# ===== Temporary Directory Fixtures =====

@pytest.fixture
def temp_data_dir():
    """Create a temporary directory for test data."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def temp_data_dir_with_files(temp_data_dir, sample_movies_list, sample_ratings_list):
    """Create a temporary directory with sample dataset files."""
    with open(temp_data_dir / 'movies.json', 'w') as f:
        json.dump(sample_movies_list, f)
    with open(temp_data_dir / 'user_ratings.json', 'w') as f:
        json.dump(sample_ratings_list, f)

    yield temp_data_dir


# ===== Configuration Fixtures =====

@pytest.fixture
def mock_config(monkeypatch, temp_data_dir_with_files):
    """Mock configuration values."""
    monkeypatch.setenv('MOVIE_DATA_DIR', str(temp_data_dir_with_files))
    monkeypatch.delenv('DATA_SERVICE_URL', raising=False)
    monkeypatch.setenv('DEFAULT_RECOMMENDATION_COUNT', '5')
    monkeypatch.setenv('MAX_RECOMMENDATIONS', '50')
    monkeypatch.setenv('RATING_SAMPLE_SIZE', '3')
    monkeypatch.setenv('MIN_ACTIVE_RATINGS', '3')


# ===== Service Fixtures =====

@pytest.fixture
def recommendation_service(sample_catalog, sample_profiles, seeded_rng):
    """RecommendationService over the sample datasets."""
    from movie_recommendation_service.services import RecommendationService
    return RecommendationService(sample_catalog, sample_profiles, rng=seeded_rng)


@pytest.fixture
def catalog_query_service(sample_catalog, seeded_rng):
    """CatalogQueryService over the sample catalog."""
    from movie_recommendation_service.services import CatalogQueryService
    return CatalogQueryService(sample_catalog, rng=seeded_rng)


# ===== Script Fixtures =====

@pytest.fixture
def mock_sys_argv(monkeypatch):
    """Mock sys.argv for script testing."""
    def _mock_argv(args):
        monkeypatch.setattr('sys.argv', args)
    return _mock_argv
