"""Unit tests for RecommendationService."""

from unittest.mock import Mock

import pytest

from movie_recommendation_service.errors import (
    DuplicateMovieIdError,
    InvalidCountError,
    RatingOutOfRangeError,
)
from movie_recommendation_service.models import METHOD_HYBRID
from movie_recommendation_service.services import RecommendationService
from movie_recommendation_service.services.data_loader_service import DatasetLoader


class TestRecommendationServiceInit:
    """Tests for RecommendationService initialization."""

    def test_init_freezes_datasets(self, sample_catalog, sample_profiles):
        """Test that catalog and profiles are stored as tuples."""
        # Act
        service = RecommendationService(sample_catalog, sample_profiles)

        # Assert
        assert isinstance(service.catalog, tuple)
        assert isinstance(service.profiles, tuple)
        assert len(service.catalog) == 5
        assert len(service.profiles) == 4

    def test_init_rejects_duplicate_ids(self, sample_catalog, sample_profiles):
        """Test a catalog with a repeated id is rejected."""
        # Act & Assert
        with pytest.raises(DuplicateMovieIdError):
            RecommendationService(sample_catalog + [sample_catalog[0]], sample_profiles)

    def test_from_loader(self, temp_data_dir_with_files):
        """Test building the service from a DatasetLoader."""
        # Act
        service = RecommendationService.from_loader(DatasetLoader(data_dir=temp_data_dir_with_files))

        # Assert
        assert len(service.catalog) == 5
        assert len(service.profiles) == 4

    def test_from_loader_uses_loader_methods(self, sample_catalog, sample_profiles):
        """Test from_loader reads both datasets from the loader."""
        # Arrange
        loader = Mock()
        loader.load_catalog.return_value = tuple(sample_catalog)
        loader.load_rating_profiles.return_value = tuple(sample_profiles)

        # Act
        service = RecommendationService.from_loader(loader)

        # Assert
        loader.load_catalog.assert_called_once()
        loader.load_rating_profiles.assert_called_once()
        assert service.get_movie(3).title == 'Gamma'


class TestGetMovie:
    """Tests for get_movie method."""

    def test_get_movie_found(self, recommendation_service):
        """Test lookup by id."""
        # Act & Assert
        assert recommendation_service.get_movie(1).title == 'Alpha'

    def test_get_movie_not_found(self, recommendation_service):
        """Test lookup of an unknown id."""
        # Act & Assert
        assert recommendation_service.get_movie(999) is None


class TestRecommendByContent:
    """Tests for recommend_by_content method."""

    def test_recommend_by_content(self, recommendation_service):
        """Test content recommendations for a known movie."""
        # Act
        result = recommendation_service.recommend_by_content(1, count=2)

        # Assert
        assert [rec.id for rec in result] == [3, 2]

    def test_recommend_by_content_default_count(self, recommendation_service, monkeypatch):
        """Test that the default count comes from config."""
        # Arrange
        monkeypatch.setenv('DEFAULT_RECOMMENDATION_COUNT', '3')

        # Act
        result = recommendation_service.recommend_by_content(1)

        # Assert
        assert len(result) == 3

    def test_recommend_by_content_unknown_movie(self, recommendation_service):
        """Test that an unknown movie yields an empty list."""
        # Act & Assert
        assert recommendation_service.recommend_by_content(999) == []

    def test_recommend_by_content_invalid_count(self, recommendation_service):
        """Test that count <= 0 raises."""
        # Act & Assert
        with pytest.raises(InvalidCountError):
            recommendation_service.recommend_by_content(1, count=0)


class TestRecommendCollaborative:
    """Tests for recommend_collaborative method."""

    def test_recommend_collaborative(self, recommendation_service, active_ratings):
        """Test collaborative recommendations for the active user."""
        # Act
        result = recommendation_service.recommend_collaborative(active_ratings, count=5)

        # Assert
        assert [rec.id for rec in result] == [5, 3, 4]

    def test_recommend_collaborative_does_not_keep_ratings(self, recommendation_service, active_ratings):
        """Test that caller ratings are not added to the historical profiles."""
        # Act
        recommendation_service.recommend_collaborative(active_ratings, count=5)

        # Assert
        assert len(recommendation_service.profiles) == 4

    def test_recommend_collaborative_rejects_out_of_range(self, recommendation_service):
        """Test that a rating outside 1-5 raises."""
        # Act & Assert
        with pytest.raises(RatingOutOfRangeError):
            recommendation_service.recommend_collaborative({1: 0.0, 2: 5.0}, count=5)


class TestRecommendHybrid:
    """Tests for recommend_hybrid method."""

    def test_recommend_hybrid(self, recommendation_service, active_ratings):
        """Test hybrid recommendations are labelled and ranked."""
        # Act
        result = recommendation_service.recommend_hybrid(1, active_ratings, count=2)

        # Assert
        assert [rec.id for rec in result] == [3, 5]
        assert all(rec.method == METHOD_HYBRID for rec in result)

    def test_recommend_hybrid_without_ratings(self, recommendation_service):
        """Test hybrid ranking with no ratings falls back to content scores."""
        # Act
        result = recommendation_service.recommend_hybrid(1, {}, count=5)

        # Assert
        assert [rec.id for rec in result] == [3, 2, 4, 5]
        assert [rec.similarity_score for rec in result] == [41, 28, 13, 7]

    def test_recommend_hybrid_rejects_out_of_range(self, recommendation_service):
        """Test that a rating outside 1-5 raises."""
        # Act & Assert
        with pytest.raises(RatingOutOfRangeError):
            recommendation_service.recommend_hybrid(1, {1: 5.5}, count=5)


class TestGetStats:
    """Tests for get_stats method."""

    def test_get_stats(self, recommendation_service):
        """Test statistics include catalog figures and engine settings."""
        # Act
        stats = recommendation_service.get_stats()

        # Assert
        assert stats['catalog'] == {'totalMovies': 5, 'totalGenres': 5, 'averageRating': '7.6'}
        assert stats['rating_profiles'] == 4
        assert stats['weights']['genre'] == 0.5
        assert stats['weights']['hybrid_content'] == 0.6
        assert stats['neighbor_count'] == 5
