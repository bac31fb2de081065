"""Recommendation algorithms"""

from movie_recommendation_service.ml.collaborative_filtering import CollaborativeFilteringEngine
from movie_recommendation_service.ml.content_similarity import ContentSimilarityEngine
from movie_recommendation_service.ml.hybrid_ranker import HybridRanker

__all__ = [
    "ContentSimilarityEngine",
    "CollaborativeFilteringEngine",
    "HybridRanker",
]
