"""Service classes"""

from .catalog_query_service import CatalogQueryService
from .data_loader_service import DatasetLoader
from .recommendation_service import RecommendationService

__all__ = ["DatasetLoader", "CatalogQueryService", "RecommendationService"]
