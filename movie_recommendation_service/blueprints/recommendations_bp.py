"""Movie recommendation and catalog endpoints."""
import azure.functions as func
import logging
import json
from typing import Any, Dict

from movie_recommendation_service.config import (
    get_default_recommendation_count,
    get_max_recommendations,
    get_min_active_ratings,
    get_rating_sample_size,
)
from movie_recommendation_service.errors import RecommendationInputError
from movie_recommendation_service.services import RecommendationService

# Initialize blueprint
bp = func.Blueprint()

# Initialize service (singleton pattern)
recommendation_service = RecommendationService.from_loader()

logger = logging.getLogger(__name__)


class BadRequest(Exception):
    """Client input that should produce a 400 response."""


def _json_response(body: Any, status_code: int = 200) -> func.HttpResponse:
    return func.HttpResponse(
        json.dumps(body),
        status_code=status_code,
        mimetype="application/json"
    )


def _parse_count(value: Any, default: int) -> int:
    """Parse and bound the number of results a caller asked for."""
    if value is None or value == "":
        return default
    try:
        n = int(value)
    except (TypeError, ValueError):
        raise BadRequest("n must be an integer")

    max_n = get_max_recommendations()
    if n < 1 or n > max_n:
        raise BadRequest(f"n must be between 1 and {max_n}")
    return n


def _parse_movie_id(value: Any) -> int:
    """Accept a JSON integer or a string of digits; floats and booleans are rejected."""
    if isinstance(value, bool):
        raise BadRequest("movie_id must be an integer")
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value)
    raise BadRequest("movie_id must be an integer")


def _parse_ratings(raw: Any) -> Dict[int, float]:
    """Convert a JSON ratings object into movie id -> rating."""
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise BadRequest("ratings must be an object mapping movie id to rating")
    try:
        return {int(movie_id): float(rating) for movie_id, rating in raw.items()}
    except (TypeError, ValueError):
        raise BadRequest("ratings must map integer movie ids to numeric ratings")


def _get_body(req: func.HttpRequest) -> Dict:
    try:
        body = req.get_json()
    except ValueError:
        raise BadRequest("Request body must be valid JSON")
    if not isinstance(body, dict):
        raise BadRequest("Request body must be a JSON object")
    return body


@bp.route(route="movies/{movie_id}/recommendations", methods=["GET"], auth_level=func.AuthLevel.ANONYMOUS)
def get_content_recommendations(req: func.HttpRequest) -> func.HttpResponse:
    """
    Get content-based recommendations for a movie.

    Query Parameters:
        - n: Number of recommendations (default: 5, max: 50)
    """
    try:
        movie_id = req.route_params.get('movie_id')

        if not movie_id:
            return _json_response({"error": "movie_id is required"}, 400)

        try:
            movie_id = int(movie_id)
        except ValueError:
            return _json_response({"error": "movie_id must be an integer"}, 400)

        n = _parse_count(req.params.get('n'), get_default_recommendation_count())

        if recommendation_service.get_movie(movie_id) is None:
            return _json_response({
                "movie_id": movie_id,
                "recommendations": [],
                "message": "Movie not found"
            }, 404)

        recommendations = recommendation_service.recommend_by_content(movie_id, n)

        return _json_response({
            "movie_id": movie_id,
            "method": "Content",
            "count": len(recommendations),
            "recommendations": [rec.to_dict() for rec in recommendations]
        })

    except (BadRequest, RecommendationInputError) as e:
        return _json_response({"error": str(e)}, 400)
    except Exception as e:
        logger.error(f"Error getting content recommendations: {str(e)}", exc_info=True)
        return _json_response({"error": "Internal server error"}, 500)


@bp.route(route="recommendations/collaborative", methods=["POST"], auth_level=func.AuthLevel.ANONYMOUS)
def get_collaborative_recommendations(req: func.HttpRequest) -> func.HttpResponse:
    """
    Get recommendations from users with similar taste.

    Body:
        - ratings: Object mapping movie id to a rating in [1, 5]
        - n: Number of recommendations (default: 5, max: 50)
    """
    try:
        body = _get_body(req)
        ratings = _parse_ratings(body.get('ratings'))
        n = _parse_count(body.get('n'), get_default_recommendation_count())

        min_ratings = get_min_active_ratings()
        if len(ratings) < min_ratings:
            return _json_response(
                {"error": f"Please rate at least {min_ratings} movies to get personalized recommendations"},
                400
            )

        recommendations = recommendation_service.recommend_collaborative(ratings, n)

        return _json_response({
            "method": "Collaborative",
            "count": len(recommendations),
            "recommendations": [rec.to_dict() for rec in recommendations]
        })

    except (BadRequest, RecommendationInputError) as e:
        return _json_response({"error": str(e)}, 400)
    except Exception as e:
        logger.error(f"Error getting collaborative recommendations: {str(e)}", exc_info=True)
        return _json_response({"error": "Internal server error"}, 500)


@bp.route(route="recommendations/hybrid", methods=["POST"], auth_level=func.AuthLevel.ANONYMOUS)
def get_hybrid_recommendations(req: func.HttpRequest) -> func.HttpResponse:
    """
    Get hybrid recommendations for a movie and the caller's ratings.

    Body:
        - movie_id: Seed movie
        - ratings: Optional object mapping movie id to a rating in [1, 5]
        - n: Number of recommendations (default: 5, max: 50)
    """
    try:
        body = _get_body(req)

        movie_id = _parse_movie_id(body.get('movie_id'))

        ratings = _parse_ratings(body.get('ratings'))
        n = _parse_count(body.get('n'), get_default_recommendation_count())

        if recommendation_service.get_movie(movie_id) is None:
            return _json_response({
                "movie_id": movie_id,
                "recommendations": [],
                "message": "Movie not found"
            }, 404)

        recommendations = recommendation_service.recommend_hybrid(movie_id, ratings, n)

        return _json_response({
            "movie_id": movie_id,
            "method": "Hybrid",
            "count": len(recommendations),
            "recommendations": [rec.to_dict() for rec in recommendations]
        })

    except (BadRequest, RecommendationInputError) as e:
        return _json_response({"error": str(e)}, 400)
    except Exception as e:
        logger.error(f"Error getting hybrid recommendations: {str(e)}", exc_info=True)
        return _json_response({"error": "Internal server error"}, 500)


@bp.route(route="movies", methods=["GET"], auth_level=func.AuthLevel.ANONYMOUS)
def browse_movies(req: func.HttpRequest) -> func.HttpResponse:
    """
    Search the catalog.

    Query Parameters:
        - query: Case-insensitive title substring
        - genre: Genre name
    """
    try:
        movies = recommendation_service.queries.browse(
            query=req.params.get('query'),
            genre=req.params.get('genre')
        )
        return _json_response({
            "count": len(movies),
            "movies": [movie.to_dict() for movie in movies]
        })

    except Exception as e:
        logger.error(f"Error browsing movies: {str(e)}", exc_info=True)
        return _json_response({"error": "Internal server error"}, 500)


# noinspection PyUnusedLocal
@bp.route(route="movies/genres", methods=["GET"], auth_level=func.AuthLevel.ANONYMOUS)
def get_genres(req: func.HttpRequest) -> func.HttpResponse:
    """List the genres present in the catalog."""
    try:
        return _json_response({"genres": recommendation_service.queries.all_genres()})

    except Exception as e:
        logger.error(f"Error getting genres: {str(e)}", exc_info=True)
        return _json_response({"error": "Internal server error"}, 500)


@bp.route(route="movies/sample", methods=["GET"], auth_level=func.AuthLevel.ANONYMOUS)
def get_movies_to_rate(req: func.HttpRequest) -> func.HttpResponse:
    """
    Random movies for a new user to rate.

    Query Parameters:
        - n: Number of movies (default: 8, max: 50)
    """
    try:
        n = _parse_count(req.params.get('n'), get_rating_sample_size())
        movies = recommendation_service.queries.sample_for_rating(n)
        return _json_response({
            "count": len(movies),
            "movies": [movie.to_dict() for movie in movies]
        })

    except (BadRequest, RecommendationInputError) as e:
        return _json_response({"error": str(e)}, 400)
    except Exception as e:
        logger.error(f"Error sampling movies: {str(e)}", exc_info=True)
        return _json_response({"error": "Internal server error"}, 500)


# noinspection PyUnusedLocal
@bp.route(route="recommendations/stats", methods=["GET"])
def get_recommendation_stats(req: func.HttpRequest) -> func.HttpResponse:
    """
    Get statistics about the catalog and the recommendation system.
    """
    try:
        return _json_response(recommendation_service.get_stats())

    except Exception as e:
        logger.error(f"Error getting stats: {str(e)}", exc_info=True)
        return _json_response({"error": "Internal server error"}, 500)


# noinspection PyUnusedLocal
@bp.route(route="recommendations/health", methods=["GET"])
def health_check(req: func.HttpRequest) -> func.HttpResponse:
    """Health check endpoint."""
    return _json_response({
        "status": "healthy",
        "service": "movie-recommendation-service",
        "version": "1.0.0"
    })
