"""
Print movie recommendations from the local datasets.
Useful for checking the recommenders without running the Functions host.
"""

import sys
from pathlib import Path

# Add parent directory to path
project_root = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(project_root))

import argparse
import logging

from movie_recommendation_service.services import DatasetLoader, RecommendationService

# Configure logging
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

logger = logging.getLogger(__name__)

METHODS = ("content", "collaborative", "hybrid")


def parse_ratings(value: str | None) -> dict:
    """
    Parse ratings given as ``movie_id=rating`` pairs.

    Args:
        value: Comma-separated pairs, e.g. "1=5,2=1"

    Returns:
        Dictionary of movie id to rating
    """
    if not value:
        return {}

    ratings = {}
    for pair in value.split(","):
        pair = pair.strip()
        if not pair:
            continue
        if "=" not in pair:
            raise argparse.ArgumentTypeError(f"Invalid rating '{pair}', expected movie_id=rating")
        movie_id, rating = pair.split("=", 1)
        try:
            ratings[int(movie_id)] = float(rating)
        except ValueError:
            raise argparse.ArgumentTypeError(f"Invalid rating '{pair}', expected movie_id=rating")
    return ratings


def run_recommendations(
    service: RecommendationService,
    method: str,
    movie_id: int | None,
    ratings: dict,
    count: int,
) -> list:
    """
    Dispatch to the requested recommender.

    Args:
        service: Recommendation service
        method: One of content, collaborative, hybrid
        movie_id: Seed movie (content and hybrid)
        ratings: Caller ratings (collaborative and hybrid)
        count: Number of recommendations

    Returns:
        List of ScoredMovies
    """
    if method in ("content", "hybrid") and movie_id is None:
        raise ValueError(f"--movie-id is required for {method} recommendations")

    if method == "content":
        return service.recommend_by_content(movie_id, count)
    if method == "collaborative":
        return service.recommend_collaborative(ratings, count)
    return service.recommend_hybrid(movie_id, ratings, count)


def log_recommendations(recommendations: list):
    """Log one line per recommendation."""
    if not recommendations:
        logger.info("No recommendations found")
        return

    for rank, rec in enumerate(recommendations, start=1):
        line = f"{rank:>2}. {rec.movie.title} ({rec.movie.year}) - match {rec.similarity_score}%"
        if rec.predicted_rating is not None:
            line += f", predicted {rec.predicted_rating:.1f}/5"
        if rec.method:
            line += f" [{rec.method}]"
        logger.info(line)


def log_matrix_stats(service: RecommendationService):
    """Log the distribution of pairwise content similarity across the catalog."""
    engine = service.content_engine
    matrix = engine.compute_similarity_matrix(service.catalog)
    stats = engine.get_similarity_statistics(matrix)

    logger.info("=" * 70)
    logger.info("CONTENT SIMILARITY STATISTICS")
    logger.info("=" * 70)
    logger.info(f"  Mean: {stats['mean']:.4f}")
    logger.info(f"  Std:  {stats['std']:.4f}")
    logger.info(f"  Min:  {stats['min']:.4f}")
    logger.info(f"  Max:  {stats['max']:.4f}")
    logger.info(f"  Median: {stats['median']:.4f}")


def main():
    """Main execution function."""
    parser = argparse.ArgumentParser(
        description="Print movie recommendations from the local datasets"
    )
    parser.add_argument(
        "--method",
        choices=METHODS,
        default="content",
        help="Recommendation method (default: content)",
    )
    parser.add_argument("--movie-id", type=int, default=None, help="Seed movie id")
    parser.add_argument(
        "--ratings",
        type=parse_ratings,
        default={},
        help="Your ratings as movie_id=rating pairs, e.g. 1=5,2=1",
    )
    parser.add_argument(
        "--count", type=int, default=5, help="Number of recommendations (default: 5)"
    )
    parser.add_argument(
        "--data-dir",
        type=str,
        default="data",
        help="Directory with movies.json and user_ratings.json (default: data)",
    )
    parser.add_argument(
        "--matrix-stats",
        action="store_true",
        help="Also report pairwise content similarity statistics for the catalog",
    )

    args = parser.parse_args()

    data_dir = project_root / args.data_dir

    logger.info("=" * 70)
    logger.info(f"MOVIE RECOMMENDATIONS - {args.method.upper()}")
    logger.info("=" * 70)
    logger.info(f"Data directory: {data_dir}")

    try:
        service = RecommendationService.from_loader(DatasetLoader(data_dir=data_dir))

        if args.movie_id is not None:
            movie = service.get_movie(args.movie_id)
            if movie is None:
                logger.warning(f"Movie ID {args.movie_id} not found in catalog")
            else:
                logger.info(f"Seed movie: {movie.title} ({movie.year})")

        recommendations = run_recommendations(
            service, args.method, args.movie_id, args.ratings, args.count
        )
        log_recommendations(recommendations)

        if args.matrix_stats:
            log_matrix_stats(service)

        return recommendations

    except Exception as e:
        logger.error(f"Error computing recommendations: {str(e)}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
