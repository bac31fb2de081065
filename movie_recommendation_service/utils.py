"""Small numeric helpers shared by the recommenders."""
import math
from numbers import Integral

from movie_recommendation_service.errors import InvalidCountError


def round_half_up(value: float, ndigits: int = 0) -> float | int:
    """
    Round to the nearest value, halves toward positive infinity.

    Python's round() uses banker's rounding; scores here round 36.5 up to 37.

    Args:
        value: Number to round
        ndigits: Decimal places to keep

    Returns:
        int when ndigits is 0, otherwise float
    """
    if ndigits == 0:
        return int(math.floor(value + 0.5))
    factor = 10 ** ndigits
    return math.floor(value * factor + 0.5) / factor


def validate_count(count) -> int:
    """Reject non-integer or non-positive result counts."""
    if isinstance(count, bool) or not isinstance(count, Integral) or count <= 0:
        raise InvalidCountError(count)
    return int(count)
