"""
Bucket ladder helpers for histograms.
"""

from metrics_core.core.exceptions import InvalidValue
from metrics_core.core.validators import validate_buckets


def linear_buckets(start: float, width: float, count: int) -> tuple[float, ...]:
    """
    ``count`` buckets, the first at ``start``, each ``width`` above the previous.

    Example:
        linear_buckets(1, 2, 3) -> (1.0, 3.0, 5.0)
    """
    if count < 1:
        raise InvalidValue("Bucket count must be at least 1", value=count)
    if width <= 0:
        raise InvalidValue("Bucket width must be positive", value=width)
    return validate_buckets([start + width * i for i in range(count)])


def exponential_buckets(start: float, factor: float, count: int) -> tuple[float, ...]:
    """
    ``count`` buckets, the first at ``start``, each ``factor`` times the previous.

    Example:
        exponential_buckets(0.01, 10, 3) -> (0.01, 0.1, 1.0)
    """
    if count < 1:
        raise InvalidValue("Bucket count must be at least 1", value=count)
    if start <= 0:
        raise InvalidValue("Exponential buckets need a positive start", value=start)
    if factor <= 1:
        raise InvalidValue("Exponential bucket factor must be greater than 1", value=factor)
    return validate_buckets([start * factor**i for i in range(count)])
