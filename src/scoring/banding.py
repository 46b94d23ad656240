"""Helpers shared by the banded category scorers."""
import math


def lerp(low: float, high: float, fraction: float) -> float:
    """Linear interpolation from low to high, fraction clamped to [0, 1]."""
    if not math.isfinite(fraction):
        fraction = 0.0
    fraction = max(0.0, min(1.0, fraction))
    return low + (high - low) * fraction


def clamp_score(score: float) -> float:
    """Clamp a category score to [0, 10]; non-finite scores become 0."""
    if not math.isfinite(score):
        return 0.0
    return max(0.0, min(10.0, score))


def safe_percentage(value: float, total: float) -> float:
    """value / total * 100, or 0 when total is 0."""
    if total == 0:
        return 0.0
    return value / total * 100


def population_std_dev(values: list[float]) -> float:
    if not values:
        return 0.0
    mean = sum(values) / len(values)
    return math.sqrt(sum((v - mean) ** 2 for v in values) / len(values))
