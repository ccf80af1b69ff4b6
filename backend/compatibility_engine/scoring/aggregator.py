import numpy as np

from backend.compatibility_engine.config import ScoringConfig
from backend.compatibility_engine.models.results import CompatibilityResult

DEFAULT_CONFIG = ScoringConfig()


def confidence_for(total_overlap, config: ScoringConfig = DEFAULT_CONFIG):
    return min(total_overlap / config.confidence_overlap_target, 1.0)


def damp(base_match, confidence, config: ScoringConfig = DEFAULT_CONFIG):
    """Scale the base match by confidence; zero confidence keeps confidence_floor of it."""
    floor = config.confidence_floor
    return base_match * (floor + (1 - floor) * confidence)


def aggregate(category_comparisons, total_overlap, config: ScoringConfig = DEFAULT_CONFIG):
    """
    Reduce per-category scores to a single CompatibilityResult.

    category_comparisons may be a mapping keyed by category code or any
    iterable of objects with a match_ratio.
    """
    if hasattr(category_comparisons, "values"):
        category_comparisons = category_comparisons.values()
    ratios = [c.match_ratio for c in category_comparisons]

    base_match = float(np.mean(ratios)) if ratios else 0.0
    confidence = confidence_for(total_overlap, config)

    return CompatibilityResult(
        base_match=base_match,
        confidence=confidence,
        final_match=damp(base_match, confidence, config),
        total_overlap=total_overlap,
    )
