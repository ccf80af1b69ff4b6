from typing import Dict, Mapping, Tuple

from backend.compatibility_engine.config import ITEM_WEIGHT
from backend.compatibility_engine.models.interest import InterestValue
from backend.compatibility_engine.models.results import CategoryComparison


def common_categories(user_interest: InterestValue, other_interest: InterestValue):
    """
    Categories the item belongs to on both sides.

    The catalog can change between reads, so each side's list_codes are
    intersected rather than trusted to agree.
    """
    other_codes = set(other_interest.categories)
    return [code for code in user_interest.categories if code in other_codes]


def compare_by_category(
    user_interests: Mapping[int, InterestValue],
    other_interests: Mapping[int, InterestValue],
    weight: float = ITEM_WEIGHT,
) -> Tuple[Dict[str, CategoryComparison], int]:
    """
    Compare two users' interests category by category.

    Returns the comparisons keyed by category code, in discovery order, and
    the number of items both users hold.
    """
    comparisons = {}
    total_overlap = 0

    for item_id, user_interest in user_interests.items():
        other_interest = other_interests.get(item_id)
        if other_interest is None:
            continue

        total_overlap += 1
        for category in common_categories(user_interest, other_interest):
            comparison = comparisons.get(category)
            if comparison is None:
                comparison = comparisons[category] = CategoryComparison(category)
            comparison.record(user_interest.label, user_interest.value, other_interest.value, weight)

    return comparisons, total_overlap
