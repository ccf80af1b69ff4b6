import logging

from backend.compatibility_engine.config import ScoringConfig
from backend.compatibility_engine.errors import INVALID_PAIR, MISSING_PARAMETER, NotFoundError, ValidationError
from backend.compatibility_engine.models.interest import index_by_item
from backend.compatibility_engine.models.results import MatchDetails
from backend.compatibility_engine.scoring.aggregator import aggregate
from backend.compatibility_engine.scoring.category_matcher import compare_by_category

logger = logging.getLogger(__name__)


def sort_categories(comparisons):
    """Best-matching categories first; equal ratios fall back to category code."""
    return sorted(comparisons, key=lambda c: (-c.match_ratio, c.category))


class PairDetailBuilder:

    def __init__(self, repository, config: ScoringConfig = None):
        self.repository = repository
        self.config = config or ScoringConfig()

    def build_detail(self, user_id, other_user_id):
        """
        Full comparison between two users, including the liked, disliked and
        conflicting items behind every category score.
        """
        if not user_id or not other_user_id:
            raise ValidationError("user_id and other_user_id are required", MISSING_PARAMETER)
        user_id, other_user_id = str(user_id), str(other_user_id)
        if user_id == other_user_id:
            raise ValidationError("user_id and other_user_id must be different", INVALID_PAIR)

        profiles = {p.id: p for p in self.repository.fetch_profiles([user_id, other_user_id])}
        missing = [uid for uid in (user_id, other_user_id) if uid not in profiles]
        if missing:
            raise NotFoundError(missing)

        user_interests = self.repository.fetch_interests(user_id)
        other_interests = self.repository.fetch_interests(other_user_id)

        comparisons, total_overlap = compare_by_category(
            index_by_item(user_interests),
            index_by_item(other_interests),
            self.config.item_weight,
        )

        overall = aggregate(comparisons, total_overlap, self.config)
        overall.total_interests_user = len(user_interests)
        overall.total_interests_other = len(other_interests)

        logger.info(
            f"Match details {user_id} vs {other_user_id}: "
            f"{len(comparisons)} categories, overlap={total_overlap}, final={overall.final_match:.3f}"
        )

        return MatchDetails(
            user_id=user_id,
            other_user_id=other_user_id,
            user_profile=profiles[user_id],
            other_profile=profiles[other_user_id],
            categories=sort_categories(comparisons.values()),
            overall=overall,
        )
