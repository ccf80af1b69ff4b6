import logging

from backend.compatibility_engine.config import ScoringConfig
from backend.compatibility_engine.models.interest import duplicate_interest, index_by_item
from backend.compatibility_engine.models.results import CategoryTally, MatchResult
from backend.compatibility_engine.scoring.aggregator import aggregate
from backend.compatibility_engine.scoring.category_matcher import common_categories

logger = logging.getLogger(__name__)


class CandidateTally:
    """Per-candidate accumulator filled during the population scan."""

    def __init__(self):
        self.categories = {}
        self.overlap_count = 0

    def add(self, categories, user_value, other_value, weight):
        self.overlap_count += 1
        for category in categories:
            tally = self.categories.get(category)
            if tally is None:
                tally = self.categories[category] = CategoryTally(category)
            tally.add(user_value, other_value, weight)


class PopulationRanker:

    def __init__(self, repository, config: ScoringConfig = None):
        self.repository = repository
        self.config = config or ScoringConfig()

    def rank_matches(self, user_id, preferences=None):
        """
        Top matches for user_id across every other user sharing at least one
        categorized item, best first.
        """
        user_id = str(user_id)
        own = index_by_item(self.repository.fetch_interests(user_id))
        if not own:
            logger.info(f"User {user_id} has no interests, no matches")
            return []

        candidates = self.scan_population(user_id, own)
        if not candidates:
            return []

        profiles = self.repository.fetch_filtered_profiles(list(candidates), preferences)

        results = []
        for profile in profiles:
            tally = candidates.get(profile.id)
            if tally is None:
                continue

            overall = aggregate(tally.categories, tally.overlap_count, self.config)
            if preferences and not preferences.accepts_score(overall.final_match):
                continue

            results.append(MatchResult(
                profile=profile,
                base_match=overall.base_match,
                confidence=overall.confidence,
                final_match=overall.final_match,
                overlap_count=tally.overlap_count,
                matched_categories=list(tally.categories.values()),
            ))

        results.sort(key=lambda r: (-r.final_match, r.user_id))
        logger.info(
            f"Ranked {len(results)} of {len(candidates)} candidates for user {user_id}, "
            f"returning {min(len(results), self.config.max_matches)}"
        )
        return results[:self.config.max_matches]

    def scan_population(self, user_id, own):
        """Single pass over every other user's interest rows."""
        candidates = {}
        seen = set()
        weight = self.config.item_weight

        for other in self.repository.fetch_interests_excluding(user_id):
            key = (other.user_id, other.item_id)
            if key in seen:
                raise duplicate_interest(other)
            seen.add(key)

            mine = own.get(other.item_id)
            if mine is None:
                continue
            categories = common_categories(mine, other)
            if not categories:
                continue

            tally = candidates.get(other.user_id)
            if tally is None:
                tally = candidates[other.user_id] = CandidateTally()
            tally.add(categories, mine.value, other.value, weight)

        return candidates
