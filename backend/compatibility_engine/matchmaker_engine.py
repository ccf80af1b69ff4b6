from backend.compatibility_engine.config import ScoringConfig
from backend.compatibility_engine.errors import MISSING_PARAMETER, ValidationError
from backend.compatibility_engine.match_pool.pair_detail_builder import PairDetailBuilder
from backend.compatibility_engine.match_pool.population_ranker import PopulationRanker


class MatchMakerEngine:
    def __init__(self, repository, config: ScoringConfig = None):
        self.repository = repository
        self.config = config or ScoringConfig()
        self.details = PairDetailBuilder(repository, self.config)
        self.ranker = PopulationRanker(repository, self.config)

    def get_match_details(self, user_id, other_user_id):
        """
        Full comparison between two users
        """
        return self.details.build_detail(user_id, other_user_id)

    def get_matches(self, user_id):
        """
        Top matches for a user, filtered by their stored preferences
        """
        if not user_id:
            raise ValidationError("user_id is required", MISSING_PARAMETER)

        preferences = self.repository.fetch_preferences(str(user_id))
        return self.ranker.rank_matches(user_id, preferences)
