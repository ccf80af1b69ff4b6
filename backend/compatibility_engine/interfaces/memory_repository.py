from backend.compatibility_engine.interfaces.repository import InterestRepository
from backend.compatibility_engine.models.interest import InterestValue
from backend.compatibility_engine.models.preference_filter import PreferenceFilter
from backend.compatibility_engine.models.user_profile import UserProfile


class InMemoryInterestRepository(InterestRepository):
    """
    Repository held in plain dicts. Used by the tests and for local runs
    without a database.
    """

    def __init__(self):
        self.profiles = {}
        self.interests = {}
        self.preferences = {}

    def add_profile(self, user_id, **fields):
        self.profiles[str(user_id)] = UserProfile(dict(fields, id=user_id))
        self.interests.setdefault(str(user_id), [])

    def add_interest(self, user_id, item_id, value, label=None, categories=()):
        self.interests.setdefault(str(user_id), []).append(InterestValue.from_row({
            "user_id": user_id,
            "item_id": item_id,
            "value": value,
            "interest_items": {"label": label or f"item{item_id}", "list_codes": list(categories)},
        }))

    def set_preferences(self, user_id, **fields):
        self.preferences[str(user_id)] = PreferenceFilter(fields)

    def fetch_profiles(self, user_ids):
        return [self.profiles[str(u)] for u in user_ids if str(u) in self.profiles]

    def fetch_filtered_profiles(self, user_ids, preferences):
        profiles = self.fetch_profiles(user_ids)
        if preferences is None or not preferences.has_profile_constraints:
            return profiles
        return [p for p in profiles if preferences.accepts_profile(p)]

    def fetch_interests(self, user_id):
        return list(self.interests.get(str(user_id), []))

    def fetch_interests_excluding(self, user_id):
        return [
            interest
            for owner, interests in self.interests.items()
            if owner != str(user_id)
            for interest in interests
        ]

    def fetch_preferences(self, user_id):
        return self.preferences.get(str(user_id))
