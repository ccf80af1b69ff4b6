import logging

from supabase import create_client, Client

from backend.compatibility_engine.errors import RepositoryError
from backend.compatibility_engine.interfaces.repository import InterestRepository
from backend.compatibility_engine.models.interest import InterestValue
from backend.compatibility_engine.models.preference_filter import PreferenceFilter
from backend.compatibility_engine.models.user_profile import PROFILE_FIELDS, UserProfile

logger = logging.getLogger(__name__)

PROFILE_COLUMNS = ", ".join(PROFILE_FIELDS)
INTEREST_COLUMNS = "user_id, item_id, value, interest_items:item_id (id, label, list_codes)"

# PostgREST caps a single response, so the population scan is read in pages
PAGE_SIZE = 1000


class SupabaseInterestRepository(InterestRepository):

    def __init__(self, url=None, key=None, client: Client = None, page_size=PAGE_SIZE):
        self.client = client or create_client(url, key)
        self.page_size = page_size

    @classmethod
    def from_settings(cls, settings):
        return cls(settings.supabase_url, settings.supabase_key)

    def fetch_profiles(self, user_ids):
        user_ids = [str(u) for u in user_ids]
        query = self.client.table("profiles").select(PROFILE_COLUMNS).in_("id", user_ids)
        return [UserProfile(row) for row in self._execute(query, "profiles")]

    def fetch_filtered_profiles(self, user_ids, preferences):
        user_ids = [str(u) for u in user_ids]
        query = self.client.table("profiles").select(PROFILE_COLUMNS).in_("id", user_ids)
        if preferences:
            if preferences.preferred_genders:
                query = query.in_("gender", preferences.preferred_genders)
            if preferences.age_min is not None:
                query = query.gte("age", preferences.age_min)
            if preferences.age_max is not None:
                query = query.lte("age", preferences.age_max)
        return [UserProfile(row) for row in self._execute(query, "filtered profiles")]

    def fetch_interests(self, user_id):
        query = self.client.table("user_interest_items").select(INTEREST_COLUMNS).eq("user_id", user_id)
        return self._to_interests(self._execute(query, "interests"), user_id)

    def fetch_interests_excluding(self, user_id):
        rows = []
        start = 0
        while True:
            query = (
                self.client.table("user_interest_items")
                .select(INTEREST_COLUMNS)
                .neq("user_id", user_id)
                .order("user_id")
                .order("item_id")
                .range(start, start + self.page_size - 1)
            )
            page = self._execute(query, "population interests")
            rows.extend(page)
            if len(page) < self.page_size:
                break
            start += self.page_size
        logger.debug(f"Fetched {len(rows)} population interest rows excluding {user_id}")
        return self._to_interests(rows)

    def fetch_preferences(self, user_id):
        query = self.client.table("user_preferences").select("*").eq("user_id", user_id).limit(1)
        rows = self._execute(query, "preferences")
        return PreferenceFilter(rows[0]) if rows else None

    @staticmethod
    def _to_interests(rows, user_id=None):
        interests = []
        for row in rows:
            interest = InterestValue.from_row(row, user_id)
            if interest is not None:
                interests.append(interest)
        return interests

    @staticmethod
    def _execute(query, what):
        try:
            response = query.execute()
        except Exception as e:
            logger.error(f"Error fetching {what}: {e}")
            raise RepositoryError(f"Error fetching {what}: {e}") from e
        return response.data or []
