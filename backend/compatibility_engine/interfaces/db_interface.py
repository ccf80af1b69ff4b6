import logging

import psycopg2
import psycopg2.extras

from backend.compatibility_engine.errors import RepositoryError
from backend.compatibility_engine.interfaces.repository import InterestRepository
from backend.compatibility_engine.models.interest import InterestValue
from backend.compatibility_engine.models.preference_filter import PreferenceFilter
from backend.compatibility_engine.models.user_profile import PROFILE_FIELDS, UserProfile

logger = logging.getLogger(__name__)

PROFILE_COLUMNS = ", ".join(PROFILE_FIELDS)

INTEREST_QUERY = """
    SELECT ui.user_id, ui.item_id, ui.value, ii.label, ii.list_codes
    FROM user_interest_items ui
    JOIN interest_items ii ON ii.id = ui.item_id
"""


class DatabaseInterface(InterestRepository):
    """Direct Postgres access to the same tables the Supabase backend reads."""

    def __init__(self, dbname=None, user=None, password=None, host=None, conn=None):
        try:
            self.conn = conn or psycopg2.connect(
                dbname=dbname,
                user=user,
                password=password,
                host=host
            )
        except psycopg2.Error as e:
            raise RepositoryError(f"Database connection failed: {e}") from e
        self.conn.autocommit = True
        self.cur = self.conn.cursor(cursor_factory=psycopg2.extras.RealDictCursor)

    @classmethod
    def from_settings(cls, settings):
        return cls(settings.pg_db, settings.pg_user, settings.pg_password, settings.pg_host)

    def fetch_profiles(self, user_ids):
        rows = self._query(
            f"SELECT {PROFILE_COLUMNS} FROM profiles WHERE id::text = ANY(%s)",
            ([str(u) for u in user_ids],)
        )
        return [UserProfile(row) for row in rows]

    def fetch_filtered_profiles(self, user_ids, preferences):
        sql = f"SELECT {PROFILE_COLUMNS} FROM profiles WHERE id::text = ANY(%s)"
        params = [[str(u) for u in user_ids]]
        if preferences:
            if preferences.preferred_genders:
                sql += " AND gender = ANY(%s)"
                params.append(list(preferences.preferred_genders))
            if preferences.age_min is not None:
                sql += " AND age >= %s"
                params.append(preferences.age_min)
            if preferences.age_max is not None:
                sql += " AND age <= %s"
                params.append(preferences.age_max)
        return [UserProfile(row) for row in self._query(sql, tuple(params))]

    def fetch_interests(self, user_id):
        rows = self._query(INTEREST_QUERY + " WHERE ui.user_id = %s", (user_id,))
        return [self._to_interest(row) for row in rows]

    def fetch_interests_excluding(self, user_id):
        rows = self._query(INTEREST_QUERY + " WHERE ui.user_id != %s ORDER BY ui.user_id, ui.item_id", (user_id,))
        return [self._to_interest(row) for row in rows]

    def fetch_preferences(self, user_id):
        rows = self._query("SELECT * FROM user_preferences WHERE user_id = %s LIMIT 1", (user_id,))
        return PreferenceFilter(dict(rows[0])) if rows else None

    @staticmethod
    def _to_interest(row):
        # reshape the flat join into the nested row InterestValue expects
        return InterestValue.from_row({
            "user_id": row["user_id"],
            "item_id": row["item_id"],
            "value": row["value"],
            "interest_items": {"label": row["label"], "list_codes": row["list_codes"]},
        })

    def _query(self, sql, params):
        try:
            self.cur.execute(sql, params)
            return self.cur.fetchall()
        except psycopg2.Error as e:
            logger.error(f"Database error: {e}")
            raise RepositoryError(f"Database error: {e}") from e

    def close(self):
        self.cur.close()
        self.conn.close()
