from types import SimpleNamespace
from unittest.mock import MagicMock

import psycopg2
import pytest

from backend.compatibility_engine.errors import RepositoryError
from backend.compatibility_engine.interfaces.db_interface import DatabaseInterface
from backend.compatibility_engine.interfaces.supabase_repository import SupabaseInterestRepository
from backend.compatibility_engine.models.preference_filter import PreferenceFilter


class FakeQuery:
	"""Records the builder calls of one supabase table query."""

	def __init__(self, pages, calls):
		self.pages = pages
		self.calls = calls

	def __getattr__(self, name):
		def method(*args):
			self.calls.append((name, args))
			return self
		return method

	def execute(self):
		page = self.pages.pop(0)
		if isinstance(page, Exception):
			raise page
		return SimpleNamespace(data=page)


class FakeClient:
	def __init__(self, **tables):
		self.tables = tables
		self.calls = []

	def table(self, name):
		self.calls.append(("table", (name,)))
		return FakeQuery(self.tables[name], self.calls)


def interest_row(user_id, item_id, value, codes):
	return {"user_id": user_id, "item_id": item_id, "value": value, "interest_items": {"id": item_id, "label": f"i{item_id}", "list_codes": codes}}


def test_supabase_interests_are_typed():
	client = FakeClient(user_interest_items=[[
		interest_row("a", 1, 1, ["music"]),
		{"user_id": "a", "item_id": 2, "value": 1, "interest_items": None},
	]])
	repo = SupabaseInterestRepository(client=client)

	interests = repo.fetch_interests("a")

	assert [(i.item_id, i.categories) for i in interests] == [(1, ("music",))]
	assert ("eq", ("user_id", "a")) in client.calls


def test_supabase_population_scan_pages():
	client = FakeClient(user_interest_items=[
		[interest_row("b", 1, 1, ["x"]), interest_row("b", 2, -1, ["x"])],
		[interest_row("c", 1, 1, ["x"])],
	])
	repo = SupabaseInterestRepository(client=client, page_size=2)

	rows = repo.fetch_interests_excluding("a")

	assert [r.user_id for r in rows] == ["b", "b", "c"]
	assert ("neq", ("user_id", "a")) in client.calls
	assert ("range", (0, 1)) in client.calls
	assert ("range", (2, 3)) in client.calls


def test_supabase_filtered_profiles_apply_constraints():
	client = FakeClient(profiles=[[{"id": "b", "display_name": "B", "age": 30, "gender": "male", "secret": 1}]])
	repo = SupabaseInterestRepository(client=client)
	prefs = PreferenceFilter({"preferred_genders": ["male"], "age_min": 18, "age_max": 40})

	profiles = repo.fetch_filtered_profiles(["b", "c"], prefs)

	assert [p.id for p in profiles] == ["b"]
	assert ("in_", ("gender", ["male"])) in client.calls
	assert ("gte", ("age", 18)) in client.calls
	assert ("lte", ("age", 40)) in client.calls


def test_supabase_missing_preferences_is_none():
	repo = SupabaseInterestRepository(client=FakeClient(user_preferences=[[]]))

	assert repo.fetch_preferences("a") is None


def test_supabase_errors_are_wrapped():
	repo = SupabaseInterestRepository(client=FakeClient(profiles=[RuntimeError("timeout")]))

	with pytest.raises(RepositoryError) as exc:
		repo.fetch_profiles(["a"])
	assert isinstance(exc.value.__cause__, RuntimeError)


def make_db(rows=None, error=None):
	conn = MagicMock()
	cursor = conn.cursor.return_value
	cursor.fetchall.return_value = rows or []
	if error:
		cursor.execute.side_effect = error
	return DatabaseInterface(conn=conn), cursor


def test_db_interests_reshape_join():
	db, cursor = make_db([{"user_id": "b", "item_id": 3, "value": -1, "label": "Tea", "list_codes": ["food"]}])

	interests = db.fetch_interests_excluding("a")

	assert interests[0].label == "Tea"
	assert interests[0].categories == ("food",)
	sql, params = cursor.execute.call_args[0]
	assert "ui.user_id != %s" in sql
	assert params == ("a",)


def test_db_filtered_profiles_build_where_clause():
	db, cursor = make_db([{"id": "b", "display_name": "B"}])

	db.fetch_filtered_profiles(["b"], PreferenceFilter({"preferred_genders": ["f"], "age_max": 30}))

	sql, params = cursor.execute.call_args[0]
	assert "gender = ANY(%s)" in sql
	assert "age <= %s" in sql
	assert "age >= %s" not in sql
	assert params == (["b"], ["f"], 30)


def test_db_errors_are_wrapped():
	db, _ = make_db(error=psycopg2.OperationalError("gone"))

	with pytest.raises(RepositoryError):
		db.fetch_preferences("a")
