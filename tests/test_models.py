import pytest

from backend.compatibility_engine.errors import RepositoryError
from backend.compatibility_engine.models.interest import InterestValue, index_by_item
from backend.compatibility_engine.models.preference_filter import PreferenceFilter
from backend.compatibility_engine.models.user_profile import UserProfile


def test_interest_from_joined_row():
	row = {"item_id": 7, "value": -1, "interest_items": {"id": 7, "label": "Jazz", "list_codes": ["music", "music", "late"]}}

	interest = InterestValue.from_row(row, user_id="u1")

	assert interest.user_id == "u1"
	assert interest.label == "Jazz"
	assert interest.categories == ("music", "late")
	assert not interest.liked


def test_interest_without_item_is_dropped():
	assert InterestValue.from_row({"item_id": 7, "value": 1, "interest_items": None}) is None


def test_interest_missing_codes_default_empty():
	interest = InterestValue.from_row({"user_id": "u", "item_id": 1, "value": 1, "interest_items": {"label": "x", "list_codes": None}})

	assert interest.categories == ()


@pytest.mark.parametrize("value", [0, 2, None, "1"])
def test_interest_value_must_be_signed_unit(value):
	with pytest.raises(RepositoryError):
		InterestValue.from_row({"user_id": "u", "item_id": 1, "value": value, "interest_items": {"label": "x"}})


def test_duplicate_item_rejected():
	first = InterestValue("u", 1, 1)
	with pytest.raises(RepositoryError):
		index_by_item([first, InterestValue("u", 1, -1)])


def test_profile_keeps_only_public_fields():
	profile = UserProfile({"id": 5, "display_name": "Eve", "age": 22, "email": "eve@example.com", "phone": "123"})

	assert profile.to_dict() == {
		"id": "5",
		"display_name": "Eve",
		"age": 22,
		"gender": None,
		"bio": None,
		"location_city": None,
		"location_country": None,
	}


def test_preference_filter_defaults_disable_everything():
	prefs = PreferenceFilter({"age_min": 0, "min_match_percent": 0, "preferred_genders": None})

	assert not prefs.has_profile_constraints
	assert prefs.accepts_score(-1.0)
	assert prefs.accepts_profile(UserProfile({"id": "x"}))


def test_preference_filter_bounds():
	prefs = PreferenceFilter({"preferred_genders": ["female"], "age_min": 20, "age_max": 30, "min_match_percent": 40})

	assert prefs.has_profile_constraints
	assert prefs.accepts_profile(UserProfile({"id": "x", "gender": "female", "age": 30}))
	assert not prefs.accepts_profile(UserProfile({"id": "x", "gender": "female", "age": None}))
	assert not prefs.accepts_profile(UserProfile({"id": "x", "gender": "male", "age": 25}))
	assert prefs.accepts_score(0.4)
	assert not prefs.accepts_score(0.39)
