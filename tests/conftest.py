import pytest

from backend.compatibility_engine.interfaces.memory_repository import InMemoryInterestRepository
from backend.compatibility_engine.matchmaker_engine import MatchMakerEngine


@pytest.fixture
def repo():
	repository = InMemoryInterestRepository()
	repository.add_profile("user-a", display_name="Ada", age=30, gender="female", bio="hi", location_city="Oslo", location_country="NO", email="hidden@example.com")
	repository.add_profile("user-b", display_name="Ben", age=34, gender="male", bio=None, location_city="Bergen", location_country="NO")
	return repository


@pytest.fixture
def music_repo(repo):
	"""A likes items 1 and 2; B likes 1 and dislikes 2, all in music."""
	repo.add_interest("user-a", 1, 1, label="item1-label", categories=["music"])
	repo.add_interest("user-a", 2, 1, label="item2-label", categories=["music"])
	repo.add_interest("user-b", 1, 1, label="item1-label", categories=["music"])
	repo.add_interest("user-b", 2, -1, label="item2-label", categories=["music"])
	return repo


@pytest.fixture
def engine(repo):
	return MatchMakerEngine(repo)
