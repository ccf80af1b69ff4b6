"""
Data source the engine reads from.

Backends turn their raw rows into InterestValue / UserProfile / PreferenceFilter
objects before anything reaches the scoring code, and wrap their own client
errors in RepositoryError.
"""

from abc import ABC, abstractmethod
from typing import Iterable, List, Optional

from backend.compatibility_engine.models.interest import InterestValue
from backend.compatibility_engine.models.preference_filter import PreferenceFilter
from backend.compatibility_engine.models.user_profile import UserProfile


class InterestRepository(ABC):

    @abstractmethod
    def fetch_profiles(self, user_ids: Iterable[str]) -> List[UserProfile]:
        """Profiles for the given ids; unknown ids are simply absent."""

    @abstractmethod
    def fetch_filtered_profiles(self, user_ids: Iterable[str], preferences: Optional[PreferenceFilter]) -> List[UserProfile]:
        """Profiles for the given ids that pass the gender / age constraints."""

    @abstractmethod
    def fetch_interests(self, user_id: str) -> List[InterestValue]:
        """All interest values of one user."""

    @abstractmethod
    def fetch_interests_excluding(self, user_id: str) -> List[InterestValue]:
        """Interest values of every user except user_id, in one pass."""

    @abstractmethod
    def fetch_preferences(self, user_id: str) -> Optional[PreferenceFilter]:
        """Stored preferences, or None when the user has none."""

    def close(self):
        pass
