class PreferenceFilter:
    """Stored match preferences of the acting user."""

    def __init__(self, data: dict = None):
        data = data or {}
        self.preferred_genders = list(data.get("preferred_genders") or [])
        self.age_min = data.get("age_min") or None
        self.age_max = data.get("age_max") or None
        self.min_match_percent = data.get("min_match_percent") or None

    @property
    def has_profile_constraints(self):
        return bool(self.preferred_genders) or self.age_min is not None or self.age_max is not None

    def accepts_profile(self, profile):
        """
        Check gender and age bounds against a profile.
        A bound on age excludes profiles with no age, as an SQL comparison would.
        """
        if self.preferred_genders and profile.gender not in self.preferred_genders:
            return False
        if self.age_min is not None and (profile.age is None or profile.age < self.age_min):
            return False
        if self.age_max is not None and (profile.age is None or profile.age > self.age_max):
            return False
        return True

    def accepts_score(self, final_match):
        if self.min_match_percent is None:
            return True
        return final_match >= self.min_match_percent / 100

    def __repr__(self):
        return (
            f"PreferenceFilter(preferred_genders={self.preferred_genders!r}, age_min={self.age_min!r}, "
            f"age_max={self.age_max!r}, min_match_percent={self.min_match_percent!r})"
        )
