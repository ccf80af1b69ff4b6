PROFILE_FIELDS = (
    "id",
    "display_name",
    "age",
    "gender",
    "bio",
    "location_city",
    "location_country",
)


class UserProfile:
    """Trimmed profile projection; nothing else from the profiles row is exposed."""

    def __init__(self, data: dict):
        self.id = str(data.get("id"))
        self.display_name = data.get("display_name")
        self.age = data.get("age")
        self.gender = data.get("gender")
        self.bio = data.get("bio")
        self.location_city = data.get("location_city")
        self.location_country = data.get("location_country")

    def to_dict(self):
        return {field: getattr(self, field) for field in PROFILE_FIELDS}

    def __eq__(self, other):
        return isinstance(other, UserProfile) and self.to_dict() == other.to_dict()

    def __repr__(self):
        return f"UserProfile(id={self.id!r}, display_name={self.display_name!r})"
