"""Errors raised by the compatibility engine."""

MISSING_PARAMETER = "MISSING_PARAMETER"
INVALID_PAIR = "INVALID_PAIR"
PROFILES_NOT_FOUND = "PROFILES_NOT_FOUND"
INTERNAL_ERROR = "INTERNAL_ERROR"


class CompatibilityError(Exception):
    """Base class for engine errors."""

    code = INTERNAL_ERROR
    status_code = 500

    def __init__(self, message, code=None):
        super().__init__(message)
        self.message = message
        if code:
            self.code = code

    def to_dict(self):
        return {"error": self.message, "code": self.code}


class ValidationError(CompatibilityError):
    code = MISSING_PARAMETER
    status_code = 400


class NotFoundError(CompatibilityError):
    code = PROFILES_NOT_FOUND
    status_code = 404

    def __init__(self, missing_ids):
        self.missing_ids = list(missing_ids)
        super().__init__(f"Profiles not found: {', '.join(str(i) for i in self.missing_ids)}")

    def to_dict(self):
        payload = super().to_dict()
        payload["missing_ids"] = self.missing_ids
        return payload


class RepositoryError(CompatibilityError):
    """Any failure coming out of the interest/profile data source."""
