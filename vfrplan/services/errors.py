"""Planner-specific exceptions."""


class PlannerError(Exception):
    """Base exception for all planning errors."""


class InvalidInputError(PlannerError, ValueError):
    """Raised when an input is missing, out of range or not a number."""

    def __init__(self, message: str, field: str | None = None):
        self.field = field
        super().__init__(message)


class GeocodingError(PlannerError):
    """Raised when a place name cannot be resolved to coordinates."""

    def __init__(self, query: str, reason: str | None = None):
        self.query = query
        self.reason = reason
        message = f"Unable to geocode: {query}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class NotFoundError(GeocodingError):
    """Raised when the geocoder returned no result for a query."""

    def __init__(self, query: str):
        super().__init__(query, "no results found")


class ProfileNotFoundError(PlannerError, LookupError):
    """Raised when an aircraft code is not in the catalog."""

    def __init__(self, code: str):
        self.code = code
        super().__init__(f"Aircraft profile {code} not found")


class AirportDataError(PlannerError):
    """Raised when the airport reference tables cannot be downloaded or read."""
