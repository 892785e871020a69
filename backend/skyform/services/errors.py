"""
Error taxonomy for the flight search flow.

Services raise these; the orchestrator converts every one of them into the
single display message of a form session, while the stateless API routes map
them to HTTP status codes.
"""

# ---------------------------------------------------------------------------
# Fixed user-facing messages
# ---------------------------------------------------------------------------

MISSING_AIRPORTS_MESSAGE = "Please select both departure and destination airports."
NO_FLIGHTS_MESSAGE = "No flights found for the selected route and date."
SEARCH_FAILED_MESSAGE = "Failed to fetch flights."
AIRPORTS_FAILED_MESSAGE = "Failed to fetch airports."
MALFORMED_RESPONSE_MESSAGE = "The flight service returned an unexpected response."
NO_AIRPORTS_MESSAGE = "No airports available"


class FlightSearchError(Exception):
    """Base class for every error of the search flow."""


class ValidationError(FlightSearchError):
    """A required selection is missing. The user must correct the input."""

    def __init__(self, message: str = MISSING_AIRPORTS_MESSAGE):
        super().__init__(message)
        self.message = message


class RemoteServiceError(FlightSearchError):
    """Transport failure or non-2xx status from the flight data service."""

    def __init__(self, operation: str, cause: Exception):
        super().__init__(f"[{operation}] {type(cause).__name__}: {cause}")
        self.operation = operation
        self.cause = cause


class MalformedResponseError(FlightSearchError):
    """The service answered, but not with the shape the operation promises."""

    def __init__(self, operation: str, detail: str):
        super().__init__(f"[{operation}] {detail}")
        self.operation = operation
        self.detail = detail


class StructuredApiError(FlightSearchError):
    """The service answered 200 but flagged a logical failure with detail entries."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class EmptyResultError(FlightSearchError):
    """The search completed without any itinerary. Informational, not a failure."""

    def __init__(self, message: str = NO_FLIGHTS_MESSAGE):
        super().__init__(message)
        self.message = message
