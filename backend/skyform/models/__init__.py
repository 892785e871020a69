from skyform.models.schemas import AirportCandidate, Itinerary, Leg  # noqa: F401
