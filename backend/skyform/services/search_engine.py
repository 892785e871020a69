"""
Core logic of the flight search.

Flow:
  1. Validation: both airports must be selected, otherwise ValidationError
     and no network call at all.
  2. Exactly one searchFlights call with the five parameters taken verbatim
     from the selections (the date is sent as YYYY-MM-DD, no timezone shift).
  3. Classification of the answer, in priority order:
       a. status == false + message list   -> StructuredApiError("Error: x | y")
       b. context.status == "failure" and
          context.totalResults == 0        -> EmptyResultError
       c. otherwise data.itineraries       -> list[Itinerary] (order preserved)
"""
import logging
from datetime import date
from typing import Any

import pydantic

from skyform.models.schemas import AirportCandidate, Itinerary
from skyform.services.errors import (
    EmptyResultError,
    MalformedResponseError,
    StructuredApiError,
    ValidationError,
)
from skyform.services.flight_data_client import FlightDataClient, Operation

logger = logging.getLogger(__name__)

_ENTRY_SEPARATOR = " | "
_VALUE_SEPARATOR = ", "


def compose_api_error(messages: Any) -> str:
    """
    Build the display string for a structured failure.

    [{"a": "x"}, {"b": "y"}] -> "Error: x | y"
    Values inside one entry are joined in enumeration order.
    """
    if isinstance(messages, (str, dict)):
        messages = [messages]
    elif not isinstance(messages, list):
        messages = [] if messages is None else [messages]

    parts: list[str] = []
    for entry in messages:
        if isinstance(entry, dict):
            parts.append(_VALUE_SEPARATOR.join(str(v) for v in entry.values()))
        else:
            parts.append(str(entry))
    return f"Error: {_ENTRY_SEPARATOR.join(parts)}"


def _parse_itinerary(item: Any) -> Itinerary | None:
    try:
        return Itinerary.model_validate(item)
    except pydantic.ValidationError as exc:
        logger.warning("searchFlights: skipping malformed itinerary: %s", exc.errors()[:1])
        return None


def classify_search_response(payload: dict) -> list[Itinerary]:
    """
    Map a searchFlights body to the itinerary list or to a taxonomy error.

    Raises:
        StructuredApiError: the service flagged a failure with detail entries.
        EmptyResultError:   the service reports zero results.
        MalformedResponseError: data / itineraries have the wrong type.
    """
    if payload.get("status") is False:
        message = compose_api_error(payload.get("message"))
        logger.warning("searchFlights API error: %s", message)
        raise StructuredApiError(message)

    context = payload.get("context")
    if (
        isinstance(context, dict)
        and context.get("status") == "failure"
        and context.get("totalResults") == 0
    ):
        raise EmptyResultError()

    data = payload.get("data") or {}
    if not isinstance(data, dict):
        raise MalformedResponseError(
            Operation.SEARCH_FLIGHTS.value, f"'data' is {type(data).__name__}, not an object"
        )
    raw_itineraries = data.get("itineraries") or []
    if not isinstance(raw_itineraries, list):
        raise MalformedResponseError(
            Operation.SEARCH_FLIGHTS.value,
            f"'itineraries' is {type(raw_itineraries).__name__}, not a list",
        )

    itineraries = [_parse_itinerary(item) for item in raw_itineraries]
    return [i for i in itineraries if i is not None]


def require_selection(
    origin: AirportCandidate | None,
    destination: AirportCandidate | None,
) -> tuple[AirportCandidate, AirportCandidate]:
    """Both airports or ValidationError."""
    if origin is None or destination is None:
        raise ValidationError()
    return origin, destination


async def search_flights(
    client: FlightDataClient,
    origin: AirportCandidate | None,
    destination: AirportCandidate | None,
    flight_date: date,
) -> list[Itinerary]:
    """
    Run one search for the selected airports.

    Raises:
        ValidationError: an airport is missing (no call is made).
        RemoteServiceError: transport failure, propagated from the client.
        plus everything classify_search_response raises.
    """
    origin, destination = require_selection(origin, destination)

    logger.info(
        "searchFlights %s(%s) -> %s(%s) on %s",
        origin.sky_id, origin.entity_id,
        destination.sky_id, destination.entity_id,
        flight_date.isoformat(),
    )
    payload = await client.search_flights(
        origin_sky_id=origin.sky_id,
        origin_entity_id=origin.entity_id,
        destination_sky_id=destination.sky_id,
        destination_entity_id=destination.entity_id,
        flight_date=flight_date,
    )
    itineraries = classify_search_response(payload)
    logger.info("searchFlights: %d itineraries", len(itineraries))
    return itineraries
