from datetime import date
from typing import Annotated, Any

from fastapi import APIRouter, Depends, HTTPException, Query

from skyform.models.schemas import AirportCandidate, AirportPresentation, FlightSearchOut
from skyform.services import search_engine
from skyform.services.errors import (
    EmptyResultError,
    MalformedResponseError,
    RemoteServiceError,
    StructuredApiError,
)
from skyform.services.flight_data_client import FlightDataClient, get_flight_client

router = APIRouter()

ClientDep = Annotated[FlightDataClient, Depends(get_flight_client)]


"""
One-shot flight search (no form session).

GET /api/v1/search/flights
  ?originSkyId=TUN
  &originEntityId=95673497
  &destinationSkyId=CDG
  &destinationEntityId=95565041
  &date=2026-11-02
"""
@router.get("/flights", response_model=FlightSearchOut)
async def search_flights(
    client: ClientDep,
    origin_sky_id: Annotated[str, Query(alias="originSkyId", min_length=1)],
    origin_entity_id: Annotated[str, Query(alias="originEntityId", min_length=1)],
    destination_sky_id: Annotated[str, Query(alias="destinationSkyId", min_length=1)],
    destination_entity_id: Annotated[str, Query(alias="destinationEntityId", min_length=1)],
    flight_date: Annotated[date, Query(alias="date", description="Departure date (YYYY-MM-DD)")],
) -> FlightSearchOut:
    origin = AirportCandidate(
        sky_id=origin_sky_id,
        entity_id=origin_entity_id,
        presentation=AirportPresentation(title=origin_sky_id),
    )
    destination = AirportCandidate(
        sky_id=destination_sky_id,
        entity_id=destination_entity_id,
        presentation=AirportPresentation(title=destination_sky_id),
    )

    try:
        itineraries = await search_engine.search_flights(client, origin, destination, flight_date)
    except EmptyResultError as exc:
        raise HTTPException(status_code=404, detail=exc.message)
    except StructuredApiError as exc:
        raise HTTPException(status_code=422, detail=exc.message)
    except (RemoteServiceError, MalformedResponseError) as exc:
        raise HTTPException(status_code=502, detail=str(exc))

    return FlightSearchOut(
        origin_sky_id=origin_sky_id,
        destination_sky_id=destination_sky_id,
        flight_date=flight_date,
        itineraries=itineraries,
    )


@router.get("/price-calendar")
async def price_calendar(
    client: ClientDep,
    origin_sky_id: Annotated[str, Query(alias="originSkyId", min_length=1)],
    destination_sky_id: Annotated[str, Query(alias="destinationSkyId", min_length=1)],
    from_date: Annotated[date, Query(alias="fromDate", description="First day of the calendar")],
    currency: Annotated[str | None, Query(min_length=3, max_length=3)] = None,
) -> Any:
    """Raw getPriceCalendar answer: daily lowest prices from fromDate on."""
    try:
        return await client.get_price_calendar(
            origin_sky_id, destination_sky_id, from_date, currency=currency
        )
    except (RemoteServiceError, MalformedResponseError) as exc:
        raise HTTPException(status_code=502, detail=str(exc))
