"""
Airports endpoints.

GET /api/v1/airports
    Airports matching a query (a country code in the search form), straight
    from the flight data service's searchAirport.

GET /api/v1/airports/nearby
    Raw getNearByAirports answer for a coordinate.
"""
from typing import Annotated, Any

from fastapi import APIRouter, Depends, HTTPException, Query

from skyform.models.schemas import AirportCandidate
from skyform.services.errors import MalformedResponseError, RemoteServiceError
from skyform.services.flight_data_client import FlightDataClient, get_flight_client

router = APIRouter()

ClientDep = Annotated[FlightDataClient, Depends(get_flight_client)]


@router.get("", response_model=list[AirportCandidate])
async def search_airports(
    client: ClientDep,
    query: Annotated[str, Query(min_length=1, description="Country code or free text")],
    locale: Annotated[str | None, Query(description="Locale, default from settings")] = None,
) -> list[AirportCandidate]:
    try:
        return await client.search_airport(query, locale=locale)
    except (RemoteServiceError, MalformedResponseError) as exc:
        raise HTTPException(status_code=502, detail=str(exc))


@router.get("/nearby")
async def nearby_airports(
    client: ClientDep,
    lat: Annotated[float, Query(ge=-90, le=90, description="Latitude")],
    lng: Annotated[float, Query(ge=-180, le=180, description="Longitude")],
    locale: Annotated[str | None, Query(description="Locale, default from settings")] = None,
) -> Any:
    try:
        return await client.get_nearby_airports(lat, lng, locale=locale)
    except (RemoteServiceError, MalformedResponseError) as exc:
        raise HTTPException(status_code=502, detail=str(exc))
