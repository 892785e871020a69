"""
FlightDataClient: thin client for the Sky Scrapper flight data API (RapidAPI).

Every operation is a single HTTPS GET to

    https://<host>/api/v1/flights/<operation>

with the RapidAPI key/host headers and the parameters as query string.
No retry, no cache, no rate limiting: callers handle failures.

Failures:
  - transport error or non-2xx status -> RemoteServiceError (cause attached)
  - body with the wrong shape          -> MalformedResponseError

Documentation: https://rapidapi.com/apiheya/api/sky-scrapper
"""
import logging
from datetime import date
from enum import Enum
from typing import Any

import httpx
import pydantic

from skyform.config import settings
from skyform.models.schemas import AirportCandidate
from skyform.services.errors import MalformedResponseError, RemoteServiceError

logger = logging.getLogger(__name__)

Params = dict[str, str | int | float | None]


class Operation(str, Enum):
    GET_PRICE_CALENDAR = "getPriceCalendar"
    GET_NEARBY_AIRPORTS = "getNearByAirports"
    SEARCH_AIRPORT = "searchAirport"
    SEARCH_FLIGHTS = "searchFlights"


def _parse_airport(item: Any) -> AirportCandidate | None:
    """Validate one entry of searchAirport.data; None if it can't be used."""
    try:
        return AirportCandidate.model_validate(item)
    except pydantic.ValidationError as exc:
        logger.warning("searchAirport: skipping malformed airport entry: %s", exc.errors()[:1])
        return None


def _require_dict(operation: Operation, body: Any) -> dict:
    if not isinstance(body, dict):
        raise MalformedResponseError(
            operation.value, f"expected a JSON object, got {type(body).__name__}"
        )
    return body


class FlightDataClient:

    def __init__(
        self,
        api_key: str,
        api_host: str,
        timeout: float = 30.0,
        locale: str = "en-US",
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.api_key = api_key
        self.api_host = api_host
        self.timeout = timeout
        self.locale = locale
        self.base_url = f"https://{api_host}/api/v1/flights/"
        # Injected in tests (httpx.MockTransport); None = real network
        self._transport = transport

    @classmethod
    def from_settings(cls, transport: httpx.AsyncBaseTransport | None = None) -> "FlightDataClient":
        if not settings.rapidapi_key:
            logger.warning("RAPIDAPI_KEY is not set: flight data requests will be rejected")
        return cls(
            api_key=settings.rapidapi_key,
            api_host=settings.rapidapi_host,
            timeout=settings.http_timeout_seconds,
            locale=settings.flights_api_locale,
            transport=transport,
        )

    @property
    def headers(self) -> dict[str, str]:
        return {
            "X-RapidAPI-Key": self.api_key,
            "X-RapidAPI-Host": self.api_host,
        }

    async def fetch(self, operation: Operation, params: Params) -> Any:
        """
        Issue one GET for `operation` and return the decoded JSON body verbatim.

        Parameters whose value is None are not sent.

        Raises:
            RemoteServiceError: transport failure, non-2xx status or undecodable body.
        """
        operation = Operation(operation)
        query = {key: value for key, value in params.items() if value is not None}
        url = f"{self.base_url}{operation.value}"
        logger.debug("GET %s params=%s", url, query)

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                resp = await client.get(url, params=query, headers=self.headers)
                resp.raise_for_status()
                return resp.json()
        except httpx.HTTPStatusError as exc:
            logger.warning(
                "%s: HTTP %d - %s",
                operation.value, exc.response.status_code, exc.response.text[:300],
            )
            raise RemoteServiceError(operation.value, exc) from exc
        except (httpx.HTTPError, ValueError) as exc:
            # ValueError: body is not valid JSON
            logger.warning("%s failed: %s: %s", operation.value, type(exc).__name__, exc)
            raise RemoteServiceError(operation.value, exc) from exc

    # -----------------------------------------------------------------------
    # Typed helpers, one per operation
    # -----------------------------------------------------------------------

    async def search_airport(self, query: str, locale: str | None = None) -> list[AirportCandidate]:
        """Airports matching `query` (a country code in the search form)."""
        body = _require_dict(
            Operation.SEARCH_AIRPORT,
            await self.fetch(Operation.SEARCH_AIRPORT, {"query": query, "locale": locale or self.locale}),
        )
        data = body.get("data")
        if data is None:
            return []
        if not isinstance(data, list):
            raise MalformedResponseError(
                Operation.SEARCH_AIRPORT.value, f"'data' is {type(data).__name__}, not a list"
            )

        airports = [_parse_airport(item) for item in data]
        result = [a for a in airports if a is not None]
        logger.debug("searchAirport %s: %d airports", query, len(result))
        return result

    async def search_flights(
        self,
        origin_sky_id: str,
        origin_entity_id: str,
        destination_sky_id: str,
        destination_entity_id: str,
        flight_date: date | str,
    ) -> dict:
        """Raw searchFlights body; classification happens in search_engine."""
        if isinstance(flight_date, date):
            flight_date = flight_date.isoformat()
        params: Params = {
            "originSkyId": origin_sky_id,
            "originEntityId": origin_entity_id,
            "destinationSkyId": destination_sky_id,
            "destinationEntityId": destination_entity_id,
            "date": flight_date,
        }
        return _require_dict(
            Operation.SEARCH_FLIGHTS,
            await self.fetch(Operation.SEARCH_FLIGHTS, params),
        )

    async def get_nearby_airports(self, lat: float, lng: float, locale: str | None = None) -> dict:
        params: Params = {"lat": lat, "lng": lng, "locale": locale or self.locale}
        return _require_dict(
            Operation.GET_NEARBY_AIRPORTS,
            await self.fetch(Operation.GET_NEARBY_AIRPORTS, params),
        )

    async def get_price_calendar(
        self,
        origin_sky_id: str,
        destination_sky_id: str,
        from_date: date,
        currency: str | None = None,
    ) -> dict:
        params: Params = {
            "originSkyId": origin_sky_id,
            "destinationSkyId": destination_sky_id,
            "fromDate": from_date.isoformat(),
            "currency": currency,
        }
        return _require_dict(
            Operation.GET_PRICE_CALENDAR,
            await self.fetch(Operation.GET_PRICE_CALENDAR, params),
        )


def get_flight_client() -> FlightDataClient:
    """FastAPI dependency: a client configured from settings."""
    return FlightDataClient.from_settings()
