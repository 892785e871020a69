"""
FlightSearchOrchestrator: state of one search form session.

Each role (origin, destination) owns a country, a candidate airport list and
a selected airport. The list follows

    empty -> loading -> populated | empty-result | error

and is re-fetched (and the selection dropped) whenever the role's country
changes. Search is an explicit action; every error of the flow is caught
here and turned into the single display message `error`.

Superseded requests are not cancelled: each airport lookup and each search
captures a generation number, and its response is discarded if a newer
request of the same kind was started in the meantime.
"""
import asyncio
import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from enum import Enum

from skyform.models import AirportCandidate, Itinerary
from skyform.services import search_engine
from skyform.services.errors import (
    AIRPORTS_FAILED_MESSAGE,
    MALFORMED_RESPONSE_MESSAGE,
    SEARCH_FAILED_MESSAGE,
    EmptyResultError,
    MalformedResponseError,
    RemoteServiceError,
    StructuredApiError,
    ValidationError,
)
from skyform.services.flight_data_client import FlightDataClient

logger = logging.getLogger(__name__)


class Role(str, Enum):
    ORIGIN = "origin"
    DESTINATION = "destination"


class AirportListStatus(str, Enum):
    EMPTY = "empty"
    LOADING = "loading"
    POPULATED = "populated"
    EMPTY_RESULT = "empty-result"
    ERROR = "error"


@dataclass
class RoleState:
    country: str
    status: AirportListStatus = AirportListStatus.EMPTY
    airports: list[AirportCandidate] = field(default_factory=list)
    selected: AirportCandidate | None = None
    generation: int = 0


class FlightSearchOrchestrator:

    def __init__(
        self,
        client: FlightDataClient,
        departure_country: str,
        destination_country: str,
        flight_date: date | None = None,
    ) -> None:
        self.client = client
        self.roles: dict[Role, RoleState] = {
            Role.ORIGIN: RoleState(country=departure_country),
            Role.DESTINATION: RoleState(country=destination_country),
        }
        # Same default as the browser date picker: today's date, UTC
        self.flight_date: date = flight_date or datetime.now(timezone.utc).date()
        self.itineraries: list[Itinerary] = []
        self.error: str = ""
        self.searching: bool = False
        self._search_generation = 0
        self._flag_generation = 0

    # -----------------------------------------------------------------------
    # Airport lists
    # -----------------------------------------------------------------------

    async def initialize(self) -> None:
        """First load: both lookups in flight together, no ordering between them."""
        await asyncio.gather(
            self._load_airports(Role.ORIGIN),
            self._load_airports(Role.DESTINATION),
        )

    async def set_country(self, role: Role, country: str) -> None:
        state = self.roles[role]
        state.country = country.strip()
        # Identifiers are not stable across lookups for another country
        state.selected = None
        state.airports = []
        await self._load_airports(role)

    async def _load_airports(self, role: Role) -> None:
        state = self.roles[role]
        state.generation += 1
        generation = state.generation

        if not state.country:
            state.status = AirportListStatus.EMPTY
            return

        state.status = AirportListStatus.LOADING
        country = state.country
        try:
            airports = await self.client.search_airport(country)
        except RemoteServiceError as exc:
            if generation != state.generation:
                logger.debug("Discarding stale airport failure for %s (%s)", role.value, country)
                return
            logger.warning("Airport lookup for %s (%s) failed: %s", role.value, country, exc)
            state.airports = []
            state.status = AirportListStatus.ERROR
            self.error = AIRPORTS_FAILED_MESSAGE
            return
        except MalformedResponseError as exc:
            if generation != state.generation:
                return
            logger.warning("Airport lookup for %s (%s) malformed: %s", role.value, country, exc)
            airports = []

        if generation != state.generation:
            logger.debug("Discarding stale airport list for %s (%s)", role.value, country)
            return

        state.airports = airports
        state.status = AirportListStatus.POPULATED if airports else AirportListStatus.EMPTY_RESULT
        if self.error == AIRPORTS_FAILED_MESSAGE and not any(
            s.status is AirportListStatus.ERROR for s in self.roles.values()
        ):
            self.error = ""

    def select_airport(self, role: Role, sky_id: str | None) -> AirportCandidate | None:
        """Pick from the role's current list; an unknown id clears the selection."""
        state = self.roles[role]
        state.selected = next((a for a in state.airports if a.sky_id == sky_id), None)
        if sky_id is not None and state.selected is None:
            logger.info("Airport %s is not among the %s candidates", sky_id, role.value)
        return state.selected

    def set_date(self, flight_date: date) -> None:
        self.flight_date = flight_date

    # -----------------------------------------------------------------------
    # Search
    # -----------------------------------------------------------------------

    async def search(self) -> None:
        self.error = ""
        # Every attempt supersedes older searches, including a rejected one
        self._search_generation += 1
        generation = self._search_generation

        try:
            origin, destination = search_engine.require_selection(
                self.roles[Role.ORIGIN].selected,
                self.roles[Role.DESTINATION].selected,
            )
        except ValidationError as exc:
            self.error = exc.message
            logger.info("Search rejected: %s", self.error)
            return

        self._flag_generation = generation
        self.searching = True
        try:
            itineraries = await search_engine.search_flights(
                self.client, origin, destination, self.flight_date
            )
        except (StructuredApiError, EmptyResultError) as exc:
            self._apply(generation, [], exc.message)
        except MalformedResponseError as exc:
            logger.warning("Search response malformed: %s", exc)
            self._apply(generation, [], MALFORMED_RESPONSE_MESSAGE)
        except RemoteServiceError as exc:
            logger.error("Error fetching flights: %s", exc)
            self._apply(generation, [], SEARCH_FAILED_MESSAGE)
        else:
            self._apply(generation, itineraries, "")
        finally:
            # Only the search that raised the flag may lower it
            if generation == self._flag_generation:
                self.searching = False

    def _apply(self, generation: int, itineraries: list[Itinerary], error: str) -> None:
        if generation != self._search_generation:
            logger.debug("Discarding stale search result (generation %d)", generation)
            return
        self.itineraries = itineraries
        self.error = error
