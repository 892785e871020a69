from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


# ---------------------------------------------------------------------------
# Records of the flight data service (camelCase on the wire)
# Immutable once received: the orchestrator replaces lists, never edits them.
# ---------------------------------------------------------------------------

class WireModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class AirportPresentation(WireModel):
    title: str
    subtitle: str = ""


class AirportCandidate(WireModel):
    sky_id: str
    entity_id: str
    presentation: AirportPresentation


class Price(WireModel):
    raw: float
    formatted: str


class Place(WireModel):
    id: str
    name: str
    display_code: str = ""
    city: str = ""


class Carrier(WireModel):
    id: int
    logo_url: str = ""
    name: str


class Carriers(WireModel):
    marketing: list[Carrier] = Field(default_factory=list)


class Leg(WireModel):
    id: str
    origin: Place
    destination: Place
    duration_in_minutes: int
    departure: datetime
    arrival: datetime
    carriers: Carriers = Field(default_factory=Carriers)


class Itinerary(WireModel):
    id: str
    price: Price
    legs: list[Leg]


# ---------------------------------------------------------------------------
# Form session state, as returned to the browser
# ---------------------------------------------------------------------------

class RoleStateOut(BaseModel):
    role: str                       # "origin" | "destination"
    country: str
    status: str                     # "empty" | "loading" | "populated" | "empty-result" | "error"
    airports: list[AirportCandidate]
    selected: AirportCandidate | None = None


class SessionStateOut(BaseModel):
    session_id: str
    origin: RoleStateOut
    destination: RoleStateOut
    flight_date: date
    searching: bool
    error: str
    itineraries: list[Itinerary]


# ---------------------------------------------------------------------------
# One-shot search answer
# ---------------------------------------------------------------------------

class FlightSearchOut(BaseModel):
    origin_sky_id: str
    destination_sky_id: str
    flight_date: date
    itineraries: list[Itinerary]


# ---------------------------------------------------------------------------
# Request bodies of the session endpoints
# ---------------------------------------------------------------------------

class CountryIn(BaseModel):
    country: str


class AirportSelectionIn(BaseModel):
    sky_id: str | None = None


class DateIn(BaseModel):
    flight_date: date
