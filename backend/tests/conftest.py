"""
Shared fixtures for the SkyForm test suite.

The flight data service is never contacted: the client is either an
AsyncMock (orchestrator / routes) or runs on an httpx.MockTransport
(client tests).
"""
from datetime import date
from unittest.mock import AsyncMock

import pytest

from skyform.models.schemas import AirportCandidate, Itinerary
from skyform.services.flight_data_client import FlightDataClient


# ---------------------------------------------------------------------------
# Raw payloads, shaped like the Sky Scrapper API
# ---------------------------------------------------------------------------

def airport_payload(sky_id: str, entity_id: str, title: str, subtitle: str) -> dict:
    return {
        "skyId": sky_id,
        "entityId": entity_id,
        "presentation": {
            "title": title,
            "suggestionTitle": f"{title} ({sky_id})",
            "subtitle": subtitle,
        },
        "navigation": {"entityType": "AIRPORT", "localizedName": title},
    }


def itinerary_payload(itinerary_id: str, price: float, origin: str = "TUN", destination: str = "CDG") -> dict:
    return {
        "id": itinerary_id,
        "price": {"raw": price, "formatted": f"${round(price)}"},
        "legs": [
            {
                "id": f"{itinerary_id}-leg",
                "origin": {"id": origin, "name": f"{origin} Airport", "displayCode": origin, "city": "Tunis"},
                "destination": {
                    "id": destination, "name": f"{destination} Airport",
                    "displayCode": destination, "city": "Paris",
                },
                "durationInMinutes": 145,
                "departure": "2026-11-02T09:30:00",
                "arrival": "2026-11-02T12:55:00",
                "carriers": {
                    "marketing": [
                        {"id": -32132, "logoUrl": "https://logos.example/TU.png", "name": "Tunisair"},
                    ]
                },
            }
        ],
    }


@pytest.fixture
def tun_payload():
    """Tunis Carthage."""
    return airport_payload("TUN", "95673497", "Tunis", "Tunisia")


@pytest.fixture
def cdg_payload():
    """Paris Charles de Gaulle."""
    return airport_payload("CDG", "95565041", "Paris Charles de Gaulle", "France")


@pytest.fixture
def ory_payload():
    """Paris Orly."""
    return airport_payload("ORY", "95565040", "Paris Orly", "France")


@pytest.fixture
def airport_tun(tun_payload):
    return AirportCandidate.model_validate(tun_payload)


@pytest.fixture
def airport_cdg(cdg_payload):
    return AirportCandidate.model_validate(cdg_payload)


@pytest.fixture
def airport_ory(ory_payload):
    return AirportCandidate.model_validate(ory_payload)


@pytest.fixture
def itineraries_payload():
    """Two itineraries, deliberately not sorted by price."""
    return [
        itinerary_payload("it-expensive", 410.5),
        itinerary_payload("it-cheap", 129.0),
    ]


@pytest.fixture
def success_response(itineraries_payload):
    return {
        "status": True,
        "context": {"status": "complete", "totalResults": 2},
        "data": {"itineraries": itineraries_payload},
    }


@pytest.fixture
def itineraries(itineraries_payload):
    return [Itinerary.model_validate(item) for item in itineraries_payload]


# ---------------------------------------------------------------------------
# Client mock
# ---------------------------------------------------------------------------

@pytest.fixture
def mock_client():
    """FlightDataClient with every coroutine method replaced by an AsyncMock."""
    return AsyncMock(spec=FlightDataClient)


@pytest.fixture
def flight_date():
    return date(2026, 11, 2)
