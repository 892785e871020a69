"""
Search form sessions.

The browser form drives one FlightSearchOrchestrator per session; every
endpoint returns the full session state so the page can re-render from it.

POST   /api/v1/sessions                           new session, both airport lists loaded
GET    /api/v1/sessions/{session_id}              current state
PUT    /api/v1/sessions/{session_id}/countries/{role}
PUT    /api/v1/sessions/{session_id}/airports/{role}
PUT    /api/v1/sessions/{session_id}/date
POST   /api/v1/sessions/{session_id}/search
DELETE /api/v1/sessions/{session_id}
"""
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Response

from skyform.config import settings
from skyform.db.session_store import SessionStore, get_session_store
from skyform.models.schemas import (
    AirportSelectionIn,
    CountryIn,
    DateIn,
    RoleStateOut,
    SessionStateOut,
)
from skyform.services.flight_data_client import FlightDataClient, get_flight_client
from skyform.services.orchestrator import FlightSearchOrchestrator, Role

router = APIRouter()

StoreDep = Annotated[SessionStore, Depends(get_session_store)]
ClientDep = Annotated[FlightDataClient, Depends(get_flight_client)]


def _role_out(orchestrator: FlightSearchOrchestrator, role: Role) -> RoleStateOut:
    state = orchestrator.roles[role]
    return RoleStateOut(
        role=role.value,
        country=state.country,
        status=state.status.value,
        airports=state.airports,
        selected=state.selected,
    )


def _state_out(session_id: str, orchestrator: FlightSearchOrchestrator) -> SessionStateOut:
    return SessionStateOut(
        session_id=session_id,
        origin=_role_out(orchestrator, Role.ORIGIN),
        destination=_role_out(orchestrator, Role.DESTINATION),
        flight_date=orchestrator.flight_date,
        searching=orchestrator.searching,
        error=orchestrator.error,
        itineraries=orchestrator.itineraries,
    )


def _get_or_404(store: SessionStore, session_id: str) -> FlightSearchOrchestrator:
    orchestrator = store.get(session_id)
    if orchestrator is None:
        raise HTTPException(status_code=404, detail=f"Session {session_id} not found or expired")
    return orchestrator


@router.post("", response_model=SessionStateOut, status_code=201)
async def create_session(store: StoreDep, client: ClientDep) -> SessionStateOut:
    orchestrator = FlightSearchOrchestrator(
        client=client,
        departure_country=settings.default_departure_country,
        destination_country=settings.default_destination_country,
    )
    session_id = store.create(orchestrator)
    await orchestrator.initialize()
    return _state_out(session_id, orchestrator)


@router.get("/{session_id}", response_model=SessionStateOut)
async def get_session(store: StoreDep, session_id: str) -> SessionStateOut:
    return _state_out(session_id, _get_or_404(store, session_id))


@router.put("/{session_id}/countries/{role}", response_model=SessionStateOut)
async def set_country(store: StoreDep, session_id: str, role: Role, body: CountryIn) -> SessionStateOut:
    orchestrator = _get_or_404(store, session_id)
    await orchestrator.set_country(role, body.country)
    return _state_out(session_id, orchestrator)


@router.put("/{session_id}/airports/{role}", response_model=SessionStateOut)
async def select_airport(
    store: StoreDep, session_id: str, role: Role, body: AirportSelectionIn
) -> SessionStateOut:
    orchestrator = _get_or_404(store, session_id)
    orchestrator.select_airport(role, body.sky_id)
    return _state_out(session_id, orchestrator)


@router.put("/{session_id}/date", response_model=SessionStateOut)
async def set_date(store: StoreDep, session_id: str, body: DateIn) -> SessionStateOut:
    orchestrator = _get_or_404(store, session_id)
    orchestrator.set_date(body.flight_date)
    return _state_out(session_id, orchestrator)


@router.post("/{session_id}/search", response_model=SessionStateOut)
async def run_search(store: StoreDep, session_id: str) -> SessionStateOut:
    orchestrator = _get_or_404(store, session_id)
    await orchestrator.search()
    return _state_out(session_id, orchestrator)


@router.delete("/{session_id}", status_code=204)
async def delete_session(store: StoreDep, session_id: str) -> Response:
    if not store.delete(session_id):
        raise HTTPException(status_code=404, detail=f"Session {session_id} not found or expired")
    return Response(status_code=204)
