from datetime import date, datetime
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict, field_validator
from sqlmodel import Session

from tournament_engine.database import get_session
from tournament_engine.models.constraints import TournamentConstraints
from tournament_engine.services import tournament_service
from tournament_engine.services.capacity_calculator import calculate_capacity, resolve_match_slots
from tournament_engine.services.engine_errors import (
    CapacityExceeded,
    FixtureEngineError,
    InvalidConstraints,
    TournamentNotFound,
    TournamentStateError,
)

router = APIRouter()


class TournamentCreate(BaseModel):
    name: str
    constraints: TournamentConstraints

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        if not v or not v.strip():
            raise ValueError("name is required")
        return v.strip()


class TournamentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    timezone: str
    start_date: date
    end_date: date
    format_type: str
    max_matches_per_day: int
    venue_count: int
    capacity_limit: int
    status: str
    created_at: datetime


class CapacityResponse(BaseModel):
    capacity: int
    days: int
    total_match_slots: int
    slots_by_daily_cap: int
    venue_slots: int


class ParticipantCreate(BaseModel):
    name: str

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        if not v or not v.strip():
            raise ValueError("name is required")
        return v.strip()


class ParticipantResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    tournament_id: int
    name: str
    seed: Optional[int] = None


class ManualSeed(BaseModel):
    participant_id: str
    seed: int


class GenerateFixturesRequest(BaseModel):
    seeding_method: str = "manual"
    manual_seeds: List[ManualSeed] = []


class MatchResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    tournament_id: int
    round_number: int
    match_number: int
    stage: str
    group_name: Optional[str] = None
    participant1_id: Optional[str] = None
    participant2_id: Optional[str] = None
    placeholder_1: Optional[str] = None
    placeholder_2: Optional[str] = None
    status: str
    next_match_id: Optional[str] = None
    loser_next_match_id: Optional[str] = None


def _http_error(exc: FixtureEngineError) -> HTTPException:
    """Engine errors are client errors: bad configuration or wrong lifecycle state."""
    if isinstance(exc, TournamentNotFound):
        return HTTPException(status_code=404, detail=str(exc))
    if isinstance(exc, InvalidConstraints):
        return HTTPException(status_code=422, detail=str(exc))
    if isinstance(exc, (CapacityExceeded, TournamentStateError)):
        return HTTPException(status_code=409, detail=str(exc))
    return HTTPException(status_code=400, detail=str(exc))


@router.post("/tournaments/capacity", response_model=CapacityResponse)
def preview_capacity(constraints: TournamentConstraints):
    """Capacity for a set of constraints, without creating anything"""
    try:
        capacity = calculate_capacity(constraints)
        breakdown = resolve_match_slots(constraints)
    except FixtureEngineError as exc:
        raise _http_error(exc)

    return CapacityResponse(
        capacity=capacity,
        days=breakdown.days,
        total_match_slots=breakdown.total_match_slots,
        slots_by_daily_cap=breakdown.slots_by_daily_cap,
        venue_slots=breakdown.venue_slots,
    )


@router.post("/tournaments", response_model=TournamentResponse, status_code=201)
def create_tournament(payload: TournamentCreate, session: Session = Depends(get_session)):
    try:
        return tournament_service.create_tournament(session, payload.name, payload.constraints)
    except FixtureEngineError as exc:
        raise _http_error(exc)


@router.get("/tournaments/{tournament_id}", response_model=TournamentResponse)
def get_tournament(tournament_id: int, session: Session = Depends(get_session)):
    try:
        return tournament_service.get_tournament(session, tournament_id)
    except FixtureEngineError as exc:
        raise _http_error(exc)


@router.post(
    "/tournaments/{tournament_id}/participants", response_model=ParticipantResponse, status_code=201
)
def register_participant(
    tournament_id: int, payload: ParticipantCreate, session: Session = Depends(get_session)
):
    try:
        return tournament_service.register_participant(session, tournament_id, payload.name)
    except FixtureEngineError as exc:
        raise _http_error(exc)


@router.get("/tournaments/{tournament_id}/participants", response_model=List[ParticipantResponse])
def list_participants(tournament_id: int, session: Session = Depends(get_session)):
    try:
        tournament_service.get_tournament(session, tournament_id)
    except FixtureEngineError as exc:
        raise _http_error(exc)
    return tournament_service.list_participants(session, tournament_id)


@router.post("/tournaments/{tournament_id}/close-registration", response_model=TournamentResponse)
def close_registration(tournament_id: int, session: Session = Depends(get_session)):
    try:
        return tournament_service.close_registration(session, tournament_id)
    except FixtureEngineError as exc:
        raise _http_error(exc)


@router.post(
    "/tournaments/{tournament_id}/fixtures", response_model=List[MatchResponse], status_code=201
)
def generate_fixtures(
    tournament_id: int, payload: GenerateFixturesRequest, session: Session = Depends(get_session)
):
    """Seed participants, generate and persist fixtures; tournament moves to in_progress"""
    manual_seeds: Dict[str, int] = {s.participant_id: s.seed for s in payload.manual_seeds}
    try:
        return tournament_service.generate_and_store_fixtures(
            session, tournament_id, payload.seeding_method, manual_seeds
        )
    except FixtureEngineError as exc:
        raise _http_error(exc)


@router.get("/tournaments/{tournament_id}/matches", response_model=List[MatchResponse])
def list_matches(tournament_id: int, session: Session = Depends(get_session)):
    try:
        return tournament_service.list_matches(session, tournament_id)
    except FixtureEngineError as exc:
        raise _http_error(exc)
