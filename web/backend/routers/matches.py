#!/usr/bin/env python3
"""
Match endpoints - discovery, requests, status changes and sessions.
"""

import uuid
import logging
from typing import Optional, Literal
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from core.config_loader import MatchingConfig
from ..dependencies import get_db, get_current_user_id, get_matching_config
from ..services.match_service import MatchService
from ..services.converters import to_pagination
from ..models.requests import MatchCreate, MatchStatusUpdate, SessionCreate, SessionRating
from ..models.responses import (
    PotentialMatchesResponse,
    MatchPreviewResponse,
    MatchResponse,
    MatchListResponse,
    SessionsResponse,
    SessionResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/matches", tags=["matches"])

MatchStatus = Literal['pending', 'accepted', 'rejected', 'completed', 'cancelled']


@router.get("/potential", response_model=PotentialMatchesResponse)
def get_potential_matches(
    limit: Optional[int] = Query(default=None, ge=1, description="Maximum matches to return, capped by matching.max_limit"),
    user_id: uuid.UUID = Depends(get_current_user_id),
    config: MatchingConfig = Depends(get_matching_config),
    db: Session = Depends(get_db)
):
    """
    Get the best potential exchange partners for the current user.

    Candidates must offer something the user wants or want something the
    user offers. Returns matches sorted by score (highest first).
    """
    effective_limit = min(limit or config.default_limit, config.max_limit)

    service = MatchService(db, config)
    matches = service.get_potential_matches(user_id, limit=effective_limit)

    return PotentialMatchesResponse(
        success=True,
        count=len(matches),
        matches=matches
    )


@router.get("/preview/{target_user_id}", response_model=MatchPreviewResponse)
def preview_match(
    target_user_id: uuid.UUID,
    user_id: uuid.UUID = Depends(get_current_user_id),
    config: MatchingConfig = Depends(get_matching_config),
    db: Session = Depends(get_db)
):
    """Show the score breakdown and proposed exchanges against one user."""
    service = MatchService(db, config)
    return service.preview_match(user_id, target_user_id)


@router.get("", response_model=MatchListResponse)
def get_matches(
    status: Optional[MatchStatus] = Query(default=None, description="Filter by match status"),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    """Get the current user's matches, newest first."""
    service = MatchService(db)
    matches, total = service.list_matches(user_id, status=status, page=page, limit=limit)

    return MatchListResponse(
        success=True,
        count=len(matches),
        matches=matches,
        pagination=to_pagination(page, limit, total)
    )


@router.post("", response_model=MatchResponse, status_code=201)
def create_match(
    request: MatchCreate,
    user_id: uuid.UUID = Depends(get_current_user_id),
    config: MatchingConfig = Depends(get_matching_config),
    db: Session = Depends(get_db)
):
    """
    Request a skill exchange with another user.

    The match score is calculated once, here, and stored with the match.
    """
    service = MatchService(db, config)
    return MatchResponse(success=True, match=service.create_match(user_id, request))


@router.put("/{match_id}/status", response_model=MatchResponse)
def update_match_status(
    match_id: uuid.UUID,
    request: MatchStatusUpdate,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    """Accept, reject, complete or cancel a match."""
    service = MatchService(db)
    return MatchResponse(success=True, match=service.update_status(user_id, match_id, request.status))


@router.get("/{match_id}/sessions", response_model=SessionsResponse)
def get_sessions(
    match_id: uuid.UUID,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    service = MatchService(db)
    return SessionsResponse(success=True, sessions=service.get_sessions(user_id, match_id))


@router.post("/{match_id}/sessions", response_model=SessionResponse, status_code=201)
def add_session(
    match_id: uuid.UUID,
    request: SessionCreate,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    """Schedule a session on an accepted match."""
    service = MatchService(db)
    return SessionResponse(success=True, session=service.add_session(user_id, match_id, request))


@router.put("/{match_id}/sessions/{session_id}/rate", response_model=SessionResponse)
def rate_session(
    match_id: uuid.UUID,
    session_id: uuid.UUID,
    request: SessionRating,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    service = MatchService(db)
    return SessionResponse(
        success=True,
        session=service.rate_session(user_id, match_id, session_id, request.rating)
    )
