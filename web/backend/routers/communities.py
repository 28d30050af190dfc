#!/usr/bin/env python3
"""
Community endpoints - browse, create, join and leave.
"""

import uuid
import logging
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..dependencies import get_db, get_current_user_id
from ..services.community_service import CommunityService
from ..services.converters import to_pagination
from ..models.requests import CommunityCreate
from ..models.responses import (
    CommunityResponse,
    CommunityListResponse,
    CommunityMembersResponse,
    MembershipResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/communities", tags=["communities"])


@router.get("", response_model=CommunityListResponse)
def list_communities(
    category: Optional[str] = Query(default=None),
    location: Optional[str] = Query(default=None, description="City or state substring"),
    search: Optional[str] = Query(default=None, description="Name or description substring"),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
    db: Session = Depends(get_db)
):
    """List public communities, largest first."""
    communities, total = CommunityService(db).list_communities(
        category=category, location=location, search=search, page=page, limit=limit
    )
    return CommunityListResponse(
        success=True,
        communities=communities,
        pagination=to_pagination(page, limit, total)
    )


@router.get("/{community_id}", response_model=CommunityResponse)
def get_community(community_id: uuid.UUID, db: Session = Depends(get_db)):
    return CommunityResponse(success=True, community=CommunityService(db).get_community(community_id))


@router.post("", response_model=CommunityResponse, status_code=201)
def create_community(
    request: CommunityCreate,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    """Create a community with the current user as admin."""
    return CommunityResponse(success=True, community=CommunityService(db).create_community(user_id, request))


@router.post("/{community_id}/join", response_model=MembershipResponse)
def join_community(
    community_id: uuid.UUID,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    return CommunityService(db).join(user_id, community_id)


@router.post("/{community_id}/leave", response_model=MembershipResponse)
def leave_community(
    community_id: uuid.UUID,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    return CommunityService(db).leave(user_id, community_id)


@router.get("/{community_id}/members", response_model=CommunityMembersResponse)
def get_members(
    community_id: uuid.UUID,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=100),
    db: Session = Depends(get_db)
):
    members, total = CommunityService(db).list_members(community_id, page=page, limit=limit)
    return CommunityMembersResponse(success=True, members=members, pagination=to_pagination(page, limit, total))
