#!/usr/bin/env python3
"""
User endpoints - profiles, search, dashboard and the caller's skill lists.
"""

import uuid
import logging
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..dependencies import get_db, get_current_user_id
from ..services.user_service import UserService
from ..services.converters import to_pagination
from ..models.requests import SkillsUpdate, OfferedSkillRequest, WantedSkillRequest
from ..models.responses import (
    UserResponse,
    UserSearchResponse,
    DashboardResponse,
    SkillListsResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("/search", response_model=UserSearchResponse)
def search_users(
    skill: Optional[str] = Query(default=None, description="Skill name substring"),
    location: Optional[str] = Query(default=None, description="City or state substring"),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
    db: Session = Depends(get_db)
):
    """Search verified users by skill or location, highest skill points first."""
    service = UserService(db)
    users, total = service.search_users(skill=skill, location=location, page=page, limit=limit)
    return UserSearchResponse(success=True, users=users, pagination=to_pagination(page, limit, total))


@router.get("/me/dashboard", response_model=DashboardResponse)
def get_dashboard(
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    service = UserService(db)
    user, stats = service.get_dashboard(user_id)
    return DashboardResponse(success=True, user=user, stats=stats)


@router.put("/me/skills", response_model=SkillListsResponse)
def update_skills(
    request: SkillsUpdate,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    """Replace both skill lists of the current user."""
    return UserService(db).replace_skills(user_id, request)


@router.post("/me/skills/offered", response_model=SkillListsResponse)
def add_offered_skill(
    request: OfferedSkillRequest,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    return UserService(db).add_offered_skill(user_id, request)


@router.delete("/me/skills/offered/{skill_id}", response_model=SkillListsResponse)
def remove_offered_skill(
    skill_id: uuid.UUID,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    return UserService(db).remove_offered_skill(user_id, skill_id)


@router.post("/me/skills/wanted", response_model=SkillListsResponse)
def add_wanted_skill(
    request: WantedSkillRequest,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    return UserService(db).add_wanted_skill(user_id, request)


@router.delete("/me/skills/wanted/{skill_id}", response_model=SkillListsResponse)
def remove_wanted_skill(
    skill_id: uuid.UUID,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    return UserService(db).remove_wanted_skill(user_id, skill_id)


@router.get("/{user_id}", response_model=UserResponse)
def get_user(
    user_id: uuid.UUID,
    db: Session = Depends(get_db)
):
    """Get a user's public profile."""
    return UserResponse(success=True, user=UserService(db).get_profile(user_id))
