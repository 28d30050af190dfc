#!/usr/bin/env python3
"""
Skill catalog endpoints.
"""

import uuid
import logging
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..dependencies import get_db
from ..services.skill_service import SkillService
from ..services.converters import to_pagination
from ..models.requests import SkillCreate, SkillUpdate
from ..models.responses import (
    CatalogSkillResponse,
    CatalogSkillListResponse,
    CategoriesResponse,
    DeleteResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/skills", tags=["skills"])


@router.get("", response_model=CatalogSkillListResponse)
def list_skills(
    category: Optional[str] = Query(default=None),
    search: Optional[str] = Query(default=None, description="Skill name substring"),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=100),
    db: Session = Depends(get_db)
):
    """List active catalog skills, most popular first."""
    skills, total = SkillService(db).list_skills(category=category, search=search, page=page, limit=limit)
    return CatalogSkillListResponse(success=True, skills=skills, pagination=to_pagination(page, limit, total))


@router.get("/categories", response_model=CategoriesResponse)
def get_categories(db: Session = Depends(get_db)):
    return CategoriesResponse(success=True, categories=SkillService(db).get_categories())


@router.get("/popular", response_model=CatalogSkillListResponse)
def get_popular_skills(db: Session = Depends(get_db)):
    return CatalogSkillListResponse(success=True, skills=SkillService(db).get_popular())


# Admin operations; access control is enforced by the gateway

@router.post("", response_model=CatalogSkillResponse, status_code=201)
def create_skill(request: SkillCreate, db: Session = Depends(get_db)):
    return CatalogSkillResponse(success=True, skill=SkillService(db).create_skill(request))


@router.put("/{skill_id}", response_model=CatalogSkillResponse)
def update_skill(skill_id: uuid.UUID, request: SkillUpdate, db: Session = Depends(get_db)):
    return CatalogSkillResponse(success=True, skill=SkillService(db).update_skill(skill_id, request))


@router.delete("/{skill_id}", response_model=DeleteResponse)
def delete_skill(skill_id: uuid.UUID, db: Session = Depends(get_db)):
    SkillService(db).delete_skill(skill_id)
    return DeleteResponse(success=True)
