#!/usr/bin/env python3
"""
Request models for API endpoints.
"""

import uuid
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List, Optional, Literal

from core.scorer.models import ProficiencyLevel, Priority
from database.models import SKILL_CATEGORIES, COMMUNITY_CATEGORIES, LANGUAGES


class _Request(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)


class OfferedSkillRequest(_Request):
    """A skill the caller can teach."""
    skill_name: str = Field(min_length=1, max_length=50)
    proficiency: ProficiencyLevel = ProficiencyLevel.INTERMEDIATE
    description: Optional[str] = Field(None, max_length=200)


class WantedSkillRequest(_Request):
    """A skill the caller wants to learn."""
    skill_name: str = Field(min_length=1, max_length=50)
    priority: Priority = Priority.MEDIUM


class SkillsUpdate(_Request):
    """Replace both skill lists."""
    skills_offered: List[OfferedSkillRequest] = Field(default_factory=list)
    skills_wanted: List[WantedSkillRequest] = Field(default_factory=list)


class ExchangeSide(_Request):
    """What one side of a match teaches."""
    skill: str = Field(min_length=1, max_length=50)
    proficiency: Optional[ProficiencyLevel] = None


class MatchCreate(_Request):
    """Request to start a match with another user."""
    target_user_id: uuid.UUID
    user1_skill: ExchangeSide = Field(..., description="Skill the caller teaches")
    user2_skill: ExchangeSide = Field(..., description="Skill the target teaches")


class MatchStatusUpdate(_Request):
    status: Literal['accepted', 'rejected', 'completed', 'cancelled']


class SessionCreate(_Request):
    """Schedule a session within an accepted match."""
    date: datetime
    duration: int = Field(ge=15, le=480, description="Duration in minutes (15-480)")
    topic: str = Field(min_length=2, max_length=100)
    notes: Optional[str] = Field(None, max_length=1000)


class SessionRating(_Request):
    rating: int = Field(ge=1, le=5, description="Rating between 1 and 5")


class SkillCreate(_Request):
    """Request to add a catalog skill."""
    name: str = Field(min_length=1, max_length=50)
    category: str
    description: Optional[str] = Field(None, max_length=200)
    icon: Optional[str] = None
    popularity: int = Field(default=0, ge=0)
    is_active: bool = True

    @field_validator('category')
    @classmethod
    def _known_category(cls, value: str) -> str:
        if value not in SKILL_CATEGORIES:
            raise ValueError(f"category must be one of {', '.join(SKILL_CATEGORIES)}")
        return value


class SkillUpdate(_Request):
    """Partial update of a catalog skill."""
    name: Optional[str] = Field(None, min_length=1, max_length=50)
    category: Optional[str] = None
    description: Optional[str] = Field(None, max_length=200)
    icon: Optional[str] = None
    popularity: Optional[int] = Field(None, ge=0)
    is_active: Optional[bool] = None

    @field_validator('category')
    @classmethod
    def _known_category(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and value not in SKILL_CATEGORIES:
            raise ValueError(f"category must be one of {', '.join(SKILL_CATEGORIES)}")
        return value


class CommunityCreate(_Request):
    """Request to create a community."""
    name: str = Field(min_length=1, max_length=100)
    description: str = Field(min_length=1, max_length=500)
    category: str
    city: Optional[str] = None
    state: Optional[str] = None
    is_virtual: bool = False
    language: str = 'en'
    skills: List[str] = Field(default_factory=list)
    rules: List[str] = Field(default_factory=list)
    is_public: bool = True

    @field_validator('category')
    @classmethod
    def _known_category(cls, value: str) -> str:
        if value not in COMMUNITY_CATEGORIES:
            raise ValueError(f"category must be one of {', '.join(COMMUNITY_CATEGORIES)}")
        return value

    @field_validator('language')
    @classmethod
    def _known_language(cls, value: str) -> str:
        if value not in LANGUAGES:
            raise ValueError(f"language must be one of {', '.join(LANGUAGES)}")
        return value


class MessageCreate(_Request):
    """Request to post a chat message."""
    content: str = Field(min_length=1, max_length=2000)
    message_type: Literal['text', 'image', 'file'] = 'text'
    file_url: Optional[str] = None
