#!/usr/bin/env python3
"""
Scoring Models - Data structures consumed and produced by the scoring engine.

These are plain dataclasses, detached from the ORM, so scoring can run
after the database session is closed.
"""

from datetime import datetime
from enum import Enum
from typing import List, Optional, Any
from dataclasses import dataclass, field


class ProficiencyLevel(str, Enum):
    BEGINNER = "Beginner"
    INTERMEDIATE = "Intermediate"
    ADVANCED = "Advanced"
    EXPERT = "Expert"


class Priority(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"

    @property
    def rank(self) -> int:
        return PRIORITY_RANK[self]


PRIORITY_RANK = {
    Priority.HIGH: 3,
    Priority.MEDIUM: 2,
    Priority.LOW: 1,
}


@dataclass(frozen=True)
class OfferedSkill:
    """A skill the user can teach."""
    skill_name: str
    proficiency: ProficiencyLevel = ProficiencyLevel.INTERMEDIATE
    description: Optional[str] = None


@dataclass(frozen=True)
class WantedSkill:
    """A skill the user wants to learn."""
    skill_name: str
    priority: Priority = Priority.MEDIUM


@dataclass(frozen=True)
class Location:
    city: Optional[str] = None
    state: Optional[str] = None


@dataclass
class UserProfile:
    """Read-only view of a user as seen by the scoring engine."""
    id: Any
    last_active_at: datetime
    name: str = ""
    skills_offered: List[OfferedSkill] = field(default_factory=list)
    skills_wanted: List[WantedSkill] = field(default_factory=list)
    location: Optional[Location] = None
    rating_average: float = 0.0


@dataclass(frozen=True)
class ExchangeOffer:
    """One direction of a potential trade: from_user teaches to_user."""
    from_user_id: Any
    to_user_id: Any
    skill_name: str
    proficiency: ProficiencyLevel
    priority: Priority


@dataclass
class MatchCandidate:
    """A scored potential partner, built per discovery request and never persisted."""
    candidate: UserProfile
    score: int
    proposed_exchanges: List[ExchangeOffer] = field(default_factory=list)
