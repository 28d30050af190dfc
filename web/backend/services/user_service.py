#!/usr/bin/env python3
"""
User service - profiles, search, dashboard and skill lists.
"""

import logging
from typing import List, Optional, Any, Tuple
from sqlalchemy.orm import Session

from core.exceptions import UserNotFoundException
from database.models import User
from database.repositories import UserRepository, MatchRepository
from ..models.requests import SkillsUpdate, OfferedSkillRequest, WantedSkillRequest
from ..models.responses import (
    UserProfileOut,
    DashboardStats,
    SkillListsResponse,
)
from .converters import to_user_profile, to_offered_skill, to_wanted_skill

logger = logging.getLogger(__name__)


class UserService:
    """Service for user profiles and their skill lists."""

    def __init__(self, db: Session):
        self.db = db
        self.users = UserRepository(db)
        self.matches = MatchRepository(db)

    def _require_user(self, user_id: Any) -> User:
        user = self.users.get_user(user_id)
        if not user:
            raise UserNotFoundException(user_id)
        return user

    def get_profile(self, user_id: Any) -> UserProfileOut:
        return to_user_profile(self._require_user(user_id))

    def search_users(
        self,
        skill: Optional[str] = None,
        location: Optional[str] = None,
        page: int = 1,
        limit: int = 10
    ) -> Tuple[List[UserProfileOut], int]:
        """
        Verified users whose skills or city/state contain the given text.

        Matching is case-insensitive; a user qualifies on any one condition.
        """
        users, total = self.users.search_users(skill=skill, location=location, page=page, limit=limit)
        return [to_user_profile(u) for u in users], total

    def get_dashboard(self, user_id: Any) -> Tuple[UserProfileOut, DashboardStats]:
        user = self._require_user(user_id)
        stats = DashboardStats(
            total_matches=self.matches.count_for_user(user.id),
            active_matches=self.matches.count_for_user(user.id, status='accepted'),
            completed_sessions=self.matches.count_sessions_for_user(user.id, status='completed'),
            skill_points=user.skill_points or 0,
        )
        return to_user_profile(user), stats

    def replace_skills(self, user_id: Any, request: SkillsUpdate) -> SkillListsResponse:
        user = self._require_user(user_id)
        self.users.replace_skills(
            user,
            [s.model_dump(mode='json') for s in request.skills_offered],
            [s.model_dump(mode='json') for s in request.skills_wanted],
        )
        self.users.touch_last_active(user)
        self.db.commit()

        logger.info(f"User {user_id} now offers {len(request.skills_offered)} "
                    f"and wants {len(request.skills_wanted)} skills")
        return self._skill_lists(user)

    def add_offered_skill(self, user_id: Any, request: OfferedSkillRequest) -> SkillListsResponse:
        user = self._require_user(user_id)
        self.users.add_offered_skill(
            user,
            skill_name=request.skill_name,
            proficiency=request.proficiency.value,
            description=request.description
        )
        self.db.commit()
        return self._skill_lists(user)

    def add_wanted_skill(self, user_id: Any, request: WantedSkillRequest) -> SkillListsResponse:
        user = self._require_user(user_id)
        self.users.add_wanted_skill(
            user,
            skill_name=request.skill_name,
            priority=request.priority.value
        )
        self.db.commit()
        return self._skill_lists(user)

    def remove_offered_skill(self, user_id: Any, skill_id: Any) -> SkillListsResponse:
        """Remove an offered skill; an unknown id leaves the list unchanged."""
        user = self._require_user(user_id)
        if not self.users.remove_offered_skill(user, skill_id):
            logger.debug(f"Offered skill {skill_id} not found for user {user_id}")
        self.db.commit()
        return self._skill_lists(user)

    def remove_wanted_skill(self, user_id: Any, skill_id: Any) -> SkillListsResponse:
        user = self._require_user(user_id)
        if not self.users.remove_wanted_skill(user, skill_id):
            logger.debug(f"Wanted skill {skill_id} not found for user {user_id}")
        self.db.commit()
        return self._skill_lists(user)

    @staticmethod
    def _skill_lists(user: User) -> SkillListsResponse:
        return SkillListsResponse(
            success=True,
            skills_offered=[to_offered_skill(s) for s in user.skills_offered],
            skills_wanted=[to_wanted_skill(s) for s in user.skills_wanted],
        )
