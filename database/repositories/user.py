import contextlib
import logging
from typing import List, Optional, Any, Iterable, Tuple, Dict
from sqlalchemy import select, func, or_
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import selectinload

from core.exceptions import RepositoryUnavailableException
from core.scorer.models import (
    UserProfile, OfferedSkill, WantedSkill, Location, ProficiencyLevel, Priority
)
from database.models import User, UserSkillOffered, UserSkillWanted, utcnow
from database.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


def profile_from_orm(user: User) -> UserProfile:
    """Detach a User row into the plain profile the scoring engine reads."""
    location = None
    if user.city or user.state:
        location = Location(city=user.city, state=user.state)

    return UserProfile(
        id=user.id,
        name=user.name,
        skills_offered=[
            OfferedSkill(
                skill_name=s.skill_name,
                proficiency=ProficiencyLevel(s.proficiency),
                description=s.description
            )
            for s in user.skills_offered
        ],
        skills_wanted=[
            WantedSkill(skill_name=s.skill_name, priority=Priority(s.priority))
            for s in user.skills_wanted
        ],
        location=location,
        rating_average=float(user.rating_average or 0.0),
        last_active_at=user.last_active_at
    )


@contextlib.contextmanager
def _storage_errors():
    try:
        yield
    except OperationalError as e:
        logger.error(f"User store unavailable: {e}")
        raise RepositoryUnavailableException("User store unavailable") from e


class UserRepository(BaseRepository):
    """SQL user store; also the adapter behind core.discovery.UserRepository."""

    def _with_skills(self, stmt):
        return stmt.options(
            selectinload(User.skills_offered),
            selectinload(User.skills_wanted)
        )

    def get_user(self, user_id: Any) -> Optional[User]:
        stmt = self._with_skills(select(User).where(User.id == user_id))
        return self.db.execute(stmt).scalar_one_or_none()

    def get_by_email(self, email: str) -> Optional[User]:
        stmt = select(User).where(User.email == email.lower())
        return self.db.execute(stmt).scalar_one_or_none()

    def get_by_id(self, user_id: Any) -> Optional[UserProfile]:
        with _storage_errors():
            user = self.get_user(user_id)
        return profile_from_orm(user) if user else None

    def find_candidates(
        self,
        exclude_user_id: Any,
        offered_skill_names_of_interest: Iterable[str],
        wanted_skill_names_of_interest: Iterable[str],
        max_results: int
    ) -> List[UserProfile]:
        offered_keys = {name.lower() for name in offered_skill_names_of_interest}
        wanted_keys = {name.lower() for name in wanted_skill_names_of_interest}

        conditions = []
        if offered_keys:
            conditions.append(User.skills_offered.any(
                func.lower(UserSkillOffered.skill_name).in_(sorted(offered_keys))
            ))
        if wanted_keys:
            conditions.append(User.skills_wanted.any(
                func.lower(UserSkillWanted.skill_name).in_(sorted(wanted_keys))
            ))

        if not conditions:
            return []

        stmt = self._with_skills(
            select(User)
            .where(User.id != exclude_user_id, or_(*conditions))
            .order_by(User.created_at, User.id)
            .limit(max_results)
        )

        with _storage_errors():
            users = self.db.execute(stmt).scalars().all()

        logger.debug(f"Candidate pool for {exclude_user_id}: {len(users)} users")
        return [profile_from_orm(u) for u in users]

    def create_user(
        self,
        email: str,
        password_hash: str,
        name: str,
        **fields: Any
    ) -> User:
        user = User(email=email.lower(), password_hash=password_hash, name=name, **fields)
        self.db.add(user)
        self.db.flush()
        return user

    def replace_skills(
        self,
        user: User,
        skills_offered: List[Dict[str, Any]],
        skills_wanted: List[Dict[str, Any]]
    ) -> User:
        user.skills_offered = [
            UserSkillOffered(position=i, **skill) for i, skill in enumerate(skills_offered)
        ]
        user.skills_wanted = [
            UserSkillWanted(position=i, **skill) for i, skill in enumerate(skills_wanted)
        ]
        self.db.flush()
        return user

    def add_offered_skill(
        self,
        user: User,
        skill_name: str,
        proficiency: str = 'Intermediate',
        description: Optional[str] = None
    ) -> UserSkillOffered:
        position = max((s.position for s in user.skills_offered), default=-1) + 1
        skill = UserSkillOffered(
            skill_name=skill_name,
            proficiency=proficiency,
            description=description,
            position=position
        )
        user.skills_offered.append(skill)
        self.db.flush()
        return skill

    def add_wanted_skill(
        self,
        user: User,
        skill_name: str,
        priority: str = 'Medium'
    ) -> UserSkillWanted:
        position = max((s.position for s in user.skills_wanted), default=-1) + 1
        skill = UserSkillWanted(skill_name=skill_name, priority=priority, position=position)
        user.skills_wanted.append(skill)
        self.db.flush()
        return skill

    def remove_offered_skill(self, user: User, skill_id: Any) -> bool:
        remaining = [s for s in user.skills_offered if s.id != skill_id]
        removed = len(remaining) != len(user.skills_offered)
        user.skills_offered = remaining
        self.db.flush()
        return removed

    def remove_wanted_skill(self, user: User, skill_id: Any) -> bool:
        remaining = [s for s in user.skills_wanted if s.id != skill_id]
        removed = len(remaining) != len(user.skills_wanted)
        user.skills_wanted = remaining
        self.db.flush()
        return removed

    def search_users(
        self,
        skill: Optional[str] = None,
        location: Optional[str] = None,
        page: int = 1,
        limit: int = 10
    ) -> Tuple[List[User], int]:
        """Verified users whose skills or location contain the given text."""
        stmt = select(User).where(User.is_verified.is_(True))

        conditions = []
        if skill:
            pattern = f"%{skill.lower()}%"
            conditions.append(User.skills_offered.any(func.lower(UserSkillOffered.skill_name).like(pattern)))
            conditions.append(User.skills_wanted.any(func.lower(UserSkillWanted.skill_name).like(pattern)))
        if location:
            pattern = f"%{location.lower()}%"
            conditions.append(func.lower(User.city).like(pattern))
            conditions.append(func.lower(User.state).like(pattern))
        if conditions:
            stmt = stmt.where(or_(*conditions))

        total = self.count(stmt)

        stmt = self._with_skills(stmt.order_by(User.skill_points.desc(), User.created_at))
        return self.page(stmt, page, limit), total

    def touch_last_active(self, user: User) -> None:
        user.last_active_at = utcnow()

    def apply_rating(self, user: User, rating: int, previous: Optional[int] = None) -> None:
        """Fold a session rating into the user's running average; previous replaces an earlier vote."""
        count = user.rating_count or 0
        total = user.rating_total
        if total is None:
            total = round((user.rating_average or 0.0) * count)
        if previous is None:
            count += 1
        else:
            total -= previous
        total += rating
        user.rating_count = count
        user.rating_total = total
        user.rating_average = round(total / count, 2) if count else 0.0
        self.db.flush()
