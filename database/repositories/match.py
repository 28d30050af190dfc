import logging
from datetime import datetime
from typing import List, Optional, Any, Tuple
from sqlalchemy import select, func, or_, and_
from sqlalchemy.orm import selectinload

from database.models import SkillMatch, MatchSession
from database.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


def _involving(user_id: Any):
    return or_(SkillMatch.user1_id == user_id, SkillMatch.user2_id == user_id)


class MatchRepository(BaseRepository):
    def get_match_by_id(self, match_id: Any) -> Optional[SkillMatch]:
        return self.db.get(SkillMatch, match_id)

    def get_for_participant(
        self,
        match_id: Any,
        user_id: Any,
        statuses: Optional[List[str]] = None
    ) -> Optional[SkillMatch]:
        stmt = select(SkillMatch).where(SkillMatch.id == match_id, _involving(user_id))
        if statuses:
            stmt = stmt.where(SkillMatch.status.in_(statuses))
        return self.db.execute(stmt).scalar_one_or_none()

    def get_between_users(self, user_a: Any, user_b: Any) -> Optional[SkillMatch]:
        stmt = select(SkillMatch).where(or_(
            and_(SkillMatch.user1_id == user_a, SkillMatch.user2_id == user_b),
            and_(SkillMatch.user1_id == user_b, SkillMatch.user2_id == user_a),
        ))
        return self.db.execute(stmt).scalars().first()

    def create_match(
        self,
        user1_id: Any,
        user2_id: Any,
        match_score: int,
        initiated_by_id: Any,
        user1_skill: Optional[str] = None,
        user1_proficiency: Optional[str] = None,
        user2_skill: Optional[str] = None,
        user2_proficiency: Optional[str] = None
    ) -> SkillMatch:
        match = SkillMatch(
            user1_id=user1_id,
            user2_id=user2_id,
            match_score=match_score,
            initiated_by_id=initiated_by_id,
            user1_skill=user1_skill,
            user1_proficiency=user1_proficiency,
            user2_skill=user2_skill,
            user2_proficiency=user2_proficiency,
            status='pending'
        )
        self.db.add(match)
        self.db.flush()
        return match

    def list_for_user(
        self,
        user_id: Any,
        status: Optional[str] = None,
        page: int = 1,
        limit: int = 10
    ) -> Tuple[List[SkillMatch], int]:
        stmt = select(SkillMatch).where(_involving(user_id))
        if status:
            stmt = stmt.where(SkillMatch.status == status)

        total = self.count(stmt)

        stmt = (
            stmt.options(selectinload(SkillMatch.user1), selectinload(SkillMatch.user2))
            .order_by(SkillMatch.created_at.desc())
        )
        return self.page(stmt, page, limit), total

    def count_for_user(self, user_id: Any, status: Optional[str] = None) -> int:
        stmt = select(func.count(SkillMatch.id)).where(_involving(user_id))
        if status:
            stmt = stmt.where(SkillMatch.status == status)
        return self.db.execute(stmt).scalar_one()

    def count_sessions_for_user(self, user_id: Any, status: Optional[str] = None) -> int:
        stmt = (
            select(func.coalesce(func.sum(SkillMatch.total_sessions), 0))
            .where(_involving(user_id))
        )
        if status:
            stmt = stmt.where(SkillMatch.status == status)
        return int(self.db.execute(stmt).scalar_one())

    def add_session(
        self,
        match: SkillMatch,
        scheduled_at: datetime,
        duration_minutes: int,
        topic: str,
        notes: Optional[str] = None
    ) -> MatchSession:
        session = MatchSession(
            scheduled_at=scheduled_at,
            duration_minutes=duration_minutes,
            topic=topic,
            notes=notes
        )
        match.sessions.append(session)
        match.total_sessions = len(match.sessions)
        self.db.flush()
        return session

    def get_session(self, match: SkillMatch, session_id: Any) -> Optional[MatchSession]:
        stmt = select(MatchSession).where(
            MatchSession.id == session_id,
            MatchSession.match_id == match.id
        )
        return self.db.execute(stmt).scalar_one_or_none()
