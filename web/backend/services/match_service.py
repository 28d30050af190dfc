#!/usr/bin/env python3
"""
Match service - business logic for discovery and the match lifecycle.
"""

import logging
from datetime import datetime, timezone
from typing import List, Optional, Any, Tuple
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from core.config_loader import MatchingConfig
from core.discovery import MatchDiscoveryService
from core.exceptions import UserNotFoundException
from core.scorer import engine
from database.models import SkillMatch, MatchSession, utcnow
from database.repositories import UserRepository, MatchRepository, profile_from_orm
from ..models.requests import MatchCreate, SessionCreate
from ..models.responses import (
    PotentialMatch,
    MatchPreviewResponse,
    MatchOut,
    SessionOut,
    OfferedSkillOut,
    WantedSkillOut,
)
from ..utils import safe_datetime_iso
from ..exceptions import (
    MatchNotFoundException,
    SessionNotFoundException,
    DuplicateMatchException,
    InvalidMatchOperationException,
)
from .converters import to_user_summary, summary_from_profile, to_exchange_offer

logger = logging.getLogger(__name__)

# Allowed status changes; rejected, completed and cancelled are final
MATCH_TRANSITIONS = {
    'pending': ('accepted', 'rejected', 'cancelled'),
    'accepted': ('completed', 'cancelled'),
}


class MatchService:
    """Service for discovering partners and managing skill matches."""

    def __init__(self, db: Session, config: Optional[MatchingConfig] = None):
        self.db = db
        self.config = config or MatchingConfig()
        self.users = UserRepository(db)
        self.matches = MatchRepository(db)

    def get_potential_matches(self, user_id: Any, limit: Optional[int] = None) -> List[PotentialMatch]:
        """
        Ranked potential partners for a user.

        Raises:
            UserNotFoundException: If the user does not exist.
            RepositoryUnavailableException: If the user store is down.
        """
        discovery = MatchDiscoveryService(self.users, self.config)
        candidates = discovery.find_potential_matches(user_id, limit=limit)

        return [
            PotentialMatch(
                user=summary_from_profile(c.candidate),
                skills_offered=[
                    OfferedSkillOut(
                        skill_name=s.skill_name,
                        proficiency=s.proficiency.value,
                        description=s.description
                    )
                    for s in c.candidate.skills_offered
                ],
                skills_wanted=[
                    WantedSkillOut(skill_name=s.skill_name, priority=s.priority.value)
                    for s in c.candidate.skills_wanted
                ],
                score=c.score,
                proposed_exchanges=[to_exchange_offer(o) for o in c.proposed_exchanges]
            )
            for c in candidates
        ]

    def preview_match(self, user_id: Any, target_user_id: Any) -> MatchPreviewResponse:
        """Score breakdown and proposed exchanges between the caller and one user."""
        requester = self.users.get_by_id(user_id)
        if requester is None:
            raise UserNotFoundException(user_id)
        if target_user_id == requester.id:
            raise InvalidMatchOperationException("Cannot match with yourself")
        target = self.users.get_by_id(target_user_id)
        if target is None:
            raise UserNotFoundException(target_user_id)

        now = datetime.now(timezone.utc)
        components = engine.calculate_score_components(requester, target, now=now)

        return MatchPreviewResponse(
            success=True,
            user=summary_from_profile(target),
            score=engine.weighted_score(components, self.config.weights),
            components=components,
            proposed_exchanges=[
                to_exchange_offer(o) for o in engine.find_best_exchange(requester, target)
            ]
        )

    def create_match(self, user_id: Any, request: MatchCreate) -> MatchOut:
        """
        Request a match with another user.

        The score is computed now and stored; it is not recalculated later.

        Raises:
            UserNotFoundException: If either user does not exist.
            InvalidMatchOperationException: On a self-match.
            DuplicateMatchException: If the pair already has a match.
        """
        if request.target_user_id == user_id:
            raise InvalidMatchOperationException("Cannot create match with yourself")

        requester = self.users.get_user(user_id)
        if requester is None:
            raise UserNotFoundException(user_id)
        target = self.users.get_user(request.target_user_id)
        if target is None:
            raise UserNotFoundException(request.target_user_id)

        if self.matches.get_between_users(user_id, request.target_user_id):
            raise DuplicateMatchException("Match already exists between these users")

        score = engine.calculate_match_score(
            profile_from_orm(requester),
            profile_from_orm(target),
            weights=self.config.weights
        )

        try:
            match = self.matches.create_match(
                user1_id=user_id,
                user2_id=request.target_user_id,
                match_score=score,
                initiated_by_id=user_id,
                user1_skill=request.user1_skill.skill,
                user1_proficiency=self._proficiency(request.user1_skill.proficiency),
                user2_skill=request.user2_skill.skill,
                user2_proficiency=self._proficiency(request.user2_skill.proficiency),
            )
            self.users.touch_last_active(requester)
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise DuplicateMatchException("Match already exists between these users") from e

        logger.info(f"Match {match.id} requested by {user_id} for {request.target_user_id} (score {score})")
        return self._to_match_out(match)

    def list_matches(
        self,
        user_id: Any,
        status: Optional[str] = None,
        page: int = 1,
        limit: int = 10
    ) -> Tuple[List[MatchOut], int]:
        matches, total = self.matches.list_for_user(user_id, status=status, page=page, limit=limit)
        return [self._to_match_out(m) for m in matches], total

    def update_status(self, user_id: Any, match_id: Any, status: str) -> MatchOut:
        """
        Move a match to a new status.

        Raises:
            MatchNotFoundException: If the match does not exist or the caller is not part of it.
            InvalidMatchOperationException: If the caller may not make this change.
        """
        match = self.matches.get_for_participant(match_id, user_id)
        if not match:
            raise MatchNotFoundException(f"Match {match_id} not found")

        if (match.status == 'pending'
                and match.initiated_by_id == user_id
                and status in ('accepted', 'rejected')):
            raise InvalidMatchOperationException("Cannot accept or reject your own match request")

        if status not in MATCH_TRANSITIONS.get(match.status, ()):
            raise InvalidMatchOperationException(
                f"Cannot change match status from {match.status} to {status}"
            )

        previous = match.status
        match.status = status
        if status == 'accepted':
            match.accepted_at = utcnow()
        elif status == 'completed':
            match.completed_at = utcnow()
        self.db.commit()

        logger.info(f"Match {match.id} {previous} -> {status} by {user_id}")
        return self._to_match_out(match)

    def get_sessions(self, user_id: Any, match_id: Any) -> List[SessionOut]:
        match = self.matches.get_for_participant(match_id, user_id)
        if not match:
            raise MatchNotFoundException(f"Match {match_id} not found")
        return [self._to_session_out(s) for s in match.sessions]

    def add_session(self, user_id: Any, match_id: Any, request: SessionCreate) -> SessionOut:
        """Schedule a session; only accepted matches take sessions."""
        match = self.matches.get_for_participant(match_id, user_id, statuses=['accepted'])
        if not match:
            raise MatchNotFoundException(f"Match {match_id} not found or not accepted")

        session = self.matches.add_session(
            match,
            scheduled_at=request.date,
            duration_minutes=request.duration,
            topic=request.topic,
            notes=request.notes
        )
        self.db.commit()

        logger.info(f"Session {session.id} added to match {match.id} ({match.total_sessions} total)")
        return self._to_session_out(session)

    def rate_session(self, user_id: Any, match_id: Any, session_id: Any, rating: int) -> SessionOut:
        """
        Record the caller's 1-5 rating of a session.

        The rating is folded into the partner's rating average; rating the
        same session again replaces the earlier vote.
        """
        match = self.matches.get_for_participant(match_id, user_id)
        if not match:
            raise MatchNotFoundException(f"Match {match_id} not found")

        session = self.matches.get_session(match, session_id)
        if not session:
            raise SessionNotFoundException(f"Session {session_id} not found")

        if match.user1_id == user_id:
            previous = session.user1_rating
            session.user1_rating = rating
        else:
            previous = session.user2_rating
            session.user2_rating = rating

        partner = self.users.get_user(match.partner_of(user_id))
        if partner is not None:
            self.users.apply_rating(partner, rating, previous=previous)
        self.db.commit()

        logger.info(f"Session {session.id} rated {rating} by {user_id}")
        return self._to_session_out(session)

    # Private helper methods

    @staticmethod
    def _proficiency(level) -> Optional[str]:
        return level.value if level is not None else None

    def _to_match_out(self, match: SkillMatch) -> MatchOut:
        return MatchOut(
            match_id=str(match.id),
            user1=to_user_summary(match.user1),
            user2=to_user_summary(match.user2),
            user1_skill=match.user1_skill,
            user1_proficiency=match.user1_proficiency,
            user2_skill=match.user2_skill,
            user2_proficiency=match.user2_proficiency,
            match_score=match.match_score,
            status=match.status,
            initiated_by=str(match.initiated_by_id),
            total_sessions=match.total_sessions or 0,
            accepted_at=safe_datetime_iso(match.accepted_at),
            completed_at=safe_datetime_iso(match.completed_at),
            created_at=safe_datetime_iso(match.created_at),
        )

    @staticmethod
    def _to_session_out(session: MatchSession) -> SessionOut:
        return SessionOut(
            session_id=str(session.id),
            scheduled_at=safe_datetime_iso(session.scheduled_at),
            duration_minutes=session.duration_minutes,
            topic=session.topic,
            notes=session.notes,
            user1_rating=session.user1_rating,
            user2_rating=session.user2_rating,
        )
