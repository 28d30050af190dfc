#!/usr/bin/env python3
"""
Match Discovery Service - ranked shortlist of exchange partners.

Pulls a capped candidate pool from the user repository, scores every
candidate against the requester and returns the best ones. Performs no
writes; the only I/O is the repository reads.
"""
from datetime import datetime, timezone
from typing import Any, List, Optional
import logging

from core.config_loader import MatchingConfig
from core.exceptions import UserNotFoundException
from core.discovery.interfaces import UserRepository
from core.scorer.models import MatchCandidate, UserProfile
from core.scorer import engine

logger = logging.getLogger(__name__)


class MatchDiscoveryService:
    """
    Service for finding potential matches for a user.

    Ranking ties keep the order the repository returned candidates in;
    no secondary sort key is applied.
    """

    def __init__(
        self,
        user_repo: UserRepository,
        config: Optional[MatchingConfig] = None
    ):
        self.user_repo = user_repo
        self.config = config or MatchingConfig()

    def build_candidate(
        self,
        requester: UserProfile,
        candidate: UserProfile,
        now: Optional[datetime] = None
    ) -> MatchCandidate:
        return MatchCandidate(
            candidate=candidate,
            score=engine.calculate_match_score(
                requester, candidate, weights=self.config.weights, now=now
            ),
            proposed_exchanges=engine.find_best_exchange(requester, candidate)
        )

    def find_potential_matches(
        self,
        user_id: Any,
        limit: Optional[int] = None
    ) -> List[MatchCandidate]:
        """
        Find the best-scoring potential partners for a user.

        Args:
            user_id: Requesting user
            limit: Maximum results to return (defaults to config.default_limit)

        Returns:
            MatchCandidates sorted by score (highest first), at most limit

        Raises:
            UserNotFoundException: If the requesting user does not exist
            RepositoryUnavailableException: If storage cannot be reached
        """
        if limit is None:
            limit = self.config.default_limit
        if limit < 0:
            raise ValueError(f"limit must be non-negative, got {limit}")

        requester = self.user_repo.get_by_id(user_id)
        if requester is None:
            raise UserNotFoundException(user_id)

        pool_limit = self.config.candidate_pool_limit
        pool = self.user_repo.find_candidates(
            exclude_user_id=requester.id,
            offered_skill_names_of_interest=[s.skill_name for s in requester.skills_wanted],
            wanted_skill_names_of_interest=[s.skill_name for s in requester.skills_offered],
            max_results=pool_limit
        )

        if len(pool) > pool_limit:
            logger.warning(f"Repository returned {len(pool)} candidates, scoring first {pool_limit}")
            pool = pool[:pool_limit]

        now = datetime.now(timezone.utc)
        candidates = [
            self.build_candidate(requester, candidate, now=now)
            for candidate in pool
            if candidate.id != requester.id
        ]

        candidates.sort(key=lambda c: c.score, reverse=True)

        logger.info(f"Scored {len(candidates)} candidates for user {user_id}, "
                    f"returning top {min(limit, len(candidates))}")

        return candidates[:limit]
