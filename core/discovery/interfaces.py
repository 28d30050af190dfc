#!/usr/bin/env python3
"""
User Repository Protocol - what match discovery needs from storage.
"""
from abc import abstractmethod
from typing import Any, Iterable, List, Optional, Protocol, runtime_checkable

from core.scorer.models import UserProfile


@runtime_checkable
class UserRepository(Protocol):
    """
    Protocol for loading user profiles for scoring.
    """

    @abstractmethod
    def get_by_id(self, user_id: Any) -> Optional[UserProfile]:
        """
        Load a single profile.

        Returns:
            The profile, or None if no such user exists
        """
        pass

    @abstractmethod
    def find_candidates(
        self,
        exclude_user_id: Any,
        offered_skill_names_of_interest: Iterable[str],
        wanted_skill_names_of_interest: Iterable[str],
        max_results: int
    ) -> List[UserProfile]:
        """
        Coarse pre-filter for discovery.

        Returns users other than exclude_user_id who offer any skill in
        offered_skill_names_of_interest or want any skill in
        wanted_skill_names_of_interest (case-insensitive), at most
        max_results of them.
        """
        pass
