#!/usr/bin/env python3
"""
Community service - interest groups and their membership.
"""

import logging
from typing import List, Optional, Any, Tuple
from sqlalchemy.orm import Session

from database.models import Community
from database.repositories import CommunityRepository
from ..models.requests import CommunityCreate
from ..models.responses import CommunityOut, CommunityMemberOut, MembershipResponse
from ..utils import safe_datetime_iso
from ..exceptions import CommunityNotFoundException, MembershipException
from .converters import to_user_summary

logger = logging.getLogger(__name__)


class CommunityService:
    """Service for communities."""

    def __init__(self, db: Session):
        self.db = db
        self.communities = CommunityRepository(db)

    def list_communities(
        self,
        category: Optional[str] = None,
        location: Optional[str] = None,
        search: Optional[str] = None,
        page: int = 1,
        limit: int = 10
    ) -> Tuple[List[CommunityOut], int]:
        """
        Public, active communities, largest first.

        location matches city or state; search matches name or description.
        When both are given a community must satisfy both.
        """
        communities, total = self.communities.list_communities(
            category=category, location=location, search=search, page=page, limit=limit
        )
        return [self._to_community_out(c, include_moderators=False) for c in communities], total

    def get_community(self, community_id: Any) -> CommunityOut:
        return self._to_community_out(self._require_community(community_id))

    def create_community(self, user_id: Any, request: CommunityCreate) -> CommunityOut:
        """Create a community; the creator becomes its admin and first moderator."""
        community = self.communities.create_community(admin_id=user_id, **request.model_dump())
        self.db.commit()

        logger.info(f"Community {community.id} '{community.name}' created by {user_id}")
        return self._to_community_out(community)

    def join(self, user_id: Any, community_id: Any) -> MembershipResponse:
        community = self._require_community(community_id)
        if self.communities.get_member(community.id, user_id):
            raise MembershipException("Already a member of this community")

        self.communities.add_member(community, user_id)
        self.db.commit()

        logger.info(f"User {user_id} joined community {community.id}")
        return MembershipResponse(success=True, is_member=True, member_count=community.member_count)

    def leave(self, user_id: Any, community_id: Any) -> MembershipResponse:
        """Leave a community; moderators lose the role with the membership."""
        community = self._require_community(community_id)
        member = self.communities.get_member(community.id, user_id)
        if not member:
            raise MembershipException("Not a member of this community")

        self.communities.remove_member(community, member)
        self.db.commit()

        logger.info(f"User {user_id} left community {community.id}")
        return MembershipResponse(success=True, is_member=False, member_count=community.member_count)

    def list_members(
        self,
        community_id: Any,
        page: int = 1,
        limit: int = 20
    ) -> Tuple[List[CommunityMemberOut], int]:
        community = self._require_community(community_id)
        members = self.communities.list_members(community.id, page=page, limit=limit)
        return [
            CommunityMemberOut(
                user=to_user_summary(m.user),
                role=m.role,
                joined_at=safe_datetime_iso(m.joined_at)
            )
            for m in members
        ], community.member_count or 0

    def _require_community(self, community_id: Any) -> Community:
        community = self.communities.get_community(community_id)
        if not community or not community.is_active:
            raise CommunityNotFoundException(f"Community {community_id} not found")
        return community

    def _to_community_out(self, community: Community, include_moderators: bool = True) -> CommunityOut:
        moderator_ids = []
        if include_moderators:
            moderator_ids = [str(m.user_id) for m in self.communities.list_moderators(community.id)]

        return CommunityOut(
            community_id=str(community.id),
            name=community.name,
            description=community.description,
            category=community.category,
            city=community.city,
            state=community.state,
            is_virtual=bool(community.is_virtual),
            language=community.language or 'en',
            admin=to_user_summary(community.admin) if community.admin else None,
            moderator_ids=moderator_ids,
            skills=list(community.skills or []),
            rules=list(community.rules or []),
            is_public=bool(community.is_public),
            member_count=community.member_count or 0,
            created_at=safe_datetime_iso(community.created_at),
        )
