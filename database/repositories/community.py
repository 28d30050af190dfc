import logging
from typing import List, Optional, Any, Tuple
from sqlalchemy import select, func, or_
from sqlalchemy.orm import selectinload

from database.models import Community, CommunityMember
from database.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class CommunityRepository(BaseRepository):
    def get_community(self, community_id: Any) -> Optional[Community]:
        stmt = (
            select(Community)
            .where(Community.id == community_id)
            .options(selectinload(Community.admin))
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def list_communities(
        self,
        category: Optional[str] = None,
        location: Optional[str] = None,
        search: Optional[str] = None,
        page: int = 1,
        limit: int = 10
    ) -> Tuple[List[Community], int]:
        stmt = select(Community).where(
            Community.is_active.is_(True),
            Community.is_public.is_(True)
        )

        if category:
            stmt = stmt.where(Community.category == category)
        if location:
            pattern = f"%{location.lower()}%"
            stmt = stmt.where(or_(
                func.lower(Community.city).like(pattern),
                func.lower(Community.state).like(pattern)
            ))
        if search:
            pattern = f"%{search.lower()}%"
            stmt = stmt.where(or_(
                func.lower(Community.name).like(pattern),
                func.lower(Community.description).like(pattern)
            ))

        total = self.count(stmt)

        stmt = (
            stmt.options(selectinload(Community.admin))
            .order_by(Community.member_count.desc(), Community.created_at.desc())
        )
        return self.page(stmt, page, limit), total

    def create_community(self, admin_id: Any, **fields: Any) -> Community:
        community = Community(admin_id=admin_id, member_count=0, **fields)
        self.db.add(community)
        self.db.flush()
        self.add_member(community, admin_id, role='moderator')
        return community

    def get_member(self, community_id: Any, user_id: Any) -> Optional[CommunityMember]:
        stmt = select(CommunityMember).where(
            CommunityMember.community_id == community_id,
            CommunityMember.user_id == user_id
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def add_member(self, community: Community, user_id: Any, role: str = 'member') -> CommunityMember:
        member = CommunityMember(community_id=community.id, user_id=user_id, role=role)
        self.db.add(member)
        community.member_count = (community.member_count or 0) + 1
        self.db.flush()
        return member

    def remove_member(self, community: Community, member: CommunityMember) -> None:
        self.db.delete(member)
        community.member_count = max(0, (community.member_count or 0) - 1)
        self.db.flush()

    def list_members(
        self,
        community_id: Any,
        page: int = 1,
        limit: int = 20
    ) -> List[CommunityMember]:
        stmt = (
            select(CommunityMember)
            .where(CommunityMember.community_id == community_id)
            .options(selectinload(CommunityMember.user))
            .order_by(CommunityMember.joined_at)
        )
        return self.page(stmt, page, limit)

    def list_moderators(self, community_id: Any) -> List[CommunityMember]:
        stmt = select(CommunityMember).where(
            CommunityMember.community_id == community_id,
            CommunityMember.role == 'moderator'
        )
        return list(self.db.execute(stmt).scalars().all())
