import uuid

from sqlalchemy import Column, Text, Boolean, Integer, DateTime, ForeignKey, JSON, UniqueConstraint, Index, Uuid
from sqlalchemy.orm import relationship

from .base import Base, utcnow

COMMUNITY_CATEGORIES = (
    'Technology',
    'Languages',
    'Arts & Crafts',
    'Professional',
    'Life Skills',
    'Academic',
    'Regional',
    'Other',
)


class Community(Base):
    """
    Topical group of users.
    """
    __tablename__ = 'community'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(Text, nullable=False)
    description = Column(Text, nullable=False)
    category = Column(Text, nullable=False)

    city = Column(Text)
    state = Column(Text)
    is_virtual = Column(Boolean, nullable=False, default=False)
    language = Column(Text, nullable=False, default='en')

    admin_id = Column(Uuid, ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    skills = Column(JSON, default=list)
    rules = Column(JSON, default=list)

    is_public = Column(Boolean, nullable=False, default=True)
    is_active = Column(Boolean, nullable=False, default=True)
    member_count = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    admin = relationship("User")
    members = relationship(
        "CommunityMember",
        back_populates="community",
        order_by="CommunityMember.joined_at",
        cascade="all, delete-orphan"
    )

    __table_args__ = (
        Index('idx_community_category', 'category'),
        Index('idx_community_member_count', 'member_count'),
    )


class CommunityMember(Base):
    """
    Membership of a user in a community.
    """
    __tablename__ = 'community_member'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    community_id = Column(Uuid, ForeignKey('community.id', ondelete='CASCADE'), nullable=False)
    user_id = Column(Uuid, ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    role = Column(Text, nullable=False, default='member')  # member|moderator
    joined_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    community = relationship("Community", back_populates="members")
    user = relationship("User")

    __table_args__ = (
        UniqueConstraint('community_id', 'user_id', name='uq_community_member'),
        Index('idx_community_member_user', 'user_id'),
    )
