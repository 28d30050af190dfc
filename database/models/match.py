import uuid

from sqlalchemy import Column, Text, Integer, DateTime, ForeignKey, UniqueConstraint, Index, Uuid
from sqlalchemy.orm import relationship

from .base import Base, utcnow

MATCH_STATUSES = ('pending', 'accepted', 'rejected', 'completed', 'cancelled')


class SkillMatch(Base):
    """
    An exchange agreement between two users.

    The score is frozen when the match is requested and never recalculated.
    """
    __tablename__ = 'skill_match'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user1_id = Column(Uuid, ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    user2_id = Column(Uuid, ForeignKey('users.id', ondelete='CASCADE'), nullable=False)

    # What each side teaches
    user1_skill = Column(Text)
    user1_proficiency = Column(Text)
    user2_skill = Column(Text)
    user2_proficiency = Column(Text)

    match_score = Column(Integer, nullable=False)
    status = Column(Text, nullable=False, default='pending')
    initiated_by_id = Column(Uuid, ForeignKey('users.id', ondelete='CASCADE'), nullable=False)

    total_sessions = Column(Integer, nullable=False, default=0)
    accepted_at = Column(DateTime(timezone=True))
    completed_at = Column(DateTime(timezone=True))
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    user1 = relationship("User", foreign_keys=[user1_id])
    user2 = relationship("User", foreign_keys=[user2_id])
    sessions = relationship(
        "MatchSession",
        back_populates="match",
        order_by="MatchSession.scheduled_at",
        cascade="all, delete-orphan"
    )

    __table_args__ = (
        UniqueConstraint('user1_id', 'user2_id', name='uq_skill_match_users'),
        Index('idx_skill_match_user1', 'user1_id'),
        Index('idx_skill_match_user2', 'user2_id'),
        Index('idx_skill_match_status', 'status'),
        Index('idx_skill_match_created', 'created_at'),
    )

    def involves(self, user_id) -> bool:
        return user_id in (self.user1_id, self.user2_id)

    def partner_of(self, user_id):
        return self.user2_id if user_id == self.user1_id else self.user1_id


class MatchSession(Base):
    """
    A scheduled teaching session within an accepted match.
    """
    __tablename__ = 'match_session'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    match_id = Column(Uuid, ForeignKey('skill_match.id', ondelete='CASCADE'), nullable=False)

    scheduled_at = Column(DateTime(timezone=True), nullable=False)
    duration_minutes = Column(Integer, nullable=False)
    topic = Column(Text, nullable=False)
    notes = Column(Text)

    # 1-5, set by each participant after the session
    user1_rating = Column(Integer)
    user2_rating = Column(Integer)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    match = relationship("SkillMatch", back_populates="sessions")

    __table_args__ = (
        Index('idx_match_session_match', 'match_id'),
    )
