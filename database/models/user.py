import uuid

from sqlalchemy import Column, Text, Boolean, Integer, Float, DateTime, ForeignKey, Index, Uuid
from sqlalchemy.orm import relationship

from .base import Base, utcnow

LANGUAGES = ('en', 'hi', 'ta', 'te', 'bn', 'mr', 'gu')


class User(Base):
    """
    Marketplace member with profile, skill lists and reputation.
    """
    __tablename__ = 'users'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    email = Column(Text, nullable=False, unique=True)
    password_hash = Column(Text, nullable=False)
    name = Column(Text, nullable=False)
    phone = Column(Text)
    bio = Column(Text)

    # Location
    city = Column(Text)
    state = Column(Text)
    pincode = Column(Text)

    # Reputation
    rating_average = Column(Float, nullable=False, default=0.0)
    rating_count = Column(Integer, nullable=False, default=0)
    # Exact sum behind rating_average; NULL for averages imported without one
    rating_total = Column(Integer)
    skill_points = Column(Integer, nullable=False, default=0)

    language = Column(Text, nullable=False, default='en')
    is_verified = Column(Boolean, nullable=False, default=False)

    last_active_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    # Relationships
    skills_offered = relationship(
        "UserSkillOffered",
        back_populates="user",
        order_by="UserSkillOffered.position",
        cascade="all, delete-orphan"
    )
    skills_wanted = relationship(
        "UserSkillWanted",
        back_populates="user",
        order_by="UserSkillWanted.position",
        cascade="all, delete-orphan"
    )

    __table_args__ = (
        Index('idx_users_email', 'email'),
        Index('idx_users_skill_points', 'skill_points'),
    )


class UserSkillOffered(Base):
    """
    A skill the user can teach, kept in the order the user listed it.
    """
    __tablename__ = 'user_skill_offered'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    position = Column(Integer, nullable=False, default=0)

    skill_name = Column(Text, nullable=False)
    proficiency = Column(Text, nullable=False, default='Intermediate')  # Beginner|Intermediate|Advanced|Expert
    description = Column(Text)

    user = relationship("User", back_populates="skills_offered")

    __table_args__ = (
        Index('idx_skill_offered_user', 'user_id'),
        Index('idx_skill_offered_name', 'skill_name'),
    )


class UserSkillWanted(Base):
    """
    A skill the user wants to learn, kept in the order the user listed it.
    """
    __tablename__ = 'user_skill_wanted'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    position = Column(Integer, nullable=False, default=0)

    skill_name = Column(Text, nullable=False)
    priority = Column(Text, nullable=False, default='Medium')  # Low|Medium|High

    user = relationship("User", back_populates="skills_wanted")

    __table_args__ = (
        Index('idx_skill_wanted_user', 'user_id'),
        Index('idx_skill_wanted_name', 'skill_name'),
    )
