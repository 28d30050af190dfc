import uuid

from sqlalchemy import Column, Text, Boolean, Integer, DateTime, Index, Uuid

from .base import Base, utcnow

SKILL_CATEGORIES = (
    'Technology',
    'Languages',
    'Arts & Crafts',
    'Professional',
    'Life Skills',
    'Academic',
    'Sports & Fitness',
    'Culinary',
    'Music',
    'Other',
)


class Skill(Base):
    """
    Catalog entry for a teachable skill.
    """
    __tablename__ = 'skill'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(Text, nullable=False, unique=True)
    category = Column(Text, nullable=False)
    description = Column(Text)
    icon = Column(Text)
    popularity = Column(Integer, nullable=False, default=0)
    is_active = Column(Boolean, nullable=False, default=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    __table_args__ = (
        Index('idx_skill_category', 'category'),
        Index('idx_skill_popularity', 'popularity'),
    )
