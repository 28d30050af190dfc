#!/usr/bin/env python3
"""
Skill service - the public skill catalog and its admin operations.
"""

import logging
from typing import List, Optional, Any, Tuple
from sqlalchemy.orm import Session

from database.models import Skill, SKILL_CATEGORIES
from database.repositories import SkillRepository
from ..models.requests import SkillCreate, SkillUpdate
from ..models.responses import CatalogSkillOut, CategoryCount
from ..exceptions import SkillNotFoundException, DuplicateSkillException
from .converters import to_catalog_skill

logger = logging.getLogger(__name__)

DEFAULT_CATEGORY_ICON = '🔧'

CATEGORY_ICONS = {
    'Technology': '💻',
    'Languages': '🗣️',
    'Arts & Crafts': '🎨',
    'Professional': '💼',
    'Life Skills': '🏠',
    'Academic': '📚',
    'Sports & Fitness': '⚽',
    'Culinary': '👨‍🍳',
    'Music': '🎵',
    'Other': DEFAULT_CATEGORY_ICON,
}

POPULAR_SKILLS_LIMIT = 10


def get_category_icon(category: str) -> str:
    return CATEGORY_ICONS.get(category, DEFAULT_CATEGORY_ICON)


class SkillService:
    """Service for the skill catalog."""

    def __init__(self, db: Session):
        self.db = db
        self.skills = SkillRepository(db)

    def list_skills(
        self,
        category: Optional[str] = None,
        search: Optional[str] = None,
        page: int = 1,
        limit: int = 20
    ) -> Tuple[List[CatalogSkillOut], int]:
        skills, total = self.skills.list_skills(category=category, search=search, page=page, limit=limit)
        return [to_catalog_skill(s) for s in skills], total

    def get_categories(self) -> List[CategoryCount]:
        """Every category with its active skill count, including empty ones."""
        counts = self.skills.count_by_category()
        return [
            CategoryCount(name=name, count=counts.get(name, 0), icon=get_category_icon(name))
            for name in SKILL_CATEGORIES
        ]

    def get_popular(self) -> List[CatalogSkillOut]:
        return [to_catalog_skill(s) for s in self.skills.get_popular(limit=POPULAR_SKILLS_LIMIT)]

    def create_skill(self, request: SkillCreate) -> CatalogSkillOut:
        if self.skills.get_by_name(request.name):
            raise DuplicateSkillException(f"Skill '{request.name}' already exists")

        skill = self.skills.create_skill(**request.model_dump())
        self.db.commit()

        logger.info(f"Created catalog skill {skill.name} ({skill.category})")
        return to_catalog_skill(skill)

    def update_skill(self, skill_id: Any, request: SkillUpdate) -> CatalogSkillOut:
        skill = self._require_skill(skill_id)

        fields = request.model_dump(exclude_unset=True)
        new_name = fields.get('name')
        if new_name and new_name.lower() != skill.name.lower():
            if self.skills.get_by_name(new_name):
                raise DuplicateSkillException(f"Skill '{new_name}' already exists")

        self.skills.update_skill(skill, **fields)
        self.db.commit()
        return to_catalog_skill(skill)

    def delete_skill(self, skill_id: Any) -> None:
        skill = self._require_skill(skill_id)
        self.skills.delete_skill(skill)
        self.db.commit()
        logger.info(f"Deleted catalog skill {skill_id}")

    def _require_skill(self, skill_id: Any) -> Skill:
        skill = self.skills.get_by_id(skill_id)
        if not skill:
            raise SkillNotFoundException(f"Skill {skill_id} not found")
        return skill
