import logging
from typing import List, Optional, Any, Dict, Tuple
from sqlalchemy import select, func

from database.models import Skill
from database.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class SkillRepository(BaseRepository):
    def get_by_id(self, skill_id: Any) -> Optional[Skill]:
        return self.db.get(Skill, skill_id)

    def get_by_name(self, name: str) -> Optional[Skill]:
        stmt = select(Skill).where(func.lower(Skill.name) == name.lower())
        return self.db.execute(stmt).scalar_one_or_none()

    def list_skills(
        self,
        category: Optional[str] = None,
        search: Optional[str] = None,
        page: int = 1,
        limit: int = 20
    ) -> Tuple[List[Skill], int]:
        stmt = select(Skill).where(Skill.is_active.is_(True))

        if category:
            stmt = stmt.where(Skill.category == category)
        if search:
            stmt = stmt.where(func.lower(Skill.name).like(f"%{search.lower()}%"))

        total = self.count(stmt)

        stmt = stmt.order_by(Skill.popularity.desc(), Skill.name)
        return self.page(stmt, page, limit), total

    def count_by_category(self) -> Dict[str, int]:
        stmt = (
            select(Skill.category, func.count(Skill.id))
            .where(Skill.is_active.is_(True))
            .group_by(Skill.category)
        )
        return {category: count for category, count in self.db.execute(stmt).all()}

    def get_popular(self, limit: int = 10) -> List[Skill]:
        stmt = (
            select(Skill)
            .where(Skill.is_active.is_(True))
            .order_by(Skill.popularity.desc(), Skill.name)
            .limit(limit)
        )
        return list(self.db.execute(stmt).scalars().all())

    def create_skill(self, **fields: Any) -> Skill:
        skill = Skill(**fields)
        self.db.add(skill)
        self.db.flush()
        return skill

    def update_skill(self, skill: Skill, **fields: Any) -> Skill:
        for key, value in fields.items():
            setattr(skill, key, value)
        self.db.flush()
        return skill

    def delete_skill(self, skill: Skill) -> None:
        self.db.delete(skill)
        self.db.flush()
