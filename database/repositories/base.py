from typing import Any, List

from sqlalchemy import Select, select, func
from sqlalchemy.orm import Session


class BaseRepository:
    def __init__(self, db: Session):
        self.db = db

    def count(self, stmt: Select) -> int:
        """Number of rows the statement would return, ignoring any ordering."""
        return self.db.execute(select(func.count()).select_from(stmt.order_by(None).subquery())).scalar_one()

    def page(self, stmt: Select, page: int, limit: int) -> List[Any]:
        """One 1-based page of an ordered statement."""
        stmt = stmt.offset((page - 1) * limit).limit(limit)
        return list(self.db.execute(stmt).scalars().all())
