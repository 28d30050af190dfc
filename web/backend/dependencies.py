#!/usr/bin/env python3
"""
FastAPI dependencies for dependency injection.
"""

import uuid
from typing import Generator
from fastapi import Header, HTTPException
from sqlalchemy.orm import Session

from core.config_loader import MatchingConfig
from database.database import SessionLocal
from .config import get_config


def get_db() -> Generator[Session, None, None]:
    """
    FastAPI dependency that yields a database session.

    Usage:
        @app.get("/endpoint")
        def my_endpoint(db: Session = Depends(get_db)):
            ...

    Yields:
        Session: Database session that will be automatically closed.
    """
    session = SessionLocal(get_config().database.url)
    try:
        yield session
    finally:
        session.close()


def get_matching_config() -> MatchingConfig:
    """Matching configuration (weights, pool cap, limits)."""
    return get_config().matching


def get_current_user_id(x_user_id: str = Header(..., alias="X-User-Id")) -> uuid.UUID:
    """
    Identify the caller.

    Authentication happens upstream; the gateway forwards the
    authenticated user's id in the X-User-Id header.
    """
    try:
        return uuid.UUID(x_user_id)
    except ValueError:
        raise HTTPException(status_code=401, detail="Invalid or missing user identity")
