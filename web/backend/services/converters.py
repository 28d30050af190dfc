#!/usr/bin/env python3
"""
ORM and scorer objects to response models.
"""

from typing import Optional

from core.scorer.models import ExchangeOffer, UserProfile
from database.models import User, UserSkillOffered, UserSkillWanted, Skill
from ..models.responses import (
    UserSummary,
    UserProfileOut,
    OfferedSkillOut,
    WantedSkillOut,
    ExchangeOfferOut,
    CatalogSkillOut,
    Pagination,
)
from ..utils import safe_float, safe_str, safe_datetime_iso, page_count


def to_user_summary(user: Optional[User]) -> UserSummary:
    if user is None:
        return UserSummary(user_id="", name="Unknown")
    return UserSummary(
        user_id=str(user.id),
        name=safe_str(user.name),
        city=user.city,
        state=user.state,
        rating_average=safe_float(user.rating_average),
    )


def summary_from_profile(profile: UserProfile) -> UserSummary:
    return UserSummary(
        user_id=str(profile.id),
        name=profile.name,
        city=profile.location.city if profile.location else None,
        state=profile.location.state if profile.location else None,
        rating_average=profile.rating_average,
    )


def to_offered_skill(skill: UserSkillOffered) -> OfferedSkillOut:
    return OfferedSkillOut(
        skill_id=str(skill.id) if skill.id else None,
        skill_name=skill.skill_name,
        proficiency=skill.proficiency,
        description=skill.description,
    )


def to_wanted_skill(skill: UserSkillWanted) -> WantedSkillOut:
    return WantedSkillOut(
        skill_id=str(skill.id) if skill.id else None,
        skill_name=skill.skill_name,
        priority=skill.priority,
    )


def to_user_profile(user: User) -> UserProfileOut:
    """Public profile; never includes email, phone or password hash."""
    return UserProfileOut(
        user_id=str(user.id),
        name=safe_str(user.name),
        bio=user.bio,
        city=user.city,
        state=user.state,
        rating_average=safe_float(user.rating_average),
        rating_count=user.rating_count or 0,
        skill_points=user.skill_points or 0,
        language=safe_str(user.language, "en"),
        skills_offered=[to_offered_skill(s) for s in user.skills_offered],
        skills_wanted=[to_wanted_skill(s) for s in user.skills_wanted],
        last_active_at=safe_datetime_iso(user.last_active_at),
        created_at=safe_datetime_iso(user.created_at),
    )


def to_exchange_offer(offer: ExchangeOffer) -> ExchangeOfferOut:
    return ExchangeOfferOut(
        from_user_id=str(offer.from_user_id),
        to_user_id=str(offer.to_user_id),
        skill_name=offer.skill_name,
        proficiency=offer.proficiency.value,
        priority=offer.priority.value,
    )


def to_catalog_skill(skill: Skill) -> CatalogSkillOut:
    return CatalogSkillOut(
        skill_id=str(skill.id),
        name=skill.name,
        category=skill.category,
        description=skill.description,
        icon=skill.icon,
        popularity=skill.popularity or 0,
        is_active=bool(skill.is_active),
    )


def to_pagination(page: int, limit: int, total: int) -> Pagination:
    return Pagination(page=page, limit=limit, total=total, pages=page_count(total, limit))
