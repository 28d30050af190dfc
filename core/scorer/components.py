#!/usr/bin/env python3
"""
Score Components - The five normalized sub-scores behind a match score.

Each function returns a value in [0, 1]:
- skill_match: fraction of possible offer/want pairings that are satisfied
- location: same city > same state > known but different; unknown is neutral
- proficiency: constant placeholder
- rating: mean rating of both users normalized by the 5-star scale
- availability: bucketed mean days since both users were last active
"""

from datetime import datetime, timezone
from typing import Optional
import logging

from core.scorer.models import UserProfile

logger = logging.getLogger(__name__)

MAX_RATING = 5.0

LOCATION_SAME_CITY = 1.0
LOCATION_SAME_STATE = 0.7
LOCATION_DIFFERENT = 0.3
LOCATION_UNKNOWN = 0.5

# Stand-in until proficiency levels are compared between offered/wanted pairs
PROFICIENCY_PLACEHOLDER = 0.8

# (max mean days since active, score), checked in order
AVAILABILITY_BUCKETS = (
    (1.0, 1.0),
    (3.0, 0.8),
    (7.0, 0.5),
)
AVAILABILITY_FLOOR = 0.2

SECONDS_PER_DAY = 60 * 60 * 24


def _skill_key(name: str) -> str:
    return name.lower()


def skill_match_score(user_a: UserProfile, user_b: UserProfile) -> float:
    """
    Count offer/want pairings in both directions over an upper bound of
    possible pairings.

    Formula: matches / (min(|A.offered|, |B.wanted|) + min(|A.wanted|, |B.offered|))

    The denominator is a conservative bound, so strong matches often land
    well below 1.0.
    """
    possible = (
        min(len(user_a.skills_offered), len(user_b.skills_wanted)) +
        min(len(user_a.skills_wanted), len(user_b.skills_offered))
    )
    if possible == 0:
        return 0.0

    b_wanted = {_skill_key(s.skill_name) for s in user_b.skills_wanted}
    b_offered = {_skill_key(s.skill_name) for s in user_b.skills_offered}

    match_count = sum(1 for s in user_a.skills_offered if _skill_key(s.skill_name) in b_wanted)
    match_count += sum(1 for s in user_a.skills_wanted if _skill_key(s.skill_name) in b_offered)

    # Duplicate skill entries on one side can push the count past the bound
    if match_count > possible:
        logger.warning(
            f"Skill match count {match_count} exceeds possible pairings {possible} "
            f"for users {user_a.id} and {user_b.id}, capping at 1.0"
        )
        return 1.0

    return match_count / possible


def location_score(user_a: UserProfile, user_b: UserProfile) -> float:
    loc_a, loc_b = user_a.location, user_b.location
    if loc_a is None or loc_b is None:
        return LOCATION_UNKNOWN

    if loc_a.city and loc_b.city and loc_a.city == loc_b.city:
        return LOCATION_SAME_CITY
    if loc_a.state and loc_b.state and loc_a.state == loc_b.state:
        return LOCATION_SAME_STATE

    return LOCATION_DIFFERENT


def proficiency_score(user_a: UserProfile, user_b: UserProfile) -> float:
    return PROFICIENCY_PLACEHOLDER


def rating_score(user_a: UserProfile, user_b: UserProfile) -> float:
    average = (float(user_a.rating_average) + float(user_b.rating_average)) / 2
    return average / MAX_RATING


def _as_utc(ts: datetime) -> datetime:
    # Naive timestamps are stored as UTC
    if ts.tzinfo is None:
        return ts.replace(tzinfo=timezone.utc)
    return ts


def days_since(ts: datetime, now: datetime) -> float:
    return (_as_utc(now) - _as_utc(ts)).total_seconds() / SECONDS_PER_DAY


def availability_score(
    user_a: UserProfile,
    user_b: UserProfile,
    now: Optional[datetime] = None
) -> float:
    now = now or datetime.now(timezone.utc)
    mean_days = (days_since(user_a.last_active_at, now) + days_since(user_b.last_active_at, now)) / 2

    for max_days, score in AVAILABILITY_BUCKETS:
        if mean_days <= max_days:
            return score
    return AVAILABILITY_FLOOR
