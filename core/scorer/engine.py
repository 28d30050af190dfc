#!/usr/bin/env python3
"""
Scoring Engine - match score and exchange proposals for a pair of users.

Pure functions with no I/O and no shared state; safe to call from any
number of concurrent callers.
"""

import math
from datetime import datetime
from typing import Dict, List, Optional
import logging

from core.config_loader import ScoringWeights
from core.scorer.models import UserProfile, ExchangeOffer, PRIORITY_RANK
from core.scorer import components

logger = logging.getLogger(__name__)

MAX_EXCHANGES = 2

DEFAULT_WEIGHTS = ScoringWeights()


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def calculate_score_components(
    user_a: UserProfile,
    user_b: UserProfile,
    now: Optional[datetime] = None
) -> Dict[str, float]:
    """
    Compute the five normalized sub-scores, keyed like ScoringWeights.

    Returns:
        Dict of sub-score name -> value in [0, 1]
    """
    return {
        'skill_match': components.skill_match_score(user_a, user_b),
        'location': components.location_score(user_a, user_b),
        'proficiency': components.proficiency_score(user_a, user_b),
        'rating': components.rating_score(user_a, user_b),
        'availability': components.availability_score(user_a, user_b, now=now),
    }


def weighted_score(
    score_components: Dict[str, float],
    weights: Optional[ScoringWeights] = None
) -> int:
    """
    Collapse sub-scores into the 0-100 match score.

    Formula: round(100 * sum(weight_i * component_i)), halves rounded up
    """
    weights = weights or DEFAULT_WEIGHTS
    total = sum(
        weight * score_components[name]
        for name, weight in weights.as_dict().items()
    )
    return _round_half_up(total * 100)


def calculate_match_score(
    user_a: UserProfile,
    user_b: UserProfile,
    weights: Optional[ScoringWeights] = None,
    now: Optional[datetime] = None
) -> int:
    """
    Calculate the compatibility score between two users.

    Args:
        user_a: First user profile
        user_b: Second user profile
        weights: Sub-score weights (defaults to 0.4/0.2/0.2/0.1/0.1)
        now: Reference time for availability (defaults to current UTC time)

    Returns:
        Integer score in [0, 100]
    """
    score_components = calculate_score_components(user_a, user_b, now=now)
    score = weighted_score(score_components, weights)

    logger.debug(f"Score {user_a.id} -> {user_b.id}: {score} ({score_components})")
    return score


def _directional_offers(mentor: UserProfile, learner: UserProfile) -> List[ExchangeOffer]:
    """Offers where mentor teaches learner a skill the learner wants."""
    offers = []
    for offered in mentor.skills_offered:
        key = offered.skill_name.lower()
        wanted = next(
            (w for w in learner.skills_wanted if w.skill_name.lower() == key),
            None
        )
        if wanted is None:
            continue
        offers.append(ExchangeOffer(
            from_user_id=mentor.id,
            to_user_id=learner.id,
            skill_name=offered.skill_name,
            proficiency=offered.proficiency,
            priority=wanted.priority
        ))
    return offers


def find_best_exchange(user_a: UserProfile, user_b: UserProfile) -> List[ExchangeOffer]:
    """
    Select the highest-priority concrete exchanges between two users.

    A->B offers are collected before B->A offers and the sort is stable,
    so equal-priority offers keep that order.

    Returns:
        Up to two ExchangeOffers, highest learner priority first
    """
    offers = _directional_offers(user_a, user_b) + _directional_offers(user_b, user_a)
    offers.sort(key=lambda o: PRIORITY_RANK[o.priority], reverse=True)
    return offers[:MAX_EXCHANGES]
