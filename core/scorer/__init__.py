#!/usr/bin/env python3
"""
Scoring Module - pairwise match scoring.

Public API:
- calculate_match_score: 0-100 compatibility score for two users
- calculate_score_components: the five normalized sub-scores
- find_best_exchange: up to two concrete skill-for-skill offers

Split into focused modules:

- models.py: Data structures (UserProfile, ExchangeOffer, MatchCandidate)
- components.py: Sub-score calculations (skills, location, proficiency, rating, availability)
- engine.py: Weighted aggregation and exchange selection
"""

from core.scorer.models import (
    ProficiencyLevel, Priority, OfferedSkill, WantedSkill, Location,
    UserProfile, ExchangeOffer, MatchCandidate
)
from core.scorer.engine import (
    calculate_match_score, calculate_score_components, weighted_score, find_best_exchange
)

__all__ = [
    'calculate_match_score', 'calculate_score_components', 'weighted_score', 'find_best_exchange',
    'ProficiencyLevel', 'Priority', 'OfferedSkill', 'WantedSkill', 'Location',
    'UserProfile', 'ExchangeOffer', 'MatchCandidate',
]
