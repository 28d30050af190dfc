#!/usr/bin/env python3
"""
Unit tests for the individual match sub-scores.
"""

import unittest
from datetime import datetime, timedelta, timezone

from core.scorer.models import (
    UserProfile, OfferedSkill, WantedSkill, Location, ProficiencyLevel, Priority
)
from core.scorer import components

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


def make_user(uid, offered=(), wanted=(), location=None, rating=0.0, last_active=NOW):
    return UserProfile(
        id=uid,
        last_active_at=last_active,
        skills_offered=[OfferedSkill(name) for name in offered],
        skills_wanted=[WantedSkill(name) for name in wanted],
        location=location,
        rating_average=rating,
    )


class TestSkillMatchScore(unittest.TestCase):

    def test_full_two_way_match(self):
        a = make_user("a", offered=["JavaScript"], wanted=["Yoga"])
        b = make_user("b", offered=["Yoga"], wanted=["JavaScript"])
        self.assertEqual(components.skill_match_score(a, b), 1.0)

    def test_case_insensitive(self):
        a = make_user("a", offered=["python"], wanted=["GUITAR"])
        b = make_user("b", offered=["Guitar"], wanted=["Python"])
        self.assertEqual(components.skill_match_score(a, b), 1.0)

    def test_one_way_match_is_half(self):
        a = make_user("a", offered=["JavaScript"], wanted=["Yoga"])
        b = make_user("b", offered=["Cooking"], wanted=["JavaScript"])
        self.assertEqual(components.skill_match_score(a, b), 0.5)

    def test_no_possible_pairings(self):
        a = make_user("a", offered=["JavaScript"])
        b = make_user("b", offered=["Yoga"])
        self.assertEqual(components.skill_match_score(a, b), 0.0)

    def test_empty_profiles(self):
        self.assertEqual(components.skill_match_score(make_user("a"), make_user("b")), 0.0)

    def test_duplicate_entries_capped(self):
        # Two "Yoga" wants against one offer would count twice over a bound of one
        a = make_user("a", wanted=["Yoga", "yoga"])
        b = make_user("b", offered=["Yoga"])
        self.assertEqual(components.skill_match_score(a, b), 1.0)

    def test_symmetric(self):
        a = make_user("a", offered=["A", "B", "C"], wanted=["D"])
        b = make_user("b", offered=["D", "E"], wanted=["A", "Z"])
        self.assertEqual(
            components.skill_match_score(a, b),
            components.skill_match_score(b, a)
        )


class TestLocationScore(unittest.TestCase):

    def test_same_city(self):
        a = make_user("a", location=Location("Pune", "Maharashtra"))
        b = make_user("b", location=Location("Pune", "Maharashtra"))
        self.assertEqual(components.location_score(a, b), 1.0)

    def test_same_state_different_city(self):
        a = make_user("a", location=Location("Pune", "Maharashtra"))
        b = make_user("b", location=Location("Mumbai", "Maharashtra"))
        self.assertEqual(components.location_score(a, b), 0.7)

    def test_different(self):
        a = make_user("a", location=Location("Pune", "Maharashtra"))
        b = make_user("b", location=Location("Chennai", "Tamil Nadu"))
        self.assertEqual(components.location_score(a, b), 0.3)

    def test_missing_location_is_neutral(self):
        a = make_user("a", location=Location("Pune", "Maharashtra"))
        b = make_user("b")
        self.assertEqual(components.location_score(a, b), 0.5)
        self.assertEqual(components.location_score(b, a), 0.5)

    def test_missing_cities_do_not_count_as_equal(self):
        a = make_user("a", location=Location(None, "Kerala"))
        b = make_user("b", location=Location(None, "Goa"))
        self.assertEqual(components.location_score(a, b), 0.3)

    def test_missing_city_falls_back_to_state(self):
        a = make_user("a", location=Location(None, "Kerala"))
        b = make_user("b", location=Location("Kochi", "Kerala"))
        self.assertEqual(components.location_score(a, b), 0.7)


class TestRatingAndProficiency(unittest.TestCase):

    def test_rating_average_normalized(self):
        a = make_user("a", rating=4.0)
        b = make_user("b", rating=3.0)
        self.assertAlmostEqual(components.rating_score(a, b), 0.7)

    def test_unrated_users(self):
        self.assertEqual(components.rating_score(make_user("a"), make_user("b")), 0.0)

    def test_proficiency_placeholder(self):
        a = make_user("a")
        b = make_user("b")
        self.assertEqual(components.proficiency_score(a, b), components.PROFICIENCY_PLACEHOLDER)


class TestAvailabilityScore(unittest.TestCase):

    def _score(self, days_a, days_b):
        a = make_user("a", last_active=NOW - timedelta(days=days_a))
        b = make_user("b", last_active=NOW - timedelta(days=days_b))
        return components.availability_score(a, b, now=NOW)

    def test_buckets(self):
        self.assertEqual(self._score(0, 0), 1.0)
        self.assertEqual(self._score(0, 2), 1.0)
        self.assertEqual(self._score(2, 4), 0.8)
        self.assertEqual(self._score(6, 8), 0.5)
        self.assertEqual(self._score(30, 30), 0.2)

    def test_naive_timestamps_treated_as_utc(self):
        a = make_user("a", last_active=datetime(2026, 3, 1, 12, 0))
        b = make_user("b", last_active=NOW)
        self.assertEqual(components.availability_score(a, b, now=NOW), 1.0)

    def test_days_since(self):
        self.assertAlmostEqual(components.days_since(NOW - timedelta(hours=36), NOW), 1.5)


class TestEnums(unittest.TestCase):

    def test_priority_rank(self):
        self.assertGreater(Priority.HIGH.rank, Priority.MEDIUM.rank)
        self.assertGreater(Priority.MEDIUM.rank, Priority.LOW.rank)

    def test_values_round_trip_from_storage(self):
        self.assertIs(ProficiencyLevel("Advanced"), ProficiencyLevel.ADVANCED)
        self.assertIs(Priority("High"), Priority.HIGH)


if __name__ == '__main__':
    unittest.main()
