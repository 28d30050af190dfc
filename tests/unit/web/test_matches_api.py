#!/usr/bin/env python3
"""
API tests for /api/matches: discovery, match requests, status changes and sessions.
"""

import sys
import unittest
import uuid
from datetime import timedelta
from pathlib import Path
from unittest.mock import patch

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent.parent.parent))

from core.config_loader import MatchingConfig
from database.models import SkillMatch, utcnow
from tests import ApiTestCase
from web.backend.dependencies import get_matching_config
from web.backend.services.match_service import MatchService


@pytest.mark.db
class TestPotentialMatches(ApiTestCase):

    def setUp(self):
        super().setUp()
        self.alice = self.add_user(
            "Alice",
            offered=[("JavaScript", "Advanced")],
            wanted=[("Yoga", "High")],
            city="Pune", state="Maharashtra", rating_average=4.0
        )
        self.bob = self.add_user(
            "Bob",
            offered=[("Yoga", "Intermediate")],
            wanted=[("JavaScript", "Medium")],
            city="Pune", state="Maharashtra", rating_average=4.0
        )
        self.carol = self.add_user("Carol", offered=[("yoga", "Beginner")], city="Delhi", state="Delhi")
        self.dave = self.add_user("Dave", offered=[("Pottery", "Expert")])

    def test_ranked_matches(self):
        response = self.client.get('/api/matches/potential', headers=self.as_user(self.alice))

        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertTrue(data['success'])
        self.assertEqual(data['count'], 2)
        self.assertEqual([m['user']['name'] for m in data['matches']], ["Bob", "Carol"])

        best = data['matches'][0]
        self.assertEqual(best['score'], 94)
        self.assertEqual(
            [(e['skill_name'], e['priority']) for e in best['proposed_exchanges']],
            [("Yoga", "High"), ("JavaScript", "Medium")]
        )
        self.assertEqual(best['proposed_exchanges'][0]['from_user_id'], str(self.bob.id))

    def test_limit(self):
        response = self.client.get('/api/matches/potential?limit=1', headers=self.as_user(self.alice))
        self.assertEqual(response.json()['count'], 1)

    def test_limit_clamped_to_max_limit(self):
        self.app.dependency_overrides[get_matching_config] = lambda: MatchingConfig(max_limit=1)

        response = self.client.get('/api/matches/potential?limit=5', headers=self.as_user(self.alice))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['count'], 1)

    def test_configured_max_limit_above_default(self):
        self.app.dependency_overrides[get_matching_config] = lambda: MatchingConfig(max_limit=100)

        with patch.object(MatchService, 'get_potential_matches', return_value=[]) as discover:
            response = self.client.get('/api/matches/potential?limit=80', headers=self.as_user(self.alice))

        self.assertEqual(response.status_code, 200)
        self.assertEqual(discover.call_args.kwargs['limit'], 80)

    def test_limit_below_one(self):
        response = self.client.get('/api/matches/potential?limit=0', headers=self.as_user(self.alice))
        self.assertEqual(response.status_code, 422)

    def test_unknown_user(self):
        response = self.client.get('/api/matches/potential', headers={"X-User-Id": str(uuid.uuid4())})

        self.assertEqual(response.status_code, 404)
        data = response.json()
        self.assertFalse(data['success'])
        self.assertEqual(data['type'], 'UserNotFoundException')

    def test_invalid_identity(self):
        response = self.client.get('/api/matches/potential', headers={"X-User-Id": "not-a-uuid"})
        self.assertEqual(response.status_code, 401)
        self.assertFalse(response.json()['success'])

    def test_preview(self):
        response = self.client.get(f'/api/matches/preview/{self.bob.id}', headers=self.as_user(self.alice))

        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual(data['score'], 94)
        self.assertEqual(data['components']['skill_match'], 1.0)
        self.assertEqual(data['components']['proficiency'], 0.8)
        self.assertEqual(len(data['proposed_exchanges']), 2)

    def test_preview_self(self):
        response = self.client.get(f'/api/matches/preview/{self.alice.id}', headers=self.as_user(self.alice))
        self.assertEqual(response.status_code, 400)


@pytest.mark.db
class TestMatchLifecycle(ApiTestCase):

    def setUp(self):
        super().setUp()
        self.alice = self.add_user("Alice", offered=[("Python", "Expert")], wanted=[("Guitar", "High")])
        self.bob = self.add_user("Bob", offered=[("Guitar", "Advanced")], wanted=[("Python", "Low")])
        self.carol = self.add_user("Carol")

    def _create(self, requester, target):
        return self.client.post(
            '/api/matches',
            json={
                "target_user_id": str(target.id),
                "user1_skill": {"skill": "Python", "proficiency": "Expert"},
                "user2_skill": {"skill": "Guitar"}
            },
            headers=self.as_user(requester)
        )

    def _status(self, user, match_id, status):
        return self.client.put(
            f'/api/matches/{match_id}/status',
            json={"status": status},
            headers=self.as_user(user)
        )

    def test_create_freezes_score(self):
        response = self._create(self.alice, self.bob)

        self.assertEqual(response.status_code, 201)
        match = response.json()['match']
        self.assertEqual(match['status'], 'pending')
        self.assertEqual(match['initiated_by'], str(self.alice.id))
        self.assertEqual(match['user1_proficiency'], 'Expert')
        self.assertIsNone(match['user2_proficiency'])

        stored = self.db.get(SkillMatch, uuid.UUID(match['match_id']))
        self.assertEqual(stored.match_score, match['match_score'])
        self.assertGreater(stored.match_score, 0)

    def test_cannot_match_self(self):
        response = self._create(self.alice, self.alice)
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()['type'], 'InvalidMatchOperationException')

    def test_unknown_target(self):
        response = self.client.post(
            '/api/matches',
            json={"target_user_id": str(uuid.uuid4()), "user1_skill": {"skill": "a"}, "user2_skill": {"skill": "b"}},
            headers=self.as_user(self.alice)
        )
        self.assertEqual(response.status_code, 404)

    def test_duplicate_in_either_orientation(self):
        self.assertEqual(self._create(self.alice, self.bob).status_code, 201)

        response = self._create(self.bob, self.alice)

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()['type'], 'DuplicateMatchException')

    def test_blank_skill_rejected(self):
        response = self.client.post(
            '/api/matches',
            json={"target_user_id": str(self.bob.id), "user1_skill": {"skill": "  "}, "user2_skill": {"skill": "b"}},
            headers=self.as_user(self.alice)
        )
        self.assertEqual(response.status_code, 422)

    def test_initiator_cannot_accept_own_request(self):
        match_id = self._create(self.alice, self.bob).json()['match']['match_id']

        response = self._status(self.alice, match_id, 'accepted')

        self.assertEqual(response.status_code, 400)

    def test_initiator_can_cancel(self):
        match_id = self._create(self.alice, self.bob).json()['match']['match_id']
        response = self._status(self.alice, match_id, 'cancelled')
        self.assertEqual(response.json()['match']['status'], 'cancelled')

    def test_accept_then_complete(self):
        match_id = self._create(self.alice, self.bob).json()['match']['match_id']

        accepted = self._status(self.bob, match_id, 'accepted').json()['match']
        self.assertEqual(accepted['status'], 'accepted')
        self.assertIsNotNone(accepted['accepted_at'])

        completed = self._status(self.alice, match_id, 'completed').json()['match']
        self.assertEqual(completed['status'], 'completed')
        self.assertIsNotNone(completed['completed_at'])

        # Completed is final
        self.assertEqual(self._status(self.bob, match_id, 'cancelled').status_code, 400)

    def test_outsider_gets_404(self):
        match_id = self._create(self.alice, self.bob).json()['match']['match_id']
        self.assertEqual(self._status(self.carol, match_id, 'accepted').status_code, 404)

    def test_list_matches(self):
        self._create(self.alice, self.bob)
        self._create(self.carol, self.alice)

        data = self.client.get('/api/matches', headers=self.as_user(self.alice)).json()
        self.assertEqual(data['pagination']['total'], 2)
        self.assertEqual(data['matches'][0]['user1']['name'], 'Carol')

        pending = self.client.get('/api/matches?status=accepted', headers=self.as_user(self.alice)).json()
        self.assertEqual(pending['count'], 0)

    def test_sessions_and_rating(self):
        match_id = self._create(self.alice, self.bob).json()['match']['match_id']
        session_body = {
            "date": (utcnow() + timedelta(days=1)).isoformat(),
            "duration": 60,
            "topic": "Chords"
        }

        # Pending matches take no sessions
        pending = self.client.post(f'/api/matches/{match_id}/sessions', json=session_body,
                                   headers=self.as_user(self.alice))
        self.assertEqual(pending.status_code, 404)

        self._status(self.bob, match_id, 'accepted')
        created = self.client.post(f'/api/matches/{match_id}/sessions', json=session_body,
                                   headers=self.as_user(self.alice))
        self.assertEqual(created.status_code, 201)
        session_id = created.json()['session']['session_id']

        rated = self.client.put(f'/api/matches/{match_id}/sessions/{session_id}/rate',
                                json={"rating": 5}, headers=self.as_user(self.bob))
        self.assertEqual(rated.status_code, 200)
        self.assertEqual(rated.json()['session']['user2_rating'], 5)
        self.assertIsNone(rated.json()['session']['user1_rating'])

        # Bob's rating lands on Alice
        self.db.refresh(self.alice)
        self.assertEqual(self.alice.rating_count, 1)
        self.assertEqual(self.alice.rating_average, 5.0)

        sessions = self.client.get(f'/api/matches/{match_id}/sessions', headers=self.as_user(self.alice)).json()
        self.assertEqual(len(sessions['sessions']), 1)

    def test_session_validation(self):
        match_id = self._create(self.alice, self.bob).json()['match']['match_id']
        self._status(self.bob, match_id, 'accepted')
        response = self.client.post(
            f'/api/matches/{match_id}/sessions',
            json={"date": utcnow().isoformat(), "duration": 5, "topic": "x"},
            headers=self.as_user(self.alice)
        )
        self.assertEqual(response.status_code, 422)

    def test_rate_out_of_range(self):
        match_id = self._create(self.alice, self.bob).json()['match']['match_id']
        response = self.client.put(f'/api/matches/{match_id}/sessions/{uuid.uuid4()}/rate',
                                   json={"rating": 6}, headers=self.as_user(self.bob))
        self.assertEqual(response.status_code, 422)

    def test_rate_unknown_session(self):
        match_id = self._create(self.alice, self.bob).json()['match']['match_id']
        response = self.client.put(f'/api/matches/{match_id}/sessions/{uuid.uuid4()}/rate',
                                   json={"rating": 4}, headers=self.as_user(self.bob))
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json()['type'], 'SessionNotFoundException')


if __name__ == '__main__':
    unittest.main()
