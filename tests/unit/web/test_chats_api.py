#!/usr/bin/env python3
"""
API tests for /api/chats.
"""

import sys
import unittest
import uuid
from pathlib import Path
from unittest.mock import patch

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent.parent.parent))

from database.repositories import ChatRepository, MatchRepository
from tests import ApiTestCase


@pytest.mark.db
class TestChatsApi(ApiTestCase):

    def setUp(self):
        super().setUp()
        self.alice = self.add_user("Alice")
        self.bob = self.add_user("Bob")
        self.carol = self.add_user("Carol")

        matches = MatchRepository(self.db)
        self.accepted = matches.create_match(
            user1_id=self.alice.id, user2_id=self.bob.id, match_score=80, initiated_by_id=self.alice.id
        )
        self.accepted.status = 'accepted'
        self.pending = matches.create_match(
            user1_id=self.alice.id, user2_id=self.carol.id, match_score=50, initiated_by_id=self.alice.id
        )
        self.db.commit()

    def _open(self, user, match, query=""):
        return self.client.get(f'/api/chats/match/{match.id}{query}', headers=self.as_user(user))

    def test_open_creates_once(self):
        first = self._open(self.alice, self.accepted)
        second = self._open(self.bob, self.accepted)

        self.assertEqual(first.status_code, 200)
        self.assertEqual(first.json()['chat']['chat_id'], second.json()['chat']['chat_id'])
        self.assertEqual(
            sorted(first.json()['chat']['participants']),
            sorted([str(self.alice.id), str(self.bob.id)])
        )
        self.assertEqual(first.json()['messages'], [])

    def test_concurrent_open_reuses_existing_chat(self):
        existing = ChatRepository(self.db).create_chat(self.accepted.id)
        self.db.commit()

        real_get_by_match = ChatRepository.get_by_match
        seen = []

        def miss_first_lookup(repo, match_id):
            # Simulates the other participant creating the chat after this lookup
            seen.append(match_id)
            return None if len(seen) == 1 else real_get_by_match(repo, match_id)

        with patch.object(ChatRepository, 'get_by_match', autospec=True, side_effect=miss_first_lookup):
            response = self._open(self.bob, self.accepted)

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['chat']['chat_id'], str(existing.id))
        self.assertEqual(len(seen), 2)

    def test_pending_match_has_no_chat(self):
        response = self._open(self.alice, self.pending)
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json()['type'], 'MatchNotFoundException')

    def test_outsider_cannot_open(self):
        self.assertEqual(self._open(self.carol, self.accepted).status_code, 404)

    def test_messages_and_unread(self):
        chat_id = self._open(self.alice, self.accepted).json()['chat']['chat_id']

        for text in ["Hi Bob", "When do we start?"]:
            sent = self.client.post(f'/api/chats/{chat_id}/messages', json={"content": text},
                                    headers=self.as_user(self.alice))
            self.assertEqual(sent.status_code, 201)
        self.assertEqual(sent.json()['message']['read_by'], [str(self.alice.id)])

        chats = self.client.get('/api/chats', headers=self.as_user(self.bob)).json()['chats']
        self.assertEqual(len(chats), 1)
        self.assertEqual(chats[0]['unread_count'], 2)

        marked = self.client.put(f'/api/chats/{chat_id}/messages/read', headers=self.as_user(self.bob))
        self.assertEqual(marked.json(), {'success': True, 'updated': 2})

        chats = self.client.get('/api/chats', headers=self.as_user(self.bob)).json()['chats']
        self.assertEqual(chats[0]['unread_count'], 0)

        detail = self._open(self.bob, self.accepted, "?limit=1").json()
        self.assertEqual([m['content'] for m in detail['messages']], ["When do we start?"])
        self.assertEqual(detail['pagination']['total'], 2)
        self.assertEqual(detail['pagination']['pages'], 2)

    def test_outsider_cannot_post(self):
        chat_id = self._open(self.alice, self.accepted).json()['chat']['chat_id']
        response = self.client.post(f'/api/chats/{chat_id}/messages', json={"content": "hello"},
                                    headers=self.as_user(self.carol))
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json()['type'], 'ChatNotFoundException')

    def test_empty_message_rejected(self):
        chat_id = self._open(self.alice, self.accepted).json()['chat']['chat_id']
        response = self.client.post(f'/api/chats/{chat_id}/messages', json={"content": ""},
                                    headers=self.as_user(self.alice))
        self.assertEqual(response.status_code, 422)

    def test_unknown_chat(self):
        response = self.client.put(f'/api/chats/{uuid.uuid4()}/messages/read', headers=self.as_user(self.alice))
        self.assertEqual(response.status_code, 404)


if __name__ == '__main__':
    unittest.main()
