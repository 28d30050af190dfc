#!/usr/bin/env python3
"""
Tests for schema creation and the transactional session scope.
"""

import unittest
from unittest.mock import patch, MagicMock

from sqlalchemy import create_engine, inspect
from sqlalchemy.exc import OperationalError
from tenacity import stop_after_attempt, wait_none

from database.database import db_session_scope
from database.init_db import init_db


class TestInitDb(unittest.TestCase):

    def test_creates_all_tables(self):
        engine = create_engine("sqlite://")

        init_db(engine)

        tables = set(inspect(engine).get_table_names())
        self.assertTrue({
            'users', 'user_skill_offered', 'user_skill_wanted', 'skill', 'skill_match',
            'match_session', 'community', 'community_member', 'chat', 'chat_message',
            'chat_message_read',
        }.issubset(tables))

    def test_retries_then_reraises(self):
        error = OperationalError("CREATE TABLE", {}, Exception("database is starting up"))
        fast_init = init_db.retry_with(stop=stop_after_attempt(3), wait=wait_none())

        with patch('database.init_db.Base.metadata.create_all', side_effect=error) as create_all:
            with self.assertRaises(OperationalError):
                fast_init(MagicMock())

        self.assertEqual(create_all.call_count, 3)


class TestSessionScope(unittest.TestCase):

    def test_commits_on_success(self):
        session = MagicMock()
        with patch('database.database.SessionLocal', return_value=session):
            with db_session_scope("sqlite://") as s:
                self.assertIs(s, session)

        session.commit.assert_called_once()
        session.rollback.assert_not_called()
        session.close.assert_called_once()

    def test_rolls_back_and_reraises(self):
        session = MagicMock()
        with patch('database.database.SessionLocal', return_value=session):
            with self.assertRaises(ValueError):
                with db_session_scope("sqlite://"):
                    raise ValueError("bad data")

        session.commit.assert_not_called()
        session.rollback.assert_called_once()
        session.close.assert_called_once()


if __name__ == '__main__':
    unittest.main()
