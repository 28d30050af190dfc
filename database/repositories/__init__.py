from database.repositories.base import BaseRepository
from database.repositories.user import UserRepository, profile_from_orm
from database.repositories.skill import SkillRepository
from database.repositories.match import MatchRepository
from database.repositories.community import CommunityRepository
from database.repositories.chat import ChatRepository

__all__ = [
    'BaseRepository',
    'UserRepository',
    'profile_from_orm',
    'SkillRepository',
    'MatchRepository',
    'CommunityRepository',
    'ChatRepository',
]
