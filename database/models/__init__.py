from .base import Base, utcnow
from .user import User, UserSkillOffered, UserSkillWanted, LANGUAGES
from .skill import Skill, SKILL_CATEGORIES
from .match import SkillMatch, MatchSession, MATCH_STATUSES
from .community import Community, CommunityMember, COMMUNITY_CATEGORIES
from .chat import Chat, ChatMessage, ChatMessageRead, MESSAGE_TYPES

__all__ = [
    'Base',
    'utcnow',
    'User',
    'UserSkillOffered',
    'UserSkillWanted',
    'LANGUAGES',
    'Skill',
    'SKILL_CATEGORIES',
    'SkillMatch',
    'MatchSession',
    'MATCH_STATUSES',
    'Community',
    'CommunityMember',
    'COMMUNITY_CATEGORIES',
    'Chat',
    'ChatMessage',
    'ChatMessageRead',
    'MESSAGE_TYPES',
]
