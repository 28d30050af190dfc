"""Business logic services."""

from .match_service import MatchService
from .user_service import UserService
from .skill_service import SkillService
from .community_service import CommunityService
from .chat_service import ChatService
