"""API route handlers."""

from .matches import router as matches_router
from .users import router as users_router
from .skills import router as skills_router
from .communities import router as communities_router
from .chats import router as chats_router
