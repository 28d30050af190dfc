"""Discovery Module - candidate retrieval and ranking."""
from core.discovery.interfaces import UserRepository
from core.discovery.service import MatchDiscoveryService

__all__ = ['MatchDiscoveryService', 'UserRepository']
