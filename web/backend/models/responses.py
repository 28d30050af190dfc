#!/usr/bin/env python3
"""
Response models for API endpoints.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional, Dict


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    pages: int


class UserSummary(BaseModel):
    """Public card for a user."""
    user_id: str
    name: str
    city: Optional[str] = None
    state: Optional[str] = None
    rating_average: float = Field(0.0, ge=0, le=5)


class OfferedSkillOut(BaseModel):
    skill_id: Optional[str] = None
    skill_name: str
    proficiency: str
    description: Optional[str] = None


class WantedSkillOut(BaseModel):
    skill_id: Optional[str] = None
    skill_name: str
    priority: str


class UserProfileOut(BaseModel):
    """Public profile of a user."""
    user_id: str
    name: str
    bio: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    rating_average: float = Field(ge=0, le=5)
    rating_count: int = 0
    skill_points: int = 0
    language: str = 'en'
    skills_offered: List[OfferedSkillOut] = Field(default_factory=list)
    skills_wanted: List[WantedSkillOut] = Field(default_factory=list)
    last_active_at: Optional[str] = None
    created_at: Optional[str] = None


class UserResponse(BaseModel):
    success: bool
    user: UserProfileOut


class UserSearchResponse(BaseModel):
    success: bool
    users: List[UserProfileOut]
    pagination: Pagination


class DashboardStats(BaseModel):
    total_matches: int
    active_matches: int
    completed_sessions: int
    skill_points: int


class DashboardResponse(BaseModel):
    success: bool
    user: UserProfileOut
    stats: DashboardStats


class SkillListsResponse(BaseModel):
    """The caller's offered and wanted skills."""
    success: bool
    skills_offered: List[OfferedSkillOut]
    skills_wanted: List[WantedSkillOut]


class ExchangeOfferOut(BaseModel):
    """One direction of a proposed trade."""
    from_user_id: str
    to_user_id: str
    skill_name: str
    proficiency: str
    priority: str


class PotentialMatch(BaseModel):
    """A ranked potential partner."""
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "user": {
                    "user_id": "550e8400-e29b-41d4-a716-446655440000",
                    "name": "Asha",
                    "city": "Pune",
                    "state": "Maharashtra",
                    "rating_average": 4.0
                },
                "score": 94,
                "proposed_exchanges": [
                    {
                        "from_user_id": "550e8400-e29b-41d4-a716-446655440000",
                        "to_user_id": "6ba7b810-9dad-11d1-80b4-00c04fd430c8",
                        "skill_name": "Yoga",
                        "proficiency": "Intermediate",
                        "priority": "High"
                    }
                ]
            }
        }
    )

    user: UserSummary
    skills_offered: List[OfferedSkillOut] = Field(default_factory=list)
    skills_wanted: List[WantedSkillOut] = Field(default_factory=list)
    score: int = Field(ge=0, le=100)
    proposed_exchanges: List[ExchangeOfferOut] = Field(default_factory=list, max_length=2)


class PotentialMatchesResponse(BaseModel):
    success: bool
    count: int
    matches: List[PotentialMatch]


class MatchPreviewResponse(BaseModel):
    """Score breakdown against a specific user."""
    success: bool
    user: UserSummary
    score: int = Field(ge=0, le=100)
    components: Dict[str, float]
    proposed_exchanges: List[ExchangeOfferOut]


class MatchOut(BaseModel):
    match_id: str
    user1: UserSummary
    user2: UserSummary
    user1_skill: Optional[str] = None
    user1_proficiency: Optional[str] = None
    user2_skill: Optional[str] = None
    user2_proficiency: Optional[str] = None
    match_score: int = Field(ge=0, le=100)
    status: str
    initiated_by: str
    total_sessions: int = 0
    accepted_at: Optional[str] = None
    completed_at: Optional[str] = None
    created_at: Optional[str] = None


class MatchResponse(BaseModel):
    success: bool
    match: MatchOut


class MatchListResponse(BaseModel):
    success: bool
    count: int
    matches: List[MatchOut]
    pagination: Pagination


class SessionOut(BaseModel):
    session_id: str
    scheduled_at: Optional[str]
    duration_minutes: int
    topic: str
    notes: Optional[str] = None
    user1_rating: Optional[int] = None
    user2_rating: Optional[int] = None


class SessionsResponse(BaseModel):
    success: bool
    sessions: List[SessionOut]


class SessionResponse(BaseModel):
    success: bool
    session: SessionOut


class CatalogSkillOut(BaseModel):
    skill_id: str
    name: str
    category: str
    description: Optional[str] = None
    icon: Optional[str] = None
    popularity: int = 0
    is_active: bool = True


class CatalogSkillResponse(BaseModel):
    success: bool
    skill: CatalogSkillOut


class CatalogSkillListResponse(BaseModel):
    success: bool
    skills: List[CatalogSkillOut]
    pagination: Optional[Pagination] = None


class CategoryCount(BaseModel):
    name: str
    count: int = Field(ge=0)
    icon: str


class CategoriesResponse(BaseModel):
    success: bool
    categories: List[CategoryCount]


class DeleteResponse(BaseModel):
    success: bool


class CommunityOut(BaseModel):
    community_id: str
    name: str
    description: str
    category: str
    city: Optional[str] = None
    state: Optional[str] = None
    is_virtual: bool = False
    language: str = 'en'
    admin: Optional[UserSummary] = None
    moderator_ids: List[str] = Field(default_factory=list)
    skills: List[str] = Field(default_factory=list)
    rules: List[str] = Field(default_factory=list)
    is_public: bool = True
    member_count: int = Field(0, ge=0)
    created_at: Optional[str] = None


class CommunityResponse(BaseModel):
    success: bool
    community: CommunityOut


class CommunityListResponse(BaseModel):
    success: bool
    communities: List[CommunityOut]
    pagination: Pagination


class MembershipResponse(BaseModel):
    success: bool
    is_member: bool
    member_count: int


class CommunityMemberOut(BaseModel):
    user: UserSummary
    role: str
    joined_at: Optional[str] = None


class CommunityMembersResponse(BaseModel):
    success: bool
    members: List[CommunityMemberOut]
    pagination: Pagination


class MessageOut(BaseModel):
    message_id: str
    sender_id: str
    content: str
    message_type: str
    file_url: Optional[str] = None
    read_by: List[str] = Field(default_factory=list)
    created_at: Optional[str] = None


class ChatOut(BaseModel):
    chat_id: str
    match_id: str
    participants: List[str]
    last_message_id: Optional[str] = None
    unread_count: Optional[int] = None
    updated_at: Optional[str] = None


class ChatDetailResponse(BaseModel):
    success: bool
    chat: ChatOut
    messages: List[MessageOut]
    pagination: Pagination


class ChatListResponse(BaseModel):
    success: bool
    chats: List[ChatOut]


class MessageResponse(BaseModel):
    success: bool
    message: MessageOut


class MarkReadResponse(BaseModel):
    success: bool
    updated: int
