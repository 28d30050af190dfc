#!/usr/bin/env python3
"""
Chat endpoints - conversations attached to accepted matches.
"""

import uuid
import logging
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..dependencies import get_db, get_current_user_id
from ..services.chat_service import ChatService
from ..services.converters import to_pagination
from ..models.requests import MessageCreate
from ..models.responses import (
    ChatListResponse,
    ChatDetailResponse,
    MessageResponse,
    MarkReadResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/chats", tags=["chats"])


@router.get("", response_model=ChatListResponse)
def list_chats(
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    return ChatListResponse(success=True, chats=ChatService(db).list_chats(user_id))


@router.get("/match/{match_id}", response_model=ChatDetailResponse)
def get_match_chat(
    match_id: uuid.UUID,
    page: int = Query(default=1, ge=1, description="1 is the newest page"),
    limit: int = Query(default=50, ge=1, le=200),
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    """Open (or start) the chat for a match; messages are returned oldest to newest."""
    chat, messages, total = ChatService(db).get_or_create_chat(user_id, match_id, page=page, limit=limit)
    return ChatDetailResponse(
        success=True,
        chat=chat,
        messages=messages,
        pagination=to_pagination(page, limit, total)
    )


@router.post("/{chat_id}/messages", response_model=MessageResponse, status_code=201)
def send_message(
    chat_id: uuid.UUID,
    request: MessageCreate,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    return MessageResponse(success=True, message=ChatService(db).send_message(user_id, chat_id, request))


@router.put("/{chat_id}/messages/read", response_model=MarkReadResponse)
def mark_messages_read(
    chat_id: uuid.UUID,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    return MarkReadResponse(success=True, updated=ChatService(db).mark_read(user_id, chat_id))
