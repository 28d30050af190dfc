#!/usr/bin/env python3
"""
Chat service - per-match conversations, messages and read receipts.
"""

import logging
from typing import List, Any, Tuple
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from database.models import Chat, ChatMessage, SkillMatch
from database.repositories import ChatRepository, MatchRepository
from ..models.requests import MessageCreate
from ..models.responses import ChatOut, MessageOut
from ..utils import safe_datetime_iso
from ..exceptions import MatchNotFoundException, ChatNotFoundException

logger = logging.getLogger(__name__)

# Only these match states carry a conversation
CHAT_MATCH_STATUSES = ['accepted', 'completed']


class ChatService:
    """Service for match chats."""

    def __init__(self, db: Session):
        self.db = db
        self.chats = ChatRepository(db)
        self.matches = MatchRepository(db)

    def list_chats(self, user_id: Any) -> List[ChatOut]:
        """Active chats for the user, most recently updated first, with unread counts."""
        return [
            self._to_chat_out(chat, unread_count=self.chats.count_unread(chat.id, user_id))
            for chat in self.chats.list_for_user(user_id)
        ]

    def get_or_create_chat(
        self,
        user_id: Any,
        match_id: Any,
        page: int = 1,
        limit: int = 50
    ) -> Tuple[ChatOut, List[MessageOut], int]:
        """
        Open the chat for an accepted or completed match, creating it on first use.

        Returns the chat, one page of messages in chronological order (page 1
        is the newest) and the total message count.

        Raises:
            MatchNotFoundException: If the match does not exist, the caller is not
                part of it, or it has not been accepted.
        """
        match = self.matches.get_for_participant(match_id, user_id, statuses=CHAT_MATCH_STATUSES)
        if not match:
            raise MatchNotFoundException(f"Match {match_id} not found or not accepted")

        chat = self.chats.get_by_match(match.id)
        if chat is None:
            try:
                chat = self.chats.create_chat(match.id)
                self.db.commit()
                logger.info(f"Opened chat {chat.id} for match {match.id}")
            except IntegrityError:
                # The other participant opened it first
                self.db.rollback()
                chat = self.chats.get_by_match(match.id)
                if chat is None:
                    raise

        messages = self.chats.get_messages_page(chat.id, page=page, limit=limit)
        total = self.chats.count_messages(chat.id)
        return (
            self._to_chat_out(chat, match=match),
            [self._to_message_out(m) for m in messages],
            total
        )

    def send_message(self, user_id: Any, chat_id: Any, request: MessageCreate) -> MessageOut:
        chat = self._require_chat(chat_id, user_id)
        message = self.chats.add_message(
            chat,
            sender_id=user_id,
            content=request.content,
            message_type=request.message_type,
            file_url=request.file_url
        )
        self.db.commit()

        logger.debug(f"Message {message.id} posted to chat {chat.id} by {user_id}")
        return self._to_message_out(message)

    def mark_read(self, user_id: Any, chat_id: Any) -> int:
        """Mark every message in the chat as read by the user; returns how many were newly read."""
        chat = self._require_chat(chat_id, user_id)
        updated = self.chats.mark_all_read(chat.id, user_id)
        self.db.commit()
        return updated

    def _require_chat(self, chat_id: Any, user_id: Any) -> Chat:
        chat = self.chats.get_for_participant(chat_id, user_id)
        if not chat:
            raise ChatNotFoundException(f"Chat {chat_id} not found")
        return chat

    def _to_chat_out(self, chat: Chat, match: SkillMatch = None, unread_count: int = None) -> ChatOut:
        match = match or chat.match
        return ChatOut(
            chat_id=str(chat.id),
            match_id=str(chat.match_id),
            participants=[str(match.user1_id), str(match.user2_id)],
            last_message_id=str(chat.last_message_id) if chat.last_message_id else None,
            unread_count=unread_count,
            updated_at=safe_datetime_iso(chat.updated_at),
        )

    def _to_message_out(self, message: ChatMessage) -> MessageOut:
        return MessageOut(
            message_id=str(message.id),
            sender_id=str(message.sender_id),
            content=message.content,
            message_type=message.message_type,
            file_url=message.file_url,
            read_by=[str(uid) for uid in self.chats.readers_of(message.id)],
            created_at=safe_datetime_iso(message.created_at),
        )
