import logging
from typing import List, Optional, Any
from sqlalchemy import select, func, or_, exists, and_

from database.models import Chat, ChatMessage, ChatMessageRead, SkillMatch, utcnow
from database.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


def _participant(user_id: Any):
    return or_(SkillMatch.user1_id == user_id, SkillMatch.user2_id == user_id)


class ChatRepository(BaseRepository):
    def get_by_match(self, match_id: Any) -> Optional[Chat]:
        stmt = select(Chat).where(Chat.match_id == match_id)
        return self.db.execute(stmt).scalar_one_or_none()

    def create_chat(self, match_id: Any) -> Chat:
        chat = Chat(match_id=match_id)
        self.db.add(chat)
        self.db.flush()
        return chat

    def get_for_participant(self, chat_id: Any, user_id: Any) -> Optional[Chat]:
        stmt = (
            select(Chat)
            .join(SkillMatch, Chat.match_id == SkillMatch.id)
            .where(Chat.id == chat_id, _participant(user_id))
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def list_for_user(self, user_id: Any) -> List[Chat]:
        stmt = (
            select(Chat)
            .join(SkillMatch, Chat.match_id == SkillMatch.id)
            .where(Chat.is_active.is_(True), _participant(user_id))
            .order_by(Chat.updated_at.desc())
        )
        return list(self.db.execute(stmt).scalars().all())

    def count_messages(self, chat_id: Any) -> int:
        stmt = select(func.count(ChatMessage.id)).where(ChatMessage.chat_id == chat_id)
        return self.db.execute(stmt).scalar_one()

    def get_messages_page(
        self,
        chat_id: Any,
        page: int = 1,
        limit: int = 50
    ) -> List[ChatMessage]:
        """Page through messages newest-first; each page is returned oldest-first."""
        stmt = (
            select(ChatMessage)
            .where(ChatMessage.chat_id == chat_id)
            .order_by(ChatMessage.created_at.desc(), ChatMessage.id.desc())
        )
        messages = self.page(stmt, page, limit)
        messages.reverse()
        return messages

    def get_message(self, message_id: Any) -> Optional[ChatMessage]:
        return self.db.get(ChatMessage, message_id)

    def add_message(
        self,
        chat: Chat,
        sender_id: Any,
        content: str,
        message_type: str = 'text',
        file_url: Optional[str] = None
    ) -> ChatMessage:
        message = ChatMessage(
            chat_id=chat.id,
            sender_id=sender_id,
            content=content,
            message_type=message_type,
            file_url=file_url
        )
        self.db.add(message)
        self.db.flush()

        # The sender has read their own message
        self.db.add(ChatMessageRead(message_id=message.id, user_id=sender_id))
        chat.last_message_id = message.id
        chat.updated_at = utcnow()
        self.db.flush()
        return message

    def _unread_filter(self, chat_id: Any, user_id: Any):
        already_read = exists().where(and_(
            ChatMessageRead.message_id == ChatMessage.id,
            ChatMessageRead.user_id == user_id
        ))
        return and_(ChatMessage.chat_id == chat_id, ~already_read)

    def count_unread(self, chat_id: Any, user_id: Any) -> int:
        stmt = select(func.count(ChatMessage.id)).where(self._unread_filter(chat_id, user_id))
        return self.db.execute(stmt).scalar_one()

    def mark_all_read(self, chat_id: Any, user_id: Any) -> int:
        stmt = select(ChatMessage.id).where(self._unread_filter(chat_id, user_id))
        unread_ids = self.db.execute(stmt).scalars().all()
        for message_id in unread_ids:
            self.db.add(ChatMessageRead(message_id=message_id, user_id=user_id))
        self.db.flush()
        return len(unread_ids)

    def readers_of(self, message_id: Any) -> List[Any]:
        stmt = select(ChatMessageRead.user_id).where(ChatMessageRead.message_id == message_id)
        return list(self.db.execute(stmt).scalars().all())
