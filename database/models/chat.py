import uuid

from sqlalchemy import Column, Text, Boolean, DateTime, ForeignKey, UniqueConstraint, Index, Uuid
from sqlalchemy.orm import relationship

from .base import Base, utcnow

MESSAGE_TYPES = ('text', 'image', 'file')


class Chat(Base):
    """
    Conversation thread attached to a match; participants are the match's users.
    """
    __tablename__ = 'chat'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    match_id = Column(Uuid, ForeignKey('skill_match.id', ondelete='CASCADE'), nullable=False, unique=True)
    is_active = Column(Boolean, nullable=False, default=True)
    last_message_id = Column(Uuid)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    match = relationship("SkillMatch")
    messages = relationship(
        "ChatMessage",
        back_populates="chat",
        order_by="ChatMessage.created_at",
        cascade="all, delete-orphan"
    )


class ChatMessage(Base):
    __tablename__ = 'chat_message'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    chat_id = Column(Uuid, ForeignKey('chat.id', ondelete='CASCADE'), nullable=False)
    sender_id = Column(Uuid, ForeignKey('users.id', ondelete='CASCADE'), nullable=False)

    content = Column(Text, nullable=False)
    message_type = Column(Text, nullable=False, default='text')
    file_url = Column(Text)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    chat = relationship("Chat", back_populates="messages")
    reads = relationship("ChatMessageRead", back_populates="message", cascade="all, delete-orphan")

    __table_args__ = (
        Index('idx_chat_message_chat_created', 'chat_id', 'created_at'),
    )


class ChatMessageRead(Base):
    """
    Read receipt for one user on one message.
    """
    __tablename__ = 'chat_message_read'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    message_id = Column(Uuid, ForeignKey('chat_message.id', ondelete='CASCADE'), nullable=False)
    user_id = Column(Uuid, ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    read_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    message = relationship("ChatMessage", back_populates="reads")

    __table_args__ = (
        UniqueConstraint('message_id', 'user_id', name='uq_chat_message_read'),
        Index('idx_chat_message_read_user', 'user_id'),
    )
