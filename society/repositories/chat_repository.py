from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from society.models.chat import Chat, ChatMember, ChatMessage


class ChatRepository:
    """Repository for chats, their members and messages"""

    def __init__(self, db: Session):
        self.db = db

    def _member_of(self, user_id: int):
        return select(ChatMember.chat_id).where(ChatMember.user_id == user_id)

    def get_chat(self, chat_id: int, site_id: int | None) -> Chat | None:
        """Chat of a site with members and messages loaded"""
        return (
            self.db.query(Chat)
            .options(
                selectinload(Chat.members).selectinload(ChatMember.user),
                selectinload(Chat.messages).selectinload(ChatMessage.sender),
            )
            .filter(Chat.id == chat_id, Chat.site_id == site_id)
            .first()
        )

    def get_user_chats(self, user_id: int, site_id: int | None) -> list[Chat]:
        """Chats the user belongs to, most recently active first"""
        return (
            self.db.query(Chat)
            .options(selectinload(Chat.members).selectinload(ChatMember.user))
            .filter(Chat.site_id == site_id, Chat.id.in_(self._member_of(user_id)))
            .order_by(Chat.last_message_at.desc(), Chat.id.desc())
            .all()
        )

    def find_direct_chat(self, site_id: int | None, user_id: int, other_id: int) -> Chat | None:
        """The one-to-one chat between two users, if it exists"""
        return (
            self.db.query(Chat)
            .filter(
                Chat.site_id == site_id,
                Chat.is_group.is_(False),
                Chat.id.in_(self._member_of(user_id)),
                Chat.id.in_(self._member_of(other_id)),
            )
            .first()
        )

    def create(self, chat: Chat) -> Chat:
        self.db.add(chat)
        self.db.commit()
        self.db.refresh(chat)
        return chat

    def add_message_no_commit(self, message: ChatMessage) -> ChatMessage:
        """Add message without committing (for atomic ops)"""
        self.db.add(message)
        self.db.flush()
        return message
