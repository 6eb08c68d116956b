import logging

from sqlalchemy.orm import Session

from society.core.exceptions import ForbiddenException, NotFoundException, ValidationException
from society.models.base import utcnow
from society.models.chat import Chat, ChatMember, ChatMessage
from society.models.principal import Principal
from society.models.user import User
from society.repositories.chat_repository import ChatRepository
from society.repositories.user_repository import UserRepository
from society.schemas.chat_schemas import MessageCreate
from society.services.notification_service import NotificationService

logger = logging.getLogger(__name__)


def chat_link(user: User, chat_id: int) -> str:
    """Where a chat notification takes its recipient"""
    return f"{user.role.home_path}/community?view=chat&chat_id={chat_id}"


class ChatService:
    """Service layer for community chats"""

    def __init__(self, db: Session):
        self.db = db
        self.chat_repo = ChatRepository(db)
        self.user_repo = UserRepository(db)
        self.notifications = NotificationService(db)

    def list_chats(self, principal: Principal) -> list[dict]:
        chats = self.chat_repo.get_user_chats(principal.user.id, principal.site_id)
        return [self._serialize(chat) for chat in chats]

    def open_direct_chat(self, member_id: int, principal: Principal) -> tuple[dict, bool]:
        """
        Get or create the one-to-one chat between the caller and another
        user of the same site.

        Returns:
            (chat dict, True if the chat was created)

        Raises:
            ValidationException: If the caller names themselves
            NotFoundException: If the member is not in the caller's site
        """
        if member_id == principal.user.id:
            raise ValidationException("Cannot create chat with yourself")

        member = self.user_repo.get_by_id_and_site(member_id, principal.site_id)
        if not member:
            raise NotFoundException("User not found")

        existing = self.chat_repo.find_direct_chat(principal.site_id, principal.user.id, member.id)
        if existing:
            return self._serialize(self._get_chat(existing.id, principal)), False

        chat = self.chat_repo.create(
            Chat(
                site_id=principal.site_id,
                is_group=False,
                members=[ChatMember(user_id=principal.user.id), ChatMember(user_id=member.id)],
            )
        )
        logger.info("Chat %s opened between users %s and %s", chat.id, principal.user.id, member.id)
        return self._serialize(self._get_chat(chat.id, principal)), True

    def get_chat(self, chat_id: int, principal: Principal) -> dict:
        """
        A chat with its messages, oldest first.

        Raises:
            NotFoundException: If the chat is not in the caller's site
            ForbiddenException: If the caller is not a member
        """
        chat = self._get_member_chat(chat_id, principal)
        data = self._serialize(chat)
        data["messages"] = [self._serialize_message(message) for message in chat.messages]
        return data

    def send_message(self, chat_id: int, data: MessageCreate, principal: Principal) -> dict:
        """
        Post a message and notify every other member, atomically.

        Raises:
            NotFoundException: If the chat is not in the caller's site
            ForbiddenException: If the caller is not a member
        """
        chat = self._get_member_chat(chat_id, principal)

        try:
            message = self.chat_repo.add_message_no_commit(
                ChatMessage(
                    chat_id=chat.id,
                    sender_id=principal.user.id,
                    content=data.content,
                    message_type=data.message_type,
                    media_url=data.media_url,
                    file_size=data.file_size,
                )
            )
            chat.last_message_at = message.created_at or utcnow()
            notice = f"New message from {principal.user.name}"
            for member in chat.members:
                if member.user_id != principal.user.id:
                    self.notifications.notify_no_commit(
                        member.user_id, notice, chat_link(member.user, chat.id)
                    )
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        self.db.refresh(message)
        return self._serialize_message(message, sender_name=principal.user.name)

    def _get_chat(self, chat_id: int, principal: Principal) -> Chat:
        chat = self.chat_repo.get_chat(chat_id, principal.site_id)
        if not chat:
            raise NotFoundException("Chat not found")
        return chat

    def _get_member_chat(self, chat_id: int, principal: Principal) -> Chat:
        chat = self._get_chat(chat_id, principal)
        if not chat.has_member(principal.user.id):
            raise ForbiddenException("Not a member of this chat")
        return chat

    @staticmethod
    def _serialize(chat: Chat) -> dict:
        return {
            "id": chat.id,
            "name": chat.name,
            "is_group": chat.is_group,
            "members": [
                {"id": member.user.id, "name": member.user.name, "email": member.user.email}
                for member in chat.members
            ],
            "last_message_at": chat.last_message_at,
        }

    @staticmethod
    def _serialize_message(message: ChatMessage, sender_name: str | None = None) -> dict:
        return {
            "id": message.id,
            "sender_id": message.sender_id,
            "sender_name": sender_name or message.sender.name,
            "content": message.content,
            "message_type": message.message_type,
            "media_url": message.media_url,
            "file_size": message.file_size,
            "created_at": message.created_at,
        }
