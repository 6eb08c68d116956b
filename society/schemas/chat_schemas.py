from datetime import datetime
from pydantic import BaseModel, Field
from society.models.chat import MessageType


class ChatCreate(BaseModel):
    member_id: int = Field(..., description="User to open a one-to-one chat with")


class MessageCreate(BaseModel):
    content: str = Field(..., min_length=1, max_length=5000)
    message_type: MessageType = MessageType.TEXT
    media_url: str | None = Field(None, max_length=500)
    file_size: int | None = Field(None, ge=0)


class ChatMemberResponse(BaseModel):
    id: int
    name: str
    email: str


class MessageResponse(BaseModel):
    id: int
    sender_id: int
    sender_name: str
    content: str
    message_type: MessageType
    media_url: str | None
    file_size: int | None
    created_at: datetime


class ChatSummary(BaseModel):
    id: int
    name: str | None
    is_group: bool
    members: list[ChatMemberResponse]
    last_message_at: datetime


class ChatDetail(ChatSummary):
    messages: list[MessageResponse]
