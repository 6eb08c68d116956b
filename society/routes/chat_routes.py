from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from society.database import get_db
from society.dependencies import get_current_principal
from society.models.principal import Principal
from society.schemas.chat_schemas import (
    ChatCreate,
    ChatDetail,
    ChatSummary,
    MessageCreate,
    MessageResponse,
)
from society.services.chat_service import ChatService

router = APIRouter()


@router.get("", response_model=list[ChatSummary])
async def list_chats(
    principal: Principal = Depends(get_current_principal), db: Session = Depends(get_db)
):
    """Chats the caller belongs to, most recently active first"""
    service = ChatService(db)
    return service.list_chats(principal)


@router.post("", response_model=ChatSummary)
async def open_chat(
    data: ChatCreate,
    response: Response,
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db),
):
    """
    Open a one-to-one chat with another member of the site.

    Returns the existing chat (200) when the pair already has one,
    otherwise the new chat (201).
    """
    service = ChatService(db)
    chat, created = service.open_direct_chat(data.member_id, principal)
    if created:
        response.status_code = status.HTTP_201_CREATED
    return chat


@router.get("/{chat_id}", response_model=ChatDetail)
async def get_chat(
    chat_id: int,
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db),
):
    service = ChatService(db)
    return service.get_chat(chat_id, principal)


@router.post(
    "/{chat_id}/messages", response_model=MessageResponse, status_code=status.HTTP_201_CREATED
)
async def send_message(
    chat_id: int,
    data: MessageCreate,
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db),
):
    service = ChatService(db)
    return service.send_message(chat_id, data, principal)
