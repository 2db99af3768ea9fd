"""
Chat API Endpoints

對話以 (student_id, teacher_id) 為單位，回傳的一定是完整且排序好的歷史
"""
from typing import List

from fastapi import APIRouter, Depends, HTTPException
import logging

from api.deps import get_context
from core.context import AppContext
from schemas import Message, MessageSubmit

router = APIRouter(prefix="/api/chat", tags=["chat"])
logger = logging.getLogger(__name__)


@router.get("/{student_id}/{teacher_id}", response_model=List[Message])
def list_messages(student_id: str, teacher_id: str, ctx: AppContext = Depends(get_context)):
    try:
        return ctx.messages.list(student_id, teacher_id)
    except Exception as e:
        logger.error(f"Failed to list messages: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal error")


@router.post("/{student_id}/{teacher_id}", response_model=Message)
def send_message(
    student_id: str,
    teacher_id: str,
    data: MessageSubmit,
    ctx: AppContext = Depends(get_context)
):
    try:
        return ctx.messages.append(student_id, teacher_id, data.text, data.sender)
    except Exception as e:
        logger.error(f"Failed to send message: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal error")
