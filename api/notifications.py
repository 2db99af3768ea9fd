"""
Notification API Endpoints
"""
from typing import List

from fastapi import APIRouter, Depends, HTTPException
import logging

from api.deps import get_context
from core.context import AppContext
from schemas import Notification, StatusResponse

router = APIRouter(prefix="/api/notifications", tags=["notifications"])
logger = logging.getLogger(__name__)


@router.get("/{recipient_id}", response_model=List[Notification])
def list_notifications(recipient_id: str, ctx: AppContext = Depends(get_context)):
    """由新到舊"""
    try:
        return ctx.notifications.list(recipient_id)
    except Exception as e:
        logger.error(f"Failed to list notifications: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal error")


@router.post("/{recipient_id}/{notification_id}/read", response_model=StatusResponse)
def mark_notification_read(recipient_id: str, notification_id: str, ctx: AppContext = Depends(get_context)):
    """只有收件人自己的通知可以標為已讀"""
    try:
        if not ctx.notifications.mark_read(recipient_id, notification_id):
            raise HTTPException(status_code=404, detail="Notification not found")
        return StatusResponse(status="ok")

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to mark notification read: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal error")
