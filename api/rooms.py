"""
Room API Endpoints

前端靠短輪詢 GET 取得棋盤狀態；同一個 process 內的訂閱者透過 EventBus 即時收到更新
"""
from fastapi import APIRouter, Depends, HTTPException
import logging

from api.deps import get_context
from core.context import AppContext
from schemas import Room, RoomPatch

router = APIRouter(prefix="/api/rooms", tags=["rooms"])
logger = logging.getLogger(__name__)


@router.get("/{room_id}", response_model=Room)
def get_room(room_id: str, ctx: AppContext = Depends(get_context)):
    try:
        room = ctx.rooms.get(room_id)
        if room is None:
            raise HTTPException(status_code=404, detail="Room not found")
        return room

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to get room: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal error")


@router.patch("/{room_id}", response_model=Room)
def update_room(room_id: str, patch: RoomPatch, ctx: AppContext = Depends(get_context)):
    """
    更新棋盤狀態（shallow merge）

    Room 不存在時會建立；body 沒帶的欄位保留原值
    """
    try:
        return ctx.rooms.update(room_id, patch)
    except Exception as e:
        logger.error(f"Failed to update room: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal error")
