"""
RoomStateManager：管理 Room 的即時狀態

職責：
1. 查詢 Room（不存在就回傳 None，不會給預設值）
2. Shallow merge 更新 Room 並發出 room-changed 事件
3. 訂閱單一 Room 的變化（訂閱時立即重播目前狀態）

原則：
- 單一職責：只管棋盤狀態，不管權限
- 讀取 → 合併 → 寫回 在同一個呼叫內完成
"""
from typing import Callable, Optional, Union
import logging

from schemas import Room, RoomPatch
from core.store import PersistentStore, ROOMS
from core.event_bus import EventBus, ROOM_CHANGED, Unsubscribe

logger = logging.getLogger(__name__)


class RoomStateManager:
    """Room 狀態管理器"""

    def __init__(self, store: PersistentStore, bus: EventBus):
        self.store = store
        self.bus = bus

    def get(self, room_id: str) -> Optional[Room]:
        """
        取得 Room

        返回：
            Room；還沒被寫入過則回傳 None
        """
        return self.store.read(ROOMS).get(room_id)

    def update(self, room_id: str, patch: Union[RoomPatch, dict]) -> Room:
        """
        更新 Room（shallow merge）

        流程：
        1. 讀出所有 rooms
        2. patch 中有設定的欄位覆寫舊值，其餘保留（Room 不存在就建立）
        3. 整批寫回
        4. 發出 room-changed 事件 {room_id, room}

        參數：
            room_id: Room ID（通常是老師 ID）
            patch: RoomPatch 或同欄位的 dict

        返回：
            合併後的 Room
        """
        if isinstance(patch, dict):
            patch = RoomPatch.model_validate(patch)

        rooms = self.store.read(ROOMS)
        existing = rooms.get(room_id)
        base = existing.model_dump(exclude_unset=True) if existing else {}

        room = Room.model_validate({**base, **patch.model_dump(exclude_unset=True)})
        rooms[room_id] = room
        self.store.write(ROOMS, rooms)

        logger.debug(
            f"Room {room_id} {'updated' if existing else 'created'}: {sorted(patch.model_fields_set)}"
        )

        self.bus.publish(ROOM_CHANGED, {"room_id": room_id, "room": room})
        return room

    def subscribe(self, room_id: str, on_change: Callable[[Room], None]) -> Unsubscribe:
        """
        訂閱 Room 的變化

        注意：
            - Room 已經存在時，會立即用目前狀態呼叫 on_change 一次
            - 之後每次該 Room 被 update 都會再呼叫
            - 只收到 room_id 相符的事件
            - 重播時 on_change 拋出異常，訂閱會被取消，異常照常往上拋

        返回：
            unsubscribe function
        """
        def listener(payload):
            if payload["room_id"] == room_id:
                on_change(payload["room"])

        unsubscribe = self.bus.subscribe(ROOM_CHANGED, listener)

        current = self.get(room_id)
        if current is not None:
            try:
                on_change(current)
            except Exception:
                # 重播失敗時呼叫端拿不到 unsubscribe，先取消註冊再往上拋
                unsubscribe()
                raise

        return unsubscribe
