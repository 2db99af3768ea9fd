"""
MessageLog：學生與老師之間的對話紀錄

- 只能新增，不能修改或刪除
- 讀取時依 timestamp 由舊到新排序，相同 timestamp 保持寫入順序
- 每次新增都會發出 chat-changed 事件
"""
from typing import Callable, List
import logging

from schemas import Message, SenderRole
from core.store import PersistentStore, MESSAGES
from core.event_bus import EventBus, CHAT_CHANGED, Unsubscribe
from services.naming_service import generate_message_id, now_ms

logger = logging.getLogger(__name__)


def _in_conversation(message: Message, student_id: str, teacher_id: str) -> bool:
    return message.student_id == student_id and message.teacher_id == teacher_id


class MessageLog:
    """對話紀錄"""

    def __init__(self, store: PersistentStore, bus: EventBus, clock: Callable[[], int] = now_ms):
        self.store = store
        self.bus = bus
        self.clock = clock

    def append(self, student_id: str, teacher_id: str, text: str, sender: SenderRole) -> Message:
        """
        新增一則訊息

        注意：
            timestamp 不會早於同一對話的最後一則訊息，
            系統時鐘往回跳時仍然保持呼叫順序

        返回：
            新建立的 Message
        """
        messages = self.store.read(MESSAGES)

        timestamp = self.clock()
        for existing in messages:
            if _in_conversation(existing, student_id, teacher_id) and existing.timestamp > timestamp:
                timestamp = existing.timestamp

        message = Message(
            id=generate_message_id(timestamp),
            student_id=student_id,
            teacher_id=teacher_id,
            sender=SenderRole(sender),
            text=text,
            timestamp=timestamp,
        )
        messages.append(message)
        self.store.write(MESSAGES, messages)

        logger.debug(f"Message {message.id} appended ({student_id} <-> {teacher_id})")

        self.bus.publish(CHAT_CHANGED, {"student_id": student_id, "teacher_id": teacher_id})
        return message

    def list(self, student_id: str, teacher_id: str) -> List[Message]:
        messages = [
            m for m in self.store.read(MESSAGES)
            if _in_conversation(m, student_id, teacher_id)
        ]
        # sorted() 是 stable sort，同 timestamp 保持寫入順序
        return sorted(messages, key=lambda m: m.timestamp)

    def subscribe(
        self,
        student_id: str,
        teacher_id: str,
        on_change: Callable[[List[Message]], None],
    ) -> Unsubscribe:
        """
        訂閱對話

        每次對話有新訊息，on_change 都會收到完整且排序好的訊息列表（不是差異）

        返回：
            unsubscribe function
        """
        def listener(payload):
            if payload["student_id"] == student_id and payload["teacher_id"] == teacher_id:
                on_change(self.list(student_id, teacher_id))

        return self.bus.subscribe(CHAT_CHANGED, listener)
