"""
NotificationCenter：使用者通知

通知依收件人分組儲存；只有收件人本人可以把通知標為已讀
（mark_read 需要同時給 recipient_id 與 notification_id）
"""
from typing import Callable, List, Optional
import logging

from schemas import Notification
from core.store import PersistentStore, NOTIFICATIONS
from core.event_bus import EventBus, NOTIFICATIONS_CHANGED
from services.naming_service import generate_notification_id, now_ms

logger = logging.getLogger(__name__)


class NotificationCenter:
    """通知管理器"""

    def __init__(self, store: PersistentStore, bus: EventBus, clock: Callable[[], int] = now_ms):
        self.store = store
        self.bus = bus
        self.clock = clock

    def notify(
        self,
        recipient_id: str,
        title: str,
        message: str,
        type: str = "info",
        link: Optional[str] = None,
    ) -> Notification:
        notifications = self.store.read(NOTIFICATIONS)
        notification = Notification(
            id=generate_notification_id(),
            recipient_id=recipient_id,
            title=title,
            message=message,
            type=type,
            read=False,
            timestamp=self.clock(),
            link=link,
        )
        notifications.setdefault(recipient_id, []).append(notification)
        self.store.write(NOTIFICATIONS, notifications)

        logger.info(f"Notification {notification.id} ({type}) sent to {recipient_id}")

        self.bus.publish(NOTIFICATIONS_CHANGED, {"recipient_id": recipient_id})
        return notification

    def list(self, recipient_id: str) -> List[Notification]:
        """收件人的通知，由新到舊"""
        inbox = self.store.read(NOTIFICATIONS).get(recipient_id, [])
        return list(reversed(inbox))

    def unread_count(self, recipient_id: str) -> int:
        return sum(1 for n in self.store.read(NOTIFICATIONS).get(recipient_id, []) if not n.read)

    def mark_read(self, recipient_id: str, notification_id: str) -> bool:
        """
        標記單則通知為已讀

        返回：
            True 成功（已讀過也算成功）；False 該收件人沒有這則通知
        """
        notifications = self.store.read(NOTIFICATIONS)
        inbox = notifications.get(recipient_id, [])
        for index, notification in enumerate(inbox):
            if notification.id != notification_id:
                continue
            if not notification.read:
                inbox[index] = notification.model_copy(update={"read": True})
                self.store.write(NOTIFICATIONS, notifications)
                self.bus.publish(NOTIFICATIONS_CHANGED, {"recipient_id": recipient_id})
            return True
        return False

    def mark_all_read(self, recipient_id: str) -> int:
        """返回：這次被標為已讀的數量"""
        notifications = self.store.read(NOTIFICATIONS)
        inbox = notifications.get(recipient_id, [])
        changed = 0
        for index, notification in enumerate(inbox):
            if not notification.read:
                inbox[index] = notification.model_copy(update={"read": True})
                changed += 1

        if changed:
            self.store.write(NOTIFICATIONS, notifications)
            self.bus.publish(NOTIFICATIONS_CHANGED, {"recipient_id": recipient_id})
        return changed
