"""
EventBus：process 內的 publish / subscribe

特性：
- 同步投遞：publish 返回時，所有 listener 都已經跑完
- 依註冊順序呼叫，廣播給所有 subscriber
- 沒有 queue、retry、跨 process fan-out

Listener 出錯時預設會被隔離（記錄 log 後繼續投遞給下一個 listener）；
isolate_errors=False 時異常會直接往上拋，並中止這次投遞。
"""
from typing import Any, Callable, Dict, List
import logging

logger = logging.getLogger(__name__)

ROOM_CHANGED = "room-changed"
CHAT_CHANGED = "chat-changed"
NOTIFICATIONS_CHANGED = "notifications-changed"

Listener = Callable[[Any], None]
Unsubscribe = Callable[[], None]


class _Subscription:
    def __init__(self, event: str, listener: Listener):
        self.event = event
        self.listener = listener
        self.active = True


class EventBus:
    """In-process 的事件匯流排，由 composition root 建立並注入各元件"""

    def __init__(self, isolate_errors: bool = True):
        self.isolate_errors = isolate_errors
        self._subscriptions: Dict[str, List[_Subscription]] = {}

    def subscribe(self, event: str, listener: Listener) -> Unsubscribe:
        """
        註冊 listener

        返回：
            unsubscribe function；呼叫後這個 listener 不會再被呼叫（重複呼叫無副作用）
        """
        subscription = _Subscription(event, listener)
        self._subscriptions.setdefault(event, []).append(subscription)

        def unsubscribe():
            if not subscription.active:
                return
            subscription.active = False
            remaining = [s for s in self._subscriptions.get(event, []) if s is not subscription]
            if remaining:
                self._subscriptions[event] = remaining
            else:
                self._subscriptions.pop(event, None)

        return unsubscribe

    def publish(self, event: str, payload: Any = None) -> int:
        """
        同步呼叫所有註冊在 event 上的 listener

        注意：
            - 投遞開始後才註冊的 listener 不會收到這次事件
            - 投遞途中被 unsubscribe 的 listener 不會再被呼叫

        返回：
            實際呼叫的 listener 數量
        """
        delivered = 0
        for subscription in list(self._subscriptions.get(event, [])):
            if not subscription.active:
                continue
            delivered += 1
            try:
                subscription.listener(payload)
            except Exception as e:
                if not self.isolate_errors:
                    raise
                logger.error(f"Listener for {event} failed: {e}", exc_info=True)
        return delivered

    def listener_count(self, event: str) -> int:
        return len(self._subscriptions.get(event, []))
