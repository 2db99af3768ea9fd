"""
命名服務：生成各種記錄的 ID 與時間戳

純計算邏輯，不涉及狀態轉換
"""
import time
import uuid


def now_ms() -> int:
    """目前時間（epoch 毫秒）"""
    return int(time.time() * 1000)


def generate_message_id(timestamp: int) -> str:
    """
    生成訊息 ID

    格式：「時間戳-uuid4 hex」
    範例：1718000000000-3f2a9c0e5b8d4c1e9a7f6b5c4d3e2f10

    注意：
    - 前綴讓 ID 大致依時間排序，方便除錯
    - uuid4 有 122 位元的隨機性，同一毫秒內大量寫入也不會碰撞
    - 排序請用 timestamp，不要用 ID
    """
    return f"{timestamp}-{uuid.uuid4().hex}"


def generate_request_id() -> str:
    return f"req_{uuid.uuid4().hex}"


def generate_notification_id() -> str:
    return f"ntf_{uuid.uuid4().hex}"
