"""
並發控制工具

同步層對整個 collection 做「讀取 → 合併 → 整批寫回」。
寫回時鎖定該 collection 的那一列，至少讓同一個資料庫上的寫入序列化。

注意：
    - SQLite 會忽略 FOR UPDATE，跨 process 的 last-write-wins 是已知限制
    - 讀取不上鎖
"""
from sqlalchemy.orm import Session, Query

from models import StoredCollection


def with_collection_lock(name: str, db: Session) -> Query:
    """
    鎖定一個 collection（行級鎖）

    範例：
        row = with_collection_lock("rooms", db).first()
        if row is None:
            row = StoredCollection(name="rooms", payload="{}")
            db.add(row)
        row.payload = new_payload

    參數：
        name: collection 名稱
        db: SQLAlchemy Session

    返回：
        Query object（需要呼叫 .first() 來取得結果）
    """
    return db.query(StoredCollection).filter(
        StoredCollection.name == name
    ).with_for_update(nowait=False)
