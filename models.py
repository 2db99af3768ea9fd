"""
資料表定義

整個同步層只有一張表：每一列是一個具名 collection，
payload 是整個 collection 的 JSON 字串（整批覆寫，沒有部分更新）。
"""
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, String, Text

from database import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class StoredCollection(Base):
    __tablename__ = "stored_collections"

    name = Column(String(64), primary_key=True)
    payload = Column(Text, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    def __repr__(self):
        return f"<StoredCollection {self.name} ({len(self.payload or '')} bytes)>"
