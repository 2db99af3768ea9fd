"""
PersistentStore：具名 collection 的讀寫

職責：
1. 讀取整個 collection（沒有資料時回傳空的預設值）
2. 整批覆寫 collection
3. 在邊界上用 schema 驗證資料

原則：
- 這是唯一碰到儲存媒介的元件
- 沒有部分寫入：合併邏輯全部在上層元件
- 寫入立即 commit，之後的 read 一定看得到
"""
from typing import Any, Callable, Dict, List, Tuple
import logging

from pydantic import TypeAdapter, ValidationError
from sqlalchemy.orm import Session, sessionmaker

from models import StoredCollection
from schemas import Teacher, Room, Request, Message, Notification
from core.locks import with_collection_lock
from core.exceptions import UnknownCollection, MalformedPersistedData
from database import transactional

logger = logging.getLogger(__name__)

TEACHERS = "teachers"
ROOMS = "rooms"
REQUESTS = "requests"
MESSAGES = "messages"
NOTIFICATIONS = "notifications"

# collection 名稱 -> (schema adapter, 空集合的 factory)
COLLECTIONS: Dict[str, Tuple[TypeAdapter, Callable[[], Any]]] = {
    TEACHERS: (TypeAdapter(List[Teacher]), list),
    ROOMS: (TypeAdapter(Dict[str, Room]), dict),
    REQUESTS: (TypeAdapter(List[Request]), list),
    MESSAGES: (TypeAdapter(List[Message]), list),
    NOTIFICATIONS: (TypeAdapter(Dict[str, List[Notification]]), dict),
}


@transactional
def _replace_collection(db: Session, name: str, payload: str) -> None:
    row = with_collection_lock(name, db).first()
    if row is None:
        db.add(StoredCollection(name=name, payload=payload))
    else:
        row.payload = payload


@transactional
def _delete_collection(db: Session, name: str) -> bool:
    row = with_collection_lock(name, db).first()
    if row is None:
        return False
    db.delete(row)
    return True


class PersistentStore:
    """具名 collection 的持久化儲存"""

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    @staticmethod
    def _spec(name: str) -> Tuple[TypeAdapter, Callable[[], Any]]:
        try:
            return COLLECTIONS[name]
        except KeyError:
            raise UnknownCollection(name) from None

    def _load_payload(self, name: str):
        db = self._session_factory()
        try:
            row = db.query(StoredCollection).filter(StoredCollection.name == name).first()
            return row.payload if row else None
        finally:
            db.close()

    def read(self, name: str) -> Any:
        """
        讀取整個 collection

        參數：
            name: collection 名稱（teachers / rooms / requests / messages / notifications）

        返回：
            解碼並驗證過的 collection；沒有資料時回傳空的 list 或 dict

        異常：
            UnknownCollection: 名稱沒有註冊
            MalformedPersistedData: 儲存內容不是合法 JSON 或不符合 schema
        """
        adapter, default = self._spec(name)
        payload = self._load_payload(name)
        if payload is None:
            return default()

        try:
            return adapter.validate_json(payload)
        except ValidationError as e:
            logger.error(f"Collection {name} failed validation: {e.error_count()} error(s)")
            raise MalformedPersistedData(name, str(e)) from e

    def write(self, name: str, collection: Any) -> None:
        """
        整批覆寫 collection

        參數：
            name: collection 名稱
            collection: 完整的 collection（會先經過 schema 驗證）
        """
        adapter, _ = self._spec(name)
        payload = adapter.dump_json(adapter.validate_python(collection)).decode("utf-8")

        db = self._session_factory()
        try:
            _replace_collection(db, name, payload)
        finally:
            db.close()

        logger.debug(f"Wrote collection {name} ({len(payload)} bytes)")

    def contains(self, name: str) -> bool:
        """是否曾經寫入過這個 collection"""
        self._spec(name)
        return self._load_payload(name) is not None

    def reset(self, name: str) -> bool:
        """
        刪除整個 collection

        用途：
            MalformedPersistedData 的復原手段，刪除後 read 會回到空集合

        返回：
            True 如果原本有資料
        """
        self._spec(name)
        db = self._session_factory()
        try:
            removed = _delete_collection(db, name)
        finally:
            db.close()

        if removed:
            logger.warning(f"Collection {name} was reset")
        return removed
