"""
自定義異常類別

集中管理所有同步層異常，方便 API 層統一處理

注意：查無資料（NotFound）不是異常，一律以 None / False 回傳
"""


class TopChessException(Exception):
    """所有同步層異常的基類"""
    pass


# ============ Storage 相關異常 ============

class UnknownCollection(TopChessException):
    """沒有註冊的 collection 名稱"""
    def __init__(self, name):
        self.name = name
        super().__init__(f"Unknown collection {name!r}")


class MalformedPersistedData(TopChessException):
    """
    儲存的 collection 無法解碼或不符合 schema

    可以用 PersistentStore.reset(name) 清掉該 collection 來復原
    """
    def __init__(self, name, reason):
        self.name = name
        self.reason = reason
        super().__init__(f"Stored collection {name!r} is malformed: {reason}")


# ============ 狀態轉換異常 ============

class InvalidStateTransition(TopChessException):
    """非法的狀態轉換"""
    def __init__(self, current, target):
        self.current = current
        self.target = target
        super().__init__(f"Cannot transition request from {current} to {target}")
