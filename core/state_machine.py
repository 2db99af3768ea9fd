"""
狀態機：集中管理 Request 的狀態轉換規則

Request 狀態：
    PENDING ──> APPROVED
       │
       └────> REJECTED

- APPROVED / REJECTED 是終態
- 寫入與目前相同的狀態視為冪等成功（不是錯誤）
"""
from typing import Dict, Set

from schemas import RequestStatus
from core.exceptions import InvalidStateTransition


class RequestStateMachine:
    """Request 狀態轉換規則"""

    TRANSITIONS: Dict[RequestStatus, Set[RequestStatus]] = {
        RequestStatus.PENDING: {RequestStatus.APPROVED, RequestStatus.REJECTED},
        RequestStatus.APPROVED: set(),
        RequestStatus.REJECTED: set(),
    }

    @classmethod
    def can_transition(cls, current: RequestStatus, target: RequestStatus) -> bool:
        return current == target or target in cls.TRANSITIONS[current]

    @classmethod
    def validate(cls, current: RequestStatus, target: RequestStatus) -> None:
        """
        檢查狀態轉換是否合法

        異常：
            InvalidStateTransition: 從終態離開，或其他未定義的轉換
        """
        if not cls.can_transition(current, target):
            raise InvalidStateTransition(current.value, target.value)
