"""
RequestWorkflow：學生申請加入老師教室的流程

職責：
1. 建立申請（同一對學生/老師只會有一筆，重複建立是冪等的）
2. 查詢申請狀態
3. 老師審核（透過 RequestStateMachine 驗證轉換）

查無資料一律回傳 None / False，不丟異常
"""
from typing import Callable, List, Optional
import logging

from schemas import Request, RequestStatus, SenderRole
from core.store import PersistentStore, REQUESTS
from core.message_log import MessageLog
from core.state_machine import RequestStateMachine
from services.naming_service import generate_request_id, now_ms

logger = logging.getLogger(__name__)


def _find(requests: List[Request], student_id: str, teacher_id: str) -> Optional[int]:
    for index, request in enumerate(requests):
        if request.student_id == student_id and request.teacher_id == teacher_id:
            return index
    return None


class RequestWorkflow:
    """申請流程管理器"""

    def __init__(self, store: PersistentStore, messages: MessageLog, clock: Callable[[], int] = now_ms):
        self.store = store
        self.messages = messages
        self.clock = clock

    def create(self, student_id: str, teacher_id: str, message: str = "") -> Request:
        """
        建立申請（冪等）

        流程：
        1. 已有同一對的申請：把 message 加進對話，回傳原本的申請（不修改）
        2. 否則建立 PENDING 申請並寫入
        3. message 非空時加進對話（sender = student）

        參數：
            student_id: 學生 ID
            teacher_id: 老師 ID
            message: 附帶的訊息，可為空

        返回：
            Request（既有的或新建立的）
        """
        requests = self.store.read(REQUESTS)
        index = _find(requests, student_id, teacher_id)

        if index is not None:
            existing = requests[index]
            logger.info(f"Request {existing.id} already exists for {student_id} -> {teacher_id}")
            if message:
                self.messages.append(student_id, teacher_id, message, SenderRole.STUDENT)
            return existing

        request = Request(
            id=generate_request_id(),
            student_id=student_id,
            teacher_id=teacher_id,
            status=RequestStatus.PENDING,
            timestamp=self.clock(),
            message=message or None,
        )
        requests.append(request)
        self.store.write(REQUESTS, requests)

        logger.info(f"Created request {request.id} for {student_id} -> {teacher_id}")

        if message:
            self.messages.append(student_id, teacher_id, message, SenderRole.STUDENT)

        return request

    def get(self, student_id: str, teacher_id: str) -> Optional[Request]:
        requests = self.store.read(REQUESTS)
        index = _find(requests, student_id, teacher_id)
        return requests[index] if index is not None else None

    def get_status(self, student_id: str, teacher_id: str) -> Optional[RequestStatus]:
        request = self.get(student_id, teacher_id)
        return request.status if request else None

    def list_pending(self, teacher_id: str) -> List[Request]:
        """老師待審核的申請"""
        return [
            r for r in self.store.read(REQUESTS)
            if r.teacher_id == teacher_id and r.status == RequestStatus.PENDING
        ]

    def list_for_student(self, student_id: str) -> List[Request]:
        return [r for r in self.store.read(REQUESTS) if r.student_id == student_id]

    def count_approved(self, teacher_id: str) -> int:
        return sum(
            1 for r in self.store.read(REQUESTS)
            if r.teacher_id == teacher_id and r.status == RequestStatus.APPROVED
        )

    def set_status(self, student_id: str, teacher_id: str, status: RequestStatus) -> bool:
        """
        更新申請狀態

        規則：
            - PENDING -> APPROVED / REJECTED
            - 寫入相同狀態：冪等成功，不寫入
            - 終態不能離開

        返回：
            True 成功；False 找不到申請

        異常：
            InvalidStateTransition: 非法的狀態轉換
        """
        status = RequestStatus(status)
        requests = self.store.read(REQUESTS)
        index = _find(requests, student_id, teacher_id)
        if index is None:
            return False

        request = requests[index]
        RequestStateMachine.validate(request.status, status)
        if request.status == status:
            return True

        requests[index] = request.model_copy(update={"status": status})
        self.store.write(REQUESTS, requests)

        logger.info(f"Request {request.id}: {request.status.value} -> {status.value}")
        return True
