"""
OnboardingFlow：新學生配對老師

流程：
1. 用 matching_service 從所有老師中選出最適合的一位
2. 建立申請（冪等）
3. 申請仍在 PENDING 時直接核准
4. 通知學生與老師

配對只在 onboarding 時執行一次，不經過 EventBus
"""
from typing import Optional
import logging

from schemas import MatchPreferences, MatchResult, RequestStatus
from core.teacher_directory import TeacherDirectory
from core.request_workflow import RequestWorkflow
from core.notifications import NotificationCenter
from services.matching_service import find_best_match

logger = logging.getLogger(__name__)


class OnboardingFlow:
    """配對流程"""

    def __init__(
        self,
        teachers: TeacherDirectory,
        requests: RequestWorkflow,
        notifications: NotificationCenter,
    ):
        self.teachers = teachers
        self.requests = requests
        self.notifications = notifications

    def resolve(self, student_id: str, preferences: MatchPreferences, message: str = "") -> Optional[MatchResult]:
        """
        為學生配對老師並核准申請

        參數：
            student_id: 學生 ID
            preferences: level / goal / style 偏好
            message: 給老師的第一則訊息，可為空

        返回：
            MatchResult；沒有任何老師時回傳 None

        異常：
            InvalidStateTransition: 學生先前對這位老師的申請已被拒絕
        """
        teacher = find_best_match(self.teachers.list(), preferences)
        if teacher is None:
            logger.warning(f"No teachers available to match student {student_id}")
            return None

        request = self.requests.create(student_id, teacher.id, message)
        if request.status != RequestStatus.APPROVED:
            self.requests.set_status(student_id, teacher.id, RequestStatus.APPROVED)
            request = self.requests.get(student_id, teacher.id)

        logger.info(f"Matched student {student_id} with teacher {teacher.id}")

        self.notifications.notify(
            student_id,
            title="Mentor asignado",
            message=f"{teacher.name} es tu nuevo mentor.",
            type="match",
            link=f"/classroom/{teacher.id}",
        )
        self.notifications.notify(
            teacher.id,
            title="Nuevo alumno",
            message=f"El alumno {student_id} ha sido asignado a tu clase.",
            type="match",
            link=f"/chat/{student_id}",
        )

        return MatchResult(teacher=teacher, request=request)
