"""
Request API Endpoints

職責：
1. 學生申請加入老師教室（冪等）
2. 查詢申請狀態
3. 老師審核申請
4. Onboarding 自動配對
"""
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query
import logging

from api.deps import get_context
from core.context import AppContext
from core.exceptions import InvalidStateTransition
from schemas import (
    Request,
    RequestCreate,
    RequestStatusUpdate,
    RequestStatusResponse,
    OnboardingSubmit,
    MatchResult,
    StatusResponse
)

router = APIRouter(prefix="/api/requests", tags=["requests"])
logger = logging.getLogger(__name__)


@router.post("", response_model=Request)
def create_request(data: RequestCreate, ctx: AppContext = Depends(get_context)):
    """
    建立申請

    同一對學生/老師重複送出時，回傳原本的申請，訊息仍會加進對話
    """
    try:
        return ctx.requests.create(data.student_id, data.teacher_id, data.message)
    except Exception as e:
        logger.error(f"Failed to create request: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal error")


@router.get("/status", response_model=RequestStatusResponse)
def get_request_status(
    student_id: str = Query(...),
    teacher_id: str = Query(...),
    ctx: AppContext = Depends(get_context)
):
    """沒有申請時 status 為 null（不是 404）"""
    try:
        return RequestStatusResponse(
            student_id=student_id,
            teacher_id=teacher_id,
            status=ctx.requests.get_status(student_id, teacher_id)
        )
    except Exception as e:
        logger.error(f"Failed to get request status: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal error")


@router.get("/pending/{teacher_id}", response_model=List[Request])
def list_pending_requests(teacher_id: str, ctx: AppContext = Depends(get_context)):
    try:
        return ctx.requests.list_pending(teacher_id)
    except Exception as e:
        logger.error(f"Failed to list pending requests: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal error")


@router.get("/student/{student_id}", response_model=List[Request])
def list_student_requests(student_id: str, ctx: AppContext = Depends(get_context)):
    try:
        return ctx.requests.list_for_student(student_id)
    except Exception as e:
        logger.error(f"Failed to list student requests: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal error")


@router.put("/{student_id}/{teacher_id}/status", response_model=StatusResponse)
def set_request_status(
    student_id: str,
    teacher_id: str,
    data: RequestStatusUpdate,
    ctx: AppContext = Depends(get_context)
):
    """
    審核申請（老師 endpoint）

    前置條件：
    - 申請必須存在
    - 只有 PENDING 可以轉成 APPROVED / REJECTED
    """
    try:
        if not ctx.requests.set_status(student_id, teacher_id, data.status):
            raise HTTPException(status_code=404, detail="Request not found")

        logger.info(f"Request {student_id} -> {teacher_id} set to {data.status.value}")
        return StatusResponse(status="ok")

    except HTTPException:
        raise
    except InvalidStateTransition as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to set request status: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal error")


@router.post("/match", response_model=MatchResult)
def match_teacher(data: OnboardingSubmit, ctx: AppContext = Depends(get_context)):
    """
    Onboarding：自動配對老師並核准申請
    """
    try:
        result = ctx.onboarding.resolve(data.student_id, data.preferences, data.message)
        if result is None:
            raise HTTPException(status_code=404, detail="No teachers available")
        return result

    except HTTPException:
        raise
    except InvalidStateTransition as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to match teacher: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal error")
