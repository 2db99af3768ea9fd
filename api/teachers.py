"""
Teacher API Endpoints

職責：
1. 老師列表與個人資料
2. 編輯個人資料
3. 查詢抽成等級
"""
from typing import List

from fastapi import APIRouter, Depends, HTTPException
import logging

from api.deps import get_context
from core.context import AppContext
from schemas import Teacher, TeacherPatch, CommissionTier
from services.commission_service import calculate_commission

router = APIRouter(prefix="/api/teachers", tags=["teachers"])
logger = logging.getLogger(__name__)


@router.get("", response_model=List[Teacher])
def list_teachers(ctx: AppContext = Depends(get_context)):
    try:
        return ctx.teachers.list()
    except Exception as e:
        logger.error(f"Failed to list teachers: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal error")


@router.get("/{teacher_id}", response_model=Teacher)
def get_teacher(teacher_id: str, ctx: AppContext = Depends(get_context)):
    try:
        teacher = ctx.teachers.get_by_id(teacher_id)
        if teacher is None:
            raise HTTPException(status_code=404, detail="Teacher not found")
        return teacher

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to get teacher: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal error")


@router.patch("/{teacher_id}", response_model=Teacher)
def update_teacher(teacher_id: str, patch: TeacherPatch, ctx: AppContext = Depends(get_context)):
    """
    編輯老師資料

    只有 request body 裡出現的欄位會被覆寫
    """
    try:
        teacher = ctx.teachers.update(teacher_id, patch)
        if teacher is None:
            raise HTTPException(status_code=404, detail="Teacher not found")
        return teacher

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to update teacher: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal error")


@router.get("/{teacher_id}/commission", response_model=CommissionTier)
def get_commission(teacher_id: str, ctx: AppContext = Depends(get_context)):
    """
    查詢老師目前的抽成等級

    學生數 = 已核准（APPROVED）的申請數
    """
    try:
        if ctx.teachers.get_by_id(teacher_id) is None:
            raise HTTPException(status_code=404, detail="Teacher not found")
        return calculate_commission(ctx.requests.count_approved(teacher_id))

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to get commission: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal error")
