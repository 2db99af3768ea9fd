"""
Record schemas

Every persisted entity is a pydantic model. Collections are decoded through
these models at the storage boundary, so a payload that no longer matches
its schema surfaces as MalformedPersistedData instead of a KeyError deep in
some caller.
"""
from enum import Enum
from typing import Dict, List, Optional, Union

from pydantic import BaseModel, Field, field_validator


# ============ Teacher ============

class Teacher(BaseModel):
    id: str
    name: str
    rating: int
    price: float
    classes_given: int = 0
    earnings: float = 0.0
    description: str = ""
    tags: List[str] = Field(default_factory=list)
    teaching_style: str = ""
    curriculum: str = ""
    image: Optional[str] = None
    title: Optional[str] = None


class TeacherPatch(BaseModel):
    """Profile edit；只有明確設定的欄位會覆寫"""
    name: Optional[str] = None
    rating: Optional[int] = None
    price: Optional[float] = None
    classes_given: Optional[int] = None
    earnings: Optional[float] = None
    description: Optional[str] = None
    tags: Optional[List[str]] = None
    teaching_style: Optional[str] = None
    curriculum: Optional[str] = None
    image: Optional[str] = None
    title: Optional[str] = None

    @field_validator(
        "name", "rating", "price", "classes_given", "earnings",
        "description", "tags", "teaching_style", "curriculum",
    )
    @classmethod
    def reject_null(cls, value, info):
        # 只有 image / title 可以被清成 None
        if value is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return value


# ============ Room ============

class Orientation(str, Enum):
    WHITE = "white"
    BLACK = "black"


class Chapter(BaseModel):
    name: str
    pgn: str = ""
    fen: Optional[str] = None
    comment: Optional[str] = None


class RoomPatch(BaseModel):
    """
    Room 的 shallow merge patch

    沒出現在 patch 裡的欄位（unset）會保留舊值；
    明確給 None 則會覆寫成 None。
    """
    fen: Optional[str] = None
    pgn: Optional[str] = None
    orientation: Optional[Orientation] = None
    last_move: Optional[List[str]] = None
    history: Optional[List[str]] = None
    fen_history: Optional[List[str]] = None
    current_index: Optional[int] = None
    chapters: Optional[List[Chapter]] = None
    active_chapter_index: Optional[int] = None
    comment: Optional[str] = None
    annotations: Optional[Dict[int, str]] = None


class Room(RoomPatch):
    """Room 與 patch 共用同一組欄位；Room 只在第一次寫入時才存在"""
    pass


# ============ Request ============

class RequestStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class Request(BaseModel):
    id: str
    student_id: str
    teacher_id: str
    status: RequestStatus = RequestStatus.PENDING
    timestamp: int
    message: Optional[str] = None


# ============ Message ============

class SenderRole(str, Enum):
    STUDENT = "student"
    TEACHER = "teacher"


class Message(BaseModel):
    id: str
    student_id: str
    teacher_id: str
    sender: SenderRole
    text: str
    timestamp: int


# ============ Notification ============

class Notification(BaseModel):
    id: str
    recipient_id: str
    title: str
    message: str
    type: str = "info"
    read: bool = False
    timestamp: int
    link: Optional[str] = None


# ============ Matching ============

PreferenceValue = Union[str, List[str], None]


class MatchPreferences(BaseModel):
    level: PreferenceValue = None
    goal: PreferenceValue = None
    style: PreferenceValue = None


class MatchResult(BaseModel):
    teacher: Teacher
    request: Request


class CommissionTier(BaseModel):
    rate: float
    level_name: str
    active_students: int
    next_level_start: Optional[int] = None
    platform_fee: float


# ============ API bodies ============

class RequestCreate(BaseModel):
    student_id: str
    teacher_id: str
    message: str = ""


class RequestStatusUpdate(BaseModel):
    status: RequestStatus


class RequestStatusResponse(BaseModel):
    student_id: str
    teacher_id: str
    status: Optional[RequestStatus] = None


class MessageSubmit(BaseModel):
    text: str = Field(..., min_length=1)
    sender: SenderRole


class OnboardingSubmit(BaseModel):
    student_id: str
    preferences: MatchPreferences
    message: str = ""


class StatusResponse(BaseModel):
    status: str
