"""
Composition root：建立整個同步層

EventBus 在這裡建立一次，再注入每個需要發布或訂閱的元件，
不使用任何全域的事件通道
"""
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.orm import sessionmaker

from database import Settings, get_settings
from core.event_bus import EventBus
from core.store import PersistentStore
from core.teacher_directory import TeacherDirectory
from core.room_manager import RoomStateManager
from core.message_log import MessageLog
from core.request_workflow import RequestWorkflow
from core.notifications import NotificationCenter
from core.onboarding import OnboardingFlow


@dataclass
class AppContext:
    bus: EventBus
    store: PersistentStore
    teachers: TeacherDirectory
    rooms: RoomStateManager
    messages: MessageLog
    requests: RequestWorkflow
    notifications: NotificationCenter
    onboarding: OnboardingFlow


def create_context(session_factory: sessionmaker, settings: Optional[Settings] = None) -> AppContext:
    settings = settings or get_settings()

    bus = EventBus(isolate_errors=settings.isolate_listener_errors)
    store = PersistentStore(session_factory)
    teachers = TeacherDirectory(store, seed=settings.seed_teachers)
    rooms = RoomStateManager(store, bus)
    messages = MessageLog(store, bus)
    requests = RequestWorkflow(store, messages)
    notifications = NotificationCenter(store, bus)
    onboarding = OnboardingFlow(teachers, requests, notifications)

    return AppContext(
        bus=bus,
        store=store,
        teachers=teachers,
        rooms=rooms,
        messages=messages,
        requests=requests,
        notifications=notifications,
        onboarding=onboarding,
    )
