import pytest

from core.exceptions import InvalidStateTransition
from core.store import TEACHERS
from schemas import MatchPreferences, RequestStatus


def test_resolve_matches_and_approves(ctx):
    prefs = MatchPreferences(level="beginner", goal="tactics", style="dynamic")

    result = ctx.onboarding.resolve("s1", prefs, "Quiero mejorar")

    assert result.teacher.id == "teacher2"
    assert result.request.status == RequestStatus.APPROVED
    assert ctx.requests.get_status("s1", "teacher2") == RequestStatus.APPROVED
    assert [m.text for m in ctx.messages.list("s1", "teacher2")] == ["Quiero mejorar"]


def test_resolve_notifies_student_and_teacher(ctx):
    ctx.onboarding.resolve("s1", MatchPreferences(goal="endgame"))

    student_inbox = ctx.notifications.list("s1")
    teacher_inbox = ctx.notifications.list("teacher1")
    assert student_inbox[0].link == "/classroom/teacher1"
    assert student_inbox[0].type == "match"
    assert teacher_inbox[0].link == "/chat/s1"


def test_resolve_is_idempotent_for_existing_approved_request(ctx):
    prefs = MatchPreferences(goal="endgame")

    first = ctx.onboarding.resolve("s1", prefs)
    second = ctx.onboarding.resolve("s1", prefs)

    assert first.request.id == second.request.id
    assert len(ctx.requests.list_for_student("s1")) == 1


def test_resolve_with_rejected_request_raises(ctx):
    ctx.requests.create("s1", "teacher1")
    ctx.requests.set_status("s1", "teacher1", RequestStatus.REJECTED)

    with pytest.raises(InvalidStateTransition):
        ctx.onboarding.resolve("s1", MatchPreferences(goal="endgame"))


def test_resolve_without_teachers_returns_none(ctx):
    ctx.store.write(TEACHERS, [])

    assert ctx.onboarding.resolve("s1", MatchPreferences(level="beginner")) is None
