import pytest

from core.exceptions import InvalidStateTransition
from core.message_log import MessageLog
from core.request_workflow import RequestWorkflow
from core.store import REQUESTS
from schemas import RequestStatus, SenderRole


@pytest.fixture
def messages(store, bus, clock):
    return MessageLog(store, bus, clock=clock)


@pytest.fixture
def workflow(store, messages, clock):
    return RequestWorkflow(store, messages, clock=clock)


def test_new_request_is_pending(workflow):
    request = workflow.create("s1", "t1", "hola")

    assert request.status == RequestStatus.PENDING
    assert request.message == "hola"
    assert workflow.get_status("s1", "t1") == RequestStatus.PENDING


def test_approve_then_read_status(workflow):
    workflow.create("s1", "t1", "")

    assert workflow.set_status("s1", "t1", RequestStatus.APPROVED) is True
    assert workflow.get_status("s1", "t1") == RequestStatus.APPROVED


def test_create_twice_keeps_one_request_and_both_messages(workflow, messages, store):
    first = workflow.create("s1", "t1", "message one")
    second = workflow.create("s1", "t1", "message two")

    assert second == first
    assert len(store.read(REQUESTS)) == 1
    log = messages.list("s1", "t1")
    assert [m.text for m in log] == ["message one", "message two"]
    assert all(m.sender == SenderRole.STUDENT for m in log)


def test_duplicate_create_does_not_change_existing_request(workflow):
    workflow.create("s1", "t1", "")
    workflow.set_status("s1", "t1", "approved")

    again = workflow.create("s1", "t1", "are you there?")

    assert again.status == RequestStatus.APPROVED


def test_empty_message_is_not_logged(workflow, messages):
    workflow.create("s1", "t1", "")
    workflow.create("s1", "t1", "")

    assert messages.list("s1", "t1") == []


def test_missing_request_lookups_return_values(workflow):
    assert workflow.get("s1", "t1") is None
    assert workflow.get_status("s1", "t1") is None
    assert workflow.set_status("s1", "t1", RequestStatus.APPROVED) is False


def test_list_pending_filters_by_teacher_and_status(workflow):
    workflow.create("s1", "t1")
    workflow.create("s2", "t1")
    workflow.create("s3", "t2")
    workflow.set_status("s2", "t1", RequestStatus.REJECTED)

    assert [r.student_id for r in workflow.list_pending("t1")] == ["s1"]


def test_list_for_student_and_count_approved(workflow):
    workflow.create("s1", "t1")
    workflow.create("s1", "t2")
    workflow.create("s2", "t1")
    workflow.set_status("s1", "t1", RequestStatus.APPROVED)
    workflow.set_status("s2", "t1", RequestStatus.APPROVED)

    assert {r.teacher_id for r in workflow.list_for_student("s1")} == {"t1", "t2"}
    assert workflow.count_approved("t1") == 2
    assert workflow.count_approved("t2") == 0


def test_rewriting_current_status_is_idempotent(workflow):
    workflow.create("s1", "t1")
    workflow.set_status("s1", "t1", RequestStatus.REJECTED)

    assert workflow.set_status("s1", "t1", RequestStatus.REJECTED) is True


@pytest.mark.parametrize("terminal", [RequestStatus.APPROVED, RequestStatus.REJECTED])
@pytest.mark.parametrize("target", list(RequestStatus))
def test_terminal_statuses_cannot_be_left(workflow, terminal, target):
    workflow.create("s1", "t1")
    workflow.set_status("s1", "t1", terminal)

    if target == terminal:
        assert workflow.set_status("s1", "t1", target) is True
    else:
        with pytest.raises(InvalidStateTransition):
            workflow.set_status("s1", "t1", target)
    assert workflow.get_status("s1", "t1") == terminal
