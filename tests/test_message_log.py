from core.event_bus import CHAT_CHANGED
from core.message_log import MessageLog
from schemas import SenderRole


def test_append_and_list_in_call_order(store, bus, clock):
    log = MessageLog(store, bus, clock=clock)

    for text in ["a", "b", "c"]:
        log.append("s1", "t1", text, SenderRole.STUDENT)
        clock.advance()

    messages = log.list("s1", "t1")
    assert [m.text for m in messages] == ["a", "b", "c"]
    assert [m.timestamp for m in messages] == sorted(m.timestamp for m in messages)


def test_same_timestamp_keeps_insertion_order(store, bus, clock):
    log = MessageLog(store, bus, clock=clock)

    for text in ["first", "second", "third"]:
        log.append("s1", "t1", text, SenderRole.TEACHER)

    assert [m.text for m in log.list("s1", "t1")] == ["first", "second", "third"]


def test_clock_going_backwards_keeps_call_order(store, bus, clock):
    log = MessageLog(store, bus, clock=clock)

    log.append("s1", "t1", "early", SenderRole.STUDENT)
    clock.now -= 500
    log.append("s1", "t1", "late", SenderRole.STUDENT)

    messages = log.list("s1", "t1")
    assert [m.text for m in messages] == ["early", "late"]
    assert messages[0].timestamp <= messages[1].timestamp


def test_list_is_scoped_to_the_conversation(store, bus, clock):
    log = MessageLog(store, bus, clock=clock)

    log.append("s1", "t1", "mine", SenderRole.STUDENT)
    log.append("s2", "t1", "other student", SenderRole.STUDENT)
    log.append("s1", "t2", "other teacher", SenderRole.STUDENT)

    assert [m.text for m in log.list("s1", "t1")] == ["mine"]


def test_message_ids_are_unique_within_one_millisecond(store, bus, clock):
    log = MessageLog(store, bus, clock=clock)

    ids = {log.append("s1", "t1", str(i), SenderRole.STUDENT).id for i in range(50)}

    assert len(ids) == 50


def test_append_publishes_chat_changed(store, bus, clock):
    events = []
    bus.subscribe(CHAT_CHANGED, events.append)

    MessageLog(store, bus, clock=clock).append("s1", "t1", "hi", SenderRole.STUDENT)

    assert events == [{"student_id": "s1", "teacher_id": "t1"}]


def test_subscribe_receives_full_history(store, bus, clock):
    log = MessageLog(store, bus, clock=clock)
    log.append("s1", "t1", "before", SenderRole.STUDENT)
    snapshots = []

    log.subscribe("s1", "t1", lambda msgs: snapshots.append([m.text for m in msgs]))
    log.append("s1", "t1", "one", SenderRole.TEACHER)
    log.append("s2", "t1", "elsewhere", SenderRole.STUDENT)
    log.append("s1", "t1", "two", SenderRole.STUDENT)

    assert snapshots == [["before", "one"], ["before", "one", "two"]]


def test_unsubscribe_stops_chat_updates(store, bus, clock):
    log = MessageLog(store, bus, clock=clock)
    snapshots = []
    unsubscribe = log.subscribe("s1", "t1", snapshots.append)

    log.append("s1", "t1", "one", SenderRole.STUDENT)
    unsubscribe()
    log.append("s1", "t1", "two", SenderRole.STUDENT)

    assert len(snapshots) == 1
