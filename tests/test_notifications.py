from core.event_bus import NOTIFICATIONS_CHANGED
from core.notifications import NotificationCenter


def test_notify_and_list_newest_first(store, bus, clock):
    center = NotificationCenter(store, bus, clock=clock)

    center.notify("s1", "First", "one")
    clock.advance()
    center.notify("s1", "Second", "two", type="match", link="/classroom/t1")

    inbox = center.list("s1")
    assert [n.title for n in inbox] == ["Second", "First"]
    assert inbox[0].link == "/classroom/t1"
    assert center.unread_count("s1") == 2
    assert center.list("s2") == []


def test_mark_read_only_for_owner(store, bus, clock):
    center = NotificationCenter(store, bus, clock=clock)
    notification = center.notify("s1", "Hi", "there")

    assert center.mark_read("s2", notification.id) is False
    assert center.unread_count("s1") == 1

    assert center.mark_read("s1", notification.id) is True
    assert center.mark_read("s1", notification.id) is True
    assert center.list("s1")[0].read is True


def test_mark_all_read(store, bus, clock):
    center = NotificationCenter(store, bus, clock=clock)
    for i in range(3):
        center.notify("s1", f"n{i}", "msg")

    assert center.mark_all_read("s1") == 3
    assert center.mark_all_read("s1") == 0
    assert center.unread_count("s1") == 0


def test_notify_publishes_change(store, bus, clock):
    events = []
    bus.subscribe(NOTIFICATIONS_CHANGED, events.append)

    NotificationCenter(store, bus, clock=clock).notify("t1", "New", "student")

    assert events == [{"recipient_id": "t1"}]
