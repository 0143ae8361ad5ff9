from datetime import datetime, timedelta, timezone

from roster.controller.notifier import NotificationLevel, Notifier


class FakeClock:
    def __init__(self):
        self.now = datetime(2024, 1, 1, tzinfo=timezone.utc)

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += timedelta(seconds=seconds)


def test_notifications_stack_in_insertion_order():
    notifier = Notifier(clock=FakeClock())
    notifier.success("Student added successfully")
    notifier.error("Error fetching students")
    assert [(n.level, n.message) for n in notifier.active()] == [
        (NotificationLevel.SUCCESS, "Student added successfully"),
        (NotificationLevel.ERROR, "Error fetching students"),
    ]


def test_notifications_expire_after_their_duration():
    clock = FakeClock()
    notifier = Notifier(success_seconds=2, error_seconds=4, clock=clock)
    notifier.success("saved")
    notifier.error("failed")

    clock.advance(3)
    assert [n.message for n in notifier.active()] == ["failed"]

    clock.advance(2)
    assert notifier.active() == []


def test_dismiss():
    notifier = Notifier(clock=FakeClock())
    first = notifier.success("one")
    notifier.success("two")
    assert notifier.dismiss(first.id) is True
    assert notifier.dismiss(first.id) is False
    assert [n.message for n in notifier.active()] == ["two"]


def test_dismiss_expired_notification():
    clock = FakeClock()
    notifier = Notifier(success_seconds=2, clock=clock)
    notification = notifier.success("saved")
    clock.advance(3)
    assert notifier.dismiss(notification.id) is False
