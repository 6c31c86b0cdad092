from distlock.helpers import Deadline


def test_deadline_without_timeout_never_expires(frozen_datetime):
    deadline = Deadline()

    frozen_datetime.tick(delta=3600)

    assert deadline.remaining is None
    assert not deadline.expired


def test_deadline_expires(frozen_datetime):
    deadline = Deadline(2)

    frozen_datetime.tick(delta=1)
    assert deadline.remaining == 1
    assert not deadline.expired

    frozen_datetime.tick(delta=1)
    assert deadline.remaining == 0
    assert deadline.expired
