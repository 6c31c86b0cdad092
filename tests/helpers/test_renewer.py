# ruff: noqa: S106
import threading
import time
from unittest import mock

import pytest

from distlock import CommunicationError, Lease
from distlock.helpers import LeaseRenewer


def test_renewer_keeps_the_lease_alive(stub_lease_backend):
    # Given a short lease
    lease = Lease(stub_lease_backend, "job-42", duration_ms=300, owner_token="A1")
    other = Lease(stub_lease_backend, "job-42", duration_ms=300, owner_token="B1")
    assert lease.acquire()

    # When it is renewed in the background for longer than its duration
    with LeaseRenewer(lease, interval=0.05) as renewer:
        time.sleep(0.6)

        # Then it is still held
        assert not other.acquire()
        assert lease.is_held()

    assert not renewer.lost
    assert not renewer.thread.is_alive()


def test_renewer_reports_a_lost_lease(stub_lease_backend):
    # Given a renewed lease
    lease = Lease(stub_lease_backend, "job-42", duration_ms=1000, owner_token="A1")
    assert lease.acquire()
    lost = threading.Event()
    renewer = LeaseRenewer(lease, interval=0.02, on_lost=lambda _: lost.set())
    renewer.start()

    # When another owner takes the resource over
    stub_lease_backend.flush_all()
    assert Lease(stub_lease_backend, "job-42", duration_ms=1000, owner_token="B1").acquire()

    # Then the renewer notices and stops
    assert lost.wait(timeout=2)
    renewer.thread.join(timeout=2)
    assert renewer.lost
    assert not renewer.thread.is_alive()
    assert stub_lease_backend.get("job-42") == "B1"


def test_renewer_gives_up_after_a_full_duration_of_failures(frozen_datetime):
    # Given a lease whose renewals cannot reach the store
    lease = mock.Mock(resource_key="job-42", duration_ms=1000)
    lease.renew.side_effect = CommunicationError("connection refused")
    on_lost = mock.Mock()
    renewer = LeaseRenewer(lease, interval=0.1, on_lost=on_lost)

    # Then failures are tolerated while the lease may still be alive
    frozen_datetime.tick(delta=0.5)
    assert renewer.renew_once()
    assert not renewer.lost

    # And the lease is considered lost once its duration has elapsed
    frozen_datetime.tick(delta=0.5)
    assert not renewer.renew_once()
    assert renewer.lost
    on_lost.assert_called_once_with(lease)


def test_renewer_counts_a_renewal_from_when_it_was_sent(frozen_datetime):
    # Given a lease whose store is 200ms away
    lease = mock.Mock(resource_key="job-42", duration_ms=1000)
    store = {}

    def slow_renew(timeout):
        frozen_datetime.tick(delta=0.2)
        store["expires_at"] = time.monotonic() + 1
        frozen_datetime.tick(delta=0.2)

    lease.renew.side_effect = slow_renew
    renewer = LeaseRenewer(lease, interval=0.1)

    # When a renewal succeeds
    sent_at = time.monotonic()
    assert renewer.renew_once()
    assert renewer.last_renewed_at == sent_at

    # And the next ones cannot reach the store
    lease.renew.side_effect = CommunicationError("connection refused")
    frozen_datetime.tick(delta=0.9)

    # Then the renewer gives the lease up no later than the store drops it
    assert time.monotonic() >= store["expires_at"]
    assert not renewer.renew_once()
    assert renewer.lost


@pytest.mark.parametrize("interval", [0, -1, 1, 2])
def test_renewer_rejects_invalid_intervals(stub_lease_backend, interval):
    lease = Lease(stub_lease_backend, "job-42", duration_ms=1000)

    with pytest.raises(ValueError):
        LeaseRenewer(lease, interval=interval)


def test_renewer_cannot_be_started_twice(stub_lease_backend):
    lease = Lease(stub_lease_backend, "job-42", duration_ms=1000)
    assert lease.acquire()

    with LeaseRenewer(lease, interval=0.5) as renewer:
        with pytest.raises(RuntimeError):
            renewer.start()
