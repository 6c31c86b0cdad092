# ruff: noqa: S106
from unittest import mock

import pytest

from distlock import CommunicationError, Lease
from distlock.helpers import acquire_with_backoff


def test_acquire_with_backoff_acquires_a_free_lease(stub_lease_backend):
    lease = Lease(stub_lease_backend, "job-42", duration_ms=1000)
    sleep = mock.Mock()

    assert acquire_with_backoff(lease, max_wait=1, sleep=sleep)
    assert lease.is_held()
    sleep.assert_not_called()


def test_acquire_with_backoff_waits_for_the_holder(stub_lease_backend):
    # Given that A holds the resource
    holder = Lease(stub_lease_backend, "job-42", duration_ms=10000, owner_token="A1")
    lease = Lease(stub_lease_backend, "job-42", duration_ms=10000, owner_token="B1")
    assert holder.acquire()

    # And that A lets go while B is backing off
    sleep = mock.Mock(side_effect=lambda seconds: holder.release())

    # Then B acquires the resource on its next attempt
    assert acquire_with_backoff(lease, max_wait=5, sleep=sleep)
    assert lease.is_held()
    assert sleep.call_count == 1
    assert 0 < sleep.call_args[0][0] <= 5


def test_acquire_with_backoff_gives_up(stub_lease_backend):
    holder = Lease(stub_lease_backend, "job-42", duration_ms=10000, owner_token="A1")
    lease = Lease(stub_lease_backend, "job-42", duration_ms=10000, owner_token="B1")
    assert holder.acquire()

    assert not acquire_with_backoff(lease, max_wait=0.05, min_backoff=5, max_backoff=10)
    assert holder.is_held()


def test_acquire_with_backoff_propagates_communication_errors():
    lease = mock.Mock(resource_key="job-42")
    lease.acquire.side_effect = CommunicationError("connection refused")
    sleep = mock.Mock()

    with pytest.raises(CommunicationError):
        acquire_with_backoff(lease, max_wait=5, sleep=sleep)

    assert lease.acquire.call_count == 1
    sleep.assert_not_called()


def test_acquire_with_backoff_passes_the_strategy_through(stub_lease_backend):
    # Given that A holds the resource
    holder = Lease(stub_lease_backend, "job-42", duration_ms=10000, owner_token="A1")
    lease = Lease(stub_lease_backend, "job-42", duration_ms=10000, owner_token="B1")
    assert holder.acquire()

    # And that A lets go after B's third attempt
    delays = []

    def sleep(seconds):
        delays.append(seconds)
        if len(delays) == 3:
            holder.release()

    # When B polls with a linear strategy and no jitter
    assert acquire_with_backoff(
        lease, max_wait=60, backoff_strategy="linear", min_backoff=10, jitter=False, sleep=sleep
    )

    # Then it waited 10ms more after every attempt
    assert delays == [0.01, 0.02, 0.03]
