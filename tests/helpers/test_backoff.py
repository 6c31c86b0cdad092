import pytest

from distlock import UnknownStrategy
from distlock.helpers import poll_delay


def test_poll_delay_exponential():
    assert poll_delay(1, min_backoff=10, jitter=False) == 0.01
    assert poll_delay(3, min_backoff=10, jitter=False) == 0.04
    assert poll_delay(10, min_backoff=10, max_backoff=50, jitter=False) == 0.05


def test_poll_delay_exponential_survives_many_attempts():
    assert poll_delay(10000, min_backoff=10, max_backoff=50, jitter=False) == 0.05


def test_poll_delay_constant():
    for attempts in range(1, 5):
        assert poll_delay(attempts, min_backoff=10, jitter=False, backoff_strategy="constant") == 0.01


def test_poll_delay_linear():
    assert poll_delay(4, min_backoff=10, jitter=False, backoff_strategy="linear") == 0.04
    assert poll_delay(300, min_backoff=10, jitter=False, backoff_strategy="linear") == 2


def test_poll_delay_never_exceeds_the_remaining_wait():
    assert poll_delay(5, remaining=0.003, min_backoff=100, jitter=False) == 0.003
    assert poll_delay(5, remaining=-1, min_backoff=100, jitter=False) == 0


def test_poll_delay_jitter_stays_within_bounds():
    for _ in range(100):
        delay = poll_delay(1, min_backoff=100, backoff_strategy="constant")
        assert 0.05 <= delay <= 0.1


@pytest.mark.parametrize("min_backoff, max_backoff", [(0, 100), (-5, 100), (200, 100)])
def test_poll_delay_rejects_invalid_backoffs(min_backoff, max_backoff):
    with pytest.raises(ValueError):
        poll_delay(1, min_backoff=min_backoff, max_backoff=max_backoff)


def test_poll_delay_unknown_strategy():
    with pytest.raises(UnknownStrategy):
        poll_delay(1, backoff_strategy="fibonacci")
