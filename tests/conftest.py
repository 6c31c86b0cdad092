import logging
import os
import random

import pytest
import redis
from freezegun import freeze_time

from distlock import Lease, LeaseMetrics
from distlock.backends import RedisBackend, StubBackend

logfmt = "[%(asctime)s] [%(threadName)s] [%(name)s] [%(levelname)s] %(message)s"
logging.basicConfig(level=logging.INFO, format=logfmt)

random.seed(1337)

CI = os.getenv("CI") == "true"


def check_redis(client):
    try:
        client.ping()
    except redis.ConnectionError as e:
        raise e from e if CI else pytest.skip("No connection to Redis server.")
    client.flushall()


@pytest.fixture
def redis_lease_backend():
    redis_url = os.getenv("DISTLOCK_TEST_REDIS_URL") or "redis://localhost:6481/0"
    backend = RedisBackend(url=redis_url)
    check_redis(backend.client)
    return backend


@pytest.fixture
def stub_lease_backend():
    return StubBackend()


@pytest.fixture(params=["redis", "stub"])
def lease_backend(request):
    # Resolved lazily so that stub tests still run without a Redis server.
    return request.getfixturevalue(f"{request.param}_lease_backend")


@pytest.fixture
def metrics():
    return LeaseMetrics()


@pytest.fixture
def make_lease(lease_backend):
    def make(resource_key="job-42", *, duration_ms=10000, owner_token=None, **kwargs):
        return Lease(lease_backend, resource_key, duration_ms=duration_ms, owner_token=owner_token, **kwargs)

    return make


@pytest.fixture
def frozen_datetime():
    with freeze_time("2020-02-03") as frozen_datetime:
        yield frozen_datetime
