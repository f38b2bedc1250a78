import pytest
import redis


class FakeRedisClient:
    """In-memory stand-in for db.redis_client.RedisClient."""

    def __init__(self, fail=False):
        self.fail = fail
        self.solutions = {}
        self.ttls = {}
        self.stats = {}

    def _check(self):
        if self.fail:
            raise redis.ConnectionError("redis is down")

    def get_cached_solution(self, puzzle_key):
        self._check()
        return self.solutions.get(puzzle_key)

    def cache_solution(self, puzzle_key, data, ttl):
        self._check()
        self.solutions[puzzle_key] = data
        self.ttls[puzzle_key] = ttl

    def increment_stat(self, server_id, outcome):
        self._check()
        counters = self.stats.setdefault(server_id, {})
        counters[outcome] = counters.get(outcome, 0) + 1

    def get_stats(self, server_id):
        self._check()
        return dict(self.stats.get(server_id, {}))


@pytest.fixture
def fake_redis():
    return FakeRedisClient()


@pytest.fixture
def broken_redis():
    return FakeRedisClient(fail=True)
