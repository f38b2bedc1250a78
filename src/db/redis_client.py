from typing import Dict, Optional
import redis

class RedisClient:
    def __init__(self, host: str, port: int):
        self.redis = redis.Redis(host=host, port=port, decode_responses=True)

    def get_cached_solution(self, puzzle_key: str) -> Optional[str]:
        return self.redis.get(f"twentyfour:solution:{puzzle_key}")

    def cache_solution(self, puzzle_key: str, data: str, ttl: int):
        key = f"twentyfour:solution:{puzzle_key}"
        self.redis.set(key, data, ex=ttl)

    def increment_stat(self, server_id: str, outcome: str):
        """Bump the counter for one solve outcome on a server"""
        self.redis.hincrby(f"twentyfour:stats:{server_id}", outcome, 1)

    def get_stats(self, server_id: str) -> Dict[str, int]:
        stats = self.redis.hgetall(f"twentyfour:stats:{server_id}")
        return {outcome: int(count) for outcome, count in stats.items()} if stats else {}
