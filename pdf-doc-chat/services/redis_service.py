#!/usr/bin/env python3
"""
Redis connection helpers shared by the cache and session stores.
"""
import redis
from config.settings import REDIS_DB, REDIS_HOST, REDIS_PORT


def get_redis_client() -> redis.Redis:
    """Get Redis client instance."""
    return redis.Redis(host=REDIS_HOST, port=REDIS_PORT, db=REDIS_DB, decode_responses=True)


def is_available(client) -> bool:
    """Return True if Redis answers PING."""
    try:
        return bool(client.ping())
    except redis.RedisError:
        return False
