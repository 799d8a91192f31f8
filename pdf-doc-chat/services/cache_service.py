#!/usr/bin/env python3
"""
Content-addressed cache of extraction results with a fixed time-to-live.
"""
import json
import time
from typing import Callable, Optional

from models.data_models import CacheEntry, ExtractionResult
from utils.logging_config import setup_logging

log = setup_logging("pdf_pipeline.log")

CACHE_KEY_PREFIX = "doc_cache"


class DocumentCache:
    """
    Stores fingerprint -> (result, timestamp) in Redis.

    Entries are keyed by the document fingerprint alone, so several documents
    used in the same session never evict one another. Expired entries are
    treated as misses and overwritten by the next successful run; they are
    not deleted on read.
    """

    def __init__(self, redis_client, ttl_seconds: float, clock: Callable[[], float] = time.time):
        self.redis = redis_client
        self.ttl_seconds = ttl_seconds
        self.clock = clock

    @staticmethod
    def key(fingerprint: str) -> str:
        return f"{CACHE_KEY_PREFIX}:{fingerprint}"

    def get_entry(self, fingerprint: str) -> Optional[CacheEntry]:
        raw = self.redis.get(self.key(fingerprint))
        if not raw:
            return None
        try:
            data = json.loads(raw)
            return CacheEntry(
                fingerprint=fingerprint,
                result=ExtractionResult.from_dict(data["result"]),
                timestamp=float(data["timestamp"]),
            )
        except (ValueError, KeyError, TypeError) as e:
            log.warning(f"⚠️ Ignoring corrupt cache entry for {fingerprint}: {e}")
            return None

    def get(self, fingerprint: str, ttl_seconds: Optional[float] = None) -> Optional[ExtractionResult]:
        """Return the cached result if present and younger than the TTL."""
        ttl = self.ttl_seconds if ttl_seconds is None else ttl_seconds
        entry = self.get_entry(fingerprint)
        if entry is None:
            log.info(f"🔍 Cache miss for {fingerprint}")
            return None
        if not entry.is_fresh(self.clock(), ttl):
            log.info(f"⌛ Cache entry for {fingerprint} expired")
            return None
        log.info(f"⚡ Cache hit for {fingerprint} ({len(entry.result.pages)} page(s))")
        return entry.result

    def put(self, fingerprint: str, result: ExtractionResult) -> CacheEntry:
        entry = CacheEntry(fingerprint=fingerprint, result=result, timestamp=self.clock())
        payload = {"result": result.to_dict(), "timestamp": entry.timestamp}
        self.redis.set(self.key(fingerprint), json.dumps(payload))
        log.info(f"💾 Cached {len(result.pages)} page(s) for {fingerprint}")
        return entry
