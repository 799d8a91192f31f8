#!/usr/bin/env python3
"""
Immutable configuration passed into every pipeline and chat invocation.
"""
import threading
from dataclasses import asdict, dataclass, replace

from config import settings


@dataclass(frozen=True)
class PipelineConfig:
    """Snapshot of everything a single pipeline or chat call needs."""
    api_key: str
    api_base: str
    model: str
    temperature: float = 0.7
    max_tokens: int = 256
    extraction_max_tokens: int = 4096
    request_timeout: float = 120.0
    batch_size: int = 5
    max_concurrent_requests: int = 4
    cache_ttl_seconds: int = 3600
    max_pdf_size_mb: float = 50.0
    raster_dpi: int = 200
    max_page_dim: int = 2000
    max_context_chars: int = 60000

    def __post_init__(self):
        if not self.model:
            raise ValueError("model must not be empty")
        if self.batch_size < 1:
            raise ValueError(f"batch_size must be >= 1, got {self.batch_size}")
        if self.max_concurrent_requests < 1:
            raise ValueError(f"max_concurrent_requests must be >= 1, got {self.max_concurrent_requests}")
        if self.cache_ttl_seconds < 0:
            raise ValueError(f"cache_ttl_seconds must be >= 0, got {self.cache_ttl_seconds}")

    @classmethod
    def from_settings(cls) -> "PipelineConfig":
        """Build a config from the environment-backed settings module."""
        return cls(
            api_key=settings.LLM_API_KEY,
            api_base=settings.LLM_API_BASE,
            model=settings.LLM_MODEL,
            temperature=settings.LLM_TEMPERATURE,
            max_tokens=settings.LLM_MAX_TOKENS,
            extraction_max_tokens=settings.LLM_EXTRACTION_MAX_TOKENS,
            request_timeout=settings.LLM_TIMEOUT,
            batch_size=settings.PAGE_BATCH_SIZE,
            max_concurrent_requests=settings.MAX_CONCURRENT_REQUESTS,
            cache_ttl_seconds=settings.CACHE_TTL_SECONDS,
            max_pdf_size_mb=settings.MAX_PDF_SIZE_MB,
            raster_dpi=settings.RASTER_DPI,
            max_page_dim=settings.MAX_PAGE_DIM,
            max_context_chars=settings.MAX_CONTEXT_CHARS,
        )

    def with_overrides(self, **changes) -> "PipelineConfig":
        """Return a new config with the given fields replaced; ``None`` values are ignored."""
        changes = {k: v for k, v in changes.items() if v is not None}
        return replace(self, **changes)

    def public_dict(self) -> dict:
        """Config as a dict with the API key masked."""
        data = asdict(self)
        data["api_key"] = "***" if self.api_key else ""
        return data


class ConfigHolder:
    """Holds the current config; updates swap in a new object instead of mutating it."""

    def __init__(self, config: PipelineConfig):
        self._config = config
        self._lock = threading.Lock()

    @property
    def current(self) -> PipelineConfig:
        return self._config

    def update(self, **changes) -> PipelineConfig:
        with self._lock:
            self._config = self._config.with_overrides(**changes)
            return self._config
