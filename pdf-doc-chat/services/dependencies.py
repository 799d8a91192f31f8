#!/usr/bin/env python3
"""
Dependencies for FastAPI services.
"""
from functools import lru_cache

from config.pipeline_config import ConfigHolder, PipelineConfig
from config.settings import CACHE_TTL_SECONDS
from services.cache_service import DocumentCache
from services.chat_service import ChatService
from services.document_service import DocumentService
from services.redis_service import get_redis_client
from services.session_service import SessionStore


class DependenciesService:
    """Dependencies for FastAPI services as static methods."""

    @staticmethod
    @lru_cache()
    def get_redis():
        return get_redis_client()

    @staticmethod
    @lru_cache()
    def get_config_holder() -> ConfigHolder:
        """Process-wide holder for the current immutable config."""
        return ConfigHolder(PipelineConfig.from_settings())

    @staticmethod
    @lru_cache()
    def get_document_cache() -> DocumentCache:
        return DocumentCache(DependenciesService.get_redis(), CACHE_TTL_SECONDS)

    @staticmethod
    @lru_cache()
    def get_session_store() -> SessionStore:
        return SessionStore(DependenciesService.get_redis())

    @staticmethod
    @lru_cache()
    def get_document_service() -> DocumentService:
        return DocumentService(DependenciesService.get_document_cache(), DependenciesService.get_session_store())

    @staticmethod
    @lru_cache()
    def get_chat_service() -> ChatService:
        return ChatService(DependenciesService.get_session_store())


# Expose static methods as module-level functions after class definition
get_redis = DependenciesService.get_redis
get_config_holder = DependenciesService.get_config_holder
get_document_service = DependenciesService.get_document_service
get_chat_service = DependenciesService.get_chat_service
