#!/usr/bin/env python3
"""
Per-session chat transcripts and the documents each session has loaded.
"""
import json
from typing import List, Set, Tuple

from models.data_models import ChatTurn
from utils.logging_config import setup_logging

log = setup_logging("pdf_chat.log")

VALID_ROLES = {"user", "assistant", "system"}


class SessionStore:
    """Redis-backed session state. Sessions are created on first write and only removed by clear()."""

    def __init__(self, redis_client):
        self.redis = redis_client

    @staticmethod
    def history_key(session_id: str) -> str:
        return f"session:{session_id}:history"

    @staticmethod
    def documents_key(session_id: str) -> str:
        return f"session:{session_id}:documents"

    def get_history(self, session_id: str) -> List[ChatTurn]:
        turns = []
        for raw in self.redis.lrange(self.history_key(session_id), 0, -1):
            try:
                data = json.loads(raw)
                turns.append(ChatTurn(role=data["role"], content=data["content"]))
            except (ValueError, KeyError, TypeError):
                log.warning(f"⚠️ Skipping malformed transcript entry in session {session_id}")
        return turns

    def append_turns(self, session_id: str, *turns: Tuple[str, str]) -> List[ChatTurn]:
        """Append (role, content) pairs with a single RPUSH, so a question and its answer are stored together."""
        built = []
        for role, content in turns:
            if role not in VALID_ROLES:
                raise ValueError(f"Unknown chat role: {role}")
            built.append(ChatTurn(role=role, content=content))
        if built:
            self.redis.rpush(self.history_key(session_id), *[json.dumps(turn.to_dict()) for turn in built])
        return built

    def append(self, session_id: str, role: str, content: str) -> ChatTurn:
        return self.append_turns(session_id, (role, content))[0]

    def track_document(self, session_id: str, fingerprint: str) -> None:
        self.redis.sadd(self.documents_key(session_id), fingerprint)

    def documents(self, session_id: str) -> Set[str]:
        return set(self.redis.smembers(self.documents_key(session_id)) or set())

    def clear(self, session_id: str) -> Set[str]:
        """Delete the transcript and document list; return the fingerprints that were tracked."""
        fingerprints = self.documents(session_id)
        self.redis.delete(self.history_key(session_id), self.documents_key(session_id))
        log.info(f"🧹 Cleared session {session_id} ({len(fingerprints)} document(s))")
        return fingerprints
