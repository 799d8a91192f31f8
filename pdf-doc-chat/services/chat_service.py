#!/usr/bin/env python3
"""
Conversation about extracted document text, with per-session history.
"""
from typing import Callable, Optional

from config.pipeline_config import PipelineConfig
from models.data_models import PipelineError
from prompts.chat_prompts import DOCUMENT_CHAT_PROMPT, GENERAL_CHAT_PROMPT
from services.llm_service import LLMService
from services.session_service import SessionStore
from utils.logging_config import setup_logging
from utils.text_utils import truncate

log = setup_logging("pdf_chat.log")


class ChatService:
    def __init__(self, sessions: SessionStore, llm_factory: Callable[[PipelineConfig], LLMService] = LLMService):
        self.sessions = sessions
        self.llm_factory = llm_factory

    @staticmethod
    def build_messages(prompt: str, extracted_text: str, history, max_context_chars: int):
        chat_history = [(turn.role, turn.content) for turn in history if turn.role in ("user", "assistant")]
        if extracted_text and extracted_text.strip():
            return DOCUMENT_CHAT_PROMPT.format_messages(
                document=truncate(extracted_text.strip(), max_context_chars),
                chat_history=chat_history,
                question=prompt,
            )
        return GENERAL_CHAT_PROMPT.format_messages(chat_history=chat_history, question=prompt)

    def process_message(self, prompt: str, extracted_text: str, session_id: str, config: PipelineConfig) -> dict:
        """Answer ``prompt`` against ``extracted_text``; returns ``{"response", "chatHistory"}`` or ``{"error"}``."""
        if not prompt or not prompt.strip():
            return {"error": "Message must not be empty"}
        try:
            history = self.sessions.get_history(session_id)
            messages = self.build_messages(prompt.strip(), extracted_text, history, config.max_context_chars)
            log.info(f"💬 Session {session_id}: question with {len(history)} prior turn(s)")
            answer = self.llm_factory(config).chat(messages)

            self.sessions.append_turns(session_id, ("user", prompt.strip()), ("assistant", answer))
            updated = self.sessions.get_history(session_id)
            return {"response": answer, "chatHistory": [turn.to_dict() for turn in updated]}
        except PipelineError as e:
            log.error(f"❌ Chat failed for session {session_id}: {e}")
            return {"error": str(e)}
        except Exception as e:
            log.error(f"💥 Unexpected chat failure for session {session_id}: {e}", exc_info=True)
            return {"error": f"Unexpected error: {e}"}

    def run_inference(self, prompt: str, temperature: Optional[float], max_tokens: Optional[int],
                      config: PipelineConfig) -> dict:
        if not prompt or not prompt.strip():
            return {"error": "Prompt must not be empty"}
        try:
            return {"output": self.llm_factory(config).run_inference(prompt, temperature, max_tokens)}
        except PipelineError as e:
            log.error(f"❌ Inference failed: {e}")
            return {"error": str(e)}

    def clear_session(self, session_id: str) -> dict:
        """Drop the session transcript and document list. Cached extractions are shared and expire by TTL."""
        self.sessions.clear(session_id)
        return {"success": True}
