#!/usr/bin/env python3
"""
Client for the OpenAI-compatible chat completions endpoint, used both for
page extraction (vision) and for the document conversation.
"""
import base64
from typing import List, Optional, Sequence

from config.pipeline_config import PipelineConfig
from langchain_core.messages import BaseMessage, HumanMessage
from langchain_openai import ChatOpenAI
from models.data_models import ConfigurationError, LLMError, PageImage
from utils.logging_config import setup_logging

log = setup_logging("pdf_chat.log")


def to_data_url(page: PageImage) -> str:
    b64 = base64.b64encode(page.content).decode("utf-8")
    return f"data:{page.mime_type};base64,{b64}"


def content_to_text(content) -> str:
    """AIMessage.content may be a string or a list of content parts."""
    if isinstance(content, str):
        return content
    parts = []
    for part in content or []:
        if isinstance(part, str):
            parts.append(part)
        elif isinstance(part, dict) and part.get("type") == "text":
            parts.append(part.get("text", ""))
    return "".join(parts)


class LLMService:
    """Wraps ChatOpenAI for one immutable PipelineConfig."""

    def __init__(self, config: PipelineConfig):
        if not config.api_key:
            raise ConfigurationError("API key not configured")
        self.config = config

    def _build_model(self, temperature: float, max_tokens: int) -> ChatOpenAI:
        return ChatOpenAI(
            model=self.config.model,
            api_key=self.config.api_key,
            base_url=self.config.api_base,
            temperature=temperature,
            max_tokens=max_tokens,
            timeout=self.config.request_timeout,
            max_retries=1,
        )

    def _invoke(self, messages: List[BaseMessage], temperature: float, max_tokens: int) -> str:
        try:
            response = self._build_model(temperature, max_tokens).invoke(messages)
        except Exception as e:
            raise LLMError(f"Chat completion failed: {e}") from e
        return content_to_text(response.content).strip()

    def extract(self, images: Sequence[PageImage], instruction: str) -> str:
        """Send page images plus an instruction; return the model's raw text."""
        content = [{"type": "text", "text": instruction}]
        for page in images:
            content.append({"type": "image_url", "image_url": {"url": to_data_url(page)}})
        return self._invoke([HumanMessage(content=content)], 0.0, self.config.extraction_max_tokens)

    def chat(self, messages: List[BaseMessage]) -> str:
        return self._invoke(messages, self.config.temperature, self.config.max_tokens)

    def run_inference(self, prompt: str, temperature: Optional[float] = None, max_tokens: Optional[int] = None) -> str:
        """Single-prompt completion with per-call overrides."""
        # 0 is a valid temperature, so only None falls back to the default
        temperature = self.config.temperature if temperature is None else temperature
        max_tokens = max_tokens or self.config.max_tokens
        return self._invoke([HumanMessage(content=prompt)], temperature, max_tokens)
