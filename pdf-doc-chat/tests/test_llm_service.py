#!/usr/bin/env python3
"""
Tests for LLMService with ChatOpenAI mocked out.
"""
from unittest.mock import MagicMock, patch

import pytest
from langchain_core.messages import HumanMessage
from models.data_models import ConfigurationError, LLMError, PageImage
from services.llm_service import LLMService, content_to_text, to_data_url


def _mock_model(content="ok"):
    model = MagicMock()
    model.invoke.return_value = MagicMock(content=content)
    return model


def test_missing_api_key_raises(config):
    with pytest.raises(ConfigurationError, match="API key not configured"):
        LLMService(config.with_overrides(api_key=""))


def test_to_data_url():
    page = PageImage(page_number=1, content=b"\x89PNG")
    assert to_data_url(page) == "data:image/png;base64,iVBORw=="


@pytest.mark.parametrize(
    "content,expected",
    [
        ("plain", "plain"),
        ([{"type": "text", "text": "a"}, {"type": "image_url"}, "b"], "ab"),
        (None, ""),
    ],
)
def test_content_to_text(content, expected):
    assert content_to_text(content) == expected


@patch("services.llm_service.ChatOpenAI")
def test_extract_sends_images_with_instruction(mock_chat, config):
    model = _mock_model('{"1": "text"}')
    mock_chat.return_value = model
    pages = [PageImage(1, b"one"), PageImage(2, b"two")]

    raw = LLMService(config).extract(pages, "Extract pages 1 to 2")

    assert raw == '{"1": "text"}'
    kwargs = mock_chat.call_args.kwargs
    assert kwargs["temperature"] == 0.0
    assert kwargs["max_tokens"] == config.extraction_max_tokens
    assert kwargs["base_url"] == config.api_base
    assert kwargs["model"] == config.model

    (message,) = model.invoke.call_args.args[0]
    assert isinstance(message, HumanMessage)
    assert message.content[0] == {"type": "text", "text": "Extract pages 1 to 2"}
    urls = [part["image_url"]["url"] for part in message.content[1:]]
    assert len(urls) == 2
    assert all(url.startswith("data:image/png;base64,") for url in urls)


@patch("services.llm_service.ChatOpenAI")
def test_chat_uses_configured_sampling(mock_chat, config):
    mock_chat.return_value = _mock_model("  answer  ")

    assert LLMService(config).chat([HumanMessage(content="hi")]) == "answer"
    assert mock_chat.call_args.kwargs["temperature"] == config.temperature
    assert mock_chat.call_args.kwargs["max_tokens"] == config.max_tokens


@patch("services.llm_service.ChatOpenAI")
def test_run_inference_overrides(mock_chat, config):
    mock_chat.return_value = _mock_model("4")

    assert LLMService(config).run_inference("2+2?", temperature=0.0, max_tokens=8) == "4"
    assert mock_chat.call_args.kwargs["temperature"] == 0.0
    assert mock_chat.call_args.kwargs["max_tokens"] == 8


@patch("services.llm_service.ChatOpenAI")
def test_run_inference_defaults(mock_chat, config):
    mock_chat.return_value = _mock_model("4")

    LLMService(config).run_inference("2+2?")

    assert mock_chat.call_args.kwargs["temperature"] == config.temperature
    assert mock_chat.call_args.kwargs["max_tokens"] == config.max_tokens


@patch("services.llm_service.ChatOpenAI")
def test_endpoint_failure_wrapped(mock_chat, config):
    model = MagicMock()
    model.invoke.side_effect = RuntimeError("502 Bad Gateway")
    mock_chat.return_value = model

    with pytest.raises(LLMError, match="502 Bad Gateway"):
        LLMService(config).chat([HumanMessage(content="hi")])
