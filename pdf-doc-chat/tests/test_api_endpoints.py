#!/usr/bin/env python3
"""
Tests for the FastAPI routes with services replaced through dependency overrides.
"""
import logging
from unittest.mock import MagicMock

import pytest
from apimain import create_app
from config.pipeline_config import ConfigHolder
from fastapi.testclient import TestClient
from services.dependencies import get_chat_service, get_config_holder, get_document_service, get_redis


@pytest.fixture
def holder(config):
    return ConfigHolder(config)


@pytest.fixture
def document_service():
    return MagicMock()


@pytest.fixture
def chat_service():
    return MagicMock()


@pytest.fixture
def client(fake_redis, holder, document_service, chat_service):
    app = create_app()
    app.dependency_overrides[get_redis] = lambda: fake_redis
    app.dependency_overrides[get_config_holder] = lambda: holder
    app.dependency_overrides[get_document_service] = lambda: document_service
    app.dependency_overrides[get_chat_service] = lambda: chat_service
    return TestClient(app)


def test_root(client):
    assert client.get("/").status_code == 200


def test_health_ok(client):
    body = client.get("/api/v1/health").json()
    assert body == {"status": "healthy", "message": "API is running", "redis": True}


def test_health_degraded_when_redis_down(client, fake_redis):
    import redis

    fake_redis.ping = MagicMock(side_effect=redis.ConnectionError("refused"))

    body = client.get("/api/v1/health").json()
    assert body["status"] == "degraded"
    assert body["redis"] is False


def test_process_documents(client, document_service, holder):
    document_service.process_documents.return_value = {
        "extractedText": "===== a.pdf =====\n--- Page 1 ---\nhi",
        "documents": [{"path": "a.pdf", "extractedText": "--- Page 1 ---\nhi", "pages": {"1": "hi"},
                       "unresolvedPages": [], "cached": False}],
    }

    resp = client.post("/api/v1/documents", json={"pdf_paths": ["a.pdf"], "session_id": "s1"})

    assert resp.status_code == 200
    assert resp.json()["documents"][0]["pages"] == {"1": "hi"}
    document_service.process_documents.assert_called_once_with(["a.pdf"], "s1", holder.current)


def test_process_documents_error_is_returned_not_raised(client, document_service):
    document_service.process_documents.return_value = {
        "error": "a.pdf: File must be a PDF (.pdf): a.txt",
        "documents": [{"path": "a.txt", "error": "File must be a PDF (.pdf): a.txt"}],
    }

    resp = client.post("/api/v1/documents", json={"pdf_paths": ["a.txt"], "session_id": "s1"})

    assert resp.status_code == 200
    assert resp.json()["error"].startswith("a.pdf")


def test_process_documents_requires_paths(client):
    resp = client.post("/api/v1/documents", json={"pdf_paths": [], "session_id": "s1"})
    assert resp.status_code == 422


def test_process_documents_unexpected_failure(client, document_service):
    document_service.process_documents.side_effect = RuntimeError("boom")

    resp = client.post("/api/v1/documents", json={"pdf_paths": ["a.pdf"], "session_id": "s1"})

    assert resp.status_code == 500
    assert "boom" in resp.json()["detail"]


def test_process_message(client, chat_service):
    chat_service.process_message.return_value = {
        "response": "Page 2 lists revenue.",
        "chatHistory": [{"role": "user", "content": "What?"}, {"role": "assistant", "content": "Page 2 lists revenue."}],
    }

    resp = client.post("/api/v1/messages", json={"prompt": "What?", "extracted_text": "doc", "session_id": "s1"})

    assert resp.status_code == 200
    assert resp.json()["response"] == "Page 2 lists revenue."
    assert len(resp.json()["chatHistory"]) == 2


def test_run_inference(client, chat_service, holder):
    chat_service.run_inference.return_value = {"output": "4"}

    resp = client.post("/api/v1/inference", json={"prompt": "2+2?", "temperature": 0.0, "max_tokens": 4})

    assert resp.json() == {"output": "4", "error": None}
    chat_service.run_inference.assert_called_once_with("2+2?", 0.0, 4, holder.current)


def test_clear_session(client, chat_service):
    chat_service.clear_session.return_value = {"success": True}

    resp = client.delete("/api/v1/sessions/s1")

    assert resp.json() == {"success": True}
    chat_service.clear_session.assert_called_once_with("s1")


def test_settings_update_replaces_config(client, holder, config):
    resp = client.put("/api/v1/settings", json={"model": "bigger-model", "api_key": "sk-new"})

    assert resp.status_code == 200
    body = resp.json()["settings"]
    assert body["model"] == "bigger-model"
    assert body["api_key"] == "***"
    assert holder.current.api_key == "sk-new"
    assert config.model == "test-vision-model"


def test_settings_update_rejects_invalid(client, holder):
    resp = client.put("/api/v1/settings", json={"model": ""})

    assert resp.status_code == 400
    assert holder.current.model == "test-vision-model"


def test_message_content_is_not_logged(client, chat_service, caplog):
    chat_service.process_message.return_value = {"response": "ok", "chatHistory": []}
    secret = "my account number is 1234-5678"

    with caplog.at_level(logging.INFO):
        client.post("/api/v1/messages", json={"prompt": secret, "session_id": "s1"})

    assert secret not in caplog.text
    assert f"({len(secret)} chars)" in caplog.text
