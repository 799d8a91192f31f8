"""
API endpoints for document extraction, chat, sessions, and settings using FastAPI.
"""
import logging

from config.pipeline_config import ConfigHolder
from fastapi import APIRouter, Depends, HTTPException
from models.query import (
    ClearSessionResponse,
    HealthResponse,
    InferenceRequest,
    InferenceResponse,
    MessageRequest,
    MessageResponse,
    ProcessDocumentsRequest,
    ProcessDocumentsResponse,
    SettingsRequest,
    SettingsResponse,
)
from services.chat_service import ChatService
from services.dependencies import get_chat_service, get_config_holder, get_document_service, get_redis
from services.document_service import DocumentService
from services.redis_service import is_available
from utils.logging_config import setup_logging

log = setup_logging("api_endpoints.log", logging.DEBUG)

router = APIRouter(prefix="/api/v1", tags=["documents"])


@router.get("/health", response_model=HealthResponse)
def health_check(redis_client=Depends(get_redis)):
    """Health check endpoint."""
    redis_ok = is_available(redis_client)
    return HealthResponse(
        status="healthy" if redis_ok else "degraded",
        message="API is running" if redis_ok else "API is running but Redis is unreachable",
        redis=redis_ok,
    )


@router.post("/documents", response_model=ProcessDocumentsResponse)
def process_documents(
        req: ProcessDocumentsRequest,
        service: DocumentService = Depends(get_document_service),
        holder: ConfigHolder = Depends(get_config_holder),
):
    """Extract text from one or more PDFs for a session."""
    try:
        log.info(f"Received {len(req.pdf_paths)} document(s) for session {req.session_id}")
        return service.process_documents(req.pdf_paths, req.session_id, holder.current)
    except Exception as e:
        log.error(f"Document processing failed: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Document processing failed: {str(e)}")


@router.post("/messages", response_model=MessageResponse)
def process_message(
        req: MessageRequest,
        service: ChatService = Depends(get_chat_service),
        holder: ConfigHolder = Depends(get_config_holder),
):
    """Answer a question about previously extracted text."""
    try:
        log.info(f"Received message for session {req.session_id} ({len(req.prompt)} chars)")
        return service.process_message(req.prompt, req.extracted_text, req.session_id, holder.current)
    except Exception as e:
        log.error(f"Message processing failed: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Message processing failed: {str(e)}")


@router.post("/inference", response_model=InferenceResponse)
def run_inference(
        req: InferenceRequest,
        service: ChatService = Depends(get_chat_service),
        holder: ConfigHolder = Depends(get_config_holder),
):
    """Run a single prompt through the configured model."""
    try:
        return service.run_inference(req.prompt, req.temperature, req.max_tokens, holder.current)
    except Exception as e:
        log.error(f"Inference failed: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Inference failed: {str(e)}")


@router.delete("/sessions/{session_id}", response_model=ClearSessionResponse)
def clear_session(session_id: str, service: ChatService = Depends(get_chat_service)):
    """Drop a session's transcript and cached documents."""
    try:
        return service.clear_session(session_id)
    except Exception as e:
        log.error(f"Clearing session {session_id} failed: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Failed to clear session: {str(e)}")


@router.put("/settings", response_model=SettingsResponse)
def save_settings(req: SettingsRequest, holder: ConfigHolder = Depends(get_config_holder)):
    """Replace the active config with a new one carrying the given overrides."""
    try:
        config = holder.update(api_key=req.api_key, api_base=req.api_base, model=req.model)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    log.info(f"Settings updated: model={config.model} api_base={config.api_base}")
    return SettingsResponse(success=True, settings=config.public_dict())
