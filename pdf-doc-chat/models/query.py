#!/usr/bin/env python3
"""
Request and response models for the API endpoints.
"""
from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class ProcessDocumentsRequest(BaseModel):
    """Request model for extracting text from one or more PDFs."""
    pdf_paths: List[str] = Field(..., min_length=1)
    session_id: str


class DocumentResult(BaseModel):
    """Per-file extraction outcome."""
    path: str
    extractedText: Optional[str] = None
    pages: Dict[str, str] = Field(default_factory=dict)
    unresolvedPages: List[int] = Field(default_factory=list)
    cached: bool = False
    error: Optional[str] = None


class ProcessDocumentsResponse(BaseModel):
    """Combined extraction outcome for a request."""
    extractedText: Optional[str] = None
    documents: List[DocumentResult] = Field(default_factory=list)
    error: Optional[str] = None


class MessageRequest(BaseModel):
    """Request model for asking a question about extracted text."""
    prompt: str
    extracted_text: str = ""
    session_id: str


class MessageResponse(BaseModel):
    """Response model for chat turns."""
    response: Optional[str] = None
    chatHistory: List[Dict] = Field(default_factory=list)
    error: Optional[str] = None


class InferenceRequest(BaseModel):
    """Request model for a single prompt completion."""
    prompt: str
    temperature: Optional[float] = None
    max_tokens: Optional[int] = None


class InferenceResponse(BaseModel):
    output: Optional[str] = None
    error: Optional[str] = None


class SettingsRequest(BaseModel):
    """Request model for replacing the active LLM settings."""
    api_key: Optional[str] = None
    api_base: Optional[str] = None
    model: Optional[str] = None


class SettingsResponse(BaseModel):
    success: bool
    settings: Dict = Field(default_factory=dict)


class ClearSessionResponse(BaseModel):
    success: bool


class HealthResponse(BaseModel):
    status: str
    message: str
    redis: bool
