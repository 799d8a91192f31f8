#!/usr/bin/env python3
# apimain.py
# Start the service with: uvicorn apimain:app --reload  (or the pdf-doc-chat-api script)

import os
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from config.settings import API_HOST, API_PORT  # noqa: E402
from utils.logging_config import setup_logging  # noqa: E402

log = setup_logging("api_endpoints.log")


@asynccontextmanager
async def lifespan(app: FastAPI):
    from services.dependencies import get_config_holder, get_redis
    from services.redis_service import is_available

    config = get_config_holder().current
    log.info(f"🚀 PDF chat API starting: model={config.model} endpoint={config.api_base}")
    if not config.api_key:
        log.warning("⚠️ No LLM API key configured; extraction and chat will fail until PUT /api/v1/settings")
    if not is_available(get_redis()):
        log.warning("⚠️ Redis is unreachable; caching and sessions are unavailable")
    yield
    log.info("👋 PDF chat API shutting down")


def create_app() -> FastAPI:
    from api.endpoints import router as api_router

    app = FastAPI(
        title="PDF Document Chat API",
        description="Extract text from PDFs with a vision model and chat about it",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Configure appropriately for production
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(api_router)

    @app.get("/")
    def root():
        return {"message": "PDF Document Chat API is running. POST /api/v1/documents to extract a PDF."}

    return app


app = create_app()


def main() -> None:
    uvicorn.run(app, host=API_HOST, port=API_PORT)


if __name__ == "__main__":
    main()
