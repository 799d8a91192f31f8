#!/usr/bin/env python3
"""
Configuration settings for the PDF chat service.

- When running standalone, default values are used for all environment variables.
- When running in Docker Compose, values from pdf-chat.env will override the defaults.
- Pipeline code never reads these constants directly; it receives a
  PipelineConfig built from them (see config/pipeline_config.py).
"""
import os

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))


def _abs_path(path, base=PROJECT_ROOT):
    if not path:
        raise ValueError("Missing required path for configuration.")
    if os.path.isabs(path):
        return path
    return os.path.join(base, path)


# LLM Configuration (any OpenAI-compatible chat completions endpoint)
LLM_API_KEY = os.getenv("LLM_API_KEY", os.getenv("OPENAI_API_KEY", ""))
LLM_API_BASE = os.getenv("LLM_API_BASE", "https://api.openai.com/v1")
LLM_MODEL = os.getenv("LLM_MODEL", "gpt-4o-mini")
LLM_TEMPERATURE = float(os.getenv("LLM_TEMPERATURE", "0.7"))
LLM_MAX_TOKENS = int(os.getenv("LLM_MAX_TOKENS", "256"))
LLM_EXTRACTION_MAX_TOKENS = int(os.getenv("LLM_EXTRACTION_MAX_TOKENS", "4096"))
LLM_TIMEOUT = float(os.getenv("LLM_TIMEOUT", "120"))

# Extraction pipeline
PAGE_BATCH_SIZE = int(os.getenv("PAGE_BATCH_SIZE", "5"))
# Upper bound on simultaneous calls to the LLM endpoint, independent of page count
MAX_CONCURRENT_REQUESTS = int(os.getenv("MAX_CONCURRENT_REQUESTS", "4"))
MAX_PDF_SIZE_MB = float(os.getenv("MAX_PDF_SIZE_MB", "50"))
RASTER_DPI = int(os.getenv("RASTER_DPI", "200"))
MAX_PAGE_DIM = int(os.getenv("MAX_PAGE_DIM", "2000"))

# Cache / chat
CACHE_TTL_SECONDS = int(os.getenv("CACHE_TTL_SECONDS", "3600"))
MAX_CONTEXT_CHARS = int(os.getenv("MAX_CONTEXT_CHARS", "60000"))

# Redis Configuration
REDIS_HOST = os.getenv("REDIS_HOST", "localhost")
REDIS_PORT = int(os.getenv("REDIS_PORT", "6379"))
REDIS_DB = int(os.getenv("REDIS_DB", "0"))

# Logging
LOG_DIR = _abs_path(os.getenv("LOG_DIR", "logs"))

# Metrics Configuration
METRICS_ENABLED = os.getenv("METRICS_ENABLED", "true").lower() == "true"
METRICS_LOG_FILE = os.getenv("METRICS_LOG_FILE", "metrics.jsonl")
METRICS_LOG_TO_STDOUT = os.getenv("METRICS_LOG_TO_STDOUT", "true").lower() == "true"

# API server
API_HOST = os.getenv("API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("API_PORT", "8000"))
