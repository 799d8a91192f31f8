#!/usr/bin/env python3
import os
import sys
import tempfile
from pathlib import Path

# Set minimal environment variables as early as possible (on import),
# so modules imported during test collection see them.
_base_dir = Path(tempfile.mkdtemp(prefix="test_env_"))
_logs = _base_dir / "logs"
_logs.mkdir(parents=True, exist_ok=True)

os.environ.setdefault("LOG_DIR", str(_logs))
os.environ.setdefault("METRICS_LOG_FILE", "")
os.environ.setdefault("LLM_API_KEY", "test-key")
os.environ.setdefault("LLM_API_BASE", "http://localhost:9999/v1")
os.environ.setdefault("LLM_MODEL", "test-vision-model")

# Ensure the application packages are importable
sys.path.insert(0, os.path.join(os.path.dirname(os.path.abspath(__file__)), "pdf-doc-chat"))
