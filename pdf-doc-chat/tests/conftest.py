#!/usr/bin/env python3
"""
Shared fixtures for the pipeline tests.
"""
import pytest
from config.pipeline_config import PipelineConfig
from pipeline_fakes import InMemoryRedis


@pytest.fixture
def fake_redis():
    return InMemoryRedis()


@pytest.fixture
def config():
    return PipelineConfig(
        api_key="test-key",
        api_base="http://localhost:9999/v1",
        model="test-vision-model",
        batch_size=5,
        max_concurrent_requests=3,
        cache_ttl_seconds=3600,
        max_pdf_size_mb=1,
    )


@pytest.fixture
def pdf_file(tmp_path):
    path = tmp_path / "report.pdf"
    path.write_bytes(b"%PDF-1.4\n1 0 obj\n<<>>\nendobj\ntrailer\n<<>>\n%%EOF\n")
    return path
