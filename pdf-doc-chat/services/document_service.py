#!/usr/bin/env python3
"""
Document pipeline: validate, fingerprint, check the cache, rasterize,
extract in batches, retry failed pages, merge, and cache the result.
"""
import os
from typing import Callable, List, Optional, Sequence

import redis
from config.pipeline_config import PipelineConfig
from models.data_models import ExtractionResult, PageImage, PipelineError, ProcessingResult
from processors.batch_dispatcher import dispatch_batches
from processors.pdf_validator import ensure_valid_pdf
from processors.rasterizer import rasterize
from processors.result_merger import merge_results
from processors.retry_coordinator import retry_skipped_pages
from services.cache_service import DocumentCache
from services.llm_service import LLMService
from services.session_service import SessionStore
from utils.file_utils import fingerprint_file
from utils.logging_config import setup_logging
from utils.metrics import DocumentMetrics

log = setup_logging("pdf_pipeline.log")

RasterizeFn = Callable[[str, int, int], Sequence[PageImage]]


class DocumentService:
    """Runs the extraction pipeline and converts every failure into a structured result."""

    def __init__(
        self,
        cache: DocumentCache,
        sessions: SessionStore,
        llm_factory: Callable[[PipelineConfig], LLMService] = LLMService,
        rasterize_fn: RasterizeFn = rasterize,
    ):
        self.cache = cache
        self.sessions = sessions
        self.llm_factory = llm_factory
        self.rasterize_fn = rasterize_fn

    def _lookup(self, fingerprint: str, ttl_seconds: float, metrics: DocumentMetrics) -> Optional[ExtractionResult]:
        try:
            return self.cache.get(fingerprint, ttl_seconds)
        except redis.RedisError as e:
            log.warning(f"⚠️ Cache lookup for {fingerprint} failed, treating as a miss: {e}")
            metrics.add_field("cache_error", type(e).__name__)
            return None

    def _remember(self, session_id: str, fingerprint: str, result: Optional[ExtractionResult], metrics: DocumentMetrics):
        """Store the result and track the document. Redis failures are logged; the result is still returned."""
        if result is not None:
            try:
                self.cache.put(fingerprint, result)
            except redis.RedisError as e:
                log.warning(f"⚠️ Could not cache {fingerprint}: {e}")
                metrics.add_field("cache_error", type(e).__name__)
        try:
            self.sessions.track_document(session_id, fingerprint)
        except redis.RedisError as e:
            log.warning(f"⚠️ Could not track {fingerprint} for session {session_id}: {e}")
            metrics.add_field("session_error", type(e).__name__)

    def _run(self, path: str, session_id: str, config: PipelineConfig, metrics: DocumentMetrics) -> ProcessingResult:
        ensure_valid_pdf(path, config.max_pdf_size_mb)
        fingerprint = fingerprint_file(path)
        metrics.add_field("fingerprint", fingerprint)

        cached = self._lookup(fingerprint, config.cache_ttl_seconds, metrics)
        if cached is not None:
            metrics.add_field("cache_hit", True)
            self._remember(session_id, fingerprint, None, metrics)
            return ProcessingResult(success=True, extracted_text=cached.text, pages=cached.pages,
                                    unresolved_pages=cached.unresolved, cached=True)
        metrics.add_field("cache_hit", False)

        # Built before rasterizing so a missing API key fails fast
        llm = self.llm_factory(config)

        with metrics.timer("rasterize"):
            pages = list(self.rasterize_fn(path, config.raster_dpi, config.max_page_dim))
        metrics.add_counter("pages_total", len(pages))

        with metrics.timer("batch_pass"):
            batch_result = dispatch_batches(pages, llm.extract, config.batch_size, config.max_concurrent_requests)
        metrics.add_counter("batches_total", len(batch_result.batches))
        metrics.add_counter("batches_failed", len(batch_result.failed_batches))
        metrics.add_counter("pages_retried", len(batch_result.skipped))

        with metrics.timer("retry_pass"):
            retry_result = retry_skipped_pages(batch_result.skipped, pages, llm.extract, config.max_concurrent_requests)

        result = merge_results(batch_result, retry_result, len(pages))
        metrics.add_counter("pages_unresolved", len(result.unresolved))

        self._remember(session_id, fingerprint, result, metrics)

        if result.is_partial:
            log.warning(f"⚠️ {path}: {len(result.unresolved)} page(s) could not be extracted: {result.unresolved}")
        return ProcessingResult(success=True, extracted_text=result.text, pages=result.pages,
                                unresolved_pages=result.unresolved, cached=False)

    def process_document(self, path: str, session_id: str, config: PipelineConfig) -> dict:
        """
        Extract text from one PDF.

        Returns ``{"extractedText", "pages", "unresolvedPages", "cached"}`` or ``{"error"}``.
        Never raises.
        """
        metrics = DocumentMetrics(file=str(path), session_id=session_id)
        log.info(f"📁 Processing {path} for session {session_id}")
        try:
            with metrics.timer("total_processing"):
                result = self._run(path, session_id, config, metrics)
        except PipelineError as e:
            log.error(f"❌ {type(e).__name__} for {path}: {e}")
            metrics.add_field("error", type(e).__name__)
            result = ProcessingResult(success=False, error=str(e))
        except Exception as e:
            log.error(f"💥 Unexpected error processing {path}: {e}", exc_info=True)
            metrics.add_field("error", type(e).__name__)
            result = ProcessingResult(success=False, error=f"Unexpected error: {e}")
        finally:
            metrics.emit(log)
        return result.to_response()

    def process_documents(self, paths: List[str], session_id: str, config: PipelineConfig) -> dict:
        """Process several PDFs in order; combined text keeps a header per file."""
        documents = []
        sections = []
        for path in paths:
            outcome = self.process_document(path, session_id, config)
            documents.append({"path": path, **outcome})
            if "error" not in outcome:
                sections.append(f"===== {os.path.basename(path)} =====\n{outcome['extractedText']}")

        if not sections:
            errors = "; ".join(f"{d['path']}: {d['error']}" for d in documents)
            return {"error": errors or "No documents provided", "documents": documents}
        return {"extractedText": "\n\n".join(sections), "documents": documents}
