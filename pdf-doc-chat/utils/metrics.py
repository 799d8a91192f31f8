#!/usr/bin/env python3
"""
Performance metrics collection for the PDF extraction pipeline.

Provides lightweight timing instrumentation with structured JSON logging.
"""
import json
import logging
import time
from datetime import datetime, timezone
from typing import Any, Dict, Optional


class Timer:
    """
    High-resolution stopwatch used as a context manager.

    Re-entering the same Timer adds to ``elapsed_ms``, so a named timer that
    wraps several calls reports their total.
    """

    def __init__(self):
        self._started: Optional[float] = None
        self.elapsed_ms: float = 0.0
        self.laps: int = 0

    def __enter__(self):
        self._started = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self._started is not None:
            self.elapsed_ms += (time.perf_counter() - self._started) * 1000.0
            self.laps += 1
            self._started = None
        return False


class _MetricsBase:
    """Shared timer/field bookkeeping and JSON emission."""

    event_name = "metrics"

    def __init__(self, **kwargs):
        self.extra_fields = kwargs
        self.timers: Dict[str, Timer] = {}
        self.metrics: Dict[str, Any] = {}

    def timer(self, name: str) -> Timer:
        """
        Get a named timer context manager.

        Args:
            name: Timer name (used as metric key with _time_ms suffix)
        """
        if name not in self.timers:
            self.timers[name] = Timer()
        return self.timers[name]

    def add_counter(self, name: str, value: int):
        """Set a counter metric (e.g. pages_total, batches_failed)."""
        self.metrics[name] = value

    def add_field(self, name: str, value: Any):
        """Add an arbitrary field to the metrics."""
        self.metrics[name] = value

    def _finalize_metrics(self) -> Dict[str, Any]:
        final_metrics = dict(self.metrics)
        for name, timer in self.timers.items():
            final_metrics[f"{name}_time_ms"] = round(timer.elapsed_ms, 3)
        return final_metrics

    def _identity(self) -> Dict[str, Any]:
        return {}

    def build_event(self) -> Dict[str, Any]:
        event = {
            "event": self.event_name,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            **self._identity(),
            "metrics": self._finalize_metrics(),
        }
        event.update(self.extra_fields)
        return event

    def emit(self, logger: logging.Logger):
        """Emit structured JSON log event. Never raises."""
        try:
            # Imported late so tests can reload settings
            from config.settings import METRICS_ENABLED, METRICS_LOG_FILE, METRICS_LOG_TO_STDOUT

            if not METRICS_ENABLED:
                return

            event = self.build_event()

            if METRICS_LOG_TO_STDOUT:
                logger.info(f"METRICS: {json.dumps(event)}")

            if METRICS_LOG_FILE:
                try:
                    with open(METRICS_LOG_FILE, "a") as f:
                        f.write(json.dumps(event) + "\n")
                except Exception as e:
                    logger.debug(f"Failed to write metrics to file: {e}")

        except Exception as e:
            # Never let metrics collection crash the pipeline
            logger.debug(f"Failed to emit metrics: {e}")


class DocumentMetrics(_MetricsBase):
    """
    Aggregates document-level metrics for one pipeline run.

    Usage:
        metrics = DocumentMetrics(file="reports/q3.pdf", session_id="abc")

        with metrics.timer("total_processing"):
            with metrics.timer("rasterize"):
                pages = rasterize(...)
            metrics.add_counter("pages_total", len(pages))

        metrics.emit(log)
    """

    event_name = "document_processing_complete"

    def __init__(self, file: str, session_id: str, **kwargs):
        super().__init__(**kwargs)
        self.file = file
        self.session_id = session_id

    def _identity(self) -> Dict[str, Any]:
        return {"file": self.file, "session_id": self.session_id}


class RequestMetrics(_MetricsBase):
    """Tracks a single call to the LLM endpoint (a batch or a retried page)."""

    event_name = "llm_request_complete"

    def __init__(self, kind: str, pages: str, **kwargs):
        super().__init__(**kwargs)
        self.kind = kind
        self.pages = pages

    def _identity(self) -> Dict[str, Any]:
        return {"kind": self.kind, "pages": self.pages}
