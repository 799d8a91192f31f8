#!/usr/bin/env python3
"""
Combine batch and retry outputs into one page-indexed result.
"""
from models.data_models import BatchPassResult, EmptyResultError, ExtractionResult, RetryPassResult


def merge_results(batch_result: BatchPassResult, retry_result: RetryPassResult, num_pages: int) -> ExtractionResult:
    """
    Batch successes first, then retry successes.

    Raises EmptyResultError when nothing was extracted and pages remain unresolved.
    """
    pages = dict(batch_result.pages)
    for page_number, text in retry_result.pages.items():
        # A page that succeeded in the batch pass is never retried
        pages.setdefault(page_number, text)

    unresolved = sorted(n for n in retry_result.unresolved if n not in pages)
    if not pages and unresolved:
        raise EmptyResultError("No text extracted from document")

    return ExtractionResult(pages=pages, unresolved=unresolved, num_pages=num_pages)
