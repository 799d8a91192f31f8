#!/usr/bin/env python3
"""
Retry pass: re-send each page skipped by the batch pass on its own.
"""
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Dict, Iterable, Optional, Sequence

from models.data_models import ExtractionParseError, PageImage, RetryPassResult
from processors.batch_dispatcher import ExtractFn, call_and_parse
from prompts.extraction_prompts import build_page_instruction
from utils.logging_config import setup_logging

log = setup_logging("pdf_pipeline.log")


def _retry_page(page: PageImage, extract: ExtractFn) -> str:
    parsed = call_and_parse(extract, [page], build_page_instruction(page.page_number), "retry", str(page.page_number))
    if page.page_number not in parsed:
        raise ExtractionParseError(f"Response has no entry for page {page.page_number}")
    return parsed[page.page_number]


def retry_skipped_pages(skipped: Iterable[int], pages: Sequence[PageImage], extract: ExtractFn, max_workers: int) -> RetryPassResult:
    """
    Issue exactly one single-page request per skipped page, concurrently.

    Pages whose retry succeeds move into ``pages``; the rest are returned
    as ``unresolved``.
    """
    by_number = {page.page_number: page for page in pages}
    pending = sorted(set(skipped))
    result = RetryPassResult(unresolved=set(pending))
    if not pending:
        return result

    log.info(f"🔁 Retrying {len(pending)} page(s) individually: {pending}")
    outcomes: Dict[int, Optional[str]] = {}

    with ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="retry") as pool:
        futures = {}
        for page_number in pending:
            page = by_number.get(page_number)
            if page is None:
                log.error(f"❌ No image for skipped page {page_number}; leaving unresolved")
                continue
            futures[pool.submit(_retry_page, page, extract)] = page_number

        for future in as_completed(futures):
            page_number = futures[future]
            try:
                outcomes[page_number] = future.result()
            except ExtractionParseError as e:
                log.warning(f"⚠️ Retry for page {page_number} returned an unusable response: {e}")
                outcomes[page_number] = None
            except Exception as e:
                log.error(f"💥 Retry for page {page_number} failed: {e}")
                outcomes[page_number] = None

    for page_number, text in sorted(outcomes.items()):
        if text is not None:
            result.pages[page_number] = text
            result.unresolved.discard(page_number)

    log.info(f"✅ Retry pass: {len(result.pages)} recovered, {len(result.unresolved)} unresolved")
    return result
