#!/usr/bin/env python3
"""
Batch extraction pass: group page images, send each group to the vision
model concurrently, and parse the per-page JSON it returns.
"""
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from models.data_models import Batch, BatchPassResult, ExtractionParseError, PageImage
from prompts.extraction_prompts import build_batch_instruction
from utils.logging_config import setup_logging
from utils.metrics import RequestMetrics
from utils.text_utils import parse_page_response

log = setup_logging("pdf_pipeline.log")

# extract(images, instruction) -> raw model text
ExtractFn = Callable[[Sequence[PageImage], str], str]


def partition_batches(num_pages: int, batch_size: int) -> List[Batch]:
    """Split pages 1..num_pages into consecutive batches of at most ``batch_size`` pages."""
    if batch_size < 1:
        raise ValueError(f"batch_size must be >= 1, got {batch_size}")
    return [Batch(start, min(start + batch_size, num_pages + 1)) for start in range(1, num_pages + 1, batch_size)]


def call_and_parse(extract: ExtractFn, images: Sequence[PageImage], instruction: str, kind: str, label: str) -> Dict[int, str]:
    """Run one extraction request and parse its response. Errors propagate to the caller."""
    metrics = RequestMetrics(kind=kind, pages=label)
    try:
        with metrics.timer("roundtrip"):
            raw = extract(images, instruction)
        metrics.add_field("response_chars", len(raw or ""))
        pages = parse_page_response(raw)
        metrics.add_field("success", True)
        return pages
    except Exception:
        metrics.add_field("success", False)
        raise
    finally:
        metrics.emit(log)


def _run_batch(batch: Batch, by_number: Dict[int, PageImage], extract: ExtractFn) -> Dict[int, str]:
    images = [by_number[n] for n in batch.page_numbers]
    return call_and_parse(extract, images, build_batch_instruction(batch), "batch", str(batch))


def dispatch_batches(pages: Sequence[PageImage], extract: ExtractFn, batch_size: int, max_workers: int) -> BatchPassResult:
    """
    Send every batch through a bounded worker pool and collect the results.

    A batch whose call raises or whose response cannot be parsed is failed as
    a whole: all of its pages go to ``skipped``. Pages missing from an
    otherwise valid response are skipped individually; keys outside the
    batch's range are dropped.
    """
    by_number = {page.page_number: page for page in pages}
    batches = partition_batches(len(pages), batch_size)
    result = BatchPassResult(batches=batches)
    if not batches:
        return result

    outcomes: List[Tuple[Batch, Optional[Dict[int, str]]]] = []
    log.info(f"📤 Dispatching {len(batches)} batch(es) for {len(pages)} page(s) (batch size {batch_size}, workers {max_workers})")

    with ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="batch") as pool:
        futures = {pool.submit(_run_batch, batch, by_number, extract): batch for batch in batches}
        for future in as_completed(futures):
            batch = futures[future]
            try:
                outcomes.append((batch, future.result()))
            except ExtractionParseError as e:
                log.warning(f"⚠️ Batch {batch} returned an unusable response: {e}")
                outcomes.append((batch, None))
            except Exception as e:
                log.error(f"💥 Batch {batch} request failed: {e}")
                outcomes.append((batch, None))

    # All futures have settled; merge on this thread only
    for batch, parsed in sorted(outcomes, key=lambda item: item[0].start):
        if parsed is None:
            result.failed_batches.append(batch)
            result.skipped.update(batch.page_numbers)
            continue

        expected = set(batch.page_numbers)
        stray = sorted(set(parsed) - expected)
        if stray:
            log.warning(f"⚠️ Batch {batch} returned pages outside its range, ignoring: {stray}")
        for page_number in batch.page_numbers:
            if page_number in parsed:
                result.pages[page_number] = parsed[page_number]
            else:
                result.skipped.add(page_number)

    log.info(
        f"✅ Batch pass: {len(result.pages)} page(s) extracted, {len(result.skipped)} skipped, "
        f"{len(result.failed_batches)}/{len(batches)} batch(es) failed"
    )
    return result
