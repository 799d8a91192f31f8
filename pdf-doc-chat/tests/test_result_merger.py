#!/usr/bin/env python3
"""
Tests for merging batch and retry results.
"""
import pytest
from models.data_models import BatchPassResult, EmptyResultError, RetryPassResult
from processors.result_merger import merge_results


def test_merge_batch_then_retry():
    batch = BatchPassResult(pages={1: "a", 2: "b"}, skipped={3, 4})
    retry = RetryPassResult(pages={3: "c"}, unresolved={4})

    result = merge_results(batch, retry, num_pages=4)

    assert result.pages == {1: "a", 2: "b", 3: "c"}
    assert result.unresolved == [4]
    assert result.is_partial
    assert result.num_pages == 4


def test_every_page_in_exactly_one_bucket():
    batch = BatchPassResult(pages={n: str(n) for n in (1, 2, 3, 4, 5, 11, 12)}, skipped={6, 7, 8, 9, 10})
    retry = RetryPassResult(pages={6: "6", 7: "7", 9: "9", 10: "10"}, unresolved={8})

    result = merge_results(batch, retry, num_pages=12)

    resolved = set(result.pages)
    unresolved = set(result.unresolved)
    assert resolved | unresolved == set(range(1, 13))
    assert resolved & unresolved == set()


def test_all_unresolved_raises_empty_result():
    batch = BatchPassResult(pages={}, skipped={1, 2})
    retry = RetryPassResult(pages={}, unresolved={1, 2})

    with pytest.raises(EmptyResultError, match="No text extracted"):
        merge_results(batch, retry, num_pages=2)


def test_batch_value_wins_if_both_present():
    batch = BatchPassResult(pages={1: "from batch"})
    retry = RetryPassResult(pages={1: "from retry"})

    assert merge_results(batch, retry, 1).pages[1] == "from batch"


def test_text_joins_pages_in_order():
    batch = BatchPassResult(pages={2: "second", 1: "first"})
    result = merge_results(batch, RetryPassResult(), 2)

    assert result.text == "--- Page 1 ---\nfirst\n\n--- Page 2 ---\nsecond"
    assert not result.is_partial
