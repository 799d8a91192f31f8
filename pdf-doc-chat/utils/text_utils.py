#!/usr/bin/env python3
"""
Text processing utility functions.
"""
import json
import re
from typing import Dict

from ftfy import fix_text
from models.data_models import ExtractionParseError

_FENCE_RE = re.compile(r"^\s*```[a-zA-Z0-9_-]*\s*\n?(.*?)\n?\s*```\s*$", re.DOTALL)


class TextUtils:
    """Text processing utility functions as static methods."""

    @staticmethod
    def fix_mojibake(text: str) -> str:
        """Use ftfy to fix common mojibake/encoding issues in model output."""
        try:
            return fix_text(text)
        except Exception:
            return text

    @staticmethod
    def strip_code_fences(raw: str) -> str:
        """Remove a surrounding ```json ... ``` (or bare ```) fence if present."""
        if raw is None:
            return ""
        match = _FENCE_RE.match(raw)
        if match:
            return match.group(1).strip()
        return raw.strip()

    @staticmethod
    def parse_page_response(raw: str) -> Dict[int, str]:
        """
        Parse a model response into a page-number -> text mapping.

        Raises ExtractionParseError when the response is empty, is not JSON,
        or is not a JSON object. Non-numeric keys and null values are dropped.
        """
        body = TextUtils.strip_code_fences(raw)
        if not body:
            raise ExtractionParseError("Empty response")

        try:
            parsed = json.loads(body)
        except json.JSONDecodeError as e:
            raise ExtractionParseError(f"Response is not valid JSON: {e}") from e

        if not isinstance(parsed, dict):
            raise ExtractionParseError(f"Expected a JSON object, got {type(parsed).__name__}")

        pages = {}
        for key, value in parsed.items():
            try:
                page_number = int(str(key).strip())
            except ValueError:
                continue
            if value is None:
                continue
            if not isinstance(value, str):
                value = json.dumps(value, ensure_ascii=False)
            pages[page_number] = TextUtils.fix_mojibake(value)

        if not pages:
            raise ExtractionParseError("Response contained no page entries")
        return pages

    @staticmethod
    def truncate(text: str, max_chars: int) -> str:
        if max_chars <= 0 or len(text) <= max_chars:
            return text
        return text[:max_chars] + "\n\n[... document truncated ...]"


fix_mojibake = TextUtils.fix_mojibake
strip_code_fences = TextUtils.strip_code_fences
parse_page_response = TextUtils.parse_page_response
truncate = TextUtils.truncate
