#!/usr/bin/env python3
"""
Data models and error types for the PDF extraction pipeline.
"""
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set


class PipelineError(Exception):
    """Base class for errors raised inside the document pipeline."""


class ValidationError(PipelineError):
    """Bad path, file type, or size."""


class RasterizationError(PipelineError):
    """PDF could not be converted into page images."""


class ExtractionParseError(PipelineError):
    """A model response could not be parsed into a page mapping."""


class EmptyResultError(PipelineError):
    """No page produced any text."""


class ConfigurationError(PipelineError):
    """Required configuration (e.g. the API key) is missing."""


class LLMError(PipelineError):
    """The chat completion endpoint failed."""


@dataclass
class PageImage:
    """Represents one rasterized page."""
    page_number: int
    content: bytes
    mime_type: str = "image/png"


@dataclass(frozen=True)
class Batch:
    """Contiguous half-open page range [start, end)."""
    start: int
    end: int

    @property
    def page_numbers(self) -> List[int]:
        return list(range(self.start, self.end))

    def __len__(self):
        return self.end - self.start

    def __str__(self):
        return f"[{self.start}-{self.end - 1}]"


@dataclass
class BatchPassResult:
    """Outcome of dispatching every batch once."""
    pages: Dict[int, str] = field(default_factory=dict)
    skipped: Set[int] = field(default_factory=set)
    batches: List[Batch] = field(default_factory=list)
    failed_batches: List[Batch] = field(default_factory=list)


@dataclass
class RetryPassResult:
    """Outcome of retrying skipped pages one at a time."""
    pages: Dict[int, str] = field(default_factory=dict)
    unresolved: Set[int] = field(default_factory=set)


@dataclass
class ExtractionResult:
    """Merged page -> text mapping for one document."""
    pages: Dict[int, str]
    unresolved: List[int] = field(default_factory=list)
    num_pages: int = 0

    @property
    def is_partial(self) -> bool:
        return bool(self.unresolved)

    @property
    def text(self) -> str:
        parts = []
        for page_number in sorted(self.pages):
            parts.append(f"--- Page {page_number} ---\n{self.pages[page_number].strip()}")
        return "\n\n".join(parts)

    def to_dict(self) -> dict:
        return {
            # JSON object keys must be strings
            "pages": {str(k): v for k, v in self.pages.items()},
            "unresolved": sorted(self.unresolved),
            "num_pages": self.num_pages,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ExtractionResult":
        return cls(
            pages={int(k): v for k, v in data.get("pages", {}).items()},
            unresolved=list(data.get("unresolved", [])),
            num_pages=int(data.get("num_pages", 0)),
        )


@dataclass
class CacheEntry:
    """Cached extraction keyed by document fingerprint."""
    fingerprint: str
    result: ExtractionResult
    timestamp: float

    def is_fresh(self, now: float, ttl_seconds: float) -> bool:
        return now - self.timestamp < ttl_seconds


@dataclass
class ChatTurn:
    """One message in a session transcript."""
    role: str
    content: str

    def to_dict(self) -> dict:
        return {"role": self.role, "content": self.content}


@dataclass
class ProcessingResult:
    """Outward result of processing one document."""
    success: bool
    extracted_text: str = ""
    pages: Dict[int, str] = field(default_factory=dict)
    unresolved_pages: List[int] = field(default_factory=list)
    cached: bool = False
    error: Optional[str] = None

    def to_response(self) -> dict:
        if not self.success:
            return {"error": self.error or "Unknown error"}
        return {
            "extractedText": self.extracted_text,
            "pages": {str(k): v for k, v in sorted(self.pages.items())},
            "unresolvedPages": sorted(self.unresolved_pages),
            "cached": self.cached,
        }
