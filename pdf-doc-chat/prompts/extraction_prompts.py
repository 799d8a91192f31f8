#!/usr/bin/env python3
"""
Instructions sent alongside page images to the vision model.
"""
from models.data_models import Batch

_RULES = (
    "Rules:\n"
    "1. Transcribe all visible text in natural reading order. Keep paragraphs and line breaks.\n"
    "2. Render tables as plain text rows. Do not describe images, just transcribe text in them.\n"
    "3. Do not summarize, translate, or invent content. Use an empty string for a blank page.\n"
    "4. Respond with ONLY a JSON object. No commentary, no markdown."
)


def build_batch_instruction(batch: Batch) -> str:
    """Instruction for a multi-page batch; keys are absolute page numbers."""
    pages = batch.page_numbers
    keys = ", ".join(f'"{n}"' for n in pages)
    return (
        f"You are given {len(pages)} page image(s) from a PDF document, in order. "
        f"They are pages {pages[0]} to {pages[-1]}: the first image is page {pages[0]}, "
        f"the second is page {pages[0] + 1}, and so on.\n\n"
        f"{_RULES}\n\n"
        f"The JSON object must have exactly these keys: {keys}. "
        f'Each value is the extracted text of that page, e.g. {{"{pages[0]}": "text of page {pages[0]}"}}.'
    )


def build_page_instruction(page_number: int) -> str:
    """Instruction for retrying a single page."""
    return (
        f"You are given one page image from a PDF document. It is page {page_number}.\n\n"
        f"{_RULES}\n\n"
        f'The JSON object must have exactly one key, "{page_number}", whose value is the extracted text, '
        f'e.g. {{"{page_number}": "text of the page"}}.'
    )
