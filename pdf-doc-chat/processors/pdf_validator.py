#!/usr/bin/env python3
"""
Pre-flight checks for PDF files selected by the user.
"""
import os
from typing import Optional

from models.data_models import ValidationError


class PdfValidator:
    """PDF validation as static methods."""

    @staticmethod
    def validate_pdf(path, max_size_mb: float) -> Optional[str]:
        """
        Check that ``path`` points to a non-empty, size-bounded PDF.

        Rules are checked in order and the first violation's message is
        returned. Returns None when the file is valid.
        """
        if not isinstance(path, str) or not path.strip():
            return "File path must be a non-empty string"

        if os.path.splitext(path)[1].lower() != ".pdf":
            return f"File must be a PDF (.pdf): {path}"

        if not os.path.isfile(path) or not os.access(path, os.R_OK):
            return f"File does not exist or is not readable: {path}"

        size = os.path.getsize(path)
        if size <= 0:
            return f"File is empty: {path}"

        max_bytes = max_size_mb * 1024 * 1024
        if size > max_bytes:
            return f"File exceeds the {max_size_mb:g} MB limit ({size / (1024 * 1024):.1f} MB): {path}"

        try:
            with open(path, "rb") as f:
                header = f.read(4)
        except OSError as e:
            return f"File could not be read: {e}"
        if header != b"%PDF":
            return f"File is not a valid PDF (bad header): {path}"

        return None

    @staticmethod
    def ensure_valid_pdf(path, max_size_mb: float) -> None:
        """Raise ValidationError with the first violated rule's message."""
        error = PdfValidator.validate_pdf(path, max_size_mb)
        if error:
            raise ValidationError(error)


validate_pdf = PdfValidator.validate_pdf
ensure_valid_pdf = PdfValidator.ensure_valid_pdf
