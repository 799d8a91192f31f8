#!/usr/bin/env python3
"""
PDF to page-image conversion.
"""
import io
from typing import List

from models.data_models import PageImage, RasterizationError
from pdf2image import convert_from_path
from PIL import Image
from utils.logging_config import setup_logging

log = setup_logging("pdf_pipeline.log")

Image.MAX_IMAGE_PIXELS = 500_000_000

try:
    Resample = Image.Resampling  # Pillow ≥ 10
except AttributeError:
    Resample = Image  # Pillow < 10


class Rasterizer:
    """Rasterization helpers as static methods."""

    @staticmethod
    def downscale(pil_image: Image.Image, max_dim: int) -> Image.Image:
        """Shrink the image so its longest side is at most ``max_dim``, keeping aspect ratio."""
        w, h = pil_image.size
        if max_dim and max(w, h) > max_dim:
            scale = max_dim / max(w, h)
            new_size = (max(1, int(w * scale)), max(1, int(h * scale)))
            pil_image = pil_image.resize(new_size, Resample.LANCZOS)
        return pil_image

    @staticmethod
    def encode_png(pil_image: Image.Image) -> bytes:
        if pil_image.mode not in ("RGB", "L"):
            pil_image = pil_image.convert("RGB")
        buf = io.BytesIO()
        pil_image.save(buf, format="PNG", optimize=True)
        return buf.getvalue()

    @staticmethod
    def rasterize(path: str, dpi: int = 200, max_dim: int = 2000) -> List[PageImage]:
        """
        Convert every page of ``path`` into a PNG-encoded PageImage, numbered from 1.

        Raises RasterizationError on any failure, including a document with no pages.
        """
        try:
            pil_pages = convert_from_path(path, dpi=dpi)
        except Exception as e:
            log.error(f"💥 Failed to rasterize {path}: {e}")
            raise RasterizationError(f"Failed to convert PDF to images: {e}") from e

        if not pil_pages:
            raise RasterizationError(f"PDF has no pages: {path}")

        pages = []
        try:
            for index, pil_image in enumerate(pil_pages, start=1):
                pil_image = Rasterizer.downscale(pil_image, max_dim)
                pages.append(PageImage(page_number=index, content=Rasterizer.encode_png(pil_image)))
        except Exception as e:
            log.error(f"💥 Failed to encode page {len(pages) + 1} of {path}: {e}")
            raise RasterizationError(f"Failed to encode page image: {e}") from e

        log.info(f"🖼️ Rasterized {len(pages)} page(s) from {path} at {dpi} dpi")
        return pages


rasterize = Rasterizer.rasterize
