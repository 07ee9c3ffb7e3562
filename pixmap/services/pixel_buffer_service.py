from __future__ import annotations
from pathlib import Path
from typing import Iterator, Union
import logging

import numpy as np
from PIL import Image as PILImage

from ..models.color import Color
from ..models.pixel_buffer import ColorLike, Pixel, PixelBuffer
from ..repositories.ppm_repository import PpmRepository

logger = logging.getLogger(__name__)

PPM_SUFFIXES = {".ppm", ".pnm"}


class PixelBufferService:
    """Business-level access to pixel buffers. All file formats go through here."""

    def __init__(self, ppm_repository: PpmRepository | None = None):
        self.ppm_repository = ppm_repository or PpmRepository()

    def create(self, width: int, height: int) -> PixelBuffer:
        return PixelBuffer.create(width, height)

    def get(self, buffer: PixelBuffer, x: int, y: int) -> Color:
        return buffer.get(x, y)

    def set(self, buffer: PixelBuffer, x: int, y: int, color: ColorLike) -> None:
        buffer.set(x, y, color)

    def iterate(self, buffer: PixelBuffer) -> Iterator[Pixel]:
        return buffer.iter_pixels()

    def fill(self, buffer: PixelBuffer, color: ColorLike) -> None:
        """Overwrite every pixel with one colour."""
        buffer.pixels[:, :] = Color.from_iterable(color).as_tuple()

    # ─── P3 files ────────────────────────────────────────────────────
    def load(self, path: Union[str, Path]) -> PixelBuffer:
        """Load a single P3 pixmap from disk."""
        return self.ppm_repository.load(path)

    def save(self, buffer: PixelBuffer, path: Union[str, Path, None] = None) -> Path:
        """Crash-safe save of a buffer as P3."""
        return self.ppm_repository.save(buffer, path)

    # ─── Pillow interop ──────────────────────────────────────────────
    def to_pil_image(self, buffer: PixelBuffer) -> PILImage.Image:
        """
        Convert PixelBuffer.pixels → PIL Image object (RGB).
        Ensures the NumPy array is C-contiguous.
        """
        np_img = buffer.pixels
        if not np_img.flags['C_CONTIGUOUS']:
            np_img = np.ascontiguousarray(np_img)
        return PILImage.fromarray(np_img)

    def from_pil_image(self, image: PILImage.Image, path: Union[str, Path, None] = None) -> PixelBuffer:
        if image.mode != "RGB":
            image = image.convert("RGB")
        return PixelBuffer.from_array(np.asarray(image), path)

    def import_image(self, path: Union[str, Path]) -> PixelBuffer:
        """
        Load any image into a buffer. P3 files use our decoder, everything
        else is read through Pillow.
        """
        path = Path(path)
        if path.suffix.lower() in PPM_SUFFIXES:
            return self.load(path)
        with PILImage.open(path) as img:
            buffer = self.from_pil_image(img, path)
        logger.info(f"Imported {buffer.width}x{buffer.height} image from {path}")
        return buffer

    def export_image(self, buffer: PixelBuffer, path: Union[str, Path]) -> Path:
        """Write .ppm as crash-safe P3, any other extension through Pillow."""
        path = Path(path)
        if path.suffix.lower() in PPM_SUFFIXES:
            return self.save(buffer, path)
        self.to_pil_image(buffer).save(path)
        logger.info(f"Exported {buffer.width}x{buffer.height} image to {path}")
        return path
