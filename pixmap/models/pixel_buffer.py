from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, Tuple, Union
import numpy as np

from .color import Color
from .errors import PixelOutOfBoundsError

ColorLike = Union[Color, Iterable[int]]
Pixel = Tuple[int, int, Color]


@dataclass(eq=False)
class PixelBuffer:
    """
    Rectangular grid of RGB pixels (+ optional path for bookkeeping).

    Pixels live in a numpy array of shape (H, W, 3), dtype uint8, so the
    row-major flat index y * width + x is simply pixels[y, x]. Mutation only
    ever replaces existing slots; the array is never resized.
    """
    pixels: np.ndarray  # Shape (H, W, 3), dtype uint8, RGB order.
    path: Path | None = None  # Where the buffer was loaded from / saved to.

    def __post_init__(self):
        if self.pixels.ndim != 3 or self.pixels.shape[2] != 3:
            raise ValueError(f"pixels must have shape (H, W, 3), got {self.pixels.shape}")
        if self.pixels.dtype != np.uint8:
            raise ValueError(f"pixels must be uint8, got {self.pixels.dtype}")
        if self.path is not None:
            self.path = Path(self.path)

    # ─── Construction ────────────────────────────────────────────────
    @classmethod
    def create(cls, width: int, height: int) -> PixelBuffer:
        """All-black buffer. Zero-sized dimensions give an empty buffer."""
        if width < 0 or height < 0:
            raise ValueError(f"dimensions must be non-negative, got {width}x{height}")
        return cls(np.zeros((height, width, 3), dtype=np.uint8))

    @classmethod
    def from_array(cls, array, path: str | Path | None = None) -> PixelBuffer:
        """
        Wrap an (H, W, 3) array. Values must already be in 0-255; nothing is
        clamped or rescaled.
        """
        arr = np.asarray(array)
        if arr.ndim != 3 or arr.shape[2] != 3:
            raise ValueError(f"expected an (H, W, 3) array, got shape {arr.shape}")
        if arr.size and (arr.min() < 0 or arr.max() > 255):
            raise ValueError("channel values must be within 0-255")
        return cls(np.array(arr, dtype=np.uint8, order="C"), path)

    # ─── Dimensions ──────────────────────────────────────────────────
    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    @property
    def shape(self) -> Tuple[int, int]:
        return self.pixels.shape[:2]

    def __len__(self) -> int:
        return self.width * self.height

    # ─── Pixel access ────────────────────────────────────────────────
    def _check_bounds(self, x: int, y: int) -> None:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise PixelOutOfBoundsError(x, y, self.width, self.height)

    def get(self, x: int, y: int) -> Color:
        self._check_bounds(x, y)
        return Color.from_iterable(self.pixels[y, x])

    def set(self, x: int, y: int, color: ColorLike) -> None:
        self._check_bounds(x, y)
        # Validates channel range before touching the array
        self.pixels[y, x] = Color.from_iterable(color).as_tuple()

    # ─── Iteration ───────────────────────────────────────────────────
    def iter_pixels(self) -> Iterator[Pixel]:
        """
        Yield (x, y, color) for every pixel in row-major order.
        Each call starts a fresh pass.
        """
        width = self.width
        flat = self.pixels.reshape(-1, 3)
        for i in range(len(self)):
            r, g, b = flat[i]
            yield i % width, i // width, Color(int(r), int(g), int(b))

    def __iter__(self) -> Iterator[Pixel]:
        return self.iter_pixels()

    # ─── Helpers ─────────────────────────────────────────────────────
    def copy(self) -> PixelBuffer:
        return PixelBuffer(self.pixels.copy(), self.path)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PixelBuffer):
            return NotImplemented
        return self.shape == other.shape and np.array_equal(self.pixels, other.pixels)

    def __repr__(self) -> str:
        return f"PixelBuffer(width={self.width}, height={self.height}, path={self.path!r})"
