import pytest

from pixmap.models.color import Color
from pixmap.models.pixel_buffer import PixelBuffer
from pixmap.repositories.ppm_repository import PpmRepository

RED = Color(255, 0, 0)
GREEN = Color(0, 255, 0)

TWO_BY_ONE = "P3\n2 1\n255\n255 0 0\n0 255 0\n"


@pytest.fixture
def repo(monkeypatch):
    # Keep the suite independent from a developer's .env
    monkeypatch.delenv("PIXMAP_TEMP_SUFFIX", raising=False)
    monkeypatch.delenv("PIXMAP_FSYNC", raising=False)
    return PpmRepository()


@pytest.fixture
def red_green():
    buffer = PixelBuffer.create(2, 1)
    buffer.set(0, 0, RED)
    buffer.set(1, 0, GREEN)
    return buffer


@pytest.fixture
def gradient():
    """5x3 buffer where every pixel is distinct."""
    buffer = PixelBuffer.create(5, 3)
    for y in range(3):
        for x in range(5):
            buffer.set(x, y, Color(x * 50, y * 100, (x + y) * 20))
    return buffer
