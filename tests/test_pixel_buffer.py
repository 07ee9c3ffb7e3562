import numpy as np
import pytest

from pixmap.models.color import BLACK, Color
from pixmap.models.errors import PixelOutOfBoundsError
from pixmap.models.pixel_buffer import PixelBuffer


def test_create_is_all_black():
    buffer = PixelBuffer.create(4, 3)
    assert (buffer.width, buffer.height) == (4, 3)
    assert len(buffer) == 12
    assert all(color == BLACK for _, _, color in buffer.iter_pixels())


@pytest.mark.parametrize("width,height", [(0, 0), (0, 5), (5, 0)])
def test_create_empty(width, height):
    buffer = PixelBuffer.create(width, height)
    assert len(buffer) == 0
    assert list(buffer.iter_pixels()) == []


def test_create_rejects_negative_dimensions():
    with pytest.raises(ValueError):
        PixelBuffer.create(-1, 2)


def test_set_then_get():
    buffer = PixelBuffer.create(3, 2)
    buffer.set(2, 1, Color(9, 8, 7))
    assert buffer.get(2, 1) == Color(9, 8, 7)
    assert buffer.get(1, 1) == BLACK
    # row-major storage: index y * width + x
    assert tuple(buffer.pixels.reshape(-1, 3)[1 * 3 + 2]) == (9, 8, 7)


def test_set_accepts_plain_tuples_and_validates_them():
    buffer = PixelBuffer.create(1, 1)
    buffer.set(0, 0, (1, 2, 3))
    assert buffer.get(0, 0) == Color(1, 2, 3)
    for bad in [(1, 2, 300), (1.9, 2.7, 3.99), "123", b"\x01\x02\x03", (True, 2, 3)]:
        with pytest.raises(ValueError):
            buffer.set(0, 0, bad)
    assert buffer.get(0, 0) == Color(1, 2, 3)


def test_set_accepts_numpy_integers():
    buffer = PixelBuffer.create(1, 1)
    buffer.set(0, 0, np.array([4, 5, 6], dtype=np.int64))
    assert buffer.get(0, 0) == Color(4, 5, 6)


@pytest.mark.parametrize("x,y", [(4, 0), (0, 3), (4, 3), (-1, 0), (0, -1), (100, 100)])
def test_out_of_bounds(x, y):
    buffer = PixelBuffer.create(4, 3)
    with pytest.raises(PixelOutOfBoundsError) as exc:
        buffer.get(x, y)
    assert (exc.value.x, exc.value.y, exc.value.width, exc.value.height) == (x, y, 4, 3)
    with pytest.raises(PixelOutOfBoundsError):
        buffer.set(x, y, BLACK)


def test_x_past_the_row_does_not_wrap_into_next_row():
    buffer = PixelBuffer.create(2, 2)
    with pytest.raises(PixelOutOfBoundsError):
        buffer.set(2, 0, Color(1, 1, 1))
    assert all(color == BLACK for _, _, color in buffer)


def test_every_in_bounds_coordinate_is_accessible():
    buffer = PixelBuffer.create(3, 4)
    for y in range(4):
        for x in range(3):
            buffer.set(x, y, Color(x, y, 0))
            assert buffer.get(x, y) == Color(x, y, 0)


def test_iteration_is_row_major_and_complete(gradient):
    triples = list(gradient.iter_pixels())
    assert len(triples) == 15
    assert [(x, y) for x, y, _ in triples] == [(x, y) for y in range(3) for x in range(5)]
    for x, y, color in triples:
        assert color == gradient.get(x, y)


def test_iteration_is_restartable(gradient):
    assert list(gradient) == list(gradient.iter_pixels()) == list(iter(gradient))


def test_mutation_never_resizes(gradient):
    before = gradient.pixels.shape
    gradient.set(4, 2, Color(1, 1, 1))
    assert gradient.pixels.shape == before
    assert len(gradient) == 15


def test_from_array_and_equality():
    arr = np.arange(2 * 3 * 3).reshape(2, 3, 3)
    buffer = PixelBuffer.from_array(arr)
    assert (buffer.width, buffer.height) == (3, 2)
    assert buffer.get(1, 0) == Color(3, 4, 5)
    assert buffer == buffer.copy()
    other = buffer.copy()
    other.set(0, 0, Color(255, 255, 255))
    assert buffer != other
    assert buffer.get(0, 0) == Color(0, 1, 2)


@pytest.mark.parametrize("arr", [np.zeros((2, 2)), np.zeros((2, 2, 4)), np.full((1, 1, 3), 256)])
def test_from_array_rejects_bad_input(arr):
    with pytest.raises(ValueError):
        PixelBuffer.from_array(arr)
