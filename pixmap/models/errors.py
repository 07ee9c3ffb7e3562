from __future__ import annotations
from pathlib import Path


class PixmapError(Exception):
    """Base class for every error raised by the pixmap package."""


# ─── Buffer access ────────────────────────────────────────────────────
class PixelOutOfBoundsError(PixmapError, IndexError):
    def __init__(self, x: int, y: int, width: int, height: int):
        self.x = x
        self.y = y
        self.width = width
        self.height = height
        super().__init__(
            f"x={x} y={y} is out of bounds of image with dimensions w={width} h={height}"
        )


# ─── Decoding ─────────────────────────────────────────────────────────
class PpmFormatError(PixmapError, ValueError):
    """
    The input is not a valid 8-bit ASCII PPM.

    Attributes:
        line_number: 1-based line where the problem was found (None if the
            problem is about the file as a whole).
        expected: what the decoder wanted to see.
        actual: what it found instead (None at end of input).
    """
    reason = "invalid PPM"

    def __init__(self, line_number: int | None, expected: object, actual: object):
        self.line_number = line_number
        self.expected = expected
        self.actual = actual
        where = f"line {line_number}: " if line_number is not None else ""
        super().__init__(f"{where}{self.reason}: expected {expected!r}, got {actual!r}")


class BadMagicError(PpmFormatError):
    reason = "wrong magic marker"


class HeaderFormatError(PpmFormatError):
    reason = "malformed dimensions line"


class UnsupportedMaxValueError(PpmFormatError):
    reason = "unsupported max channel value"


class PixelLineError(PpmFormatError):
    reason = "malformed pixel line"


class PixelCountError(PpmFormatError):
    reason = "pixel count does not match dimensions"


class TruncatedPixelDataError(PixelCountError):
    reason = "file ends before all pixels were read"


class ExcessPixelDataError(PixelCountError):
    reason = "more pixel lines than the dimensions allow"


# ─── I/O ──────────────────────────────────────────────────────────────
class PpmIOError(PixmapError, OSError):
    def __init__(self, message: str, cause: BaseException | None = None,
                 path: str | Path | None = None):
        self.cause = cause
        self.path = Path(path) if path is not None else None
        super().__init__(f"{message}: {cause}" if cause is not None else message)


class PpmReadError(PpmIOError):
    pass


class PpmWriteError(PpmIOError):
    """
    Writing a pixmap failed. `x`/`y` name the pixel whose line could not be
    written, or are None when the failure happened outside the pixel body
    (header, flush, rename).
    """

    def __init__(self, message: str, cause: BaseException | None = None,
                 path: str | Path | None = None,
                 x: int | None = None, y: int | None = None):
        self.x = x
        self.y = y
        if x is not None and y is not None:
            message = f"{message} at x={x} y={y}"
        super().__init__(message, cause=cause, path=path)
