from __future__ import annotations

from pathlib import Path
from typing import IO, Iterable, Iterator, Tuple, Union
import io
import logging
import os

import numpy as np
from dotenv import load_dotenv

from ..models.color import CHANNEL_MAX
from ..models.errors import (
    BadMagicError,
    ExcessPixelDataError,
    HeaderFormatError,
    PixelLineError,
    PpmReadError,
    PpmWriteError,
    TruncatedPixelDataError,
    UnsupportedMaxValueError,
)
from ..models.pixel_buffer import PixelBuffer

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)

MAGIC = "P3"
MAX_VALUE = str(CHANNEL_MAX)
DIGITS = frozenset("0123456789")

PathLike = Union[str, Path]


def _parse_uint(token: str) -> int | None:
    """Strict unsigned decimal: digits only, no sign, no blanks, no underscores."""
    if not token or not set(token) <= DIGITS:
        return None
    return int(token)


def _split(line: str, count: int) -> list[int] | None:
    tokens = line.split(" ")
    if len(tokens) != count:
        return None
    values = [_parse_uint(t) for t in tokens]
    if any(v is None for v in values):
        return None
    return values


def _numbered_lines(stream: IO) -> Iterator[Tuple[int, str]]:
    """
    Yield (line_number, line) with the newline stripped. Bytes are decoded as
    ASCII; undecodable bytes become U+FFFD and fail token validation.
    """
    for number, raw in enumerate(stream, start=1):
        if isinstance(raw, bytes):
            raw = raw.decode("ascii", errors="replace")
        yield number, raw[:-1] if raw.endswith("\n") else raw


class PpmRepository:
    """
    Handles file I/O for PixelBuffer entities in the ASCII PPM (P3) format.

    Writes are crash-safe: the full payload goes to a sibling temp file which
    is renamed onto the destination only once everything has been written.
    """

    def __init__(self, temp_suffix: str | None = None, fsync: bool | None = None):
        if temp_suffix is None:
            temp_suffix = os.getenv("PIXMAP_TEMP_SUFFIX", ".tmp")
        # An empty suffix would make the temp file the destination itself
        if not temp_suffix.strip():
            raise ValueError("temp suffix must not be empty")
        self.temp_suffix = temp_suffix
        if fsync is None:
            fsync = os.getenv("PIXMAP_FSYNC", "1").strip().lower() not in {"0", "false", "no"}
        self.fsync = fsync

    # ─── Decoding ────────────────────────────────────────────────────
    @staticmethod
    def decode(stream: IO) -> PixelBuffer:
        """
        Parse a P3 pixmap from a text or binary stream.

        Raises a PpmFormatError subclass on the first violation; no partial
        buffer is ever returned.
        """
        lines = _numbered_lines(stream)

        number, line = next(lines, (1, None))
        if line != MAGIC:
            raise BadMagicError(number, MAGIC, line)

        number, line = next(lines, (2, None))
        dims = _split(line, 2) if line is not None else None
        if dims is None:
            raise HeaderFormatError(number, "<width> <height>", line)
        width, height = dims

        number, line = next(lines, (3, None))
        if line != MAX_VALUE:
            raise UnsupportedMaxValueError(number, MAX_VALUE, line)

        expected = width * height
        data = bytearray()
        count = 0
        for number, line in lines:
            channels = _split(line, 3)
            if channels is None or max(channels) > CHANNEL_MAX:
                raise PixelLineError(number, "<red> <green> <blue> in 0-255", line)
            if count == expected:
                raise ExcessPixelDataError(number, expected, count + 1)
            data.extend(channels)
            count += 1

        if count < expected:
            raise TruncatedPixelDataError(None, expected, count)

        logger.debug(f"Decoded {width}x{height} pixmap")
        pixels = np.frombuffer(data, dtype=np.uint8).reshape(height, width, 3)
        return PixelBuffer(pixels.copy())

    def loads(self, text: str) -> PixelBuffer:
        return self.decode(io.StringIO(text))

    def load(self, path: PathLike) -> PixelBuffer:
        """Load a .ppm file from disk into a PixelBuffer."""
        path = Path(path)
        try:
            with open(path, "r", encoding="ascii", errors="replace", newline="\n") as fh:
                buffer = self.decode(fh)
        except OSError as err:
            raise PpmReadError(f"failed to read {path}", cause=err, path=path) from err
        buffer.path = path
        logger.info(f"Loaded {buffer.width}x{buffer.height} pixmap from {path}")
        return buffer

    # ─── Encoding ────────────────────────────────────────────────────
    @staticmethod
    def header_lines(buffer: PixelBuffer) -> Iterable[str]:
        return (f"{MAGIC}\n", f"{buffer.width} {buffer.height}\n", f"{MAX_VALUE}\n")

    @classmethod
    def encode(cls, buffer: PixelBuffer, stream: IO[str]) -> None:
        """
        Write the P3 text of `buffer` to an open text stream.

        Raises PpmWriteError naming the pixel whose line failed to write.
        """
        try:
            for line in cls.header_lines(buffer):
                stream.write(line)
        except OSError as err:
            raise PpmWriteError("failed to write header", cause=err) from err

        for x, y, color in buffer.iter_pixels():
            try:
                stream.write(f"{color.red} {color.green} {color.blue}\n")
            except OSError as err:
                raise PpmWriteError("failed to write pixel", cause=err, x=x, y=y) from err

    def dumps(self, buffer: PixelBuffer) -> str:
        out = io.StringIO()
        self.encode(buffer, out)
        return out.getvalue()

    def temp_path_for(self, path: PathLike) -> Path:
        path = Path(path)
        if not path.suffix:
            raise ValueError(f"destination needs a file extension: {path}")
        return path.with_suffix(path.suffix + self.temp_suffix)

    @staticmethod
    def _discard_handle(fh: IO[str]) -> None:
        """Close a temp file whose write already failed; that failure is the one reported."""
        try:
            fh.close()
        except OSError as err:
            logger.debug(f"Ignoring close error on failed temp file: {err}")

    def save(self, buffer: PixelBuffer, path: PathLike | None = None) -> Path:
        """
        Write `buffer` to `path` (defaults to buffer.path) crash-safely.

        The destination is only replaced by the final rename; if anything
        fails before that, the temp file stays behind and the destination
        keeps its previous contents.
        """
        path = Path(path) if path is not None else buffer.path
        if path is None:
            raise ValueError("no destination path given and buffer has no path")
        tmp_path = self.temp_path_for(path)

        try:
            fh = open(tmp_path, "w", encoding="ascii", newline="\n")
        except OSError as err:
            raise PpmWriteError(f"failed to create {tmp_path}", cause=err, path=tmp_path) from err

        # close() flushes again, so it has to sit inside the guarded block too
        try:
            self.encode(buffer, fh)
            fh.flush()
            if self.fsync:
                os.fsync(fh.fileno())
            fh.close()
        except PpmWriteError as err:
            err.path = tmp_path
            raise
        except OSError as err:
            raise PpmWriteError(f"failed to finish writing {tmp_path}", cause=err, path=tmp_path) from err
        finally:
            if not fh.closed:
                self._discard_handle(fh)

        try:
            os.replace(tmp_path, path)
        except OSError as err:
            raise PpmWriteError(f"failed to rename {tmp_path} to {path}", cause=err, path=path) from err

        buffer.path = path
        logger.info(f"Saved {buffer.width}x{buffer.height} pixmap to {path}")
        return path
