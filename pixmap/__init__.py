from .models.color import BLACK, WHITE, Color
from .models.errors import (
    BadMagicError,
    ExcessPixelDataError,
    HeaderFormatError,
    PixelCountError,
    PixelLineError,
    PixelOutOfBoundsError,
    PixmapError,
    PpmFormatError,
    PpmIOError,
    PpmReadError,
    PpmWriteError,
    TruncatedPixelDataError,
    UnsupportedMaxValueError,
)
from .models.pixel_buffer import PixelBuffer
from .repositories.ppm_repository import PpmRepository
from .services.pixel_buffer_service import PixelBufferService

__version__ = "1.0.0"
