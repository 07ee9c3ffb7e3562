from __future__ import annotations
from dataclasses import dataclass
import operator
from typing import ClassVar, Iterable, Iterator, Tuple


CHANNEL_MAX = 255


@dataclass(frozen=True)
class Color:
    """
    Value object: one RGB colour with 8-bit channels (0-255).
    Out-of-range channels are rejected at construction, so any Color
    can be written without clamping.
    """
    red: int
    green: int
    blue: int

    BLACK: ClassVar[Color]
    WHITE: ClassVar[Color]

    def __post_init__(self):
        for name in ("red", "green", "blue"):
            value = getattr(self, name)
            # bool is an int subclass but never a valid channel
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"{name} channel must be an int, got {value!r}")
            if not 0 <= value <= CHANNEL_MAX:
                raise ValueError(f"{name} channel {value} is outside 0-{CHANNEL_MAX}")

    @classmethod
    def from_iterable(cls, values: Iterable[int]) -> Color:
        """Build a Color from any (r, g, b) sequence, e.g. a numpy row."""
        if isinstance(values, Color):
            return values
        if isinstance(values, (str, bytes)):
            raise ValueError(f"expected 3 integer channels, got {values!r}")
        channels = []
        for value in values:
            if isinstance(value, bool):
                raise ValueError(f"channel must be an integer, got {value!r}")
            try:
                # Accepts int and numpy integers, refuses floats instead of truncating
                channels.append(operator.index(value))
            except TypeError:
                raise ValueError(f"channel must be an integer, got {value!r}") from None
        if len(channels) != 3:
            raise ValueError(f"expected 3 channels, got {len(channels)}")
        return cls(*channels)

    def as_tuple(self) -> Tuple[int, int, int]:
        return self.red, self.green, self.blue

    def __iter__(self) -> Iterator[int]:
        return iter(self.as_tuple())


Color.BLACK = Color(0, 0, 0)
Color.WHITE = Color(CHANNEL_MAX, CHANNEL_MAX, CHANNEL_MAX)

BLACK = Color.BLACK
WHITE = Color.WHITE
