"""RGB colour value type.

Colours are immutable triples of floats. Channels are not clamped while
shading so that light contributions can accumulate freely; clipped() brings
the final value back into the displayable [0, 1] range.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
import numpy.typing as npt


@dataclass(frozen=True)
class Colour:
    """An RGB colour with float channels.

    Supports component-wise addition and multiplication with
    another Colour, scaling by a scalar, and division by a scalar.

    Attributes:
        red: Red channel.
        green: Green channel.
        blue: Blue channel.
    """

    red: float = 0.0
    green: float = 0.0
    blue: float = 0.0

    @classmethod
    def from_sequence(cls, values: npt.ArrayLike) -> Colour:
        """Build a colour from any three-element sequence.

        Raises:
            ValueError: If the sequence does not have exactly three elements.
        """
        channels = np.asarray(values, dtype=np.float64).reshape(-1)
        if channels.shape != (3,):
            raise ValueError(f"Colour needs 3 channels, got {channels.shape[0]}")
        return cls(float(channels[0]), float(channels[1]), float(channels[2]))

    def __add__(self, other: Colour) -> Colour:
        return Colour(self.red + other.red, self.green + other.green, self.blue + other.blue)

    def __mul__(self, other: Colour | float) -> Colour:
        if isinstance(other, Colour):
            return Colour(
                self.red * other.red,
                self.green * other.green,
                self.blue * other.blue,
            )
        scale = float(other)
        return Colour(self.red * scale, self.green * scale, self.blue * scale)

    __rmul__ = __mul__

    def __truediv__(self, scale: float) -> Colour:
        if scale == 0:
            raise ZeroDivisionError("Cannot divide a colour by zero")
        return Colour(self.red / scale, self.green / scale, self.blue / scale)

    def clipped(self) -> Colour:
        """Clamp every channel into [0, 1]."""
        return Colour(
            min(max(self.red, 0.0), 1.0),
            min(max(self.green, 0.0), 1.0),
            min(max(self.blue, 0.0), 1.0),
        )

    def is_black(self) -> bool:
        """Check whether every channel is exactly zero."""
        return self.red == 0.0 and self.green == 0.0 and self.blue == 0.0

    def as_tuple(self) -> tuple[float, float, float]:
        """Return the channels as a (red, green, blue) tuple."""
        return (self.red, self.green, self.blue)

    def as_array(self) -> npt.NDArray[np.float32]:
        """Return the channels as a float32 array, ready for a frame buffer."""
        return np.array(self.as_tuple(), dtype=np.float32)


BLACK = Colour(0.0, 0.0, 0.0)
WHITE = Colour(1.0, 1.0, 1.0)
