"""Frame buffer for rendered images.

The RenderTarget stores one RGB colour per pixel in a Taichi vector field
indexed (x, y), with y = 0 the top row of the image. Rows are written as
whole NumPy arrays through a Taichi kernel that clips every channel into
[0, 1], so the buffer always holds displayable values.

Example:
    >>> import numpy as np
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from csgtrace.core.render_target import RenderTarget
    >>> target = RenderTarget(4, 2)
    >>> target.store_row(0, np.ones((4, 3), dtype=np.float32) * 2.0)
    >>> target.get_image_numpy()[0, 0].tolist()
    [1.0, 1.0, 1.0]
"""

import numpy as np
import numpy.typing as npt
import taichi as ti
import taichi.math as tm

from csgtrace.core.colour import Colour

# =============================================================================
# Render Target Limits
# =============================================================================

# Maximum supported image dimensions
MAX_IMAGE_WIDTH = 4096
MAX_IMAGE_HEIGHT = 4096

# Grey shown in pixels that have not been rendered yet
DEFAULT_FILL = Colour(0.5, 0.5, 0.5)


@ti.kernel
def _store_row_kernel(buffer: ti.template(), y: ti.i32, row: ti.types.ndarray()):
    for x in range(row.shape[0]):
        colour = tm.vec3(row[x, 0], row[x, 1], row[x, 2])
        buffer[x, y] = tm.clamp(colour, 0.0, 1.0)


@ti.kernel
def _fill_kernel(buffer: ti.template(), red: ti.f32, green: ti.f32, blue: ti.f32):
    for x, y in buffer:
        buffer[x, y] = tm.vec3(red, green, blue)


class RenderTarget:
    """A width x height RGB frame buffer backed by a Taichi field.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
    """

    def __init__(self, width: int, height: int, fill: Colour = DEFAULT_FILL) -> None:
        """Allocate the buffer and fill it with a colour.

        Raises:
            ValueError: If a dimension is not positive or exceeds the
                supported maximum.
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Image dimensions must be positive, got {width}x{height}")
        if width > MAX_IMAGE_WIDTH or height > MAX_IMAGE_HEIGHT:
            raise ValueError(
                f"Image dimensions ({width}x{height}) exceed maximum supported "
                f"({MAX_IMAGE_WIDTH}x{MAX_IMAGE_HEIGHT})"
            )
        self.width = width
        self.height = height
        self._buffer = ti.Vector.field(3, dtype=ti.f32, shape=(width, height))
        self.fill(fill)

    @property
    def field(self) -> ti.MatrixField:
        """The underlying (width, height) Taichi vector field."""
        return self._buffer

    def fill(self, colour: Colour) -> None:
        """Set every pixel to a colour."""
        _fill_kernel(self._buffer, colour.red, colour.green, colour.blue)

    def store_row(self, y: int, row: npt.ArrayLike) -> None:
        """Write one image row, clipping channels into [0, 1].

        Args:
            y: Row index, 0 being the top of the image.
            row: Array of shape (width, 3).

        Raises:
            IndexError: If y is outside the image.
            ValueError: If the row has the wrong shape.
        """
        if not 0 <= y < self.height:
            raise IndexError(f"Row {y} outside image of height {self.height}")
        data = np.ascontiguousarray(row, dtype=np.float32)
        if data.shape != (self.width, 3):
            raise ValueError(f"Row must have shape ({self.width}, 3), got {data.shape}")
        _store_row_kernel(self._buffer, y, data)

    def get_pixel(self, x: int, y: int) -> Colour:
        """Read back a single pixel."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Pixel ({x}, {y}) outside {self.width}x{self.height} image")
        value = self._buffer[x, y]
        return Colour(float(value[0]), float(value[1]), float(value[2]))

    def get_image_numpy(self) -> npt.NDArray[np.float32]:
        """Get the image as a NumPy array.

        Returns:
            Array of shape (height, width, 3), dtype float32, row 0 at the
            top of the image.
        """
        image = self._buffer.to_numpy()
        # Transpose from (width, height, 3) to (height, width, 3)
        image = np.transpose(image, (1, 0, 2))
        return np.ascontiguousarray(image, dtype=np.float32)

    def get_image_uint8(self) -> npt.NDArray[np.uint8]:
        """Get the image quantised to 8 bits per channel as int(255 * c)."""
        return (self.get_image_numpy() * 255).astype(np.uint8)
