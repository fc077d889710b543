"""Image buffer receiving per-pixel colors from the renderer.

The buffer is a Taichi vector field indexed [x, y] with row 0 at the top of
the image. Colors are stored unclamped; conversion to 8-bit scales by 255,
truncates and clamps to [0, 255], which is where out-of-range values from
bright lights are finally cut.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.spheretrace.core.image import Image
    >>> image = Image(4, 3)
    >>> image.set_pixel(1, 2, (1.0, 0.5, 0.0))
    >>> image.set_pixel(10, 10, (1.0, 1.0, 1.0))  # out of bounds, ignored
    >>> image.to_uint8()[2, 1].tolist()
    [255, 127, 0]
"""

import numpy as np
import numpy.typing as npt
import taichi as ti


class Image:
    """A width x height grid of RGB colors.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        pixels: Taichi vector field of shape (width, height) holding the
            linear RGB color of each pixel.
    """

    def __init__(self, width: int, height: int) -> None:
        """Allocate a black image.

        Args:
            width: Image width in pixels.
            height: Image height in pixels.

        Raises:
            ValueError: If either dimension is not positive.
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Image dimensions must be positive, got {width}x{height}")
        self._width = width
        self._height = height
        self.pixels = ti.Vector.field(3, dtype=ti.f32, shape=(width, height))

    @property
    def width(self) -> int:
        """Get the image width."""
        return self._width

    @property
    def height(self) -> int:
        """Get the image height."""
        return self._height

    def in_bounds(self, x: int, y: int) -> bool:
        """Whether (x, y) addresses a pixel of this image."""
        return 0 <= x < self._width and 0 <= y < self._height

    def set_pixel(self, x: int, y: int, color: tuple[float, float, float]) -> None:
        """Store a color. Out-of-bounds coordinates are silently ignored."""
        if self.in_bounds(x, y):
            self.pixels[x, y] = [float(color[0]), float(color[1]), float(color[2])]

    def get_pixel(self, x: int, y: int) -> tuple[float, float, float]:
        """Read a color. Out-of-bounds coordinates read as black."""
        if not self.in_bounds(x, y):
            return (0.0, 0.0, 0.0)
        c = self.pixels[x, y]
        return (float(c[0]), float(c[1]), float(c[2]))

    def fill(self, color: tuple[float, float, float]) -> None:
        """Set every pixel to the same color."""
        self.pixels.fill([float(color[0]), float(color[1]), float(color[2])])

    def clear(self) -> None:
        """Reset every pixel to black."""
        self.pixels.fill(0.0)

    def to_numpy(self) -> npt.NDArray[np.float32]:
        """Get the image as a NumPy array.

        Returns:
            Unclamped float32 array of shape (height, width, 3), row 0 at the top.
        """
        # Transpose from (width, height, 3) to (height, width, 3)
        return np.ascontiguousarray(np.transpose(self.pixels.to_numpy(), (1, 0, 2)))

    def to_uint8(self) -> npt.NDArray[np.uint8]:
        """Get the image as 8-bit RGB.

        Each channel is scaled by 255, truncated toward zero and clamped to
        [0, 255].

        Returns:
            uint8 array of shape (height, width, 3).
        """
        return image_to_uint8(self.to_numpy())

    def __repr__(self) -> str:
        """Return a string representation of the image."""
        return f"Image(width={self._width}, height={self._height})"


def image_to_uint8(image: npt.NDArray[np.floating]) -> npt.NDArray[np.uint8]:
    """Convert a linear float image to 8-bit by scale, truncate and clamp.

    Args:
        image: Float array of shape (H, W, 3), nominally in [0, 1].

    Returns:
        uint8 array of the same shape.
    """
    scaled = np.trunc(np.asarray(image, dtype=np.float64) * 255.0)
    scaled = np.nan_to_num(scaled, nan=0.0)
    return np.clip(scaled, 0, 255).astype(np.uint8)
