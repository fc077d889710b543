"""Image export utilities for rendered images.

Supported formats:
    - PPM (plain-text P3, no external dependency)
    - PNG (8-bit RGB via Pillow)

Both formats convert colors the same way: scale by 255, truncate, clamp to
[0, 255]. No tone mapping or gamma is applied, so values above 1.0 clip.

Example:
    >>> from src.spheretrace.preview.export import save_image
    >>> save_image(image, "output_final.ppm")
    >>> save_image(image, "output_final.png")
"""

from __future__ import annotations

from pathlib import Path

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

from src.spheretrace.core.image import Image, image_to_uint8

SUPPORTED_FORMATS = ("ppm", "png")


def ppm_text(image: Image) -> str:
    """Serialize an image as plain-text PPM (P3).

    The header is ``P3``, ``width height`` and ``255``. Each image row is
    written on one line as ``r g b `` triples, top row first.

    Args:
        image: The image to serialize.

    Returns:
        The PPM file contents.
    """
    pixels = image.to_uint8()
    lines = ["P3", f"{image.width} {image.height}", "255"]
    for row in pixels:
        lines.append("".join(f"{r} {g} {b} " for r, g, b in row.tolist()))
    return "\n".join(lines) + "\n"


def save_ppm(image: Image, filepath: str | Path) -> None:
    """Save the image as a plain-text PPM file.

    Args:
        image: The image to save.
        filepath: Output file path (should end in .ppm).
    """
    with open(filepath, "w", encoding="ascii") as f:
        f.write(ppm_text(image))


def save_png(image: Image, filepath: str | Path) -> None:
    """Save the image as an 8-bit RGB PNG file.

    Args:
        image: The image to save.
        filepath: Output file path (should end in .png).
    """
    save_png_from_array(image.to_numpy(), filepath)


def save_png_from_array(image: npt.NDArray[np.float32], filepath: str | Path) -> None:
    """Save a float RGB array of shape (H, W, 3) as a PNG file."""
    pil_image = PILImage.fromarray(image_to_uint8(image))
    pil_image.save(filepath)


def save_image(image: Image, filepath: str | Path) -> Path:
    """Save the image, choosing the format from the file suffix.

    Args:
        image: The image to save.
        filepath: Output path ending in .ppm or .png.

    Returns:
        The output path.

    Raises:
        ValueError: If the suffix is not a supported format.
    """
    path = Path(filepath)
    fmt = path.suffix.lower().lstrip(".")
    if fmt == "ppm":
        save_ppm(image, path)
    elif fmt == "png":
        save_png(image, path)
    else:
        raise ValueError(
            f"Unsupported image format '{path.suffix}'. Supported: {', '.join(SUPPORTED_FORMATS)}"
        )
    return path


def compute_rmse(
    image_a: npt.NDArray[np.floating[npt.NBitBase]],
    image_b: npt.NDArray[np.floating[npt.NBitBase]],
) -> float:
    """Compute root mean squared error between two images.

    Args:
        image_a: First image array.
        image_b: Second image array (must have same shape as image_a).

    Returns:
        RMSE value (lower is more similar).

    Raises:
        ValueError: If image shapes don't match.
    """
    if image_a.shape != image_b.shape:
        raise ValueError(
            f"Image shapes must match: {image_a.shape} vs {image_b.shape}"
        )

    diff = image_a.astype(np.float64) - image_b.astype(np.float64)
    return float(np.sqrt(np.mean(diff**2)))
