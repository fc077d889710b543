"""Matplotlib-based preview display for rendered images.

Images are shown as rendered: clamped to [0, 1] with no tone mapping or
gamma, matching what the exporters write.

Example:
    >>> from src.spheretrace.preview.display import show_comparison
    >>> show_comparison(
    ...     [distance_img, material_img, diffuse_img, final_img],
    ...     ["distance", "materials", "diffuse", "shadows"],
    ... )
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np
import numpy.typing as npt

from src.spheretrace.core.image import Image


def prepare_for_display(image: Image | npt.NDArray[np.float32]) -> npt.NDArray[np.float32]:
    """Convert an image to a (H, W, 3) float32 array clamped to [0, 1]."""
    array = image.to_numpy() if isinstance(image, Image) else np.asarray(image)
    return np.clip(array, 0.0, 1.0).astype(np.float32)


def show_preview(
    image: Image | npt.NDArray[np.float32],
    title: str = "Render",
    block: bool = True,
) -> None:
    """Display a rendered image in a Matplotlib window.

    Args:
        image: The rendered Image or a (H, W, 3) float array.
        title: Window/axes title.
        block: Whether to block until the window is closed.
    """
    import matplotlib.pyplot as plt

    fig, ax = plt.subplots(figsize=(8, 6))
    ax.imshow(prepare_for_display(image))
    ax.set_title(title)
    ax.axis("off")
    fig.tight_layout()
    plt.show(block=block)


def show_comparison(
    images: Sequence[Image | npt.NDArray[np.float32]],
    titles: Sequence[str],
    block: bool = True,
) -> None:
    """Display several images side by side, e.g. the four shading modes.

    Args:
        images: Images to display, left to right.
        titles: One title per image.
        block: Whether to block until the window is closed.

    Raises:
        ValueError: If images and titles differ in length, or are empty.
    """
    if len(images) != len(titles):
        raise ValueError(
            f"Got {len(images)} images but {len(titles)} titles"
        )
    if not images:
        raise ValueError("Nothing to display")

    import matplotlib.pyplot as plt

    fig, axes = plt.subplots(1, len(images), figsize=(4 * len(images), 3.5), squeeze=False)
    for ax, image, title in zip(axes[0], images, titles):
        ax.imshow(prepare_for_display(image))
        ax.set_title(title)
        ax.axis("off")
    fig.tight_layout()
    plt.show(block=block)
