"""Preview module for output and visualization.

Components:
    export: PPM/PNG image export
    display: Matplotlib-based preview windows

Example:
    >>> from src.spheretrace.preview import save_image, show_preview
    >>> save_image(image, "output_final.png")
    >>> show_preview(image, title="shadows")
"""

from src.spheretrace.preview.display import (
    prepare_for_display,
    show_comparison,
    show_preview,
)
from src.spheretrace.preview.export import (
    SUPPORTED_FORMATS,
    compute_rmse,
    ppm_text,
    save_image,
    save_png,
    save_png_from_array,
    save_ppm,
)

__all__ = [
    # Display functions
    "show_preview",
    "show_comparison",
    "prepare_for_display",
    # Export functions
    "save_image",
    "save_ppm",
    "save_png",
    "save_png_from_array",
    "ppm_text",
    "compute_rmse",
    "SUPPORTED_FORMATS",
]
