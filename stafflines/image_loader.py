"""Decodes a scanned page into a grayscale pixel grid with Pillow."""

from __future__ import annotations

import logging
import os
from pathlib import Path

import numpy as np
from PIL import Image, UnidentifiedImageError

logger = logging.getLogger(__name__)

# Pillow mode for 8-bit grayscale (0 = black, 255 = white)
GRAYSCALE_MODE = "L"
MAX_INTENSITY = 255


def load_pixel_grid(image_path: str | os.PathLike[str], invert: bool = False) -> np.ndarray:
    """
    Load an image file as a 2-D array of 8-bit grayscale intensities.

    Colour and palette images are converted to grayscale, so ink is dark
    (low values) on a light background, as the line detector expects.

    Args:
        image_path: Path to any image format Pillow can decode (PNG, TIFF, ...).
        invert:     Flip intensities for light-on-dark scans.

    Returns:
        ``uint8`` array of shape (height, width).

    Raises:
        FileNotFoundError: If *image_path* does not exist.
        ValueError:        If the file is not a decodable image.
    """
    path = Path(image_path)
    if not path.is_file():
        raise FileNotFoundError(f"Image file not found at '{path}'.")

    try:
        with Image.open(path) as img:
            pixels = np.asarray(img.convert(GRAYSCALE_MODE), dtype=np.uint8)
    except UnidentifiedImageError as exc:
        raise ValueError(f"'{path}' is not a readable image.") from exc

    if invert:
        pixels = MAX_INTENSITY - pixels

    logger.debug(f"Loaded {path} as a {pixels.shape[1]}x{pixels.shape[0]} grayscale grid")
    return pixels
