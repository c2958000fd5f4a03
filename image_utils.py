"""
Image helpers backed by OpenCV.
Loading, channel normalization, resizing, grayscale and luminance.
All images are numpy arrays of shape (H, W, 3), dtype uint8, RGB order.
"""

import logging
from typing import Tuple

import cv2
import numpy as np
from PIL import Image

from pixel_extractor import EmptyImageError

logger = logging.getLogger(__name__)

# ITU-R BT.601 luma weights
LUMA_R = 0.299
LUMA_G = 0.587
LUMA_B = 0.114


def load_image(path: str) -> np.ndarray:
    """Read an image file as RGB uint8."""
    img = cv2.imread(str(path), cv2.IMREAD_COLOR)
    if img is None:
        raise FileNotFoundError(f"Failed to read image: {path}")
    return cv2.cvtColor(img, cv2.COLOR_BGR2RGB)


def as_rgb(image) -> np.ndarray:
    """
    Normalize an image to an RGB uint8 array.

    Args:
        image: numpy array (H, W), (H, W, 3) or (H, W, 4), or a PIL image.
               Float arrays with all values in [0, 1] are scaled by 255;
               other non-uint8 arrays are clipped to [0, 255].

    Returns:
        Array of shape (H, W, 3), dtype uint8

    Raises:
        EmptyImageError: If the image has no pixels
    """
    if isinstance(image, Image.Image):
        image = np.asarray(image.convert("RGB"))
    img = np.asarray(image)

    if img.size == 0 or img.ndim not in (2, 3):
        raise EmptyImageError()
    if img.dtype != np.uint8:
        is_float = np.issubdtype(img.dtype, np.floating)
        img = img.astype(np.float64)
        # float images in [0, 1] use the skimage / matplotlib convention
        if is_float and img.min() >= 0.0 and img.max() <= 1.0:
            img = img * 255.0
        img = np.rint(np.clip(img, 0, 255)).astype(np.uint8)
    img = np.ascontiguousarray(img)

    if img.ndim == 2:
        img = cv2.cvtColor(img, cv2.COLOR_GRAY2RGB)
    elif img.shape[2] == 1:
        img = cv2.cvtColor(np.ascontiguousarray(img[:, :, 0]), cv2.COLOR_GRAY2RGB)
    elif img.shape[2] == 4:
        img = img[:, :, :3]
    return np.ascontiguousarray(img)


def image_size(image: np.ndarray) -> Tuple[int, int]:
    """Return (width, height)."""
    h, w = image.shape[:2]
    return w, h


def rgb_bytes(image: np.ndarray) -> bytes:
    """Row-major R, G, B bytes of an image."""
    return as_rgb(image).tobytes()


def resize(image: np.ndarray, width: int, height: int) -> np.ndarray:
    """Resize to exactly width x height."""
    w, h = image_size(image)
    if (w, h) == (width, height):
        return image
    logger.debug("resizing image from %dx%d to %dx%d", w, h, width, height)
    return cv2.resize(image, (width, height), interpolation=cv2.INTER_AREA)


def grayscale(image: np.ndarray) -> np.ndarray:
    """Luminance image with all three channels equal."""
    gray = cv2.cvtColor(as_rgb(image), cv2.COLOR_RGB2GRAY)
    return cv2.cvtColor(gray, cv2.COLOR_GRAY2RGB)


def luminance(r: int, g: int, b: int) -> int:
    """Perceptual luminance of one RGB triple, rounded half up."""
    return int(np.floor(LUMA_R * r + LUMA_G * g + LUMA_B * b + 0.5))


def luminance_array(pixels: np.ndarray) -> np.ndarray:
    """Vectorized luminance() over an (n, 3) pixel array."""
    pixels = np.asarray(pixels, dtype=np.float64)
    lum = LUMA_R * pixels[:, 0] + LUMA_G * pixels[:, 1] + LUMA_B * pixels[:, 2]
    return np.floor(lum + 0.5)
