"""Image loading and pixel sampling.

Decodes an image with PIL, drops alpha, downsamples it to at most
max_width pixels wide (aspect ratio kept, never upscaled) and returns
every pixel of the result as an RGB sample in row-major order.
"""

import os

import numpy as np
from PIL import Image

from palette_tool.core.errors import InvalidInput
from palette_tool.core.types import SampledImage

DEFAULT_MAX_WIDTH = 200


def downsample(image: Image.Image, max_width: int = DEFAULT_MAX_WIDTH) -> Image.Image:
    """Scale image down to max_width, keeping aspect ratio. Smaller images pass through."""
    if max_width < 1:
        raise InvalidInput(f'max_width must be >= 1, got {max_width}')
    image = image.convert('RGB')
    if image.width <= max_width:
        return image
    scale = max_width / image.width
    height = max(1, round(image.height * scale))
    return image.resize((max_width, height), Image.Resampling.BILINEAR)


def samples_from_image(image: Image.Image) -> np.ndarray:
    """(N, 3) uint8 array of the image's RGB pixels."""
    return np.asarray(image.convert('RGB'), dtype=np.uint8).reshape(-1, 3)


def sample_image(path: str, max_width: int = DEFAULT_MAX_WIDTH) -> SampledImage:
    """Open path and sample it for quantization."""
    if not os.path.isfile(path):
        raise FileNotFoundError(f'image not found: {path}')
    with Image.open(path) as img:
        small = downsample(img, max_width)
    return SampledImage(
        path=path,
        width=small.width,
        height=small.height,
        samples=samples_from_image(small),
    )
