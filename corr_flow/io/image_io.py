"""Load grayscale frames for flow estimation."""
import numpy as np
from PIL import Image

# Luminance weights, as in MATLAB's rgb2gray
_GRAY_WEIGHTS = np.array([0.2989, 0.5870, 0.1140])


def read_gray_image(filename):
    """Read an image file as a float64 grayscale array.

    RGB(A) images are reduced to luminance; pixel values keep their
    original range (0..255 for 8-bit files).

    Args:
        filename: Path to an image readable by Pillow.

    Returns:
        im: (H, W) float64 array.
    """
    with Image.open(filename) as img:
        if img.mode == 'LA':
            img = img.convert('L')
        elif img.mode not in ('1', 'L', 'I', 'I;16', 'F'):
            img = img.convert('RGB')
        im = np.array(img).astype(np.float64)

    if im.ndim == 3:
        im = im[:, :, :3] @ _GRAY_WEIGHTS
    return im


def read_image_pair(filename1, filename2):
    """Read two frames as grayscale float64 arrays.

    Returns:
        im1, im2: (H, W) arrays.
    """
    return read_gray_image(filename1), read_gray_image(filename2)
