"""Spatial derivatives used for sub-pixel refinement."""
import numpy as np


def image_gradient(im):
    """Compute the intensity gradient of an image.

    Central differences in the interior and one-sided differences on the
    first/last row and column, matching MATLAB's gradient(). An axis of
    length 1 has zero derivative.

    Args:
        im: Input image (H, W).

    Returns:
        gy: Vertical derivative dI/drow (H, W).
        gx: Horizontal derivative dI/dcol (H, W).
    """
    im = np.asarray(im, dtype=float)
    gy = np.gradient(im, axis=0) if im.shape[0] > 1 else np.zeros_like(im)
    gx = np.gradient(im, axis=1) if im.shape[1] > 1 else np.zeros_like(im)
    return gy, gx
