"""Image processing utilities for correlation-based optical flow."""
import numpy as np
from scipy.ndimage import correlate


def fspecial_gaussian(size, sigma):
    """Create a Gaussian filter kernel (like MATLAB's fspecial('gaussian')).

    Args:
        size: Kernel size (int for square, or tuple).
        sigma: Standard deviation.

    Returns:
        h: Normalized Gaussian kernel.
    """
    if isinstance(size, (int, np.integer)):
        size = (int(size), int(size))

    m, n = [(s - 1) / 2.0 for s in size]
    y, x = np.ogrid[-m:m+1, -n:n+1]
    h = np.exp(-(x ** 2 + y ** 2) / (2 * sigma ** 2))
    h[h < np.finfo(h.dtype).eps * h.max()] = 0
    s = h.sum()
    if s != 0:
        h /= s
    return h


def gauss_smooth(im, sigma, radius=2.25):
    """Smooth an image with an isotropic Gaussian.

    The kernel extends ceil(radius * sigma) pixels from its centre and the
    image border is handled by reflection, so the output keeps the input size.

    Args:
        im: Input image (H, W).
        sigma: Standard deviation. 0 returns an unsmoothed copy.
        radius: Kernel half-width in units of sigma.

    Returns:
        Smoothed image (H, W), float.
    """
    im = np.asarray(im, dtype=float)
    if sigma <= 0:
        return im.copy()
    ksize = 2 * int(np.ceil(radius * sigma)) + 1
    return correlate(im, fspecial_gaussian(ksize, sigma), mode='reflect')


def pad_image(im, margin):
    """Surround an image with a zero border `margin` pixels wide."""
    return np.pad(np.asarray(im, dtype=float), margin, mode='constant',
                  constant_values=0)


def array_to_dims(a, dims):
    """Crop or zero-pad a 2D array about its centre to exactly `dims`.

    When the size difference along an axis is odd, the extra row/column
    is taken from (or added to) the end of that axis.

    Args:
        a: Input array (H, W).
        dims: Target shape (H_new, W_new).

    Returns:
        Array of shape dims.
    """
    a = np.asarray(a)
    out = np.zeros(dims, dtype=a.dtype)

    src = []
    dst = []
    for have, want in zip(a.shape, dims):
        if have >= want:
            start = (have - want) // 2
            src.append(slice(start, start + want))
            dst.append(slice(0, want))
        else:
            start = (want - have) // 2
            src.append(slice(0, have))
            dst.append(slice(start, start + have))

    out[tuple(dst)] = a[tuple(src)]
    return out


def patch_variance(patch):
    """Intensity variance of a patch, mean(x^2) - mean(x)^2.

    Used as the reliability (cornerness) of a match. Clamped at zero since
    the two means can cancel to a tiny negative value on flat patches.
    """
    x = np.ravel(patch)
    n = x.size
    rel = np.dot(x, x) / n - (x.sum() / n) ** 2
    return max(rel, 0.0)
