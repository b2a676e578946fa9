"""Squared Euclidean block matching.

The distance between a template B and every same-sized window of an image I
is expanded as

    ||I_w - B||^2 = sum(I_w^2) + sum(B^2) - 2 * (I_w . B)

so that the first term comes from a sliding box sum of I^2 and the last
from a single 2D convolution with B rotated by 180 degrees.
"""
import numpy as np
from scipy.signal import convolve2d


def local_sum(im, shape):
    """Sum of `im` over every fully contained window of the given shape.

    Computed from an integral image, so the cost does not depend on the
    window size. Equivalent to a 'valid' convolution with a box of ones.

    Args:
        im: Input array (H, W).
        shape: Window shape (h, w), with h <= H and w <= W.

    Returns:
        Window sums (H - h + 1, W - w + 1).
    """
    im = np.asarray(im, dtype=float)
    h, w = shape
    H, W = im.shape
    if h > H or w > W:
        raise ValueError(
            f"Window shape {tuple(shape)} larger than array shape {im.shape}"
        )

    S = np.zeros((H + 1, W + 1))
    S[1:, 1:] = im.cumsum(axis=0).cumsum(axis=1)
    return S[h:, w:] - S[:-h, w:] - S[h:, :-w] + S[:-h, :-w]


def sliding_sum_of_squares(window, patch_shape):
    """Sum of squared intensities under every patch position in `window`."""
    window = np.asarray(window, dtype=float)
    return local_sum(window * window, patch_shape)


def squared_distance_map(template, window):
    """Squared Euclidean distance between a template and all windows.

    Args:
        template: Patch B (h, w).
        window: Search region I (H, W), H >= h and W >= w.

    Returns:
        D: (H - h + 1, W - w + 1) array, D[i, j] = ||I[i:i+h, j:j+w] - B||^2.
            Values are clamped at zero against cancellation error.
    """
    template = np.asarray(template, dtype=float)
    I_mag = sliding_sum_of_squares(window, template.shape)
    B_mag = np.sum(template * template)
    cross = convolve2d(window, np.rot90(template, 2), mode='valid')
    D = I_mag + B_mag - 2 * cross
    return np.maximum(D, 0.0)


def distance_penalty(search_r):
    """Multiplicative penalty favouring small displacements.

    ((x^2 + y^2) / search_r^2 + 1) ** (1/20) over the (2*search_r+1)^2
    grid of candidate offsets: exactly 1 at the centre, growing with radius.

    Args:
        search_r: Search radius (>= 0).

    Returns:
        Penalty grid (2*search_r+1, 2*search_r+1).
    """
    if search_r == 0:
        return np.ones((1, 1))
    ys, xs = np.mgrid[-search_r:search_r + 1, -search_r:search_r + 1]
    return ((xs ** 2 + ys ** 2) / float(search_r ** 2) + 1) ** (1.0 / 20)


def best_offset(D, penalty):
    """Pick the penalized minimum of a distance map.

    Ties are broken by taking the lowest row-major index.

    Args:
        D: Distance map (2*search_r+1, 2*search_r+1).
        penalty: Grid from distance_penalty, same shape.

    Returns:
        (dy, dx): Integer offset of the best match relative to the centre.
    """
    cost = (D + np.finfo(float).eps) * penalty
    iy, ix = np.unravel_index(np.argmin(cost), cost.shape)
    search_r = (cost.shape[0] - 1) // 2
    return int(iy) - search_r, int(ix) - search_r
