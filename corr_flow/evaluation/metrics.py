"""Optical flow evaluation metrics."""
import numpy as np


def flow_angular_error(tu, tv, u, v, border=0, mask=None):
    """Compute angular error and endpoint error (Barron et al.).

    Args:
        tu, tv: Ground truth flow components (H, W).
        u, v: Estimated flow components (H, W).
        border: Number of border pixels to ignore.
        mask: Optional boolean (H, W) array; only True pixels are scored.
            Typically `reliab >= thr`.

    Returns:
        aae: Average angular error in degrees.
        std_ae: Standard deviation of angular error.
        aepe: Average endpoint error.
    """
    arrays = [np.asarray(a, dtype=float) for a in (tu, tv, u, v)]
    if mask is None:
        mask = np.ones(arrays[0].shape, dtype=bool)
    else:
        mask = np.asarray(mask, dtype=bool)

    if border > 0:
        inner = (slice(border, -border), slice(border, -border))
        arrays = [a[inner] for a in arrays]
        mask = mask[inner]

    tu, tv, u, v = [a[mask] for a in arrays]
    if tu.size == 0:
        raise ValueError("No pixels left to evaluate")

    n_est = 1.0 / np.sqrt(u ** 2 + v ** 2 + 1.0)
    n_gt = 1.0 / np.sqrt(tu ** 2 + tv ** 2 + 1.0)
    cos_angle = np.clip((u * tu + v * tv + 1.0) * n_est * n_gt, -1.0, 1.0)
    ae = np.degrees(np.arccos(cos_angle))

    epe = np.hypot(tu - u, tv - v)
    return np.mean(ae), np.std(ae), np.mean(epe)
