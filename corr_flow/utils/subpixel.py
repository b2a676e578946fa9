"""Closed-form 2x2 algebra and the Lucas-Kanade sub-pixel step."""
import math

import numpy as np

EPS = np.finfo(float).eps


def solve_2x2(m, rhs):
    """Solve a 2x2 linear system with the explicit inverse.

    Args:
        m: Matrix as a tuple (a, b, c, d) for [[a, b], [c, d]].
        rhs: Right-hand side (r1, r2).

    Returns:
        (x1, x2), or None when |det| <= machine epsilon.
    """
    a, b, c, d = m
    det = a * d - b * c
    if abs(det) <= EPS:
        return None
    r1, r2 = rhs
    return (d * r1 - b * r2) / det, (a * r2 - c * r1) / det


def eig_2x2_symmetric(a, b, d):
    """Eigenvalues of the symmetric matrix [[a, b], [b, d]].

    Returns:
        (lambda_min, lambda_max)
    """
    half_tr = 0.5 * (a + d)
    root = math.hypot(0.5 * (a - d), b)
    return half_tr - root, half_tr + root


def lucas_kanade_step(T, T2, gx, gy, min_ratio=1e-4):
    """One Lucas-Kanade step aligning T2 onto the template T.

    Solves the normal equations of [gy gx] . delta = -(T2 - T) over the
    patch. The correction is discarded when the system is singular or when
    the eigenvalue ratio of A^T A is at most `min_ratio` (aperture problem).

    Args:
        T: Template patch from image 1 (h, w).
        T2: Patch from image 2 at the integer match (h, w).
        gx: Horizontal gradient of image 1 over T's footprint (h, w).
        gy: Vertical gradient of image 1 over T's footprint (h, w).
        min_ratio: Minimum |lambda_min / lambda_max| to accept the step.

    Returns:
        (ddy, ddx): Sub-pixel correction, (0.0, 0.0) for degenerate patches.
    """
    gy = np.ravel(gy)
    gx = np.ravel(gx)
    b = -(np.ravel(T2) - np.ravel(T))

    a11 = np.dot(gy, gy)
    a12 = np.dot(gy, gx)
    a22 = np.dot(gx, gx)

    delta = solve_2x2((a11, a12, a12, a22), (np.dot(gy, b), np.dot(gx, b)))
    if delta is None:
        return 0.0, 0.0

    lmin, lmax = eig_2x2_symmetric(a11, a12, a22)
    subrel = abs(lmin / lmax)
    if subrel <= min_ratio:
        return 0.0, 0.0
    return float(delta[0]), float(delta[1])
