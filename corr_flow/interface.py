"""
High-level interface for correlation-based optical flow estimation.
"""
import numpy as np

from corr_flow.methods.config import load_of_method
from corr_flow.methods.corr import CorrOpticalFlow


def compute_flow(im1, im2, patch_r, search_r, sigma=1.0, thr=0.001,
                 show=False, ax=None, n_jobs=1, subpixel=True, display=False):
    """Calculate optical flow using cross-correlation.

    For every pixel, the patch of radius `patch_r` around it in im1 is
    compared against all patches of im2 within `search_r`; the closest one
    (squared Euclidean distance, slightly biased towards small motions)
    gives the integer displacement, which a Lucas-Kanade step then refines
    to sub-pixel accuracy.

    Args:
        im1, im2: Grayscale images (H, W) of identical shape. Integer images
            are converted to float.
        patch_r: Correlation patch radius (>= 0).
        search_r: Search radius for the corresponding patch (>= 0).
        sigma: Amount to smooth the inputs by (may be 0).
        thr: RELATIVE reliability threshold; flow is zeroed below it.
        show: Draw the flow over im1 with plot_flow_overlay.
        ax: matplotlib axes for show. If None, creates new figure.
        n_jobs: Worker threads for the pixel loop (-1 = all CPUs).
        subpixel: Apply the Lucas-Kanade sub-pixel refinement.
        display: Print progress.

    Returns:
        vx, vy: Flow components (H, W) [vx > 0 -> right, vy > 0 -> down].
        reliab: Reliability of the flow (patch cornerness) in [0, 1].

    Raises:
        DimensionMismatchError: If the images are not 2D or differ in shape.
        ValueError: If a parameter is out of range.
    """
    ope = CorrOpticalFlow(patch_r, search_r)
    ope.parse_input_parameter({
        'sigma': sigma,
        'thr': thr,
        'n_jobs': n_jobs,
        'subpixel': subpixel,
        'display': display,
    })
    ope.set_images(im1, im2)

    vx, vy, reliab = ope.compute_flow()

    if show:
        from corr_flow.viz.plot_flow import plot_flow_overlay
        plot_flow_overlay(ope.images[:, :, 0], vx, vy, ax=ax)

    return vx, vy, reliab


def estimate_flow(im1, im2, method='corr', params=None):
    """Estimate optical flow with a named preset.

    Args:
        im1: First image (H, W).
        im2: Second image, same size as im1.
        method: Method name string. See load_of_method for options.
        params: Optional dict of parameter overrides, e.g.
            {'patch_r': 5, 'search_r': 3}.

    Returns:
        uv: Estimated optical flow (H, W, 2). uv[:,:,0] = horizontal,
            uv[:,:,1] = vertical.
        reliab: Reliability (H, W) in [0, 1].
    """
    ope = load_of_method(method)
    if params is not None:
        ope.parse_input_parameter(params)
    ope.set_images(im1, im2)

    vx, vy, reliab = ope.compute_flow()
    return np.stack([vx, vy], axis=2), reliab
