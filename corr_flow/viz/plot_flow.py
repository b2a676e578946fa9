"""Flow visualization utilities."""
import numpy as np
import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt


def plot_flow_overlay(im, vx, vy, ax=None, step=1, reliab=None, background='image'):
    """Draw the flow field as arrows on top of an image.

    Args:
        im: Background image (H, W), usually the first frame.
        vx, vy: Flow components (H, W).
        ax: matplotlib axes. If None, creates new figure.
        step: Draw one arrow every `step` pixels.
        reliab: Reliability (H, W), required for background='reliability'.
        background: 'image' or 'reliability'.

    Returns:
        ax: The matplotlib axes used.
    """
    if ax is None:
        fig, ax = plt.subplots(1, 1, figsize=(8, 6))

    if background == 'image':
        ax.imshow(im, cmap='gray')
    elif background == 'reliability':
        if reliab is None:
            raise ValueError("background='reliability' needs a reliability map")
        ax.imshow(np.clip(reliab, 0, 1), cmap='gray', vmin=0, vmax=1)
    else:
        raise ValueError(f"Unknown background: {background}")

    H, W = vx.shape
    Y, X = np.mgrid[0:H:step, 0:W:step]
    # y axis points down in image coordinates, as does vy
    ax.quiver(X, Y, vx[::step, ::step], vy[::step, ::step],
              color='b', angles='xy')
    ax.set_ylim(H - 0.5, -0.5)
    ax.set_xlim(-0.5, W - 0.5)
    ax.set_aspect('equal')
    ax.set_title('Optical Flow (Correlation)')
    ax.axis('off')
    return ax
