"""Shared fixtures for correlation flow tests."""
import numpy as np
import pytest
from scipy.ndimage import gaussian_filter


@pytest.fixture
def textured_image():
    """Random 32x32 texture with values in [0, 255]."""
    rng = np.random.RandomState(42)
    return rng.rand(32, 32) * 255


@pytest.fixture
def smooth_texture():
    """Low-pass random texture, well suited to gradient-based refinement."""
    rng = np.random.RandomState(7)
    im = gaussian_filter(rng.rand(40, 40), 2.0)
    return (im - im.min()) / (im.max() - im.min()) * 255


@pytest.fixture
def camera_crop():
    """A 40x40 crop of the scikit-image cameraman, as float64."""
    from skimage import data
    return data.camera()[180:220, 200:240].astype(np.float64)


@pytest.fixture
def synthetic_pair(textured_image):
    """Image pair with a known translation of (dy, dx) = (1, -2)."""
    im1 = textured_image
    im2 = np.roll(im1, (1, -2), axis=(0, 1))
    return im1, im2
