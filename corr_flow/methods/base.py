"""
Abstract base class for optical flow estimation methods.
"""
import numpy as np
from abc import ABC, abstractmethod

from corr_flow.errors import DimensionMismatchError


class BaseOpticalFlow(ABC):
    """Base class holding an image pair and its method parameters."""

    def __init__(self):
        self.images = None
        self.display = False

    def parse_input_parameter(self, params):
        """Set parameters from a dictionary or list of key-value pairs.

        Unknown keys are ignored.

        Args:
            params: dict or list of [key, value, key, value, ...].
        """
        if isinstance(params, dict):
            items = params.items()
        elif isinstance(params, (list, tuple)):
            items = zip(params[0::2], params[1::2])
        else:
            raise ValueError(
                f"Parameters must be a dict or key/value list, got {type(params).__name__}"
            )
        for key, val in items:
            if hasattr(self, key):
                setattr(self, key, val)

    def set_images(self, im1, im2):
        """Validate and store an image pair as an (H, W, 2) float stack.

        Integer images are converted to float without rescaling.

        Raises:
            DimensionMismatchError: If an image is not 2D or the shapes differ.
        """
        if np.ndim(im1) != 2 or np.ndim(im2) != 2:
            raise DimensionMismatchError(
                f"Only works for 2D input images, got {np.ndim(im1)}D and {np.ndim(im2)}D"
            )
        if np.shape(im1) != np.shape(im2):
            raise DimensionMismatchError(
                f"Input images must have same dimensions, got {np.shape(im1)} and {np.shape(im2)}"
            )
        self.images = np.stack([np.asarray(im1, dtype=float),
                                np.asarray(im2, dtype=float)], axis=2)

    def _log(self, msg):
        if self.display:
            print(msg)

    @abstractmethod
    def compute_flow(self):
        """Compute optical flow for self.images."""
        pass
