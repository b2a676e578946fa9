"""
Correlation Optical Flow Package

Dense optical flow by exhaustive block matching with a squared Euclidean
patch distance, refined to sub-pixel accuracy with a Lucas-Kanade step and
annotated with a per-pixel reliability (patch variance).
"""

from corr_flow.interface import compute_flow, estimate_flow
from corr_flow.errors import DimensionMismatchError
from corr_flow.io.image_io import read_gray_image, read_image_pair
from corr_flow.viz.plot_flow import plot_flow_overlay
from corr_flow.evaluation.metrics import flow_angular_error
from corr_flow.methods.config import load_of_method

__all__ = [
    'compute_flow',
    'estimate_flow',
    'DimensionMismatchError',
    'read_gray_image',
    'read_image_pair',
    'plot_flow_overlay',
    'flow_angular_error',
    'load_of_method',
]
