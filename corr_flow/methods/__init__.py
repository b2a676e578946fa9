"""Optical flow estimation methods."""
from corr_flow.methods.corr import CorrOpticalFlow
from corr_flow.methods.config import load_of_method

__all__ = [
    'CorrOpticalFlow',
    'load_of_method',
]
