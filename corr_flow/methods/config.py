"""
Method configuration factory.

Maps method name strings to configured optical flow objects.
"""
from corr_flow.methods.corr import CorrOpticalFlow


def load_of_method(method):
    """Load a pre-configured optical flow method by name.

    Available methods:
        - 'corr': Block matching with sub-pixel refinement, sigma=1
        - 'corr-integer': Block matching only (integer displacements)
        - 'corr-nosmooth': No pre-smoothing of the inputs
        - 'corr-parallel': Pixel loop spread over all CPUs

    Args:
        method: Method name string.

    Returns:
        ope: Configured optical flow object.
    """
    if method == 'corr':
        ope = CorrOpticalFlow(patch_r=3, search_r=4)
        ope.sigma = 1.0
        ope.thr = 0.001
        return ope

    elif method == 'corr-integer':
        ope = load_of_method('corr')
        ope.subpixel = False
        return ope

    elif method == 'corr-nosmooth':
        ope = load_of_method('corr')
        ope.sigma = 0
        return ope

    elif method == 'corr-parallel':
        ope = load_of_method('corr')
        ope.n_jobs = -1
        return ope

    else:
        raise ValueError(f"Unknown optical flow method: '{method}'")
