"""
Correlation-based optical flow.

Locally, the closest patch within a search radius is found using the
Euclidean distance between patches (not normalized correlation, since pixel
brightness constancy is assumed). The alignment between the two patches is
then refined by a Lucas-Kanade step to get a sub-pixel translation.

Running time is linear in the number of pixels but the constant is large;
intended for small images.
"""
import os
from concurrent.futures import ThreadPoolExecutor

import numpy as np

from corr_flow.methods.base import BaseOpticalFlow
from corr_flow.utils.correlation import (
    squared_distance_map, distance_penalty, best_offset
)
from corr_flow.utils.derivatives import image_gradient
from corr_flow.utils.image_processing import (
    gauss_smooth, pad_image, array_to_dims, patch_variance
)
from corr_flow.utils.subpixel import lucas_kanade_step


class CorrOpticalFlow(BaseOpticalFlow):
    """Block-matching optical flow with Lucas-Kanade sub-pixel refinement.

    Attributes:
        patch_r: Half-size of the correlation patch.
        search_r: Half-size of the search neighbourhood.
        sigma: Pre-smoothing standard deviation (0 disables smoothing).
        thr: Relative reliability below which flow is zeroed.
        subpixel: Apply the Lucas-Kanade refinement.
        min_eig_ratio: Eigenvalue ratio below which refinement is skipped.
        n_jobs: Worker threads for the pixel loop (-1 = all CPUs).
    """

    def __init__(self, patch_r=3, search_r=4):
        super().__init__()
        self.patch_r = patch_r
        self.search_r = search_r
        self.sigma = 1.0
        self.thr = 0.001
        self.subpixel = True
        self.min_eig_ratio = 1e-4
        self.n_jobs = 1

    def validate(self):
        """Check parameter values, raising ValueError on the first bad one."""
        for name in ('patch_r', 'search_r'):
            val = getattr(self, name)
            if isinstance(val, bool) or not isinstance(val, (int, np.integer)):
                raise ValueError(f"{name} must be an integer, got {val!r}")
            if val < 0:
                raise ValueError(f"{name} must be >= 0, got {val}")
        if self.sigma < 0:
            raise ValueError(f"sigma must be >= 0, got {self.sigma}")
        if self.n_jobs == 0 or self.n_jobs < -1:
            raise ValueError(f"n_jobs must be -1 or a positive integer, got {self.n_jobs}")

    def compute_flow(self):
        """Compute the flow field between the two stored images.

        Returns:
            vx: Horizontal flow (H, W), positive to the right.
            vy: Vertical flow (H, W), positive downwards.
            reliab: Reliability in [0, 1] (H, W).
        """
        if self.images is None:
            raise ValueError("No images set; call set_images() first")
        self.validate()

        im1 = self.images[:, :, 0]
        im2 = self.images[:, :, 1]
        sz = im1.shape
        big_r = self.search_r + self.patch_r

        self._log(f"Correlation flow: patch_r={self.patch_r} search_r={self.search_r} "
                  f"sigma={self.sigma} thr={self.thr}")

        I1b = pad_image(gauss_smooth(im1, self.sigma), big_r)
        I2b = pad_image(gauss_smooth(im2, self.sigma), big_r)
        gy, gx = image_gradient(I1b)
        penalty = distance_penalty(self.search_r)

        self._log(f"  Padded size: {I1b.shape}")

        vx = np.zeros(sz)
        vy = np.zeros(sz)
        reliab = np.zeros(sz)
        out = (vx, vy, reliab)

        bands = self._row_bands(sz[0])
        if len(bands) == 1:
            self._match_rows(bands[0], I1b, I2b, gx, gy, penalty, out)
        else:
            with ThreadPoolExecutor(max_workers=len(bands)) as executor:
                futures = [
                    executor.submit(self._match_rows, rows, I1b, I2b, gx, gy, penalty, out)
                    for rows in bands
                ]
                for future in futures:
                    future.result()

        return self._postprocess(vx, vy, reliab, sz)

    def _row_bands(self, n_rows):
        """Split the output rows into contiguous bands, one per worker."""
        n_jobs = (os.cpu_count() or 1) if self.n_jobs == -1 else self.n_jobs
        n_bands = max(1, min(n_jobs, n_rows))
        edges = np.linspace(0, n_rows, n_bands + 1).astype(int)
        return [range(edges[i], edges[i + 1]) for i in range(n_bands)]

    def _match_rows(self, rows, I1b, I2b, gx, gy, penalty, out):
        """Match every pixel of the given output rows.

        Writes only rows in `rows` of the output arrays.
        """
        vx, vy, reliab = out
        p = self.patch_r
        big_r = self.search_r + p
        W = vx.shape[1]

        for i in rows:
            r = i + big_r
            for j in range(W):
                c = j + big_r
                T = I1b[r - p:r + p + 1, c - p:c + p + 1]
                IC = I2b[r - big_r:r + big_r + 1, c - big_r:c + big_r + 1]

                D = squared_distance_map(T, IC)
                dy, dx = best_offset(D, penalty)
                fy, fx = float(dy), float(dx)

                if self.subpixel:
                    T2 = I2b[r + dy - p:r + dy + p + 1, c + dx - p:c + dx + p + 1]
                    ddy, ddx = lucas_kanade_step(
                        T, T2,
                        gx[r - p:r + p + 1, c - p:c + p + 1],
                        gy[r - p:r + p + 1, c - p:c + p + 1],
                        self.min_eig_ratio,
                    )
                    fy += ddy
                    fx += ddx

                reliab[i, j] = patch_variance(T)
                vx[i, j] = fx
                vy[i, j] = fy

            if self.display and (i + 1) % 10 == 0:
                print(f"  Row: {i + 1}")

    def _postprocess(self, vx, vy, reliab, sz):
        """Resize to the input shape, normalize reliability, drop weak flow."""
        vx = array_to_dims(vx, sz)
        vy = array_to_dims(vy, sz)
        reliab = array_to_dims(reliab, sz)

        reliab = reliab / max(reliab.max(initial=0.0), np.finfo(float).eps)
        weak = reliab < self.thr
        vx[weak] = 0.0
        vy[weak] = 0.0

        self._log(f"  Suppressed {int(weak.sum())} of {weak.size} vectors")
        return vx, vy, reliab
