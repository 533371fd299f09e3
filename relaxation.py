#!/usr/bin/env python
"""
Static relaxation of the membrane around a pin.

Solves the discrete Laplace equation with the pin value held on the pin region
and zero outside the circular domain, by Jacobi iteration: every pass replaces
each free interior cell with the average of its in-bounds neighbours from the
previous pass.

Classes:
    RelaxationSolver: Runs the passes and loads the settled shape into the field store.
"""

import numpy as np
from scipy.ndimage import convolve

from domain_mask import DomainMask
from excitation import Pin
from field_store import FieldStore

# 4-neighbour stencil, centre excluded.
CROSS = np.array([[0, 1, 0],
                  [1, 0, 1],
                  [0, 1, 0]], dtype=np.float64)


class RelaxationSolver:
    def __init__(self, store: FieldStore, mask: DomainMask, passes: int = 300, tol: float = None):
        """
        Args:
            store (FieldStore): Receives the settled field.
            mask (DomainMask): Circular domain.
            passes (int): Maximum number of Jacobi passes.
            tol (float): Stop early once no cell changes by more than tol in a pass.
                         None runs exactly `passes` passes.
        """
        self.store = store
        self.mask = mask
        self.passes = passes
        self.tol = tol
        # Zero padding outside the array means the count is the number of
        # in-bounds neighbours: 4 inside, 3 on edges, 2 in corners.
        self.neighbour_count = convolve(np.ones(mask.shape), CROSS, mode="constant", cval=0.0)
        self.passes_run = 0
        self.field = None

    def iter_passes(self, pin: Pin):
        """
        Generator over relaxation passes. Yields (pass index, max change) after
        each pass; the caller may stop consuming at any point to spread the work
        across frames. The working field is available as `self.field`.
        """
        interior = self.mask.interior
        region = pin.region(self.mask)
        free = interior & ~region & (self.neighbour_count > 0)

        field = np.zeros(self.mask.shape)
        field[region] = pin.target
        self.field = field

        for n in range(self.passes):
            sums = convolve(field, CROSS, mode="constant", cval=0.0)
            new = field.copy()
            new[free] = sums[free] / self.neighbour_count[free]
            new[~interior] = 0.0
            new[region] = pin.target

            change = float(np.max(np.abs(new - field)))
            field = new
            self.field = field
            yield n + 1, change

    def solve(self, pin: Pin) -> np.ndarray:
        """
        Runs the relaxation to completion and copies the result into both grids
        of the field store (zero initial velocity).
        Returns: np.ndarray: The settled field.
        """
        self.passes_run = 0
        for n, change in self.iter_passes(pin):
            self.passes_run = n
            if self.tol is not None and change < self.tol:
                break
        self.store.load(self.field)
        return self.field
