#!/usr/bin/env python
import numpy as np

from domain_mask import DomainMask
from field_store import FieldStore


class WaveIntegrator:
    """
    Damped explicit finite-difference integrator for the 2D wave equation.

    Per interior cell outside the pin region:
        laplacian = u[i-1,j] + u[i+1,j] + u[i,j-1] + u[i,j+1] - 4 u[i,j]
        velocity  = u[i,j] - u_prev[i,j]
        u_next    = clamp(u + damping * velocity + c_squared * laplacian)

    Unit grid spacing and unit time step; stable for c_squared <= 0.5.
    Cells outside the domain keep their last value (always zero).
    """

    def __init__(self, store: FieldStore, mask: DomainMask,
                 c_squared: float, damping: float, clamp_limit: float):
        self.store = store
        self.mask = mask
        self.c_squared = c_squared
        self.damping = damping
        self.clamp_limit = clamp_limit
        self._lap = np.zeros(mask.shape)

    def laplacian(self, u: np.ndarray) -> np.ndarray:
        """
        Five-point Laplacian on the inner cells; the outermost ring is left at zero
        so no read ever leaves the array.
        """
        lap = self._lap
        lap[1:-1, 1:-1] = (
            u[:-2, 1:-1] + u[2:, 1:-1] +
            u[1:-1, :-2] + u[1:-1, 2:] -
            4 * u[1:-1, 1:-1]
        )
        return lap

    def step(self, pin_region: np.ndarray = None, pin_target: float = 0.0) -> np.ndarray:
        """
        Computes the next grid into a fresh buffer and hands it to the store.
        Args:
            pin_region (np.ndarray): Boolean mask of cells held by the pin, or None.
            pin_target (float): Value written into the pinned cells.
        Returns: np.ndarray: The new current grid.
        """
        u = self.store.current
        u_prev = self.store.previous

        active = self.mask.interior
        if pin_region is not None:
            active = active & ~pin_region

        lap = self.laplacian(u)
        u_next = self.store.acquire()
        np.copyto(u_next, u)
        u_next[active] = (
            u[active]
            + self.damping * (u[active] - u_prev[active])
            + self.c_squared * lap[active]
        )
        np.clip(u_next, -self.clamp_limit, self.clamp_limit, out=u_next)
        if pin_region is not None:
            u_next[pin_region] = pin_target

        self.store.advance(u_next)
        return u_next
