#!/usr/bin/env python
import numpy as np


class FieldStore:
    """
    Owns the two displacement grids of the membrane.

    Attributes:
        current (np.ndarray): Displacement at time t, shape (width, height).
        previous (np.ndarray): Displacement at time t - 1.
        version (int): Bumped on every mutation; anything derived from an older
                       version (e.g. a rendered surface) is stale.
    """

    def __init__(self, width: int, height: int, dtype=np.float64):
        self.shape = (width, height)
        self.dtype = dtype
        self.version = 0
        self._pool = []
        self.current = None
        self.previous = None
        self.reset()

    def reset(self):
        """Reallocates both grids to all zeros."""
        self.current = np.zeros(self.shape, dtype=self.dtype)
        self.previous = np.zeros(self.shape, dtype=self.dtype)
        self._pool.clear()
        self.version += 1

    def acquire(self) -> np.ndarray:
        """
        Returns a scratch buffer for the next step. Its contents are undefined;
        the caller owns it until handing it back through advance().
        """
        if self._pool:
            return self._pool.pop()
        return np.empty(self.shape, dtype=self.dtype)

    def advance(self, new_current: np.ndarray):
        """
        Promotes current -> previous and new_current -> current, retiring the
        old previous grid to the buffer pool.
        Args:
            new_current (np.ndarray): Fully computed next grid. Ownership passes to the store.
        """
        if new_current.shape != self.shape:
            raise ValueError(f"Expected a grid of shape {self.shape}, got {new_current.shape}.")
        if new_current is self.current or new_current is self.previous:
            raise ValueError("advance() needs a fresh buffer, not one of the live grids.")
        retired = self.previous
        self.previous = self.current
        self.current = new_current
        self._pool.append(retired)
        self.version += 1

    def load(self, field: np.ndarray):
        """Copies a settled field into both grids, so it starts with zero velocity."""
        np.copyto(self.current, field)
        np.copyto(self.previous, field)
        self.version += 1

    def touch(self):
        """Records an in-place edit of current/previous."""
        self.version += 1

    def snapshot(self) -> np.ndarray:
        snap = self.current.copy()
        snap.flags.writeable = False
        return snap

    def energy(self, mask: np.ndarray = None) -> float:
        """Sum of squared displacements, optionally restricted to a boolean mask."""
        u = self.current if mask is None else self.current[mask]
        return float(np.sum(u * u))
