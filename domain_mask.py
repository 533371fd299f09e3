#!/usr/bin/env python
import numpy as np


class DomainMask:
    """
    Circular simulation region inscribed in a rectangular grid.

    A cell (i, j) is interior when its distance from the grid center
    (width / 2, height / 2) is strictly less than min(width, height) / 2 - margin.
    The mask is computed once and never changes.
    """

    def __init__(self, width: int, height: int, margin: float = 2):
        """
        Args:
            width (int): Grid cells along x.
            height (int): Grid cells along y.
            margin (float): Cells kept free between the circle and the grid edge.
        """
        if min(width, height) <= 2 * margin:
            raise ValueError(f"Grid {width}x{height} leaves no interior for margin {margin}.")

        self.width = width
        self.height = height
        self.margin = margin
        self.center = (width / 2, height / 2)
        self.radius = min(width, height) / 2 - margin

        self.x = np.arange(width)
        self.y = np.arange(height)
        self.X, self.Y = np.meshgrid(self.x, self.y, indexing="ij")

        interior = self.distance_from(*self.center) < self.radius
        # The outermost rows and columns are never updated, whatever the margin.
        interior[0, :] = interior[-1, :] = False
        interior[:, 0] = interior[:, -1] = False
        if not interior.any():
            raise ValueError(f"Grid {width}x{height} with margin {margin} has no interior cells.")
        interior.flags.writeable = False
        self.interior = interior

    @property
    def shape(self):
        return (self.width, self.height)

    def contains(self, i: int, j: int) -> bool:
        """True when (i, j) is a valid grid index."""
        return 0 <= i < self.width and 0 <= j < self.height

    def is_interior(self, i: int, j: int) -> bool:
        if not self.contains(i, j):
            return False
        return bool(self.interior[i, j])

    def distance_from(self, cx: float, cy: float) -> np.ndarray:
        """Euclidean distance of every cell from (cx, cy)."""
        return np.sqrt((self.X - cx) ** 2 + (self.Y - cy) ** 2)

    def disc(self, cx: float, cy: float, radius: float) -> np.ndarray:
        """
        Interior cells within `radius` (inclusive) of (cx, cy).
        Returns: np.ndarray: Boolean array of the grid shape.
        """
        return self.interior & (self.distance_from(cx, cy) <= radius)
