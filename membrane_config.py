#!/usr/bin/env python
"""
Configuration for the drum membrane simulation.

Classes:
    MembraneConfig: Grid size, integrator coefficients and the bounded ranges
                    of the user-facing excitation scalars.
"""

import numpy as np


def lerp_radius(value: float, lo: float, hi: float, r_lo: int, r_hi: int) -> int:
    """
    Maps a strength scalar in [lo, hi] linearly onto [r_lo, r_hi] and rounds
    half up to the nearest whole cell.
    Args:
        value (float): Strength scalar, clamped to [lo, hi] first.
        lo (float): Lower end of the strength range.
        hi (float): Upper end of the strength range.
        r_lo (int): Radius at lo.
        r_hi (int): Radius at hi.
    Returns: int: Radius in grid cells.
    """
    value = min(max(value, lo), hi)
    t = (value - lo) / (hi - lo)
    return int(np.floor(r_lo + t * (r_hi - r_lo) + 0.5))


class MembraneConfig:
    """
    Holds every tunable constant of the simulation.

    The integrator is stable only for c_squared <= 0.5. Larger values are
    accepted (a warning is printed) since the displacement clamp keeps the
    field bounded, but waves will not look physical.
    """

    def __init__(self,
                 width: int = 100,
                 height: int = 100,
                 margin: float = 2,
                 c_squared: float = 0.45,
                 damping: float = 0.995,
                 max_pulse_amplitude: float = 500,
                 min_pulse_amplitude: float = 10,
                 default_pulse_amplitude: float = 200,
                 min_pulse_radius: int = 0,
                 max_pulse_radius: int = 3,
                 min_press_strength: float = 10,
                 max_press_strength: float = 500,
                 default_press_strength: float = 200,
                 min_press_radius: int = 1,
                 max_press_radius: int = 6,
                 relaxation_passes: int = 300,
                 relaxation_tol: float = None,
                 verbose: bool = False):
        """
        Args:
            width (int): Grid cells along x.
            height (int): Grid cells along y.
            margin (float): Cells reserved between the circular domain and the grid edge.
            c_squared (float): Wave-speed-squared coefficient of the integrator.
            damping (float): Velocity damping factor in (0, 1].
            max_pulse_amplitude (float): A_max; displacements are clamped to +/- 2*A_max.
            min_pulse_amplitude (float): Lower bound of the pulse amplitude scalar.
            default_pulse_amplitude (float): Initial pulse amplitude.
            min_pulse_radius (int): Tap radius at the weakest pulse.
            max_pulse_radius (int): Tap radius at the strongest pulse.
            min_press_strength (float): Lower bound of the press strength scalar.
            max_press_strength (float): Upper bound of the press strength scalar.
            default_press_strength (float): Initial press strength.
            min_press_radius (int): Pin radius at the weakest press.
            max_press_radius (int): Pin radius at the strongest press.
            relaxation_passes (int): Jacobi passes run when a pin is placed.
            relaxation_tol (float): Optional early-stop threshold on the max change per pass.
            verbose (bool): Print a line for every handled interaction.
        """
        self.width = width
        self.height = height
        self.margin = margin
        self.c_squared = c_squared
        self.damping = damping

        self.max_pulse_amplitude = max_pulse_amplitude
        self.min_pulse_amplitude = min_pulse_amplitude
        self.default_pulse_amplitude = default_pulse_amplitude
        self.min_pulse_radius = min_pulse_radius
        self.max_pulse_radius = max_pulse_radius

        self.min_press_strength = min_press_strength
        self.max_press_strength = max_press_strength
        self.default_press_strength = default_press_strength
        self.min_press_radius = min_press_radius
        self.max_press_radius = max_press_radius

        self.relaxation_passes = relaxation_passes
        self.relaxation_tol = relaxation_tol
        self.verbose = verbose

        self.validate()

    @property
    def clamp_limit(self) -> float:
        """Absolute bound on any displacement value (2 * A_max)."""
        return 2 * self.max_pulse_amplitude

    @property
    def domain_radius(self) -> float:
        return min(self.width, self.height) / 2 - self.margin

    def validate(self):
        """Rejects configurations that cannot produce a working simulation."""
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Grid dimensions must be positive, got {self.width}x{self.height}.")
        if min(self.width, self.height) <= 2 * self.margin:
            raise ValueError(
                f"Grid {self.width}x{self.height} leaves no interior for margin {self.margin}."
            )
        if self.margin < 0:
            raise ValueError(f"Margin must be non-negative, got {self.margin}.")
        if not 0 < self.damping <= 1:
            raise ValueError(f"Damping must lie in (0, 1], got {self.damping}.")
        if self.c_squared <= 0:
            raise ValueError(f"c_squared must be positive, got {self.c_squared}.")

        _check_range("pulse amplitude", self.min_pulse_amplitude,
                     self.max_pulse_amplitude, self.default_pulse_amplitude)
        _check_range("press strength", self.min_press_strength,
                     self.max_press_strength, self.default_press_strength)
        if min(self.min_pulse_radius, self.max_pulse_radius,
               self.min_press_radius, self.max_press_radius) < 0:
            raise ValueError("Excitation radii must be non-negative.")
        if self.max_press_strength > self.clamp_limit:
            raise ValueError(
                f"max_press_strength {self.max_press_strength} exceeds the displacement limit {self.clamp_limit}."
            )
        if self.relaxation_passes < 1:
            raise ValueError(f"relaxation_passes must be at least 1, got {self.relaxation_passes}.")

        if self.c_squared > 0.5:
            print(f"[WARN] c_squared = {self.c_squared} exceeds 0.5; the integrator may be unstable!")

    def pulse_radius(self, amplitude: float) -> int:
        return lerp_radius(amplitude, self.min_pulse_amplitude, self.max_pulse_amplitude,
                           self.min_pulse_radius, self.max_pulse_radius)

    def press_radius(self, strength: float) -> int:
        return lerp_radius(strength, self.min_press_strength, self.max_press_strength,
                           self.min_press_radius, self.max_press_radius)

    def press_target(self, strength: float) -> float:
        # Pressing indents the membrane, so the held value is negative.
        strength = min(max(strength, self.min_press_strength), self.max_press_strength)
        return -float(strength)


def _check_range(name: str, lo: float, hi: float, default: float):
    if not lo < hi:
        raise ValueError(f"Empty {name} range [{lo}, {hi}].")
    if not lo <= default <= hi:
        raise ValueError(f"Default {name} {default} lies outside [{lo}, {hi}].")
