#!/usr/bin/env python
"""
Ways of disturbing the membrane from outside.

Classes:
    ExcitationParams: The two user-controlled scalars (pulse amplitude, press strength).
    Pin: A held indentation at one grid point.
    ExcitationModel: Applies taps (additive impulses) and presses (static indentations)
                     to the field store.
"""

import numpy as np

from domain_mask import DomainMask
from field_store import FieldStore


class ExcitationParams:
    """
    Pulse amplitude and press strength, each kept inside its configured range.
    The UI layer writes these before each interaction; the simulation never
    reads widgets directly.
    """

    def __init__(self, config):
        self.config = config
        self.pulse_amplitude = config.default_pulse_amplitude
        self.press_strength = config.default_press_strength

    @property
    def pulse_amplitude(self) -> float:
        return self._pulse_amplitude

    @pulse_amplitude.setter
    def pulse_amplitude(self, value: float):
        cfg = self.config
        self._pulse_amplitude = float(min(max(value, cfg.min_pulse_amplitude), cfg.max_pulse_amplitude))

    @property
    def press_strength(self) -> float:
        return self._press_strength

    @press_strength.setter
    def press_strength(self, value: float):
        cfg = self.config
        self._press_strength = float(min(max(value, cfg.min_press_strength), cfg.max_press_strength))

    @property
    def pulse_radius(self) -> int:
        return self.config.pulse_radius(self.pulse_amplitude)

    @property
    def press_radius(self) -> int:
        return self.config.press_radius(self.press_strength)

    @property
    def press_target(self) -> float:
        return self.config.press_target(self.press_strength)


class Pin:
    """
    A fixed point: every interior cell within `radius` of (x, y) is held at `target`.
    """

    def __init__(self, x: int, y: int, radius: int, target: float):
        self.x = x
        self.y = y
        self.radius = radius
        self.target = target

    def covers(self, i: int, j: int) -> bool:
        """True when (i, j) lies within the pin radius, interior or not."""
        return (i - self.x) ** 2 + (j - self.y) ** 2 <= self.radius ** 2

    def region(self, mask: DomainMask) -> np.ndarray:
        return mask.disc(self.x, self.y, self.radius)

    def __repr__(self):
        return f"Pin(x={self.x}, y={self.y}, radius={self.radius}, target={self.target})"


class ExcitationModel:
    """
    Taps and presses, both restricted to interior cells.
    """

    def __init__(self, store: FieldStore, mask: DomainMask, clamp_limit: float):
        self.store = store
        self.mask = mask
        self.clamp_limit = clamp_limit

    def tap(self, cx: int, cy: int, amplitude: float, radius: int, exclude: np.ndarray = None):
        """
        Adds `amplitude` to the current displacement of every interior cell within
        `radius` of (cx, cy). The previous grid is left alone, so the tap injects
        velocity as well as displacement. Repeated taps accumulate.
        Args:
            cx (int): Tap center, x index.
            cy (int): Tap center, y index.
            amplitude (float): Displacement added per cell.
            radius (int): Tap radius in cells.
            exclude (np.ndarray): Boolean mask of cells the tap must not touch (the pin).
        """
        region = self.mask.disc(cx, cy, radius)
        if exclude is not None:
            region &= ~exclude
        u = self.store.current
        u[region] = np.clip(u[region] + amplitude, -self.clamp_limit, self.clamp_limit)
        self.store.touch()
        return int(region.sum())

    def press(self, cx: int, cy: int, target: float, radius: int):
        """
        Sets both current and previous to `target` over the interior cells within
        `radius` of (cx, cy): a static indentation with no injected velocity.
        """
        region = self.mask.disc(cx, cy, radius)
        self.store.current[region] = target
        self.store.previous[region] = target
        self.store.touch()
        return int(region.sum())

    def hold(self, pin: Pin):
        """Re-forces a pin's region after the field has moved on."""
        return self.press(pin.x, pin.y, pin.target, pin.radius)
