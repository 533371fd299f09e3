#!/usr/bin/env python
"""
Drum Membrane Simulation

A circular membrane clamped at its rim, struck by taps and optionally held down
by a pin. One instance owns every piece of mutable state: the two displacement
grids, the pin and the excitation scalars.

Classes:
    DrumMembrane: Wires the field store, domain mask, integrator, excitation model
                  and relaxation solver together.

Usage:
    from membrane import DrumMembrane
    drum = DrumMembrane()
    drum.tap_at(50, 50)
    for _ in range(100):
        drum.tick()
    field = drum.current_field()
"""

import numpy as np

from domain_mask import DomainMask
from excitation import ExcitationModel, ExcitationParams, Pin
from field_store import FieldStore
from membrane_config import MembraneConfig
from relaxation import RelaxationSolver
from wave_integrator import WaveIntegrator


class DrumMembrane:
    def __init__(self, config: MembraneConfig = None):
        self.config = config if config is not None else MembraneConfig()
        cfg = self.config

        self.mask = DomainMask(cfg.width, cfg.height, cfg.margin)
        self.store = FieldStore(cfg.width, cfg.height)
        self.params = ExcitationParams(cfg)
        self.integrator = WaveIntegrator(self.store, self.mask, cfg.c_squared,
                                         cfg.damping, cfg.clamp_limit)
        self.excitation = ExcitationModel(self.store, self.mask, cfg.clamp_limit)
        self.solver = RelaxationSolver(self.store, self.mask,
                                       passes=cfg.relaxation_passes, tol=cfg.relaxation_tol)

        self.pin = None
        self._pin_region = None
        self.ticks = 0

    def print_simulation_info(self):
        """Prints the simulation configuration."""
        cfg = self.config
        print("============== Drum Membrane Simulation ==============")
        print(f" Grid resolution : {cfg.width} x {cfg.height} (margin {cfg.margin})")
        print(f" Domain radius   : {self.mask.radius:.1f} cells, {int(self.mask.interior.sum())} interior")
        print(f" Wave speed c^2  : {cfg.c_squared}")
        print(f" Damping         : {cfg.damping}")
        print(f" Clamp           : +/- {cfg.clamp_limit}")
        print(f" Pulse amplitude : {self.params.pulse_amplitude:.0f} "
              f"[{cfg.min_pulse_amplitude}, {cfg.max_pulse_amplitude}]")
        print(f" Press strength  : {self.params.press_strength:.0f} "
              f"[{cfg.min_press_strength}, {cfg.max_press_strength}]")
        print(f" Relaxation      : {cfg.relaxation_passes} passes")
        print("======================================================\n")

    def _log(self, message: str):
        if self.config.verbose:
            print(f"[INFO] {message}")

    # ---- Time stepping -------------------------------------------------

    def tick(self) -> np.ndarray:
        """
        Advances the membrane by one time step. Pinned cells are written into the
        new grid and then re-forced into both grids, so the pin stays rigid while
        its neighbours still saw the pre-step values.
        Returns: np.ndarray: The current displacement grid (owned by the store).
        """
        if self.pin is None:
            self.integrator.step()
        else:
            self.integrator.step(self._pin_region, self.pin.target)
            self.excitation.hold(self.pin)
        self.ticks += 1
        return self.store.current

    # ---- Excitation ----------------------------------------------------

    def tap_at(self, x: int, y: int) -> int:
        """Taps at (x, y) with the current pulse amplitude. Returns the number of cells hit."""
        amplitude = self.params.pulse_amplitude
        hit = self.excitation.tap(x, y, amplitude, self.params.pulse_radius,
                                   exclude=self._pin_region)
        self._log(f"Tap at ({x}, {y}) amplitude {amplitude:.0f}, {hit} cells")
        return hit

    def place_pin(self, x: int, y: int) -> Pin:
        """
        Pins the membrane at (x, y) with the current press strength and settles
        the field into its static shape around the pin.
        """
        self.pin = Pin(x, y, self.params.press_radius, self.params.press_target)
        self._pin_region = self.pin.region(self.mask)
        self.solver.solve(self.pin)
        self._log(f"{self.pin} settled after {self.solver.passes_run} passes")
        return self.pin

    def clear_pin(self):
        self.pin = None
        self._pin_region = None

    def clear_field(self):
        self.store.reset()
        self.ticks = 0

    def reset(self):
        self.clear_pin()
        self.clear_field()
        self._log("Simulation reset")

    # ---- Parameters ----------------------------------------------------

    def set_pulse_amplitude(self, value: float) -> float:
        self.params.pulse_amplitude = value
        return self.params.pulse_amplitude

    def set_press_strength(self, value: float) -> float:
        """
        Updates the press strength. While pinned, the pin takes the new radius and
        depth and the static shape is recomputed.
        """
        before = self.params.press_strength
        self.params.press_strength = value
        if self.pin is not None and self.params.press_strength != before:
            self.place_pin(self.pin.x, self.pin.y)
        return self.params.press_strength

    # ---- Outputs -------------------------------------------------------

    def current_field(self) -> np.ndarray:
        """Read-only snapshot of the current displacement grid."""
        return self.store.snapshot()

    def pin_position(self):
        """(x, y, radius) of the active pin, or None."""
        if self.pin is None:
            return None
        return (self.pin.x, self.pin.y, self.pin.radius)

    def pin_region(self):
        return self._pin_region

    def energy(self) -> float:
        return self.store.energy(self.mask.interior)
