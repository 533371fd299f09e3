#!/usr/bin/env python
"""
Click semantics for the drum.

Modes:
    AWAITING_PIN  -- the next click places the pin (initial mode).
    TAPPING       -- a pin is set; clicks outside it tap the membrane.
    PIN_DISABLED  -- no pin; every click clears the field and taps.

Toggling goes TAPPING/AWAITING_PIN -> PIN_DISABLED (pin cleared, field zeroed)
and PIN_DISABLED -> AWAITING_PIN (full reset). Reset returns to AWAITING_PIN
from anywhere.
"""

from enum import Enum

from membrane import DrumMembrane


class InteractionMode(Enum):
    AWAITING_PIN = "awaiting_pin"
    TAPPING = "tapping"
    PIN_DISABLED = "pin_disabled"


class InteractionStateMachine:
    """
    Decides what a click does and keeps a human-readable status line.
    """

    def __init__(self, membrane: DrumMembrane):
        self.membrane = membrane
        self.mode = InteractionMode.AWAITING_PIN
        self.status = "Click inside the drum to place the pin."

    def click(self, x: int, y: int) -> bool:
        """
        Handles a click at grid cell (x, y).
        Args:
            x (int): Column index.
            y (int): Row index.
        Returns: bool: False when the click missed the domain and was ignored.
        """
        drum = self.membrane
        if not drum.mask.is_interior(x, y):
            return False

        if self.mode is InteractionMode.AWAITING_PIN:
            pin = drum.place_pin(x, y)
            self.mode = InteractionMode.TAPPING
            self.status = (f"Pin placed at ({x}, {y}), radius {pin.radius}, "
                           f"depth {pin.target:.0f}. Click elsewhere to tap.")
        elif self.mode is InteractionMode.TAPPING:
            if drum.pin is not None and drum.pin.covers(x, y):
                self.status = f"({x}, {y}) is held by the pin; tap somewhere else."
            else:
                drum.tap_at(x, y)
                self.status = f"Tapped at ({x}, {y}) with strength {drum.params.pulse_amplitude:.0f}."
        else:
            # Free mode starts every tap from a still membrane, unlike pinned mode
            # where taps pile up.
            drum.clear_field()
            drum.tap_at(x, y)
            self.status = f"Tapped at ({x}, {y}) with strength {drum.params.pulse_amplitude:.0f} (no pin)."
        return True

    def toggle_mode(self) -> InteractionMode:
        drum = self.membrane
        if self.mode is InteractionMode.PIN_DISABLED:
            self.reset()
        else:
            drum.clear_pin()
            drum.clear_field()
            self.mode = InteractionMode.PIN_DISABLED
            self.status = "Pin disabled. Click anywhere inside the drum to tap."
        return self.mode

    def reset(self):
        self.membrane.reset()
        self.mode = InteractionMode.AWAITING_PIN
        self.status = "Reset. Click inside the drum to place the pin."
