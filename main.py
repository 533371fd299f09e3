#!/usr/bin/env python3
"""
Interactive drum membrane.

Click once to pin the membrane, then click elsewhere to tap it. Keys:
    R           reset
    T           toggle pin mode
    Up / Down   tap strength
    Left/Right  press strength
    Esc         quit
"""

import sys

import pygame

from interaction import InteractionStateMachine
from membrane import DrumMembrane
from membrane_config import MembraneConfig
from renderer import Renderer

STEP = 10


class MembraneApp:
    """
    Frame loop: one integrator step and one redraw per frame.
    """

    def __init__(self, config: MembraneConfig = None, window_size=(600, 600), fps: int = 60):
        self.membrane = DrumMembrane(config)
        self.machine = InteractionStateMachine(self.membrane)
        self.renderer = Renderer(self.membrane, window_size)
        self.fps = fps
        self.running = False

    def handle_event(self, event):
        drum = self.membrane
        if event.type == pygame.QUIT:
            self.running = False
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            x, y = self.renderer.to_grid(event.pos)
            self.machine.click(x, y)
        elif event.type == pygame.KEYDOWN:
            if event.key == pygame.K_ESCAPE:
                self.running = False
            elif event.key == pygame.K_r:
                self.machine.reset()
            elif event.key == pygame.K_t:
                self.machine.toggle_mode()
            elif event.key == pygame.K_UP:
                drum.set_pulse_amplitude(drum.params.pulse_amplitude + STEP)
            elif event.key == pygame.K_DOWN:
                drum.set_pulse_amplitude(drum.params.pulse_amplitude - STEP)
            elif event.key == pygame.K_RIGHT:
                drum.set_press_strength(drum.params.press_strength + STEP)
            elif event.key == pygame.K_LEFT:
                drum.set_press_strength(drum.params.press_strength - STEP)

    def run(self):
        if self.running:
            raise RuntimeError("MembraneApp.run() is already running.")
        self.membrane.print_simulation_info()
        self.running = True
        while self.running:
            for event in pygame.event.get():
                self.handle_event(event)
            self.membrane.tick()
            self.renderer.render(self.machine.status, self.fps)
        pygame.quit()


def main():
    app = MembraneApp(MembraneConfig(width=100, height=100, verbose=True))
    app.run()
    sys.exit()


if __name__ == "__main__":
    main()
