import numpy as np
import pytest

from interaction import InteractionMode, InteractionStateMachine
from membrane import DrumMembrane
from membrane_config import MembraneConfig


def make_machine(**kwargs) -> InteractionStateMachine:
    params = dict(width=30, height=30)
    params.update(kwargs)
    return InteractionStateMachine(DrumMembrane(MembraneConfig(**params)))


def test_starts_waiting_for_pin() -> None:
    machine = make_machine()
    assert machine.mode is InteractionMode.AWAITING_PIN
    assert machine.membrane.pin_position() is None


def test_misses_are_ignored() -> None:
    machine = make_machine()
    status = machine.status
    for x, y in [(0, 0), (-4, 15), (15, 99), (15, 29)]:
        assert machine.click(x, y) is False
    assert machine.mode is InteractionMode.AWAITING_PIN
    assert machine.status == status
    assert not machine.membrane.store.current.any()


def test_first_click_places_pin() -> None:
    machine = make_machine()
    assert machine.click(15, 15)
    drum = machine.membrane
    assert machine.mode is InteractionMode.TAPPING
    assert drum.pin_position() == (15, 15, 3)
    assert drum.store.current[15, 15] == drum.pin.target
    assert drum.store.current[15, 20] < 0
    assert "Pin placed" in machine.status


def test_click_on_pin_does_nothing() -> None:
    machine = make_machine()
    machine.click(15, 15)
    before = machine.membrane.current_field()
    assert machine.click(16, 16)
    assert machine.mode is InteractionMode.TAPPING
    assert np.array_equal(machine.membrane.store.current, before)
    assert "held by the pin" in machine.status


def test_taps_accumulate_while_pinned() -> None:
    machine = make_machine()
    machine.click(15, 15)
    drum = machine.membrane
    amplitude = drum.params.pulse_amplitude
    base = drum.store.current[22, 15]

    machine.click(22, 15)
    machine.click(22, 15)
    assert drum.store.current[22, 15] == pytest.approx(base + 2 * amplitude)
    assert machine.mode is InteractionMode.TAPPING
    assert drum.pin is not None


def test_toggle_clears_pin_and_field() -> None:
    machine = make_machine()
    machine.click(15, 15)
    assert machine.toggle_mode() is InteractionMode.PIN_DISABLED
    assert machine.membrane.pin is None
    assert not machine.membrane.store.current.any()
    assert not machine.membrane.store.previous.any()


def test_toggle_from_awaiting_pin_disables() -> None:
    machine = make_machine()
    assert machine.toggle_mode() is InteractionMode.PIN_DISABLED


def test_free_mode_clears_before_each_tap() -> None:
    machine = make_machine()
    machine.toggle_mode()
    drum = machine.membrane
    amplitude = drum.params.pulse_amplitude

    machine.click(10, 15)
    for _ in range(5):
        drum.tick()
    machine.click(20, 15)

    assert machine.mode is InteractionMode.PIN_DISABLED
    assert drum.store.current[10, 15] == 0
    assert drum.store.current[20, 15] == amplitude
    assert not drum.store.previous.any()


def test_toggle_back_performs_full_reset() -> None:
    machine = make_machine()
    machine.toggle_mode()
    machine.click(12, 12)
    assert machine.toggle_mode() is InteractionMode.AWAITING_PIN
    assert machine.membrane.pin is None
    assert not machine.membrane.store.current.any()


def test_reset_from_tapping() -> None:
    machine = make_machine()
    machine.click(15, 15)
    machine.click(20, 20)
    machine.reset()
    assert machine.mode is InteractionMode.AWAITING_PIN
    assert machine.membrane.pin is None
    assert not machine.membrane.store.current.any()
    assert not machine.membrane.store.previous.any()


def test_press_change_while_pinned_resettles() -> None:
    machine = make_machine()
    machine.click(15, 15)
    drum = machine.membrane
    drum.set_press_strength(500)
    assert drum.pin_position() == (15, 15, 6)
    assert drum.store.current[15, 15] == -500
    assert np.array_equal(drum.store.current, drum.store.previous)


def test_same_inputs_same_outcome() -> None:
    def play() -> InteractionStateMachine:
        machine = make_machine()
        machine.click(14, 16)
        machine.click(20, 10)
        machine.membrane.tick()
        machine.click(15, 16)
        machine.toggle_mode()
        machine.click(8, 15)
        machine.toggle_mode()
        machine.click(17, 13)
        machine.membrane.tick()
        return machine

    a, b = play(), play()
    assert a.mode is b.mode is InteractionMode.TAPPING
    assert a.membrane.pin_position() == b.membrane.pin_position() == (17, 13, 3)
    assert np.array_equal(a.membrane.store.current, b.membrane.store.current)
    assert a.status == b.status


def test_tap_beside_pin_leaves_pin_untouched() -> None:
    machine = make_machine()
    machine.click(15, 15)
    drum = machine.membrane
    drum.set_pulse_amplitude(500)
    pin = drum.pin
    region = drum.pin_region()
    assert drum.params.pulse_radius >= 2

    x = 15 + pin.radius + 1
    base = drum.store.current[x + 2, 15]
    assert machine.click(x, 15)
    assert "Tapped" in machine.status
    assert np.all(drum.store.current[region] == pin.target)
    # Cells of the tap disc away from the pin still receive the impulse.
    assert drum.store.current[x + 2, 15] == pytest.approx(base + 500)

    drum.tick()
    assert np.all(drum.store.current[region] == pin.target)
