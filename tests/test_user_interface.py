from collections import deque

import pytest

from homealarm.code import Code, CodeOrigin
from homealarm.display import PCF8574_I2C_BUS_8BIT_WRITE_ADDRESS, Display
from homealarm.fire_alarm import FireAlarm
from homealarm.user_interface import UserInterface


class Keys:
    def __init__(self, keys=""):
        self.queue = deque(keys)
        self.polls = 0

    def push(self, keys):
        self.queue.extend(keys)

    def __call__(self):
        if self.queue:
            return self.queue.popleft()
        self.polls += 1
        if self.polls > 10000:
            raise RuntimeError("keypad input exhausted")
        return None


def make_ui(init_keys="180#"):
    alarm = FireAlarm(code=Code())
    keys = Keys(init_keys)
    display = Display(sleep=lambda ms: None)
    ui = UserInterface(alarm, display=display, key_reader=keys)
    ui.init()
    return ui, alarm, keys, display


def run(ui, cycles):
    for _ in range(cycles):
        ui.update()


def test_init_stores_entered_code():
    ui, alarm, *_ = make_ui("123#")
    assert alarm.code.sequence == "123"


def test_init_ignores_other_keys_and_extra_digits():
    ui, alarm, *_ = make_ui("A45#6789#")
    assert alarm.code.sequence == "456"


def test_init_blocks_without_confirmation():
    alarm = FireAlarm(code=Code())
    ui = UserInterface(alarm, display=Display(sleep=lambda ms: None), key_reader=Keys("12"))
    with pytest.raises(RuntimeError):
        ui.init()


def test_init_leaves_status_labels_on_screen():
    ui, *_ = make_ui()
    assert ui.screen[0].startswith("Temperature:")
    assert ui.screen[1].startswith("Gas:")
    assert ui.screen[2].startswith("Alarm:")
    assert ui.screen[3].strip() == ""


def test_init_talks_to_expander_address():
    ui, _, _, display = make_ui()
    assert display.i2c.transactions
    assert {address for address, _ in display.i2c.transactions} == {
        PCF8574_I2C_BUS_8BIT_WRITE_ADDRESS
    }


def test_keys_fill_entry_while_alarm_active():
    ui, alarm, keys, _ = make_ui()
    alarm.siren.active = True
    keys.push("180")
    run(ui, 3)
    entry = alarm.code.entries[CodeOrigin.KEYPAD]
    assert entry.complete is True
    assert entry.keys == ["1", "8", "0"]
    alarm.update()
    assert alarm.siren.active is False


def test_two_hash_presses_clear_incorrect_code():
    ui, alarm, keys, _ = make_ui()
    alarm.siren.active = True
    alarm.code.indicators.incorrect_code = True
    keys.push("#")
    ui.update()
    assert alarm.code.indicators.incorrect_code is True
    keys.push("#")
    ui.update()
    assert alarm.code.indicators.incorrect_code is False


def test_keys_ignored_while_blocked():
    ui, alarm, keys, _ = make_ui()
    alarm.siren.active = True
    alarm.code.indicators.system_blocked = True
    keys.push("1")
    ui.update()
    entry = alarm.code.entries[CodeOrigin.KEYPAD]
    assert entry.keys == []
    assert entry.complete is False


def test_leds_follow_indicators():
    ui, alarm, *_ = make_ui()
    alarm.code.indicators.incorrect_code = True
    alarm.code.indicators.system_blocked = True
    ui.update()
    assert ui.incorrect_code_led.read() is True
    assert ui.system_blocked_led.read() is True


def test_display_refreshes_after_period():
    ui, *_ = make_ui()
    run(ui, 300)
    assert ui.screen[2].rstrip() == "Alarm:"
    ui.update()
    assert ui.screen[2].startswith("Alarm:OFF")
    assert ui.screen[0].startswith("Temperature:0 'C")
    assert ui.screen[1].startswith("Gas:Not Detected")


def test_key_one_shows_gas_detector_state():
    ui, alarm, keys, _ = make_ui()
    keys.push("1")
    run(ui, 301)
    assert ui.screen[1].startswith("Gas:OFF")


def test_key_nine_shows_temperature_detector_state():
    ui, alarm, keys, _ = make_ui()
    keys.push("9")
    run(ui, 301)
    assert ui.screen[0].startswith("Temperature:OFF")


def test_active_alarm_shown():
    ui, alarm, *_ = make_ui()
    alarm.siren.active = True
    run(ui, 301)
    assert ui.screen[2].startswith("Alarm:ON")