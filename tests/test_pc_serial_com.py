import time

import pytest

from homealarm.code import CodeOrigin
from homealarm.date_and_time import RealTimeClock
from homealarm.event_log import EventLog
from homealarm.fire_alarm import FireAlarm
from homealarm.hardware import SerialPort
from homealarm.pc_serial_com import PcSerialCom, SerialMode


@pytest.fixture
def serial():
    return SerialPort()


@pytest.fixture
def clock():
    return RealTimeClock(clock=lambda: 1_000_000.0)


@pytest.fixture
def fire_alarm():
    return FireAlarm()


@pytest.fixture
def event_log(clock, serial):
    return EventLog(clock, serial_write=serial.write)


@pytest.fixture
def pc(fire_alarm, serial, clock, event_log):
    return PcSerialCom(fire_alarm, serial=serial, clock=clock, event_log=event_log)


def send(pc, serial, text):
    serial.feed(text)
    for _ in text:
        pc.update()
    return serial.take_output()


def test_init_lists_commands(pc, serial):
    pc.init()
    output = serial.take_output()
    assert output.startswith("Available commands:\r\n")
    assert output.endswith("Press 'e' or 'E' to get the stored events\r\n\r\n")


def test_char_read(pc, serial):
    assert pc.char_read() is None
    serial.feed("x")
    assert pc.char_read() == "x"
    assert pc.char_read() is None


def test_nul_character_is_ignored(pc, serial):
    assert send(pc, serial, "\0") == ""


def test_unknown_command_lists_commands(pc, serial):
    pc.init()
    expected = serial.take_output()
    assert send(pc, serial, "x") == expected


def test_alarm_state(pc, serial, fire_alarm):
    assert send(pc, serial, "1") == "The alarm is not activated\r\n"
    fire_alarm.siren.active = True
    assert send(pc, serial, "1") == "The alarm is activated\r\n"


def test_gas_detector_state(pc, serial, fire_alarm):
    assert send(pc, serial, "2") == "Gas is not being detected\r\n"
    fire_alarm.gas_detector_state = True
    assert send(pc, serial, "2") == "Gas is being detected\r\n"


def test_over_temperature_state(pc, serial, fire_alarm):
    assert send(pc, serial, "3") == "Temperature is below the maximum level\r\n"
    fire_alarm.over_temperature_detector_state = True
    assert send(pc, serial, "3") == "Temperature is above the maximum level\r\n"


def test_enter_code_when_alarm_off(pc, serial):
    assert send(pc, serial, "4") == "Alarm is not activated.\r\n"
    assert pc.mode is SerialMode.COMMANDS


def test_enter_code_when_alarm_on(pc, serial, fire_alarm):
    fire_alarm.siren.active = True
    prompt = send(pc, serial, "4")
    assert "to deactivate the alarm: " in prompt
    assert pc.mode is SerialMode.GET_CODE
    assert send(pc, serial, "180") == "***"
    assert pc.mode is SerialMode.COMMANDS
    assert pc.code_complete
    assert fire_alarm.code.entries[CodeOrigin.PC_SERIAL].keys == ["1", "8", "0"]
    assert fire_alarm.code.match_from(CodeOrigin.PC_SERIAL) is True


def test_wrong_code_is_rejected(pc, serial, fire_alarm):
    fire_alarm.siren.active = True
    send(pc, serial, "4999")
    assert fire_alarm.code.match_from(CodeOrigin.PC_SERIAL) is False
    assert fire_alarm.code.indicators.incorrect_code


def test_new_code(pc, serial, fire_alarm):
    send(pc, serial, "5")
    assert pc.mode is SerialMode.SAVE_NEW_CODE
    output = send(pc, serial, "246")
    assert output == "***\r\nNew code configured\r\n\r\n"
    assert fire_alarm.code.sequence == "246"
    assert pc.mode is SerialMode.COMMANDS


def test_temperature_commands(pc, serial):
    assert send(pc, serial, "c") == "Temperature: 0.00 \xb0 C\r\n"
    assert send(pc, serial, "f") == "Temperature: 32.00 \xb0 C\r\n"


def test_uppercase_commands_match_lowercase(pc, serial):
    for lower in "cfte":
        assert send(pc, serial, lower.upper()) == send(pc, serial, lower)


def test_set_date_and_time_without_input(pc, serial):
    serial.feed("s2024")
    with pytest.raises(EOFError):
        pc.update()


def test_show_date_and_time(pc, serial, clock):
    assert send(pc, serial, "t") == f"Date and Time = {clock.read()}\r\n"


def test_show_stored_events(pc, serial, event_log):
    assert send(pc, serial, "e") == ""
    event_log.write(True, "ALARM")
    serial.take_output()
    assert send(pc, serial, "e") == event_log.read(0) + "\r\n"