import pytest

from homealarm.date_and_time import RealTimeClock
from homealarm.hardware import DigitalIn
from homealarm.smart_home_system import SmartHomeSystem, main


def make_system(code="123", test_button=None, sleeps=None):
    keys = iter([*code, "#"])
    record = sleeps if sleeps is not None else []
    return SmartHomeSystem(
        key_reader=lambda: next(keys, None),
        clock=RealTimeClock(clock=lambda: 1_000_000.0),
        test_button=test_button,
        sleep=record.append,
    )


def test_init_sets_code_and_panel():
    system = make_system("472")
    system.init()
    assert system.code.sequence == "472"
    assert system.serial.take_output().startswith("Available commands:\r\n")
    assert system.user_interface.screen[0].startswith("Temperature:")
    assert system.user_interface.screen[2].startswith("Alarm:")


def test_run_sleeps_one_tick_per_cycle():
    sleeps = []
    system = make_system(sleeps=sleeps)
    system.init()
    sleeps.clear()
    assert system.run(3) == 3
    assert sleeps == [system.time_increment_ms] * 3


def test_run_rejects_negative_cycles():
    system = make_system()
    system.init()
    with pytest.raises(ValueError):
        system.run(-1)


def test_serial_command_in_loop():
    system = make_system()
    system.init()
    system.serial.take_output()
    system.serial.feed("1")
    system.update()
    assert system.serial.take_output() == "The alarm is not activated\r\n"


def test_alarm_raised_and_cleared_over_serial():
    button = DigitalIn(True)
    system = make_system("123", test_button=button)
    system.init()
    system.serial.take_output()
    system.serial.feed("4123")
    system.update()
    assert system.fire_alarm.siren.active
    assert "ALARM_ON" in system.serial.take_output()
    button.set(False)
    system.run(4)
    output = system.serial.take_output()
    assert "The code is correct" in output
    assert "ALARM_OFF" in output
    assert not system.fire_alarm.siren.active
    assert [system.event_log.event(i).name for i in range(2)][0] == "ALARM_ON"


def test_wrong_code_over_serial_lights_indicator():
    button = DigitalIn(True)
    system = make_system("123", test_button=button)
    system.init()
    system.serial.feed("4999")
    system.update()
    button.set(False)
    system.run(4)
    output = system.serial.take_output()
    assert "The code is incorrect" in output
    assert "LED_IC_ON" in output
    assert system.code.indicators.incorrect_code
    assert system.fire_alarm.siren.active


def test_main_prints_serial_output(capsys):
    assert main(["--code", "123", "--input", "1", "--cycles", "5"]) == 0
    out = capsys.readouterr().out
    assert out.startswith("Available commands:")
    assert "The alarm is not activated\r\n" in out


def test_main_rejects_bad_code():
    with pytest.raises(SystemExit):
        main(["--code", "12a"])