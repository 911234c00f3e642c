from homealarm.gas_sensor import GasSensor
from homealarm.hardware import DigitalIn


def test_default_output_is_high():
    sensor = GasSensor()
    sensor.init()
    assert sensor.read() is True


def test_update_samples_pin():
    pin = DigitalIn(True)
    sensor = GasSensor(pin)
    pin.set(False)
    assert sensor.read() is True
    sensor.update()
    assert sensor.read() is False


def test_init_resamples_pin():
    pin = DigitalIn(True)
    sensor = GasSensor(pin)
    pin.set(False)
    sensor.init()
    assert sensor.read() is False
    pin.set(True)
    sensor.update()
    assert sensor.read() is True