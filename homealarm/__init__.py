"""Smart home fire alarm on simulated hardware: sensors, siren, strobe light, keypad, display, serial console and event log."""

__version__ = "0.1.0"