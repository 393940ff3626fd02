"""Version identifier for the keypad launcher settings store; also read by the packaging metadata."""

__version__ = "0.4.2"
