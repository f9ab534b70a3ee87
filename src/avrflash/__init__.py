"""avrflash - flash and verify AVR firmware over a serial bootloader."""

__version__ = "0.1.0"
