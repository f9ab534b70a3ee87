"""
Setup file.
"""

import os

from setuptools import setup

URL = "https://github.com/avrflash/avrflash"
KEYWORDS = "embedded avr atmega128 avrdude firmware flash verify bootloader serial"
HERE = os.path.dirname(os.path.abspath(__file__))



if __name__ == "__main__":
    setup(
        keywords=KEYWORDS,
        url=URL,
        include_package_data=True)
