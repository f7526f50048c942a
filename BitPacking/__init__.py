"""
BitPacking Package
==================

This package reads, writes, toggles and prints individual bits of
fixed-width integers, labels those bits, and logs them from CAN frames
via the python-can library.

Example Usage:
-------------
from BitPacking import BitField, intTypes, get_bit, toggle_bit, render

get_bit(5, 2, intTypes.BYTE)       # True
toggle_bit(0, 7, intTypes.BYTE)    # 128

flags = BitField.from_names("flags", ["Grounded", "Crouching", "Visible"],
                            int_type=intTypes.BYTE, value=5)
flags.toggle_bit(1)
print(render(flags))

"""

# --- Bit access functions ---
from .helpers import (
    IndexOutOfRangeError,
    from_pattern,
    get_bit,
    set_bit,
    to_binary_string,
    to_pattern,
    toggle_bit,
)

# --- Labelled fields and their rendering ---
from .fields import BitField, FieldLogConfig
from .inspector import apply_toggles, render

# --- CAN integration ---
from .api import decode_field, make_message
from .listeners import BitFieldListener, PrintListener

# --- Enums for declaring integer types ---
from .enums import intTypes

# --- Expose a version number ---
__version__ = "1.0.0"
