#!/usr/bin/env python3

import logging

logger = logging.getLogger(__name__)

# Inspector layout:
#
# BitField: flags (BYTE) - Value: 5
# 00000101
# [x] 0: Grounded
# [ ] 1: (unused)
# [x] 2: Visible
# ...
#
# Bits are grouped into blocks of `columns`, separated by a blank line.


def render(field, columns: int = 16) -> str:
    """Renders a bit field as a header followed by one toggle line per bit."""
    if columns < 1:
        raise ValueError(f"columns must be at least 1, got: {columns}")
    lines = field.header().splitlines()
    for i in range(field.int_type.width):
        if i and i % columns == 0:
            lines.append("")
        mark = "x" if field.get_bit(i) else " "
        lines.append(f"[{mark}] {field.label(i)}")
    return "\n".join(lines)


def apply_toggles(field, indices):
    """Toggles each listed bit of the field in turn, as a click on its toggle would."""
    for i in indices:
        before = field.value
        field.toggle_bit(i)
        logger.debug("%s: toggled %s, %s -> %s", field.name, field.label(i), before, field.value)
    return field
