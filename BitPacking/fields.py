#!/usr/bin/env python3

import dataclasses
from dataclasses import dataclass, field

from .enums import intTypes
from .helpers import (
    check_index,
    get_bit,
    set_bit,
    to_binary_string,
    to_pattern,
    toggle_bit,
)


# --- Bit Field --- #
@dataclass
class BitField:
    """An integer of a declared type with an optional label per bit.

    Labels come either from a list of names or from the member names of an
    enum (see ``from_names`` and ``from_enum``). Bits without a label are
    shown as unused.
    """

    # fmt: off
    name     : str
    int_type : intTypes = intTypes.INT
    value    : int = 0
    labels   : list = field(default_factory=list)
    # fmt: on

    def __post_init__(self):
        to_pattern(self.value, self.int_type)
        if self.labels is None:
            self.labels = []
        if len(self.labels) > self.int_type.width:
            raise ValueError(
                f"Too many labels for {self.int_type.name}: {len(self.labels)}. Max: {self.int_type.width}"
            )
        self.labels = list(self.labels)

    @classmethod
    def from_names(cls, name, labels, int_type=intTypes.INT, value=0):
        return cls(name=name, int_type=int_type, value=value, labels=list(labels))

    @classmethod
    def from_enum(cls, name, enum_type, int_type=intTypes.INT, value=0):
        """Labels bits with an enum's member names, in declaration order."""
        return cls(
            name=name,
            int_type=int_type,
            value=value,
            labels=[member.name for member in enum_type],
        )

    # --- Bit access --- #
    def get_bit(self, index: int) -> bool:
        return get_bit(self.value, index, self.int_type)

    def set_bit(self, index: int, desired: bool) -> None:
        self.value = set_bit(self.value, index, desired, self.int_type)

    def toggle_bit(self, index: int) -> None:
        self.value = toggle_bit(self.value, index, self.int_type)

    def label_for(self, index: int):
        """Returns the raw label of a bit, or None if it is unused."""
        check_index(index, self.int_type)
        if index < len(self.labels) and self.labels[index]:
            return self.labels[index]
        return None

    def label(self, index: int) -> str:
        return f"{index}: {self.label_for(index) or '(unused)'}"

    def index_of(self, bit) -> int:
        """Resolves a bit given either as an index or by its label."""
        if isinstance(bit, str):
            try:
                return self.labels.index(bit)
            except ValueError:
                raise KeyError(f"No bit labelled {bit!r} in {self.name}") from None
        return check_index(bit, self.int_type)

    def to_binary_string(self) -> str:
        return to_binary_string(self.value, self.int_type)

    def header(self) -> str:
        return (
            f"BitField: {self.name} ({self.int_type.name}) - Value: {self.value}"
            f"\n{self.to_binary_string()}"
        )

    def copy(self, **changes):
        return dataclasses.replace(self, **changes)

    # --- Wire format --- #
    def to_bytes(self) -> bytearray:
        """Converts to big-endian wire format of the declared width."""
        return bytearray(
            self.value.to_bytes(
                self.int_type.width // 8, "big", signed=self.int_type.signed
            )
        )

    @classmethod
    def from_bytes(cls, data, name="", int_type=intTypes.INT, labels=None, offset=0):
        """Converts from wire format, reading the declared width at offset."""
        size = int_type.width // 8
        if offset < 0:
            raise ValueError(f"Offset must be >= 0 for {int_type.name}, got: {offset}")
        chunk = bytes(data[offset : offset + size])
        if len(chunk) != size:
            raise ValueError(
                f"Need {size} bytes at offset {offset} for {int_type.name}, got: {len(chunk)}"
            )
        value = int.from_bytes(chunk, "big", signed=int_type.signed)
        return cls(name=name, int_type=int_type, value=value, labels=labels)

    # --- CSV --- #
    def csv_header(self, bits=None):
        if bits is None:
            bits = range(self.int_type.width)
        return [self.label(self.index_of(bit)) for bit in bits]

    def to_csv(self, bits=None):
        if bits is None:
            bits = range(self.int_type.width)
        return ["1" if self.get_bit(self.index_of(bit)) else "0" for bit in bits]


@dataclass
class FieldLogConfig:
    """Where a bit field sits on the bus and which of its bits to log."""

    # fmt: off
    enabled: bool = True
    arbitration_id: int = None
    offset: int = 0
    bits: list = None
    _csv_beg: int = 0
    _csv_end: int = 0
    _csv_leader: list = field(default_factory=list)
    _csv_trailer: list = field(default_factory=list)
    # fmt: on
