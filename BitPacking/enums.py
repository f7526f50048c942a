from enum import Enum


class intTypes(Enum):
    """Fixed-width integer types a bit field may be declared as.

    Values are (width, signed). Signed and unsigned types of the same size
    share a width.
    """

    # fmt: off
    BYTE   = (8, False)
    SBYTE  = (8, True)
    USHORT = (16, False)
    SHORT  = (16, True)
    UINT   = (32, False)
    INT    = (32, True)
    ULONG  = (64, False)
    LONG   = (64, True)
    # fmt: on

    @property
    def width(self) -> int:
        return self.value[0]

    @property
    def signed(self) -> bool:
        return self.value[1]

    @property
    def mask(self) -> int:
        return (1 << self.width) - 1

    @property
    def min(self) -> int:
        return -(1 << (self.width - 1)) if self.signed else 0

    @property
    def max(self) -> int:
        if self.signed:
            return (1 << (self.width - 1)) - 1
        return self.mask
