"""Fixed-width bit patterns used as line hashes."""

from typing import Iterator, Optional


class Bitset:
    """A mutable fixed-width unsigned bit pattern.

    Bit ``pos`` corresponds to ``1 << pos``. Values never exceed ``width``
    bits.
    """

    __slots__ = ("width", "value")

    def __init__(self, width: int, value: int = 0):
        if width <= 0:
            raise ValueError(f"Bitset width must be positive, got {width}")
        if value < 0 or value >> width:
            raise ValueError(f"Value {value:#x} does not fit in {width} bits")
        self.width = width
        self.value = value

    @classmethod
    def full(cls, width: int, size: Optional[int] = None) -> "Bitset":
        """Bitset with the lowest ``size`` bits set (all bits by default)."""
        size = width if size is None else size
        return cls(width, (1 << size) - 1)

    def _check(self, pos: int) -> None:
        if not 0 <= pos < self.width:
            raise ValueError(f"Bit position {pos} out of range for width {self.width}")

    def set(self, pos: int) -> None:
        self._check(pos)
        self.value |= 1 << pos

    def test(self, pos: int) -> bool:
        self._check(pos)
        return bool(self.value >> pos & 1)

    def popcount(self) -> int:
        return bin(self.value).count("1")

    def distance(self, other: "Bitset") -> int:
        """Hamming distance to another bitset of the same width."""
        return (self ^ other).popcount()

    def is_uniform(self, size: Optional[int] = None) -> bool:
        """True if the lowest ``size`` bits are all clear or all set."""
        size = self.width if size is None else size
        low = (1 << size) - 1
        bits = self.value & low
        return bits == 0 or bits == low

    def positions(self) -> Iterator[int]:
        """Iterate over the set bit positions, lowest first."""
        value = self.value
        pos = 0
        while value:
            if value & 1:
                yield pos
            value >>= 1
            pos += 1

    def __xor__(self, other: "Bitset") -> "Bitset":
        if not isinstance(other, Bitset):
            return NotImplemented
        if other.width != self.width:
            raise ValueError(f"Cannot compare bitsets of width {self.width} and {other.width}")
        return Bitset(self.width, self.value ^ other.value)

    def __int__(self) -> int:
        return self.value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Bitset):
            return NotImplemented
        return self.width == other.width and self.value == other.value

    __hash__ = None

    def __repr__(self) -> str:
        return f"Bitset({self.width}, {self.value:#0{self.width // 4 + 2}x})"
