"""QR code symbol geometry: error-correction tables, bit frames and base templates."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum

MIN_VERSION = 1
MAX_VERSION = 40


class EccLevel(IntEnum):
    """Error-correction level of a QR symbol."""

    L = 1
    M = 2
    Q = 3
    H = 4


# Per version, per level: blocks of the short kind, blocks of the long kind
# (one data codeword longer), data codewords per short block, ECC codewords
# per block.
_ECC_BLOCKS = bytes((
    1, 0, 19, 7, 1, 0, 16, 10, 1, 0, 13, 13, 1, 0, 9, 17,
    1, 0, 34, 10, 1, 0, 28, 16, 1, 0, 22, 22, 1, 0, 16, 28,
    1, 0, 55, 15, 1, 0, 44, 26, 2, 0, 17, 18, 2, 0, 13, 22,
    1, 0, 80, 20, 2, 0, 32, 18, 2, 0, 24, 26, 4, 0, 9, 16,
    1, 0, 108, 26, 2, 0, 43, 24, 2, 2, 15, 18, 2, 2, 11, 22,
    2, 0, 68, 18, 4, 0, 27, 16, 4, 0, 19, 24, 4, 0, 15, 28,
    2, 0, 78, 20, 4, 0, 31, 18, 2, 4, 14, 18, 4, 1, 13, 26,
    2, 0, 97, 24, 2, 2, 38, 22, 4, 2, 18, 22, 4, 2, 14, 26,
    2, 0, 116, 30, 3, 2, 36, 22, 4, 4, 16, 20, 4, 4, 12, 24,
    2, 2, 68, 18, 4, 1, 43, 26, 6, 2, 19, 24, 6, 2, 15, 28,
    4, 0, 81, 20, 1, 4, 50, 30, 4, 4, 22, 28, 3, 8, 12, 24,
    2, 2, 92, 24, 6, 2, 36, 22, 4, 6, 20, 26, 7, 4, 14, 28,
    4, 0, 107, 26, 8, 1, 37, 22, 8, 4, 20, 24, 12, 4, 11, 22,
    3, 1, 115, 30, 4, 5, 40, 24, 11, 5, 16, 20, 11, 5, 12, 24,
    5, 1, 87, 22, 5, 5, 41, 24, 5, 7, 24, 30, 11, 7, 12, 24,
    5, 1, 98, 24, 7, 3, 45, 28, 15, 2, 19, 24, 3, 13, 15, 30,
    1, 5, 107, 28, 10, 1, 46, 28, 1, 15, 22, 28, 2, 17, 14, 28,
    5, 1, 120, 30, 9, 4, 43, 26, 17, 1, 22, 28, 2, 19, 14, 28,
    3, 4, 113, 28, 3, 11, 44, 26, 17, 4, 21, 26, 9, 16, 13, 26,
    3, 5, 107, 28, 3, 13, 41, 26, 15, 5, 24, 30, 15, 10, 15, 28,
    4, 4, 116, 28, 17, 0, 42, 26, 17, 6, 22, 28, 19, 6, 16, 30,
    2, 7, 111, 28, 17, 0, 46, 28, 7, 16, 24, 30, 34, 0, 13, 24,
    4, 5, 121, 30, 4, 14, 47, 28, 11, 14, 24, 30, 16, 14, 15, 30,
    6, 4, 117, 30, 6, 14, 45, 28, 11, 16, 24, 30, 30, 2, 16, 30,
    8, 4, 106, 26, 8, 13, 47, 28, 7, 22, 24, 30, 22, 13, 15, 30,
    10, 2, 114, 28, 19, 4, 46, 28, 28, 6, 22, 28, 33, 4, 16, 30,
    8, 4, 122, 30, 22, 3, 45, 28, 8, 26, 23, 30, 12, 28, 15, 30,
    3, 10, 117, 30, 3, 23, 45, 28, 4, 31, 24, 30, 11, 31, 15, 30,
    7, 7, 116, 30, 21, 7, 45, 28, 1, 37, 23, 30, 19, 26, 15, 30,
    5, 10, 115, 30, 19, 10, 47, 28, 15, 25, 24, 30, 23, 25, 15, 30,
    13, 3, 115, 30, 2, 29, 46, 28, 42, 1, 24, 30, 23, 28, 15, 30,
    17, 0, 115, 30, 10, 23, 46, 28, 10, 35, 24, 30, 19, 35, 15, 30,
    17, 1, 115, 30, 14, 21, 46, 28, 29, 19, 24, 30, 11, 46, 15, 30,
    13, 6, 115, 30, 14, 23, 46, 28, 44, 7, 24, 30, 59, 1, 16, 30,
    12, 7, 121, 30, 12, 26, 47, 28, 39, 14, 24, 30, 22, 41, 15, 30,
    6, 14, 121, 30, 6, 34, 47, 28, 46, 10, 24, 30, 2, 64, 15, 30,
    17, 4, 122, 30, 29, 14, 46, 28, 49, 10, 24, 30, 24, 46, 15, 30,
    4, 18, 122, 30, 13, 32, 46, 28, 48, 14, 24, 30, 42, 32, 15, 30,
    20, 4, 117, 30, 40, 7, 47, 28, 43, 22, 24, 30, 10, 67, 15, 30,
    19, 6, 118, 30, 18, 31, 47, 28, 34, 34, 24, 30, 20, 61, 15, 30,
))

# Spacing of alignment patterns for each version (index 0 unused).
_ALIGN_DELTA = (
    0, 11, 15, 19, 23, 27, 31,
    16, 18, 20, 22, 24, 26, 28, 20, 22, 24, 24, 26, 28, 28, 22, 24, 24,
    26, 26, 28, 28, 24, 24, 26, 26, 26, 28, 28, 24, 26, 26, 26, 28, 28,
)

# BCH-coded version information for versions 7 to 40 (low 12 bits).
_VERSION_PATTERNS = (
    0xC94, 0x5BC, 0xA99, 0x4D3, 0xBF6, 0x762, 0x847, 0x60D,
    0x928, 0xB78, 0x45D, 0xA17, 0x532, 0x9A6, 0x683, 0x8C9,
    0x7EC, 0xEC4, 0x1E1, 0xFAB, 0x08E, 0xC1A, 0x33F, 0xD75,
    0x250, 0x9D5, 0x6F0, 0x8BA, 0x79F, 0xB0B, 0x42E, 0xA64,
    0x541, 0xC69,
)


def _as_level(level: EccLevel | int | str) -> EccLevel:
    if isinstance(level, str):
        try:
            return EccLevel[level.upper()]
        except KeyError:
            raise ValueError(f"unknown error-correction level {level!r}") from None
    try:
        return EccLevel(level)
    except ValueError:
        raise ValueError(f"unknown error-correction level {level!r}") from None


def _check_version(version: int) -> None:
    if not MIN_VERSION <= version <= MAX_VERSION:
        raise ValueError(
            f"version must be between {MIN_VERSION} and {MAX_VERSION}, got {version}"
        )


def symbol_width(version: int) -> int:
    """Number of modules along one side of a symbol of this version."""
    _check_version(version)
    return 17 + 4 * version


@dataclass(frozen=True)
class EccSpec:
    """Block structure of one version at one error-correction level."""

    level: EccLevel
    version: int
    blocks1: int
    blocks2: int
    data_width: int
    ecc_width: int

    @property
    def width(self) -> int:
        return 17 + 4 * self.version

    @property
    def block_count(self) -> int:
        return self.blocks1 + self.blocks2

    @property
    def data_codewords(self) -> int:
        return self.data_width * self.block_count + self.blocks2

    @property
    def ecc_codewords(self) -> int:
        return self.ecc_width * self.block_count

    @property
    def total_codewords(self) -> int:
        return self.data_codewords + self.ecc_codewords

    def capacity(self) -> int:
        """Largest number of 8-bit characters this symbol is meant to hold."""
        return self.data_codewords - 3


def ecc_spec(level: EccLevel | int | str, version: int) -> EccSpec:
    """Look up the block structure for a level and version."""
    lvl = _as_level(level)
    _check_version(version)
    index = (lvl - 1) * 4 + (version - 1) * 16
    blocks1, blocks2, data_width, ecc_width = _ECC_BLOCKS[index:index + 4]
    return EccSpec(lvl, version, blocks1, blocks2, data_width, ecc_width)


def smallest_version(level: EccLevel | int | str, size: int) -> EccSpec:
    """The spec of the first version whose capacity exceeds ``size``.

    Versions 1 to 39 are tried in turn; if none fits, version 40 is returned.
    """
    lvl = _as_level(level)
    if size < 0:
        raise ValueError("size must not be negative")
    for version in range(MIN_VERSION, MAX_VERSION):
        spec = ecc_spec(lvl, version)
        if size < spec.capacity():
            return spec
    return ecc_spec(lvl, MAX_VERSION)


@dataclass
class Frame:
    """A square bit matrix packed eight modules per byte, most significant first."""

    width: int
    data: bytearray | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        if self.width <= 0:
            raise ValueError("frame width must be positive")
        size = self.stride * self.width
        if self.data is None:
            self.data = bytearray(size)
        else:
            self.data = bytearray(self.data)
            if len(self.data) != size:
                raise ValueError(f"frame data must be {size} bytes, got {len(self.data)}")

    @property
    def stride(self) -> int:
        """Bytes per row."""
        return (self.width + 7) // 8

    def _locate(self, x: int, y: int) -> tuple[int, int]:
        if not (0 <= x < self.width and 0 <= y < self.width):
            raise IndexError(f"module ({x}, {y}) outside a {self.width}-wide frame")
        return (x >> 3) + y * self.stride, 0x80 >> (x & 7)

    def get(self, x: int, y: int) -> bool:
        index, bit = self._locate(x, y)
        return bool(self.data[index] & bit)

    def set(self, x: int, y: int) -> None:
        index, bit = self._locate(x, y)
        self.data[index] |= bit

    def toggle(self, x: int, y: int) -> None:
        index, bit = self._locate(x, y)
        self.data[index] ^= bit

    def copy(self) -> Frame:
        return Frame(self.width, bytearray(self.data))

    def to_bytes(self) -> bytes:
        return bytes(self.data)


@dataclass(frozen=True)
class FrameTemplate:
    """Function patterns of one version and the set of modules they reserve.

    Reservation is kept for the triangle ``x <= y`` and is symmetric.
    """

    version: int
    base: Frame
    reserved: bytes = field(repr=False)

    @property
    def width(self) -> int:
        return self.base.width

    def is_reserved(self, x: int, y: int) -> bool:
        width = self.base.width
        if not (0 <= x < width and 0 <= y < width):
            raise IndexError(f"module ({x}, {y}) outside a {width}-wide frame")
        if x > y:
            x, y = y, x
        return bool(self.reserved[y * (y + 1) // 2 + x])


class _TemplateBuilder:
    def __init__(self, version: int) -> None:
        self.version = version
        self.width = symbol_width(version)
        self.frame = Frame(self.width)
        self.reserved = bytearray(self.width * (self.width + 1) // 2)

    def set(self, x: int, y: int) -> None:
        self.frame.set(x, y)

    def reserve(self, x: int, y: int) -> None:
        if x > y:
            x, y = y, x
        self.reserved[y * (y + 1) // 2 + x] = 1

    def finders(self) -> None:
        w = self.width
        for i, k in ((0, 0), (0, w - 7), (w - 7, 0)):
            self.set(i + 3, k + 3)
            for j in range(6):
                self.set(i + j, k)
                self.set(i, k + j + 1)
                self.set(i + 6, k + j)
                self.set(i + j + 1, k + 6)
            for j in range(1, 5):
                self.reserve(i + j, k + 1)
                self.reserve(i + 1, k + j + 1)
                self.reserve(i + 5, k + j)
                self.reserve(i + j + 1, k + 5)
            for j in range(2, 4):
                self.set(i + j, k + 2)
                self.set(i + 2, k + j + 1)
                self.set(i + 4, k + j)
                self.set(i + j + 1, k + 4)

    def alignment(self, x: int, y: int) -> None:
        self.set(x, y)
        for j in range(-2, 2):
            self.set(x + j, y - 2)
            self.set(x - 2, y + j + 1)
            self.set(x + 2, y + j)
            self.set(x + j + 1, y + 2)
        for j in range(2):
            self.reserve(x - 1, y + j)
            self.reserve(x + 1, y - j)
            self.reserve(x - j, y - 1)
            self.reserve(x + j, y + 1)

    def alignments(self) -> None:
        if self.version < 2:
            return
        delta = _ALIGN_DELTA[self.version]
        y = self.width - 7
        while True:
            x = self.width - 7
            while x > delta - 3:
                self.alignment(x, y)
                if x < delta:
                    break
                x -= delta
            if y <= delta + 9:
                break
            y -= delta
            self.alignment(6, y)
            self.alignment(y, 6)

    def version_info(self) -> None:
        if self.version < 7:
            return
        info = _VERSION_PATTERNS[self.version - 7]
        edge = self.width - 11
        bit = 17
        for x in range(6):
            for y in range(3):
                value = self.version >> (bit - 12) if bit > 11 else info >> bit
                a, b = 5 - x, 2 - y + edge
                if value & 1:
                    self.set(a, b)
                    self.set(b, a)
                else:
                    self.reserve(a, b)
                    self.reserve(b, a)
                bit -= 1

    def build(self) -> FrameTemplate:
        w = self.width
        self.finders()
        self.alignments()
        self.set(8, w - 8)  # the single dark module
        for y in range(7):
            self.reserve(7, y)
            self.reserve(w - 8, y)
            self.reserve(7, y + w - 7)
        for x in range(8):
            self.reserve(x, 7)
            self.reserve(x + w - 8, 7)
            self.reserve(x, w - 8)
        for x in range(9):
            self.reserve(x, 8)
        for x in range(8):
            self.reserve(x + w - 8, 8)
            self.reserve(8, x)
        for y in range(7):
            self.reserve(8, y + w - 7)
        for x in range(w - 14):
            if x & 1:
                self.reserve(8 + x, 6)
                self.reserve(6, 8 + x)
            else:
                self.set(8 + x, 6)
                self.set(6, 8 + x)
        self.version_info()
        for y in range(w):
            for x in range(y + 1):
                if self.frame.get(x, y):
                    self.reserve(x, y)
        return FrameTemplate(self.version, self.frame, bytes(self.reserved))


def build_template(version: int) -> FrameTemplate:
    """Lay out the finder, alignment, timing and version patterns of a symbol."""
    _check_version(version)
    return _TemplateBuilder(version).build()