"""Encode 8-bit data into a QR code symbol.

The pipeline is: byte-mode bit stream, Reed-Solomon error correction per
block, interleaving, placement along the zig-zag path, choice of the mask
with the lowest penalty, and finally the format information.
"""

from __future__ import annotations

from dataclasses import dataclass
from itertools import cycle, groupby
from typing import Callable, Iterator, Sequence

from .qrframe import (
    EccLevel,
    EccSpec,
    Frame,
    FrameTemplate,
    _as_level,
    build_template,
    smallest_version,
)

_GF_POLY = 0x11D
_MASK_COUNT = 8

# Penalty weights.
_N1 = 3
_N2 = 3
_N3 = 40
_N4 = 10

# Format words, indexed by (level - 1) << 3 | mask.
_FORMAT_WORDS = (
    0x77C4, 0x72F3, 0x7DAA, 0x789D, 0x662F, 0x6318, 0x6C41, 0x6976,  # L
    0x5412, 0x5125, 0x5E7C, 0x5B4B, 0x45F9, 0x40CE, 0x4F97, 0x4AA0,  # M
    0x355F, 0x3068, 0x3F31, 0x3A06, 0x24B4, 0x2183, 0x2EDA, 0x2BED,  # Q
    0x1689, 0x13BE, 0x1CE7, 0x19D0, 0x0762, 0x0255, 0x0D0C, 0x083B,  # H
)


def _gf_tables() -> tuple[tuple[int, ...], tuple[int, ...]]:
    log = [0] * 256
    exp = [0] * 256
    log[0] = 255
    exp[255] = 0
    value = 1
    for power in range(255):
        log[value] = power
        exp[power] = value
        value <<= 1
        if value & 0x100:
            value ^= _GF_POLY
        value &= 0xFF
    return tuple(log), tuple(exp)


_LOG, _EXP = _gf_tables()


def rs_generator(ecc_len: int) -> tuple[int, ...]:
    """Coefficients of the Reed-Solomon generator polynomial of degree ``ecc_len``.

    Index ``k`` of the result holds the coefficient of ``x**k``.
    """
    if ecc_len < 1:
        raise ValueError("ecc_len must be at least 1")
    poly = [1] + [0] * ecc_len
    for i in range(ecc_len):
        poly[i + 1] = 1
        for j in range(i, 0, -1):
            if poly[j]:
                poly[j] = poly[j - 1] ^ _EXP[(_LOG[poly[j]] + i) % 255]
            else:
                poly[j] = poly[j - 1]
        poly[0] = _EXP[(_LOG[poly[0]] + i) % 255]
    return tuple(poly)


def rs_remainder(data: bytes | Sequence[int], generator: Sequence[int]) -> bytes:
    """Error-correction codewords for ``data`` under ``generator``."""
    ecc_len = len(generator) - 1
    if ecc_len < 1:
        raise ValueError("generator must have degree at least 1")
    gen_log = [_LOG[c] for c in generator]
    ecc = [0] * ecc_len
    for byte in data:
        feedback = _LOG[byte ^ ecc[0]]
        if feedback != 255:
            for j in range(1, ecc_len):
                ecc[j - 1] = ecc[j] ^ _EXP[(feedback + gen_log[ecc_len - j]) % 255]
            ecc[-1] = _EXP[(feedback + gen_log[0]) % 255]
        else:
            ecc[:-1] = ecc[1:]
            ecc[-1] = 0
    return bytes(ecc)


def _data_stream(payload: bytes, spec: EccSpec) -> bytes:
    total = spec.data_codewords
    long_count = spec.version > 9
    count_bits = 16 if long_count else 8
    size = min(len(payload), total - (3 if long_count else 2))
    payload = payload[:size]

    value = (0x4 << count_bits) | size
    value = (value << (8 * size)) | int.from_bytes(payload, "big")
    value <<= 4
    stream = bytearray(value.to_bytes((count_bits + 8 * size + 8) // 8, "big"))
    padding = cycle((0xEC, 0x11))
    while len(stream) < total:
        stream.append(next(padding))
    return bytes(stream)


def _interleave(blocks: Sequence[bytes]) -> Iterator[int]:
    longest = max(len(block) for block in blocks)
    for i in range(longest):
        for block in blocks:
            if i < len(block):
                yield block[i]


def encode_codewords(data: bytes | str, spec: EccSpec) -> bytes:
    """Byte-mode encode ``data`` and return interleaved data and ECC codewords.

    Data longer than the symbol holds is cut short.
    """
    payload = data.encode("utf-8") if isinstance(data, str) else bytes(data)
    stream = _data_stream(payload, spec)

    blocks = []
    offset = 0
    widths = [spec.data_width] * spec.blocks1 + [spec.data_width + 1] * spec.blocks2
    for width in widths:
        blocks.append(stream[offset:offset + width])
        offset += width

    generator = rs_generator(spec.ecc_width)
    ecc_blocks = [rs_remainder(block, generator) for block in blocks]
    return bytes(_interleave(blocks)) + bytes(_interleave(ecc_blocks))


def _placement_path(template: FrameTemplate) -> Iterator[tuple[int, int]]:
    """Free modules in the order codeword bits are placed."""
    width = template.width
    x = y = width - 1
    upward = True
    horizontal = True
    yield x, y
    while True:
        if horizontal:
            x -= 1
        else:
            x += 1
            if upward:
                if y != 0:
                    y -= 1
                else:
                    x -= 2
                    upward = False
                    if x == 6:
                        x -= 1
                        y = 9
            else:
                if y != width - 1:
                    y += 1
                else:
                    x -= 2
                    upward = True
                    if x == 6:
                        x -= 1
                        y -= 8
        horizontal = not horizontal
        if not (0 <= x < width and 0 <= y < width):
            return
        if not template.is_reserved(x, y):
            yield x, y


def fill_frame(codewords: bytes | Sequence[int], template: FrameTemplate) -> Frame:
    """Place codeword bits, most significant first, into a copy of the template."""
    frame = template.base.copy()
    path = _placement_path(template)
    for byte in codewords:
        for shift in range(7, -1, -1):
            position = next(path, None)
            if position is None:
                raise ValueError("more codewords than the symbol has room for")
            if (byte >> shift) & 1:
                frame.set(*position)
    return frame


def _shared(x: int, y: int) -> int:
    r3x = x % 3
    return 1 if r3x and r3x == y % 3 else 0


_MASKS: tuple[Callable[[int, int], bool], ...] = (
    lambda x, y: (x + y) % 2 == 0,
    lambda x, y: y % 2 == 0,
    lambda x, y: x % 3 == 0,
    lambda x, y: (x + y) % 3 == 0,
    lambda x, y: ((y >> 1) + x // 3) & 1 == 0,
    lambda x, y: (x & y & 1) + (1 if x % 3 and y % 3 else 0) == 0,
    lambda x, y: ((x & y & 1) + _shared(x, y)) & 1 == 0,
    lambda x, y: (_shared(x, y) + ((x + y) & 1)) & 1 == 0,
)


def _check_mask(mask: int) -> None:
    if not 0 <= mask < _MASK_COUNT:
        raise ValueError(f"mask must be between 0 and {_MASK_COUNT - 1}, got {mask}")


def apply_mask(frame: Frame, template: FrameTemplate, mask: int) -> Frame:
    """Return a copy of ``frame`` with mask pattern ``mask`` applied to free modules."""
    _check_mask(mask)
    if frame.width != template.width:
        raise ValueError("frame and template differ in width")
    hit = _MASKS[mask]
    result = frame.copy()
    for y in range(frame.width):
        for x in range(frame.width):
            if hit(x, y) and not template.is_reserved(x, y):
                result.toggle(x, y)
    return result


def _run_lengths(line: Sequence[bool]) -> list[int]:
    lengths = [len(list(group)) for _, group in groupby(line)]
    if line and line[0]:
        lengths.insert(0, 0)
    return lengths


def _bad_runs(lengths: Sequence[int]) -> int:
    last = len(lengths) - 1
    score = sum(_N1 + run - 5 for run in lengths if run >= 5)
    for i in range(3, last - 1, 2):
        centre = lengths[i]
        if (
            lengths[i - 2] == lengths[i + 2] == lengths[i - 1] == lengths[i + 1]
            and lengths[i - 1] * 3 == centre
            and (
                lengths[i - 3] == 0
                or i + 3 > last
                or lengths[i - 3] * 3 >= centre * 4
                or lengths[i + 3] * 3 >= centre * 4
            )
        ):
            score += _N3
    return score


def badness(frame: Frame) -> int:
    """Penalty score of a frame: blocks, long runs, finder look-alikes and imbalance."""
    width = frame.width
    rows = [[frame.get(x, y) for x in range(width)] for y in range(width)]

    score = 0
    for y in range(width - 1):
        for x in range(width - 1):
            square = (rows[y][x], rows[y][x + 1], rows[y + 1][x], rows[y + 1][x + 1])
            if all(square) or not any(square):
                score += _N2

    score += sum(_bad_runs(_run_lengths(row)) for row in rows)

    balance = abs(sum(1 if module else -1 for row in rows for module in row))
    area = width * width
    score += max(0, (balance * 10 - 1) // area) * _N4

    score += sum(_bad_runs(_run_lengths(column)) for column in zip(*rows))
    return score


def add_format(frame: Frame, level: EccLevel | int | str, mask: int) -> Frame:
    """Return a copy of ``frame`` with both copies of the format information set."""
    _check_mask(mask)
    lvl = _as_level(level)
    bits = _FORMAT_WORDS[mask + ((lvl - 1) << 3)]
    width = frame.width
    result = frame.copy()
    for i in range(8):
        if (bits >> i) & 1:
            result.set(width - 1 - i, 8)
            result.set(8, i if i < 6 else i + 1)
    for i in range(7):
        if (bits >> (8 + i)) & 1:
            result.set(8, width - 7 + i)
            result.set(6 - i if i else 7, 8)
    return result


@dataclass(frozen=True)
class QrCode:
    """An encoded symbol: the final frame, the chosen mask and the unmasked fill."""

    spec: EccSpec
    mask: int
    frame: Frame
    unmasked: Frame

    @property
    def version(self) -> int:
        return self.spec.version

    @property
    def level(self) -> EccLevel:
        return self.spec.level

    @property
    def width(self) -> int:
        return self.frame.width

    def to_bytes(self) -> bytes:
        """The final symbol, packed eight modules per byte, rows padded to whole bytes."""
        return self.frame.to_bytes()


def encode(data: bytes | str, level: EccLevel | int | str = EccLevel.L) -> QrCode:
    """Encode ``data`` in the smallest symbol that holds it at ``level``."""
    payload = data.encode("utf-8") if isinstance(data, str) else bytes(data)
    spec = smallest_version(level, len(payload))
    template = build_template(spec.version)
    filled = fill_frame(encode_codewords(payload, spec), template)

    best_mask = 0
    best_score = 30000
    for mask in range(_MASK_COUNT):
        score = badness(apply_mask(filled, template, mask))
        if score < best_score:
            best_score = score
            best_mask = mask

    final = add_format(apply_mask(filled, template, best_mask), spec.level, best_mask)
    return QrCode(spec, best_mask, final, filled)