import pytest
from hypothesis import given, settings, strategies as st

from embedkit.qrencode import (
    QrCode,
    add_format,
    apply_mask,
    badness,
    encode,
    encode_codewords,
    fill_frame,
    rs_generator,
    rs_remainder,
)
from embedkit.qrframe import EccLevel, Frame, build_template, ecc_spec

REFERENCE_TEXT = b"http://www.mageec.com"
REFERENCE_PREFIX = bytes([
    254, 101, 63, 128, 130, 110, 160, 128, 186, 65, 46,
    128, 186, 38, 46, 128, 186, 9, 174, 128, 130, 20,
])


def _gf_mul(a, b):
    result = 0
    while b:
        if b & 1:
            result ^= a
        a <<= 1
        if a & 0x100:
            a ^= 0x11D
        b >>= 1
    return result


def _alpha(power):
    value = 1
    for _ in range(power):
        value = _gf_mul(value, 2)
    return value


def _eval_high_first(coeffs, point):
    acc = 0
    for c in coeffs:
        acc = _gf_mul(acc, point) ^ c
    return acc


def _parse_stream(codewords, spec):
    raw = codewords[:spec.data_codewords]
    nbits = 8 * len(raw)
    value = int.from_bytes(raw, "big")
    count_bits = 16 if spec.version > 9 else 8
    mode = value >> (nbits - 4)
    count = (value >> (nbits - 4 - count_bits)) & ((1 << count_bits) - 1)
    shift = nbits - 4 - count_bits - 8 * count
    payload = ((value >> shift) & ((1 << (8 * count)) - 1)).to_bytes(count, "big")
    return mode, count, payload


def _popcount(frame):
    return sum(bin(b).count("1") for b in frame.to_bytes())


def _transpose(frame):
    result = Frame(frame.width)
    for y in range(frame.width):
        for x in range(frame.width):
            if frame.get(x, y):
                result.set(y, x)
    return result


def test_reference_symbol_matches_source_frame():
    code = encode(REFERENCE_TEXT, EccLevel.L)
    assert code.version == 2
    assert code.unmasked.to_bytes()[:22] == REFERENCE_PREFIX


def test_qrcode_to_bytes_is_final_frame():
    code = encode(REFERENCE_TEXT, 1)
    assert isinstance(code, QrCode)
    assert code.to_bytes() == code.frame.to_bytes()
    assert len(code.to_bytes()) == code.frame.stride * code.width


def test_str_and_bytes_encode_alike():
    assert encode("hello world", "M").to_bytes() == encode(b"hello world", "M").to_bytes()


def test_invalid_level_rejected():
    with pytest.raises(ValueError):
        encode(b"abc", "Z")


def test_chosen_mask_has_lowest_badness():
    code = encode(REFERENCE_TEXT, EccLevel.L)
    template = build_template(code.version)
    scores = [badness(apply_mask(code.unmasked, template, m)) for m in range(8)]
    assert scores[code.mask] == min(scores)
    assert scores.index(min(scores)) == code.mask


@pytest.mark.parametrize("length", [1, 7, 30])
def test_generator_roots(length):
    gen = rs_generator(length)
    assert len(gen) == length + 1
    assert gen[-1] == 1
    for i in range(length):
        assert _eval_high_first(list(reversed(gen)), _alpha(i)) == 0


def test_generator_rejects_zero_length():
    with pytest.raises(ValueError):
        rs_generator(0)


@settings(max_examples=50)
@given(st.binary(min_size=1, max_size=40), st.integers(min_value=2, max_value=30))
def test_remainder_makes_codeword_divisible(data, length):
    ecc = rs_remainder(data, rs_generator(length))
    assert len(ecc) == length
    word = list(data) + list(ecc)
    for i in range(length):
        assert _eval_high_first(word, _alpha(i)) == 0


@settings(max_examples=50)
@given(st.binary(max_size=17))
def test_codewords_round_trip_small_version(data):
    spec = ecc_spec(EccLevel.L, 1)
    codewords = encode_codewords(data, spec)
    assert len(codewords) == spec.total_codewords
    mode, count, payload = _parse_stream(codewords, spec)
    assert mode == 4
    assert count == len(data)
    assert payload == data


def test_codewords_truncate_overlong_input():
    spec = ecc_spec(EccLevel.L, 1)
    codewords = encode_codewords(b"x" * 30, spec)
    mode, count, payload = _parse_stream(codewords, spec)
    assert count == spec.data_codewords - 2
    assert payload == b"x" * count


def test_codewords_padding_and_single_block_ecc():
    spec = ecc_spec(EccLevel.L, 1)
    codewords = encode_codewords(b"A", spec)
    data_part = codewords[:spec.data_codewords]
    assert data_part[3:7] == bytes([0xEC, 0x11, 0xEC, 0x11])
    assert codewords[spec.data_codewords:] == rs_remainder(
        data_part, rs_generator(spec.ecc_width)
    )


def test_fill_frame_keeps_reserved_and_places_all_bits():
    spec = ecc_spec(EccLevel.Q, 3)
    template = build_template(spec.version)
    codewords = encode_codewords(b"fill me", spec)
    filled = fill_frame(codewords, template)
    for y in range(template.width):
        for x in range(template.width):
            if template.is_reserved(x, y):
                assert filled.get(x, y) == template.base.get(x, y)
    placed = sum(bin(b).count("1") for b in codewords)
    assert _popcount(filled) - _popcount(template.base) == placed


def test_fill_frame_rejects_too_many_codewords():
    template = build_template(1)
    with pytest.raises(ValueError):
        fill_frame(bytes(100), template)


@pytest.mark.parametrize("mask", range(8))
def test_apply_mask_is_involution_and_spares_reserved(mask):
    template = build_template(2)
    filled = encode(REFERENCE_TEXT, "L").unmasked
    masked = apply_mask(filled, template, mask)
    assert apply_mask(masked, template, mask).to_bytes() == filled.to_bytes()
    for y in range(template.width):
        for x in range(template.width):
            if template.is_reserved(x, y):
                assert masked.get(x, y) == filled.get(x, y)


def test_apply_mask_rejects_bad_mask():
    template = build_template(1)
    with pytest.raises(ValueError):
        apply_mask(template.base, template, 8)


def test_apply_mask_leaves_input_untouched():
    template = build_template(1)
    before = template.base.to_bytes()
    apply_mask(template.base, template, 0)
    assert template.base.to_bytes() == before


@pytest.mark.parametrize("mask", range(8))
def test_badness_invariant_under_transpose(mask):
    code = encode(REFERENCE_TEXT, "L")
    masked = apply_mask(code.unmasked, build_template(code.version), mask)
    score = badness(masked)
    assert score >= 0
    assert badness(_transpose(masked)) == score


def test_add_format_level_l_mask_0():
    frame = add_format(Frame(21), EccLevel.L, 0)
    width = 21
    value = 0
    for i in range(8):
        value |= int(frame.get(width - 1 - i, 8)) << i
    for i in range(7):
        value |= int(frame.get(8, width - 7 + i)) << (8 + i)
    assert value == 0x77C4


@pytest.mark.parametrize("level", list(EccLevel))
@pytest.mark.parametrize("mask", range(8))
def test_add_format_copies_agree(level, mask):
    width = 25
    frame = add_format(Frame(width), level, mask)
    for i in range(8):
        assert frame.get(width - 1 - i, 8) == frame.get(8, i if i < 6 else i + 1)
    for i in range(7):
        assert frame.get(8, width - 7 + i) == frame.get(6 - i if i else 7, 8)


def test_add_format_rejects_bad_mask():
    with pytest.raises(ValueError):
        add_format(Frame(21), EccLevel.L, -1)