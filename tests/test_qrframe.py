import pytest
from hypothesis import given, strategies as st

from embedkit.qrframe import (
    MAX_VERSION,
    EccLevel,
    EccSpec,
    Frame,
    build_template,
    ecc_spec,
    smallest_version,
)


def test_version_one_low_spec_matches_table():
    spec = ecc_spec(EccLevel.L, 1)
    assert (spec.blocks1, spec.blocks2, spec.data_width, spec.ecc_width) == (1, 0, 19, 7)
    assert spec.capacity() == spec.data_codewords - 3


def test_version_forty_high_spec_matches_table():
    spec = ecc_spec(EccLevel.H, 40)
    assert (spec.blocks1, spec.blocks2, spec.data_width, spec.ecc_width) == (20, 61, 15, 30)


def test_level_accepts_names_and_numbers():
    assert ecc_spec("q", 5) == ecc_spec(EccLevel.Q, 5)
    assert ecc_spec(3, 5) == ecc_spec(EccLevel.Q, 5)


@pytest.mark.parametrize("level", [0, 5, "X"])
def test_bad_level_rejected(level):
    with pytest.raises(ValueError):
        ecc_spec(level, 1)


@pytest.mark.parametrize("version", [0, MAX_VERSION + 1])
def test_bad_version_rejected(version):
    with pytest.raises(ValueError):
        ecc_spec(EccLevel.L, version)
    with pytest.raises(ValueError):
        build_template(version)


@pytest.mark.parametrize("version", range(1, MAX_VERSION + 1))
def test_total_codewords_same_for_every_level(version):
    totals = {ecc_spec(level, version).total_codewords for level in EccLevel}
    assert len(totals) == 1


@given(st.sampled_from(list(EccLevel)), st.integers(min_value=0, max_value=3000))
def test_smallest_version_is_smallest_that_fits(level, size):
    spec = smallest_version(level, size)
    assert isinstance(spec, EccSpec)
    if spec.version < MAX_VERSION:
        assert size < spec.capacity()
    if spec.version > 1:
        assert size >= ecc_spec(level, spec.version - 1).capacity()


def test_smallest_version_falls_back_to_largest():
    assert smallest_version(EccLevel.H, 100000).version == MAX_VERSION


def test_smallest_version_rejects_negative_size():
    with pytest.raises(ValueError):
        smallest_version(EccLevel.L, -1)


def test_frame_packs_most_significant_bit_first():
    frame = Frame(8)
    frame.set(0, 0)
    assert frame.to_bytes()[0] == 0x80


def test_frame_set_toggle_round_trip():
    frame = Frame(13)
    frame.set(12, 5)
    assert frame.get(12, 5)
    frame.toggle(12, 5)
    assert not frame.get(12, 5)
    frame.toggle(12, 5)
    assert frame.get(12, 5)
    assert len(frame.to_bytes()) == frame.stride * frame.width


def test_frame_copy_is_independent():
    frame = Frame(9)
    frame.set(1, 1)
    clone = frame.copy()
    clone.set(2, 2)
    assert clone.get(1, 1)
    assert not frame.get(2, 2)
    assert clone != frame


def test_frame_bounds_and_data_length():
    frame = Frame(5)
    with pytest.raises(IndexError):
        frame.get(5, 0)
    with pytest.raises(IndexError):
        frame.set(0, -1)
    with pytest.raises(ValueError):
        Frame(5, bytearray(3))


def test_finder_patterns():
    template = build_template(1)
    w = template.width
    for ox, oy in ((0, 0), (0, w - 7), (w - 7, 0)):
        assert template.base.get(ox, oy)
        assert template.base.get(ox + 3, oy + 3)
        assert not template.base.get(ox + 1, oy + 1)
        assert template.base.get(ox + 2, oy + 2)
        assert template.is_reserved(ox + 1, oy + 1)


def test_timing_and_dark_module():
    template = build_template(3)
    w = template.width
    assert template.base.get(8, 6)
    assert not template.base.get(9, 6)
    assert template.base.get(6, 8)
    assert template.is_reserved(9, 6)
    assert template.base.get(8, w - 8)
    assert not template.is_reserved(w - 1, w - 1)


def test_single_alignment_pattern_of_version_two():
    template = build_template(2)
    c = template.width - 7
    assert template.base.get(c, c)
    assert not template.base.get(c - 1, c - 1)
    assert template.base.get(c - 2, c - 2)
    assert template.is_reserved(c - 1, c)


def test_version_block_reserved():
    template = build_template(7)
    edge = template.width - 11
    for x in range(6):
        for y in range(edge, edge + 3):
            assert template.is_reserved(x, y)
            assert template.is_reserved(y, x)
            assert template.base.get(x, y) == template.base.get(y, x)


@pytest.mark.parametrize("version", [1, 2, 6, 7, 14, 21, 28, 40])
def test_template_free_modules_fit_codewords(version):
    template = build_template(version)
    w = template.width
    free = 0
    for y in range(w):
        for x in range(w):
            assert template.is_reserved(x, y) == template.is_reserved(y, x)
            if template.base.get(x, y):
                assert template.is_reserved(x, y)
            if not template.is_reserved(x, y):
                free += 1
    total_bits = ecc_spec(EccLevel.L, version).total_codewords * 8
    assert 0 <= free - total_bits < 8


def test_is_reserved_out_of_range():
    template = build_template(1)
    with pytest.raises(IndexError):
        template.is_reserved(template.width, 0)