import io

import pytest

from mpptools.checksum import (
    DataCrc,
    FrameCrc,
    calc_data_crc,
    calc_frame_crc,
    read_data_crc,
    read_frame_crc,
    wide_bit_sum,
    write_data_crc,
    write_frame_crc,
)
from mpptools.formats import ErrorCode, MppError
from mpptools.frame import Frame


def _frame(width, height, stride, fill=0x11, pad=0x00):
    rows = []
    for _ in range(height + height // 2):
        rows.append(bytes([fill]) * width + bytes([pad]) * (stride - width))
    return Frame(width=width, height=height, hor_stride=stride, ver_stride=height,
                 buffer=bytearray(b"".join(rows)))


def test_wide_bit_sum_words_and_tail():
    assert wide_bit_sum(b"\x01\x00\x00\x00\x02") == 3


def test_wide_bit_sum_empty():
    assert wide_bit_sum(b"") == 0


def test_wide_bit_sum_is_additive_over_word_boundaries():
    a = bytes(range(16))
    b = bytes(range(100, 120))
    assert wide_bit_sum(a + b) == wide_bit_sum(a) + wide_bit_sum(b)


def test_calc_data_crc_length_and_single_group():
    data = bytes(range(37))
    crc = calc_data_crc(data)
    assert crc.length == 37
    assert crc.sum_count == 1
    assert crc.sums == [wide_bit_sum(data)]


def test_calc_data_crc_empty():
    crc = calc_data_crc(b"")
    assert crc.length == 0
    assert crc.sums == []
    assert crc.vor == 0


def test_calc_data_crc_xor_cancels_on_repeat():
    data = bytes(range(24))
    assert calc_data_crc(data + data).vor == 0


def test_calc_data_crc_xor_of_tail_only():
    assert calc_data_crc(b"\x01\x02").vor == 0x0201


def test_write_data_crc_format():
    out = io.StringIO()
    write_data_crc(out, DataCrc(length=5, sums=[0x1F], vor=0xAB))
    assert out.getvalue() == "00000005, 1f, 000000ab\n"


def test_data_crc_round_trip():
    crc = calc_data_crc(bytes(range(250)) * 3)
    out = io.StringIO()
    write_data_crc(out, crc)
    out.seek(0)
    assert read_data_crc(out, crc.sum_count) == crc


def test_read_data_crc_eof():
    with pytest.raises(MppError) as info:
        read_data_crc(io.StringIO(""), 1)
    assert info.value.code == ErrorCode.NOK


def test_read_data_crc_bad_field():
    with pytest.raises(MppError) as info:
        read_data_crc(io.StringIO("12, zz, 00000001\n"), 1)
    assert info.value.code == ErrorCode.VALUE


def test_frame_crc_lengths():
    crc = calc_frame_crc(_frame(8, 4, 12))
    assert crc.luma.length == 32
    assert crc.chroma.length == 16
    assert crc.luma.sum_count == 1
    assert crc.chroma.sum_count == 1


def test_frame_crc_ignores_stride_padding():
    a = calc_frame_crc(_frame(8, 4, 12, pad=0x00))
    b = calc_frame_crc(_frame(8, 4, 12, pad=0xEE))
    assert a == b


def test_frame_crc_chroma_xor_continues_from_luma():
    frame = _frame(8, 4, 8)
    frame.buffer[8 * 4:] = bytes(len(frame.buffer) - 8 * 4)
    crc = calc_frame_crc(frame)
    assert crc.chroma.vor == crc.luma.vor
    assert crc.chroma.sums == [0]


def test_frame_crc_luma_sum_matches_row_data():
    frame = _frame(8, 2, 8)
    crc = calc_frame_crc(frame)
    assert crc.luma.sums == [wide_bit_sum(bytes(frame.buffer[:16]))]


def test_frame_crc_requires_buffer():
    with pytest.raises(MppError) as info:
        calc_frame_crc(Frame(width=4, height=2, hor_stride=4))
    assert info.value.code == ErrorCode.NULL_PTR


def test_frame_crc_rejects_zero_width():
    with pytest.raises(ValueError):
        calc_frame_crc(Frame(width=0, height=2, buffer=bytearray(8)))


def test_frame_crc_short_buffer():
    frame = _frame(8, 4, 8)
    frame.buffer = frame.buffer[:20]
    with pytest.raises(ValueError):
        calc_frame_crc(frame)


def test_write_frame_crc_format():
    out = io.StringIO()
    crc = FrameCrc(luma=DataCrc(8, [0x2A], 0x1), chroma=DataCrc(4, [0x3], 0x2))
    write_frame_crc(out, crc)
    assert out.getvalue() == "8, 2a, 00000001, 4, 3, 00000002\n"


def test_frame_crc_round_trip():
    crc = calc_frame_crc(_frame(16, 6, 20, fill=0x5A))
    out = io.StringIO()
    write_frame_crc(out, crc)
    out.seek(0)
    assert read_frame_crc(out, crc.luma.sum_count, crc.chroma.sum_count) == crc


def test_read_frame_crc_too_few_fields():
    with pytest.raises(MppError):
        read_frame_crc(io.StringIO("8, 2a, 00000001\n"), 1, 1)