import io

import pytest

from mpptools.formats import FBC_AFBC_V1, ErrorCode, FrameFormat, MppError
from mpptools.frame import Frame
from mpptools.image_fill import ImageFiller
from mpptools.image_io import dump_frame, read_image, unpack_10bit_line


def _filled(width, height, hor_stride, ver_stride, fmt, frame_count=5):
    buf = bytearray(hor_stride * ver_stride * 3)
    ImageFiller().fill(buf, width, height, hor_stride, ver_stride, fmt, frame_count)
    return buf


def _dump(buf, width, height, hor_stride, ver_stride, fmt):
    frame = Frame(
        width=width, height=height, hor_stride=hor_stride,
        ver_stride=ver_stride, fmt=fmt, buffer=buf,
    )
    out = io.BytesIO()
    dump_frame(frame, out)
    return out.getvalue()


def test_yuv420sp_round_trip():
    w, h, hs, vs = 8, 4, 16, 4
    src = _filled(w, h, hs, vs, FrameFormat.YUV420SP)
    data = _dump(src, w, h, hs, vs, FrameFormat.YUV420SP)
    assert len(data) == w * h * 3 // 2

    dst = bytearray(len(src))
    read_image(dst, io.BytesIO(data), w, h, hs, vs, FrameFormat.YUV420SP)
    for row in range(h):
        assert dst[row * hs:row * hs + w] == src[row * hs:row * hs + w]
    plane = hs * vs
    for row in range(h // 2):
        off = plane + row * hs
        assert dst[off:off + w] == src[off:off + w]


def test_yuv420p_round_trip():
    w, h, hs, vs = 8, 4, 8, 4
    src = _filled(w, h, hs, vs, FrameFormat.YUV420P)
    data = _dump(src, w, h, hs, vs, FrameFormat.YUV420P)
    assert len(data) == w * h * 3 // 2

    dst = bytearray(len(src))
    read_image(dst, io.BytesIO(data), w, h, hs, vs, FrameFormat.YUV420P)
    used = hs * vs * 3 // 2
    assert dst[:used] == src[:used]


def test_rgb888_round_trip():
    w, h, hs, vs = 4, 3, 12, 3
    src = bytearray(range(hs * h))
    data = _dump(src, w, h, hs, vs, FrameFormat.RGB888)
    dst = bytearray(hs * h)
    read_image(dst, io.BytesIO(data), w, h, hs, vs, FrameFormat.RGB888)
    assert dst == src


def test_read_short_stream_raises():
    buf = bytearray(64)
    with pytest.raises(MppError) as err:
        read_image(buf, io.BytesIO(b"\x01" * 10), 4, 4, 4, 4, FrameFormat.YUV420SP)
    assert err.value.code == ErrorCode.NOK


def test_read_unsupported_format_raises_value():
    buf = bytearray(64)
    with pytest.raises(MppError) as err:
        read_image(buf, io.BytesIO(b"\x00" * 64), 4, 4, 4, 4, FrameFormat.YUV440SP)
    assert err.value.code == ErrorCode.VALUE


def test_read_small_stride_is_widened_to_row_size():
    buf = bytearray(16)
    data = bytes(range(1, 9))
    read_image(buf, io.BytesIO(data), 4, 2, 2, 2, FrameFormat.YUV400)
    assert buf[:8] == data


def test_read_fbc_afbc_v1_header_then_payload():
    fmt = FrameFormat.YUV420SP | FBC_AFBC_V1
    header = 4096
    payload = 16 * 16 * 3 // 2
    data = bytes(i & 0xFF for i in range(header + payload))
    buf = bytearray(header + payload)
    read_image(buf, io.BytesIO(data), 16, 16, 16, 16, fmt)
    assert buf == data


def test_read_fbc_short_header_raises():
    fmt = FrameFormat.YUV420SP | FBC_AFBC_V1
    with pytest.raises(MppError):
        read_image(bytearray(8192), io.BytesIO(b"\x00" * 100), 16, 16, 16, 16, fmt)


def test_unpack_10bit_all_ones():
    assert unpack_10bit_line(b"\xff" * 10, 8) == [0x3FF] * 8


def test_unpack_10bit_first_sample_only():
    data = bytes([0xFF, 0x03]) + bytes(8)
    assert unpack_10bit_line(data, 8) == [0x3FF] + [0] * 7


def test_unpack_10bit_truncates_and_pads():
    samples = unpack_10bit_line(b"\xff" * 5, 3)
    assert len(samples) == 3
    assert samples == [0x3FF] * 3


def test_dump_10bit_length():
    w, h, hs, vs = 8, 2, 10, 2
    buf = bytearray(b"\xff" * (hs * vs * 2))
    data = _dump(buf, w, h, hs, vs, FrameFormat.YUV420SP_10BIT)
    assert len(data) == w * 2 * (h + h // 2)
    assert data[:2] == b"\xff\x03"


def test_dump_yuv422sp_splits_chroma():
    w, h, hs, vs = 4, 2, 4, 2
    luma = bytes(range(8))
    chroma = bytes([10, 20, 11, 21, 12, 22, 13, 23])
    data = _dump(bytearray(luma + chroma), w, h, hs, vs, FrameFormat.YUV422SP)
    assert data == luma + bytes([10, 11, 12, 13]) + bytes([20, 21, 22, 23])


def test_dump_yuv444sp_splits_chroma():
    w, h, hs, vs = 2, 1, 2, 1
    buf = bytearray(bytes([1, 2]) + bytes([30, 40, 31, 41]))
    data = _dump(buf, w, h, hs, vs, FrameFormat.YUV444SP)
    assert data == bytes([1, 2, 30, 31, 40, 41])


def test_dump_unsupported_format_raises():
    with pytest.raises(MppError):
        _dump(bytearray(64), 2, 2, 6, 2, FrameFormat.BGR888)


def test_dump_without_buffer_writes_nothing():
    out = io.BytesIO()
    dump_frame(Frame(width=4, height=4, hor_stride=4, ver_stride=4), out)
    assert out.getvalue() == b""