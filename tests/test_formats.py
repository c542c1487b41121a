import pytest

from mpptools.formats import (
    FBC_AFBC_V1,
    FBC_AFBC_V2,
    FMT_LE_MASK,
    HDR,
    TILE_FLAG,
    ChromaLocation,
    CodingType,
    ColorPrimaries,
    ErrorCode,
    FrameFormat,
    MppError,
    base_format,
    is_be,
    is_fbc,
    is_hdr,
    is_le,
    is_rgb,
    is_tile,
    is_yuv,
    is_yuv_10bit,
)

YUV_FORMATS = [f for f in FrameFormat if f.name.startswith("YUV")]
RGB_FORMATS = [f for f in FrameFormat if not f.name.startswith("YUV")]


def test_documented_values():
    assert base_format(0) == FrameFormat.YUV420SP
    assert is_yuv(0)
    assert base_format(0x00010000) == FrameFormat.RGB565
    assert is_rgb(0x00010000)
    assert CodingType(0x01000000) is CodingType.VC1
    assert CodingType(0x7FFFFFFF) is CodingType.MAX
    assert ErrorCode(-1000) is ErrorCode.BASE
    assert ColorPrimaries(22) is ColorPrimaries.JEDEC_P22
    assert MppError(code=-1000).code is ErrorCode.BASE


def test_enum_ordering_follows_header():
    assert CodingType(CodingType.VC1 + 1) is CodingType.FLV1
    assert CodingType(CodingType.AVS2 + 1) is CodingType.AV1
    assert base_format(FrameFormat.RGB565 + 13) == FrameFormat.RGBA8888
    assert is_rgb(FrameFormat.RGB565 + 13)
    assert MppError(code=ErrorCode.BASE - 13).code is ErrorCode.DISPLAY_FULL
    assert ChromaLocation(ChromaLocation.BOTTOMLEFT + 1) is ChromaLocation.BOTTOM


@pytest.mark.parametrize("fmt", YUV_FORMATS)
def test_yuv_formats_classified(fmt):
    assert is_yuv(fmt)
    assert not is_rgb(fmt)


@pytest.mark.parametrize("fmt", RGB_FORMATS)
def test_rgb_formats_classified(fmt):
    assert is_rgb(fmt)
    assert not is_yuv(fmt)


def test_out_of_range_values_are_neither():
    past_yuv = FrameFormat.YUV444SP_10BIT + 1
    past_rgb = FrameFormat.RGBA8888 + 1
    assert not is_yuv(past_yuv)
    assert not is_rgb(past_rgb)


def test_yuv_10bit():
    assert is_yuv_10bit(FrameFormat.YUV420SP_10BIT)
    assert is_yuv_10bit(FrameFormat.YUV422SP_10BIT | FMT_LE_MASK)
    assert not is_yuv_10bit(FrameFormat.YUV444SP_10BIT)
    assert not is_yuv_10bit(FrameFormat.YUV420SP)


def test_base_format_strips_flags():
    flagged = FrameFormat.YUV420SP | FBC_AFBC_V1 | FMT_LE_MASK | HDR | TILE_FLAG
    assert base_format(flagged) == FrameFormat.YUV420SP
    assert base_format(FrameFormat.BGR888 | FMT_LE_MASK) == FrameFormat.BGR888


@pytest.mark.parametrize("fmt", list(FrameFormat))
def test_base_format_identity_on_plain(fmt):
    assert base_format(fmt) == fmt


def test_fbc_flag():
    assert is_fbc(FrameFormat.YUV420SP | FBC_AFBC_V1)
    assert is_fbc(FrameFormat.YUV420SP | FBC_AFBC_V2)
    assert not is_fbc(FrameFormat.YUV420SP)
    assert is_yuv(FrameFormat.YUV420SP | FBC_AFBC_V1)


def test_hdr_and_tile_flags():
    assert is_hdr(FrameFormat.YUV420SP | HDR)
    assert not is_hdr(FrameFormat.YUV420SP)
    assert is_tile(FrameFormat.YUV422SP | TILE_FLAG)
    assert not is_tile(FrameFormat.YUV422SP)


def test_endianness_flags_are_exclusive():
    le = FrameFormat.RGB565 | FMT_LE_MASK
    assert is_le(le) and not is_be(le)
    assert is_be(FrameFormat.RGB565) and not is_le(FrameFormat.RGB565)
    assert is_rgb(le)


def test_mpp_error_carries_code():
    err = MppError("bad value", ErrorCode.VALUE)
    assert err.code is ErrorCode.VALUE
    assert str(err) == "bad value"
    with pytest.raises(MppError) as info:
        raise MppError(code=ErrorCode.TIMEOUT)
    assert info.value.code == ErrorCode.TIMEOUT
    assert str(info.value) == "timeout"


def test_mpp_error_default_code():
    assert MppError().code is ErrorCode.NOK


def test_mpp_error_rejects_unknown_code():
    with pytest.raises(ValueError):
        MppError("x", 12345)