"""Pixel formats, codec identifiers, colour metadata and error codes."""

from __future__ import annotations

from enum import IntEnum

# Bit layout of a frame format value:
#   bit  0 ~ 15: YUV / RGB format value
#   bit 16 ~ 19: colour family, 0 - YUV, 1 - RGB
#   bit 20 ~ 23: frame buffer compression, 0 - none, 1 - AFBC v1, 2 - AFBC v2
#   bit 24     : endianness, 0 - big endian, 1 - little endian
#   bit 25     : tile format flag
#   bit 26 ~ 27: high dynamic range flag
FMT_MASK = 0x000FFFFF
FMT_PROP_MASK = 0x0FF00000

FMT_COLOR_MASK = 0x000F0000
FMT_YUV = 0x00000000
FMT_RGB = 0x00010000

FBC_MASK = 0x00F00000
FBC_NONE = 0x00000000
FBC_AFBC_V1 = 0x00100000
FBC_AFBC_V2 = 0x00200000

HDR_MASK = 0x0C000000
HDR_NONE = 0x00000000
HDR = 0x04000000

TILE_FLAG = 0x02000000
FMT_LE_MASK = 0x01000000

# Frame mode flags.
FRAME_FLAG_FRAME = 0x00000000
FRAME_FLAG_TOP_FIELD = 0x00000001
FRAME_FLAG_BOT_FIELD = 0x00000002
FRAME_FLAG_PAIRED_FIELD = FRAME_FLAG_TOP_FIELD | FRAME_FLAG_BOT_FIELD
FRAME_FLAG_TOP_FIRST = 0x00000004
FRAME_FLAG_BOT_FIRST = 0x00000008
FRAME_FLAG_DEINTERLACED = FRAME_FLAG_TOP_FIRST | FRAME_FLAG_BOT_FIRST
FRAME_FLAG_FIELD_ORDER_MASK = 0x0000000C
FRAME_FLAG_VIEW_ID_MASK = 0x000000F0
FRAME_FLAG_IEP_DEI_MASK = 0x00000F00
FRAME_FLAG_IEP_DEI_I2O1 = 0x00000100
FRAME_FLAG_IEP_DEI_I4O2 = 0x00000200
FRAME_FLAG_IEP_DEI_I4O1 = 0x00000300


class FrameFormat(IntEnum):
    """Colour format index; may be combined with the property flags above."""

    YUV420SP = FMT_YUV + 0
    YUV420SP_10BIT = FMT_YUV + 1
    YUV422SP = FMT_YUV + 2
    YUV422SP_10BIT = FMT_YUV + 3
    YUV420P = FMT_YUV + 4
    YUV420SP_VU = FMT_YUV + 5
    YUV422P = FMT_YUV + 6
    YUV422SP_VU = FMT_YUV + 7
    YUV422_YUYV = FMT_YUV + 8
    YUV422_YVYU = FMT_YUV + 9
    YUV422_UYVY = FMT_YUV + 10
    YUV422_VYUY = FMT_YUV + 11
    YUV400 = FMT_YUV + 12
    YUV440SP = FMT_YUV + 13
    YUV411SP = FMT_YUV + 14
    YUV444SP = FMT_YUV + 15
    YUV444P = FMT_YUV + 16
    YUV444SP_10BIT = FMT_YUV + 17

    RGB565 = FMT_RGB + 0
    BGR565 = FMT_RGB + 1
    RGB555 = FMT_RGB + 2
    BGR555 = FMT_RGB + 3
    RGB444 = FMT_RGB + 4
    BGR444 = FMT_RGB + 5
    RGB888 = FMT_RGB + 6
    BGR888 = FMT_RGB + 7
    RGB101010 = FMT_RGB + 8
    BGR101010 = FMT_RGB + 9
    ARGB8888 = FMT_RGB + 10
    ABGR8888 = FMT_RGB + 11
    BGRA8888 = FMT_RGB + 12
    RGBA8888 = FMT_RGB + 13


YUV_BUTT = FrameFormat.YUV444SP_10BIT + 1
RGB_BUTT = FrameFormat.RGBA8888 + 1
FMT_BUTT = RGB_BUTT + 1


class CodingType(IntEnum):
    """Video compression coding."""

    UNUSED = 0
    AUTO_DETECT = 1
    MPEG2 = 2
    H263 = 3
    MPEG4 = 4
    WMV = 5
    RV = 6
    AVC = 7
    MJPEG = 8
    VP8 = 9
    VP9 = 10
    VC1 = 0x01000000
    FLV1 = 0x01000001
    DIVX3 = 0x01000002
    VP6 = 0x01000003
    HEVC = 0x01000004
    AVSPLUS = 0x01000005
    AVS = 0x01000006
    AVS2 = 0x01000007
    AV1 = 0x01000008
    KHRONOS_EXTENSIONS = 0x6F000000
    VENDOR_START_UNUSED = 0x7F000000
    MAX = 0x7FFFFFFF


class ColorRange(IntEnum):
    """MPEG versus JPEG YUV range."""

    UNSPECIFIED = 0
    MPEG = 1
    JPEG = 2


class ColorPrimaries(IntEnum):
    """Chromaticity coordinates of the source primaries."""

    RESERVED0 = 0
    BT709 = 1
    UNSPECIFIED = 2
    RESERVED = 3
    BT470M = 4
    BT470BG = 5
    SMPTE170M = 6
    SMPTE240M = 7
    FILM = 8
    BT2020 = 9
    SMPTEST428_1 = 10
    SMPTE431 = 11
    SMPTE432 = 12
    JEDEC_P22 = 22


class ColorTransfer(IntEnum):
    """Colour transfer characteristic."""

    RESERVED0 = 0
    BT709 = 1
    UNSPECIFIED = 2
    RESERVED = 3
    GAMMA22 = 4
    GAMMA28 = 5
    SMPTE170M = 6
    SMPTE240M = 7
    LINEAR = 8
    LOG = 9
    LOG_SQRT = 10
    IEC61966_2_4 = 11
    BT1361_ECG = 12
    IEC61966_2_1 = 13
    BT2020_10 = 14
    BT2020_12 = 15
    SMPTEST2084 = 16
    SMPTEST428_1 = 17
    ARIB_STD_B67 = 18


class ColorSpace(IntEnum):
    """YUV colour space."""

    RGB = 0
    BT709 = 1
    UNSPECIFIED = 2
    RESERVED = 3
    FCC = 4
    BT470BG = 5
    SMPTE170M = 6
    SMPTE240M = 7
    YCOCG = 8
    BT2020_NCL = 9
    BT2020_CL = 10
    SMPTE2085 = 11
    CHROMA_DERIVED_NCL = 12
    CHROMA_DERIVED_CL = 13
    ICTCP = 14


class ChromaLocation(IntEnum):
    """Location of the first chroma sample."""

    UNSPECIFIED = 0
    LEFT = 1
    CENTER = 2
    TOPLEFT = 3
    TOP = 4
    BOTTOMLEFT = 5
    BOTTOM = 6


class ErrorCode(IntEnum):
    """Result codes reported by the media pipeline."""

    OK = 0
    NOK = -1
    UNKNOWN = -2
    NULL_PTR = -3
    MALLOC = -4
    OPEN_FILE = -5
    VALUE = -6
    READ_BIT = -7
    TIMEOUT = -8
    PERM = -9

    BASE = -1000
    LIST_STREAM = -1001
    INIT = -1002
    VPU_CODEC_INIT = -1003
    STREAM = -1004
    FATAL_THREAD = -1005
    NOMEM = -1006
    PROTOL = -1007
    FAIL_SPLIT_FRAME = -1008
    VPUHW = -1009
    EOS_STREAM_REACHED = -1011
    BUFFER_FULL = -1012
    DISPLAY_FULL = -1013


class MppError(Exception):
    """Error carrying an :class:`ErrorCode`."""

    def __init__(self, message: str = "", code: ErrorCode = ErrorCode.NOK) -> None:
        self.code = ErrorCode(code)
        super().__init__(message or self.code.name.lower())


def base_format(fmt: int) -> int:
    """Return the format value with all property flags removed."""
    return int(fmt) & FMT_MASK


def is_yuv(fmt: int) -> bool:
    """True when ``fmt`` names a YUV format."""
    return (fmt & FMT_COLOR_MASK) == FMT_YUV and (fmt & FMT_MASK) < YUV_BUTT


def is_yuv_10bit(fmt: int) -> bool:
    """True for the packed 10-bit semi-planar YUV formats."""
    return (fmt & FMT_MASK) in (FrameFormat.YUV420SP_10BIT, FrameFormat.YUV422SP_10BIT)


def is_rgb(fmt: int) -> bool:
    """True when ``fmt`` names an RGB format."""
    return (fmt & FMT_COLOR_MASK) == FMT_RGB and (fmt & FMT_MASK) < RGB_BUTT


def is_fbc(fmt: int) -> bool:
    """True when frame buffer compression is flagged."""
    return bool(fmt & FBC_MASK)


def is_hdr(fmt: int) -> bool:
    """True when the high dynamic range flag is set."""
    return bool(fmt & HDR_MASK)


def is_le(fmt: int) -> bool:
    """True when the little-endian flag is set."""
    return (fmt & FMT_LE_MASK) == FMT_LE_MASK


def is_be(fmt: int) -> bool:
    """True when the little-endian flag is clear."""
    return (fmt & FMT_LE_MASK) == 0


def is_tile(fmt: int) -> bool:
    """True when the tile format flag is set."""
    return bool(fmt & TILE_FLAG)