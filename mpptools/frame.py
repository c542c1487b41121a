"""Decoded or source picture description and its internal status word."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Optional

from .formats import (
    FBC_AFBC_V1,
    FBC_MASK,
    FRAME_FLAG_BOT_FIELD,
    FRAME_FLAG_FIELD_ORDER_MASK,
    FRAME_FLAG_IEP_DEI_MASK,
    FRAME_FLAG_TOP_FIELD,
    FRAME_FLAG_VIEW_ID_MASK,
    ChromaLocation,
    ColorPrimaries,
    ColorRange,
    ColorSpace,
    ColorTransfer,
    FrameFormat,
)

SZ_4K = 4096

_STATUS_FLAGS = ("valid", "is_intra", "is_idr", "is_non_ref", "is_lt_ref", "is_b_frame")
_USAGE_SHIFT = len(_STATUS_FLAGS)
_USAGE_MASK = 0x7


def align(value: int, alignment: int) -> int:
    """Round ``value`` up to the next multiple of ``alignment``."""
    if alignment <= 0:
        raise ValueError(f"alignment must be positive, got {alignment}")
    return (value + alignment - 1) // alignment * alignment


@dataclass
class FrameStatus:
    """Frame status flags for internal flow, packed into a 64-bit word.

    ``usage``: 0 - general, 1 - decoder, 2 - encoder, 4 - vproc.
    """

    valid: bool = False
    is_intra: bool = False
    is_idr: bool = False
    is_non_ref: bool = False
    is_lt_ref: bool = False
    is_b_frame: bool = False
    usage: int = 0

    def __post_init__(self) -> None:
        if not 0 <= self.usage <= _USAGE_MASK:
            raise ValueError(f"usage must fit in 3 bits, got {self.usage}")

    @property
    def value(self) -> int:
        """The packed status word."""
        word = 0
        for bit, name in enumerate(_STATUS_FLAGS):
            if getattr(self, name):
                word |= 1 << bit
        return word | (self.usage & _USAGE_MASK) << _USAGE_SHIFT

    @classmethod
    def from_value(cls, value: int) -> "FrameStatus":
        """Unpack a status word; bits above the defined fields are ignored."""
        if value < 0 or value >= 1 << 64:
            raise ValueError(f"status word out of 64-bit range: {value}")
        flags = {name: bool(value >> bit & 1) for bit, name in enumerate(_STATUS_FLAGS)}
        return cls(usage=value >> _USAGE_SHIFT & _USAGE_MASK, **flags)


@dataclass(frozen=True)
class Rational:
    """A numerator and denominator pair, such as a sample aspect ratio."""

    num: int = 0
    den: int = 0


@dataclass
class MasteringDisplayMetadata:
    """Mastering display colour volume."""

    display_primaries: tuple = ((0, 0), (0, 0), (0, 0))
    white_point: tuple = (0, 0)
    max_luminance: int = 0
    min_luminance: int = 0


@dataclass
class ContentLightMetadata:
    """Content light level information."""

    max_cll: int = 0
    max_fall: int = 0


@dataclass
class HdrDynamicMeta:
    """Opaque dynamic HDR metadata."""

    hdr_fmt: int = 0
    data: bytes = b""

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass
class Frame:
    """A picture: dimensions, timing, colour metadata and pixel buffer."""

    width: int = 0
    height: int = 0
    hor_stride: int = 0
    ver_stride: int = 0
    hor_stride_pixel: int = 0
    fbc_hdr_stride: int = 0
    offset_x: int = 0
    offset_y: int = 0

    mode: int = 0
    discard: int = 0
    viewid: int = 0
    poc: int = 0
    pts: int = 0
    dts: int = 0

    eos: bool = False
    info_change: bool = False
    errinfo: int = 0

    color_range: ColorRange = ColorRange.UNSPECIFIED
    color_primaries: ColorPrimaries = ColorPrimaries.RESERVED0
    color_trc: ColorTransfer = ColorTransfer.RESERVED0
    colorspace: ColorSpace = ColorSpace.RGB
    chroma_location: ChromaLocation = ChromaLocation.UNSPECIFIED
    fmt: int = FrameFormat.YUV420SP

    sar: Rational = field(default_factory=Rational)
    mastering_display: MasteringDisplayMetadata = field(
        default_factory=MasteringDisplayMetadata
    )
    content_light: ContentLightMetadata = field(default_factory=ContentLightMetadata)
    hdr_dynamic_meta: Optional[HdrDynamicMeta] = None

    buffer: Optional[bytearray] = None
    buf_size: int = 0

    task: Any = None
    meta: Any = None

    fbc_offset: int = 0
    fbc_size: int = 0
    thumbnail_en: int = 0

    status: FrameStatus = field(default_factory=FrameStatus)

    @property
    def has_meta(self) -> bool:
        return self.meta is not None

    @property
    def is_top_field(self) -> bool:
        return bool(self.mode & FRAME_FLAG_TOP_FIELD)

    @property
    def is_bottom_field(self) -> bool:
        return bool(self.mode & FRAME_FLAG_BOT_FIELD)

    @property
    def field_order(self) -> int:
        return self.mode & FRAME_FLAG_FIELD_ORDER_MASK

    @property
    def view_id_flags(self) -> int:
        return self.mode & FRAME_FLAG_VIEW_ID_MASK

    @property
    def deinterlace_flags(self) -> int:
        return self.mode & FRAME_FLAG_IEP_DEI_MASK

    @property
    def fbc_stride(self) -> int:
        """Stride of the FBC header section: width aligned to 16."""
        return align(self.width, 16)

    def fbc_header_size(self) -> int:
        """Default FBC header size, aligned to 4 KiB."""
        return align(align(self.width, 16) * align(self.height, 16) // 16, SZ_4K)

    def fbc_payload_offset(self) -> int:
        """Payload offset implied by the format: derived for AFBC v1, else zero."""
        if (self.fmt & FBC_MASK) == FBC_AFBC_V1:
            return self.fbc_header_size()
        return 0

    def copy(self) -> "Frame":
        """Copy all fields; the pixel buffer and meta are shared, the status is not."""
        return replace(self, status=replace(self.status))