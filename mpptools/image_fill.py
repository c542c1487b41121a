"""Synthetic test-pattern generation for raw picture buffers."""

from __future__ import annotations

import logging
from typing import Callable, Dict, Sequence, Tuple

from .formats import (
    ErrorCode,
    FrameFormat,
    MppError,
    base_format,
    is_be,
)
from .frame import align

logger = logging.getLogger(__name__)

_Packer = Callable[[int, int, int], int]
_Component = Callable[[int, int], int]

# Pixel size in bytes and the function building the pixel word (most
# significant byte first in big-endian order) for every RGB format.
_RGB_PACKERS: Dict[int, Tuple[int, _Packer]] = {
    FrameFormat.RGB565: (
        2,
        lambda r, g, b: ((r >> 3) & 0x1F) << 11 | ((g >> 2) & 0x3F) << 5 | ((b >> 3) & 0x1F),
    ),
    FrameFormat.BGR565: (
        2,
        lambda r, g, b: ((r >> 3) & 0x1F) | ((g >> 2) & 0x3F) << 5 | ((b >> 3) & 0x1F) << 11,
    ),
    FrameFormat.RGB555: (
        2,
        lambda r, g, b: ((r >> 3) & 0x1F) << 10 | ((g >> 3) & 0x1F) << 5 | ((b >> 3) & 0x1F),
    ),
    FrameFormat.BGR555: (
        2,
        lambda r, g, b: ((r >> 3) & 0x1F) | ((g >> 3) & 0x1F) << 5 | ((b >> 3) & 0x1F) << 10,
    ),
    FrameFormat.RGB444: (
        2,
        lambda r, g, b: ((r >> 4) & 0xF) << 8 | ((g >> 4) & 0xF) << 4 | ((b >> 4) & 0xF),
    ),
    FrameFormat.BGR444: (
        2,
        lambda r, g, b: ((r >> 4) & 0xF) | ((g >> 4) & 0xF) << 4 | ((b >> 4) & 0xF) << 8,
    ),
    FrameFormat.RGB888: (3, lambda r, g, b: r << 16 | g << 8 | b),
    FrameFormat.BGR888: (3, lambda r, g, b: b << 16 | g << 8 | r),
    FrameFormat.RGB101010: (
        4,
        lambda r, g, b: ((r * 4) & 0x3FF) << 20 | ((g * 4) & 0x3FF) << 10 | ((b * 4) & 0x3FF),
    ),
    FrameFormat.BGR101010: (
        4,
        lambda r, g, b: ((r * 4) & 0x3FF) | ((g * 4) & 0x3FF) << 10 | ((b * 4) & 0x3FF) << 20,
    ),
    FrameFormat.ARGB8888: (4, lambda r, g, b: 0xFF << 24 | r << 16 | g << 8 | b),
    FrameFormat.ABGR8888: (4, lambda r, g, b: 0xFF << 24 | b << 16 | g << 8 | r),
    FrameFormat.BGRA8888: (4, lambda r, g, b: b << 24 | g << 16 | r << 8 | 0xFF),
    FrameFormat.RGBA8888: (4, lambda r, g, b: r << 24 | g << 16 | b << 8 | 0xFF),
}


def _clip(value: int) -> int:
    return max(0, min(255, value))


def rgb_color(x: int, y: int, frame_count: int) -> Tuple[int, int, int]:
    """Return the test-pattern colour of pixel (x, y) as an (R, G, B) tuple.

    Frames 0, 1 and 2 are solid red, green and blue; later frames show a
    moving colour bar.
    """
    if frame_count == 0:
        return 0xFF, 0, 0
    if frame_count == 1:
        return 0, 0xFF, 0
    if frame_count == 2:
        return 0, 0, 0xFF

    luma = (x + y + frame_count * 3) & 0xFF
    u = (128 + y // 2 + frame_count * 2) & 0xFF
    v = (64 + x // 2 + frame_count * 5) & 0xFF

    r = luma + ((360 * (v - 128)) >> 8)
    g = luma - ((88 * (u - 128) + 184 * (v - 128)) >> 8)
    b = luma + ((455 * (u - 128)) >> 8)
    return _clip(r), _clip(g), _clip(b)


def pack_rgb_pixel(fmt: int, r: int, g: int, b: int, big_endian: bool) -> bytes:
    """Encode one pixel of an RGB format as bytes."""
    spec = _RGB_PACKERS.get(base_format(fmt))
    if spec is None:
        raise MppError(f"not an RGB format: {fmt:#x}", ErrorCode.VALUE)
    size, packer = spec
    word = packer(r & 0xFF, g & 0xFF, b & 0xFF)
    return word.to_bytes(size, "big" if big_endian else "little")


def _put(buf: bytearray, offset: int, data: bytes) -> None:
    end = offset + len(data)
    if end > len(buf):
        raise ValueError(f"buffer of {len(buf)} bytes too small, need {end}")
    buf[offset:end] = data


def _interleaved(
    buf: bytearray,
    offset: int,
    stride: int,
    rows: int,
    count: int,
    components: Sequence[_Component],
) -> None:
    """Write ``rows`` rows of ``count`` groups, each group one byte per component."""
    for y in range(rows):
        row = bytes(comp(x, y) & 0xFF for x in range(count) for comp in components)
        _put(buf, offset + y * stride, row)


class ImageFiller:
    """Fills picture buffers with a test pattern.

    The RGB stride workarounds are sticky: once a too-small or misaligned
    stride has been seen, every later RGB fill applies the same correction.
    """

    def __init__(self) -> None:
        self.pixel_stride = False
        self.not_8_pixel = False

    def _rgb_stride(self, width: int, hor_stride: int, pix_w: int, name: str) -> int:
        if not self.pixel_stride and hor_stride < width * pix_w:
            logger.warning(
                "stride by bytes %d is smaller than width %d multiplied by pixel size %d; "
                "using byte stride %d",
                hor_stride, width, pix_w, hor_stride * pix_w,
            )
            self.pixel_stride = True
        if self.pixel_stride:
            hor_stride *= pix_w

        unit = 8 * pix_w
        if not self.not_8_pixel and hor_stride != align(hor_stride, unit):
            logger.warning(
                "only 8 pixel aligned horizontal stride supported for %s with pixel size %d; "
                "using byte stride %d",
                name, pix_w, align(hor_stride, unit),
            )
            self.not_8_pixel = True
        if self.not_8_pixel:
            hor_stride = align(hor_stride, unit)
        return hor_stride

    def fill(
        self,
        buf: bytearray,
        width: int,
        height: int,
        hor_stride: int,
        ver_stride: int,
        fmt: int,
        frame_count: int,
    ) -> int:
        """Fill ``buf`` with the pattern for ``frame_count``; return the row stride used."""
        fc = frame_count
        base = base_format(fmt)
        plane = hor_stride * ver_stride

        def luma(x: int, y: int) -> int:
            return x + y + fc * 3

        def u_full(x: int, y: int) -> int:
            return 128 + y + fc * 2

        def u_half(x: int, y: int) -> int:
            return 128 + y // 2 + fc * 2

        def v(x: int, y: int) -> int:
            return 64 + x + fc * 5

        def y0(x: int, y: int) -> int:
            return x * 2 + y + fc * 3

        def y1(x: int, y: int) -> int:
            return x * 2 + 1 + y + fc * 3

        def write_luma() -> None:
            _interleaved(buf, 0, hor_stride, height, width, (luma,))

        if base == FrameFormat.YUV420SP:
            write_luma()
            _interleaved(buf, plane, hor_stride, height // 2, width // 2, (u_full, v))
        elif base == FrameFormat.YUV422SP:
            write_luma()
            _interleaved(buf, plane, hor_stride, height, width // 2, (u_half, v))
        elif base == FrameFormat.YUV420P:
            write_luma()
            _interleaved(buf, plane, hor_stride // 2, height // 2, width // 2, (u_full,))
            _interleaved(buf, plane + plane // 4, hor_stride // 2, height // 2, width // 2, (v,))
        elif base == FrameFormat.YUV420SP_VU:
            write_luma()
            _interleaved(buf, plane, hor_stride, height // 2, width // 2, (v, u_full))
        elif base == FrameFormat.YUV422P:
            write_luma()
            _interleaved(buf, plane, hor_stride // 2, height, width // 2, (u_half,))
            _interleaved(buf, plane + plane // 2, hor_stride // 2, height, width // 2, (v,))
        elif base == FrameFormat.YUV422SP_VU:
            write_luma()
            _interleaved(buf, plane, hor_stride, height, width // 2, (v, u_half))
        elif base == FrameFormat.YUV422_YUYV:
            _interleaved(buf, 0, hor_stride, height, width // 2, (y0, u_half, y1, v))
        elif base == FrameFormat.YUV422_YVYU:
            _interleaved(buf, 0, hor_stride, height, width // 2, (y0, v, y1, u_half))
        elif base == FrameFormat.YUV422_UYVY:
            _interleaved(buf, 0, hor_stride, height, width // 2, (u_half, y0, v, y1))
        elif base == FrameFormat.YUV422_VYUY:
            _interleaved(buf, 0, hor_stride, height, width // 2, (v, y0, u_half, y1))
        elif base == FrameFormat.YUV400:
            write_luma()
        elif base == FrameFormat.YUV444SP:
            write_luma()
            _interleaved(buf, plane, hor_stride * 2, height, width, (u_half, v))
        elif base == FrameFormat.YUV444P:
            write_luma()
            _interleaved(buf, plane, hor_stride, height, width, (u_half,))
            _interleaved(buf, plane * 2, hor_stride, height, width, (v,))
        elif base in _RGB_PACKERS:
            pix_w = _RGB_PACKERS[base][0]
            hor_stride = self._rgb_stride(width, hor_stride, pix_w, f"{pix_w * 8}bit RGB")
            big_endian = is_be(fmt)
            for y in range(height):
                row = b"".join(
                    pack_rgb_pixel(base, *rgb_color(x, y, fc), big_endian)
                    for x in range(width)
                )
                _put(buf, y * hor_stride, row)
        else:
            raise MppError(f"filling does not support format {fmt:#x}", ErrorCode.NOK)
        return hor_stride


_default_filler = ImageFiller()


def fill_image(
    buf: bytearray,
    width: int,
    height: int,
    hor_stride: int,
    ver_stride: int,
    fmt: int,
    frame_count: int,
) -> int:
    """Fill ``buf`` using the shared filler; return the row stride used."""
    return _default_filler.fill(buf, width, height, hor_stride, ver_stride, fmt, frame_count)