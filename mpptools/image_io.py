"""Reading raw pictures from files and dumping frames to files."""

from __future__ import annotations

import logging
import struct
from typing import BinaryIO, Dict, List, Optional

from .formats import (
    FBC_AFBC_V1,
    FBC_MASK,
    ErrorCode,
    FrameFormat,
    MppError,
    base_format,
    is_fbc,
)
from .frame import SZ_4K, Frame, align

logger = logging.getLogger(__name__)

# Bytes per pixel for formats read as one packed plane of rows.
_PIXEL_WIDTHS: Dict[int, int] = {
    FrameFormat.ARGB8888: 4,
    FrameFormat.ABGR8888: 4,
    FrameFormat.BGRA8888: 4,
    FrameFormat.RGBA8888: 4,
    FrameFormat.RGB101010: 4,
    FrameFormat.BGR101010: 4,
    FrameFormat.YUV422P: 2,
    FrameFormat.YUV422SP: 2,
    FrameFormat.YUV422SP_VU: 2,
    FrameFormat.BGR444: 2,
    FrameFormat.RGB444: 2,
    FrameFormat.RGB555: 2,
    FrameFormat.BGR555: 2,
    FrameFormat.RGB565: 2,
    FrameFormat.BGR565: 2,
    FrameFormat.YUV422_YUYV: 2,
    FrameFormat.YUV422_YVYU: 2,
    FrameFormat.YUV422_UYVY: 2,
    FrameFormat.YUV422_VYUY: 2,
    FrameFormat.YUV444SP: 3,
    FrameFormat.YUV444P: 3,
    FrameFormat.RGB888: 3,
    FrameFormat.BGR888: 3,
    FrameFormat.YUV400: 1,
}

_FBC_422 = (
    FrameFormat.YUV422SP,
    FrameFormat.YUV422_YUYV,
    FrameFormat.YUV422_YVYU,
    FrameFormat.YUV422_UYVY,
    FrameFormat.YUV422_VYUY,
)

# Bytes per pixel for formats dumped row by row without conversion.
_DUMP_ROW_WIDTHS: Dict[int, int] = {
    FrameFormat.ARGB8888: 4,
    FrameFormat.ABGR8888: 4,
    FrameFormat.BGRA8888: 4,
    FrameFormat.RGBA8888: 4,
    FrameFormat.YUV422_YUYV: 2,
    FrameFormat.YUV422_YVYU: 2,
    FrameFormat.YUV422_UYVY: 2,
    FrameFormat.YUV422_VYUY: 2,
    FrameFormat.RGB565: 2,
    FrameFormat.BGR565: 2,
    FrameFormat.RGB555: 2,
    FrameFormat.BGR555: 2,
    FrameFormat.RGB444: 2,
    FrameFormat.BGR444: 2,
    FrameFormat.RGB888: 3,
    FrameFormat.YUV400: 1,
}


def _put(buf: bytearray, offset: int, data: bytes) -> None:
    end = offset + len(data)
    if end > len(buf):
        raise ValueError(f"buffer of {len(buf)} bytes too small, need {end}")
    buf[offset:end] = data


def _span(buf: bytes, offset: int, size: int) -> bytes:
    end = offset + size
    if end > len(buf):
        raise ValueError(f"buffer of {len(buf)} bytes too small, need {end}")
    return bytes(buf[offset:end])


def _read_into(buf: bytearray, offset: int, stream: BinaryIO, size: int) -> int:
    data = stream.read(size) if size > 0 else b""
    _put(buf, offset, data)
    return len(data)


def _read_rows(
    buf: bytearray, stream: BinaryIO, offset: int, stride: int, rows: int, size: int
) -> None:
    for row in range(rows):
        got = _read_into(buf, offset + row * stride, stream, size)
        if got != size:
            raise MppError(f"read file failed, expect {size} vs {got}", ErrorCode.NOK)


def _read_fbc(buf: bytearray, stream: BinaryIO, width: int, height: int, fmt: int) -> None:
    align_w = align(width, 16)
    align_h = align(height, 16)
    if (fmt & FBC_MASK) == FBC_AFBC_V1:
        header_size = align(align_w * align_h // 16, SZ_4K)
    else:
        header_size = align_w * align_h // 16

    got = _read_into(buf, 0, stream, header_size)
    if got != header_size:
        raise MppError(
            f"read fbc file header failed {got} vs {header_size}", ErrorCode.NOK
        )

    base = base_format(fmt)
    if base == FrameFormat.YUV420SP:
        payload = align_w * align_h * 3 // 2
    elif base in _FBC_422:
        payload = align_w * align_h * 2
    else:
        logger.error("not supported fbc format %#x", fmt)
        return

    got = _read_into(buf, header_size, stream, payload)
    if got != payload:
        raise MppError(f"read fbc file payload failed {got} vs {payload}", ErrorCode.NOK)


def read_image(
    buf: bytearray,
    stream: BinaryIO,
    width: int,
    height: int,
    hor_stride: int,
    ver_stride: int,
    fmt: int,
) -> None:
    """Read one raw picture from ``stream`` into ``buf`` laid out with the given strides.

    Raises :class:`MppError` when the stream ends early or the format is not supported.
    """
    if is_fbc(fmt):
        _read_fbc(buf, stream, width, height, fmt)
        return

    base = base_format(fmt)
    plane = hor_stride * ver_stride

    if base in (FrameFormat.YUV420SP, FrameFormat.YUV420SP_VU):
        _read_rows(buf, stream, 0, hor_stride, height, width)
        width = align(width, 2)
        height = align(height, 2)
        _read_rows(buf, stream, plane, hor_stride, height // 2, width)
    elif base == FrameFormat.YUV420P:
        _read_rows(buf, stream, 0, hor_stride, height, width)
        width = align(width, 2)
        height = align(height, 2)
        _read_rows(buf, stream, plane, hor_stride // 2, height // 2, width // 2)
        _read_rows(buf, stream, plane + plane // 4, hor_stride // 2, height // 2, width // 2)
    elif base in _PIXEL_WIDTHS:
        pix_w = _PIXEL_WIDTHS[base]
        row_size = width * pix_w
        if hor_stride < row_size:
            logger.error(
                "invalid %dbit color config: hor_stride %d is smaller than width %d "
                "multiplied by %d; width is in pixels, stride in bytes",
                8 * pix_w, hor_stride, width, pix_w,
            )
            hor_stride = row_size
        _read_rows(buf, stream, 0, hor_stride, height, row_size)
    else:
        raise MppError(f"read image does not support format {fmt:#x}", ErrorCode.VALUE)


def unpack_10bit_line(data: bytes, width: int) -> List[int]:
    """Unpack ``width`` 10-bit samples stored as a little-endian bit stream.

    Samples are handled in groups of eight held in ten bytes; a short final
    group is padded with zeros.
    """
    group_count = align(width, 8) // 8
    raw = bytes(data[: group_count * 10]).ljust(group_count * 10, b"\0")
    samples: List[int] = []
    for start in range(0, len(raw), 10):
        word = int.from_bytes(raw[start:start + 10], "little")
        samples.extend(word >> (10 * i) & 0x3FF for i in range(8))
    return samples[:width]


def _write_rows(
    buf: bytes, stream: BinaryIO, offset: int, stride: int, rows: int, size: int
) -> None:
    for row in range(rows):
        stream.write(_span(buf, offset + row * stride, size))


def dump_frame(frame: Optional[Frame], stream: Optional[BinaryIO]) -> None:
    """Write the visible area of ``frame`` to ``stream`` as planar raw data.

    Semi-planar 4:2:2 and 4:4:4 chroma is split into separate U and V planes,
    and packed 10-bit samples are widened to 16-bit little-endian words.
    """
    if frame is None or stream is None or frame.buffer is None:
        return

    buf = frame.buffer
    width = frame.width
    height = frame.height
    h_stride = frame.hor_stride
    plane = h_stride * frame.ver_stride
    base = base_format(frame.fmt)

    if base == FrameFormat.YUV422SP:
        _write_rows(buf, stream, 0, h_stride, height, width)
        rows = [_span(buf, plane + i * h_stride, width // 2 * 2) for i in range(height)]
        stream.write(b"".join(row[0::2] for row in rows))
        stream.write(b"".join(row[1::2] for row in rows))
    elif base in (FrameFormat.YUV420SP, FrameFormat.YUV420SP_VU):
        _write_rows(buf, stream, 0, h_stride, height, width)
        _write_rows(buf, stream, plane, h_stride, height // 2, width)
    elif base == FrameFormat.YUV420P:
        _write_rows(buf, stream, 0, h_stride, height, width)
        half = h_stride // 2
        _write_rows(buf, stream, plane, half, height // 2, width // 2)
        _write_rows(buf, stream, plane + half * (height // 2), half, height // 2, width // 2)
    elif base == FrameFormat.YUV420SP_10BIT:
        packed = align(width, 8) // 8 * 10
        row_starts = [i * h_stride for i in range(height)]
        row_starts += [plane + i * h_stride for i in range(height // 2)]
        for start in row_starts:
            samples = unpack_10bit_line(buf[start:start + packed], width)
            stream.write(struct.pack(f"<{width}H", *samples))
    elif base == FrameFormat.YUV444SP:
        _write_rows(buf, stream, 0, h_stride, height, width)
        rows = [_span(buf, plane + i * h_stride * 2, width * 2) for i in range(height)]
        stream.write(b"".join(row[0::2] for row in rows))
        stream.write(b"".join(row[1::2] for row in rows))
    elif base in _DUMP_ROW_WIDTHS:
        _write_rows(buf, stream, 0, h_stride, height, width * _DUMP_ROW_WIDTHS[base])
    else:
        raise MppError(f"not supported format {frame.fmt:#x}", ErrorCode.VALUE)