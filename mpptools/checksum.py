"""Sum and xor checksums of raw data and of picture planes."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from typing import List, TextIO

from .formats import ErrorCode, MppError
from .frame import Frame

# Sums are accumulated over 32-bit little-endian words in a 64-bit register.
# A group holds as many words as can be added without overflowing the
# register, so each group gets its own sum.
_WORD_BYTES = 4
_SUM_MASK = (1 << 64) - 1
_MAX_HALF_WORD_SUM_CNT = _SUM_MASK // ((1 << 32) - 1)
_GROUP_BYTES = _MAX_HALF_WORD_SUM_CNT * _WORD_BYTES


@dataclass
class DataCrc:
    """Length, per-group sums and xor of a block of data."""

    length: int = 0
    sums: List[int] = field(default_factory=list)
    vor: int = 0

    @property
    def sum_count(self) -> int:
        return len(self.sums)


@dataclass
class FrameCrc:
    """Checksums of the luma and chroma planes of a frame."""

    luma: DataCrc = field(default_factory=DataCrc)
    chroma: DataCrc = field(default_factory=DataCrc)


def wide_bit_sum(data: bytes) -> int:
    """Sum ``data`` as 32-bit little-endian words plus any trailing bytes, modulo 2**64."""
    data = bytes(data)
    words = len(data) // _WORD_BYTES
    total = sum(struct.unpack_from(f"<{words}I", data)) if words else 0
    total += sum(data[words * _WORD_BYTES:])
    return total & _SUM_MASK


def _xor_words(data: bytes) -> int:
    """Xor of the whole 32-bit little-endian words in ``data``."""
    words = len(data) // _WORD_BYTES
    result = 0
    for word in struct.unpack_from(f"<{words}I", data) if words else ():
        result ^= word
    return result


def calc_data_crc(data: bytes) -> DataCrc:
    """Compute the checksum of a block of data."""
    data = bytes(data)
    sums = [
        wide_bit_sum(data[start:start + _GROUP_BYTES])
        for start in range(0, len(data), _GROUP_BYTES)
    ]
    vor = _xor_words(data)
    tail = data[len(data) // _WORD_BYTES * _WORD_BYTES:]
    if tail:
        vor ^= int.from_bytes(tail, "little")
    return DataCrc(length=len(data), sums=sums, vor=vor)


def write_data_crc(stream: TextIO, crc: DataCrc) -> None:
    """Write one checksum line: ``len, sum..., xor``."""
    if stream is None:
        return
    parts = [f"{crc.length:08d},"]
    parts.extend(f" {s:x}," for s in crc.sums)
    parts.append(f" {crc.vor:08x}\n")
    stream.write("".join(parts))
    stream.flush()


def _read_fields(stream: TextIO, count: int) -> List[str]:
    line = stream.readline()
    if not line:
        raise MppError("unexpected EOF found", ErrorCode.NOK)
    fields = [part.strip() for part in line.split(",")]
    if len(fields) < count or any(not f for f in fields[:count]):
        raise MppError(f"checksum line has too few fields: {line!r}", ErrorCode.NOK)
    return fields[:count]


def _parse(text: str, base: int) -> int:
    try:
        return int(text, base)
    except ValueError:
        raise MppError(f"invalid checksum field {text!r}", ErrorCode.VALUE) from None


def _parse_crc(fields: List[str], sum_count: int) -> DataCrc:
    return DataCrc(
        length=_parse(fields[0], 10),
        sums=[_parse(f, 16) for f in fields[1:1 + sum_count]],
        vor=_parse(fields[1 + sum_count], 16),
    )


def read_data_crc(stream: TextIO, sum_count: int) -> DataCrc:
    """Read one checksum line holding ``sum_count`` sums."""
    fields = _read_fields(stream, sum_count + 2)
    return _parse_crc(fields, sum_count)


def _plane_crc(buf: bytes, offset: int, stride: int, width: int, rows: int,
               line_group: int, vor: int) -> DataCrc:
    sums = [0] * ((rows + line_group - 1) // line_group)
    for y in range(rows):
        start = offset + y * stride
        line = bytes(buf[start:start + width])
        if len(line) != width:
            raise ValueError(f"buffer of {len(buf)} bytes too small, need {start + width}")
        group = y // line_group
        sums[group] = (sums[group] + wide_bit_sum(line)) & _SUM_MASK
        vor ^= _xor_words(line)
    return DataCrc(length=rows * width, sums=sums, vor=vor)


def calc_frame_crc(frame: Frame) -> FrameCrc:
    """Compute luma and chroma checksums of a semi-planar 4:2:0 frame.

    The xor runs on across both planes, so the chroma xor includes the luma.
    """
    if frame.buffer is None:
        raise MppError("frame has no buffer", ErrorCode.NULL_PTR)
    width, height, stride = frame.width, frame.height, frame.hor_stride
    if width <= 0:
        raise ValueError(f"frame width must be positive, got {width}")

    line_group = _GROUP_BYTES // ((width + _WORD_BYTES - 1) // _WORD_BYTES * _WORD_BYTES)
    buf = frame.buffer
    luma = _plane_crc(buf, 0, stride, width, height, line_group, 0)
    chroma = _plane_crc(buf, height * stride, stride, width, height // 2,
                        line_group, luma.vor)
    chroma.length = height * width // 2
    return FrameCrc(luma=luma, chroma=chroma)


def write_frame_crc(stream: TextIO, crc: FrameCrc) -> None:
    """Write one frame checksum line: luma fields then chroma fields."""
    if stream is None:
        return
    parts = [f"{crc.luma.length},"]
    parts.extend(f" {s:x}," for s in crc.luma.sums)
    parts.append(f" {crc.luma.vor:08x},")
    parts.append(f" {crc.chroma.length},")
    parts.extend(f" {s:x}," for s in crc.chroma.sums)
    parts.append(f" {crc.chroma.vor:08x}\n")
    stream.write("".join(parts))
    stream.flush()


def read_frame_crc(stream: TextIO, luma_count: int, chroma_count: int) -> FrameCrc:
    """Read one frame checksum line with the given numbers of sums per plane."""
    luma_fields = luma_count + 2
    fields = _read_fields(stream, luma_fields + chroma_count + 2)
    return FrameCrc(
        luma=_parse_crc(fields[:luma_fields], luma_count),
        chroma=_parse_crc(fields[luma_fields:], chroma_count),
    )