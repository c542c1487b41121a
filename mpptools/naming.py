"""Option help, command-line parsing helpers and file name format detection."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Dict, Iterable, Optional

from .formats import (
    FBC_AFBC_V1,
    FMT_BUTT,
    FMT_PROP_MASK,
    CodingType,
    ErrorCode,
    FrameFormat,
    MppError,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OptionInfo:
    """One command-line option: its flag name, argument name and help text."""

    name: Optional[str]
    argname: str
    help: str


def format_options(options: Iterable[OptionInfo]) -> str:
    """Render option help lines; options without a name are skipped."""
    return "".join(
        f"-{opt.name}  {opt.argname:<16}\t{opt.help}\n"
        for opt in options
        if opt.name is not None
    )


@dataclass
class OpsLine:
    """One parsed operation line: ``<tag>,<index>,<cmd>,<value1>,<value2>``.

    ``count`` is the number of fields parsed, or -1 for empty input; fields
    that were not reached are None.
    """

    count: int = 0
    index: Optional[int] = None
    cmd: Optional[str] = None
    value1: Optional[int] = None
    value2: Optional[int] = None


_TAG = re.compile(r"[^,]+,")
_INT = re.compile(r"\s*([+-]?\d+)")
_CMD = re.compile(r"[^,]+")

_U64 = 1 << 64


def _unsigned(text: str) -> int:
    return int(text) % _U64


def parse_config_line(text: str) -> OpsLine:
    """Parse an operation line, stopping at the first field that does not match."""
    line = OpsLine()
    if not text:
        line.count = -1
        return line

    m = _TAG.match(text)
    if not m:
        return line
    pos = m.end()

    m = _INT.match(text, pos)
    if not m:
        return line
    line.index, line.count, pos = int(m.group(1)), 1, m.end()

    if not text.startswith(",", pos):
        return line
    m = _CMD.match(text, pos + 1)
    if not m:
        return line
    line.cmd, line.count, pos = m.group(0), 2, m.end()

    for attr in ("value1", "value2"):
        if not text.startswith(",", pos):
            return line
        m = _INT.match(text, pos + 1)
        if not m:
            return line
        setattr(line, attr, _unsigned(m.group(1)))
        line.count += 1
        pos = m.end()
    return line


def _extension(name: str) -> str:
    dot = name.rfind(".")
    return name[dot + 1:].lower() if dot >= 0 else ""


_EXT_TO_FRAME_FORMAT: Dict[str, int] = {
    "yuv420p": FrameFormat.YUV420P,
    "yuv420sp": FrameFormat.YUV420SP,
    "yuv422p": FrameFormat.YUV422P,
    "yuv422sp": FrameFormat.YUV422SP,
    "yuv422uyvy": FrameFormat.YUV422_UYVY,
    "yuv422vyuy": FrameFormat.YUV422_VYUY,
    "yuv422yuyv": FrameFormat.YUV422_YUYV,
    "yuv422yvyu": FrameFormat.YUV422_YVYU,
    "abgr8888": FrameFormat.ABGR8888,
    "argb8888": FrameFormat.ARGB8888,
    "bgr565": FrameFormat.BGR565,
    "bgr888": FrameFormat.BGR888,
    "bgra8888": FrameFormat.BGRA8888,
    "rgb565": FrameFormat.RGB565,
    "rgb888": FrameFormat.RGB888,
    "rgba8888": FrameFormat.RGBA8888,
    "fbc": FrameFormat.YUV420SP | FBC_AFBC_V1,
}

_EXT_TO_CODING: Dict[str, CodingType] = {
    "h264": CodingType.AVC,
    "264": CodingType.AVC,
    "avc": CodingType.AVC,
    "h265": CodingType.HEVC,
    "265": CodingType.HEVC,
    "hevc": CodingType.HEVC,
    "jpg": CodingType.MJPEG,
    "jpeg": CodingType.MJPEG,
    "mjpeg": CodingType.MJPEG,
}


def name_to_frame_format(name: str) -> int:
    """Return the frame format named by a file's extension."""
    try:
        return _EXT_TO_FRAME_FORMAT[_extension(name)]
    except KeyError:
        raise MppError(f"no frame format for file name {name!r}", ErrorCode.NOK) from None


def name_to_coding_type(name: str) -> CodingType:
    """Return the coding type named by a file's extension."""
    try:
        return _EXT_TO_CODING[_extension(name)]
    except KeyError:
        raise MppError(f"no coding type for file name {name!r}", ErrorCode.NOK) from None


_C_INTEGER = re.compile(r"\s*([+-]?)(0[xX][0-9a-fA-F]+|0[0-7]*|[1-9][0-9]*)")


def str_to_frame_format(text: Optional[str]) -> int:
    """Convert a decimal, octal (leading 0) or hex (0x) string to a frame format value."""
    if text is None:
        raise MppError("invalid input: no string given", ErrorCode.NULL_PTR)

    m = _C_INTEGER.match(text)
    if not m:
        raise MppError(f"format {text!r} invalid (no digits found)", ErrorCode.NOK)
    if m.end() != len(text):
        raise MppError(f"format {text!r} invalid (additional characters remain)", ErrorCode.NOK)

    sign, digits = m.groups()
    if digits[:2].lower() == "0x":
        value = int(digits[2:], 16)
    elif digits.startswith("0"):
        value = int(digits, 8)
    else:
        value = int(digits)
    if sign == "-":
        value = -value

    if not 0 <= value < (FMT_BUTT | FMT_PROP_MASK):
        raise MppError(f"format {value:#x} invalid (not format value)", ErrorCode.NOK)
    return value