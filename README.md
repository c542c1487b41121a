# mpptools

Helpers for working with raw video frames: pixel format descriptions, a
synthetic test pattern, reading and dumping raw pictures, file-name based
format detection, checksums and frame-rate counting.

## Modules

- **`mpptools.formats`**: `FrameFormat` (YUV and RGB layouts) and the flag
  bits that can be combined with it (frame buffer compression, HDR, tile,
  little-endian), `CodingType`, `ColorRange`, `ColorPrimaries`,
  `ColorTransfer`, `ColorSpace`, `ChromaLocation`, and `ErrorCode`.
  Failures throughout the package are raised as `MppError`, which carries an
  `ErrorCode` in its `code` attribute. `base_format`, `is_yuv`,
  `is_yuv_10bit`, `is_rgb`, `is_fbc`, `is_hdr`, `is_le`, `is_be` and
  `is_tile` test a format value.
- **`mpptools.frame`**: `Frame`, a dataclass with dimensions, strides,
  timestamps, colour information, a `bytearray` pixel buffer and a
  `FrameStatus`. `FrameStatus` packs its flags into a status word (`value`)
  and unpacks one (`FrameStatus.from_value`). Also `Rational` and
  `align(value, alignment)`.
- **`mpptools.image_fill`**: `fill_image` draws a moving gradient (YUV) or
  colour bar (RGB) pattern into a buffer for a given frame number and returns
  the row stride it used. For RGB formats a stride given in pixels, or one
  not aligned to 8 pixels, is corrected with a logged warning; an
  `ImageFiller` remembers such corrections for later calls, and
  `fill_image` uses one shared `ImageFiller`. `rgb_color` and
  `pack_rgb_pixel` expose the colour and pixel packing rules on their own.
- **`mpptools.image_io`**: `read_image` loads one raw picture from a binary
  stream into a strided buffer (including FBC header plus payload), raising
  `MppError` when the stream ends early or the format is not supported.
  `dump_frame` writes a frame's visible area to a stream; semi-planar 4:2:2
  and 4:4:4 chroma is split into separate U and V planes and packed 10-bit
  4:2:0 samples are widened to 16-bit little-endian words
  (`unpack_10bit_line` does the unpacking).
- **`mpptools.naming`**: `name_to_frame_format("clip.yuv420sp")` and
  `name_to_coding_type("out.h264")` map a file extension to a format or
  coding type; `str_to_frame_format` accepts a decimal, octal or hex format
  value; `parse_config_line` parses `tag,index,cmd,value1,value2` lines into
  an `OpsLine`; `format_options` renders help text for a list of
  `OptionInfo`.
- **`mpptools.checksum`**: `calc_data_crc` and `calc_frame_crc` compute
  grouped sums and an XOR (`DataCrc`, `FrameCrc`); `write_data_crc`,
  `read_data_crc`, `write_frame_crc` and `read_frame_crc` store and load them
  as one text line each. `wide_bit_sum` is the underlying sum.
- **`mpptools.fps`**: `FpsCalc(callback, clock)` counts frames with `inc()`
  and, when at least one second has passed since the last report, calls
  `callback(total_time, total_count, last_time, last_count)` with times in
  microseconds.

## Installation

```
pip install .
```

Python 3.10 or newer is required. There are no runtime dependencies.

## Example

```python
import io

from mpptools.checksum import calc_data_crc, read_data_crc, write_data_crc
from mpptools.image_fill import fill_image
from mpptools.naming import name_to_frame_format

width, height = 64, 48
fmt = name_to_frame_format("pattern.yuv420sp")   # FrameFormat.YUV420SP
buf = bytearray(width * height * 3 // 2)
fill_image(buf, width, height, width, height, fmt, frame_count=0)

crc = calc_data_crc(buf)
text = io.StringIO()
write_data_crc(text, crc)
text.seek(0)
assert read_data_crc(text, crc.sum_count) == crc
```

## What it does not do

The package works only on frames held in memory and raw files. It does not
encode or decode video, capture from a camera, scale or convert images
between formats, or provide a command-line program.

## Running the tests

```
pip install .[test]
pytest
```