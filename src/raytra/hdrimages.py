# -*- encoding: utf-8 -*-
#
# The MIT License (MIT)
#
# Copyright © 2021 Maurizio Tomasi
#
# Permission is hereby granted, free of charge, to any person obtaining a copy of this software and associated
# documentation files (the “Software”), to deal in the Software without restriction, including without limitation the
# rights to use, copy, modify, merge, publish, distribute, sublicense, and/or sell copies of the Software,
# and to permit persons to whom the Software is furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in all copies or substantial portions of
# the Software. THE SOFTWARE IS PROVIDED “AS IS”, WITHOUT WARRANTY OF ANY KIND, EXPRESS OR IMPLIED, INCLUDING BUT NOT
# LIMITED TO THE WARRANTIES OF MERCHANTABILITY, FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT
# SHALL THE AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER LIABILITY, WHETHER IN AN ACTION OF
# CONTRACT, TORT OR OTHERWISE, ARISING FROM, OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS
# IN THE SOFTWARE.

import struct
from enum import Enum

from PIL import Image

from raytra.colors import Color


class Endianness(Enum):
    """Byte order of the floating-point values in a PFM file

    The value of each member is the prefix used by :mod:`struct` to pack data."""
    LITTLE_ENDIAN = "<"
    BIG_ENDIAN = ">"


# The sign of the scale factor in the PFM header encodes the endianness
_PFM_SCALE = {
    Endianness.LITTLE_ENDIAN: "-1.0",
    Endianness.BIG_ENDIAN: "1.0",
}


def _to_byte(x: float, gamma: float) -> int:
    """Gamma-correct a value in [0, 1] and convert it to an integer in [0, 255]"""
    return min(255, int(255 * x ** (1.0 / gamma) + 0.5))


class HdrImage:
    """A High-Dynamic-Range 2D image, stored as a flat list of :class:`.Color` objects

    Row 0 is the top of the image. Pixels are addressed as ``(x, y)``, i.e., column first.
    """

    def __init__(self, width=0, height=0):
        self.width = width
        self.height = height
        self.pixels = [Color() for _ in range(width * height)]

    def valid_coordinates(self, x, y):
        return 0 <= x < self.width and 0 <= y < self.height

    def pixel_offset(self, x, y):
        """Return the index of pixel ``(x, y)`` in `pixels`"""
        return y * self.width + x

    def get_pixel(self, x, y) -> Color:
        assert self.valid_coordinates(x, y), f"pixel ({x}, {y}) is outside a {self.width}×{self.height} image"
        return self.pixels[self.pixel_offset(x, y)]

    def set_pixel(self, x, y, new_color: Color):
        assert self.valid_coordinates(x, y), f"pixel ({x}, {y}) is outside a {self.width}×{self.height} image"
        self.pixels[self.pixel_offset(x, y)] = new_color

    def _row(self, y):
        offset = self.pixel_offset(0, y)
        return self.pixels[offset:offset + self.width]

    def write_pfm(self, stream, endianness=Endianness.LITTLE_ENDIAN):
        """Save the raw radiance of each pixel in a binary stream, using the PFM format

        PFM files list rows from the bottom to the top of the image. No gamma correction is applied."""
        header = f"PF\n{self.width} {self.height}\n{_PFM_SCALE[endianness]}\n"
        stream.write(header.encode("ascii"))

        row_format = f"{endianness.value}{3 * self.width}f"
        for y in reversed(range(self.height)):
            values = [component for color in self._row(y) for component in color]
            stream.write(struct.pack(row_format, *values))

    def write_ldr_image(self, stream, format, gamma=1.0):
        """Save the image in a 8-bit format supported by Pillow (e.g., ``"PNG"``)

        Each color component is clamped to [0, 1] and gamma-corrected with exponent ``1 / gamma``."""
        img = Image.new("RGB", (self.width, self.height))
        img.putdata([
            tuple(_to_byte(component, gamma) for component in color.clamp())
            for color in self.pixels
        ])
        img.save(stream, format=format)
