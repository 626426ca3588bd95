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

from dataclasses import dataclass

from raytra.misc import are_close


@dataclass
class Color:
    """A linear RGB radiance triple (`r`, `g`, `b`)

    Components are not bounded: they are clamped only when an image is saved in a LDR format."""
    r: float = 0.0
    g: float = 0.0
    b: float = 0.0

    def __iter__(self):
        yield self.r
        yield self.g
        yield self.b

    def __add__(self, other):
        return Color(self.r + other.r, self.g + other.g, self.b + other.b)

    def __sub__(self, other):
        return Color(self.r - other.r, self.g - other.g, self.b - other.b)

    def __mul__(self, other):
        """Modulate two colors channel by channel, or scale a color by a number"""
        if isinstance(other, Color):
            return Color(self.r * other.r, self.g * other.g, self.b * other.b)

        return Color(self.r * other, self.g * other, self.b * other)

    __rmul__ = __mul__

    def __truediv__(self, scalar):
        return self * (1.0 / scalar)

    def clamp(self, low=0.0, high=1.0):
        """Return a copy of the color whose components are limited to [`low`, `high`]"""
        return Color(*(min(high, max(low, x)) for x in self))

    def is_close(self, other, epsilon=1e-6):
        return all(are_close(x, y, epsilon=epsilon) for x, y in zip(self, other))


BLACK = Color(0.0, 0.0, 0.0)
WHITE = Color(1.0, 1.0, 1.0)

# Painted on surfaces that cannot be shaded
RED = Color(1.0, 0.0, 0.0)
