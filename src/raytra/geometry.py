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

import math
from dataclasses import dataclass

from raytra.misc import are_close


@dataclass
class _Triple:
    """Three floating-point coordinates `x`, `y`, `z`

    This is the common ancestor of :class:`.Vec`, :class:`.Point` and :class:`.Normal`, which
    only differ in the arithmetic operations they support."""
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def is_close(self, other, epsilon=1e-5):
        """Return True if the coordinates of `self` and `other` match within `epsilon`"""
        assert isinstance(other, type(self)), f"cannot compare a {type(self)} with a {type(other)}"
        return (are_close(self.x, other.x, epsilon=epsilon) and
                are_close(self.y, other.y, epsilon=epsilon) and
                are_close(self.z, other.z, epsilon=epsilon))

    def _combine(self, other, sign, result_type):
        return result_type(self.x + sign * other.x, self.y + sign * other.y, self.z + sign * other.z)

    def _scale(self, scalar):
        return type(self)(self.x * scalar, self.y * scalar, self.z * scalar)

    def __neg__(self):
        return self._scale(-1.0)

    def dot(self, other):
        """Scalar product; `other` can be a :class:`.Vec` or a :class:`.Normal`"""
        return self.x * other.x + self.y * other.y + self.z * other.z

    def squared_norm(self):
        return self.dot(self)

    def norm(self):
        """Euclidean length"""
        return math.sqrt(self.squared_norm())

    def normalize(self):
        """Return an object of the same type with unit length

        Raise ``ZeroDivisionError`` if the length is zero; the object itself is not modified."""
        return self._scale(1.0 / self.norm())


class Vec(_Triple):
    """A 3D vector (a direction or a displacement)"""

    def __add__(self, other):
        # Vec + Vec is a Vec, Vec + Point is a Point
        if isinstance(other, (Vec, Point)):
            return self._combine(other, 1.0, type(other))

        raise TypeError(f"Unable to run Vec.__add__ on a {type(self)} and a {type(other)}.")

    def __sub__(self, other):
        if isinstance(other, Vec):
            return self._combine(other, -1.0, Vec)

        raise TypeError(f"Unable to run Vec.__sub__ on a {type(self)} and a {type(other)}.")

    def __mul__(self, scalar):
        return self._scale(scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar):
        return self._scale(1.0 / scalar)

    def cross(self, other):
        """Compute the cross product between two vectors"""
        return Vec(self.y * other.z - self.z * other.y,
                   self.z * other.x - self.x * other.z,
                   self.x * other.y - self.y * other.x)

    def to_normal(self):
        return Normal(self.x, self.y, self.z)


class Point(_Triple):
    """A position in 3D space

    Points can be moved by a :class:`.Vec`, and the difference of two points is a :class:`.Vec`."""

    def __add__(self, other):
        if isinstance(other, Vec):
            return self._combine(other, 1.0, Point)

        raise TypeError(f"Unable to run Point.__add__ on a {type(self)} and a {type(other)}.")

    def __sub__(self, other):
        if isinstance(other, Vec):
            return self._combine(other, -1.0, Point)
        elif isinstance(other, Point):
            return self._combine(other, -1.0, Vec)

        raise TypeError(f"Unable to run Point.__sub__ on a {type(self)} and a {type(other)}.")

    def __neg__(self):
        raise TypeError("a point cannot be negated")


class Normal(_Triple):
    """The orientation of a surface at some point"""


VEC_X = Vec(1.0, 0.0, 0.0)
VEC_Y = Vec(0.0, 1.0, 0.0)
VEC_Z = Vec(0.0, 0.0, 1.0)


@dataclass
class Vec2d:
    """A point on a surface, in the (`u`, `v`) coordinates of the shape

    For spheres these are the longitude and colatitude, normalized to [0, 1]. For triangles,
    (`u`, `v`) are the last two barycentric coordinates of the point."""
    u: float = 0.0
    v: float = 0.0

    def is_close(self, other: "Vec2d", epsilon=1e-5):
        return are_close(self.u, other.u, epsilon=epsilon) and are_close(self.v, other.v, epsilon=epsilon)
