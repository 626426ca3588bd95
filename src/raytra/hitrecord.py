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

from dataclasses import dataclass, field
from math import inf
from typing import Union

from raytra.geometry import Point, Normal, Vec, Vec2d
from raytra.ray import Ray


@dataclass
class HitRecord:
    """
    A class holding information about a ray-shape intersection

    A `HitRecord` is usually created empty and then filled in place by the `hit` method of a
    :class:`.Shape`. The parameters defined in this dataclass are the following:

    -   `t`: a floating-point value specifying the distance from the origin of the ray where the hit happened
    -   `world_point`: a :class:`.Point` object holding the world coordinates of the hit point
    -   `normal`: a :class:`.Normal` object holding the orientation of the normal to the surface where the hit
        happened. It is always normalized and it always faces the incoming ray, see :meth:`.HitRecord.set_normal`
    -   `surface_point`: a :class:`.Vec2d` object holding the position of the hit point on the surface of the object
    -   `surface`: the handle of the shape that was hit, i.e., its index in the :class:`.World` that owns it
        (``None`` if the shape was never added to a world)
    -   `material`: the material bound to the shape that was hit, or ``None``
    """
    t: float = inf
    world_point: Point = field(default_factory=Point)
    normal: Normal = field(default_factory=Normal)
    surface_point: Vec2d = field(default_factory=Vec2d)
    surface: Union[int, None] = None
    material: Union["Material", None] = None

    def set_normal(self, ray: Ray, face_normal: Union[Normal, Vec]):
        """Store the normal of the surface, flipping it if needed so that it faces `ray`

        Shading code relies on the normal being front-facing, regardless of the winding of the
        primitive or of the direction of the ray."""
        normal = Normal(face_normal.x, face_normal.y, face_normal.z).normalize()
        self.normal = -normal if normal.dot(ray.dir) > 0.0 else normal

    def copy_from(self, other: "HitRecord"):
        """Overwrite the fields of this record with the ones in `other`"""
        self.t = other.t
        self.world_point = other.world_point
        self.normal = other.normal
        self.surface_point = other.surface_point
        self.surface = other.surface
        self.material = other.material

    def is_close(self, other: Union["HitRecord", None], epsilon=1e-5) -> bool:
        """Check whether two `HitRecord` represent the same hit event, on the same surface and material"""
        if not other:
            return False

        return (
                self.world_point.is_close(other.world_point, epsilon=epsilon) and
                self.normal.is_close(other.normal, epsilon=epsilon) and
                self.surface_point.is_close(other.surface_point, epsilon=epsilon) and
                (abs(self.t - other.t) < epsilon) and
                self.surface == other.surface and
                self.material == other.material
        )
