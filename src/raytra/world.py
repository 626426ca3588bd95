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

from math import inf
from typing import Union, List

from raytra.hitrecord import HitRecord
from raytra.lights import Light
from raytra.misc import EPSILON
from raytra.ray import Ray
from raytra.shapes import Shape, SurfaceList


class World:
    """A class holding a list of shapes and lights, which make a «world»

    The world owns its shapes: :meth:`.World.add_shape` stores each of them in an
    internal table and returns a handle (an integer) that can later be passed to
    :meth:`.World.shape`. Hit records refer to shapes through these handles.

    Typically, you call :meth:`.World.ray_intersection` to check whether a light ray
    intersects any of the shapes in the world.
    """

    shapes: List[Shape]
    lights: List[Light]

    def __init__(self):
        self.shapes = []
        self.lights = []
        self.root = SurfaceList()

    def add_shape(self, shape: Shape) -> int:
        """Append a new shape to this world and return its handle"""
        shape.handle = len(self.shapes)
        self.shapes.append(shape)
        self.root.add(shape)
        return shape.handle

    def add_light(self, light: Light):
        """Append a new light to this world"""
        self.lights.append(light)

    def shape(self, handle: int) -> Shape:
        """Return the shape associated with `handle`"""
        return self.shapes[handle]

    def hit(self, ray: Ray, tmin: float, tmax: float, hit_record: HitRecord) -> bool:
        """Find the nearest hit among all the shapes in the world, see :meth:`.SurfaceList.hit`"""
        return self.root.hit(ray, tmin, tmax, hit_record)

    def ray_intersection(self, ray: Ray, tmin: float = EPSILON, tmax: float = inf) -> Union[HitRecord, None]:
        """Determine whether a ray intersects any of the objects in this world"""
        hit_record = HitRecord()
        return hit_record if self.hit(ray, tmin, tmax, hit_record) else None
