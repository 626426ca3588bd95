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

from raytra.colors import Color, BLACK
from raytra.geometry import Point, Vec
from raytra.hitrecord import HitRecord
from raytra.materials import PhongMaterial


class Light:
    """An abstract light source

    Derived classes must redefine :meth:`.Light.illuminate`."""

    def illuminate(self, hit_record: HitRecord, view_vec: Vec) -> Color:
        """Return the radiance leaving the point in `hit_record` towards `view_vec`

        The vector `view_vec` is normalized and points away from the surface. The base
        implementation returns black."""
        return BLACK


@dataclass(frozen=True)
class PointLight(Light):
    """A point light

    This class holds information about a point light (a Dirac's delta in the rendering equation). The class has
    the following fields:

    -   `position`: a :class:`Point` object holding the position of the point light in 3D space
    -   `intensity`: the intensity of the light (an instance of :class:`.Color`). The irradiance decays with the
        square of the distance from `position`."""

    position: Point
    intensity: Color

    def illuminate(self, hit_record: HitRecord, view_vec: Vec) -> Color:
        material = hit_record.material
        if not isinstance(material, PhongMaterial):
            return BLACK

        to_light = self.position - hit_record.world_point
        distance_squared = to_light.squared_norm()
        if distance_squared == 0.0:
            # The light lies on the surface: its direction is undefined
            return BLACK

        light_vec = to_light / distance_squared ** 0.5
        cos_theta = max(0.0, hit_record.normal.dot(light_vec))

        irradiance = self.intensity * (cos_theta / distance_squared)
        return irradiance * material.evaluate(hit_record, light_vec, view_vec)


@dataclass(frozen=True)
class AmbientLight(Light):
    """A uniform ambient light

    Its contribution does not depend on the geometry of the scene: it is the product of `color`
    and the ambient coefficient of the material that was hit."""

    color: Color

    def illuminate(self, hit_record: HitRecord, view_vec: Vec) -> Color:
        material = hit_record.material
        if not isinstance(material, PhongMaterial):
            return BLACK

        return self.color * material.ambient
