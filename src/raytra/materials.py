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

from raytra.colors import Color
from raytra.geometry import Vec


class Material:
    """An abstract class representing the way a surface reflects light

    Concrete materials must redefine :meth:`.Material.evaluate`. Lights only know how to
    shade :class:`.PhongMaterial` objects; any other material is treated as unshaded."""

    def evaluate(self, hit_record, light_vec: Vec, view_vec: Vec) -> Color:
        raise NotImplementedError("Method Material.evaluate is abstract and cannot be called")


@dataclass(frozen=True)
class PhongMaterial(Material):
    """A material following the Blinn-Phong reflection model

    The fields are the following:

    -   `ambient`: a :class:`.Color` multiplied by the color of ambient lights
    -   `diffuse`: the diffuse (Lambertian) reflectance
    -   `specular`: the reflectance of the specular highlight
    -   `shininess`: the exponent of the specular lobe (the larger, the narrower)
    -   `mirror`: the ideal mirror reflectance. This is read from scene files, but the renderer
        does not trace reflected rays, so it never contributes to the final color
    """
    ambient: Color = field(default_factory=Color)
    diffuse: Color = field(default_factory=Color)
    specular: Color = field(default_factory=Color)
    shininess: float = 0.0
    mirror: Color = field(default_factory=Color)

    def evaluate(self, hit_record, light_vec: Vec, view_vec: Vec) -> Color:
        """Return the response of the material at the point in `hit_record`

        Both `light_vec` (pointing towards the light) and `view_vec` (pointing towards the
        observer) must be normalized. The specular term uses the half vector between them."""
        half_vec = view_vec + light_vec
        half_norm = half_vec.norm()
        if half_norm > 0.0:
            cos_half = max(0.0, hit_record.normal.dot(half_vec) / half_norm)
        else:
            # Light and observer are on opposite sides: no highlight
            cos_half = 0.0

        return self.diffuse + self.specular * (cos_half ** self.shininess)
