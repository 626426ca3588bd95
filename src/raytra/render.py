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
from typing import Iterable

from raytra.colors import Color, WHITE, BLACK, RED
from raytra.hitrecord import HitRecord
from raytra.lights import Light
from raytra.materials import PhongMaterial
from raytra.misc import EPSILON
from raytra.ray import Ray
from raytra.world import World


class MissingMaterialError(Exception):
    """Raised by a strict renderer when a ray hits a shape that cannot be shaded"""


def shade(hit_record: HitRecord, ray: Ray, lights: Iterable[Light], fallback_color: Color = RED) -> Color:
    """Sum the contributions of all the lights at the point in `hit_record`

    Shapes without a :class:`.PhongMaterial` are not shaded: they are painted with
    `fallback_color`, so that they stand out in the image."""
    if not isinstance(hit_record.material, PhongMaterial):
        return fallback_color

    view_vec = -ray.dir
    result = Color(0.0, 0.0, 0.0)
    for light in lights:
        result = result + light.illuminate(hit_record, view_vec)

    return result


def ray_color(ray: Ray, scene, lights: Iterable[Light], fallback_color: Color = RED) -> Color:
    """Compute the color seen along `ray`

    The parameter `scene` can be any object with a `hit` method, e.g., a :class:`.Shape`
    or a :class:`.World`. Rays that do not hit anything are black."""
    hit_record = HitRecord()
    # Skip hits too close to the origin of the ray
    if not scene.hit(ray, EPSILON, inf, hit_record):
        return BLACK

    return shade(hit_record, ray, lights, fallback_color=fallback_color)


class Renderer:
    """A class implementing a solver of the rendering equation.

    This is an abstract class; you should use a derived concrete class."""

    def __init__(self, world: World, background_color: Color = BLACK):
        self.world = world
        self.background_color = background_color

    def __call__(self, ray: Ray) -> Color:
        """Estimate the radiance along a ray"""
        raise NotImplementedError("Unable to call Renderer.radiance, it is an abstract method")


class OnOffRenderer(Renderer):
    """A on/off renderer

    This renderer is mostly useful for debugging purposes, as it is really fast, but it produces boring images."""

    def __init__(self, world: World, background_color: Color = BLACK, color=WHITE):
        super().__init__(world, background_color)
        self.color = color

    def __call__(self, ray: Ray) -> Color:
        return self.color if self.world.ray_intersection(ray) else self.background_color


class FlatRenderer(Renderer):
    """A «flat» renderer

    This renderer neglects any contribution of the lights: it paints each shape with the diffuse
    color of its material (or with `fallback_color` if it has no Phong material)."""

    def __init__(self, world: World, background_color: Color = BLACK, fallback_color: Color = RED):
        super().__init__(world, background_color)
        self.fallback_color = fallback_color

    def __call__(self, ray: Ray) -> Color:
        hit = self.world.ray_intersection(ray)
        if not hit:
            return self.background_color

        if not isinstance(hit.material, PhongMaterial):
            return self.fallback_color

        return hit.material.diffuse


class PhongRenderer(Renderer):
    """A Whitted-style renderer using the Blinn-Phong shading model

    For each ray, find the nearest shape and sum the contributions of all the lights in the world.
    No secondary rays are traced, so there are neither shadows nor reflections.

    If `strict` is True, hitting a shape that has no :class:`.PhongMaterial` raises
    :class:`.MissingMaterialError` instead of returning `fallback_color`."""

    def __init__(self, world: World, background_color: Color = BLACK, fallback_color: Color = RED,
                 strict: bool = False):
        super().__init__(world, background_color)
        self.fallback_color = fallback_color
        self.strict = strict

    def __call__(self, ray: Ray) -> Color:
        hit_record = self.world.ray_intersection(ray)
        if not hit_record:
            return self.background_color

        if self.strict and not isinstance(hit_record.material, PhongMaterial):
            raise MissingMaterialError(
                f"shape #{hit_record.surface} has no Phong material (hit at {hit_record.world_point})"
            )

        return shade(hit_record, ray, self.world.lights, fallback_color=self.fallback_color)
