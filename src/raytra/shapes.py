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

from math import sqrt, atan2, acos, pi, inf
from typing import List, Union

from raytra.geometry import Point, Vec, Vec2d
from raytra.hitrecord import HitRecord
from raytra.materials import Material
from raytra.misc import EPSILON
from raytra.ray import Ray


def _sphere_point_to_uv(direction: Vec) -> Vec2d:
    """Convert a unit vector from the center of a sphere into a (u, v) 2D point"""
    u = atan2(direction.y, direction.x) / (2.0 * pi)
    return Vec2d(
        u=u if u >= 0.0 else u + 1.0,
        v=acos(max(-1.0, min(1.0, direction.z))) / pi,
    )


class Shape:
    """A generic 3D shape

    This is an abstract class, and you should only use it to derive
    concrete classes. Be sure to redefine the method :meth:`.Shape.hit`.

    Every shape can be bound to a :class:`.Material`. The field `handle` is
    assigned by :meth:`.World.add_shape` and is copied into each
    :class:`.HitRecord` produced by the shape.
    """

    def __init__(self, material: Union[Material, None] = None):
        self.material = material
        self.handle: Union[int, None] = None

    def hit(self, ray: Ray, tmin: float, tmax: float, hit_record: HitRecord) -> bool:
        """Check whether `ray` hits the shape for some `t` in [`tmin`, `tmax`]

        If it does, fill `hit_record` and return True. Otherwise, return False
        and leave `hit_record` untouched."""
        raise NotImplementedError(
            "Shape.hit is an abstract method and cannot be called directly"
        )

    def ray_intersection(self, ray: Ray, tmin: float = EPSILON, tmax: float = inf) -> Union[HitRecord, None]:
        """Compute the intersection between a ray and this shape

        Return a new `HitRecord`, or `None` if no intersection was found."""
        hit_record = HitRecord()
        return hit_record if self.hit(ray, tmin, tmax, hit_record) else None

    def _fill_hit_record(self, hit_record: HitRecord, ray: Ray, t: float, face_normal: Vec, surface_point: Vec2d):
        hit_record.t = t
        hit_record.world_point = ray.at(t)
        hit_record.set_normal(ray, face_normal)
        hit_record.surface_point = surface_point
        hit_record.surface = self.handle
        hit_record.material = self.material


class Sphere(Shape):
    """A 3D sphere with arbitrary center and radius"""

    def __init__(self, center: Point, radius: float, material: Union[Material, None] = None):
        if not radius > 0.0:
            raise ValueError(f"the radius of a sphere must be positive, got {radius}")

        super().__init__(material)
        self.center = center
        self.radius = radius

    def hit(self, ray: Ray, tmin: float, tmax: float, hit_record: HitRecord) -> bool:
        """Checks if a ray intersects the sphere

        Only the nearest of the two roots is considered: if it falls outside
        [`tmin`, `tmax`], this is a miss even when the farthest root would be
        acceptable. Therefore, rays starting inside the sphere never hit it.
        """
        origin_vec = ray.origin - self.center
        a = ray.dir.squared_norm()
        half_b = ray.dir.dot(origin_vec)
        c = origin_vec.squared_norm() - self.radius * self.radius

        delta = half_b * half_b - a * c
        if delta < 0.0:
            return False

        t = (-half_b - sqrt(delta)) / a
        if t < tmin or t > tmax:
            return False

        outward_dir = (ray.at(t) - self.center) / self.radius
        self._fill_hit_record(
            hit_record,
            ray=ray,
            t=t,
            face_normal=outward_dir,
            surface_point=_sphere_point_to_uv(outward_dir.normalize()),
        )
        return True


class Triangle(Shape):
    """A triangle defined by three points

    The points should be listed counterclockwise with respect to the normal, which is
    computed as the normalized cross product (point1 - point0) × (point2 - point0).
    """

    def __init__(self, point0: Point, point1: Point, point2: Point, material: Union[Material, None] = None):
        super().__init__(material)
        self.set_points(point0, point1, point2)

    def set_points(self, point0: Point, point1: Point, point2: Point):
        """Change the vertices of the triangle and update its normal"""
        self.point0 = point0
        self.point1 = point1
        self.point2 = point2
        self.normal = (point1 - point0).cross(point2 - point0).normalize()

    @staticmethod
    def ray_triangle_hit(p0: Point, p1: Point, p2: Point, ray: Ray, tmin: float, tmax: float):
        """Solve p0 + β(p1 - p0) + γ(p2 - p0) = ray.origin + t ray.dir using Cramer's rule

        Return a tuple ``(t, Vec2d(β, γ))`` if `t` lies within [`tmin`, `tmax`], ``None``
        otherwise. This does not check whether the point is inside the triangle: the
        barycentric coordinates of the point are (1 - β - γ, β, γ)."""
        col_u = p1 - p0
        col_v = p2 - p0
        col_d = -ray.dir
        rhs = ray.origin - p0

        det = col_u.dot(col_v.cross(col_d))
        if det == 0.0:
            return None

        t = col_u.dot(col_v.cross(rhs)) / det
        if t < tmin or t > tmax:
            return None

        beta = rhs.dot(col_v.cross(col_d)) / det
        gamma = col_u.dot(rhs.cross(col_d)) / det
        return t, Vec2d(beta, gamma)

    def hit(self, ray: Ray, tmin: float, tmax: float, hit_record: HitRecord) -> bool:
        if self.normal.dot(ray.dir) == 0.0:
            # The ray is parallel to the plane of the triangle
            return False

        solution = Triangle.ray_triangle_hit(self.point0, self.point1, self.point2, ray, tmin, tmax)
        if not solution:
            return False

        t, uv = solution
        hit_point = ray.at(t)
        edges = [
            (self.point0, self.point1),
            (self.point1, self.point2),
            (self.point2, self.point0),
        ]
        for start, end in edges:
            if (end - start).cross(hit_point - start).dot(self.normal) < 0.0:
                return False

        self._fill_hit_record(hit_record, ray=ray, t=t, face_normal=self.normal, surface_point=uv)
        return True


class SurfaceList(Shape):
    """An ordered list of shapes that behaves like a single shape

    The list does not own the shapes: they are usually owned by a :class:`.World`.
    """

    def __init__(self, shapes: Union[List[Shape], None] = None):
        super().__init__()
        self.shapes = list(shapes) if shapes else []

    def add(self, shape: Shape):
        """Append a new shape to this list"""
        self.shapes.append(shape)

    def __len__(self):
        return len(self.shapes)

    def hit(self, ray: Ray, tmin: float, tmax: float, hit_record: HitRecord) -> bool:
        """Find the nearest hit among all the shapes in the list

        Every shape is tested over the same range [`tmin`, `tmax`]. If two shapes are hit at
        the same distance, the one that comes first in the list wins."""
        closest: Union[HitRecord, None] = None

        for shape in self.shapes:
            intersection = HitRecord()
            if not shape.hit(ray, tmin, tmax, intersection):
                # The ray missed this shape, skip to the next one
                continue

            if (not closest) or (intersection.t < closest.t):
                # There was a hit, and it was closer than any other hit found before
                closest = intersection

        if not closest:
            return False

        hit_record.copy_from(closest)
        return True
