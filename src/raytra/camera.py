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

from raytra.geometry import Point, Vec
from raytra.ray import Ray


class Camera:
    """An abstract class representing an observer

    The only concrete subclass is :class:`.PerspectiveCamera`.
    """

    def get_ray(self, s, t):
        """Fire a ray through the camera.

        This is an abstract method. You should redefine it in derived classes.

        Fire a ray that goes through the screen at the position (s, t). The exact meaning
        of these coordinates depend on the projection used by the camera.
        """
        raise NotImplementedError(f"Camera.get_ray(s={s}, t={t}) is not implemented")


class PerspectiveCamera(Camera):
    """A camera implementing a perspective 3D → 2D projection

    The camera is placed at `eye` and looks towards `target`. It builds a right-handed orthonormal
    basis (`u`, `v`, `w`), where `w` points from the target to the eye (the camera looks along `-w`),
    `u` points to the right and `v` points up. The screen is a rectangle at unit distance from the eye.
    """

    def __init__(self, eye: Point, target: Point, up: Vec, fovy: float = 90.0, aspect_ratio: float = 1.0):
        """Create a new perspective camera

        The parameter `fovy` is the vertical field of view, in degrees. The parameter `aspect_ratio`
        defines how larger than the height is the image. For fullscreen images, you should probably
        set `aspect_ratio` to 16/9, as this is the most used aspect ratio used in modern monitors.

        The vector `up` must not be parallel to the viewing direction: this is not checked."""
        self.fovy = fovy
        self.aspect_ratio = aspect_ratio
        self.look_at(eye, target, up)

    def look_at(self, eye: Point, target: Point, up: Vec, update_viewport=True):
        """Orient the camera so that it looks from `eye` towards `target`"""
        self.eye = eye
        self.target = target
        self.up = up

        self.w = (eye - target).normalize()
        self.u = up.cross(self.w).normalize()
        self.v = self.w.cross(self.u)

        if update_viewport:
            self.update_viewport()

    def set_fovy(self, fovy: float, update_viewport=True):
        """Change the vertical field of view (in degrees)"""
        self.fovy = fovy
        if update_viewport:
            self.update_viewport()

    def set_aspect_ratio(self, aspect_ratio: float, update_viewport=True):
        """Change the aspect ratio (width / height) of the screen"""
        self.aspect_ratio = aspect_ratio
        if update_viewport:
            self.update_viewport()

    def update_viewport(self):
        """Recompute the size and position of the screen

        This must be called every time the basis, the field of view or the aspect ratio
        change; the setters of this class do it automatically unless told otherwise."""
        height = 2.0 * math.tan(self.fovy * math.pi / 360.0)
        self.vertical = self.v * height
        self.horizontal = self.u * (self.aspect_ratio * height)
        self.lower_left_corner = self.eye - self.w - (self.horizontal + self.vertical) * 0.5

    def get_ray(self, s, t):
        """Shoot a ray through the camera's screen

        The coordinates (s, t) specify the point on the screen where the ray crosses it. Coordinates (0, 0) represent
        the bottom-left corner, (0, 1) the top-left corner, (1, 0) the bottom-right corner, and (1, 1) the top-right
        corner, as in the following diagram::

            (0, 1)                          (1, 1)
               +------------------------------+
               |                              |
               |                              |
               |                              |
               +------------------------------+
            (0, 0)                          (1, 0)
        """
        screen_point = self.lower_left_corner + self.horizontal * s + self.vertical * t
        return Ray(origin=self.eye, dir=screen_point - self.eye)

    def aperture_deg(self):
        """Compute the aperture of the camera in degrees

        The aperture is the angle of the field-of-view along the horizontal direction"""
        return 2.0 * math.degrees(math.atan(self.aspect_ratio * math.tan(math.radians(self.fovy) / 2.0)))
