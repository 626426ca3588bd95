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

from time import process_time
from typing import Tuple

from raytra.camera import Camera
from raytra.hdrimages import HdrImage
from raytra.ray import Ray


def image_size_for(camera: Camera, height: int) -> Tuple[int, int]:
    """Return the (width, height) of an image with `height` rows matching the aspect ratio of `camera`"""
    return int(camera.aspect_ratio * height + 0.5), height


class ImageTracer:
    """The raster loop: fire one ray through each pixel of `image` using `camera`"""

    def __init__(self, image: HdrImage, camera: Camera):
        self.image = image
        self.camera = camera

    def screen_coordinates(self, col: int, row: int, u_pixel=0.5, v_pixel=0.5) -> Tuple[float, float]:
        """Convert a position within pixel (col, row) into the (s, t) coordinates of the camera screen

        Row 0 is the top of the image, while t = 0 is the bottom of the screen."""
        s = (col + u_pixel) / self.image.width
        t = 1.0 - (row + v_pixel) / self.image.height
        return s, t

    def fire_ray(self, col: int, row: int, u_pixel=0.5, v_pixel=0.5) -> Ray:
        """Shoot a ray through pixel (col, row)

        `u_pixel` and `v_pixel` select the point within the pixel, (0.5, 0.5) being its center."""
        return self.camera.get_ray(*self.screen_coordinates(col, row, u_pixel, v_pixel))

    def fire_all_rays(self, func, callback=None, callback_time_s: float = 2.0, **callback_kwargs):
        """Compute the color of every pixel as ``func(ray)``, in raster order

        If `callback` is not ``None``, it is called as ``callback(row, col, **callback_kwargs)`` before
        the first pixel, then at most once every `callback_time_s` seconds of CPU time, and after the last pixel."""
        if callback:
            callback(0, 0, **callback_kwargs)

        last_report = process_time()
        for row in range(self.image.height):
            for col in range(self.image.width):
                self.image.set_pixel(col, row, func(self.fire_ray(col, row)))

                if callback and process_time() - last_report > callback_time_s:
                    callback(row, col, **callback_kwargs)
                    last_report = process_time()

        if callback and self.image.pixels:
            callback(self.image.height - 1, self.image.width - 1, **callback_kwargs)
