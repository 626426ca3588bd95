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

"""Reader for the line-oriented «raytra» scene format

Each line of a scene file starts with a one-character command followed by
numbers separated by whitespace. Lines beginning with ``/`` are comments, and
unknown commands are ignored. The recognized commands are:

-   ``m dr dg db sr sg sb r ir ig ib``: a Phong material with diffuse color (dr, dg, db), specular color
    (sr, sg, sb), shininess r, and mirror color (ir, ig, ib). The ambient color equals the diffuse color.
    It is bound to every shape that follows, until the next material;
-   ``s x y z r``: a sphere with center (x, y, z) and radius r;
-   ``t ax ay az bx by bz cx cy cz``: a triangle, with vertices listed counterclockwise;
-   ``c x y z vx vy vz d iw ih pw ph``: the camera, placed at (x, y, z) and looking along (vx, vy, vz). The
    screen is at distance d and has size iw × ih; the image has size pw × ph pixels;
-   ``l a r g b``: an ambient light;
-   ``l p x y z r g b``: a point light at (x, y, z) with intensity (r, g, b).
"""

import logging
import math
from copy import copy
from dataclasses import dataclass, field
from typing import List, Tuple, Union

from raytra.camera import Camera, PerspectiveCamera
from raytra.colors import Color
from raytra.geometry import Point, Vec, VEC_Y, VEC_Z
from raytra.lights import AmbientLight, PointLight
from raytra.materials import PhongMaterial
from raytra.misc import are_close, EPSILON
from raytra.shapes import Sphere, Triangle
from raytra.world import World

logger = logging.getLogger(__name__)

COMMENT_CHAR = "/"
MAX_VIEWPORT_ASPECT_RATIO = 20000.0


@dataclass
class SourceLocation:
    """A specific position in a source file

    This class has the following fields:
    - file_name: the name of the file, or the empty string if there is no file associated with this location
      (e.g., because the source code was provided as a memory stream, or through a network connection)
    - line_num: number of the line (starting from 1)
    - col_num: number of the column (starting from 1)
    """
    file_name: str = ""
    line_num: int = 0
    col_num: int = 0

    def __str__(self):
        return f"{self.file_name}:{self.line_num}:{self.col_num}"


@dataclass
class Token:
    """A word read from a scene file, together with the place where it was found"""
    location: SourceLocation
    value: str

    def __str__(self):
        return self.value


class GrammarError(Exception):
    """An error found by the parser while reading a scene file

    The fields of this type are the following:

    - `location`: a :class:`.SourceLocation` object telling where the error was discovered
    - `message`: a user-frendly error message
    """

    def __init__(self, location: SourceLocation, message: str):
        super().__init__(f"{location}: {message}")
        self.location = location
        self.message = message


class LineTokens:
    """The tokens of one line in a scene file, which are consumed from left to right"""

    def __init__(self, tokens: List[Token], end_location: SourceLocation):
        self.tokens = tokens
        self.end_location = end_location
        self.index = 0

    def read_token(self) -> Union[Token, None]:
        """Return the next token in the line, or ``None`` if the line is over"""
        if self.index >= len(self.tokens):
            return None

        token = self.tokens[self.index]
        self.index += 1
        return token

    def read_command(self) -> Union[Token, None]:
        """Read a one-character command, or ``None`` if the line is over

        The characters following the command in the same word are not lost: they become the
        next token, so that both "s 0 0 -5 1" and "s0 0 -5 1" are accepted."""
        token = self.read_token()
        if token is not None and len(token.value) > 1:
            rest_location = copy(token.location)
            rest_location.col_num += 1
            self.tokens.insert(self.index, Token(rest_location, token.value[1:]))
            token = Token(token.location, token.value[0])

        return token


class InputStream:
    """A high-level wrapper around a stream, used to parse scene files

    This class splits the stream into lines and each line into tokens, keeping track of the line
    number and column number of each token.
    """

    def __init__(self, stream, file_name="", tabulations=8):
        self.stream = stream
        self.location = SourceLocation(file_name=file_name, line_num=0, col_num=1)
        self.tabulations = tabulations

    def _split_line(self, line: str) -> List[Token]:
        tokens = []
        word = ""
        word_col = 1
        col = 1
        for ch in line:
            if ch.isspace():
                if word:
                    tokens.append(Token(SourceLocation(self.location.file_name, self.location.line_num, word_col),
                                        word))
                    word = ""

                col += self.tabulations if ch == "\t" else 1
                continue

            if not word:
                word_col = col
            word += ch
            col += 1

        if word:
            tokens.append(Token(SourceLocation(self.location.file_name, self.location.line_num, word_col), word))

        self.location.col_num = col
        return tokens

    def read_line(self) -> Union[LineTokens, None]:
        """Read the next line containing a command

        Empty lines and comments are skipped. Return ``None`` at the end of the stream."""
        while True:
            line = self.stream.readline()
            if line == "":
                return None

            self.location.line_num += 1
            tokens = self._split_line(line.rstrip("\r\n"))
            if not tokens or tokens[0].value.startswith(COMMENT_CHAR):
                continue

            return LineTokens(tokens, end_location=copy(self.location))


@dataclass
class Scene:
    """A scene read from a scene file

    -   `world`: the :class:`.World` holding all the shapes and the lights
    -   `camera`: the :class:`.Camera` (``None`` only while parsing)
    -   `image_size`: a tuple (width, height) with the size of the image requested by the file, in pixels
    -   `materials`: the materials defined in the file, in order of appearance
    """
    world: World = field(default_factory=World)
    camera: Union[Camera, None] = None
    image_size: Union[Tuple[int, int], None] = None
    materials: List[PhongMaterial] = field(default_factory=list)


def expect_number(line: LineTokens) -> float:
    """Read a token from `line` and check that it is a number.

    Return the number as a ``float``."""
    token = line.read_token()
    if token is None:
        raise GrammarError(line.end_location, "expected a number at the end of the line")

    try:
        return float(token.value)
    except ValueError:
        raise GrammarError(token.location, f"'{token}' is an invalid floating-point number")


def parse_point(line: LineTokens) -> Point:
    x = expect_number(line)
    y = expect_number(line)
    z = expect_number(line)

    return Point(x, y, z)


def parse_vector(line: LineTokens) -> Vec:
    x = expect_number(line)
    y = expect_number(line)
    z = expect_number(line)

    return Vec(x, y, z)


def parse_color(line: LineTokens) -> Color:
    red = expect_number(line)
    green = expect_number(line)
    blue = expect_number(line)

    return Color(red, green, blue)


def parse_material(line: LineTokens) -> PhongMaterial:
    diffuse = parse_color(line)
    specular = parse_color(line)
    shininess = expect_number(line)
    mirror = parse_color(line)

    return PhongMaterial(
        ambient=diffuse,
        diffuse=diffuse,
        specular=specular,
        shininess=shininess,
        mirror=mirror,
    )


def parse_sphere(line: LineTokens, material: PhongMaterial) -> Sphere:
    center = parse_point(line)
    radius = expect_number(line)
    if radius <= 0.0:
        raise GrammarError(line.end_location, f"the radius of a sphere must be positive, got {radius}")

    return Sphere(center=center, radius=radius, material=material)


def parse_triangle(line: LineTokens, material: PhongMaterial) -> Triangle:
    point0 = parse_point(line)
    point1 = parse_point(line)
    point2 = parse_point(line)

    if (point1 - point0).cross(point2 - point0).squared_norm() == 0.0:
        raise GrammarError(line.end_location, "degenerate triangle, its vertices are aligned")

    return Triangle(point0, point1, point2, material=material)


def parse_camera(line: LineTokens, command: Token) -> Tuple[Camera, Tuple[int, int]]:
    """Parse the parameters of a camera and return a tuple (camera, image size)"""
    eye = parse_point(line)
    view_dir = parse_vector(line)
    focal_length = expect_number(line)
    viewport_width = expect_number(line)
    viewport_height = expect_number(line)
    pixels_width = expect_number(line)
    pixels_height = expect_number(line)

    if view_dir.squared_norm() == 0.0:
        raise GrammarError(command.location, "the viewing direction of the camera is a null vector")
    view_dir = view_dir.normalize()

    # The «up» vector must not be parallel to the viewing direction
    up = VEC_Y
    if are_close(abs(view_dir.dot(VEC_Y)), 1.0, epsilon=EPSILON):
        up = VEC_Z

    fovy = math.degrees(2.0 * math.atan2(viewport_height * 0.5, focal_length))

    viewport_aspect = viewport_width / viewport_height if viewport_height != 0.0 else math.inf
    if not math.isfinite(viewport_aspect) or viewport_aspect <= 0.0:
        raise GrammarError(command.location, f"the camera has a bad viewport aspect ratio: {viewport_aspect}")

    if viewport_aspect > MAX_VIEWPORT_ASPECT_RATIO:
        logger.warning("%s: the camera has a very large viewport aspect ratio: %g", command.location, viewport_aspect)

    if pixels_width < 1 or pixels_height < 1:
        raise GrammarError(command.location, f"invalid image size {pixels_width}×{pixels_height}")

    image_aspect = pixels_width / pixels_height
    if abs(viewport_aspect - image_aspect) > EPSILON:
        logger.warning(
            "%s: the camera viewport has a different aspect ratio than the image (%g vs %g), "
            "the width of the image will be adjusted to match the viewport",
            command.location,
            viewport_aspect,
            image_aspect,
        )

    camera = PerspectiveCamera(eye=eye, target=eye + view_dir, up=up, fovy=fovy, aspect_ratio=viewport_aspect)
    return camera, (int(pixels_width), int(pixels_height))


def parse_light(line: LineTokens, scene: Scene, num_of_ambient_lights: int) -> int:
    """Parse a light and add it to the world in `scene`

    Return the updated number of ambient lights."""
    kind = line.read_command()
    if kind is None:
        raise GrammarError(line.end_location, "expected the kind of light")

    if kind.value == "a":
        if num_of_ambient_lights > 0:
            raise GrammarError(kind.location, "a scene can contain at most one ambient light")

        scene.world.add_light(AmbientLight(color=parse_color(line)))
        return num_of_ambient_lights + 1
    elif kind.value == "p":
        position = parse_point(line)
        intensity = parse_color(line)
        scene.world.add_light(PointLight(position=position, intensity=intensity))
    else:
        logger.debug("%s: ignoring light of unknown kind '%s'", kind.location, kind)

    return num_of_ambient_lights


def parse_scene(input_file: InputStream) -> Scene:
    """Read a scene description from a stream and return a :class:`.Scene` object

    Raise :class:`.GrammarError` if the file is malformed or inconsistent."""
    scene = Scene()
    current_material: Union[PhongMaterial, None] = None
    num_of_ambient_lights = 0

    while True:
        line = input_file.read_line()
        if line is None:
            break

        command = line.read_command()
        if command.value in ("s", "t") and not current_material:
            raise GrammarError(command.location, "a material must be declared before any surface")

        if command.value == "s":
            scene.world.add_shape(parse_sphere(line, current_material))
        elif command.value == "t":
            scene.world.add_shape(parse_triangle(line, current_material))
        elif command.value == "c":
            if scene.camera:
                raise GrammarError(command.location, "you cannot define more than one camera")

            scene.camera, scene.image_size = parse_camera(line, command)
        elif command.value == "l":
            num_of_ambient_lights = parse_light(line, scene, num_of_ambient_lights)
        elif command.value == "m":
            current_material = parse_material(line)
            scene.materials.append(current_material)
        else:
            logger.debug("%s: ignoring unknown command '%s'", command.location, command)

    if not scene.camera:
        raise GrammarError(copy(input_file.location), "the scene does not define a camera")

    logger.info(
        "Scene read: %d shapes, %d lights, %d materials",
        len(scene.world.shapes),
        len(scene.world.lights),
        len(scene.materials),
    )
    return scene
