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

import logging
import sys
from time import process_time

import click

from raytra.colors import BLACK
from raytra.hdrimages import HdrImage
from raytra.imagetracer import ImageTracer, image_size_for
from raytra.render import OnOffRenderer, FlatRenderer, PhongRenderer, MissingMaterialError
from raytra.scene_file import parse_scene, GrammarError, InputStream


RENDERERS = ["onoff", "flat", "phong"]


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Print diagnostic messages while reading and rendering.")
def cli(verbose):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )


def build_renderer(algorithm, world, strict=False):
    """Return the renderer named `algorithm` (one of the elements in ``RENDERERS``)"""
    if algorithm == "onoff":
        return OnOffRenderer(world=world, background_color=BLACK)
    elif algorithm == "flat":
        return FlatRenderer(world=world, background_color=BLACK)
    elif algorithm == "phong":
        return PhongRenderer(world=world, background_color=BLACK, strict=strict)

    raise ValueError(f"Unknown renderer: {algorithm}")


@click.command("render")
@click.option(
    "--height",
    type=int,
    default=None,
    help="Height of the image to render. The default is the value in the scene file; the width always "
         "follows the aspect ratio of the camera.",
)
@click.option("--algorithm", type=click.Choice(RENDERERS), default="phong")
@click.option(
    "--pfm-output",
    type=str,
    default="output.pfm",
    help="Name of the PFM file to create",
)
@click.option(
    "--png-output",
    type=str,
    default="output.png",
    help="Name of the PNG file to create",
)
@click.option("--gamma", type=float, default=1.0, help="Exponent for gamma-correction of the PNG file")
@click.option(
    "--strict",
    is_flag=True,
    help="Stop with an error if a ray hits a surface without a Phong material, instead of painting it red.",
)
@click.argument("input_scene_name", type=str)
def render(height, algorithm, pfm_output, png_output, gamma, strict, input_scene_name):
    """Render the scene in INPUT_SCENE_NAME"""
    with open(input_scene_name, "rt") as f:
        try:
            scene = parse_scene(input_file=InputStream(stream=f, file_name=input_scene_name))
        except GrammarError as e:
            loc = e.location
            click.echo(f"{loc.file_name}:{loc.line_num}:{loc.col_num}: {e.message}", err=True)
            sys.exit(1)

    if height is None:
        height = scene.image_size[1]

    width, height = image_size_for(scene.camera, height)
    if width <= 0 or height <= 0:
        click.echo(f"Error, invalid image dimensions {width}×{height}", err=True)
        sys.exit(1)

    image = HdrImage(width, height)
    click.echo(f"Generating a {width}×{height} image")

    tracer = ImageTracer(image=image, camera=scene.camera)
    renderer = build_renderer(algorithm, scene.world, strict=strict)

    def print_progress(row, col):
        click.echo(f"Rendering row {row + 1}/{image.height}\r", nl=False)

    start_time = process_time()
    try:
        tracer.fire_all_rays(renderer, callback=print_progress)
    except MissingMaterialError as e:
        click.echo(f"\nError: {e}", err=True)
        sys.exit(1)
    elapsed_time = process_time() - start_time

    click.echo(f"\nRendering completed in {elapsed_time:.1f} s")

    # Save the HDR image
    with open(pfm_output, "wb") as outf:
        image.write_pfm(outf)
    click.echo(f"HDR image written to {pfm_output}")

    # Save the LDR image
    with open(png_output, "wb") as outf:
        image.write_ldr_image(outf, "PNG", gamma=gamma)
    click.echo(f"PNG image written to {png_output}")


cli.add_command(render)

if __name__ == "__main__":
    cli()
